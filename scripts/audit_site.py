from __future__ import annotations

import argparse
import json
from collections import Counter
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path

from seometa.adapters.loading.filesystem import FilesystemScanner
from seometa.adapters.logging.jsonl_logger import JsonlReportLogger
from seometa.app.cli import configure_logging
from seometa.app.container import build_container
from seometa.app.pipeline import validate_pages
from seometa.settings import Settings, load_settings


def build_argparser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Audit every metadata record under a content directory.")
    ap.add_argument("--content", required=True, help="Directory (or file/glob) holding page records")
    ap.add_argument("--audit-name", required=True, help="Name of the audit under artifacts/audits/")
    ap.add_argument("--artifacts-dir", default="artifacts", help="Artifacts root directory (default: artifacts)")
    ap.add_argument("--config", default=None, help="TOML settings file")
    ap.add_argument("--recursive", action="store_true", default=True, help="Recurse into subdirectories (default: true)")
    ap.add_argument("--no-recursive", dest="recursive", action="store_false", help="Disable recursion")
    return ap


def main() -> None:
    args = build_argparser().parse_args()

    artifacts_dir = Path(args.artifacts_dir).resolve()
    audit_dir = artifacts_dir / "audits" / args.audit_name
    audit_dir.mkdir(parents=True, exist_ok=True)

    settings = load_settings(args.config) if args.config else Settings()
    configure_logging(settings.logging.level)
    container = build_container(settings)

    # Start fresh each time so the JSONL holds exactly this run
    report_logger = JsonlReportLogger(path=audit_dir)
    report_logger.data_file.unlink(missing_ok=True)

    scanner = FilesystemScanner(recursive=args.recursive)
    records, load_report = scanner.scan([args.content])

    reports = validate_pages(
        records,
        rules=container.rules,
        normalizer=container.normalizer,
        report_logger=report_logger,
    )

    by_severity = Counter(f.severity for r in reports for f in r.findings)
    by_rule = Counter(f.rule for r in reports for f in r.findings)

    manifest = {
        "audit_name": args.audit_name,
        "created_at": datetime.now(timezone.utc).isoformat(),
        "content": str(Path(args.content).resolve()),
        "recursive": args.recursive,
        "page_count": len(reports),
        "pages_with_errors": sum(1 for r in reports if r.has_errors),
        "findings_by_severity": dict(by_severity),
        "findings_by_rule": dict(sorted(by_rule.items())),
        "load_report": asdict(load_report),
        "reports": {
            "type": "jsonl",
            "file": str(report_logger.data_file),
        },
    }

    (audit_dir / "manifest.json").write_text(json.dumps(manifest, indent=2), encoding="utf-8")

    print(f"Audit written: {args.audit_name}")
    print(f"  pages:    {len(reports)}")
    print(f"  errors:   {by_severity.get('error', 0)}")
    print(f"  warnings: {by_severity.get('warning', 0)}")
    print(f"  reports:  {report_logger.data_file}")
    print(f"  manifest: {audit_dir / 'manifest.json'}")


if __name__ == "__main__":
    main()
