from __future__ import annotations

import argparse
import json
import sys
from dataclasses import asdict, replace
from pathlib import Path
from typing import Optional, Sequence

from loguru import logger
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from seometa.adapters.loading.filesystem import FilesystemScanner
from seometa.adapters.logging.jsonl_logger import report_to_dict
from seometa.app.container import build_container
from seometa.app.head import render_head
from seometa.app.pipeline import validate_pages
from seometa.domain.errors import SeoMetaError
from seometa.domain.models import LoadReport, ValidationReport
from seometa.settings import Settings, load_settings

EXIT_OK = 0
EXIT_FINDINGS = 1
EXIT_USAGE = 2

_SEVERITY_STYLE = {"error": "bold red", "warning": "yellow", "info": "cyan"}


def build_argparser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="seometa",
        description="Validate SEO page metadata records (.json, .yaml/.yml, markdown frontmatter).",
    )
    ap.add_argument("paths", nargs="+", help="Files, directories or relative globs to validate")
    ap.add_argument("--config", default=None, help="TOML settings file (limits, defaults, logging)")
    ap.add_argument("--format", choices=("table", "json"), default="table", help="Output format (default: table)")
    ap.add_argument("--log-dir", default=None, help="Append every report to <dir>/reports.jsonl")

    ap.add_argument("--head", action="store_true", help="Also print the rendered <head> tags per page")
    ap.add_argument("--site-name", default="", help="og:site_name used with --head")

    ap.add_argument("--recursive", action="store_true", default=True, help="Recurse into subdirectories (default: true)")
    ap.add_argument("--no-recursive", dest="recursive", action="store_false", help="Disable recursion")
    ap.add_argument("--include-hidden", action="store_true", help="Also read dot-files and dot-directories")

    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return ap


def configure_logging(level: str) -> None:
    logger.enable("seometa")
    logger.remove()
    logger.add(sys.stderr, level=level, format="<level>{level: <8}</level> {message}")


def _print_table(console: Console, reports: Sequence[ValidationReport], *, head: bool, site_name: str) -> None:
    for report in reports:
        title = escape(report.source or "<page>")
        if not report.findings:
            console.print(f"[green]OK[/green] {title}")
        else:
            table = Table(title=title, title_justify="left", show_lines=False)
            table.add_column("Field")
            table.add_column("Severity")
            table.add_column("Rule")
            table.add_column("Message", overflow="fold")
            for f in report.findings:
                style = _SEVERITY_STYLE.get(f.severity, "")
                table.add_row(f.field, f"[{style}]{f.severity}[/{style}]", f.rule, escape(f.message))
            console.print(table)

        if head:
            console.print(render_head(report.page, site_name), markup=False, highlight=False)

    n_err = sum(len(r.errors) for r in reports)
    n_warn = sum(len(r.warnings) for r in reports)
    n_info = sum(len(r.infos) for r in reports)
    console.print(f"[bold]{len(reports)} page(s):[/bold] {n_err} error(s), {n_warn} warning(s), {n_info} info")


def _print_json(reports: Sequence[ValidationReport], load_report: LoadReport, *, head: bool, site_name: str) -> None:
    rows = []
    for report in reports:
        row = report_to_dict(report)
        if head:
            row["head"] = render_head(report.page, site_name)
        rows.append(row)
    payload = {"load": asdict(load_report), "reports": rows}
    print(json.dumps(payload, indent=2, ensure_ascii=False))


def main(argv: Optional[Sequence[str]] = None, *, console: Optional[Console] = None) -> int:
    args = build_argparser().parse_args(argv)

    try:
        settings = load_settings(args.config) if args.config else Settings()
    except (FileNotFoundError, SeoMetaError) as e:
        configure_logging("WARNING")
        logger.error("{}", e)
        return EXIT_USAGE

    configure_logging("DEBUG" if args.verbose else settings.logging.level)

    if args.log_dir:
        settings = replace(settings, logging=replace(settings.logging, report_dir=Path(args.log_dir).resolve()))

    container = build_container(settings)
    scanner = FilesystemScanner(recursive=args.recursive, skip_hidden=not args.include_hidden)

    try:
        records, load_report = scanner.scan(args.paths)
        reports = validate_pages(
            records,
            rules=container.rules,
            normalizer=container.normalizer,
            report_logger=container.report_logger,
        )
    except SeoMetaError as e:
        logger.error("{}", e)
        return EXIT_USAGE

    if args.format == "json":
        _print_json(reports, load_report, head=args.head, site_name=args.site_name)
    else:
        _print_table(console or Console(), reports, head=args.head, site_name=args.site_name)

    for path, reason in load_report.failures:
        logger.error("Could not load {}: {}", path, reason)

    if load_report.failed:
        return EXIT_USAGE
    if not records:
        logger.warning("No metadata records found in: {}", ", ".join(args.paths))
    return EXIT_FINDINGS if any(r.has_errors for r in reports) else EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
