from __future__ import annotations

from collections import Counter
from dataclasses import fields, replace
from typing import Any, Iterable, Mapping, Optional, Sequence

from loguru import logger

from seometa.domain.models import Finding, PageMetadata, ValidationReport, check_page_shape
from seometa.domain.schema import META_TITLE_COUNTS
from seometa.ports import FieldRule, Normalizer, ReportLogger


def run_rules(
    page: PageMetadata,
    *,
    rules: Sequence[FieldRule],
    metadata: Optional[Mapping[str, object]] = None,
) -> list[Finding]:
    """
    Run every rule in table order and concatenate their findings.
    """
    findings: list[Finding] = []
    for rule in rules:
        found = rule.check(page, metadata=metadata)
        if found:
            logger.debug("rule {} -> {} finding(s)", rule.name, len(found))
        findings.extend(found)
    return findings


def normalize(page: PageMetadata, *, normalizer: Normalizer) -> PageMetadata:
    check_page_shape(page)
    return normalizer.normalize(page)


def validate_page(
    page: PageMetadata,
    *,
    rules: Sequence[FieldRule],
    normalizer: Normalizer,
    metadata: Optional[Mapping[str, object]] = None,
    source: str = "",
    report_logger: Optional[ReportLogger] = None,
) -> ValidationReport:
    """
    Validate one record and return findings plus the normalized record.

    Findings describe the record as given; normalization only fills absent
    fields and does not hide problems in present ones.
    """
    check_page_shape(page)

    findings = run_rules(page, rules=rules, metadata=metadata)
    normalized = normalize(page, normalizer=normalizer)

    report = ValidationReport(
        page=normalized,
        findings=tuple(findings),
        source=source,
        metadata={"rules": len(rules)},
    )
    logger.info(
        "validated {}: {} error(s), {} warning(s), {} info",
        source or "<page>",
        len(report.errors),
        len(report.warnings),
        len(report.infos),
    )

    if report_logger is not None:
        report_logger.log(report)
    return report


def title_counts(pages: Iterable[PageMetadata]) -> dict[str, int]:
    return dict(Counter(p.title.strip() for p in pages if p.title.strip()))


def validate_pages(
    records: Sequence[tuple[str, PageMetadata]],
    *,
    rules: Sequence[FieldRule],
    normalizer: Normalizer,
    metadata: Optional[Mapping[str, object]] = None,
    report_logger: Optional[ReportLogger] = None,
) -> list[ValidationReport]:
    """
    Validate (source, page) records independently.

    Title counts over the whole batch are passed to the rules so repeated
    titles are reported on every page that uses them.
    """
    counts = title_counts(page for _, page in records)
    batch_meta: dict[str, Any] = {**(dict(metadata) if metadata else {}), META_TITLE_COUNTS: counts}

    return [
        validate_page(
            page,
            rules=rules,
            normalizer=normalizer,
            metadata=batch_meta,
            source=source,
            report_logger=report_logger,
        )
        for source, page in records
    ]


def merge_pages(base: PageMetadata, override: PageMetadata) -> PageMetadata:
    """
    Overlay `override` on `base`: non-empty strings and non-None values win.
    """
    check_page_shape(base)
    check_page_shape(override)

    changes: dict[str, Any] = {}
    for f in fields(PageMetadata):
        value = getattr(override, f.name)
        if value is None or value == "":
            continue
        changes[f.name] = value
    return replace(base, **changes)
