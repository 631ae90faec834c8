"""Fold per-script findings into the final report."""

from datetime import datetime, timezone
from typing import Iterable, Optional, Sequence

from checkoutscan.core.config import MAX_ANCHORS, MAX_FINDINGS, MAX_FORMS
from checkoutscan.core.models import (
    AnchorHit, FormHit, ScanReport, ScanSummary, ScriptFinding,
)
from checkoutscan.signatures.catalog import STRONG_SIGNATURES

ANCHOR_INDICATOR = "anchors to checkout/cart found"
FORM_INDICATOR = "forms posting to checkout/cart found"


def _timestamp(now: Optional[datetime] = None) -> str:
    now = now or datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def has_strong_match(findings: Iterable[ScriptFinding]) -> bool:
    return any(m.pattern in STRONG_SIGNATURES
               for f in findings for m in f.matches)


def summarize(findings: Sequence[ScriptFinding], anchors: Sequence[AnchorHit],
              forms: Sequence[FormHit]) -> ScanSummary:
    with_matches = sum(1 for f in findings if f.matches)
    indicators = []
    if anchors:
        indicators.append(ANCHOR_INDICATOR)
    if forms:
        indicators.append(FORM_INDICATOR)
    return ScanSummary(
        total_scripts=len(findings),
        scripts_with_matches=with_matches,
        total_matches=sum(f.total_count for f in findings),
        # any match at all is enough to flip the verdict
        likely_has_checkout=has_strong_match(findings) or with_matches > 0,
        indicators=tuple(indicators),
    )


def aggregate(url: str,
              inline_findings: Iterable[ScriptFinding],
              external_findings: Iterable[ScriptFinding],
              anchors: Sequence[AnchorHit],
              forms: Sequence[FormHit],
              errors: Sequence[str] = (),
              now: Optional[datetime] = None) -> ScanReport:
    """
    Build the ScanReport.

    Inline findings without matches are dropped, external ones are kept
    as-is. Totals are computed before the output caps are applied.
    """
    findings = [f for f in inline_findings if f.matches]
    findings.extend(external_findings)
    return ScanReport(
        url=url,
        fetched_at=_timestamp(now),
        summary=summarize(findings, anchors, forms),
        findings=tuple(findings[:MAX_FINDINGS]),
        anchors=tuple(anchors[:MAX_ANCHORS]),
        forms=tuple(forms[:MAX_FORMS]),
        errors=tuple(errors),
    )
