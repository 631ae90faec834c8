"""Shared data models for the checkout scanner."""

import json
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class Signature:
    """A named regex rule for a checkout/payment code pattern."""
    name: str
    pattern: re.Pattern


@dataclass(frozen=True)
class Match:
    """Occurrences of one signature in one script body."""
    pattern: str                        # signature name
    count: int
    snippets: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {"pattern": self.pattern, "count": self.count,
                "snippets": list(self.snippets)}


@dataclass(frozen=True)
class ScriptFinding:
    """Every signature applied to a single inline or external script."""
    url: str                            # "inline" or absolute script URL
    inline: bool
    size: Optional[int]                 # bytes, None when unknown
    matches: Tuple[Match, ...] = ()

    @property
    def total_count(self) -> int:
        return sum(m.count for m in self.matches)

    def to_dict(self) -> Dict[str, Any]:
        return {"url": self.url, "inline": self.inline, "size": self.size,
                "matches": [m.to_dict() for m in self.matches]}


@dataclass(frozen=True)
class AnchorHit:
    href: str
    text: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"href": self.href, "text": self.text}


@dataclass(frozen=True)
class FormHit:
    action: str
    method: str = "GET"

    def to_dict(self) -> Dict[str, Any]:
        return {"action": self.action, "method": self.method}


@dataclass(frozen=True)
class ScriptFetchResult:
    """Outcome of retrieving one external script."""
    url: str
    content: str = ""
    size: Optional[int] = None
    error: Optional[str] = None


@dataclass(frozen=True)
class ScanSummary:
    total_scripts: int = 0
    scripts_with_matches: int = 0
    total_matches: int = 0
    likely_has_checkout: bool = False
    indicators: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalScripts": self.total_scripts,
            "scriptsWithMatches": self.scripts_with_matches,
            "totalMatches": self.total_matches,
            "likelyHasCheckout": self.likely_has_checkout,
            "indicators": list(self.indicators),
        }


@dataclass(frozen=True)
class ScanReport:
    """Terminal result of one scan; serialized and discarded."""
    url: str
    fetched_at: str
    summary: ScanSummary = field(default_factory=ScanSummary)
    findings: Tuple[ScriptFinding, ...] = ()
    anchors: Tuple[AnchorHit, ...] = ()
    forms: Tuple[FormHit, ...] = ()
    errors: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            "url": self.url,
            "fetchedAt": self.fetched_at,
            "summary": self.summary.to_dict(),
            "findings": [f.to_dict() for f in self.findings],
            "anchorsToCheckout": [a.to_dict() for a in self.anchors],
            "formsToCheckout": [f.to_dict() for f in self.forms],
        }
        if self.errors:
            body["errors"] = list(self.errors)
        return body

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)
