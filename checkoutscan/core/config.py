"""Scan settings: fixed caps, identity headers and per-run options."""

from dataclasses import dataclass
from typing import Optional


# ── Fixed limits ───────────────────────────────────────────────

MAX_SCRIPTS = 15           # external scripts retrieved per scan
MAX_SNIPPETS = 3           # snippets kept per signature per script
SNIPPET_CONTEXT = 80       # chars kept on each side of a match
MAX_FINDINGS = 60
MAX_ANCHORS = 50
MAX_FORMS = 50

DEFAULT_TIMEOUT = 15.0

# ── Identity ───────────────────────────────────────────────────

USER_AGENT = ("Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
              "(KHTML, like Gecko) Chrome/118.0.0.0 Safari/537.36")

PAGE_HEADERS = {
    "user-agent": USER_AGENT,
    "accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "cache-control": "no-cache",
    "pragma": "no-cache",
}

SCRIPT_ACCEPT = "*/*"


@dataclass(frozen=True)
class ScanConfig:
    """Per-run options, usually filled from the command line."""
    timeout: float = DEFAULT_TIMEOUT
    proxy: Optional[str] = None
    verify: bool = True
    max_scripts: int = MAX_SCRIPTS
