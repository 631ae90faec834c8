"""Extractor: scripts, checkout anchors and checkout forms using stdlib html.parser."""

import re
from dataclasses import dataclass, field
from html.parser import HTMLParser
from typing import List, Optional
from urllib.parse import urljoin, urlsplit

from checkoutscan.core.models import AnchorHit, FormHit


CHECKOUT_HINT = re.compile(r"checkout|cart|bag|payment|order", re.I)


@dataclass
class ScriptResources:
    src: List[str] = field(default_factory=list)       # absolute URLs
    inline: List[str] = field(default_factory=list)    # raw script bodies


@dataclass
class ExtractedResources:
    scripts: ScriptResources = field(default_factory=ScriptResources)
    anchors: List[AnchorHit] = field(default_factory=list)
    forms: List[FormHit] = field(default_factory=list)


def resolve_url(base_url: str, url: Optional[str]) -> Optional[str]:
    """Absolute form of *url* against *base_url*, or None if it cannot be built."""
    if not url:
        return None
    try:
        resolved = urljoin(base_url, url.strip())
        parts = urlsplit(resolved)
    except ValueError:
        return None
    if not parts.scheme:
        return None
    return resolved


# ── HTML parser ────────────────────────────────────────────────

class _ResourceExtractor(HTMLParser):
    """Collect <script>, <a href> and <form> in document order."""

    def __init__(self, base_url: str):
        super().__init__()
        self.base_url = base_url
        self.result = ExtractedResources()
        self._script: Optional[List[str]] = None    # inline body being read
        self._anchor: Optional[List] = None         # [href, text parts]

    def handle_starttag(self, tag, attrs):
        attr_dict = dict(attrs)

        if tag == "script":
            src = attr_dict.get("src")
            if src:
                abs_src = resolve_url(self.base_url, src)
                if abs_src:
                    self.result.scripts.src.append(abs_src)
                self._script = None
            else:
                self._script = []

        elif tag == "a":
            # <a> cannot nest; a new one closes the previous
            self._finish_anchor()
            if "href" in attr_dict:
                self._anchor = [attr_dict.get("href") or "", []]

        elif tag == "form":
            action = attr_dict.get("action") or ""
            if CHECKOUT_HINT.search(action):
                method = (attr_dict.get("method") or "GET").upper()
                self.result.forms.append(
                    FormHit(resolve_url(self.base_url, action) or action, method))

    def handle_endtag(self, tag):
        if tag == "script" and self._script is not None:
            code = "".join(self._script)
            if code.strip():
                self.result.scripts.inline.append(code)
            self._script = None
        elif tag == "a":
            self._finish_anchor()

    def handle_data(self, data):
        if self._script is not None:
            self._script.append(data)
        elif self._anchor is not None:
            self._anchor[1].append(data)

    def close(self):
        super().close()
        self.handle_endtag("script")
        self._finish_anchor()

    def _finish_anchor(self):
        if self._anchor is None:
            return
        href, parts = self._anchor
        self._anchor = None
        if CHECKOUT_HINT.search(href):
            text = "".join(parts).strip()
            self.result.anchors.append(
                AnchorHit(resolve_url(self.base_url, href) or href, text))


def extract(html: str, base_url: str) -> ExtractedResources:
    """Parse *html* and pull out the resources the scan looks at."""
    parser = _ResourceExtractor(base_url)
    try:
        parser.feed(html or "")
        parser.close()
    except Exception:
        pass
    return parser.result
