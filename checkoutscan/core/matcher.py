"""Signature matching and snippet extraction over script bodies."""

from typing import Iterable, List, Optional, Tuple

from checkoutscan.core.config import MAX_SNIPPETS, SNIPPET_CONTEXT
from checkoutscan.core.models import Match, ScriptFinding, Signature
from checkoutscan.signatures.catalog import SIGNATURES


def match(text: str, signature: Signature,
          max_snippets: int = MAX_SNIPPETS,
          context: int = SNIPPET_CONTEXT) -> Match:
    """
    Count every non-overlapping occurrence of *signature* in *text* and
    keep a context window around the first *max_snippets* of them.
    """
    count = 0
    snippets: List[str] = []
    for m in signature.pattern.finditer(text):
        count += 1
        if len(snippets) < max_snippets:
            start = max(0, m.start() - context)
            end = min(len(text), m.end() + context)
            snippets.append(text[start:end])
    return Match(signature.name, count, tuple(snippets))


def match_all(text: str,
              catalog: Iterable[Signature] = SIGNATURES) -> Tuple[Match, ...]:
    """Apply each signature; signatures with no hits are left out."""
    if not text:
        return ()
    results = (match(text, sig) for sig in catalog)
    return tuple(m for m in results if m.count > 0)


def analyze_script(source: str, text: str, inline: bool,
                   size: Optional[int],
                   catalog: Iterable[Signature] = SIGNATURES) -> ScriptFinding:
    return ScriptFinding(url=source, inline=inline, size=size,
                         matches=match_all(text, catalog))
