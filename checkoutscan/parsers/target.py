from urllib.parse import urlsplit, urlunsplit

import httpx

from checkoutscan.core.errors import InvalidTarget

_DEFAULT_PORTS = {"http": 80, "https": 443}


def parse_target(raw: str) -> str:
    """
    Validate an operator-supplied URL and return its canonical form.

        parse_target("HTTPS://Shop.Example.com")  ->  "https://shop.example.com/"

    Raises InvalidTarget for anything that is not an absolute http(s) URL
    httpx can request (bad IDNA hosts included).
    """
    if not raw or not raw.strip():
        raise InvalidTarget(raw or "", "Missing url")
    try:
        parts = urlsplit(raw.strip())
        hostname = parts.hostname
        port = parts.port             # ValueError on a bad port
    except ValueError:
        raise InvalidTarget(raw)

    scheme = parts.scheme.lower()
    if scheme not in ("http", "https") or not hostname:
        raise InvalidTarget(raw)

    netloc = hostname
    if ":" in hostname:
        netloc = f"[{hostname}]"      # IPv6 literal
    if port is not None and port != _DEFAULT_PORTS[scheme]:
        netloc = f"{netloc}:{port}"
    if "@" in parts.netloc:
        netloc = f"{parts.netloc.rsplit('@', 1)[0]}@{netloc}"

    path = parts.path or "/"
    canonical = urlunsplit((scheme, netloc, path, parts.query, parts.fragment))
    try:
        httpx.URL(canonical).host     # decodes xn-- labels
    except (httpx.InvalidURL, ValueError):
        raise InvalidTarget(raw)
    return canonical
