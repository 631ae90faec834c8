"""End-to-end scans against an in-memory site."""

from __future__ import annotations

import httpx
import pytest

from checkoutscan.core.errors import InvalidTarget
from checkoutscan.reporters.console import Log

PAGE = "https://shop.example.com/"


def _page(body: str) -> str:
    return f"<html><head></head><body>{body}</body></html>"


def test_inline_begin_checkout(site, engine_for):
    """One inline gtag begin_checkout call is enough for the verdict."""
    site.routes[PAGE] = _page("<script>gtag('event','begin_checkout')</script>")
    report = engine_for(site).scan(PAGE)

    assert len(report.findings) == 1
    f = report.findings[0]
    assert f.inline and f.url == "inline"
    names = {m.pattern: m.count for m in f.matches}
    assert names["begin_checkout (gtag)"] == 1
    assert report.summary.likely_has_checkout is True
    assert report.errors == ()


def test_cart_anchor_only(site, engine_for):
    site.routes[PAGE] = _page('<a href="/cart">Cart</a>')
    report = engine_for(site).scan(PAGE)

    assert [(a.href, a.text) for a in report.anchors] == [(PAGE + "cart", "Cart")]
    assert report.summary.likely_has_checkout is False
    assert report.summary.total_scripts == 0
    assert "anchors to checkout/cart found" in report.summary.indicators


def test_external_script_404(site, engine_for):
    js = "https://cdn.example.com/missing.js"
    site.routes[PAGE] = _page(f'<script src="{js}"></script>')
    report = engine_for(site).scan(PAGE)

    assert len(report.findings) == 1
    f = report.findings[0]
    assert f.url == js and not f.inline
    assert f.matches == () and f.size is None
    assert report.errors == (f"Script {js} error: Fetch 404",)
    assert report.summary.total_scripts == 1
    assert report.summary.scripts_with_matches == 0


def test_page_fetch_500(site, engine_for):
    site.routes[PAGE] = (500, "<a href='/cart'>Cart</a>")
    report = engine_for(site).scan(PAGE)

    assert report.errors == (f"Fetch failed 500 for {PAGE}",)
    assert report.findings == ()
    assert report.anchors == ()
    assert report.forms == ()
    assert report.summary.likely_has_checkout is False
    assert "errors" in report.to_dict()


def test_page_unreachable(engine_for):
    class Down:
        requests = []

        @property
        def transport(self):
            def boom(request):
                raise httpx.ConnectError("name resolution failed", request=request)
            return httpx.MockTransport(boom)

    report = engine_for(Down()).scan(PAGE)
    assert len(report.errors) == 1
    assert "name resolution failed" in report.errors[0]
    assert report.summary.total_scripts == 0


def test_relative_urls_resolve_against_final_url(site, engine_for):
    site.routes[PAGE] = httpx.Response(301, headers={"location": "https://www.shop.example.com/fr/"})
    site.routes["https://www.shop.example.com/fr/"] = _page(
        '<script src="app.js"></script><form action="panier/checkout" method="post"></form>')
    site.routes["https://www.shop.example.com/fr/app.js"] = "fetch('/cart/add.js')"
    report = engine_for(site).scan(PAGE)

    assert report.url == PAGE
    assert [f.url for f in report.findings] == ["https://www.shop.example.com/fr/app.js"]
    assert report.forms[0].action == "https://www.shop.example.com/fr/panier/checkout"
    assert report.forms[0].method == "POST"
    js_req = [r for r in site.requests if r.url.path.endswith("app.js")][0]
    assert js_req.headers["referer"] == PAGE


def test_only_first_15_scripts_requested(site, engine_for):
    urls = [f"https://cdn.example.com/{i}.js" for i in range(18)]
    site.routes[PAGE] = _page("".join(f'<script src="{u}"></script>' for u in urls))
    for u in urls:
        site.routes[u] = "var x = 1;"
    report = engine_for(site).scan(PAGE)

    js_requested = [u for u in site.requested() if u.endswith(".js")]
    assert sorted(js_requested) == sorted(urls[:15])
    assert [f.url for f in report.findings] == urls[:15]


def test_inline_then_external_order_and_totals(site, engine_for):
    site.routes[PAGE] = _page(
        '<script src="/a.js"></script>'
        "<script>console.log(1)</script>"
        "<script>fbq('track', 'InitiateCheckout')</script>"
        '<script src="/b.js"></script>')
    site.routes[PAGE + "a.js"] = "paypal.Buttons(); paypal.render()"
    site.routes[PAGE + "b.js"] = "nothing to see"
    report = engine_for(site).scan(PAGE)

    assert [f.url for f in report.findings] == ["inline", PAGE + "a.js", PAGE + "b.js"]
    s = report.summary
    assert s.total_scripts == 3
    assert s.scripts_with_matches == 2
    # InitiateCheckout also hits word:checkout
    assert s.total_matches == 2 + 2


def test_target_is_canonicalized(site, engine_for):
    site.routes[PAGE] = _page("")
    report = engine_for(site).scan("HTTPS://Shop.Example.com")
    assert report.url == PAGE


def test_invalid_target_raises_before_any_request(site, engine_for):
    with pytest.raises(InvalidTarget):
        engine_for(site).scan("not a url")
    assert site.requests == []


def test_logger_receives_progress(site, engine_for, capsys):
    site.routes[PAGE] = (500, "")
    engine_for(site, logger=Log(verbose=2)).scan(PAGE)
    out = capsys.readouterr().out
    assert "Scanning" in out
    assert f"Fetch failed 500 for {PAGE}" in out
    assert "No checkout evidence" in out


def test_unusable_script_url_does_not_abort_scan(site, engine_for):
    """A script host httpx cannot encode is recorded, the inline hit survives."""
    bad = "https://xn--a.example/x.js"
    site.routes[PAGE] = _page(
        f'<script src="{bad}"></script>'
        '<script>gtag("event","begin_checkout")</script>')
    report = engine_for(site).scan(PAGE)

    assert [f.url for f in report.findings] == ["inline", bad]
    assert report.findings[1].matches == () and report.findings[1].size is None
    assert len(report.errors) == 1
    assert report.errors[0].startswith(f"Script {bad} error: ")
    assert report.summary.likely_has_checkout is True


def test_bad_idna_target_is_invalid(site, engine_for):
    with pytest.raises(InvalidTarget):
        engine_for(site).scan("https://xn--a.example/")
    assert site.requests == []
