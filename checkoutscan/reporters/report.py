"""Report renderers: JSON payload and a colored console summary."""

from colorama import Fore, Style

from checkoutscan.core.models import ScanReport


def render_json(report: ScanReport) -> str:
    return report.to_json(indent=2)


def render_console(report: ScanReport, log) -> None:
    """Print *report* through a Log, one line per element."""
    s = report.summary
    log.ok(f"{report.url} @ {report.fetched_at}")
    log.line(f"  Total scripts        {s.total_scripts}")
    log.line(f"  Scripts with matches {s.scripts_with_matches}")
    log.line(f"  Total matches        {s.total_matches}")
    verdict = f"{Fore.GREEN}Yes" if s.likely_has_checkout else f"{Fore.RED}No"
    log.line(f"  Likely has checkout  {verdict}{Style.RESET_ALL}")
    for ind in s.indicators:
        log.line(f"  - {ind}")

    if not report.findings:
        log.info("No scripts fetched or analyzed.")
    for f in report.findings:
        if not f.matches:
            log.debug(f"{f.url} ({f.size if f.size is not None else '?'} bytes): no matches")
        for m in f.matches:
            log.match(f.url, m.pattern, m.count)
            for snip in m.snippets:
                log.debug(f"    {' '.join(snip.split())}")

    for a in report.anchors:
        log.info(f"Anchor: {a.href} {Style.DIM}{a.text}{Style.RESET_ALL}")
    for fm in report.forms:
        log.info(f"Form: {fm.method} {fm.action}")
    for err in report.errors:
        log.warn(err)
