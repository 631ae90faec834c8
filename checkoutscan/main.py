import argparse
import sys

from checkoutscan.core.config import DEFAULT_TIMEOUT, ScanConfig
from checkoutscan.core.engine import Engine
from checkoutscan.core.errors import InvalidTarget
from checkoutscan.reporters.console import Log
from checkoutscan.reporters.report import render_console, render_json


def main(argv=None):
    p = argparse.ArgumentParser(description="Checkout / payment code scanner")
    p.add_argument("url", help="Page to scan (e.g. https://shop.example.com)")
    p.add_argument("--format", default="json", choices=["json", "console"])
    p.add_argument("--timeout", type=float, default=DEFAULT_TIMEOUT,
                   help="Per-request timeout in seconds")
    p.add_argument("--proxy", help="Proxy (e.g. http://127.0.0.1:8080)")
    p.add_argument("--insecure", action="store_true",
                   help="Skip TLS certificate verification")
    p.add_argument("-v", "--verbose", action="count", default=0,
                   help="-v, -vv")
    args = p.parse_args(argv)

    # json mode: stdout carries only the report
    if args.format == "json":
        log = Log(verbose=args.verbose, stream=sys.stderr)
    else:
        log = Log(verbose=args.verbose + 1)
    config = ScanConfig(timeout=args.timeout, proxy=args.proxy,
                        verify=not args.insecure)
    engine = Engine(config=config, logger=log)

    try:
        report = engine.scan(args.url)
    except InvalidTarget as exc:
        log.fail(str(exc))
        return 2

    if args.format == "json":
        print(render_json(report))
    else:
        render_console(report, log)
    return 0


if __name__ == "__main__":
    sys.exit(main())
