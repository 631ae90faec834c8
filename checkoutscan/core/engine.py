import asyncio
from typing import List, Optional

import httpx

from checkoutscan.core.aggregator import aggregate
from checkoutscan.core.config import ScanConfig
from checkoutscan.core.errors import FetchError
from checkoutscan.core.extractor import extract
from checkoutscan.core.fetcher import fetch
from checkoutscan.core.matcher import analyze_script
from checkoutscan.core.models import ScanReport, ScriptFinding
from checkoutscan.core.retriever import retrieve_all
from checkoutscan.parsers.target import parse_target


class Engine:
    def __init__(self, config: Optional[ScanConfig] = None, logger=None,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.name = "CheckoutScan"
        self.version = "1.0.0"
        self.config = config or ScanConfig()
        self.logger = logger
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        kwargs = {"verify": self.config.verify, "follow_redirects": True,
                  "timeout": self.config.timeout}
        if self.transport is not None:
            kwargs["transport"] = self.transport
        elif self.config.proxy:
            kwargs["proxy"] = self.config.proxy
        return httpx.AsyncClient(**kwargs)

    def scan(self, url: str) -> ScanReport:
        """Blocking wrapper around ascan()."""
        return asyncio.run(self.ascan(url))

    async def ascan(self, url: str) -> ScanReport:
        """
        Scan one page. Only InvalidTarget escapes; fetch failures end up
        in ``report.errors``.
        """
        target = parse_target(url)
        errors: List[str] = []

        if self.logger:
            self.logger.info(f"Scanning {target}")

        async with self._client() as client:
            # ---------- page ----------
            html, base_url = "", target
            try:
                resp = await fetch(client, target)
                html, base_url = resp.text, str(resp.url)
            except FetchError as exc:
                errors.append(exc.message)
                if self.logger:
                    self.logger.warn(exc.message)

            res = extract(html, base_url)
            if self.logger:
                self.logger.debug(
                    f"{len(res.scripts.src)} external / {len(res.scripts.inline)} inline scripts, "
                    f"{len(res.anchors)} anchors, {len(res.forms)} forms")

            # ---------- scripts ----------
            fetched = await retrieve_all(client, res.scripts.src, referer=target,
                                         limit=self.config.max_scripts,
                                         logger=self.logger)

        inline_findings = [
            analyze_script("inline", code, True, len(code.encode("utf-8")))
            for code in res.scripts.inline
        ]
        external_findings: List[ScriptFinding] = []
        for s in fetched:
            if s.error:
                errors.append(f"Script {s.url} error: {s.error}")
                if self.logger:
                    self.logger.warn(f"Script {s.url} error: {s.error}")
            external_findings.append(analyze_script(s.url, s.content, False, s.size))

        report = aggregate(target, inline_findings, external_findings,
                           res.anchors, res.forms, errors)

        if self.logger:
            s = report.summary
            msg = (f"{s.total_scripts} scripts, {s.scripts_with_matches} with matches, "
                   f"{s.total_matches} matches")
            if s.likely_has_checkout:
                self.logger.ok(f"Checkout likely: {msg}")
            else:
                self.logger.fail(f"No checkout evidence: {msg}")
        return report
