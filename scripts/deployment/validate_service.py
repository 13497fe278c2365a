#!/usr/bin/env python3
"""
Smoke-test a running URL shortener over HTTP.

Walks the user-facing flow (shorten, reuse, redirect, stats, listing) plus
the main failure paths and exits non-zero if any check fails.

Usage:
    python validate_service.py --url https://sho.rt
"""

import argparse
import sys
import time
from typing import Callable, Dict, List, Optional, Tuple
from urllib.parse import urlparse, parse_qs

import requests

CheckResult = Tuple[bool, str]


class ShortenerSmokeTest:
    """Runs named checks against a deployed service and tallies the results."""

    def __init__(self, base_url: str = "http://localhost:5000", timeout: float = 5.0):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.http = requests.Session()
        self.results: List[Tuple[str, bool]] = []
        self.short_id: Optional[str] = None

    def _get(self, path: str, **kwargs) -> requests.Response:
        return self.http.get(f"{self.base_url}{path}", timeout=self.timeout, allow_redirects=False, **kwargs)

    def _shorten(self, url: str) -> requests.Response:
        return self.http.post(
            f"{self.base_url}/shorten",
            data={"originalUrl": url},
            allow_redirects=False,
            timeout=self.timeout,
        )

    @staticmethod
    def _feedback(response: requests.Response) -> Dict[str, str]:
        """success/shortId carried by the post-shorten redirect."""
        query = parse_qs(urlparse(response.headers.get("Location", "")).query)
        return {key: values[0] for key, values in query.items()}

    def run_check(self, name: str, check: Callable[[], CheckResult]) -> bool:
        try:
            passed, details = check()
        except (requests.RequestException, ValueError) as e:
            passed, details = False, f"{type(e).__name__}: {e}"

        self.results.append((name, passed))
        print(f"  {'ok  ' if passed else 'FAIL'} {name}")
        if details:
            print(f"         {details}")
        return passed

    def check_health(self) -> CheckResult:
        response = self._get("/health")
        body = response.json()
        healthy = response.status_code == 200 and body.get("database") == "Connected"
        return healthy, f"status={body.get('status')} database={body.get('database')} version={body.get('version')}"

    def check_shorten(self) -> CheckResult:
        # timestamp keeps the URL unique across runs
        target = f"example.com/smoke/{int(time.time())}"
        response = self._shorten(target)
        feedback = self._feedback(response)
        if response.status_code != 302 or feedback.get("success") != "created":
            return False, f"HTTP {response.status_code}, feedback={feedback}"

        self.short_id = feedback["shortId"]
        repeat = self._feedback(self._shorten(target))
        reused = repeat == {"success": "existing", "shortId": self.short_id}
        return reused, f"shortId={self.short_id}, repeat={repeat}"

    def check_redirect(self) -> CheckResult:
        response = self._get(f"/{self.short_id}")
        target = response.headers.get("Location", "")
        return response.status_code == 302 and target.startswith("https://"), f"-> {target[:60]}"

    def check_stats(self) -> CheckResult:
        response = self._get(f"/api/stats/{self.short_id}")
        clicks = response.json().get("clicks", 0)
        return response.status_code == 200 and clicks >= 1, f"clicks={clicks}"

    def check_invalid_url(self) -> CheckResult:
        response = self._shorten("not a valid url")
        return response.status_code == 400, f"HTTP {response.status_code}, want 400"

    def check_unknown_id(self) -> CheckResult:
        page = self._get("/unknownid1")
        api = self._get("/api/stats/unknownid1")
        passed = page.status_code == 404 and api.status_code == 404 and api.json() == {"error": "URL not found"}
        return passed, f"page HTTP {page.status_code}, api HTTP {api.status_code}"

    def check_listing(self) -> CheckResult:
        response = self._get("/api/urls", params={"page": 1, "limit": 5})
        pagination = response.json().get("pagination", {})
        return response.status_code == 200 and "totalUrls" in pagination, f"totalUrls={pagination.get('totalUrls')}"

    def check_home_page(self) -> CheckResult:
        response = self._get("/")
        content_type = response.headers.get("content-type", "")
        secured = response.headers.get("X-Content-Type-Options") == "nosniff"
        return response.status_code == 200 and "text/html" in content_type and secured, content_type

    def run(self) -> bool:
        print(f"Validating {self.base_url}\n")

        if not self.run_check("service is healthy", self.check_health):
            print("\nService is not healthy; skipping remaining checks.")
            return False

        if self.run_check("shorten and reuse", self.check_shorten):
            self.run_check("redirect", self.check_redirect)
            self.run_check("stats count the redirect", self.check_stats)

        self.run_check("invalid URL is rejected", self.check_invalid_url)
        self.run_check("unknown short ID is 404", self.check_unknown_id)
        self.run_check("listing", self.check_listing)
        self.run_check("home page", self.check_home_page)

        failed = [name for name, passed in self.results if not passed]
        print(f"\n{len(self.results) - len(failed)}/{len(self.results)} checks passed")
        for name in failed:
            print(f"  failed: {name}")
        return not failed


def main():
    parser = argparse.ArgumentParser(description="Smoke-test a running URL shortener")
    parser.add_argument("--url", default="http://localhost:5000", help="Service base URL")
    parser.add_argument("--timeout", type=float, default=5.0, help="Per-request timeout in seconds")
    args = parser.parse_args()

    try:
        ok = ShortenerSmokeTest(args.url, timeout=args.timeout).run()
    except KeyboardInterrupt:
        print("\nInterrupted")
        sys.exit(2)
    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()
