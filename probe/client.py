from __future__ import annotations

import asyncio
import time
from collections.abc import Iterable

import httpx

from aptgate.domain.responses import BLOCKED_BODY
from aptgate.logging_conf import get_logger
from probe.types import Case, FetchError, Outcome, ReadyTimeoutError

logger = get_logger("probe.client")


async def wait_for_ready(base_url: str, timeout_s: float = 20.0) -> None:
    """Request / until the server answers at all, or raise after a timeout.

    Any HTTP status counts as ready; only transport errors are retried.
    """
    deadline = time.monotonic() + timeout_s
    async with httpx.AsyncClient(base_url=base_url, timeout=5.0) as client:
        while time.monotonic() < deadline:
            try:
                r = await client.get("/")
            except httpx.TransportError:
                await asyncio.sleep(0.25)
                continue
            logger.info("ready.ok", extra={"event": "ready_ok", "status_code": r.status_code})
            return
    raise ReadyTimeoutError(f"{base_url} did not answer within {timeout_s}s")


async def fetch(client: httpx.AsyncClient, path: str, *, retries: int = 3) -> httpx.Response:
    """GET ``path`` without following redirects, retrying transport errors."""
    last_err: Exception | None = None
    for attempt in range(retries):
        try:
            return await client.get(path)
        except httpx.TransportError as e:
            last_err = e
            logger.warning(
                "fetch.retry",
                extra={
                    "event": "fetch_retry",
                    "path": path,
                    "attempt": attempt + 1,
                    "error": str(e),
                },
            )
    raise FetchError(f"GET {path} failed: {last_err}")


def evaluate(case: Case, response: httpx.Response) -> Outcome:
    """Compare one response with what the case expects."""
    location = response.headers.get("location")
    body = response.text
    if case.status is None:
        passed = not (response.status_code == 404 and body == BLOCKED_BODY)
    else:
        passed = response.status_code == case.status
        if case.location is not None:
            passed = passed and location == case.location
        if case.body is not None:
            passed = passed and body == case.body
    return Outcome(
        case=case, status=response.status_code, location=location, body=body, passed=passed
    )


async def check_all(
    base_url: str, cases: Iterable[Case], *, transport: httpx.AsyncBaseTransport | None = None
) -> list[Outcome]:
    """Run every case concurrently and return the outcomes in case order."""
    cases = list(cases)
    async with httpx.AsyncClient(
        base_url=base_url, timeout=10.0, follow_redirects=False, transport=transport
    ) as client:
        responses = await asyncio.gather(*(fetch(client, c.path) for c in cases))
    outcomes = [evaluate(c, r) for c, r in zip(cases, responses)]
    for o in outcomes:
        if not o.passed:
            logger.warning(
                "case.failed",
                extra={
                    "event": "case_failed",
                    "case": o.case.name,
                    "path": o.case.path,
                    "status_code": o.status,
                    "location": o.location,
                },
            )
    return outcomes
