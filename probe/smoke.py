#!/usr/bin/env python3
"""Smoke probe for a running gate.

Steps:
- wait until the server answers
- request every allowed, blocked and pool path from the case table
- emit a compact summary and exit code
"""
from __future__ import annotations

import asyncio
import sys

from aptgate.logging_conf import get_logger, setup_logging
from probe.cases import default_cases
from probe.cli import parse_args
from probe.client import check_all, wait_for_ready
from probe.utils import summarize

setup_logging()
logger = get_logger("probe")


async def run_smoke(*, base_url: str, version: str, timeout_s: float = 20.0) -> int:
    await wait_for_ready(base_url, timeout_s)
    outcomes = await check_all(base_url, default_cases(version))
    summary, exit_code = summarize(outcomes)
    logger.info("probe.summary", extra=summary)
    return exit_code


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv if argv is not None else sys.argv[1:])
    code = asyncio.run(
        run_smoke(base_url=args.base_url, version=args.package_version, timeout_s=args.timeout)
    )
    raise SystemExit(code)


if __name__ == "__main__":
    main()
