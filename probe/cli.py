from __future__ import annotations

import argparse
import os


def parse_args(argv: list[str]) -> argparse.Namespace:
    """Parse CLI arguments for the smoke probe."""
    parser = argparse.ArgumentParser(description="aptgate smoke probe")
    parser.add_argument("--base-url", default=os.getenv("BASE_URL", "http://127.0.0.1:8000"))
    parser.add_argument(
        "--package-version",
        default="0.1.9",
        help="release version used for the redirect cases",
    )
    parser.add_argument("--timeout", type=float, default=20.0)
    return parser.parse_args(argv)
