#!/usr/bin/env python3
"""Check whether the Yale Sync API host is reachable from this machine.

Runs the same connectivity probe the engine runs before every panel read
and prints its verdict, so an operator can tell "host not found" apart
from a resolver hiccup that the engine tolerates.

Exit status is 0 when the host is considered reachable, 1 otherwise.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from yalesync._constants import API_HOSTNAME, DEFAULT_PROBE_TIMEOUT  # noqa: E402
from yalesync._network import ConnectivityGate  # noqa: E402


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Probe the Yale Sync API host.")
    parser.add_argument("--host", default=API_HOSTNAME, help=f"Hostname to resolve (default: {API_HOSTNAME})")
    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_PROBE_TIMEOUT,
        help=f"Probe timeout in seconds (default: {DEFAULT_PROBE_TIMEOUT})",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args()


async def main() -> int:
    args = _parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    gate = ConnectivityGate(hostname=args.host, timeout=args.timeout)
    try:
        problem = await gate.describe()
        reachable = await gate.is_reachable()
    finally:
        await gate.close()

    if problem is None:
        print(f"{args.host}: resolves")
    else:
        print(f"{args.host}: {problem}")
    print(f"reachable: {'yes' if reachable else 'no'}")
    return 0 if reachable else 1


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
