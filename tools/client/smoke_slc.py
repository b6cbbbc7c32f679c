"""Smoke test for the contract orchestrator, run in-process.

- Initializes the contract, then triggers ShipmentDelivered twice
- Uses the same settings/engine resolution as the API (CONTRACT_DIR, SLC_ENGINE, ...)

Usage:
    python tools/client/smoke_slc.py [--no-persist] [--clause ShipmentDelivered]

Exit codes:
- 0: every envelope has success=true
- 1: error
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path

repo_root = Path(__file__).resolve().parents[2]
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from signature_api.public.main import configure_logging
from signature_api.public.settings import settings
from signature_api.startup import build_orchestrator


async def run(clause: str, persist: bool) -> list:
    orchestrator = build_orchestrator(settings)
    init_c = await orchestrator.init_contract(persist=persist)
    call_one = await orchestrator.make_request(clause, persist=persist)
    call_two = await orchestrator.make_request(clause, persist=persist)
    return [init_c, call_one, call_two]


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--clause", default="ShipmentDelivered")
    parser.add_argument("--no-persist", action="store_true", help="do not write state.json")
    args = parser.parse_args(argv)

    configure_logging(settings.log_level)
    envelopes = asyncio.run(run(args.clause, persist=not args.no_persist))

    print(json.dumps(envelopes, indent=2, default=str))

    failed = [e for e in envelopes if not e.get("success")]
    if failed:
        print(f"ERROR: {len(failed)} operation(s) failed: {[e.get('errorCode') for e in failed]}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
