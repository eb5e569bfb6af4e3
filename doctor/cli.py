from __future__ import annotations

import argparse
import asyncio
import json
import sys
from typing import List, Optional

from doctor.client import InvalidBaseAddress
from doctor.config import configure_logging, default_api_url, http_timeout_s
from doctor.diagnostics.suite import diagnose


class PrintSink:
    def append(self, line: str) -> None:
        print(line, flush=True)


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(prog="nft-doctor", description="Check an NFT asset-chain API against known histories.")
    p.add_argument("url", nargs="?", default=None, help="API base URL (default: $DOCTOR_DEFAULT_API_URL)")
    p.add_argument("--timeout", type=float, default=None, help="per-request timeout in seconds")
    p.add_argument("--quiet", action="store_true", help="only print the report")
    args = p.parse_args(argv)

    configure_logging()
    url = args.url or default_api_url()
    timeout_s = args.timeout if args.timeout is not None else http_timeout_s()

    try:
        report = asyncio.run(diagnose(url, sink=None if args.quiet else PrintSink(), timeout_s=timeout_s))
    except InvalidBaseAddress as e:
        print(str(e), file=sys.stderr)
        return 2

    print(json.dumps(report.to_dict(), indent=4))
    return 0 if report.ok else 1


if __name__ == "__main__":
    sys.exit(main())
