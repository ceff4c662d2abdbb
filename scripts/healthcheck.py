#!/usr/bin/env python
"""Container healthcheck probing the API's /healthz endpoint."""

import os
import sys
from urllib import request, error


def build_target() -> str:
    host = os.getenv("HEALTHCHECK_HOST", "127.0.0.1")
    port = os.getenv("PORT", "5000")
    return f"http://{host}:{port}/healthz"


def main() -> int:
    try:
        with request.urlopen(build_target(), timeout=5) as resp:
            return 0 if resp.status == 200 else 1
    except error.URLError:
        return 1


if __name__ == "__main__":
    sys.exit(main())
