"""Run the Twilio mock with uvicorn.

Usage:
    python -m mock_servers.twilio_mock
    python -m mock_servers.twilio_mock --port 4567 --twilio-host localhost:4567
"""

from __future__ import annotations

import argparse
import os

import uvicorn

from mock_servers.twilio_mock.config import get_settings


def main() -> None:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Twilio API mock server")
    parser.add_argument("--host", default=settings.host)
    parser.add_argument("--port", type=int, default=settings.port)
    parser.add_argument(
        "--twilio-host",
        default=None,
        help="Host the served chat SDK calls back to (default: TWILIO_MOCK_TWILIO_HOST)",
    )
    parser.add_argument("--reload", action="store_true")
    args = parser.parse_args()

    if args.twilio_host:
        os.environ["TWILIO_MOCK_TWILIO_HOST"] = args.twilio_host
        get_settings.cache_clear()

    uvicorn.run(
        "mock_servers.twilio_mock.app:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
