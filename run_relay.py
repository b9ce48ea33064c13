#!/usr/bin/env python3
"""
Relay Server

Serves the CORS relay locally (host allow-list + VMClub session exchange).

Usage:
    python3 run_relay.py
    python3 run_relay.py --port 8787 --debug
"""

import argparse

from dotenv import load_dotenv

from getmeds.common import load_settings, setup_logging
from getmeds.relay import create_app


def main():
    parser = argparse.ArgumentParser(description="Run the pharmacy CORS relay")
    parser.add_argument("--host", default="127.0.0.1", help="Bind address")
    parser.add_argument("--port", type=int, default=8787, help="Port")
    parser.add_argument("--debug", action="store_true", help="Flask debug mode and debug logging")

    args = parser.parse_args()

    load_dotenv()
    setup_logging(verbose=args.debug)

    app = create_app(load_settings())
    app.run(host=args.host, port=args.port, debug=args.debug)


if __name__ == "__main__":
    main()
