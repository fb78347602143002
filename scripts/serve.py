#!/usr/bin/env python3
"""
Serve the Scrape Trigger Endpoint

Starts the Flask app exposing GET/POST /api/scrape.

Usage:
    python3 scripts/serve.py --port 8000
"""

import argparse
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from coral_compare.common.log_config import setup_logging
from coral_compare.web import create_app


def main():
    parser = argparse.ArgumentParser(description="Serve the scrape trigger endpoint")
    parser.add_argument("--host", default="127.0.0.1", help="Bind address (default: 127.0.0.1)")
    parser.add_argument("--port", type=int, default=8000, help="Port (default: 8000)")
    parser.add_argument("--debug", action="store_true", help="Flask debug mode")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")
    args = parser.parse_args()

    setup_logging(verbose=args.verbose)

    app = create_app()
    app.run(host=args.host, port=args.port, debug=args.debug)


if __name__ == "__main__":
    main()
