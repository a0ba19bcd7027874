#!/usr/bin/env python3
"""Startup script for the diffguard API server."""

import argparse
import os
import sys
from pathlib import Path

# Add src to path so we can import diffguard from a checkout
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import uvicorn


def main():
    """Main entry point for API server."""
    parser = argparse.ArgumentParser(
        description="Start the diffguard API server",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python scripts/start_api.py                          # Development server
  python scripts/start_api.py --repo /srv/checkout     # Diff another working tree
  python scripts/start_api.py --reload                 # Auto-reload on changes
        """,
    )

    parser.add_argument(
        "--host",
        default="127.0.0.1",
        help="Host to bind to (default: 127.0.0.1)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="Port to bind to (default: 8000)",
    )
    parser.add_argument(
        "--repo",
        help="Repository root served by default (sets DIFFGUARD_REPO_ROOT)",
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload for development",
    )
    parser.add_argument(
        "--log-level",
        default="info",
        choices=["critical", "error", "warning", "info", "debug"],
        help="Log level (default: info)",
    )

    args = parser.parse_args()

    if args.repo:
        os.environ["DIFFGUARD_REPO_ROOT"] = args.repo
    os.environ.setdefault("DIFFGUARD_LOG_LEVEL", args.log_level)

    print(f"Starting diffguard API on http://{args.host}:{args.port} (docs at /docs)")

    config = {
        "app": "diffguard.api.app:app",
        "host": args.host,
        "port": args.port,
        "log_level": args.log_level,
    }
    if args.reload:
        config["reload"] = True
        config["reload_dirs"] = ["src"]

    uvicorn.run(**config)


if __name__ == "__main__":
    main()
