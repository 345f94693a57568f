#!/usr/bin/env python3
"""Startup script for the diffnum API server."""

import argparse
import sys
from pathlib import Path

# Add src to path so we can import diffnum from a checkout
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import uvicorn


def main():
    """Main entry point for API server."""
    parser = argparse.ArgumentParser(
        description="Serve diffnum over HTTP",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python scripts/start_api.py                   # localhost:8000
  python scripts/start_api.py --port 9000 --reload
  curl -s localhost:8000/annotate -H 'content-type: application/json' \\
       -d '{"diff": "...", "options": ["show_path=1"]}'
        """,
    )
    parser.add_argument("--host", default="127.0.0.1", help="Host to bind to (default: 127.0.0.1)")
    parser.add_argument("--port", type=int, default=8000, help="Port to bind to (default: 8000)")
    parser.add_argument("--workers", type=int, default=1, help="Worker processes (default: 1)")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload for development")
    parser.add_argument(
        "--log-level",
        default="info",
        choices=["critical", "error", "warning", "info", "debug", "trace"],
        help="Log level (default: info)",
    )
    args = parser.parse_args()

    print(f"Starting diffnum API on http://{args.host}:{args.port} (docs at /docs)")

    config = {
        "app": "diffnum.api.app:app",
        "host": args.host,
        "port": args.port,
        "log_level": args.log_level,
    }
    if args.reload:
        config["reload"] = True
        config["reload_dirs"] = ["src"]
    else:
        config["workers"] = args.workers

    uvicorn.run(**config)


if __name__ == "__main__":
    main()
