"""Uvicorn runner for the Storefront API.

Usage:
    python src/server.py                  # Serve on $PORT (default 3000)
    python src/server.py --port 8000      # Override the port
    python src/server.py --reload         # Auto-reload for development
"""

import argparse

import uvicorn

from shared.config import load_settings
from shared.logging import configure_logging


def main():
    settings = load_settings()

    parser = argparse.ArgumentParser(description="Storefront API server")
    parser.add_argument("--host", default="0.0.0.0", help="Interface to bind (default: 0.0.0.0)")
    parser.add_argument("--port", type=int, default=settings.port, help="Port to listen on (default: $PORT or 3000)")
    parser.add_argument("--reload", action="store_true", help="Reload on code changes")
    args = parser.parse_args()

    configure_logging()
    uvicorn.run("app:app", host=args.host, port=args.port, reload=args.reload, log_config=None)


if __name__ == "__main__":
    main()
