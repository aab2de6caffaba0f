#!/usr/bin/env python3
"""
Quick start script for the Listing Search API server.

Usage:
    python run.py
    python run.py --port 8080
    python run.py --reload
"""

import argparse
import uvicorn

from listing_search.config import get_settings


def main():
    settings = get_settings()

    parser = argparse.ArgumentParser(description="Run the Listing Search API server")
    parser.add_argument("--host", default=settings.HOST, help=f"Host to bind to (default: {settings.HOST})")
    parser.add_argument("--port", type=int, default=settings.PORT, help=f"Port to listen on (default: {settings.PORT})")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload")

    args = parser.parse_args()

    print("=" * 60)
    print("  Listing Search - Real Estate Search API")
    print("=" * 60)
    print(f"\n  Starting server at http://{args.host}:{args.port}")
    print(f"  API Docs: http://localhost:{args.port}/docs")
    print(f"  Auto-reload: {'enabled' if args.reload else 'disabled'}")
    print("\n" + "=" * 60 + "\n")

    uvicorn.run(
        "listing_search.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
