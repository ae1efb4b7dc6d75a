#!/usr/bin/env python3
"""
Startup script for the pizza service.

Usage:
    # Run with settings from the environment / .env
    python run_server.py

    # Run with custom port and a specific database
    python run_server.py --port 3000 --database-url sqlite:///./data/pizza.db

    # Run with reload for development
    python run_server.py --reload
"""

import argparse
import os

from dotenv import load_dotenv


def main():
    parser = argparse.ArgumentParser(description="Run the JWT Pizza service")
    parser.add_argument(
        "--host",
        default="0.0.0.0",
        help="Host to bind to (default: 0.0.0.0)",
    )
    parser.add_argument(
        "--port",
        "-p",
        type=int,
        default=int(os.getenv("PORT", "3000")),
        help="Port to run on (default: $PORT or 3000)",
    )
    parser.add_argument(
        "--database-url",
        help="SQLAlchemy database URL (overrides DATABASE_URL)",
    )
    parser.add_argument(
        "--reload",
        "-r",
        action="store_true",
        help="Enable auto-reload for development",
    )

    args = parser.parse_args()
    load_dotenv()

    # The app reads DATABASE_URL from the environment when it is imported
    if args.database_url:
        os.environ["DATABASE_URL"] = args.database_url

    database_url = os.getenv("DATABASE_URL", "sqlite:///./pizza.db")
    if database_url.startswith("sqlite:///./"):
        db_dir = os.path.dirname(database_url.replace("sqlite:///./", ""))
        if db_dir:
            os.makedirs(db_dir, exist_ok=True)

    print(f"\n{'=' * 50}")
    print("Starting: JWT Pizza service")
    print(f"Port:     {args.port}")
    print(f"Database: {database_url}")
    print(f"{'=' * 50}\n")

    import uvicorn

    uvicorn.run(
        "pizza_service.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
    )


if __name__ == "__main__":
    main()
