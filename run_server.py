"""
promptform API Entry Point.

Usage:
    python run_server.py
    python run_server.py --host 127.0.0.1 --port 9110

    # Use environment variables
    PROMPTFORM_SERVER_PORT=9000 python run_server.py
"""

import argparse
import logging

import uvicorn

from promptform.api import create_app
from promptform.config import get_config


def main():
    """Main entry point."""
    config = get_config()
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    parser = argparse.ArgumentParser(description="promptform API server")
    parser.add_argument(
        "--host",
        default=config.server_host,
        help=f"Host to bind to (default: {config.server_host})",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=config.server_port,
        help=f"Port to listen on (default: {config.server_port})",
    )
    args = parser.parse_args()

    uvicorn.run(create_app(config=config), host=args.host, port=args.port, log_level=config.log_level.lower())


if __name__ == "__main__":
    main()
