"""
promptform MCP Server Entry Point.

Run the MCP server with either stdio or SSE transport.

Usage:
    # stdio mode (desktop clients)
    python run_mcp_server.py --transport stdio

    # SSE mode (for Docker/remote)
    python run_mcp_server.py --transport sse --port 8080

    # Use environment variables
    MCP_TRANSPORT=sse MCP_PORT=8080 python run_mcp_server.py
"""

import argparse
import asyncio
import logging
import sys

from promptform.config import get_config
from promptform.mcp_server import run_mcp_server

logger = logging.getLogger("promptform-mcp")


def main():
    """Main entry point."""
    config = get_config()
    logging.basicConfig(level=config.log_level, stream=sys.stderr)

    parser = argparse.ArgumentParser(
        description="promptform MCP Server",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Desktop clients (stdio)
  python run_mcp_server.py --transport stdio

  # Docker/Remote (SSE)
  python run_mcp_server.py --transport sse --port 8080

Environment Variables:
  MCP_TRANSPORT        Transport type: stdio or sse (default: stdio)
  MCP_PORT             Port for SSE transport (default: 8080)
  PROMPTFORM_API_URL   URL of the promptform API (default: http://localhost:9110)
        """,
    )

    parser.add_argument(
        "--transport",
        choices=["stdio", "sse"],
        default=config.mcp_transport,
        help=f"Transport type (default: {config.mcp_transport})",
    )

    parser.add_argument(
        "--host",
        default="0.0.0.0",
        help="Host for SSE transport (default: 0.0.0.0)",
    )

    parser.add_argument(
        "--port",
        type=int,
        default=config.mcp_port,
        help=f"Port for SSE transport (default: {config.mcp_port})",
    )

    args = parser.parse_args()

    # stdout carries the protocol in stdio mode, so status goes to the log.
    logger.info("Transport: %s", args.transport)
    if args.transport == "sse":
        logger.info("Listening on %s:%s", args.host, args.port)
    logger.info("promptform API URL: %s", config.api_url)

    try:
        asyncio.run(
            run_mcp_server(
                transport=args.transport,
                host=args.host,
                port=args.port,
            )
        )
    except KeyboardInterrupt:
        logger.info("Server stopped.")


if __name__ == "__main__":
    main()
