"""Command-line entry point: serve the storefront over MCP stdio or HTTP."""

import argparse
import asyncio
import sys


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="storefront-mcp-server",
        description=(
            "Browse a Shopify storefront, keep a cart and hand off to Shopify checkout. "
            "Without SHOPIFY_DOMAIN and SHOPIFY_STOREFRONT_ACCESS_TOKEN the demo "
            "catalog is served and checkout is disabled."
        ),
    )
    parser.add_argument(
        "--mode",
        choices=["stdio", "http"],
        default="stdio",
        help="stdio exposes the cart as MCP tools; http starts the REST API",
    )
    parser.add_argument(
        "--host",
        default="0.0.0.0",
        help="Interface the REST API listens on (http mode, default: %(default)s)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="Port the REST API listens on (http mode, default: %(default)s)",
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Restart the REST API when storefront_server sources change (http mode)",
    )
    return parser


def main(argv=None) -> None:
    """Parse arguments and run the selected server."""
    args = build_parser().parse_args(argv)

    if args.mode == "http":
        from .http_server import run_http_server

        run_http_server(host=args.host, port=args.port, reload=args.reload)
        return

    from .server import main as server_main

    try:
        asyncio.run(server_main())
    except KeyboardInterrupt:
        print("\nStorefront server stopped", file=sys.stderr)
        sys.exit(0)
