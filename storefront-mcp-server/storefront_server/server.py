"""MCP Server for the storefront."""

import asyncio
import json
import logging
from typing import Any

from mcp.server import Server
from mcp.types import Resource, Tool, TextContent
from pydantic import AnyUrl

from .config import ShopifyConfig
from .currency import format_price_compact
from .session import StorefrontSession
from .shopify_client import DEMO_MODE_MESSAGE
from .summary import build_order_summary

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("storefront-mcp-server")

# Initialize server
app = Server("storefront-mcp-server")

# Global state
session: StorefrontSession

VARIANT_ID_SCHEMA = {
    "type": "string",
    "description": "Variant ID from the product listing",
}


def _text(text: str) -> list[TextContent]:
    return [TextContent(type="text", text=text)]


def _format_cart() -> str:
    """Render the cart and its order summary as text."""
    summary = build_order_summary(session.cart)

    if not summary.items:
        return "Your cart is empty"

    result_lines = [f"Shopping Cart ({summary.item_count} items):\n"]
    for item in summary.items:
        line = f"  - {item.title} [{item.variant_id}] x{item.quantity}: {item.line_total_formatted}"
        if item.quantity > 1:
            line += f" ({item.unit_price_formatted} each)"
        result_lines.append(line)

    result_lines.append(f"\nSubtotal: {summary.subtotal_formatted}")
    result_lines.append(f"Shipping: {summary.shipping_formatted}")
    result_lines.append(f"Tax (GST 18%): {summary.tax_formatted}")
    result_lines.append(f"Total: {summary.total_formatted}")
    return "\n".join(result_lines)


@app.list_resources()
async def list_resources() -> list[Resource]:
    """List available resources."""
    return [
        Resource(
            uri=AnyUrl("storefront://products"),
            name="Product Catalog",
            mimeType="application/json",
            description="Products available in the store",
        ),
        Resource(
            uri=AnyUrl("storefront://cart"),
            name="Shopping Cart",
            mimeType="application/json",
            description="Current shopping cart contents and totals",
        ),
    ]


@app.read_resource()
async def read_resource(uri: AnyUrl) -> str:
    """Read a resource by URI."""
    uri_str = str(uri)

    if uri_str == "storefront://products":
        products = await session.get_products()
        return json.dumps([p.model_dump(mode="json") for p in products], indent=2)

    if uri_str == "storefront://cart":
        return build_order_summary(session.cart).model_dump_json(indent=2)

    raise ValueError(f"Unknown resource: {uri}")


@app.list_tools()
async def list_tools() -> list[Tool]:
    """List available tools."""
    return [
        Tool(
            name="storefront_list_products",
            description="List products in the store with their variants and prices",
            inputSchema={
                "type": "object",
                "properties": {
                    "query": {
                        "type": "string",
                        "description": "Optional text to filter product titles and descriptions",
                    },
                    "refresh": {
                        "type": "boolean",
                        "description": "Reload the catalog from the store (default: false)",
                        "default": False,
                    },
                },
            },
        ),
        Tool(
            name="storefront_get_product",
            description="Get details of a single product by handle or ID",
            inputSchema={
                "type": "object",
                "properties": {
                    "handle": {
                        "type": "string",
                        "description": "Product handle (URL slug) or product ID",
                    },
                },
                "required": ["handle"],
            },
        ),
        Tool(
            name="storefront_add_to_cart",
            description="Add a product variant to the cart",
            inputSchema={
                "type": "object",
                "properties": {
                    "variant_id": VARIANT_ID_SCHEMA,
                    "quantity": {
                        "type": "integer",
                        "description": "Quantity to add (default: 1)",
                        "default": 1,
                        "minimum": 1,
                    },
                },
                "required": ["variant_id"],
            },
        ),
        Tool(
            name="storefront_update_quantity",
            description="Set the quantity of a cart line (0 removes it)",
            inputSchema={
                "type": "object",
                "properties": {
                    "variant_id": VARIANT_ID_SCHEMA,
                    "quantity": {"type": "integer", "description": "New quantity"},
                },
                "required": ["variant_id", "quantity"],
            },
        ),
        Tool(
            name="storefront_remove_from_cart",
            description="Remove a variant from the cart",
            inputSchema={
                "type": "object",
                "properties": {"variant_id": VARIANT_ID_SCHEMA},
                "required": ["variant_id"],
            },
        ),
        Tool(
            name="storefront_clear_cart",
            description="Remove everything from the cart",
            inputSchema={"type": "object", "properties": {}},
        ),
        Tool(
            name="storefront_get_cart",
            description="Get current cart contents with subtotal, tax and total",
            inputSchema={"type": "object", "properties": {}},
        ),
        Tool(
            name="storefront_checkout",
            description="Create a checkout for the current cart and return the payment URL",
            inputSchema={"type": "object", "properties": {}},
        ),
    ]


@app.call_tool()
async def call_tool(name: str, arguments: Any) -> list[TextContent]:
    """Handle tool calls."""
    arguments = arguments or {}
    try:
        if name == "storefront_list_products":
            products = await session.get_products(refresh=bool(arguments.get("refresh")))

            query = (arguments.get("query") or "").lower()
            if query:
                products = [
                    p for p in products
                    if query in p.title.lower() or query in p.description.lower()
                ]

            if not products:
                return _text(f"No products found for: {query}" if query else "No products available")

            result_lines = [f"Found {len(products)} product(s):"]
            if session.is_demo_mode:
                result_lines[0] += " (demo catalog)"
            for i, product in enumerate(products, 1):
                result_lines.append(f"\n{i}. {product.title} ({product.handle})")
                for variant in product.variants:
                    stock = "" if variant.available else " - out of stock"
                    result_lines.append(
                        f"   - {variant.title}: {format_price_compact(variant.price)} "
                        f"[{variant.id}]{stock}"
                    )

            return _text("\n".join(result_lines))

        elif name == "storefront_get_product":
            handle = arguments.get("handle")
            if not handle:
                return _text("Error: handle parameter required")

            product = await session.find_product(handle)
            if product is None:
                return _text(f"Product not found: {handle}")

            return _text(product.model_dump_json(indent=2))

        elif name == "storefront_add_to_cart":
            variant_id = arguments["variant_id"]
            quantity = int(arguments.get("quantity", 1))

            try:
                item = await session.add_variant(variant_id, quantity)
            except ValueError as e:
                return _text(f"❌ {e}")

            return _text(
                f"✅ Added {item.product.title} • {format_price_compact(item.product.price)} "
                f"(quantity: {quantity}) to cart\n"
                f"Cart: {session.cart.get_total_items()} items, "
                f"subtotal {session.cart.get_formatted_total_price()}"
            )

        elif name == "storefront_update_quantity":
            variant_id = arguments["variant_id"]
            quantity = max(0, int(arguments["quantity"]))
            session.cart.update_quantity(variant_id, quantity)
            return _text(_format_cart())

        elif name == "storefront_remove_from_cart":
            session.cart.remove_from_cart(arguments["variant_id"])
            return _text(_format_cart())

        elif name == "storefront_clear_cart":
            session.cart.clear_cart()
            return _text("✅ Cart cleared")

        elif name == "storefront_get_cart":
            return _text(_format_cart())

        elif name == "storefront_checkout":
            if session.cart.is_empty:
                return _text("Your cart is empty, nothing to check out")

            if session.is_demo_mode:
                return _text(f"❌ {DEMO_MODE_MESSAGE}")

            checkout_url = await session.cart.create_checkout()
            if checkout_url is None:
                return _text("❌ Failed to create checkout. Please try again.")

            return _text(f"✅ Checkout created. Complete your purchase at:\n{checkout_url}")

        else:
            return _text(f"Unknown tool: {name}")

    except Exception as e:
        logger.error(f"Error executing tool {name}: {e}", exc_info=True)
        return _text(f"Error: {str(e)}")


async def main() -> None:
    """Main entry point."""
    global session

    config = ShopifyConfig.from_env()
    session = StorefrontSession(config)

    if config.is_configured:
        logger.info(f"Shopify storefront configured: {config.domain}")
    else:
        logger.warning(
            "Shopify credentials not configured (SHOPIFY_DOMAIN, SHOPIFY_STOREFRONT_ACCESS_TOKEN)"
        )
        logger.warning("Serving the demo catalog; checkout is disabled")

    logger.info("Starting Storefront MCP Server...")

    # Import and run the server
    from mcp.server.stdio import stdio_server

    try:
        async with stdio_server() as (read_stream, write_stream):
            await app.run(
                read_stream,
                write_stream,
                app.create_initialization_options(),
            )
    finally:
        await session.close()


if __name__ == "__main__":
    asyncio.run(main())
