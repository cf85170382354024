"""HTTP server for the Storefront MCP Server."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from .config import ShopifyConfig
from .session import StorefrontSession
from .shopify_client import DEMO_MODE_MESSAGE
from .summary import build_order_summary

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("storefront-http-server")

# Global state
session: Optional[StorefrontSession] = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown."""
    global session

    # Startup
    logger.info("Starting Storefront HTTP Server...")
    config = ShopifyConfig.from_env()
    session = StorefrontSession(config)

    if config.is_configured:
        logger.info(f"Shopify storefront configured: {config.domain}")
    else:
        logger.warning(
            "Shopify credentials not configured (SHOPIFY_DOMAIN, SHOPIFY_STOREFRONT_ACCESS_TOKEN), "
            "serving the demo catalog"
        )

    yield

    # Shutdown
    logger.info("Shutting down Storefront HTTP Server...")
    await session.close()


app = FastAPI(
    title="Storefront MCP Server",
    description="HTTP API for browsing a Shopify storefront, managing a cart and starting checkout",
    version="0.1.0",
    lifespan=lifespan,
)


# Request/Response Models
class AddToCartRequest(BaseModel):
    variant_id: str
    quantity: int = Field(default=1, ge=1)


class UpdateQuantityRequest(BaseModel):
    variant_id: str
    quantity: int


class RemoveFromCartRequest(BaseModel):
    variant_id: str


class CheckoutResponse(BaseModel):
    success: bool
    message: str
    checkout_url: Optional[str] = None


def _cart_response() -> dict:
    return build_order_summary(session.cart).model_dump(mode="json")


# Root endpoint
@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "name": "Storefront MCP Server",
        "version": "0.1.0",
        "description": "HTTP API for browsing a Shopify storefront, managing a cart and starting checkout",
        "endpoints": {
            "docs": "/docs",
            "health": "/health",
            "products": {
                "list": "GET /products",
                "details": "GET /products/{handle}",
            },
            "cart": {
                "get": "GET /cart",
                "add": "POST /cart/add",
                "update": "POST /cart/update",
                "remove": "POST /cart/remove",
                "clear": "POST /cart/clear",
            },
            "checkout": "POST /checkout",
        },
        "demo_mode": session.is_demo_mode if session else True,
    }


# Health check endpoint
@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "demo_mode": session.is_demo_mode if session else True,
    }


# Product endpoints
@app.get("/products")
async def list_products(refresh: bool = False):
    """List products in the catalog."""
    products = await session.get_products(refresh=refresh)
    return {
        "count": len(products),
        "products": [product.model_dump(mode="json") for product in products],
    }


@app.get("/products/{handle}")
async def get_product(handle: str):
    """Get a single product by handle or ID."""
    product = await session.find_product(handle)
    if product is None:
        raise HTTPException(status_code=404, detail=f"Product {handle} not found")
    return product.model_dump(mode="json")


# Cart endpoints
@app.get("/cart")
async def get_cart():
    """Get current cart with totals."""
    return _cart_response()


@app.post("/cart/add")
async def add_to_cart(request: AddToCartRequest):
    """Add a product variant to the cart."""
    try:
        item = await session.add_variant(request.variant_id, request.quantity)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    logger.info(f"Added to cart: {item.variant_id} (qty: {request.quantity})")
    return {
        "success": True,
        "message": f"Added {item.product.title} to cart (quantity: {request.quantity})",
        "cart": _cart_response(),
    }


@app.post("/cart/update")
async def update_quantity(request: UpdateQuantityRequest):
    """Set a cart line's quantity (0 or less removes the line)."""
    session.cart.update_quantity(request.variant_id, request.quantity)
    return {"success": True, "cart": _cart_response()}


@app.post("/cart/remove")
async def remove_from_cart(request: RemoveFromCartRequest):
    """Remove a variant from the cart."""
    session.cart.remove_from_cart(request.variant_id)
    return {"success": True, "cart": _cart_response()}


@app.post("/cart/clear")
async def clear_cart():
    """Empty the cart."""
    session.cart.clear_cart()
    return {"success": True, "cart": _cart_response()}


# Checkout endpoint
@app.post("/checkout", response_model=CheckoutResponse)
async def checkout():
    """Create a checkout for the current cart."""
    if session.cart.is_empty:
        return CheckoutResponse(success=False, message="Cart is empty")

    if session.is_demo_mode:
        return CheckoutResponse(success=False, message=DEMO_MODE_MESSAGE)

    checkout_url = await session.cart.create_checkout()
    if checkout_url is None:
        return CheckoutResponse(success=False, message="Failed to create checkout. Please try again.")

    return CheckoutResponse(success=True, message="Checkout created", checkout_url=checkout_url)


def run_http_server(host: str = "0.0.0.0", port: int = 8000, reload: bool = False):
    """
    Run the HTTP server.

    Args:
        host: Host to bind to (default: 0.0.0.0)
        port: Port to bind to (default: 8000)
        reload: Enable hot reloading (default: False)
    """
    import uvicorn

    logger.info(f"Starting server on {host}:{port} (reload={'enabled' if reload else 'disabled'})")

    if reload:
        uvicorn.run(
            "storefront_server.http_server:app",
            host=host,
            port=port,
            reload=True,
            reload_dirs=["storefront_server"],
            log_level="info",
        )
    else:
        uvicorn.run(app, host=host, port=port, log_level="info")


if __name__ == "__main__":
    run_http_server(reload=True)
