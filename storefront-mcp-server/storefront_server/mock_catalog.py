"""Built-in catalog used when the Shopify storefront is not configured or unreachable."""

from .models import Product


def _image(photo: str, alt_text: str) -> dict:
    return {
        "url": f"https://images.unsplash.com/{photo}?w=400&h=400&fit=crop&crop=center",
        "alt_text": alt_text,
    }


_MOCK_PRODUCTS: list[dict] = [
    {
        "id": "mock-1",
        "title": "Premium Cotton T-Shirt",
        "handle": "premium-cotton-tshirt",
        "description": (
            "Soft, comfortable cotton t-shirt perfect for everyday wear. "
            "Made from 100% organic cotton with a relaxed fit."
        ),
        "images": [_image("photo-1521572163474-6864f9cf17ab", "Premium Cotton T-Shirt")],
        "variants": [
            {"id": "variant-1", "title": "Small / Black", "price": "2499.00", "available": True},
            {"id": "variant-2", "title": "Medium / Black", "price": "2499.00", "available": True},
            {"id": "variant-3", "title": "Large / Black", "price": "2499.00", "available": False},
            {"id": "variant-4", "title": "Small / White", "price": "2499.00", "available": True},
        ],
    },
    {
        "id": "mock-2",
        "title": "Wireless Bluetooth Headphones",
        "handle": "wireless-bluetooth-headphones",
        "description": (
            "High-quality wireless headphones with active noise cancellation, "
            "30-hour battery life, and premium sound quality."
        ),
        "images": [_image("photo-1505740420928-5e560c06d30e", "Wireless Bluetooth Headphones")],
        "variants": [
            {"id": "variant-5", "title": "Black", "price": "16599.00", "available": True},
            {"id": "variant-6", "title": "White", "price": "16599.00", "available": True},
            {"id": "variant-7", "title": "Silver", "price": "18249.00", "available": True},
        ],
    },
    {
        "id": "mock-3",
        "title": "Stainless Steel Water Bottle",
        "handle": "stainless-steel-water-bottle",
        "description": (
            "Double-wall insulated stainless steel water bottle that keeps drinks cold "
            "for 24 hours or hot for 12 hours. BPA-free and leak-proof."
        ),
        "images": [_image("photo-1602143407151-7111542de6e8", "Stainless Steel Water Bottle")],
        "variants": [
            {"id": "variant-8", "title": "500ml / Silver", "price": "2899.00", "available": True},
            {"id": "variant-9", "title": "750ml / Silver", "price": "3319.00", "available": True},
            {"id": "variant-10", "title": "1L / Silver", "price": "3729.00", "available": True},
            {"id": "variant-11", "title": "500ml / Black", "price": "2899.00", "available": False},
        ],
    },
    {
        "id": "mock-4",
        "title": "Leather Crossbody Bag",
        "handle": "leather-crossbody-bag",
        "description": (
            "Handcrafted genuine leather crossbody bag with adjustable strap, "
            "multiple compartments, and vintage brass hardware."
        ),
        "images": [_image("photo-1553062407-98eeb64c6a62", "Leather Crossbody Bag")],
        "variants": [
            {"id": "variant-12", "title": "Brown", "price": "7459.00", "available": True},
            {"id": "variant-13", "title": "Black", "price": "7459.00", "available": False},
            {"id": "variant-14", "title": "Tan", "price": "7869.00", "available": True},
        ],
    },
    {
        "id": "mock-5",
        "title": "Smart Fitness Watch",
        "handle": "smart-fitness-watch",
        "description": (
            "Advanced fitness tracking watch with heart rate monitoring, GPS, "
            "sleep tracking, and 7-day battery life."
        ),
        "images": [_image("photo-1523275335684-37898b6baf30", "Smart Fitness Watch")],
        "variants": [
            {"id": "variant-15", "title": "42mm / Black", "price": "24899.00", "available": True},
            {"id": "variant-16", "title": "46mm / Black", "price": "27369.00", "available": True},
            {"id": "variant-17", "title": "42mm / Silver", "price": "24899.00", "available": True},
        ],
    },
    {
        "id": "mock-6",
        "title": "Organic Coffee Beans",
        "handle": "organic-coffee-beans",
        "description": (
            "Premium single-origin organic coffee beans, medium roast with notes of "
            "chocolate and caramel. Freshly roasted weekly."
        ),
        "images": [_image("photo-1559056199-641a0ac8b55e", "Organic Coffee Beans")],
        "variants": [
            {"id": "variant-18", "title": "12oz / Whole Bean", "price": "1579.00", "available": True},
            {"id": "variant-19", "title": "12oz / Ground", "price": "1579.00", "available": True},
            {"id": "variant-20", "title": "2lb / Whole Bean", "price": "4559.00", "available": True},
        ],
    },
]


def get_mock_products() -> list[Product]:
    """Return a fresh copy of the built-in catalog (same content on every call)."""
    return [Product.model_validate(data) for data in _MOCK_PRODUCTS]
