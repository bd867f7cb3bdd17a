"""Display strings for products, with the fallbacks shown for missing fields."""
from .schemas.product import ProductOut

NO_DESCRIPTION = "No description available."
NO_PRICE = "N/A"
NO_CATEGORY = "Uncategorized"
NO_TAGS = "No tags available."
NO_RATING = "No rating available."
NO_IMAGES = "No images available for this product."
OUT_OF_STOCK = "Out of stock"


def format_price(price: float | None) -> str:
    if price is None:
        return NO_PRICE
    return f"${price:.2f}"


def format_rating(rating: float | None) -> str:
    # A zero average means nobody has rated it yet.
    if not rating:
        return NO_RATING
    return f"{rating:.1f}"


def format_tags(tags: list[str] | None) -> str:
    if not tags:
        return NO_TAGS
    return ", ".join(tags)


def stock_label(stock: int | None) -> str:
    if stock and stock > 0:
        return f"In stock ({stock} available)"
    return OUT_OF_STOCK


def image_mode(images: list[str] | None) -> str:
    """'carousel' for several images, 'single' for one, 'none' otherwise."""
    if not images:
        return "none"
    return "carousel" if len(images) > 1 else "single"


def present_product(product: ProductOut) -> dict:
    return {
        "id": product.id,
        "title": product.title,
        "description": product.description or NO_DESCRIPTION,
        "price": format_price(product.price),
        "category": product.category or NO_CATEGORY,
        "tags": format_tags(product.tags),
        "rating": format_rating(product.rating),
        "stock": stock_label(product.stock),
        "in_stock": product.stock > 0,
        "images": product.images,
        "image_mode": image_mode(product.images),
        "images_note": None if product.images else NO_IMAGES,
        "reviews": product.reviews,
    }


def page_metadata(product: ProductOut | None) -> dict:
    """Title and description for the detail page's <head>."""
    if product is None:
        return {
            "title": "Product Not Found",
            "description": "The requested product could not be found.",
        }
    return {
        "title": product.title or "Product",
        "description": product.description or "No description available",
    }
