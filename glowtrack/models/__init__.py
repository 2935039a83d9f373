from glowtrack.models.product import Product, ProductCategory

__all__ = [
    "Product",
    "ProductCategory",
]
