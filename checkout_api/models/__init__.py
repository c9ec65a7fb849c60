from .checkout import CheckoutItem, CheckoutResult
from .product import Product
from .user import User

__all__ = ["CheckoutItem", "CheckoutResult", "Product", "User"]
