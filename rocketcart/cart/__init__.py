"""Cart package: entries, persistence codec, and the cart engine."""
from .models import CartEntry, CartOperation, CartOutcome, CartResult
from .service import CartEngine, create_cart_engine

__all__ = [
    "CartEntry",
    "CartOperation",
    "CartOutcome",
    "CartResult",
    "CartEngine",
    "create_cart_engine",
]
