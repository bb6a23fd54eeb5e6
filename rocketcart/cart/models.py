"""Cart entry and operation result types."""
from dataclasses import dataclass, replace
from decimal import Decimal
from enum import Enum
from typing import Optional

from rocketcart.services.models import Product
from rocketcart.services.money import line_total, to_decimal


@dataclass(frozen=True)
class CartEntry:
    """One product line in the cart, keyed by product id."""
    id: int
    name: str
    price: Decimal
    amount: int
    image_url: Optional[str] = None

    def __post_init__(self):
        if isinstance(self.id, bool) or not isinstance(self.id, int):
            raise ValueError(f"id must be an integer, got {self.id!r}")
        price = to_decimal(self.price)
        if not price.is_finite() or price < 0:
            raise ValueError(f"price must be a finite non-negative number, got {self.price!r}")
        object.__setattr__(self, "price", price)
        if isinstance(self.amount, bool) or not isinstance(self.amount, int) or self.amount < 1:
            raise ValueError(f"amount must be a positive integer, got {self.amount!r}")

    @property
    def subtotal(self) -> Decimal:
        return line_total(self.price, self.amount)

    def with_amount(self, amount: int) -> "CartEntry":
        """Copy of this entry with a new amount."""
        return replace(self, amount=amount)

    @classmethod
    def from_product(cls, product: Product, amount: int) -> "CartEntry":
        return cls(
            id=product.id,
            name=product.name,
            price=product.price,
            amount=amount,
            image_url=product.image_url,
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for persistence."""
        return {
            "id": self.id,
            "name": self.name,
            "price": str(self.price),
            "image_url": self.image_url,
            "amount": self.amount,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CartEntry":
        """Create from dictionary."""
        return cls(
            id=data["id"],
            name=data["name"],
            price=to_decimal(data["price"]),
            amount=data["amount"],
            image_url=data.get("image_url"),
        )


class CartOperation(str, Enum):
    ADD = "add"
    REMOVE = "remove"
    UPDATE = "update"


class CartOutcome(str, Enum):
    """
    How a cart operation ended.

    - committed: new cart persisted and now authoritative
    - no_op: nothing to do (update with a non-positive amount)
    - not_found: product is not in the cart
    - stock_exceeded: requested amount is above available stock
    - external_failure: shop API or storage failed
    """
    COMMITTED = "committed"
    NO_OP = "no_op"
    NOT_FOUND = "not_found"
    STOCK_EXCEEDED = "stock_exceeded"
    EXTERNAL_FAILURE = "external_failure"


@dataclass(frozen=True)
class CartResult:
    operation: CartOperation
    outcome: CartOutcome
    product_id: int
    detail: str = ""

    @property
    def ok(self) -> bool:
        """True when the cart is in the state the caller asked for."""
        return self.outcome in (CartOutcome.COMMITTED, CartOutcome.NO_OP)
