from enum import Enum
from pydantic import BaseModel, field_validator
from typing import List


class CartOutcome(str, Enum):
    """Result of one add-to-cart attempt for a single URL"""
    ADDED = "added"
    ALREADY_IN_CART = "already_in_cart"
    OUT_OF_STOCK = "out_of_stock"
    NOT_FOUND = "not_found"

    @property
    def is_success(self) -> bool:
        return self in (CartOutcome.ADDED, CartOutcome.ALREADY_IN_CART)


class CartLine(BaseModel):
    name: str
    price: str = ""
    quantity: str = "1"

    @field_validator("quantity", mode="before")
    @classmethod
    def _quantity_as_text(cls, value):
        return "1" if value in (None, "") else str(value)


class CartSnapshot(BaseModel):
    """Advisory view of the cart page, read after the item loop"""
    itemCount: int = 0
    subtotal: str = ""
    items: List[CartLine] = []
