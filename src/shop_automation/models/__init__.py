# Models package
from .session import SessionCookie, dedupe_cookies
from .product import ProductRecord, ShoppingData
from .shopping import ShoppingListItem, ShoppingList
from .cart import CartOutcome, CartLine, CartSnapshot

__all__ = [
    'SessionCookie',
    'dedupe_cookies',
    'ProductRecord',
    'ShoppingData',
    'ShoppingListItem',
    'ShoppingList',
    'CartOutcome',
    'CartLine',
    'CartSnapshot',
]
