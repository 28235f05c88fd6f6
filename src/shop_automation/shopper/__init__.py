# Shopper package
from .cart_filler import CartFiller
from .cart_summary import read_cart
from .shopping_list import load_shopping_list, parse_shopping_list
from .workflow import ShoppingWorkflow, ShoppingRunSummary, FailureReason, FailedItem, ItemResult

__all__ = [
    'CartFiller',
    'read_cart',
    'load_shopping_list',
    'parse_shopping_list',
    'ShoppingWorkflow',
    'ShoppingRunSummary',
    'FailureReason',
    'FailedItem',
    'ItemResult',
]
