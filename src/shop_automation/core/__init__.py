# Core package
from .config import ShopConfig, Credentials
from .errors import (
    ShopAutomationError,
    DriverError,
    NavigationError,
    LoginFailed,
    NoCredentials,
    ExtractionEmpty,
    CartAttemptFailed,
    NoLinkProvided,
    ShoppingListError,
    NoTerminal,
)

__all__ = [
    'ShopConfig',
    'Credentials',
    'ShopAutomationError',
    'DriverError',
    'NavigationError',
    'LoginFailed',
    'NoCredentials',
    'ExtractionEmpty',
    'CartAttemptFailed',
    'NoLinkProvided',
    'ShoppingListError',
    'NoTerminal',
]
