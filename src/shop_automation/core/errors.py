"""
Error taxonomy for shop automation
Fatal errors abort the current command, per-item errors become summary entries
"""
from typing import Optional


class ShopAutomationError(Exception):
    """Base class for every error raised by shop automation"""


class DriverError(ShopAutomationError):
    """Browser launch, navigation or script evaluation failed"""

    def __init__(self, action: str, url: Optional[str] = None, cause: Optional[BaseException] = None):
        self.action = action
        self.url = url
        self.cause = cause
        message = f"Browser failed to {action}"
        if url:
            message += f" ({url})"
        if cause is not None:
            message += f": {cause}"
        super().__init__(message)


class NavigationError(DriverError):
    """Page navigation failed or timed out"""

    def __init__(self, url: str, cause: Optional[BaseException] = None):
        super().__init__("navigate", url, cause)


class LoginFailed(ShopAutomationError):
    """Credentials rejected or login could not be verified"""


class NoCredentials(ShopAutomationError):
    """Credential login requested but no email/password configured"""


class ExtractionEmpty(ShopAutomationError):
    """No usable product records found on a search page"""

    def __init__(self, product_name: str):
        self.product_name = product_name
        super().__init__(f"No products found for: {product_name}")


class CartAttemptFailed(ShopAutomationError):
    """A product URL could not be added to the cart"""

    def __init__(self, url: str, outcome):
        self.url = url
        self.outcome = outcome
        super().__init__(f"Could not add {url} to cart ({outcome.value})")


class NoLinkProvided(ShopAutomationError):
    """Shopping list item has neither a primary nor a backup link"""

    def __init__(self, item_name: str):
        self.item_name = item_name
        super().__init__(f"No link provided for: {item_name}")


class ShoppingListError(ShopAutomationError):
    """Shopping list could not be read or parsed"""


class NoTerminal(ShopAutomationError):
    """A human acknowledgment is needed but no interactive terminal is attached"""
