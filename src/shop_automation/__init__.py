"""
Shop Automation
Scrapes SuperValu search results and replays shopping lists into the cart
using a saved, cookie-based login session.
"""

__version__ = '0.1.0'
