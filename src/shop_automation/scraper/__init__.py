# Scraper package
from .extractor import ProductExtractor, split_quantity, MAX_PRODUCTS
from .workflow import ScrapeWorkflow, ScrapeReport, ScrapeResult, ScrapeStatus, normalize_product_key

__all__ = [
    'ProductExtractor',
    'split_quantity',
    'MAX_PRODUCTS',
    'ScrapeWorkflow',
    'ScrapeReport',
    'ScrapeResult',
    'ScrapeStatus',
    'normalize_product_key',
]
