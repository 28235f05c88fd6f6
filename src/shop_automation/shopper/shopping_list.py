"""
Shopping list input - YAML document with a top-level 'items' sequence
"""
import logging
import sys
from pathlib import Path
from typing import Optional, TextIO

import yaml
from pydantic import ValidationError

from ..core.errors import ShoppingListError
from ..models import ShoppingList

logger = logging.getLogger(__name__)

STDIN_SENTINEL = "-"


def parse_shopping_list(text: str) -> ShoppingList:
    try:
        document = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ShoppingListError(f"Failed to parse shopping list YAML: {e}") from e

    if not isinstance(document, dict) or "items" not in document:
        raise ShoppingListError("Shopping list must have a top-level 'items' list")

    try:
        return ShoppingList.model_validate({"items": document["items"] or []})
    except ValidationError as e:
        raise ShoppingListError(f"Invalid shopping list: {e}") from e


def load_shopping_list(source: str, stdin: Optional[TextIO] = None) -> ShoppingList:
    """Read a shopping list from a file path, or from stdin when source is '-'"""
    if source == STDIN_SENTINEL:
        text = (stdin or sys.stdin).read()
    else:
        try:
            text = Path(source).read_text(encoding="utf-8")
        except OSError as e:
            raise ShoppingListError(f"Failed to read shopping list from {source}: {e}") from e

    shopping_list = parse_shopping_list(text)
    logger.debug(f"Loaded {len(shopping_list.items)} items from {source}")
    return shopping_list
