"""
Packaged data tables (stop words, diacritics, fallback dictionary).

Tables live as JSON under translink/data so they can be extended without
touching code.
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Any

from translink.logger import get_logger

logger = get_logger(__name__)

DATA_DIR = Path(__file__).parent / "data"


@lru_cache(maxsize=None)
def load_table(name: str) -> Any:
    """
    Load a JSON data table by name.

    Args:
        name: Table name without extension (e.g., 'stopwords')

    Returns:
        Parsed JSON content

    Raises:
        FileNotFoundError: The table does not exist
    """
    table_file = DATA_DIR / f"{name}.json"
    with open(table_file, 'r', encoding='utf-8') as f:
        table = json.load(f)
    logger.debug(f"Loaded data table: {table_file}")
    return table
