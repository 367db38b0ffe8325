"""Static sample transaction set shipped with the dashboard."""
import json
from functools import lru_cache
from pathlib import Path
from typing import Tuple

from .models import Transaction
from hotelintel.utils.logger import get_logger

logger = get_logger()

SAMPLE_PATH = Path(__file__).resolve().parent.parent / "resources" / "sample_transactions.json"


def load_transactions(path: Path) -> Tuple[Transaction, ...]:
    """Load transactions from a JSON array in the camelCase wire format."""
    with open(path, "r", encoding="utf-8") as f:
        rows = json.load(f)
    transactions = tuple(Transaction.from_dict(row) for row in rows)
    logger.debug(f"Loaded {len(transactions)} transactions from {path.name}")
    return transactions


@lru_cache(maxsize=1)
def load_sample_transactions() -> Tuple[Transaction, ...]:
    """San Francisco sample data, March to November 2025. Loaded once."""
    return load_transactions(SAMPLE_PATH)
