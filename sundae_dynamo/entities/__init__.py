"""
Entity classes for the sundae_dynamo package.
"""

from sundae_dynamo.entities.sundae import Sundae  # noqa: F401
from sundae_dynamo.entities.receipt import (  # noqa: F401
    Receipt,
    item_to_receipt,
    item_to_sales_total,
)
from sundae_dynamo.entities.receipt_page import (  # noqa: F401
    ReceiptPage,
    ReceiptPageKey,
)

__all__ = [
    "Receipt",
    "ReceiptPage",
    "ReceiptPageKey",
    "Sundae",
    "item_to_receipt",
    "item_to_sales_total",
]
