"""Pagination cursor and page types for scanning receipts.

``ReceiptPageKey`` carries only the primary key of the last receipt a caller
consumed. It is what DynamoDB needs as an ``ExclusiveStartKey`` and nothing
more, so resuming a scan does not require holding a whole Receipt.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional

from sundae_dynamo.constants import (
    CUSTOMER_ID_ATTRIBUTE,
    KEY_ATTRIBUTES,
    PURCHASE_DATE_ATTRIBUTE,
)
from sundae_dynamo.entities.receipt import Receipt
from sundae_dynamo.entities.util import (
    assert_aware_datetime,
    assert_valid_customer_id,
)
from sundae_dynamo.utils.date_converter import (
    format_purchase_date,
    parse_purchase_date,
)


@dataclass(frozen=True)
class ReceiptPageKey:
    """
    Exclusive start cursor for a receipt scan.

    Attributes:
        customer_id (str): Partition key of the last consumed receipt.
        purchase_date (datetime): Sort key of the last consumed receipt.
    """

    customer_id: str
    purchase_date: datetime

    def __post_init__(self) -> None:
        assert_valid_customer_id(self.customer_id)
        assert_aware_datetime("purchase_date", self.purchase_date)

    @classmethod
    def from_receipt(cls, receipt: Receipt) -> "ReceiptPageKey":
        """Builds the cursor that resumes a scan right after ``receipt``."""
        return cls(
            customer_id=receipt.customer_id,
            purchase_date=receipt.purchase_date,
        )

    @classmethod
    def from_last_evaluated_key(
        cls, last_evaluated_key: Optional[Dict[str, Any]]
    ) -> Optional["ReceiptPageKey"]:
        """Converts a scan response's ``LastEvaluatedKey`` to a cursor.

        Returns:
            ReceiptPageKey | None: None when the scan is exhausted.

        Raises:
            ValueError: When the key is not a receipt primary key.
        """
        if last_evaluated_key is None:
            return None
        if not isinstance(last_evaluated_key, dict):
            raise ValueError("LastEvaluatedKey must be a dictionary.")
        for key in KEY_ATTRIBUTES:
            if (
                not isinstance(last_evaluated_key.get(key), dict)
                or "S" not in last_evaluated_key[key]
            ):
                raise ValueError(
                    f"LastEvaluatedKey[{key}] must be a dict containing a "
                    "key 'S'"
                )
        return cls(
            customer_id=last_evaluated_key[CUSTOMER_ID_ATTRIBUTE]["S"],
            purchase_date=parse_purchase_date(
                last_evaluated_key[PURCHASE_DATE_ATTRIBUTE]["S"]
            ),
        )

    def to_exclusive_start_key(self) -> Dict[str, Any]:
        """Returns the cursor in DynamoDB ``ExclusiveStartKey`` form."""
        return {
            CUSTOMER_ID_ATTRIBUTE: {"S": self.customer_id},
            PURCHASE_DATE_ATTRIBUTE: {
                "S": format_purchase_date(self.purchase_date)
            },
        }


@dataclass
class ReceiptPage:
    """One page of a receipt scan.

    Attributes:
        receipts: The receipts returned by a single scan request.
        next_key: Cursor for the following page. None once the scan has
            reached the end of the table.
    """

    receipts: List[Receipt]
    next_key: Optional[ReceiptPageKey] = None

    @property
    def has_more(self) -> bool:
        return self.next_key is not None

    def __len__(self) -> int:
        return len(self.receipts)
