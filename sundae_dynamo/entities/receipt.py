from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List

from sundae_dynamo.constants import (
    CUSTOMER_ID_ATTRIBUTE,
    PURCHASE_DATE_ATTRIBUTE,
    SALES_TOTAL_ATTRIBUTE,
    SUNDAES_ATTRIBUTE,
)
from sundae_dynamo.data.shared_exceptions import SerializationError
from sundae_dynamo.entities.base import DynamoDBEntity
from sundae_dynamo.entities.sundae import Sundae
from sundae_dynamo.entities.util import (
    _repr_str,
    assert_aware_datetime,
    assert_valid_customer_id,
)
from sundae_dynamo.utils.date_converter import (
    format_purchase_date,
    parse_purchase_date,
)
from sundae_dynamo.utils.sundae_converter import decode_sundaes, encode_sundaes


@dataclass(eq=True, unsafe_hash=False)
class Receipt(DynamoDBEntity):
    """
    Represents a customer's sundae purchase stored in a DynamoDB table.

    The table is keyed by ``customerId`` (partition key) and ``purchaseDate``
    (sort key). The sales total is computed once when the receipt is created
    and stored next to the encoded sundaes, so aggregate queries can read it
    without decoding the sundae list.

    Attributes:
        customer_id (str): Identifies the purchasing customer.
        purchase_date (datetime): Timezone-aware time of the purchase.
        sales_total (Decimal): Sum of the prices of ``sundaes``.
        sundaes (list[Sundae]): The sundaes bought, in order.
    """

    customer_id: str
    purchase_date: datetime
    sales_total: Decimal
    sundaes: List[Sundae] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Validate and normalize initialization arguments."""
        assert_valid_customer_id(self.customer_id)
        assert_aware_datetime("purchase_date", self.purchase_date)

        if isinstance(self.sales_total, int) and not isinstance(
            self.sales_total, bool
        ):
            self.sales_total = Decimal(self.sales_total)
        if not isinstance(self.sales_total, Decimal):
            raise ValueError("sales_total must be a Decimal")
        if not self.sales_total.is_finite() or self.sales_total < 0:
            raise ValueError("sales_total must be a non-negative number")

        if isinstance(self.sundaes, tuple):
            self.sundaes = list(self.sundaes)
        if not isinstance(self.sundaes, list):
            raise ValueError("sundaes must be a list")
        if not all(isinstance(sundae, Sundae) for sundae in self.sundaes):
            raise ValueError("sundaes must contain only Sundae instances")

    @property
    def key(self) -> Dict[str, Any]:
        """Generates the primary key for the receipt.

        Returns:
            dict: The primary key for the receipt.
        """
        return {
            CUSTOMER_ID_ATTRIBUTE: {"S": self.customer_id},
            PURCHASE_DATE_ATTRIBUTE: {
                "S": format_purchase_date(self.purchase_date)
            },
        }

    def to_item(self) -> Dict[str, Any]:
        """Converts the Receipt object to a DynamoDB item.

        Returns:
            dict: Dictionary representing the receipt as a DynamoDB item.

        Raises:
            SerializationError: When the sundaes cannot be encoded.
        """
        return {
            **self.key,
            SALES_TOTAL_ATTRIBUTE: {"N": str(self.sales_total)},
            SUNDAES_ATTRIBUTE: {"S": encode_sundaes(self.sundaes)},
        }

    def __repr__(self) -> str:
        return (
            "Receipt("
            f"customer_id={_repr_str(self.customer_id)}, "
            f"purchase_date={_repr_str(self.purchase_date.isoformat())}, "
            f"sales_total={_repr_str(self.sales_total)}, "
            f"sundaes={self.sundaes}"
            ")"
        )

    def __hash__(self) -> int:
        """Returns the hash value of the Receipt object."""
        return hash(
            (
                self.customer_id,
                self.purchase_date,
                self.sales_total,
                tuple(self.sundaes),
            )
        )


def item_to_sales_total(item: Dict[str, Any]) -> Decimal:
    """Reads the stored sales total from a DynamoDB item.

    Only the ``salesTotal`` attribute is touched, so this works on items
    scanned with a projection that leaves out the sundaes.

    Raises:
        ValueError: When the attribute is missing or not a number.
    """
    if SALES_TOTAL_ATTRIBUTE not in item:
        raise ValueError(
            f"Invalid item format\nmissing keys: {SALES_TOTAL_ATTRIBUTE}"
        )
    try:
        return Decimal(item[SALES_TOTAL_ATTRIBUTE]["N"])
    except (KeyError, TypeError, InvalidOperation) as e:
        raise ValueError(f"Error reading salesTotal: {e}") from e


def item_to_receipt(item: Dict[str, Any]) -> Receipt:
    """Converts a DynamoDB item to a Receipt object.

    Args:
        item (dict): The DynamoDB item to convert.

    Returns:
        Receipt: The Receipt object.

    Raises:
        ValueError: When the item format is invalid.
        SerializationError: When the stored sundaes cannot be decoded.
    """
    required_keys = {
        CUSTOMER_ID_ATTRIBUTE,
        PURCHASE_DATE_ATTRIBUTE,
        SALES_TOTAL_ATTRIBUTE,
    }
    if not required_keys.issubset(item.keys()):
        missing_keys = required_keys - item.keys()
        additional_keys = item.keys() - required_keys
        raise ValueError(
            "Invalid item format\n"
            f"missing keys: {missing_keys}\n"
            f"additional keys: {additional_keys}"
        )
    try:
        return Receipt(
            customer_id=item[CUSTOMER_ID_ATTRIBUTE]["S"],
            purchase_date=parse_purchase_date(
                item[PURCHASE_DATE_ATTRIBUTE]["S"]
            ),
            sales_total=item_to_sales_total(item),
            sundaes=decode_sundaes(
                item.get(SUNDAES_ATTRIBUTE, {}).get("S")
            ),
        )
    except SerializationError:
        raise
    except Exception as e:
        raise ValueError(f"Error converting item to Receipt: {e}") from e
