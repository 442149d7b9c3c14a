import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import List, Optional, Sequence, Union

from sundae_dynamo.constants import (
    END_DATE_PLACEHOLDER,
    PURCHASE_DATE_ATTRIBUTE,
    SALES_TOTAL_ATTRIBUTE,
    START_DATE_PLACEHOLDER,
)
from sundae_dynamo.data.base_operations import (
    DynamoDBBaseOperations,
    ScanOperationsMixin,
    SingleEntityCRUDMixin,
    handle_dynamodb_errors,
)
from sundae_dynamo.data.shared_exceptions import (
    EntityNotFoundError,
    EntityValidationError,
)
from sundae_dynamo.entities.receipt import (
    Receipt,
    item_to_receipt,
    item_to_sales_total,
)
from sundae_dynamo.entities.receipt_page import ReceiptPage, ReceiptPageKey
from sundae_dynamo.entities.sundae import Sundae
from sundae_dynamo.entities.util import assert_aware_datetime
from sundae_dynamo.utils.date_converter import format_purchase_date
from sundae_dynamo.utils.expressions import Attr, Bind, render_condition

logger = logging.getLogger(__name__)


class _Receipt(
    DynamoDBBaseOperations,
    SingleEntityCRUDMixin,
    ScanOperationsMixin,
):
    """Provides access to sundae receipts in the datastore."""

    @handle_dynamodb_errors("add_receipt")
    def add_receipt(self, receipt: Receipt) -> None:
        """Adds a receipt to the database

        The put is unconditional: an existing receipt with the same
        customer_id and purchase_date is replaced.

        Args:
            receipt (Receipt): The receipt to add to the database

        Raises:
            EntityValidationError: When receipt is not a Receipt.
            SerializationError: When the sundaes cannot be encoded.
        """
        self._validate_entity(receipt, Receipt, "receipt")
        self._put_entity(receipt)

    def create_customer_receipt(
        self, customer_id: str, sundaes: Sequence[Sundae]
    ) -> Receipt:
        """Generates and persists a customer receipt.

        The purchase date is the current UTC time and the sales total is the
        exact decimal sum of the sundae prices, so an order with no sundaes
        totals zero.

        Args:
            customer_id (str): The id of the ordering customer.
            sundaes (Sequence[Sundae]): The sundaes ordered by the customer.

        Returns:
            Receipt: The receipt as stored in the database.

        Raises:
            EntityValidationError: When customer_id is empty or sundaes is
                not a list of Sundae objects.
            SerializationError: When the sundaes cannot be encoded.
        """
        if not isinstance(customer_id, str) or not customer_id.strip():
            raise EntityValidationError("customer_id cannot be empty")
        self._validate_entity_list(sundaes, Sundae, "sundaes")

        sales_total = sum((sundae.price for sundae in sundaes), Decimal("0"))
        receipt = Receipt(
            customer_id=customer_id,
            purchase_date=datetime.now(timezone.utc),
            sales_total=sales_total,
            sundaes=list(sundaes),
        )
        self.add_receipt(receipt)
        logger.info(
            "Created receipt for customer %s at %s totaling %s",
            receipt.customer_id,
            format_purchase_date(receipt.purchase_date),
            receipt.sales_total,
        )
        return receipt

    @handle_dynamodb_errors("get_receipt")
    def get_receipt(self, customer_id: str, purchase_date: datetime) -> Receipt:
        """
        Retrieves a receipt from the database.

        Args:
            customer_id (str): The customer the receipt belongs to.
            purchase_date (datetime): The receipt's purchase date.

        Returns:
            Receipt: The receipt object, with its sundaes decoded.

        Raises:
            EntityValidationError: If input parameters are invalid.
            EntityNotFoundError: If no receipt has that key.
            SerializationError: If the stored sundaes cannot be decoded.
        """
        try:
            key = ReceiptPageKey(customer_id, purchase_date)
        except ValueError as e:
            raise EntityValidationError(str(e)) from e

        item = self._get_item(key.to_exclusive_start_key())
        if item is None:
            raise EntityNotFoundError(
                f"receipt with customer_id={customer_id} and "
                f"purchase_date={format_purchase_date(purchase_date)} "
                "does not exist."
            )
        return item_to_receipt(item)

    @handle_dynamodb_errors("get_sales_between_dates")
    def get_sales_between_dates(
        self, from_date: datetime, to_date: datetime
    ) -> Decimal:
        """Calculates the total sales between two dates, both inclusive.

        Scans the whole table with a server-side filter on purchaseDate and
        follows every continuation key until the scan completes. Only the
        stored salesTotal attribute is fetched, so sundae lists are never
        decoded. This is the most expensive call in the client; frequent
        callers should keep pre-aggregated totals instead.

        Args:
            from_date (datetime): Start of the range (inclusive).
            to_date (datetime): End of the range (inclusive).

        Returns:
            Decimal: The summed sales; zero when nothing matches, including
                when from_date is after to_date.

        Raises:
            EntityValidationError: When either date is not timezone-aware.
        """
        try:
            assert_aware_datetime("from_date", from_date)
            assert_aware_datetime("to_date", to_date)
        except ValueError as e:
            raise EntityValidationError(str(e)) from e

        condition = Attr(PURCHASE_DATE_ATTRIBUTE).between(
            Bind(START_DATE_PLACEHOLDER, format_purchase_date(from_date)),
            Bind(END_DATE_PLACEHOLDER, format_purchase_date(to_date)),
        )
        rendered = render_condition(condition)
        scan_params = {
            **rendered.as_filter(),
            "ProjectionExpression": f"#{SALES_TOTAL_ATTRIBUTE}",
        }
        scan_params["ExpressionAttributeNames"] = {
            **rendered.names,
            f"#{SALES_TOTAL_ATTRIBUTE}": SALES_TOTAL_ATTRIBUTE,
        }

        total = Decimal("0")
        matched = 0
        for page in self._iter_scan_pages(scan_params):
            for item in page.items:
                total += item_to_sales_total(item)
            matched += len(page.items)

        logger.info(
            "Summed %d receipts between %s and %s: %s",
            matched,
            format_purchase_date(from_date),
            format_purchase_date(to_date),
            total,
        )
        return total

    @handle_dynamodb_errors("get_receipts_page")
    def get_receipts_page(
        self,
        limit: int,
        cursor: Optional[Union[ReceiptPageKey, Receipt]] = None,
    ) -> ReceiptPage:
        """Retrieves one page of receipts with a cursor for the next page.

        Exactly one scan request is made. The page holds at most ``limit``
        receipts; a short page is returned as is, without a follow-up
        request. Scan order is DynamoDB's native order, not chronological.

        Args:
            limit (int): Maximum number of receipts to return.
            cursor (ReceiptPageKey | Receipt, optional): Resume the scan
                strictly after this key. None starts from the beginning.

        Returns:
            ReceiptPage: The receipts and the cursor of the following page,
                which is None once the table is exhausted.

        Raises:
            EntityValidationError: When limit is not a positive integer or
                cursor has the wrong type.
            SerializationError: When a stored sundae list cannot be decoded.
        """
        self._validate_limit(limit)
        if isinstance(cursor, Receipt):
            cursor = ReceiptPageKey.from_receipt(cursor)
        elif cursor is not None and not isinstance(cursor, ReceiptPageKey):
            raise EntityValidationError(
                "cursor must be a ReceiptPageKey or a Receipt"
            )

        page = next(
            self._iter_scan_pages(
                page_size=limit,
                exclusive_start_key=(
                    cursor.to_exclusive_start_key() if cursor else None
                ),
            )
        )
        return ReceiptPage(
            receipts=[item_to_receipt(item) for item in page.items],
            next_key=ReceiptPageKey.from_last_evaluated_key(
                page.last_evaluated_key
            ),
        )

    def get_receipts_paginated(
        self,
        limit: int,
        exclusive_start_key: Optional[Union[Receipt, ReceiptPageKey]] = None,
    ) -> List[Receipt]:
        """Retrieves a subset of the receipts stored in the database.

        Up to ``limit`` receipts are returned from a single scan request;
        fewer are returned only when that request reached the end of the
        table. To continue, pass the last returned receipt as
        ``exclusive_start_key``; it is excluded from the next page.

        Args:
            limit (int): The maximum number of receipts to return.
            exclusive_start_key (Receipt | ReceiptPageKey, optional): The
                receipt to resume after.

        Returns:
            list[Receipt]: The receipts of this page.
        """
        return self.get_receipts_page(limit, exclusive_start_key).receipts
