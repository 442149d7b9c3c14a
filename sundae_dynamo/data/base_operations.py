"""
Base classes and mixins for DynamoDB operations.

This module provides the functionality shared by the data access classes in
the sundae_dynamo package: logging of failed store calls, parameter
validation, single item reads and writes, and the scan page iterator that
both receipt queries are built on.
"""

import logging
from dataclasses import dataclass, field
from functools import wraps
from typing import Any, Dict, Iterator, List, Optional, Type

from botocore.exceptions import ClientError

from sundae_dynamo.data._base import (
    DynamoClientProtocol,
    GetItemInputTypeDef,
    PutItemInputTypeDef,
    ScanInputTypeDef,
)
from sundae_dynamo.data.shared_exceptions import EntityValidationError

logger = logging.getLogger(__name__)


def handle_dynamodb_errors(operation_name: str):
    """
    Decorator that logs DynamoDB failures with the operation they came from.

    The ClientError is re-raised unchanged; retry, backoff and throttling
    policy belong to the boto3 client configuration, not this layer.

    Args:
        operation_name: Name of the operation for error context
    """

    def decorator(func):
        @wraps(func)
        def wrapper(self, *args, **kwargs):
            try:
                return func(self, *args, **kwargs)
            except ClientError as e:
                error = e.response.get("Error", {})
                logger.warning(
                    "%s failed on table %s: %s %s",
                    operation_name,
                    getattr(self, "table_name", "<unknown>"),
                    error.get("Code", "Unknown"),
                    error.get("Message", ""),
                )
                raise

        return wrapper

    return decorator


class DynamoDBBaseOperations(DynamoClientProtocol):
    """
    Base class for all DynamoDB operations with common validation.
    """

    def _validate_entity(
        self, entity: Any, entity_class: Type, param_name: str
    ) -> None:
        """
        Common entity validation logic with consistent error messages.

        Raises:
            EntityValidationError: If validation fails
        """
        if entity is None:
            raise EntityValidationError(f"{param_name} cannot be None")

        if not isinstance(entity, entity_class):
            raise EntityValidationError(
                f"{param_name} must be an instance of the "
                f"{entity_class.__name__} class."
            )

    def _validate_entity_list(
        self, entities: Any, entity_class: Type, param_name: str
    ) -> None:
        """
        Validate a list (or tuple) of entities; an empty list is valid.

        Raises:
            EntityValidationError: If validation fails
        """
        if entities is None:
            raise EntityValidationError(f"{param_name} cannot be None")

        if not isinstance(entities, (list, tuple)):
            raise EntityValidationError(
                f"{param_name} must be a list of {entity_class.__name__} "
                "instances."
            )

        if not all(isinstance(entity, entity_class) for entity in entities):
            raise EntityValidationError(
                f"All {param_name} must be instances of the "
                f"{entity_class.__name__} class."
            )

    def _validate_limit(self, limit: Any) -> None:
        """
        Validate a page size.

        Raises:
            EntityValidationError: If limit is not a positive integer
        """
        if isinstance(limit, bool) or not isinstance(limit, int):
            raise EntityValidationError("limit must be an integer")
        if limit <= 0:
            raise EntityValidationError("limit must be greater than 0")


class SingleEntityCRUDMixin:
    """
    Mixin providing reads and writes of single items.

    Classes using this mixin must inherit from DynamoClientProtocol to provide:
    - _client: DynamoDB client
    - table_name: DynamoDB table name
    """

    # Type hints for required attributes from DynamoClientProtocol
    _client: Any
    table_name: str

    def _put_entity(self, entity: Any) -> None:
        """
        Unconditional put (upsert) keyed by the entity's primary key.

        Args:
            entity: Entity to write (must have to_item() method)
        """
        request: PutItemInputTypeDef = {
            "TableName": self.table_name,
            "Item": entity.to_item(),
        }
        self._client.put_item(**request)

    def _get_item(self, key: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Fetch a single item by primary key.

        Returns:
            The raw item, or None when no item has that key.
        """
        request: GetItemInputTypeDef = {
            "TableName": self.table_name,
            "Key": key,
        }
        response = self._client.get_item(**request)
        return response.get("Item")


@dataclass
class ScanPage:
    """
    The items of one scan response.

    Attributes:
        items: Raw DynamoDB items, in the store's scan order.
        last_evaluated_key: Present when the store may hold more items past
            this page; None once the scan is complete.
    """

    items: List[Dict[str, Any]] = field(default_factory=list)
    last_evaluated_key: Optional[Dict[str, Any]] = None


class ScanOperationsMixin:
    """
    Mixin providing paged table scans.

    ``_scan_page`` issues exactly one scan request. ``_iter_scan_pages``
    yields pages lazily, issuing each request only after the previous page
    has been consumed and feeding its ``LastEvaluatedKey`` into the next
    request, until DynamoDB stops returning one.

    Classes using this mixin must inherit from DynamoClientProtocol to provide:
    - _client: DynamoDB client
    - table_name: DynamoDB table name
    """

    # Type hints for required attributes from DynamoClientProtocol
    _client: Any
    table_name: str

    def _scan_page(
        self,
        scan_params: Optional[Dict[str, Any]] = None,
        limit: Optional[int] = None,
        exclusive_start_key: Optional[Dict[str, Any]] = None,
    ) -> ScanPage:
        """
        Issue a single scan request.

        Args:
            scan_params: Extra scan arguments such as FilterExpression,
                ExpressionAttributeNames/Values or ProjectionExpression.
            limit: Upper bound on the items DynamoDB evaluates for the page.
            exclusive_start_key: Primary key to resume strictly after.
        """
        request: ScanInputTypeDef = {
            "TableName": self.table_name,
            **(scan_params or {}),
        }
        if limit is not None:
            request["Limit"] = limit
        if exclusive_start_key is not None:
            request["ExclusiveStartKey"] = exclusive_start_key

        response = self._client.scan(**request)
        return ScanPage(
            items=response.get("Items", []),
            last_evaluated_key=response.get("LastEvaluatedKey"),
        )

    def _iter_scan_pages(
        self,
        scan_params: Optional[Dict[str, Any]] = None,
        page_size: Optional[int] = None,
        exclusive_start_key: Optional[Dict[str, Any]] = None,
    ) -> Iterator[ScanPage]:
        """
        Yield scan pages until the store signals the scan is complete.

        The returned generator is forward-only and cannot be restarted; a
        failed request propagates out of the generator and ends it.
        """
        start_key = exclusive_start_key
        page_number = 0
        while True:
            page = self._scan_page(
                scan_params, limit=page_size, exclusive_start_key=start_key
            )
            page_number += 1
            logger.debug(
                "Scanned page %d of %s: %d items, more=%s",
                page_number,
                self.table_name,
                len(page.items),
                page.last_evaluated_key is not None,
            )
            yield page
            if page.last_evaluated_key is None:
                return
            start_key = page.last_evaluated_key
