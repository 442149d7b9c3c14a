from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from mypy_boto3_dynamodb import DynamoDBClient
    from mypy_boto3_dynamodb.type_defs import (
        GetItemInputTypeDef,
        PutItemInputTypeDef,
        ScanInputTypeDef,
    )
else:
    # Runtime fallback
    DynamoDBClient = object
    GetItemInputTypeDef = dict
    PutItemInputTypeDef = dict
    ScanInputTypeDef = dict


class DynamoClientProtocol(Protocol):
    """Protocol defining attributes shared by DynamoDB mixin classes."""

    table_name: str
    _client: DynamoDBClient
