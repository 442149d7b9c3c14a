"""DynamoDB data access for sundae purchase receipts."""

__version__ = "0.1.0"

from sundae_dynamo.entities import *  # noqa: F401, F403
from sundae_dynamo.data.dynamo_client import DynamoClient
from sundae_dynamo.data.shared_exceptions import (
    EntityError,
    EntityNotFoundError,
    EntityValidationError,
    SerializationError,
    SundaeDynamoError,
)
from sundae_dynamo.utils.sundae_converter import decode_sundaes, encode_sundaes

# Build public API dynamically from submodules
from sundae_dynamo import entities

__all__ = [
    # Version
    "__version__",
    # DynamoDB client
    "DynamoClient",
    # Codec
    "decode_sundaes",
    "encode_sundaes",
    # Exceptions
    "EntityError",
    "EntityNotFoundError",
    "EntityValidationError",
    "SerializationError",
    "SundaeDynamoError",
]
__all__.extend(entities.__all__)
