"""Custom exceptions for sundae_dynamo operations."""


class SundaeDynamoError(Exception):
    """Base exception for all sundae_dynamo errors."""


class SerializationError(SundaeDynamoError):
    """
    Raised when a list of sundaes cannot be encoded to, or decoded from, the
    string stored in the ``sundaes`` attribute.

    The underlying encoder or decoder error is chained as ``__cause__`` and
    its message is carried as this exception's message.
    """


# Entity specific exceptions
class EntityError(SundaeDynamoError):
    """Base exception for entity operations."""


class EntityNotFoundError(EntityError):
    """Raised when an entity is not found."""


class EntityValidationError(EntityError):
    """Raised when entity validation fails."""
