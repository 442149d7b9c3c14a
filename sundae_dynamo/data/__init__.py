from .shared_exceptions import (
    EntityError,
    EntityNotFoundError,
    EntityValidationError,
    SerializationError,
    SundaeDynamoError,
)
