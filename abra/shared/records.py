"""Lenient decoding of stored records"""

import logging
from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .exceptions import StorageError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def decode_record(model: type[ModelT], raw: Any, placeholders: dict[str, Any]) -> ModelT:
    """
    Decode one stored record.

    A record that fails validation is kept unvalidated, with placeholders for
    missing required fields, so it is written back unchanged instead of being
    dropped. Only a record that is not an object is unreadable.
    """
    if not isinstance(raw, dict):
        raise StorageError(f"Malformed {model.__name__} record: expected an object")
    try:
        return model.model_validate(raw)
    except PydanticValidationError as e:
        logger.warning(
            f"⚠️ Keeping malformed {model.__name__} {raw.get('id')!r} as stored: "
            f"{e.error_count()} invalid field(s)"
        )
        return model.model_construct(**{**placeholders, **raw})
