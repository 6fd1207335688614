"""Structural conversion of arbitrary values into maskable payloads.

The masking engine only understands mappings, sequences and scalars.
Anything else (dataclasses, pydantic models, plain objects) is first
turned into plain JSON-compatible data with pydantic-core. The conversion
is lossy: private attributes are dropped, and a value that cannot be
serialised at all becomes an empty dict instead of an error.
"""

from typing import Any, Dict, List, Union

from pydantic_core import PydanticSerializationError, to_jsonable_python

PRIMITIVE_TYPES = (str, bytes, bool, int, float, complex)


def is_primitive(value: Any) -> bool:
    """Return True for values that are attached to a record unchanged."""
    return value is None or isinstance(value, PRIMITIVE_TYPES)


def _public_attributes(value: Any) -> Dict[str, Any]:
    try:
        attributes = vars(value)
    except TypeError:
        raise TypeError(f"{type(value).__name__} is not serializable") from None
    return {
        key: attr for key, attr in attributes.items() if not key.startswith("_")
    }


def _to_jsonable(value: Any) -> Any:
    try:
        return to_jsonable_python(value, fallback=_public_attributes)
    except (PydanticSerializationError, ValueError, TypeError):
        return {}


def to_value(value: Any) -> Any:
    """Convert ``value`` for attaching to a record.

    Like ``to_fields``, but values that serialise to a JSON scalar (datetime,
    enum, Decimal, UUID) are kept as that scalar instead of being dropped.
    """
    return _to_jsonable(value)


def to_fields(value: Any) -> Union[Dict[str, Any], List[Any]]:
    """Convert ``value`` to plain keyed data.

    Args:
        value: Any object, typically a dataclass, pydantic model, mapping or
            an object carrying public attributes.

    Returns:
        A dict for keyed values, a list for sequences, and an empty dict for
        anything that does not serialise to one of those.

    Example:
        >>> @dataclass
        ... class User:
        ...     email: str
        ...     password: str
        >>> to_fields(User("a@b.c", "s3cret"))
        {'email': 'a@b.c', 'password': 's3cret'}
    """
    data = _to_jsonable(value)
    if isinstance(data, (dict, list)):
        return data
    return {}
