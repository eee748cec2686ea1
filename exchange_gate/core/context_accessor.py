"""Typed get/set helpers over a loosely-typed context mapping."""

from typing import Any, MutableMapping, Optional, Type, TypeVar, cast

from exchange_gate.exceptions import ContextTypeError

T = TypeVar("T")


def get_value(
    mapping: MutableMapping[str, Any], key: str, expected_type: Type[T], default: Optional[T] = None
) -> Optional[T]:
    """Get a value from the mapping, checking that it has the expected type.

    An absent key (or a key explicitly holding None) yields `default`. A present
    value of the wrong type is a programming error and is never treated as absent.

    Args:
        mapping: The context mapping to read from.
        key: The key to look up, e.g. "owin.ResponseStatusCode".
        expected_type: The type (or abstract base class) the value must be an instance of.
        default: Returned when the key is absent.

    Returns:
        The stored value, or `default`.

    Raises:
        ContextTypeError: If the stored value is not an instance of `expected_type`.
    """
    value = mapping.get(key)
    if value is None:
        return default
    # bool is a subclass of int, but a flag is never a valid number here.
    if not isinstance(value, expected_type) or (isinstance(value, bool) and expected_type is not bool):
        raise ContextTypeError(
            f"Context entry '{key}' is {type(value).__name__}, expected {expected_type.__name__}",
            key=key,
        )
    return cast(T, value)


def set_value(mapping: MutableMapping[str, Any], key: str, value: Any) -> None:
    """Store `value` at `key`, replacing any prior entry."""
    mapping[key] = value
