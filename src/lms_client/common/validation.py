"""Method parameter validation.

Parameters are checked against pydantic schemas before a method performs
any side effect. The first failing parameter is reported by name.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from pydantic import TypeAdapter, ValidationError

from .errors import InvalidParameterError


def _adapter(schema: Any) -> TypeAdapter[Any]:
    if isinstance(schema, TypeAdapter):
        return schema
    return TypeAdapter(schema)


def validate_method_param_or_throw(
    class_name: str,
    method_name: str,
    param_name: str,
    schema: Any,
    value: Any,
) -> Any:
    """Validate a single method parameter.

    Args:
        class_name: Name of the class owning the method.
        method_name: Name of the method being called.
        param_name: Name of the parameter.
        schema: A pydantic TypeAdapter, or a type it understands.
        value: Raw value given by the caller.

    Returns:
        The normalized value.

    Raises:
        InvalidParameterError: If validation fails.
    """
    try:
        return _adapter(schema).validate_python(value)
    except ValidationError as e:
        raise InvalidParameterError(class_name, method_name, param_name, str(e)) from e


def validate_method_params_or_throw(
    class_name: str,
    method_name: str,
    param_names: Sequence[str],
    schemas: Sequence[Any],
    values: Sequence[Any],
) -> tuple[Any, ...]:
    """Validate several method parameters in order.

    Returns:
        Tuple of normalized values, in the same order as ``values``.

    Raises:
        InvalidParameterError: For the first parameter that fails.
    """
    if not len(param_names) == len(schemas) == len(values):
        raise ValueError("param_names, schemas and values must have the same length")
    return tuple(
        validate_method_param_or_throw(class_name, method_name, name, schema, value)
        for name, schema, value in zip(param_names, schemas, values, strict=True)
    )


__all__ = ["validate_method_param_or_throw", "validate_method_params_or_throw"]
