"""
Validation decorators for cosgrad.

Provides reusable validation logic for parameter checking across modules.
"""

from __future__ import annotations

from collections.abc import Callable
from functools import wraps
from typing import Any, TypeAlias

# Python 3.12+ type alias for callables
F: TypeAlias = Callable[..., Any]


def _lookup(args: tuple, kwargs: dict, param_name: str, param_index: int) -> tuple[bool, Any]:
    """Find a parameter value among positional or keyword arguments."""
    if len(args) > param_index:
        return True, args[param_index]
    if param_name in kwargs:
        return True, kwargs[param_name]
    return False, None


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_range(
    min_val: float,
    max_val: float,
    param_name: str = "value",
    param_index: int = 1,
) -> Callable[[F], F]:
    """
    Decorator for validating numeric parameter ranges.

    Args:
        min_val: Minimum allowed value (inclusive)
        max_val: Maximum allowed value (inclusive)
        param_name: Name of parameter for error messages
        param_index: Position of parameter in function signature (default: 1 = first arg after self)

    Returns:
        Decorated function with range validation

    Example:
        >>> @validate_range(-1.0, 1.0, 'exposure')
        ... def with_exposure(self, exposure: float) -> Self:
        ...     return replace(self, exposure=exposure)
    """

    def decorator(func: F) -> F:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            found, value = _lookup(args, kwargs, param_name, param_index)
            if not found:
                # No value provided, let function handle it
                return func(*args, **kwargs)

            if not _is_number(value):
                raise TypeError(
                    f"{param_name} must be a number, got {type(value).__name__}. "
                    f"Provide a numeric value (int or float)."
                )

            if not min_val <= value <= max_val:
                suggestion = ""
                if "exposure" in param_name or "phase" in param_name:
                    suggestion = " Use 0.0 for no change."
                elif "contrast" in param_name or "frequency" in param_name:
                    suggestion = " Use 1.0 for no change, >1.0 to increase, <1.0 to decrease."

                raise ValueError(
                    f"{param_name}={value} is outside valid range [{min_val}, {max_val}].{suggestion}"
                )

            return func(*args, **kwargs)

        return wrapper  # type: ignore

    return decorator


def validate_positive(param_name: str = "value", param_index: int = 1) -> Callable[[F], F]:
    """
    Decorator for validating positive numeric parameters.

    Args:
        param_name: Name of parameter for error messages
        param_index: Position of parameter in function signature

    Returns:
        Decorated function with positive validation

    Example:
        >>> @validate_positive('maxsize')
        ... def __init__(self, maxsize: int = 50) -> None:
        ...     self.maxsize = maxsize
    """

    def decorator(func: F) -> F:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            found, value = _lookup(args, kwargs, param_name, param_index)
            if not found:
                return func(*args, **kwargs)

            if not _is_number(value):
                raise TypeError(
                    f"{param_name} must be a number, got {type(value).__name__}. "
                    f"Provide a numeric value (int or float)."
                )

            if value <= 0:
                raise ValueError(f"{param_name}={value} must be positive (> 0).")

            return func(*args, **kwargs)

        return wrapper  # type: ignore

    return decorator


def validate_index(
    count: int,
    param_name: str = "index",
    param_index: int = 1,
) -> Callable[[F], F]:
    """
    Decorator for validating integer indices into fixed-size structures.

    Args:
        count: Number of valid positions (valid indices are 0..count-1)
        param_name: Name of parameter for error messages
        param_index: Position of parameter in function signature

    Returns:
        Decorated function with index validation

    Example:
        >>> @validate_index(4, 'slot', param_index=1)
        ... def invert_global(slot: int, value: float, globals_) -> float:
        ...     ...
    """

    def decorator(func: F) -> F:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            found, value = _lookup(args, kwargs, param_name, param_index)
            if not found:
                return func(*args, **kwargs)

            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError(f"{param_name} must be an int, got {type(value).__name__}")

            if not 0 <= value < count:
                raise ValueError(
                    f"{param_name}={value} is out of range. Valid indices are 0..{count - 1}"
                )

            return func(*args, **kwargs)

        return wrapper  # type: ignore

    return decorator


def validate_type(
    expected_type: type | tuple[type, ...],
    param_name: str = "value",
    param_index: int = 1,
) -> Callable[[F], F]:
    """
    Decorator for validating parameter types.

    Args:
        expected_type: Expected type or tuple of types
        param_name: Name of parameter for error messages
        param_index: Position of parameter in function signature

    Returns:
        Decorated function with type validation
    """

    def decorator(func: F) -> F:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            found, value = _lookup(args, kwargs, param_name, param_index)
            if not found:
                return func(*args, **kwargs)

            # bool is an int subclass but never a meaningful count
            if isinstance(value, bool) or not isinstance(value, expected_type):
                if isinstance(expected_type, tuple):
                    type_names = ", ".join(t.__name__ for t in expected_type)
                    raise TypeError(
                        f"{param_name} must be one of ({type_names}), got {type(value).__name__}"
                    )
                else:
                    raise TypeError(
                        f"{param_name} must be {expected_type.__name__}, got {type(value).__name__}"
                    )

            return func(*args, **kwargs)

        return wrapper  # type: ignore

    return decorator
