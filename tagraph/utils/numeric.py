"""Numeric utilities for consistent Decimal handling."""

import decimal
from decimal import Decimal, getcontext
from typing import Any, Dict, Optional

from configs import config_loader


def apply_numeric_config(config: Optional[Dict[str, Any]] = None) -> None:
    """
    Apply precision and rounding to the current Decimal context.

    Runs once at import. Call it again after
    ``config_loader.reload_config('numeric')`` to pick up new settings.

    Args:
        config: Numeric settings; defaults to the loaded ``numeric`` config
    """
    if config is None:
        config = config_loader.get_config('numeric')
    getcontext().prec = config.get('precision', 28)
    getcontext().rounding = getattr(decimal, config.get('rounding', 'ROUND_HALF_EVEN'))


# Set precision for financial calculations
apply_numeric_config()

ZERO = Decimal(0)
ONE = Decimal(1)


def D(x) -> Decimal:
    """
    Robust Decimal conversion for ints/floats/strings/Decimals.
    
    Single source of truth for numeric conversions.
    Avoids binary floating-point artifacts by converting floats to strings first.
    
    Args:
        x: Value to convert (int, float, str, or Decimal)
    
    Returns:
        Decimal: Converted value
    
    Raises:
        TypeError: If type is not supported
    """
    if isinstance(x, Decimal):
        return x
    if isinstance(x, bool):
        raise TypeError(f"Unsupported numeric type: {type(x)}")
    if isinstance(x, int):
        return Decimal(x)
    if isinstance(x, str):
        return Decimal(x)
    if isinstance(x, float):
        # Convert float to string first to avoid binary FP artifacts
        return Decimal(str(x))
    raise TypeError(f"Unsupported numeric type: {type(x)}")


def num_min(a: Decimal, b: Decimal) -> Decimal:
    """Smaller of two values; ``a`` on ties."""
    return b if b < a else a


def num_max(a: Decimal, b: Decimal) -> Decimal:
    """Greater of two values; ``a`` on ties."""
    return b if b > a else a


def num_sqrt(x: Decimal) -> Decimal:
    """Square root in the current Decimal context."""
    return x.sqrt()
