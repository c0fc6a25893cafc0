"""
Type mapping — Coerce raw Graph field values for the typed node accessors.
"""

from datetime import datetime
from typing import Any


def is_numeric(value: Any) -> bool:
    """True for ints, floats and numeric strings (booleans are not numeric)."""
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return True
    if isinstance(value, str):
        try:
            float(value)
        except ValueError:
            return False
        return True
    return False


def map_type(value: Any, type_name: Any, default: Any = None) -> Any:
    """Coerce value to type_name, returning default when it does not fit.

    Supported type names:
        "int"/"integer", "float"  numeric values only
        "str"/"string"            any truthy value
        "bool"                    truthiness
        "bool_or_null"            truthiness, None stays None
        "list", "dict"            the value when it already is one
        "datetime"                datetime instances only

    A class may be passed instead of a name, in which case value is returned
    only if it is an instance of that class. Unknown names return value as is.
    """
    if isinstance(type_name, type):
        return value if isinstance(value, type_name) else default

    if type_name in ("int", "integer"):
        return int(float(value)) if is_numeric(value) else default

    if type_name == "float":
        return float(value) if is_numeric(value) else default

    if type_name in ("str", "string"):
        return str(value) if value else default

    if type_name == "bool":
        return bool(value)

    if type_name == "bool_or_null":
        return bool(value) if value is not None else None

    if type_name == "list":
        return value if isinstance(value, (list, tuple)) else default

    if type_name == "dict":
        return value if isinstance(value, dict) else default

    if type_name == "datetime":
        return value if isinstance(value, datetime) else default

    return value
