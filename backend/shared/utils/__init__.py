"""
Utilities module: Exceptions, value normalization.
"""

from shared.utils.exceptions import (
    AppException,
    ValidationError,
    BackendAPIError,
    InternalError,
    ConfigurationError,
)
from shared.utils.validators import (
    to_string_list,
    canonical_list,
    strip_unwanted_values,
)

__all__ = [
    # exceptions
    "AppException",
    "ValidationError",
    "BackendAPIError",
    "InternalError",
    "ConfigurationError",
    # validators
    "to_string_list",
    "canonical_list",
    "strip_unwanted_values",
]
