"""Common utilities shared by the schemata packages.

- **Exceptions**: unified exception hierarchy with context support
- **Data**: the MISSING sentinel, out-of-order array equality and dotted-key
  resolve/set/merge helpers
- **Format**: ordinals and human-readable field names for messages
"""

from schemata_common.data import (
    MISSING,
    array_equals,
    is_missing,
    merge_object_deep,
    resolve_object_deep,
    set_object_deep,
    strict_equals,
)
from schemata_common.exceptions import (
    ConfigurationError,
    HttpError,
    NotFoundError,
    SchemataError,
    UnsafeInputError,
    ValidationError,
)
from schemata_common.format import (
    human_readable_field_name,
    index_to_ordinal,
    ordinal_suffix,
    to_ordinal,
)

__version__ = "1.0.0"

__all__ = [
    "__version__",
    # Exceptions
    "SchemataError",
    "ValidationError",
    "ConfigurationError",
    "NotFoundError",
    "HttpError",
    "UnsafeInputError",
    # Data
    "MISSING",
    "is_missing",
    "array_equals",
    "strict_equals",
    "resolve_object_deep",
    "set_object_deep",
    "merge_object_deep",
    # Format
    "ordinal_suffix",
    "to_ordinal",
    "index_to_ordinal",
    "human_readable_field_name",
]
