"""Declarative validation schemas.

Schemas are plain literals. A mapping with a ``type`` is a field, any other
mapping is an object schema, a single-element list is an array schema and
``{"type": "oneOf", "possible_schemas": [...]}`` is a union:

    ```python
    from schemata_validator import CommonRegExp, create_validator

    validator = create_validator({
        "email": {"type": "string", "required": True, "matches": CommonRegExp.email},
        "password": {"type": "string", "required": True, "validator": check_password},
        "confirm_password": {"type": "string", "required": True, "$eq": "password"},
    })
    result, parsed = validator.validate(payload)
    ```
"""

from schemata_common import MISSING

from .attributes import (
    AllPatterns,
    AnyPatterns,
    CallableHook,
    Eval,
    FieldHook,
    FieldRef,
    Literal,
    parse_matches,
    parse_smart_attribute,
    resolve,
)
from .context import ValidationContext, ValidatorOptions
from .exceptions import RequestValidationError, SchemaConfigurationError
from .executor import Validator, create_validator
from .regexp import COMMON_REGEXP_MESSAGES, PRESET_NAMES, CommonRegExp, Matcher, preset_message
from .request import validate_request, validate_request_async
from .result import (
    EMPTY_ARRAY_MESSAGE,
    INVALID_ENTRIES_MESSAGE,
    INVALID_VALUE_MESSAGE,
    NO_MATCHING_SCHEMA_MESSAGE,
    ValidationResult,
)
from .schema import (
    ArrayNode,
    FieldNode,
    FieldType,
    NodeKind,
    ObjectNode,
    OneOfNode,
    SchemaNode,
    classify,
    compile_schema,
)

__version__ = "1.0.0"

__all__ = [
    "__version__",
    "MISSING",
    # Executor
    "create_validator",
    "Validator",
    "ValidatorOptions",
    "ValidationContext",
    "ValidationResult",
    "INVALID_VALUE_MESSAGE",
    "EMPTY_ARRAY_MESSAGE",
    "INVALID_ENTRIES_MESSAGE",
    "NO_MATCHING_SCHEMA_MESSAGE",
    # Schema model
    "NodeKind",
    "FieldType",
    "SchemaNode",
    "FieldNode",
    "ObjectNode",
    "ArrayNode",
    "OneOfNode",
    "classify",
    "compile_schema",
    # Attributes
    "Literal",
    "FieldRef",
    "Eval",
    "AllPatterns",
    "AnyPatterns",
    "FieldHook",
    "CallableHook",
    "parse_smart_attribute",
    "parse_matches",
    "resolve",
    # Regular expressions
    "CommonRegExp",
    "Matcher",
    "COMMON_REGEXP_MESSAGES",
    "PRESET_NAMES",
    "preset_message",
    # Requests
    "validate_request",
    "validate_request_async",
    # Exceptions
    "SchemaConfigurationError",
    "RequestValidationError",
]
