"""
Constants for config guardrails.

Centralizes the patterns and diagnostic codes used when linting form
configurations.
"""

import re

# Valid field name pattern (alphanumeric + underscore)
VALID_FIELD_NAME = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")

MAX_FIELD_NAME_LENGTH = 100

# Diagnostic codes
INVALID_FIELD_NAME = "invalid_field_name"
DUPLICATE_NAME = "duplicate_name"
UNKNOWN_FIELD_TYPE = "unknown_field_type"
INCOMPATIBLE_RULE = "incompatible_rule"
MALFORMED_RULE_VALUE = "malformed_rule_value"
MISSING_OPTIONS = "missing_options"
REDUNDANT_OPTIONAL = "redundant_optional"
