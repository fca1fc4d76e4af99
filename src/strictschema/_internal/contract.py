"""Contract constants for compiled schemas and structured-output envelopes."""

RESPONSE_FORMAT_TYPE = "json_schema"

# Structured-output schema names: letters, digits, underscores and dashes.
RESPONSE_FORMAT_NAME_PATTERN = r"^[a-zA-Z0-9_-]{1,64}$"

UNSUPPORTED_ROOT_MESSAGE = "schema cannot be used for structured-output generation"

COMPILED_SCHEMA_FILENAME = "compiled_schema.json"
RESPONSE_FORMAT_FILENAME = "response_format.json"
COMPILE_REPORT_FILENAME = "compile_report.json"
