"""Tables describing the structured-output dialect of JSON Schema.

Only the types and formats listed here survive compilation. The veto tables
name keywords whose presence makes a node unrepresentable, whatever its type.
"""

SUPPORTED_TYPES = (
    "string",
    "number",
    "integer",
    "boolean",
    "array",
    "object",
    "null",
)

SUPPORTED_FORMATS = (
    "date-time",
    "time",
    "date",
    "duration",
    "email",
    "hostname",
    "ipv4",
    "ipv6",
    "uuid",
)

OBJECT_TYPE = "object"
ARRAY_TYPE = "array"
NULL_TYPE = "null"

# Vetoed when present at all (field name -> JSON keyword). `const` counts even
# when its value is null.
PRESENCE_VETOES = {
    "const": "const",
    "contains": "contains",
    "pattern_properties": "patternProperties",
    "additional_items": "additionalItems",
    "all_of": "allOf",
    "one_of": "oneOf",
    "prefix_items": "prefixItems",
}

# Vetoed only when set to true.
FLAG_VETOES = {
    "unique_items": "uniqueItems",
    "deprecated": "deprecated",
    "read_only": "readOnly",
}

# Wire form of the schema that matches nothing; objects get it as
# additionalProperties so unknown keys are rejected.
CANONICAL_ADDITIONAL_PROPERTIES = {"not": {}}
