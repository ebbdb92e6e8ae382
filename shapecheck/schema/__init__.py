"""Pattern document schema and validation.

The JSON Schema only describes the document structure; the token grammar and
type names are enforced by the pattern compiler.
"""

from .pattern_schema import (
    ERROR,
    WARNING,
    SchemaIssue,
    load_meta_schema,
    validate_pattern_document,
)
