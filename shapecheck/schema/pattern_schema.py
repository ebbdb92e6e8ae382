# Copyright 2026 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Structural validation of pattern documents against the bundled JSON Schema."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Optional

import jsonschema

from ..exceptions import PatternError
from ..patterns import PatternNotice, compile_pattern


JsonPointer = str

ERROR = "error"
WARNING = "warning"

SCHEMA_FILE = Path(__file__).parent / "pattern.schema.json"

# Loaded once; the schema file ships with the package
_META_SCHEMA: Optional[dict] = None


@dataclass(frozen=True)
class SchemaIssue:
    message: str
    yaml_path: Optional[JsonPointer] = None
    severity: str = ERROR


def _jp_escape(token: str) -> str:
    return token.replace("~", "~0").replace("/", "~1")


def load_meta_schema() -> dict:
    """Load the pattern document JSON Schema.

    Raises:
        FileNotFoundError: If the schema file is missing from the installation
        json.JSONDecodeError: If the schema file is invalid JSON
    """
    global _META_SCHEMA
    if _META_SCHEMA is None:
        with open(SCHEMA_FILE, "r", encoding="utf-8") as f:
            _META_SCHEMA = json.load(f)
    return _META_SCHEMA


def validate_pattern_document(document: Any, name: str = "configObject") -> List[SchemaIssue]:
    """Validate a raw pattern document and return every issue found.

    Structural issues come from the JSON Schema; a document that passes it is
    also compiled so grammar errors the schema cannot express are reported,
    along with warnings for keys the matcher would ignore.
    """
    validator = jsonschema.Draft7Validator(load_meta_schema())
    issues: List[SchemaIssue] = []

    for error in sorted(validator.iter_errors(document), key=lambda e: [str(p) for p in e.absolute_path]):
        path = "".join(f"/{_jp_escape(str(p))}" for p in error.absolute_path)
        issues.append(SchemaIssue(message=error.message, yaml_path=path))

    if issues:
        return issues

    notices: List[PatternNotice] = []
    try:
        compile_pattern(document, name, notices)
    except PatternError as exc:
        issues.append(SchemaIssue(message=str(exc), yaml_path=""))
        return issues

    for notice in notices:
        path = "".join(f"/{_jp_escape(str(p))}" for p in notice.pointer)
        issues.append(SchemaIssue(message=notice.message, yaml_path=path, severity=WARNING))
    return issues
