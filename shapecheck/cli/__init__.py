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

"""Checking YAML documents against pattern files."""

import logging
from pathlib import Path
from typing import Any, List, Optional, Sequence

from ..capability import ObservableCapability, installed_capability
from ..exceptions import DocumentError, ValidationError
from ..loader import DocumentLoader, document_loader, lookup_source
from ..matcher import DEFAULT_ROOT_NAME, Matcher
from ..patterns import compile_pattern
from ..schema import WARNING, validate_pattern_document
from .report import CheckResult

__all__ = ['check_files', 'lint_files', 'CheckResult']

logger = logging.getLogger(__name__)


def check_files(
    file_paths: Sequence[Path],
    pattern: Any,
    name: str = DEFAULT_ROOT_NAME,
    capability: Optional[ObservableCapability] = None,
    loader: Optional[DocumentLoader] = None,
) -> List[CheckResult]:
    """Check every YAML file against one pattern.

    Each file reports at most one error: the first violation found.

    Raises:
        PatternError: If the pattern itself is malformed.
    """
    loader = loader or document_loader
    matcher = Matcher(capability if capability is not None else installed_capability())
    compiled = compile_pattern(pattern, name)

    results = []
    for file_path in file_paths:
        result = CheckResult(file_path)
        results.append(result)

        try:
            data, source_map = loader.load_with_source(file_path)
        except DocumentError as exc:
            result.add_error(str(exc))
            continue

        try:
            matcher.match(data, compiled, name)
        except ValidationError as exc:
            loc = lookup_source(source_map, exc.yaml_path)
            result.add_error(str(exc), line=loc.line, column=loc.column, yaml_path=exc.yaml_path)
        else:
            logger.debug(f"{file_path} matches the pattern")

    return results


def lint_files(file_paths: Sequence[Path], loader: Optional[DocumentLoader] = None) -> List[CheckResult]:
    """Validate pattern files, reporting every structural issue found.

    Keys the matcher would ignore are reported as warnings.
    """
    loader = loader or document_loader

    results = []
    for file_path in file_paths:
        result = CheckResult(file_path)
        results.append(result)

        try:
            document, source_map = loader.load_with_source(file_path)
        except DocumentError as exc:
            result.add_error(str(exc))
            continue

        for issue in validate_pattern_document(document):
            loc = lookup_source(source_map, issue.yaml_path)
            report = result.add_warning if issue.severity == WARNING else result.add_error
            report(issue.message, line=loc.line, column=loc.column, yaml_path=issue.yaml_path)

    return results
