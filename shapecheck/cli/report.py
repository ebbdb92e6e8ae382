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

"""Result collection and output formats for the command line tool."""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, TextIO

FORMATS = ('human', 'json', 'github-actions')


class CheckResult:
    """Container for the errors and warnings reported for a single file."""

    def __init__(self, file_path: Path):
        self.file_path = file_path
        self.errors: List[Dict[str, Any]] = []
        self.warnings: List[Dict[str, Any]] = []

    @staticmethod
    def _entry(
        message: str,
        line: Optional[int],
        column: Optional[int],
        yaml_path: Optional[str],
    ) -> Dict[str, Any]:
        entry: Dict[str, Any] = {'message': message}
        if line is not None:
            entry['line'] = line
        if column is not None:
            entry['column'] = column
        if yaml_path is not None:
            entry['yaml_path'] = yaml_path
        return entry

    def add_error(
        self,
        message: str,
        line: Optional[int] = None,
        column: Optional[int] = None,
        yaml_path: Optional[str] = None,
    ) -> None:
        self.errors.append(self._entry(message, line, column, yaml_path))

    def add_warning(
        self,
        message: str,
        line: Optional[int] = None,
        column: Optional[int] = None,
        yaml_path: Optional[str] = None,
    ) -> None:
        self.warnings.append(self._entry(message, line, column, yaml_path))

    @property
    def ok(self) -> bool:
        return not self.errors


def write_results(results: Sequence[CheckResult], output_format: str, stream: TextIO) -> None:
    """Print results in one of FORMATS."""
    if output_format == 'json':
        output = {
            'files': len(results),
            'errors': sum(len(r.errors) for r in results),
            'warnings': sum(len(r.warnings) for r in results),
            'results': [
                {
                    'file': str(r.file_path),
                    'errors': r.errors,
                    'warnings': r.warnings,
                }
                for r in results
            ],
        }
        print(json.dumps(output, indent=2), file=stream)
    elif output_format == 'github-actions':
        for result in results:
            for error in result.errors:
                print(f"::error file={result.file_path},line={error.get('line', 1)}::{error['message']}", file=stream)
            for warning in result.warnings:
                print(f"::warning file={result.file_path},line={warning.get('line', 1)}::{warning['message']}", file=stream)
    else:
        for result in results:
            if not (result.errors or result.warnings):
                continue
            print(f"\n{result.file_path}:", file=stream)
            for error in result.errors:
                line_info = f":{error['line']}" if 'line' in error else ""
                print(f"  ERROR{line_info}: {error['message']}", file=stream)
            for warning in result.warnings:
                line_info = f":{warning['line']}" if 'line' in warning else ""
                print(f"  WARNING{line_info}: {warning['message']}", file=stream)
