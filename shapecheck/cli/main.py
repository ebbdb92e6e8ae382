#!/usr/bin/env python3
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

"""CLI entry point: check YAML documents against a pattern, or lint pattern files."""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from ..config import checker_config
from ..exceptions import DocumentError, PatternError
from ..loader import document_loader
from . import check_files, lint_files
from .report import FORMATS, write_results

logger = logging.getLogger(__name__)

YAML_SUFFIXES = ('.yaml', '.yml')


def find_yaml_files(paths: List[str]) -> List[Path]:
    """Expand files and directories into the YAML files they contain."""
    yaml_files = []

    for path_str in paths:
        path = Path(path_str)

        if not path.exists():
            logger.warning(f"Path does not exist: {path}")
            continue

        if path.is_file():
            yaml_files.append(path)
        elif path.is_dir():
            for suffix in YAML_SUFFIXES:
                yaml_files.extend(path.rglob(f'*{suffix}'))
        else:
            logger.warning(f"Path is neither file nor directory: {path}")

    return sorted(set(yaml_files))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='shapecheck',
        description='Validate YAML documents against shapecheck patterns',
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')
    subparsers = parser.add_subparsers(dest='command', required=True)

    check = subparsers.add_parser('check', help='Check documents against a pattern file')
    check.add_argument('--pattern', required=True, help='YAML file holding the pattern')
    check.add_argument(
        '--name',
        default=checker_config.root_name,
        help=f'Root name used in error messages (default: {checker_config.root_name})',
    )
    check.add_argument('paths', nargs='+', help='Documents or directories to check')

    lint = subparsers.add_parser('lint', help='Lint pattern files')
    lint.add_argument('paths', nargs='+', help='Pattern files or directories to lint')

    for sub in (check, lint):
        sub.add_argument(
            '--format',
            choices=FORMATS,
            default='human',
            help='Output format (default: human)',
        )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Run the command line tool and return its exit status."""
    args = build_parser().parse_args(argv)

    checker_config.set_logging(
        log_level='DEBUG' if args.verbose else None,
        machine_report=args.format != 'human',
    )

    files = find_yaml_files(args.paths)
    if args.command == 'check':
        pattern_path = Path(args.pattern).resolve()
        files = [path for path in files if path.resolve() != pattern_path]
    if not files:
        print("No YAML files found.", file=sys.stderr)
        return 1

    if args.command == 'check':
        try:
            pattern = document_loader.load(args.pattern)
            results = check_files(files, pattern, name=args.name)
        except (DocumentError, PatternError) as exc:
            print(f"Invalid pattern file {args.pattern}: {exc}", file=sys.stderr)
            return 1
    else:
        results = lint_files(files)

    write_results(results, args.format, sys.stdout)

    if any(result.errors for result in results):
        return 1
    if args.format == 'human':
        print(f"All {len(results)} file(s) passed.")
    return 0


if __name__ == '__main__':
    sys.exit(main())
