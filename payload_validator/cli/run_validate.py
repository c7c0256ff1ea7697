#!/usr/bin/env python3
# Copyright 2025 TIER IV, inc.
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

"""CLI entry point for validating payload files against a schema document."""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from ..config import validator_config
from ..exceptions import PayloadLoadError, SchemaDefinitionError
from ..models.schema_loader import load_schema_document
from ..parsing.payload_parser import PAYLOAD_SUFFIXES
from . import validate_files, ValidationResult


def find_payload_files(paths: List[str], exclude: Optional[Path] = None) -> List[Path]:
    """Find all JSON/YAML payload files in given paths."""
    payload_files = []
    excluded = exclude.resolve() if exclude is not None else None

    for path_str in paths:
        path = Path(path_str)

        if not path.exists():
            print(f"Warning: Path does not exist: {path}", file=sys.stderr)
            continue

        if path.is_file():
            if path.suffix.lower() in PAYLOAD_SUFFIXES:
                payload_files.append(path)
            else:
                print(f"Warning: File is not a JSON/YAML payload: {path}", file=sys.stderr)
        elif path.is_dir():
            for suffix in PAYLOAD_SUFFIXES:
                payload_files.extend(path.rglob(f'*{suffix}'))
        else:
            print(f"Warning: Path is neither file nor directory: {path}", file=sys.stderr)

    return sorted(p for p in set(payload_files) if excluded is None or p.resolve() != excluded)


def _print_results(results: List[ValidationResult], output_format: str) -> None:
    if output_format == 'json':
        output = {
            'files': len(results),
            'errors': sum(len(r.errors) for r in results),
            'results': [r.to_dict() for r in results],
        }
        print(json.dumps(output, indent=2))
    elif output_format == 'github-actions':
        for result in results:
            for error in result.errors:
                print(f"::error file={result.file_path},line={error.get('line', 1)}::{error['message']}")
    else:  # human-readable
        for result in results:
            if result.errors:
                print(f"\n{result.file_path}:")
                for error in result.errors:
                    line_info = f":{error['line']}" if 'line' in error else ""
                    path_info = f" {error['path'] or '/'}" if 'path' in error else ""
                    print(f"  ERROR{line_info}{path_info}: {error['message']}")


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the payload-validate CLI."""
    parser = argparse.ArgumentParser(
        description='Validate JSON/YAML payload files against a schema document',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        'paths',
        nargs='*',
        default=None,
        help='Payload files or directories to validate (default: current directory)',
    )
    parser.add_argument(
        '--schema',
        required=True,
        help='Schema document (YAML or JSON) declaring the payload schemas',
    )
    parser.add_argument(
        '--root',
        default=None,
        help="Object schema to validate against (default: the document's 'root')",
    )
    parser.add_argument(
        '--format',
        choices=['human', 'json', 'github-actions'],
        default='human',
        help='Output format (default: human)',
    )

    args = parser.parse_args(argv)
    validator_config.set_logging()

    if not args.paths:
        args.paths = ['.']

    schema_path = Path(args.schema)
    try:
        catalog = load_schema_document(schema_path)
        schema = catalog.get_schema(args.root)
    except (PayloadLoadError, SchemaDefinitionError) as e:
        print(f"Failed to load schema document: {e}", file=sys.stderr)
        sys.exit(2)

    payload_files = find_payload_files(args.paths, exclude=schema_path)

    if not payload_files:
        print("No payload files found.", file=sys.stderr)
        sys.exit(1)

    results = validate_files(payload_files, schema)
    _print_results(results, args.format)

    # Exit with error code if any errors found
    total_errors = sum(len(r.errors) for r in results)
    if total_errors > 0:
        sys.exit(1)
    if args.format == 'human':
        print(f"Validated {len(results)} payload file(s) against '{schema.name}' with no errors.")
    sys.exit(0)


if __name__ == '__main__':
    main()
