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

"""Validate payload files against a schema document."""

import logging
from pathlib import Path
from typing import List, Optional

from ..engine import StepValidator
from ..exceptions import PayloadLoadError, PayloadShapeError
from ..file_io.source_location import format_source, lookup_source
from ..models.schema import ObjectSchema
from ..parsing.payload_parser import PayloadParser, payload_parser
from .report import ValidationResult

__all__ = ['validate_files', 'ValidationResult']

logger = logging.getLogger(__name__)


def validate_files(
    file_paths: List[Path],
    schema: ObjectSchema,
    validator: Optional[StepValidator] = None,
    parser: Optional[PayloadParser] = None,
) -> List[ValidationResult]:
    """Validate a list of payload files.

    Files that cannot be loaded, or whose root is not an object, get a single
    error; the remaining files are still validated.

    Args:
        file_paths: List of payload file paths
        schema: Object schema every payload must conform to

    Returns:
        List of ValidationResult objects, one per file
    """
    validator = validator or StepValidator()
    parser = parser or payload_parser
    results = []

    for file_path in file_paths:
        result = ValidationResult(file_path)
        results.append(result)

        try:
            payload, source_map = parser.load_with_source(file_path)
        except PayloadLoadError as e:
            result.add_error(f"Failed to load payload: {e}")
            continue

        try:
            report = validator.validate("", payload, schema)
        except PayloadShapeError as e:
            loc = lookup_source(source_map, "", file_path)
            result.add_error(f"{e}{format_source(loc)}", path="", line=loc.line, column=loc.column)
            continue

        for path, codes in report.items():
            loc = lookup_source(source_map, path, file_path)
            for code in codes:
                result.add_error(
                    f"{code}{format_source(loc)}",
                    code=code,
                    path=path,
                    line=loc.line,
                    column=loc.column,
                )
        logger.debug(f"{file_path}: {len(result.errors)} error(s)")

    return results
