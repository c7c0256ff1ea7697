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

"""Per-file results of the payload-validate command."""

from pathlib import Path
from typing import Any, Dict, List, Optional


class ValidationResult:
    """Container for validation results for a single payload file."""

    def __init__(self, file_path: Path):
        """Initialize validation result.

        Args:
            file_path: Path to the payload file being validated
        """
        self.file_path = file_path
        self.errors: List[Dict[str, Any]] = []

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def add_error(
        self,
        message: str,
        code: Optional[str] = None,
        path: Optional[str] = None,
        line: Optional[int] = None,
        column: Optional[int] = None,
    ):
        """Add an error message.

        Args:
            message: Error message
            code: Error code from the validation report, if any
            path: Report path the error belongs to
            line: Optional line number where error occurred
            column: Optional column number where error occurred
        """
        error: Dict[str, Any] = {'message': message}
        if code is not None:
            error['code'] = code
        if path is not None:
            error['path'] = path
        if line is not None:
            error['line'] = line
        if column is not None:
            error['column'] = column
        self.errors.append(error)

    def to_dict(self) -> Dict[str, Any]:
        return {'file': str(self.file_path), 'valid': self.is_valid, 'errors': self.errors}
