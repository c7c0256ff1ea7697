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

"""Machine-readable error codes emitted into validation reports."""

REQUIRED = "REQUIRED"
WRONG_TYPE = "WRONG_TYPE"
NOT_FOUND_TYPE = "NOT_FOUND_TYPE"
ENUM_NOT_FOUND = "ENUM_NOT_FOUND"
MIN_LENGTH = "MIN_LENGTH"
PATTERN_MISMATCH = "PATTERN_MISMATCH"
UNKNOWN_FIELD = "UNKNOWN_FIELD"

# Reported when a validator is handed a value it cannot interpret. Only reachable when a
# schema attaches a validator to a field of an incompatible type.
UNHANDLED_EXCEPTION = "UNHANDLED_EXCEPTION"

ALL_CODES = frozenset(
    (
        REQUIRED,
        WRONG_TYPE,
        NOT_FOUND_TYPE,
        ENUM_NOT_FOUND,
        MIN_LENGTH,
        PATTERN_MISMATCH,
        UNKNOWN_FIELD,
        UNHANDLED_EXCEPTION,
    )
)
