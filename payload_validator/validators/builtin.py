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

"""Built-in validator kinds."""

import re
from typing import Any, Tuple

from .. import error_codes
from ..exceptions import ValidatorArgumentError
from ..models.schema import ScalarType
from ..utils.value_kinds import ValueKind, kind_of
from .base import ValidationOutcome, Validator
from .registry import register_validator


def _is_number(value: Any) -> bool:
    return kind_of(value) == ValueKind.NUMBER


@register_validator
class MatchingType(Validator):
    """Exact runtime-type check against a declared scalar type."""

    kind = "matching_type"
    arity = 0

    def validate(self, value: Any, declared_type: Any, *args: Any) -> ValidationOutcome:
        if isinstance(declared_type, ScalarType) and not declared_type.accepts(value):
            return ValidationOutcome.invalid(error_codes.WRONG_TYPE)
        return ValidationOutcome.ok()


@register_validator
class MinValueValidator(Validator):
    """``value < threshold`` is reported as MIN_LENGTH."""

    kind = "min_value"
    arity = 1

    @classmethod
    def check_args(cls, args: Tuple[Any, ...]) -> None:
        super().check_args(args)
        if not _is_number(args[0]):
            raise ValidatorArgumentError(f"Validator '{cls.kind}' threshold must be a number, got: {args[0]!r}")

    def validate(self, value: Any, declared_type: Any, *args: Any) -> ValidationOutcome:
        if not _is_number(value):
            return ValidationOutcome.invalid(error_codes.UNHANDLED_EXCEPTION)
        if value < args[0]:
            return ValidationOutcome.invalid(error_codes.MIN_LENGTH)
        return ValidationOutcome.ok()


@register_validator
class MinLengthValidator(Validator):
    kind = "min_length"
    arity = 1

    @classmethod
    def check_args(cls, args: Tuple[Any, ...]) -> None:
        super().check_args(args)
        minimum = args[0]
        if isinstance(minimum, bool) or not isinstance(minimum, int) or minimum < 0:
            raise ValidatorArgumentError(
                f"Validator '{cls.kind}' length must be a non-negative integer, got: {minimum!r}"
            )

    def validate(self, value: Any, declared_type: Any, *args: Any) -> ValidationOutcome:
        if kind_of(value) not in (ValueKind.STRING, ValueKind.SEQUENCE):
            return ValidationOutcome.invalid(error_codes.UNHANDLED_EXCEPTION)
        if len(value) < args[0]:
            return ValidationOutcome.invalid(error_codes.MIN_LENGTH)
        return ValidationOutcome.ok()


@register_validator
class PatternValidator(Validator):
    """Full-string regular expression match."""

    kind = "pattern"
    arity = 1

    @classmethod
    def check_args(cls, args: Tuple[Any, ...]) -> None:
        super().check_args(args)
        if not isinstance(args[0], str):
            raise ValidatorArgumentError(f"Validator '{cls.kind}' pattern must be a string, got: {args[0]!r}")
        try:
            re.compile(args[0])
        except re.error as exc:
            raise ValidatorArgumentError(f"Validator '{cls.kind}' has an invalid pattern {args[0]!r}: {exc}") from exc

    def validate(self, value: Any, declared_type: Any, *args: Any) -> ValidationOutcome:
        if not isinstance(value, str):
            return ValidationOutcome.invalid(error_codes.UNHANDLED_EXCEPTION)
        if re.fullmatch(args[0], value) is None:
            return ValidationOutcome.invalid(error_codes.PATTERN_MISMATCH)
        return ValidationOutcome.ok()
