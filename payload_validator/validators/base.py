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

"""Custom field validator capability."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, ClassVar, Tuple

from ..exceptions import ValidatorArgumentError


@dataclass(frozen=True)
class ValidationOutcome:
    valid: bool = True
    error: str = ""

    @classmethod
    def ok(cls) -> "ValidationOutcome":
        return cls()

    @classmethod
    def invalid(cls, error: str) -> "ValidationOutcome":
        return cls(valid=False, error=error)


class Validator(ABC):
    """Abstract base validator.

    Subclasses declare a ``kind`` (the identifier used by ``ValidatorSpec``) and
    the number of static arguments they take. Instances are stateless and shared
    across validation calls.
    """

    kind: ClassVar[str] = ""
    arity: ClassVar[int] = 0

    @classmethod
    def check_args(cls, args: Tuple[Any, ...]) -> None:
        """Validate static arguments when a spec is declared.

        Raises:
            ValidatorArgumentError: If the arguments do not fit this validator.
        """
        if len(args) != cls.arity:
            raise ValidatorArgumentError(
                f"Validator '{cls.kind}' takes {cls.arity} argument(s), got {len(args)}: {list(args)}"
            )

    @abstractmethod
    def validate(self, value: Any, declared_type: Any, *args: Any) -> ValidationOutcome:
        """Check ``value`` (already structurally valid for ``declared_type``)."""
        pass
