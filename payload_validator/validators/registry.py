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

"""Registry mapping validator kinds to validator classes."""

import logging
from typing import Any, Dict, List, Tuple, Type

from ..exceptions import SchemaDefinitionError, UnknownValidatorError
from .base import Validator

logger = logging.getLogger(__name__)


class ValidatorRegistry:
    """Factory for validators, populated at import time and read-only afterwards."""

    def __init__(self):
        self._validators: Dict[str, Type[Validator]] = {}
        self._instances: Dict[str, Validator] = {}

    def register(self, validator_cls: Type[Validator]) -> Type[Validator]:
        """Register a validator class under its ``kind``.

        Returns the class so this can be used as a decorator.
        """
        kind = validator_cls.kind
        if not kind:
            raise SchemaDefinitionError(f"Validator class {validator_cls.__name__} does not declare a kind")
        if kind in self._validators:
            raise SchemaDefinitionError(
                f"Validator kind '{kind}' is already registered by {self._validators[kind].__name__}"
            )
        logger.debug(f"Registering validator '{kind}' -> {validator_cls.__name__}")
        self._validators[kind] = validator_cls
        return validator_cls

    def unregister(self, kind: str) -> None:
        self._validators.pop(kind, None)
        self._instances.pop(kind, None)

    def kinds(self) -> List[str]:
        return sorted(self._validators)

    def __contains__(self, kind: str) -> bool:
        return kind in self._validators

    def _get_class(self, kind: str) -> Type[Validator]:
        if kind not in self._validators:
            raise UnknownValidatorError(
                f"Unknown validator kind: '{kind}'. Registered kinds: {self.kinds()}"
            )
        return self._validators[kind]

    def check(self, kind: str, args: Tuple[Any, ...]) -> None:
        """Raise if ``kind`` is unknown or ``args`` do not fit it."""
        self._get_class(kind).check_args(args)

    def get(self, kind: str) -> Validator:
        """Get the shared validator instance for ``kind``."""
        instance = self._instances.get(kind)
        if instance is None:
            instance = self._get_class(kind)()
            self._instances[kind] = instance
        return instance


# Global registry instance
validator_registry = ValidatorRegistry()


def register_validator(validator_cls: Type[Validator]) -> Type[Validator]:
    """Class decorator registering ``validator_cls`` on the global registry."""
    return validator_registry.register(validator_cls)
