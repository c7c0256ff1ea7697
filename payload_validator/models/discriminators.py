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

"""Closed discriminator tables for polymorphic fields."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Dict, Iterator, List, Mapping, Optional

from ..exceptions import SchemaDefinitionError

if TYPE_CHECKING:
    from .schema import ObjectSchema

logger = logging.getLogger(__name__)


class DiscriminatorTable:
    """Explicit mapping from discriminator strings to concrete object schemas.

    Only pre-registered discriminators resolve; anything else read from a
    payload is reported as an unknown type. Tables are filled while schemas are
    being declared and must not change once validation starts.
    """

    def __init__(self, variants: Optional[Mapping[str, "ObjectSchema"]] = None):
        self._variants: Dict[str, "ObjectSchema"] = {}
        for discriminator, schema in (variants or {}).items():
            self.register(discriminator, schema)

    def register(self, discriminator: str, schema: "ObjectSchema") -> None:
        if not isinstance(discriminator, str) or not discriminator:
            raise SchemaDefinitionError(f"Discriminator must be a non-empty string, got: {discriminator!r}")
        existing = self._variants.get(discriminator)
        if existing is not None and existing is not schema:
            raise SchemaDefinitionError(
                f"Discriminator '{discriminator}' already maps to schema '{existing.name}'"
            )
        self._variants[discriminator] = schema

    def resolve(self, discriminator: str) -> Optional["ObjectSchema"]:
        schema = self._variants.get(discriminator)
        if schema is None:
            logger.debug(f"Unregistered discriminator: {discriminator!r}")
        return schema

    def discriminators(self) -> List[str]:
        return list(self._variants)

    def __contains__(self, discriminator: object) -> bool:
        return discriminator in self._variants

    def __iter__(self) -> Iterator[str]:
        return iter(self._variants)

    def __len__(self) -> int:
        return len(self._variants)
