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

"""Build schema graphs from declarative YAML/JSON schema documents.

A document has up to four top-level keys: ``schemas`` (object schemas with
ordered fields), ``enums``, ``polymorphic`` (discriminator -> schema tables) and
``root``. Type expressions are scalar names, declared names, or
``{list: <type expression>}``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

from ..config import validator_config
from ..exceptions import SchemaDefinitionError
from ..parsing.payload_parser import PayloadParser
from ..validators import ValidatorRegistry
from .discriminators import DiscriminatorTable
from .json_schema_loader import check_document
from .schema import (
    SCALAR_TYPES,
    EnumType,
    FieldDescriptor,
    ListType,
    ObjectSchema,
    PolymorphicType,
    ReferenceType,
    TypeDescriptor,
    ValidatorSpec,
)

logger = logging.getLogger(__name__)


@dataclass
class SchemaCatalog:
    """Every named type declared by one schema document."""

    schemas: Dict[str, ObjectSchema] = field(default_factory=dict)
    enums: Dict[str, EnumType] = field(default_factory=dict)
    polymorphic: Dict[str, PolymorphicType] = field(default_factory=dict)
    root: Optional[str] = None
    source: Optional[Path] = None

    def get(self, name: str) -> Union[ObjectSchema, EnumType, PolymorphicType]:
        for table in (self.schemas, self.enums, self.polymorphic):
            if name in table:
                return table[name]
        raise SchemaDefinitionError(f"Unknown type '{name}'. Declared: {sorted(self.names())}")

    def get_schema(self, name: Optional[str] = None) -> ObjectSchema:
        """Get an object schema by name, defaulting to the document's root."""
        name = name or self.root
        if not name:
            raise SchemaDefinitionError("No schema name given and the document declares no 'root'")
        if name not in self.schemas:
            raise SchemaDefinitionError(f"Unknown object schema '{name}'. Available: {sorted(self.schemas)}")
        return self.schemas[name]

    def names(self) -> List[str]:
        return [*self.schemas, *self.enums, *self.polymorphic]


class _CatalogBuilder:
    def __init__(
        self,
        document: Mapping[str, Any],
        discriminator_key: str,
        registry: Optional[ValidatorRegistry] = None,
    ):
        self._schema_docs: Mapping[str, Any] = document.get("schemas") or {}
        self._enum_docs: Mapping[str, Any] = document.get("enums") or {}
        self._polymorphic_docs: Mapping[str, Any] = document.get("polymorphic") or {}
        self._root = document.get("root")
        self._discriminator_key = discriminator_key
        self._registry = registry
        self._catalog = SchemaCatalog(root=self._root)
        self._enums_in_progress: List[str] = []

    def build(self) -> SchemaCatalog:
        self._check_names()

        for name, schema_doc in self._schema_docs.items():
            self._catalog.schemas[name] = ObjectSchema.declare(name, allow_extra=schema_doc.get("allow_extra", True))

        for name, poly_doc in self._polymorphic_docs.items():
            self._catalog.polymorphic[name] = self._build_polymorphic(name, poly_doc)

        for name in self._enum_docs:
            self._build_enum(name)

        for name, schema_doc in self._schema_docs.items():
            fields = [
                self._build_field(field_doc, f"schemas/{name}/fields/{idx}")
                for idx, field_doc in enumerate(schema_doc.get("fields", []))
            ]
            self._catalog.schemas[name].define(fields)

        if self._root is not None and self._root not in self._catalog.schemas:
            raise SchemaDefinitionError(f"root: '{self._root}' is not a declared object schema")

        return self._catalog

    def _check_names(self) -> None:
        seen: Dict[str, str] = {}
        for section, docs in (
            ("schemas", self._schema_docs),
            ("enums", self._enum_docs),
            ("polymorphic", self._polymorphic_docs),
        ):
            for name in docs:
                if name in SCALAR_TYPES:
                    raise SchemaDefinitionError(f"{section}/{name}: name shadows the scalar type '{name}'")
                if name in seen:
                    raise SchemaDefinitionError(f"{section}/{name}: name already declared in '{seen[name]}'")
                seen[name] = section

    def _build_polymorphic(self, name: str, poly_doc: Mapping[str, Any]) -> PolymorphicType:
        table = DiscriminatorTable()
        for discriminator, schema_name in poly_doc["variants"].items():
            if schema_name not in self._catalog.schemas:
                raise SchemaDefinitionError(
                    f"polymorphic/{name}/variants/{discriminator}: '{schema_name}' is not a declared object schema"
                )
            table.register(discriminator, self._catalog.schemas[schema_name])
        return PolymorphicType(
            name=name,
            resolver=table,
            discriminator_key=poly_doc.get("discriminator", self._discriminator_key),
        )

    def _build_enum(self, name: str) -> EnumType:
        if name in self._catalog.enums:
            return self._catalog.enums[name]
        if name in self._enums_in_progress:
            cycle = " -> ".join([*self._enums_in_progress, name])
            raise SchemaDefinitionError(f"enums/{name}: enum properties reference each other ({cycle})")

        self._enums_in_progress.append(name)
        enum_doc = self._enum_docs[name]
        properties = {
            prop: self._resolve_type(type_expr, f"enums/{name}/properties/{prop}")
            for prop, type_expr in enum_doc["properties"].items()
        }
        try:
            enum_type = EnumType.of(name, properties=properties, constants=enum_doc["constants"])
        except SchemaDefinitionError as exc:
            raise SchemaDefinitionError(f"enums/{name}: {exc}") from exc
        self._enums_in_progress.pop()

        self._catalog.enums[name] = enum_type
        return enum_type

    def _build_field(self, field_doc: Mapping[str, Any], where: str) -> FieldDescriptor:
        validators = []
        for idx, validator_doc in enumerate(field_doc.get("validators", [])):
            try:
                spec = ValidatorSpec(
                    validator_doc["kind"],
                    tuple(validator_doc.get("args", ())),
                    registry=self._registry,
                )
            except SchemaDefinitionError as exc:
                raise type(exc)(f"{where}/validators/{idx}: {exc}") from exc
            validators.append(spec)

        return FieldDescriptor(
            name=field_doc["name"],
            type=self._resolve_type(field_doc["type"], f"{where}/type"),
            nullable=field_doc.get("nullable", False),
            validators=tuple(validators),
            external_name=field_doc.get("external_name"),
        )

    def _resolve_type(self, type_expr: Any, where: str) -> TypeDescriptor:
        if isinstance(type_expr, Mapping):
            return ListType(self._resolve_type(type_expr["list"], f"{where}/list"))
        if type_expr in SCALAR_TYPES:
            return SCALAR_TYPES[type_expr]
        if type_expr in self._catalog.schemas:
            return ReferenceType(self._catalog.schemas[type_expr])
        if type_expr in self._catalog.polymorphic:
            return self._catalog.polymorphic[type_expr]
        if type_expr in self._enum_docs:
            return self._build_enum(type_expr)
        raise SchemaDefinitionError(f"{where}: unknown type '{type_expr}'")


def build_catalog(
    document: Any,
    discriminator_key: Optional[str] = None,
    registry: Optional[ValidatorRegistry] = None,
) -> SchemaCatalog:
    """Check a decoded schema document and build its schema graph.

    Validator kinds are checked against ``registry`` (the global
    ``validator_registry`` when omitted).

    Raises:
        SchemaDefinitionError: If the document is malformed or inconsistent
    """
    check_document(document)
    key = discriminator_key or validator_config.discriminator_key
    return _CatalogBuilder(document, key, registry).build()


def load_schema_document(
    file_path: Union[str, Path],
    discriminator_key: Optional[str] = None,
    parser: Optional[PayloadParser] = None,
    registry: Optional[ValidatorRegistry] = None,
) -> SchemaCatalog:
    """Load a schema document from a YAML or JSON file.

    Raises:
        PayloadLoadError: If the file cannot be read or parsed
        SchemaDefinitionError: If the document is malformed or inconsistent
    """
    path = Path(file_path)
    parser = parser or PayloadParser(cache_enabled=False)
    document = parser.load(path)
    logger.debug(f"Building schema catalog from {path}")
    try:
        catalog = build_catalog(document, discriminator_key, registry)
    except SchemaDefinitionError as exc:
        raise type(exc)(f"{path}: {exc}") from exc
    catalog.source = path
    return catalog


def load_schema_document_from_string(
    content: str,
    discriminator_key: Optional[str] = None,
    is_json: bool = False,
    registry: Optional[ValidatorRegistry] = None,
) -> SchemaCatalog:
    document = PayloadParser(cache_enabled=False).load_from_string(content, is_json=is_json)
    return build_catalog(document, discriminator_key, registry)
