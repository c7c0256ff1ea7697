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

"""Recursive validation of decoded payload trees against object schemas.

Paths are slash-delimited from the root (``""``): object fields append
``/<external_name>``, list elements append ``[<index>]``, and polymorphic
resolution appends nothing. Every path is visited once, so partial reports
from sibling branches never share keys and are merged with ``dict.update``.
"""

import logging
from typing import Any, Collection, Dict, List, Mapping

from .. import error_codes
from ..exceptions import PayloadShapeError, SchemaDefinitionError
from ..models.schema import (
    EnumType,
    FieldDescriptor,
    ListType,
    ObjectSchema,
    PolymorphicType,
    ReferenceType,
    ScalarType,
    TypeDescriptor,
)
from ..utils.value_kinds import ValueKind, kind_of
from ..validators import MatchingType

logger = logging.getLogger(__name__)

ValidationReport = Dict[str, List[str]]


class StepValidator:
    """Validation engine. Holds no per-call state; one instance can serve any number of calls.

    Field validators come from the registry each ``ValidatorSpec`` was checked
    against when the schema was declared.
    """

    def __init__(self):
        self._matching_type = MatchingType()

    def validate(self, path: str, value: Any, schema: ObjectSchema) -> ValidationReport:
        """Validate an object value against ``schema``.

        Args:
            path: Path of ``value`` in the enclosing tree, ``""`` for a root call
            value: Decoded mapping to validate
            schema: Schema the mapping must conform to

        Returns:
            Mapping from path to error codes; empty when the value is valid

        Raises:
            PayloadShapeError: If ``value`` is not a mapping
            SchemaDefinitionError: If ``schema`` (or a nested one) is malformed
        """
        if kind_of(value) != ValueKind.MAPPING:
            raise PayloadShapeError(
                f"Expected an object at '{path or '/'}' for schema '{schema.name}', got {kind_of(value).value}"
            )
        logger.debug(f"Validating '{path or '/'}' against schema '{schema.name}'")
        report = self._validate_object(path, value, schema)
        if report:
            logger.debug(f"Schema '{schema.name}' reported {len(report)} invalid path(s) under '{path or '/'}'")
        return report

    def _validate_object(
        self,
        path: str,
        value: Mapping[str, Any],
        schema: ObjectSchema,
        ignored_keys: Collection[str] = (),
    ) -> ValidationReport:
        if not schema.is_defined:
            raise SchemaDefinitionError(f"Schema '{schema.name}' was declared but never defined")

        report: ValidationReport = {}
        for descriptor in schema.fields:
            child_path = f"{path}/{descriptor.external_name}"
            report.update(self._validate_field(child_path, value.get(descriptor.external_name), descriptor))

        if not schema.allow_extra:
            declared = set(schema.external_names())
            for key in value:
                if key in declared or key in ignored_keys:
                    continue
                report[f"{path}/{key}"] = [error_codes.UNKNOWN_FIELD]
        return report

    def _validate_field(self, path: str, value: Any, descriptor: FieldDescriptor) -> ValidationReport:
        if value is None:
            if descriptor.nullable:
                return {}
            return {path: [error_codes.REQUIRED]}

        report = self._validate_type(path, value, descriptor.type)
        if report:
            # Content checks are pointless once the shape is wrong.
            return report

        for spec in descriptor.validators:
            outcome = spec.validator().validate(value, descriptor.type, *spec.args)
            if not outcome.valid:
                if outcome.error == error_codes.UNHANDLED_EXCEPTION:
                    logger.warning(
                        f"Validator '{spec.kind}' cannot handle the value at '{path}' "
                        f"(field '{descriptor.name}'); check the schema declaration"
                    )
                return {path: [outcome.error]}
        return {}

    def _validate_type(self, path: str, value: Any, type_: TypeDescriptor) -> ValidationReport:
        kind = kind_of(value)

        if isinstance(type_, PolymorphicType):
            if kind != ValueKind.MAPPING:
                return {path: [error_codes.WRONG_TYPE]}
            schema = type_.resolve(value.get(type_.discriminator_key))
            if schema is None:
                return {path: [error_codes.NOT_FOUND_TYPE]}
            return self._validate_object(path, value, schema, ignored_keys=(type_.discriminator_key,))

        if isinstance(type_, EnumType):
            if kind != ValueKind.MAPPING:
                return {path: [error_codes.WRONG_TYPE]}
            report = self._validate_object(path, value, type_.properties)
            if report:
                return report
            if type_.find(value) is None:
                return {path: [error_codes.ENUM_NOT_FOUND]}
            return {}

        if isinstance(type_, ReferenceType):
            if kind != ValueKind.MAPPING:
                return {path: [error_codes.WRONG_TYPE]}
            return self._validate_object(path, value, type_.schema)

        if isinstance(type_, ListType):
            if kind != ValueKind.SEQUENCE:
                return {path: [error_codes.WRONG_TYPE]}
            report: ValidationReport = {}
            for index, element in enumerate(value):
                report.update(self._validate_type(f"{path}[{index}]", element, type_.element))
            return report

        if isinstance(type_, ScalarType):
            outcome = self._matching_type.validate(value, type_)
            if not outcome.valid:
                return {path: [outcome.error]}
            return {}

        raise SchemaDefinitionError(f"Unsupported type descriptor at '{path}': {type_!r}")


_default_validator = StepValidator()


def validate(path: str, value: Any, schema: ObjectSchema) -> ValidationReport:
    """Validate ``value`` against ``schema`` with the shared engine instance."""
    return _default_validator.validate(path, value, schema)
