from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from ..exceptions import SchemaDefinitionError
from ..utils.naming import to_snake_case
from .discriminators import DiscriminatorTable

if TYPE_CHECKING:
    from ..validators import Validator, ValidatorRegistry


DEFAULT_DISCRIMINATOR_KEY = "@type"


@dataclass(frozen=True)
class ScalarType:
    name: str
    types: Tuple[type, ...]

    def accepts(self, value: Any) -> bool:
        # bool is an int subclass; only scalars that list bool take booleans
        if isinstance(value, bool) and bool not in self.types:
            return False
        return isinstance(value, self.types)


@dataclass(frozen=True)
class ReferenceType:
    schema: "ObjectSchema"


@dataclass(frozen=True)
class ListType:
    element: "TypeDescriptor"


@dataclass(frozen=True)
class EnumConstant:
    name: str
    values: Mapping[str, Any]


@dataclass(frozen=True)
class EnumType:
    """Named set of constants matched by structural equality of their properties.

    ``properties`` declares the property names and types every constant carries
    (e.g. a ``code`` string); a value matches when its full property map equals
    one constant's ``values``.
    """

    name: str
    properties: "ObjectSchema"
    constants: Tuple[EnumConstant, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "constants", tuple(self.constants))
        declared = set(self.properties.external_names())
        seen = set()
        for constant in self.constants:
            if constant.name in seen:
                raise SchemaDefinitionError(f"Enum '{self.name}' declares constant '{constant.name}' twice")
            seen.add(constant.name)
            if set(constant.values) != declared:
                raise SchemaDefinitionError(
                    f"Enum '{self.name}' constant '{constant.name}' has properties {sorted(constant.values)}, "
                    f"expected {sorted(declared)}"
                )

    @classmethod
    def of(
        cls,
        name: str,
        properties: Mapping[str, "TypeDescriptor"],
        constants: Mapping[str, Mapping[str, Any]],
    ) -> "EnumType":
        record = ObjectSchema(
            name=f"{name}Properties",
            fields=[FieldDescriptor(prop, prop_type, external_name=prop) for prop, prop_type in properties.items()],
        )
        return cls(
            name=name,
            properties=record,
            constants=tuple(EnumConstant(const_name, dict(values)) for const_name, values in constants.items()),
        )

    def find(self, value: Mapping[str, Any]) -> Optional[EnumConstant]:
        """Return the constant whose property map equals ``value``, if any."""
        candidate = dict(value)
        for constant in self.constants:
            if dict(constant.values) == candidate:
                return constant
        return None


@dataclass(frozen=True)
class PolymorphicType:
    """Abstract field type whose concrete schema is picked per value.

    The value carries ``discriminator_key``; its string content is looked up in
    ``resolver`` (a ``DiscriminatorTable`` or anything with the same ``resolve``).
    """

    name: str
    resolver: DiscriminatorTable
    discriminator_key: str = DEFAULT_DISCRIMINATOR_KEY

    @classmethod
    def of(
        cls,
        name: str,
        variants: Mapping[str, "ObjectSchema"],
        discriminator_key: str = DEFAULT_DISCRIMINATOR_KEY,
    ) -> "PolymorphicType":
        return cls(name=name, resolver=DiscriminatorTable(variants), discriminator_key=discriminator_key)

    def resolve(self, discriminator: Any) -> Optional["ObjectSchema"]:
        if not isinstance(discriminator, str):
            return None
        return self.resolver.resolve(discriminator)


TypeDescriptor = Union[ScalarType, ReferenceType, ListType, EnumType, PolymorphicType]


STRING = ScalarType("string", (str,))
INTEGER = ScalarType("integer", (int,))
# JSON does not distinguish 1 from 1.0; integral wire values satisfy float fields
FLOAT = ScalarType("float", (int, float))
BOOLEAN = ScalarType("boolean", (bool,))

SCALAR_TYPES: Dict[str, ScalarType] = {t.name: t for t in (STRING, INTEGER, FLOAT, BOOLEAN)}


@dataclass(frozen=True)
class ValidatorSpec:
    """A custom validator attached to a field: kind identifier plus static arguments.

    The kind must already be registered in ``registry`` (the process-wide
    ``validator_registry`` when omitted); unknown kinds and ill-fitting arguments
    are rejected here, when the schema is declared. The same registry supplies
    the validator instance at validation time.
    """

    kind: str
    args: Tuple[Any, ...] = ()
    registry: Optional["ValidatorRegistry"] = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "args", tuple(self.args))
        if self.registry is None:
            # Imported here: the validators package imports this module for ScalarType.
            from ..validators import validator_registry

            object.__setattr__(self, "registry", validator_registry)
        self.registry.check(self.kind, self.args)

    @classmethod
    def of(cls, kind: str, *args: Any, registry: Optional["ValidatorRegistry"] = None) -> "ValidatorSpec":
        return cls(kind=kind, args=args, registry=registry)

    def validator(self) -> "Validator":
        return self.registry.get(self.kind)


@dataclass(frozen=True)
class FieldDescriptor:
    name: str
    type: TypeDescriptor
    nullable: bool = False
    validators: Tuple[ValidatorSpec, ...] = ()
    external_name: Optional[str] = None

    def __post_init__(self) -> None:
        if not isinstance(self.type, (ScalarType, ReferenceType, ListType, EnumType, PolymorphicType)):
            raise SchemaDefinitionError(f"Field '{self.name}' has an invalid type descriptor: {self.type!r}")
        object.__setattr__(self, "validators", tuple(self.validators))
        if self.external_name is None:
            object.__setattr__(self, "external_name", to_snake_case(self.name))


def declare_field(
    name: str,
    type_: TypeDescriptor,
    *,
    nullable: bool = False,
    validators: Iterable[ValidatorSpec] = (),
    external_name: Optional[str] = None,
) -> FieldDescriptor:
    """Build a ``FieldDescriptor``, wrapping object schemas in ``ReferenceType``."""
    if isinstance(type_, ObjectSchema):
        type_ = ReferenceType(type_)
    return FieldDescriptor(
        name=name,
        type=type_,
        nullable=nullable,
        validators=tuple(validators),
        external_name=external_name,
    )


@dataclass(eq=False)
class ObjectSchema:
    """Ordered set of fields describing a composite value.

    Field order is declaration order; traversal and report ordering follow it.
    Use ``declare``/``define`` to build schemas that reference each other.
    """

    name: str
    fields: Tuple[FieldDescriptor, ...] = ()
    allow_extra: bool = True
    _defined: bool = field(default=True, repr=False)

    def __post_init__(self) -> None:
        self.fields = tuple(self.fields)
        self._check_unique(self.fields)

    @classmethod
    def declare(cls, name: str, allow_extra: bool = True) -> "ObjectSchema":
        """Create an empty shell to be completed by ``define``."""
        return cls(name=name, allow_extra=allow_extra, _defined=False)

    def define(self, fields: Sequence[FieldDescriptor]) -> "ObjectSchema":
        if self._defined:
            raise SchemaDefinitionError(f"Schema '{self.name}' is already defined")
        fields = tuple(fields)
        self._check_unique(fields)
        self.fields = fields
        self._defined = True
        return self

    @property
    def is_defined(self) -> bool:
        return self._defined

    def _check_unique(self, fields: Tuple[FieldDescriptor, ...]) -> None:
        seen: List[str] = []
        for descriptor in fields:
            if not isinstance(descriptor, FieldDescriptor):
                raise SchemaDefinitionError(f"Schema '{self.name}' has a non-field entry: {descriptor!r}")
            if descriptor.external_name in seen:
                raise SchemaDefinitionError(
                    f"Schema '{self.name}' declares external name '{descriptor.external_name}' twice"
                )
            seen.append(descriptor.external_name)

    def external_names(self) -> List[str]:
        return [f.external_name for f in self.fields]

    def get(self, external_name: str) -> Optional[FieldDescriptor]:
        for descriptor in self.fields:
            if descriptor.external_name == external_name:
                return descriptor
        return None
