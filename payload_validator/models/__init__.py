"""Schema model: type descriptors, fields and object schemas."""

from .discriminators import DiscriminatorTable
from .schema import (
    BOOLEAN,
    DEFAULT_DISCRIMINATOR_KEY,
    FLOAT,
    INTEGER,
    SCALAR_TYPES,
    STRING,
    EnumConstant,
    EnumType,
    FieldDescriptor,
    ListType,
    ObjectSchema,
    PolymorphicType,
    ReferenceType,
    ScalarType,
    TypeDescriptor,
    ValidatorSpec,
    declare_field,
)
