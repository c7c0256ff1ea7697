"""Schema-conformance checking for decoded JSON payload trees.

``validate(path, value, schema)`` walks a mapping against an ``ObjectSchema``
and returns every violation found, keyed by path. An empty report means the
payload is valid.
"""

from . import error_codes
from .exceptions import (
    PayloadLoadError,
    PayloadShapeError,
    PayloadValidatorError,
    SchemaDefinitionError,
    UnknownValidatorError,
    ValidatorArgumentError,
)
from .models import (
    BOOLEAN,
    FLOAT,
    INTEGER,
    STRING,
    DiscriminatorTable,
    EnumConstant,
    EnumType,
    FieldDescriptor,
    ListType,
    ObjectSchema,
    PolymorphicType,
    ReferenceType,
    ScalarType,
    ValidatorSpec,
    declare_field,
)
from .validators import ValidationOutcome, Validator, register_validator, validator_registry
from .engine import StepValidator, ValidationReport, validate
from .models.schema_loader import SchemaCatalog, load_schema_document, load_schema_document_from_string

__version__ = "0.1.0"
