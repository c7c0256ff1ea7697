"""Custom field validators and their registry.

Importing this package registers the built-in validator kinds.
"""

from .base import ValidationOutcome, Validator
from .registry import ValidatorRegistry, register_validator, validator_registry
from .builtin import MatchingType, MinLengthValidator, MinValueValidator, PatternValidator

__all__ = [
    "MatchingType",
    "MinLengthValidator",
    "MinValueValidator",
    "PatternValidator",
    "ValidationOutcome",
    "Validator",
    "ValidatorRegistry",
    "register_validator",
    "validator_registry",
]
