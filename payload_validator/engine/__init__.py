from .step_validator import StepValidator, ValidationReport, validate

__all__ = ["StepValidator", "ValidationReport", "validate"]
