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

"""Custom exceptions for the payload validator.

Data-driven validation failures are never raised; they are collected into the
validation report. The exceptions below signal programming or configuration
errors and abort the call that hit them.
"""


class PayloadValidatorError(Exception):
    """Base exception for payload-validator related errors."""
    pass


class SchemaDefinitionError(PayloadValidatorError):
    """Exception raised for malformed schemas or schema documents."""
    pass


class UnknownValidatorError(SchemaDefinitionError):
    """Exception raised when a field references an unregistered validator kind."""
    pass


class ValidatorArgumentError(SchemaDefinitionError):
    """Exception raised when validator arguments do not match the validator's contract."""
    pass


class PayloadShapeError(PayloadValidatorError):
    """Exception raised when a non-object value is passed where an object root is required."""
    pass


class PayloadLoadError(PayloadValidatorError):
    """Exception raised when a payload or schema file cannot be read or parsed."""
    pass
