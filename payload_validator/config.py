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

"""Runtime configuration for the payload validator."""

import os
import logging
from dataclasses import dataclass

from .utils.logging_utils import DEFAULT_FORMAT, configure_split_stream_logging

ENV_PREFIX = "PAYLOAD_VALIDATOR_"


@dataclass
class ValidatorConfig:
    """Configuration for schema loading, payload parsing and logging."""
    log_level: str = "INFO"
    print_level: str = "ERROR"
    cache_enabled: bool = True
    discriminator_key: str = "@type"

    @classmethod
    def from_env(cls) -> 'ValidatorConfig':
        """Create configuration from environment variables."""
        return cls(
            log_level=os.getenv(f'{ENV_PREFIX}LOG_LEVEL', 'INFO'),
            print_level=os.getenv(f'{ENV_PREFIX}PRINT_LEVEL', 'ERROR'),
            cache_enabled=os.getenv(f'{ENV_PREFIX}CACHE_ENABLED', 'true').lower() == 'true',
            discriminator_key=os.getenv(f'{ENV_PREFIX}DISCRIMINATOR_KEY', '@type'),
        )

    def set_logging(self) -> logging.Logger:
        """Setup logging based on configuration."""
        level = getattr(logging, self.log_level.upper(), logging.INFO)
        stderr_level = getattr(logging, self.print_level.upper(), logging.ERROR)

        return configure_split_stream_logging(
            level=level,
            stderr_level=stderr_level,
            formatter=logging.Formatter(DEFAULT_FORMAT),
        )


# Global configuration instance
validator_config = ValidatorConfig.from_env()
