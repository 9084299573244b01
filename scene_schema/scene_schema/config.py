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

"""Configuration management for the scene schema tooling."""

import os
import logging
from dataclasses import dataclass

from . import SCHEMA_FORMAT_VERSION
from .utils.logging_utils import DEFAULT_FORMAT, configure_split_stream_logging


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


@dataclass
class SchemaConfig:
    """Configuration class for loading, validating and rendering entity kinds."""
    log_level: str = "INFO"
    print_level: str = "WARNING"
    # Reject fields a kind does not declare; when False they are dropped with a warning.
    strict_unknown_fields: bool = True
    schema_format: str = SCHEMA_FORMAT_VERSION
    cache_enabled: bool = True

    @classmethod
    def from_env(cls) -> 'SchemaConfig':
        """Create configuration from environment variables."""
        return cls(
            log_level=os.getenv('SCENE_SCHEMA_LOG_LEVEL', 'INFO'),
            print_level=os.getenv('SCENE_SCHEMA_PRINT_LEVEL', 'WARNING'),
            strict_unknown_fields=_env_flag('SCENE_SCHEMA_STRICT_UNKNOWN_FIELDS', 'true'),
            schema_format=os.getenv('SCENE_SCHEMA_FORMAT', SCHEMA_FORMAT_VERSION),
            cache_enabled=_env_flag('SCENE_SCHEMA_CACHE_ENABLED', 'true'),
        )

    def set_logging(self) -> logging.Logger:
        """Setup logging based on configuration."""
        level = getattr(logging, self.log_level.upper(), logging.INFO)
        stderr_level = getattr(logging, self.print_level.upper(), logging.WARNING)

        formatter = logging.Formatter(DEFAULT_FORMAT)
        return configure_split_stream_logging(
            level=level,
            stderr_level=stderr_level,
            formatter=formatter,
            logger_name='scene_schema',
        )


# Global configuration instance
schema_config = SchemaConfig.from_env()
