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

"""Runtime configuration for shapecheck tooling."""

import os
import logging
from dataclasses import dataclass
from typing import Optional

from .utils.logging_utils import configure_cli_logging, resolve_level


@dataclass
class CheckerConfig:
    """Configuration for document loading and the command line tool."""
    log_level: str = "INFO"
    print_level: str = "WARNING"
    cache_enabled: bool = True
    root_name: str = "configObject"

    @classmethod
    def from_env(cls) -> 'CheckerConfig':
        """Create configuration from environment variables."""
        return cls(
            log_level=os.getenv('SHAPECHECK_LOG_LEVEL', 'INFO'),
            print_level=os.getenv('SHAPECHECK_PRINT_LEVEL', 'WARNING'),
            cache_enabled=os.getenv('SHAPECHECK_CACHE_ENABLED', 'true').lower() == 'true',
            root_name=os.getenv('SHAPECHECK_ROOT_NAME', 'configObject'),
        )

    def set_logging(self, log_level: Optional[str] = None, machine_report: bool = False) -> logging.Logger:
        """Setup logging based on configuration.

        ``log_level`` overrides the configured level for this call only.
        """
        level = resolve_level(log_level or self.log_level, logging.INFO)
        stderr_level = resolve_level(self.print_level, logging.WARNING)

        configure_cli_logging(level=level, stderr_level=stderr_level, machine_report=machine_report)

        return logging.getLogger('shapecheck')


# Global configuration instance
checker_config = CheckerConfig.from_env()
