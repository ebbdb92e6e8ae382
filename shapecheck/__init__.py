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

"""Structural validation of configuration objects against declarative patterns."""

__version__ = "0.3.0"

from .capability import ObservableCapability, install_observable_capability, installed_capability
from .exceptions import (
    CapabilityError,
    ConfigurationError,
    DocumentError,
    PatternError,
    ShapeCheckError,
    ValidationError,
)
from .matcher import DEFAULT_ROOT_NAME, MISSING, Matcher, match
from .patterns import PatternNotice, compile_pattern
from .type_registry import PRIMITIVE_TYPES, TypeRegistry

__all__ = [
    "CapabilityError",
    "ConfigurationError",
    "DEFAULT_ROOT_NAME",
    "DocumentError",
    "MISSING",
    "Matcher",
    "ObservableCapability",
    "PRIMITIVE_TYPES",
    "PatternError",
    "PatternNotice",
    "ShapeCheckError",
    "TypeRegistry",
    "ValidationError",
    "compile_pattern",
    "install_observable_capability",
    "installed_capability",
    "match",
]
