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

"""Custom exceptions for shapecheck."""

from typing import Optional, Sequence, Tuple, Union

PointerToken = Union[str, int]


class ShapeCheckError(Exception):
    """Base exception for shapecheck related errors."""
    pass


class ValidationError(ShapeCheckError):
    """Exception raised when a value does not match its pattern.

    ``path_name`` is the accumulated locator (e.g. ``configObject.d[1]``) and
    ``pointer`` the keys/indices leading to the failing value from the root.
    """

    def __init__(
        self,
        message: str,
        path_name: Optional[str] = None,
        pointer: Sequence[PointerToken] = (),
    ):
        super().__init__(message)
        self.path_name = path_name
        self.pointer: Tuple[PointerToken, ...] = tuple(pointer)

    @property
    def yaml_path(self) -> str:
        """JSON-pointer form of ``pointer`` (``/d/1``), empty for the root."""
        return "".join(
            "/" + str(token).replace("~", "~0").replace("/", "~1") for token in self.pointer
        )


class ConfigurationError(ValidationError):
    """Exception raised for a malformed observable capability configuration."""
    pass


class PatternError(ConfigurationError):
    """Exception raised for malformed patterns and unknown type names."""
    pass


class CapabilityError(ConfigurationError):
    """Exception raised when an observable check has no capability to use."""
    pass


class DocumentError(ShapeCheckError):
    """Exception raised when a YAML document cannot be read or parsed."""
    pass
