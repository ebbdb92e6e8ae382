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

"""Observable capability supplied by a host reactive library.

The matcher only needs two things from such a library: a predicate telling
whether a value is an observable wrapper, and a way to read its current
content. Both come from a ``ko``/``knockout`` style object passed to
:func:`install_observable_capability` or :meth:`ObservableCapability.from_config`.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, Optional

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

CONFIG_KEYS = ("ko", "knockout")
PREDICATE_NAMES = ("isObservable", "is_observable")


def _lookup(container: Any, key: str) -> Any:
    if isinstance(container, Mapping):
        return container.get(key)
    return getattr(container, key, None)


def _is_config_object(value: Any) -> bool:
    if value is None or isinstance(value, (str, bytes, int, float, bool)):
        return False
    return not callable(value) or isinstance(value, Mapping)


@dataclass(frozen=True)
class ObservableCapability:
    """Observable detection and unwrapping provided by the host."""

    is_observable: Callable[[Any], bool]
    unwrapper: Optional[Callable[[Any], Any]] = None

    def unwrap(self, value: Any) -> Any:
        """Return the current content of an observable."""
        if self.unwrapper is not None:
            return self.unwrapper(value)
        return value()

    @classmethod
    def from_library(cls, library: Any, key: str = "ko") -> "ObservableCapability":
        """Build a capability from a knockout-like library object."""
        if not _is_config_object(library):
            raise ConfigurationError(f"Invalid '{key}' parameter given: it has to be an object!")

        predicate = None
        for predicate_name in PREDICATE_NAMES:
            predicate = _lookup(library, predicate_name)
            if predicate is not None:
                break
        if not callable(predicate):
            raise ConfigurationError(
                f"Invalid '{key}' parameter given: 'isObservable' has to be a function!"
            )

        unwrapper = _lookup(library, "unwrap")
        if unwrapper is not None and not callable(unwrapper):
            raise ConfigurationError(f"Invalid '{key}' parameter given: 'unwrap' has to be a function!")

        return cls(is_observable=predicate, unwrapper=unwrapper)

    @classmethod
    def from_config(cls, config: Any) -> "ObservableCapability":
        """Build a capability from ``{"ko": ...}`` or ``{"knockout": ...}``."""
        if not _is_config_object(config):
            raise ConfigurationError("The observable capability config has to be an object!")

        for key in CONFIG_KEYS:
            library = _lookup(config, key)
            if library is not None:
                return cls.from_library(library, key=key)

        raise ConfigurationError(
            f"The observable capability config has to contain one of: {', '.join(CONFIG_KEYS)}!"
        )


# Installed once by the host, read by every module-level match call
_installed: Optional[ObservableCapability] = None


def install_observable_capability(config: Any) -> ObservableCapability:
    """Install the process-wide observable capability (last install wins)."""
    global _installed
    capability = ObservableCapability.from_config(config)
    if _installed is not None:
        logger.debug("Replacing previously installed observable capability")
    _installed = capability
    return capability


def installed_capability() -> Optional[ObservableCapability]:
    """Return the process-wide observable capability, if any."""
    return _installed
