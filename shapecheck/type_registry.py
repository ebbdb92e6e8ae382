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

from __future__ import annotations

import datetime
import numbers
from decimal import Decimal
from typing import Any, Callable, Dict, FrozenSet, Optional, Sequence

from .capability import ObservableCapability
from .exceptions import CapabilityError, PatternError, PointerToken, ValidationError


STRING = "string"
NUMBER = "number"
BOOLEAN = "boolean"
OBJECT = "object"
FUNCTION = "function"
ARRAY = "array"
DATE = "date"
OBSERVABLE = "observable"

PRIMITIVE_TYPES: FrozenSet[str] = frozenset(
    {STRING, NUMBER, BOOLEAN, OBJECT, FUNCTION, ARRAY, DATE, OBSERVABLE}
)
# Types whose remaining string tokens describe a contained value
CONTAINER_TYPES: FrozenSet[str] = frozenset({ARRAY, OBSERVABLE})


def is_string(value: Any) -> bool:
    return isinstance(value, str)


def is_number(value: Any) -> bool:
    return isinstance(value, (numbers.Real, Decimal)) and not isinstance(value, bool)


def is_boolean(value: Any) -> bool:
    return isinstance(value, bool)


def is_object(value: Any) -> bool:
    """Anything structured: mappings, sequences, dates and plain instances."""
    if value is None or isinstance(value, (str, bytes, bool, numbers.Number)):
        return False
    return not callable(value)


def is_function(value: Any) -> bool:
    return callable(value)


def is_array(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def is_date(value: Any) -> bool:
    return isinstance(value, datetime.date)


def is_known_type(type_name: Any) -> bool:
    return isinstance(type_name, str) and type_name in PRIMITIVE_TYPES


class TypeRegistry:
    """Maps primitive type names to predicates.

    The set of names is fixed; only the ``observable`` predicate depends on
    the capability given at construction.
    """

    def __init__(self, capability: Optional[ObservableCapability] = None):
        self.capability = capability
        self._predicates: Dict[str, Callable[[Any], bool]] = {
            STRING: is_string,
            NUMBER: is_number,
            BOOLEAN: is_boolean,
            OBJECT: is_object,
            FUNCTION: is_function,
            ARRAY: is_array,
            DATE: is_date,
            OBSERVABLE: self._is_observable,
        }

    def _is_observable(self, value: Any) -> bool:
        if self.capability is None:
            raise CapabilityError(
                "Observable checking is unavailable: no observable capability is installed!"
            )
        return bool(self.capability.is_observable(value))

    def get_all_types(self) -> Sequence[str]:
        return sorted(self._predicates)

    def matches(self, type_name: str, value: Any) -> bool:
        """Return whether ``value`` satisfies ``type_name``."""
        predicate = self._predicates.get(type_name)
        if predicate is None:
            raise PatternError(
                f"Unknown type: '{type_name}'. Valid types: {', '.join(self.get_all_types())}!"
            )
        return predicate(value)

    def check(
        self,
        type_name: str,
        value: Any,
        name: str,
        pointer: Sequence[PointerToken] = (),
    ) -> None:
        """Raise ValidationError unless ``value`` satisfies ``type_name``."""
        try:
            ok = self.matches(type_name, value)
        except CapabilityError as exc:
            raise CapabilityError(f"{name}: {exc}", name, pointer) from None
        except PatternError as exc:
            raise PatternError(f"{name}: {exc}", name, pointer) from None
        if not ok:
            raise ValidationError(f"{name} should have {type_name} type!", name, pointer)
