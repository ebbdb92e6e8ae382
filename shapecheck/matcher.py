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

"""Recursive matching of values against compiled patterns.

Matching stops at the first violation, raising a ValidationError whose
message starts with the path of the offending value:

* ``configObject`` for the root (or the name given by the caller)
* ``.prop`` appended when descending into a property
* ``[index]`` appended for array elements
* ``()`` appended for the unwrapped content of an observable
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional, Sequence, Tuple

from .capability import ObservableCapability, installed_capability
from .exceptions import CapabilityError, PatternError, PointerToken, ValidationError
from .patterns import (
    MODIFIER,
    NULLABLE,
    OPTIONAL,
    PROPERTY_TYPES,
    AllowedValuesPattern,
    ChainPattern,
    Field,
    ObjectPattern,
    Pattern,
    Token,
    compile_pattern,
)
from .type_registry import ARRAY, OBJECT, OBSERVABLE, TypeRegistry


DEFAULT_ROOT_NAME = "configObject"

Pointer = Tuple[PointerToken, ...]


class _Missing:
    """Marker for an absent value (a missing property)."""

    _instance: Optional["_Missing"] = None

    def __new__(cls) -> "_Missing":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING = _Missing()


def get_property(container: Any, key: str) -> Any:
    """Look up ``key`` on a mapping, or as an attribute on anything else."""
    if isinstance(container, Mapping):
        return container.get(key, MISSING)
    return getattr(container, key, MISSING)


def strict_equals(value: Any, literal: Any) -> bool:
    """Equality where booleans never equal numbers (``True != 1``)."""
    if value is literal:
        return True
    if isinstance(value, bool) != isinstance(literal, bool):
        return False
    return bool(value == literal)


class Matcher:
    """Matches values against patterns using an explicit observable capability."""

    def __init__(
        self,
        capability: Optional[ObservableCapability] = None,
        registry: Optional[TypeRegistry] = None,
    ):
        self.registry = registry if registry is not None else TypeRegistry(capability)

    @property
    def capability(self) -> Optional[ObservableCapability]:
        return self.registry.capability

    def match(self, value: Any, pattern: Any, name: str = DEFAULT_ROOT_NAME) -> None:
        """Check ``value`` against ``pattern``.

        Args:
            value: The value to check; pass ``MISSING`` for an absent value.
            pattern: A string pattern, a mapping pattern or a compiled Pattern.
            name: Root name used in error messages.

        Raises:
            ValidationError: On the first violation found.
            PatternError: If the pattern is malformed.
        """
        compiled = compile_pattern(pattern, name)
        self._match(value, compiled, name, ())

    # ---- dispatch ---------------------------------------------------------

    def _match(self, value: Any, pattern: Pattern, name: str, pointer: Pointer) -> None:
        if isinstance(pattern, ChainPattern):
            self._match_chain(value, pattern.tokens, 0, name, pointer)
        elif isinstance(pattern, AllowedValuesPattern):
            self._match_allowed_values(value, pattern, name, pointer)
        elif isinstance(pattern, ObjectPattern):
            self._match_object(value, pattern, name, pointer)
        else:
            raise PatternError(f"{name} has an invalid pattern: {pattern!r}!", name, pointer)

    @staticmethod
    def _is_settled(value: Any, required: bool, nullable: bool, name: str, pointer: Pointer) -> bool:
        """Handle absent and null values; True means nothing is left to check."""
        if value is MISSING:
            if not required:
                return True
            raise ValidationError(f"{name} is mandatory!", name, pointer)
        if value is None:
            if nullable:
                return True
            raise ValidationError(f"{name} shouldn't be null!", name, pointer)
        return False

    def _unwrap(self, value: Any, name: str, pointer: Pointer) -> Any:
        capability = self.capability
        if capability is None:
            raise CapabilityError(
                f"{name}: Observable checking is unavailable: no observable capability is installed!",
                name,
                pointer,
            )
        return capability.unwrap(value)

    # ---- string patterns --------------------------------------------------

    def _match_chain(
        self,
        value: Any,
        tokens: Sequence[Token],
        index: int,
        name: str,
        pointer: Pointer,
    ) -> None:
        token = tokens[index]
        if token.kind == MODIFIER:
            if token.name == OPTIONAL and value is MISSING:
                return
            if token.name == NULLABLE and value is None:
                return
            self._match_chain(value, tokens, index + 1, name, pointer)
            return

        self._is_settled(value, True, False, name, pointer)
        self.registry.check(token.name, value, name, pointer)

        index += 1
        if index == len(tokens):
            return
        if token.name == ARRAY:
            for element_index, element in enumerate(value):
                self._match_chain(
                    element, tokens, index, f"{name}[{element_index}]", pointer + (element_index,)
                )
        elif token.name == OBSERVABLE:
            self._match_chain(self._unwrap(value, name, pointer), tokens, index, f"{name}()", pointer)
        else:
            # Rejected by the tokenizer already; kept for hand-built chains.
            raise PatternError(
                f"{name} has an invalid pattern: '{token.name}' cannot be followed by further tokens!",
                name,
                pointer,
            )

    # ---- mapping patterns -------------------------------------------------

    def _match_allowed_values(
        self, value: Any, pattern: AllowedValuesPattern, name: str, pointer: Pointer
    ) -> None:
        if self._is_settled(value, pattern.required, pattern.nullable, name, pointer):
            return
        if not any(strict_equals(value, literal) for literal in pattern.literals):
            raise ValidationError(f"{name} value is not among the allowed ones!", name, pointer)

    def _match_object(self, value: Any, pattern: ObjectPattern, name: str, pointer: Pointer) -> None:
        if self._is_settled(value, pattern.required, pattern.nullable, name, pointer):
            return

        self.registry.check(pattern.type_name, value, name, pointer)

        if pattern.type_name == ARRAY:
            if pattern.elements is not None:
                for element_index, element in enumerate(value):
                    self._match(
                        element, pattern.elements, f"{name}[{element_index}]", pointer + (element_index,)
                    )
            return

        if pattern.type_name not in PROPERTY_TYPES:
            return

        for field in pattern.fields:
            self._match_field(value, field, name, pointer)

        if pattern.type_name == OBSERVABLE and pattern.value is not None:
            self._match(self._unwrap(value, name, pointer), pattern.value, f"{name}()", pointer)

    def _match_field(self, value: Any, field: Field, name: str, pointer: Pointer) -> None:
        current = value
        # Intermediate segments of a dotted key behave like nested object patterns
        for segment in field.segments[:-1]:
            current = get_property(current, segment)
            name = f"{name}.{segment}"
            pointer = pointer + (segment,)
            self._is_settled(current, True, False, name, pointer)
            self.registry.check(OBJECT, current, name, pointer)

        leaf = field.segments[-1]
        self._match(get_property(current, leaf), field.pattern, f"{name}.{leaf}", pointer + (leaf,))


def match(value: Any, pattern: Any, name: str = DEFAULT_ROOT_NAME) -> None:
    """Check ``value`` against ``pattern`` using the installed observable capability."""
    Matcher(installed_capability()).match(value, pattern, name)
