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

"""Pattern compilation.

Raw patterns come in two shapes:

* a string token chain such as ``"optional array observable number"``
* a mapping of property keys to nested patterns, optionally carrying the
  reserved control keys ``__type``, ``__required``, ``__nullable``,
  ``__elements``, ``__value`` and ``__allowedValues``

Both are compiled once into the frozen dataclasses below so the matcher never
has to re-inspect raw input. Malformed patterns and unknown type names are
reported here, before any value is looked at.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple, Union

from .exceptions import PatternError
from .type_registry import (
    ARRAY,
    CONTAINER_TYPES,
    FUNCTION,
    OBJECT,
    OBSERVABLE,
    PRIMITIVE_TYPES,
    is_known_type,
)

logger = logging.getLogger(__name__)


OPTIONAL = "optional"
NULLABLE = "nullable"
MODIFIERS = frozenset({OPTIONAL, NULLABLE})

TYPE_KEY = "__type"
REQUIRED_KEY = "__required"
NULLABLE_KEY = "__nullable"
ELEMENTS_KEY = "__elements"
VALUE_KEY = "__value"
ALLOWED_VALUES_KEY = "__allowedValues"
RESERVED_KEYS = frozenset(
    {TYPE_KEY, REQUIRED_KEY, NULLABLE_KEY, ELEMENTS_KEY, VALUE_KEY, ALLOWED_VALUES_KEY}
)

# Types whose properties are checked against the pattern's keys
PROPERTY_TYPES = frozenset({OBJECT, FUNCTION, OBSERVABLE})

MODIFIER = "modifier"
TYPE = "type"


@dataclass(frozen=True)
class Token:
    kind: str
    name: str


@dataclass(frozen=True)
class ChainPattern:
    tokens: Tuple[Token, ...]
    source: str


@dataclass(frozen=True)
class Field:
    key: str
    segments: Tuple[str, ...]
    pattern: "Pattern"


@dataclass(frozen=True)
class ObjectPattern:
    type_name: str = OBJECT
    required: bool = True
    nullable: bool = False
    fields: Tuple[Field, ...] = ()
    elements: Optional["Pattern"] = None
    value: Optional["Pattern"] = None


@dataclass(frozen=True)
class AllowedValuesPattern:
    literals: Tuple[Any, ...]
    required: bool = True
    nullable: bool = False


Pattern = Union[ChainPattern, ObjectPattern, AllowedValuesPattern]
COMPILED_TYPES = (ChainPattern, ObjectPattern, AllowedValuesPattern)


@dataclass(frozen=True)
class PatternNotice:
    """A key that compiles but is never checked by the matcher."""
    message: str
    pointer: Tuple[str, ...] = ()


def tokenize(source: str, name: str) -> Tuple[Token, ...]:
    """Split a string pattern into typed tokens and check its grammar.

    A chain is any number of modifiers followed by a type; a container type
    (``array``, ``observable``) may be followed by another chain describing
    its content.
    """
    words = source.split()
    if not words:
        raise PatternError(f"{name} has an invalid pattern: empty string was given as type!", name)

    tokens = []
    for word in words:
        if word in MODIFIERS:
            tokens.append(Token(MODIFIER, word))
        elif is_known_type(word):
            tokens.append(Token(TYPE, word))
        else:
            raise PatternError(
                f"{name} has an invalid pattern: unknown type '{word}' in '{source}'!", name
            )

    for index, token in enumerate(tokens[:-1]):
        if token.kind == TYPE and token.name not in CONTAINER_TYPES:
            raise PatternError(
                f"{name} has an invalid pattern: '{token.name}' cannot be followed by "
                f"'{' '.join(words[index + 1:])}' in '{source}'!",
                name,
            )
    if tokens[-1].kind == MODIFIER:
        raise PatternError(
            f"{name} has an invalid pattern: '{tokens[-1].name}' has to be followed by a type in '{source}'!",
            name,
        )

    return tuple(tokens)


def _flag(raw: Mapping, key: str, default: bool, name: str) -> bool:
    value = raw.get(key, default)
    if not isinstance(value, bool):
        raise PatternError(f"{name} has an invalid pattern: '{key}' has to be a boolean, got {value!r}!", name)
    return value


def _split_key(key: Any, name: str) -> Tuple[str, ...]:
    if not isinstance(key, str):
        raise PatternError(f"{name} has an invalid pattern: property key {key!r} has to be a string!", name)
    segments = tuple(key.split("."))
    if not all(segments):
        raise PatternError(f"{name} has an invalid pattern: malformed property path '{key}'!", name)
    return segments


def _ignored(message: str, pointer: Tuple[str, ...], notices: Optional[List[PatternNotice]]) -> None:
    logger.warning(message)
    if notices is not None:
        notices.append(PatternNotice(message=message, pointer=pointer))


def _compile_mapping(
    raw: Mapping,
    name: str,
    pointer: Tuple[str, ...],
    notices: Optional[List[PatternNotice]],
) -> Pattern:
    required = _flag(raw, REQUIRED_KEY, True, name)
    nullable = _flag(raw, NULLABLE_KEY, False, name)

    if ALLOWED_VALUES_KEY in raw:
        literals = raw[ALLOWED_VALUES_KEY]
        if not isinstance(literals, (list, tuple)):
            raise PatternError(
                f"{name} has an invalid pattern: '{ALLOWED_VALUES_KEY}' has to be an array, got {literals!r}!",
                name,
            )
        logger.debug(f"{name}: compiled allowed values {literals!r}")
        return AllowedValuesPattern(literals=tuple(literals), required=required, nullable=nullable)

    type_name = raw.get(TYPE_KEY, OBJECT)
    if not is_known_type(type_name):
        raise PatternError(
            f"{name} has an invalid pattern: unknown type {type_name!r}. "
            f"Valid types: {', '.join(sorted(PRIMITIVE_TYPES))}!",
            name,
        )

    elements = None
    if ELEMENTS_KEY in raw:
        elements = _compile(raw[ELEMENTS_KEY], f"{name}[]", pointer + (ELEMENTS_KEY,), notices)
        if type_name != ARRAY:
            _ignored(f"{name}: '{ELEMENTS_KEY}' is ignored for type '{type_name}'", pointer + (ELEMENTS_KEY,), notices)

    value = None
    if VALUE_KEY in raw:
        value = _compile(raw[VALUE_KEY], f"{name}()", pointer + (VALUE_KEY,), notices)
        if type_name != OBSERVABLE:
            _ignored(f"{name}: '{VALUE_KEY}' is ignored for type '{type_name}'", pointer + (VALUE_KEY,), notices)

    fields = []
    for key, sub_pattern in raw.items():
        if key in RESERVED_KEYS:
            continue
        segments = _split_key(key, name)
        field_pattern = _compile(sub_pattern, f"{name}.{key}", pointer + (key,), notices)
        fields.append(Field(key=key, segments=segments, pattern=field_pattern))

    if fields and type_name not in PROPERTY_TYPES:
        _ignored(
            f"{name}: properties {[f.key for f in fields]} are ignored for type '{type_name}'",
            pointer,
            notices,
        )

    logger.debug(f"{name}: compiled '{type_name}' pattern with {len(fields)} field(s)")
    return ObjectPattern(
        type_name=type_name,
        required=required,
        nullable=nullable,
        fields=tuple(fields),
        elements=elements,
        value=value,
    )


def _compile(
    raw: Any,
    name: str,
    pointer: Tuple[str, ...],
    notices: Optional[List[PatternNotice]],
) -> Pattern:
    if isinstance(raw, COMPILED_TYPES):
        return raw
    if isinstance(raw, str):
        return ChainPattern(tokens=tokenize(raw, name), source=raw)
    if isinstance(raw, Mapping):
        return _compile_mapping(raw, name, pointer, notices)
    raise PatternError(
        f"{name} has an invalid pattern: {raw!r} is neither a string nor a mapping!", name
    )


def compile_pattern(
    raw: Any,
    name: str = "configObject",
    notices: Optional[List[PatternNotice]] = None,
) -> Pattern:
    """Compile a raw pattern; already compiled patterns are returned as-is.

    Keys that compile but can never be checked (``__elements`` on a
    non-array, ``__value`` on a non-observable, properties on a scalar type)
    are logged as warnings and, when ``notices`` is given, appended to it.

    Raises:
        PatternError: If the pattern, or any nested pattern, is malformed.
    """
    return _compile(raw, name, (), notices)
