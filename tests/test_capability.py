"""Tests for installing the observable capability."""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from shapecheck import (
    ConfigurationError,
    ObservableCapability,
    ValidationError,
    install_observable_capability,
    installed_capability,
    match,
)

from ._helpers import Observable, is_observable


@pytest.fixture(autouse=True)
def _clean_capability(no_capability):
    """Every test starts without an installed capability."""


@pytest.mark.parametrize("key", ["ko", "knockout"])
def test_install_with_either_key(ko, key):
    capability = install_observable_capability({key: ko})
    assert installed_capability() is capability
    match({"f": Observable(3)}, {"f": "observable number"})


def test_install_from_attribute_object(ko):
    install_observable_capability(SimpleNamespace(knockout=ko))
    assert installed_capability().is_observable(Observable(1))


def test_snake_case_predicate_is_accepted():
    capability = ObservableCapability.from_config({"ko": {"is_observable": is_observable}})
    assert capability.is_observable(Observable(1))


def test_unwrap_defaults_to_calling_the_observable(capability):
    assert capability.unwrap(Observable("content")) == "content"


def test_library_unwrap_is_preferred():
    library = {"isObservable": lambda v: isinstance(v, list), "unwrap": lambda v: v[0]}
    capability = ObservableCapability.from_config({"ko": library})
    assert capability.unwrap(["first", "second"]) == "first"


def test_last_install_wins(ko):
    install_observable_capability({"ko": ko})
    install_observable_capability({"ko": {"isObservable": lambda value: False}})
    with pytest.raises(ValidationError, match=r"^configObject\.f should have observable type!$"):
        match({"f": Observable(3)}, {"f": "observable"})


@pytest.mark.parametrize("config", [None, "ko", 42, True])
def test_config_has_to_be_an_object(config):
    with pytest.raises(ConfigurationError, match="has to be an object"):
        install_observable_capability(config)


def test_config_needs_a_known_key(ko):
    with pytest.raises(ConfigurationError, match="has to contain one of: ko, knockout"):
        install_observable_capability({"jquery": ko})


def test_library_has_to_be_an_object():
    with pytest.raises(ConfigurationError, match="Invalid 'ko' parameter given: it has to be an object"):
        install_observable_capability({"ko": "knockout"})


@pytest.mark.parametrize("library", [{}, {"isObservable": True}, SimpleNamespace(isObservable="yes")])
def test_predicate_has_to_be_a_function(library):
    with pytest.raises(ConfigurationError, match="'isObservable' has to be a function"):
        install_observable_capability({"ko": library})


@pytest.mark.parametrize("unwrap", [1, "value", {}])
def test_unwrap_has_to_be_a_function(unwrap):
    with pytest.raises(ConfigurationError, match="Invalid 'knockout' parameter given: 'unwrap' has to be a function"):
        install_observable_capability({"knockout": {"isObservable": is_observable, "unwrap": unwrap}})


def test_failed_install_keeps_previous_capability(ko):
    capability = install_observable_capability({"ko": ko})
    with pytest.raises(ConfigurationError):
        install_observable_capability({"ko": {}})
    assert installed_capability() is capability
