"""Shared pytest fixtures for shapecheck tests."""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from shapecheck import capability as capability_module
from shapecheck.capability import ObservableCapability
from shapecheck.matcher import Matcher

from ._helpers import Observable, is_observable


@pytest.fixture
def ko():
    return SimpleNamespace(isObservable=is_observable, observable=Observable)


@pytest.fixture
def capability(ko):
    return ObservableCapability.from_config({"ko": ko})


@pytest.fixture
def matcher(capability):
    return Matcher(capability)


@pytest.fixture
def bare_matcher():
    return Matcher()


@pytest.fixture
def installed(monkeypatch, capability):
    """Install the fake capability process-wide for the duration of a test."""
    monkeypatch.setattr(capability_module, "_installed", capability)
    return capability


@pytest.fixture
def no_capability(monkeypatch):
    monkeypatch.setattr(capability_module, "_installed", None)


@pytest.fixture
def test_object():
    return {
        "a": "some string",
        "b": 42,
        "c": {},
        "d": [42, "cute little string"],
        "e": lambda: None,
        "f": Observable(3),
        "g": {
            "g1": "another string",
            "g2": Observable(12),
            "g3": 4,
        },
        "h": Observable({
            "h1": Observable(99),
            "h2": "even more strings are coming!",
        }),
        "i": True,
        "j": [1, 2, 3],
        "k": Observable(None),
    }
