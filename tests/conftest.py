"""Shared test fixtures for jwtkit."""

import os

import pytest


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep JWT_* variables from the host out of settings under test."""
    for name in list(os.environ):
        if name.startswith("JWT_"):
            monkeypatch.delenv(name)
