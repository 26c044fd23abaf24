"""Shared test fixtures."""

from __future__ import annotations

import pytest

from osgardenlinux import Actuator, InMemorySecretReader, TemplateStore, load_templates, new_actuator


@pytest.fixture
def store() -> TemplateStore:
    """Provide the bundled script templates."""
    return load_templates()


@pytest.fixture
def secret_reader() -> InMemorySecretReader:
    reader = InMemorySecretReader()
    reader.add("shoot--dev--local", "cloud-config", {"kubeconfig": b"apiVersion: v1\n"})
    return reader


@pytest.fixture
def actuator(store: TemplateStore, secret_reader: InMemorySecretReader) -> Actuator:
    """Provide an actuator wired to the bundled templates and an in-memory secret reader."""
    return new_actuator(secret_reader, store=store)
