"""Root conftest — shared test configuration."""

import os

import pytest

# Ensure tests don't pick up a developer's logging setup
os.environ.setdefault("VM_ADMISSION_LOG_FORMAT", "text")
os.environ.setdefault("VM_ADMISSION_LOG_ACCEPTED", "true")

from vm_admission.config import get_settings  # noqa: E402


@pytest.fixture(autouse=True)
def _fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
