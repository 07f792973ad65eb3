"""Pytest fixtures for the catalog pipeline tests."""

import pytest

from src.integrations.clients.mocks.local_catalog import LocalCatalogClient
from tests.helpers import RecordingIndicator, RecordingPresenter, make_png


@pytest.fixture
def png():
    return make_png


@pytest.fixture
def source():
    return LocalCatalogClient()


@pytest.fixture
def presenter():
    return RecordingPresenter()


@pytest.fixture
def indicator():
    return RecordingIndicator()
