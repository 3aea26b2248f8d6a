"""Global fixtures for Garden Tracker tests."""

from unittest.mock import AsyncMock, patch

import pytest

pytest_plugins = "pytest_homeassistant_custom_component"


@pytest.fixture
def mock_store():
    """Patch the Store used by the StorageManager."""
    with patch(
        "custom_components.garden_tracker.storage_manager.Store"
    ) as mock_store_cls:
        mock_store_instance = mock_store_cls.return_value
        mock_store_instance.async_load = AsyncMock(return_value=None)
        mock_store_instance.async_save = AsyncMock()
        yield mock_store_instance

