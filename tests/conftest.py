"""Shared pytest fixtures for jamf_oapi_lib tests."""

import pytest
from unittest.mock import MagicMock

from jamf_oapi_lib.oapi_object import OAPIObject
from jamf_oapi_lib.oapi_schemas import ComputerInventoryFileVault, IdAndName


class Widget(OAPIObject):
    """A schema using every kind of attribute definition."""

    OAPI_PROPERTIES = {
        "id": {"class": "j_id", "identifier": "primary", "readonly": True},
        "name": {"class": "string", "required": True, "identifier": True},
        "tags": {"class": "string", "multi": True, "max_items": 3},
        "parts": {"class": IdAndName, "multi": True},
        "secret": {"class": "string", "writeonly": True},
        "enabled": {"class": "boolean"},
    }


@pytest.fixture
def file_vault_data():
    """Raw API data for a ComputerInventoryFileVault."""
    return {
        "computerId": "17",
        "name": "Mac-17",
        "personalRecoveryKey": "ABCD-EFGH-IJKL",
        "bootPartitionEncryptionDetails": {
            "partitionName": "Macintosh HD",
            "partitionFileVault2State": "ENCRYPTED",
            "partitionFileVault2Percent": 100,
        },
        "individualRecoveryKeyValidityStatus": "VALID",
        "institutionalRecoveryKeyPresent": False,
        "diskEncryptionConfigurationName": "Standard",
    }


@pytest.fixture
def file_vault(file_vault_data):
    """A ComputerInventoryFileVault as fetched from the API."""
    return ComputerInventoryFileVault(**file_vault_data)


@pytest.fixture
def widget():
    """A Widget as fetched from the API."""
    return Widget(
        id=3,
        name="gear",
        tags=["a", "b"],
        parts=[{"id": "1", "name": "cog"}],
        enabled=True,
    )


@pytest.fixture
def cnx():
    """A stand-in for a jamf_oapi_lib.api_connect.Connection."""
    return MagicMock()
