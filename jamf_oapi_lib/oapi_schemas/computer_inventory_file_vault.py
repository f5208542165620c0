#!/usr/bin/env python3

from ..oapi_object import OAPIObject
from .computer_partition_encryption import ComputerPartitionEncryption


class ComputerInventoryFileVault(OAPIObject):
    """OAPI Object Model and Enums for: ComputerInventoryFileVault

    Sub objects:
     - ComputerPartitionEncryption

    Endpoints and privileges:
     - '/v1/computers-inventory/{id}/filevault:GET' needs permissions:
       View Disk Encryption Recovery Key
    """

    INDIVIDUAL_RECOVERY_KEY_VALIDITY_STATUS_OPTIONS = [
        "VALID",
        "INVALID",
        "UNKNOWN",
        "NOT_APPLICABLE",
    ]

    OAPI_PROPERTIES = {
        "computerId": {"class": "string", "readonly": True},
        "name": {"class": "string"},
        "personalRecoveryKey": {"class": "string"},
        "bootPartitionEncryptionDetails": {"class": ComputerPartitionEncryption},
        "individualRecoveryKeyValidityStatus": {
            "class": "string",
            "enum": INDIVIDUAL_RECOVERY_KEY_VALIDITY_STATUS_OPTIONS,
        },
        "institutionalRecoveryKeyPresent": {"class": "boolean"},
        "diskEncryptionConfigurationName": {"class": "string"},
    }
