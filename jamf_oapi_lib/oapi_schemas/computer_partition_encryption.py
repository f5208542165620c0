#!/usr/bin/env python3

from ..oapi_object import OAPIObject


class ComputerPartitionEncryption(OAPIObject):
    """OAPI Object Model and Enums for: ComputerPartitionEncryption

    Container objects:
     - ComputerInventoryFileVault
    """

    PARTITION_FILE_VAULT2_STATE_OPTIONS = [
        "UNKNOWN",
        "UNENCRYPTED",
        "INELIGIBLE",
        "DECRYPTED",
        "DECRYPTING",
        "ENCRYPTED",
        "ENCRYPTING",
        "RESTART_NEEDED",
        "OPTIMIZING",
        "DECRYPTING_PAUSED",
        "ENCRYPTING_PAUSED",
    ]

    OAPI_PROPERTIES = {
        "partitionName": {"class": "string"},
        "partitionFileVault2State": {
            "class": "string",
            "enum": PARTITION_FILE_VAULT2_STATE_OPTIONS,
        },
        "partitionFileVault2Percent": {
            "class": "integer",
            "minimum": 0,
            "maximum": 100,
        },
    }
