#!/usr/bin/env python3

from ..oapi_object import OAPIObject
from ..timestamp import Timestamp
from .extension_attribute import ExtensionAttribute


class MobileDeviceDetails(OAPIObject):
    """OAPI Object Model and Enums for: MobileDeviceDetails

    Based on the value of 'type', one of 'ios', 'appleTv' or 'android' is
    populated.

    Sub objects:
     - ExtensionAttribute

    Endpoints and privileges:
     - '/v1/mobile-devices/{id}:PATCH' needs permissions: Update Mobile Devices
     - '/v1/mobile-devices/{id}/detail:GET' needs permissions: Read Mobile Devices
    """

    TYPE_OPTIONS = ["ios", "appleTv", "android", "unknown"]

    OAPI_PROPERTIES = {
        "id": {"class": "j_id", "identifier": "primary"},
        "name": {"class": "string"},
        "assetTag": {"class": "string"},
        "lastInventoryUpdateTimestamp": {"class": Timestamp, "format": "date-time"},
        "osVersion": {"class": "string"},
        "osBuild": {"class": "string"},
        "softwareUpdateDeviceId": {"class": "string"},
        "serialNumber": {"class": "string"},
        "udid": {"class": "string"},
        "ipAddress": {"class": "string"},
        "wifiMacAddress": {"class": "string"},
        "bluetoothMacAddress": {"class": "string"},
        "isManaged": {"class": "boolean"},
        "initialEntryTimestamp": {"class": Timestamp, "format": "date-time"},
        "lastEnrollmentTimestamp": {"class": Timestamp, "format": "date-time"},
        "deviceOwnershipLevel": {"class": "string"},
        "site": {"class": "hash"},
        "extensionAttributes": {"class": ExtensionAttribute, "multi": True},
        "location": {"class": "hash"},
        "type": {"class": "string", "enum": TYPE_OPTIONS},
        "ios": {"class": "hash"},
        "appleTv": {"class": "hash"},
        "android": {"class": "hash"},
    }
