#!/usr/bin/env python3

from ..oapi_object import OAPIObject


class ExtensionAttribute(OAPIObject):
    """OAPI Object Model and Enums for: ExtensionAttribute

    Container objects:
     - MobileDeviceDetails
    """

    TYPE_OPTIONS = ["STRING", "INTEGER", "DATE"]

    OAPI_PROPERTIES = {
        "id": {"class": "j_id", "identifier": "primary"},
        "name": {"class": "string"},
        "type": {"class": "string", "enum": TYPE_OPTIONS},
        "value": {"class": "string", "multi": True},
        "extensionAttributeCollectionAllowed": {"class": "boolean"},
    }
