#!/usr/bin/env python3

from ..oapi_object import OAPIObject


class IdAndName(OAPIObject):
    """OAPI Object Model for: IdAndName"""

    OAPI_PROPERTIES = {
        "id": {"class": "j_id", "identifier": "primary"},
        "name": {"class": "string"},
    }
