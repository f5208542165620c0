#!/usr/bin/env python3

from ..oapi_object import OAPIObject


class Department(OAPIObject):
    """OAPI Object Model for: Department"""

    OAPI_PROPERTIES = {
        "id": {"class": "j_id", "identifier": "primary", "readonly": True},
        "name": {"class": "string", "identifier": True, "required": True, "min_length": 1},
    }
