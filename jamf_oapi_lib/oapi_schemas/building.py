#!/usr/bin/env python3

from ..oapi_object import OAPIObject


class Building(OAPIObject):
    """OAPI Object Model for: Building

    Endpoints and privileges:
     - '/v1/buildings:GET' needs permissions: Read Buildings
     - '/v1/buildings:POST' needs permissions: Create Buildings
     - '/v1/buildings/{id}:PUT' needs permissions: Update Buildings
     - '/v1/buildings/{id}:DELETE' needs permissions: Delete Buildings
    """

    OAPI_PROPERTIES = {
        "id": {"class": "j_id", "identifier": "primary", "readonly": True},
        "name": {"class": "string", "identifier": True, "required": True, "min_length": 1},
        "streetAddress1": {"class": "string"},
        "streetAddress2": {"class": "string"},
        "city": {"class": "string"},
        "stateProvince": {"class": "string"},
        "zipPostalCode": {"class": "string"},
        "country": {"class": "string"},
    }
