#!/usr/bin/env python3

from ..oapi_object import OAPIObject


class Category(OAPIObject):
    """OAPI Object Model for: Category

    Endpoints and privileges:
     - '/v1/categories:GET' needs permissions: Read Categories
     - '/v1/categories:POST' needs permissions: Create Categories
     - '/v1/categories/{id}:PUT' needs permissions: Update Categories
     - '/v1/categories/{id}:DELETE' needs permissions: Delete Categories
    """

    OAPI_PROPERTIES = {
        "id": {"class": "j_id", "identifier": "primary", "readonly": True},
        "name": {"class": "string", "identifier": True, "required": True, "min_length": 1},
        "priority": {"class": "integer", "required": True, "minimum": 1, "maximum": 20},
    }
