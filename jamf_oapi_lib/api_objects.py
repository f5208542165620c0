#!/usr/bin/env python3

from .collection_resource import CollectionResource
from . import oapi_schemas


class Category(CollectionResource, oapi_schemas.Category):
    LIST_PATH = "v1/categories"
    GET_PATH = "v1/categories/{id}"
    POST_PATH = "v1/categories"
    PUT_PATH = "v1/categories/{id}"
    DELETE_PATH = "v1/categories/{id}"
    SORT_KEYS = ["id", "name", "priority"]
    FILTER_KEYS = ["id", "name", "priority"]


class Department(CollectionResource, oapi_schemas.Department):
    LIST_PATH = "v1/departments"
    GET_PATH = "v1/departments/{id}"
    POST_PATH = "v1/departments"
    PUT_PATH = "v1/departments/{id}"
    DELETE_PATH = "v1/departments/{id}"
    SORT_KEYS = ["id", "name"]
    FILTER_KEYS = ["id", "name"]


class Building(CollectionResource, oapi_schemas.Building):
    LIST_PATH = "v1/buildings"
    GET_PATH = "v1/buildings/{id}"
    POST_PATH = "v1/buildings"
    PUT_PATH = "v1/buildings/{id}"
    DELETE_PATH = "v1/buildings/{id}"
    SORT_KEYS = [
        "id",
        "name",
        "streetAddress1",
        "streetAddress2",
        "city",
        "stateProvince",
        "zipPostalCode",
        "country",
    ]
    FILTER_KEYS = SORT_KEYS


class MobileDevice(CollectionResource, oapi_schemas.MobileDeviceDetails):
    """Mobile devices can't be created or deleted through the Jamf Pro API,
    and are updated with PATCH"""

    LIST_PATH = "v1/mobile-devices"
    GET_PATH = "v1/mobile-devices/{id}/detail"
    PATCH_PATH = "v1/mobile-devices/{id}"


def object_types(object_type):
    """return the class for a type of Jamf Pro API object"""
    # define the relationship between the object types used on the command line
    # and their classes
    object_types = {
        "building": Building,
        "category": Category,
        "department": Department,
        "mobile_device": MobileDevice,
    }
    return object_types[object_type]
