#!/usr/bin/env python3

"""
Validation of values against the attribute definitions found in the
OAPI_PROPERTIES of OAPIObject subclasses.

Every function returns the valid, possibly converted, value or raises
InvalidDataError. Error messages may be overridden with msg=.
"""

import math
import re

from .exceptions import InvalidDataError

# primitive class names usable in OAPI_PROPERTIES
PRIMITIVE_CLASSES = ("string", "integer", "number", "boolean", "hash", "j_id")


def oapi_attr(value, attr_def, attr_name=None):
    """validate a single value against an attribute definition from OAPI_PROPERTIES.

    Multi-value attributes are validated one item at a time, so value here
    is never the whole array."""
    # nil/None is always ok unless the attribute is required
    if value is None:
        if attr_def.get("required"):
            raise InvalidDataError(f"A value is required for {attr_name}")
        return value

    attr_class = attr_def["class"]

    if isinstance(attr_class, type):
        value = class_instance(value, attr_class, attr_name)
    elif attr_class == "string":
        value = string(value, attr_name)
    elif attr_class == "integer":
        value = integer(value, attr_name)
    elif attr_class == "number":
        value = number(value, attr_name)
    elif attr_class == "boolean":
        value = boolean(value, attr_name)
    elif attr_class == "hash":
        value = hash_value(value, attr_name)
    elif attr_class == "j_id":
        value = j_id(value, attr_name)
    else:
        raise InvalidDataError(f"Unknown class '{attr_class}' for {attr_name}")

    if "enum" in attr_def:
        value = in_enum(
            value,
            attr_def["enum"],
            msg=(
                f"{value} is not in the allowed values for attribute {attr_name}. "
                f"Must be one of: {', '.join(str(x) for x in attr_def['enum'])}"
            ),
        )

    if attr_class in ("integer", "number"):
        number_range(value, attr_def, attr_name)

    if attr_class == "string":
        length(value, attr_def, attr_name)
        if "pattern" in attr_def:
            matches_pattern(value, attr_def["pattern"], attr_name)

    return value


def class_instance(value, klass, attr_name=None):
    """an instance of klass, or something klass can be built from"""
    if isinstance(value, klass):
        return value
    if isinstance(value, dict):
        if hasattr(klass, "OAPI_PROPERTIES"):
            value = object_data(value, klass)
        try:
            return klass(**value)
        except TypeError as error:
            raise InvalidDataError(
                f"Cannot make a {klass.__name__} for {attr_name} from {value!r}"
            ) from error
    if hasattr(klass, "to_jamf") and not hasattr(klass, "OAPI_PROPERTIES"):
        # simple value classes, e.g. Timestamp, take the raw value
        return klass(value)
    raise InvalidDataError(
        f"Value for {attr_name} must be a {klass.__name__} or a dict, not {type(value).__name__}"
    )


def object_data(data, klass):
    """validate every key of a dict meant for an OAPIObject subclass, returning
    the converted values. Missing required keys are left for klass to reject."""
    validated = {}
    for attr_name, value in data.items():
        attr_def = klass.OAPI_PROPERTIES.get(attr_name)
        if attr_def is None or not attr_def.get("multi") or value is None:
            validated[attr_name] = klass.validate_attr(attr_name, value)
            continue

        if not isinstance(value, (list, tuple)):
            raise InvalidDataError(f"Value for {attr_name} must be an Array")
        items = [klass.validate_attr(attr_name, item) for item in value]
        validated[attr_name] = array_items(items, attr_def, attr_name)
    return validated


def string(value, attr_name=None, msg=None):
    """a str"""
    if isinstance(value, str):
        return value
    raise InvalidDataError(msg or f"Value for {attr_name} must be a String")


def integer(value, attr_name=None, msg=None):
    """an int, or a str containing one. bools are not ints here."""
    if isinstance(value, bool):
        raise InvalidDataError(msg or f"Value for {attr_name} must be an Integer")
    if isinstance(value, int):
        return value
    if isinstance(value, str) and re.fullmatch(r"-?\d+", value.strip()):
        return int(value)
    raise InvalidDataError(msg or f"Value for {attr_name} must be an Integer")


def number(value, attr_name=None, msg=None):
    """an int or finite float, or a str containing one. JSON has no NaN or Infinity."""
    if isinstance(value, bool):
        raise InvalidDataError(msg or f"Value for {attr_name} must be a Number")
    if isinstance(value, str):
        try:
            value = int(value) if re.fullmatch(r"-?\d+", value.strip()) else float(value)
        except ValueError:
            pass
    if isinstance(value, int):
        return value
    if isinstance(value, float) and math.isfinite(value):
        return value
    raise InvalidDataError(msg or f"Value for {attr_name} must be a Number")


def boolean(value, attr_name=None, msg=None):
    """True or False, or the strings 'true' and 'false' in any case"""
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        return value.strip().lower() == "true"
    raise InvalidDataError(msg or f"Value for {attr_name} must be true or false")


def hash_value(value, attr_name=None, msg=None):
    """a dict"""
    if isinstance(value, dict):
        return value
    raise InvalidDataError(msg or f"Value for {attr_name} must be a Hash")


def j_id(value, attr_name=None, msg=None):
    """Jamf Pro API ids are integers carried as strings. -1 is sometimes
    used for 'none'."""
    if isinstance(value, bool):
        raise InvalidDataError(msg or f"Value for {attr_name} must be a Jamf id")
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str) and re.fullmatch(r"-?\d+", value.strip()):
        return value.strip()
    raise InvalidDataError(
        msg or f"Value for {attr_name} must be a Jamf id (an integer, or a string containing one)"
    )


def in_enum(value, enum, msg=None):
    """value must be one of the items in enum"""
    if value in enum:
        return value
    raise InvalidDataError(
        msg or f"Value must be one of: {', '.join(str(x) for x in enum)}"
    )


def number_range(value, attr_def, attr_name=None):
    """check minimum, maximum, exclusive_minimum, exclusive_maximum"""
    if "minimum" in attr_def and value < attr_def["minimum"]:
        raise InvalidDataError(
            f"Value for {attr_name} must be >= {attr_def['minimum']}"
        )
    if "maximum" in attr_def and value > attr_def["maximum"]:
        raise InvalidDataError(
            f"Value for {attr_name} must be <= {attr_def['maximum']}"
        )
    if "exclusive_minimum" in attr_def and value <= attr_def["exclusive_minimum"]:
        raise InvalidDataError(
            f"Value for {attr_name} must be > {attr_def['exclusive_minimum']}"
        )
    if "exclusive_maximum" in attr_def and value >= attr_def["exclusive_maximum"]:
        raise InvalidDataError(
            f"Value for {attr_name} must be < {attr_def['exclusive_maximum']}"
        )
    return value


def length(value, attr_def, attr_name=None):
    """check min_length, max_length of a string"""
    if "min_length" in attr_def and len(value) < attr_def["min_length"]:
        raise InvalidDataError(
            f"{attr_name} must be at least {attr_def['min_length']} characters long"
        )
    if "max_length" in attr_def and len(value) > attr_def["max_length"]:
        raise InvalidDataError(
            f"{attr_name} must be no more than {attr_def['max_length']} characters long"
        )
    return value


def matches_pattern(value, pattern, attr_name=None):
    """the whole string must match the regex"""
    if re.fullmatch(pattern, value):
        return value
    raise InvalidDataError(f"Value for {attr_name} does not match /{pattern}/")


def array_items(items, attr_def, attr_name=None):
    """check min_items, max_items of a whole array value"""
    if "min_items" in attr_def and len(items) < attr_def["min_items"]:
        raise InvalidDataError(
            f"{attr_name} must have at least {attr_def['min_items']} items"
        )
    if "max_items" in attr_def and len(items) > attr_def["max_items"]:
        raise InvalidDataError(
            f"{attr_name} may have no more than {attr_def['max_items']} items"
        )
    return items
