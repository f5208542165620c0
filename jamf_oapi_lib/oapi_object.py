#!/usr/bin/env python3

"""
OAPIObject: the superclass of all objects modelled on the Jamf Pro API's
OpenAPI schema (see jamf_oapi_lib.oapi_schemas).

Subclasses declare an OAPI_PROPERTIES dict, one entry per attribute, e.g.

    OAPI_PROPERTIES = {
        "id": {"class": "j_id", "identifier": "primary", "readonly": True},
        "name": {"class": "string", "required": True},
        "priority": {"class": "integer", "minimum": 1, "maximum": 20},
        "siteIds": {"class": "j_id", "multi": True},
    }

When the subclass is created, a property is defined for every attribute:
the getter (array values come back as a tuple copy), and unless the attribute
is readonly or the class is Immutable, a validating setter that records the
change. Array attributes also get <name>_append, <name>_prepend,
<name>_insert, <name>_delete_at and <name>_delete_if methods. Boolean
attributes get an is_<name> alias.

Keys of an attribute definition:
    class: "string", "integer", "number", "boolean", "hash", "j_id",
        or a class (an OAPIObject subclass, or a value class like Timestamp)
    multi: the value is an array of the class
    required, readonly, writeonly: bools
    identifier: "primary", or True for other unique identifiers
    enum: list of allowed values
    minimum, maximum, exclusive_minimum, exclusive_maximum: numbers
    min_length, max_length, pattern: string constraints
    min_items, max_items: array constraints
    format: informational, e.g. "date-time"
"""

import json

from . import validate
from .exceptions import InvalidDataError, UnknownAttributeError, UnsupportedError


class OAPIObject:
    """base class for objects with an OAPI_PROPERTIES definition"""

    OAPI_PROPERTIES = {}

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        cls.parse_oapi_properties()

    # Class methods
    #####################################

    @classmethod
    def mutable(cls):
        """By default OAPIObjects are mutable, though some attributes may not be.
        Subclasses that also inherit from Immutable return False, which means no
        setters are created and changes are never tracked."""
        return True

    @classmethod
    def required_attributes(cls):
        """names of attributes that must have a value when creating new instances"""
        return [
            attr_name
            for attr_name, attr_def in cls.OAPI_PROPERTIES.items()
            if attr_def.get("required")
        ]

    @classmethod
    def identifiers(cls):
        """names of attributes that uniquely identify an instance"""
        return [
            attr_name
            for attr_name, attr_def in cls.OAPI_PROPERTIES.items()
            if attr_def.get("identifier")
        ]

    @classmethod
    def primary_identifier(cls):
        for attr_name, attr_def in cls.OAPI_PROPERTIES.items():
            if attr_def.get("identifier") == "primary":
                return attr_name
        return None

    @classmethod
    def parse_oapi_properties(cls):
        """create getters and setters for this class based on its OAPI_PROPERTIES"""
        if cls.__dict__.get("_oapi_properties_parsed"):
            return

        got_primary = False
        for attr_name, attr_def in cls.OAPI_PROPERTIES.items():
            attr_class = attr_def.get("class")
            if not isinstance(attr_class, type) and attr_class not in validate.PRIMITIVE_CLASSES:
                raise UnsupportedError(
                    f"{cls.__name__}.{attr_name} has unknown class '{attr_class}'"
                )

            # there can be only one
            if attr_def.get("identifier") == "primary":
                if got_primary:
                    raise UnsupportedError(
                        f"{cls.__name__}: Two identifiers marked as primary"
                    )
                got_primary = True

            getter = None if attr_def.get("writeonly") else _make_getter(attr_name, attr_def)

            setter = None
            if cls.mutable() and not attr_def.get("readonly"):
                if attr_def.get("multi"):
                    setter = _make_array_setter(attr_name, attr_def)
                    _add_array_methods(cls, attr_name, attr_def)
                else:
                    setter = _make_setter(attr_name)

            setattr(cls, attr_name, property(getter, setter))

            # all booleans get predicate aliases
            if attr_class == "boolean" and getter:
                setattr(cls, f"is_{attr_name}", property(getter))

        cls._oapi_properties_parsed = True

    @classmethod
    def validate_attr(cls, attr_name, value):
        """Used by setters and create to validate new values. Returns the valid,
        possibly converted, value. Only validates single values: multi-value
        setters call this for each item."""
        attr_def = cls.OAPI_PROPERTIES.get(attr_name)
        if attr_def is None:
            raise UnknownAttributeError(
                f"Unknown attribute: {attr_name} for {cls.__name__} objects"
            )
        return validate.oapi_attr(value, attr_def, attr_name)

    # Constructor
    #####################################

    def __init__(self, creating_from_create=False, **data):
        """Make an instance. data normally comes from the API, and the new
        instance has no unsaved changes. With creating_from_create, the data
        goes through the setters, so every supplied value is an unsaved change."""
        self._oapi_values = {}
        self._unsaved_changes = {}

        if not creating_from_create:
            self.parse_init_data(data)
            return

        for attr_name in data:
            if attr_name not in self.OAPI_PROPERTIES:
                raise UnknownAttributeError(
                    f"Unknown attribute: {attr_name} for {type(self).__name__} objects"
                )
        for attr_name, attr_def in self.OAPI_PROPERTIES.items():
            # required values are enforced when saving
            if attr_name not in data:
                continue
            if attr_def.get("readonly") or not self.mutable():
                raise UnsupportedError(
                    f"{attr_name} is read-only for {type(self).__name__} objects"
                )
            setattr(self, attr_name, data[attr_name])

    # Instance methods
    #####################################

    def unsaved_changes(self):
        """all unsaved changes, including those of embedded OAPIObjects.

        Own changes are {attr_name: {"old": old_value, "new": new_value}}.
        An embedded object with changes of its own appears as
        {attr_name: <its unsaved_changes>}, and for arrays of embedded
        objects, {attr_name: {index: <item's unsaved_changes>}}."""
        if not self.mutable():
            return {}

        changes = {
            name: {key: _detached(value) for key, value in change.items()}
            for name, change in self._unsaved_changes.items()
        }

        for attr_name, attr_def in self.OAPI_PROPERTIES.items():
            # replaced values are already recorded as a whole
            if attr_name in changes or not isinstance(attr_def["class"], type):
                continue

            value = self._oapi_values.get(attr_name)
            if attr_def.get("multi"):
                item_changes = {}
                for index, item in enumerate(value or []):
                    if isinstance(item, OAPIObject):
                        sub_changes = item.unsaved_changes()
                        if sub_changes:
                            item_changes[index] = sub_changes
                if item_changes:
                    changes[attr_name] = item_changes
            elif isinstance(value, OAPIObject):
                sub_changes = value.unsaved_changes()
                if sub_changes:
                    changes[attr_name] = sub_changes
        return changes

    def unsaved_changes_present(self):
        """True if we, or any of our embedded objects, have unsaved changes"""
        if not self.mutable():
            return False
        return bool(self.unsaved_changes())

    def clear_unsaved_changes(self):
        if not self.mutable():
            return

        for attr_name, attr_def in self.OAPI_PROPERTIES.items():
            if not isinstance(attr_def["class"], type):
                continue
            value = self._oapi_values.get(attr_name)
            items = (value or []) if attr_def.get("multi") else [value]
            for item in items:
                if isinstance(item, OAPIObject):
                    item.clear_unsaved_changes()
        self._unsaved_changes = {}

    def missing_required_attributes(self):
        """required attributes that have no value"""
        return [
            attr_name
            for attr_name in self.required_attributes()
            if self._oapi_values.get(attr_name) is None
        ]

    def to_jamf(self):
        """The data to be sent to the API, as a dict to be converted to JSON"""
        data = {}
        for attr_name, attr_def in self.OAPI_PROPERTIES.items():
            raw_value = self._oapi_values.get(attr_name)
            if attr_def.get("multi"):
                data[attr_name] = self._multi_to_jamf(raw_value, attr_def)
            else:
                data[attr_name] = self._single_to_jamf(raw_value, attr_def)
        return data

    def to_jamf_changes_only(self):
        """The changes to be sent to the API, as a dict to be converted to JSON.
        Only useful with PATCH endpoints. Returns None for immutable classes."""
        if not self.mutable():
            return None

        data = {}
        for attr_name, changes in self.unsaved_changes().items():
            attr_def = self.OAPI_PROPERTIES[attr_name]

            # readonly attributes can't be changed
            if attr_def.get("readonly"):
                continue

            # only an embedded object (or items of an array of them) changed
            if attr_name not in self._unsaved_changes:
                value = self._oapi_values.get(attr_name)
                if attr_def.get("multi"):
                    data[attr_name] = self._multi_to_jamf(value, attr_def)
                else:
                    sub_data = value.to_jamf_changes_only()
                    if sub_data:
                        data[attr_name] = sub_data
                continue

            raw_value = changes["new"]
            if attr_def.get("multi"):
                data[attr_name] = self._multi_to_jamf(raw_value, attr_def)
                continue

            cooked_value = self._single_to_jamf(raw_value, attr_def)
            if cooked_value is None:
                continue
            data[attr_name] = cooked_value
        return data

    def pretty_jamf_json(self):
        """Print the JSON version of the to_jamf output"""
        print(json.dumps(self.to_jamf(), indent=2))

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self.to_jamf() == other.to_jamf()

    __hash__ = None

    def __repr__(self):
        ident = self.primary_identifier()
        if ident and self._oapi_values.get(ident) is not None:
            return f"<{type(self).__name__} {ident}={self._oapi_values[ident]!r}>"
        return f"<{type(self).__name__}>"

    # Private instance methods
    #####################################

    def _note_unsaved_change(self, attr_name, old_value):
        if not self.mutable():
            return

        new_value = _detached(self._oapi_values.get(attr_name))
        if attr_name in self._unsaved_changes:
            self._unsaved_changes[attr_name]["new"] = new_value
        else:
            self._unsaved_changes[attr_name] = {
                "old": _detached(old_value),
                "new": new_value,
            }

    def _multi_value(self, attr_name):
        """the stored list for a multi-value attribute, created if needed"""
        if not isinstance(self._oapi_values.get(attr_name), list):
            self._oapi_values[attr_name] = []
        return self._oapi_values[attr_name]

    def parse_init_data(self, data):
        """populate our attributes from the parsed API JSON data"""
        for attr_name, attr_def in self.OAPI_PROPERTIES.items():
            if attr_name not in data:
                if attr_def.get("required"):
                    raise InvalidDataError(
                        f"Initialization must include the key '{attr_name}'"
                    )
                continue

            if attr_def.get("multi"):
                raw_array = data[attr_name] or []
                value = [
                    self._parse_single_init_value(v, attr_name, attr_def)
                    for v in raw_array
                ]
            else:
                value = self._parse_single_init_value(data[attr_name], attr_name, attr_def)
            self._oapi_values[attr_name] = value

    def _parse_single_init_value(self, api_value, attr_name, attr_def):
        """parse one value from the API into an attribute, or an item of a
        multi-value attribute"""
        # we do get None from the API, and it should stay None
        if api_value is None:
            return None

        if "enum" in attr_def:
            return validate.in_enum(
                api_value,
                attr_def["enum"],
                msg=(
                    f"{api_value} is not in the allowed values for attribute {attr_name}. "
                    f"Must be one of: {', '.join(str(x) for x in attr_def['enum'])}"
                ),
            )

        attr_class = attr_def["class"]
        if isinstance(attr_class, type):
            if isinstance(api_value, attr_class):
                return api_value
            if isinstance(api_value, dict) and issubclass(attr_class, OAPIObject):
                return attr_class(**api_value)
            return attr_class(api_value)

        if attr_class == "j_id":
            return str(api_value)

        return api_value

    @staticmethod
    def _single_to_jamf(raw_value, attr_def):
        """call to_jamf on a single value if its class has one"""
        if not isinstance(attr_def["class"], type) or raw_value is None:
            return raw_value
        data = raw_value.to_jamf()
        if isinstance(data, dict) and not data:
            return None
        return data

    @classmethod
    def _multi_to_jamf(cls, raw_array, attr_def):
        cooked = (cls._single_to_jamf(raw_value, attr_def) for raw_value in raw_array or [])
        return [value for value in cooked if value is not None]


class Immutable:
    """Mix in ahead of OAPIObject for classes that can't be changed,
    e.g. class Foo(Immutable, OAPIObject)"""

    @classmethod
    def mutable(cls):
        return False


# Accessor factories, used by parse_oapi_properties
#####################################


def _detached(value):
    """a copy of an array value, so change records never share the stored list"""
    if isinstance(value, list):
        return list(value)
    return value


def _make_getter(attr_name, attr_def):
    if attr_def.get("multi"):
        # no direct editing of the list
        def getter(self):
            return tuple(self._multi_value(attr_name))

    else:

        def getter(self):
            return self._oapi_values.get(attr_name)

    getter.__name__ = attr_name
    return getter


def _make_setter(attr_name):
    def setter(self, new_value):
        new_value = self.validate_attr(attr_name, new_value)
        old_value = self._oapi_values.get(attr_name)
        if new_value == old_value:
            return

        self._oapi_values[attr_name] = new_value
        self._note_unsaved_change(attr_name, old_value)

    setter.__name__ = attr_name
    return setter


def _make_array_setter(attr_name, attr_def):
    def setter(self, new_value):
        if not isinstance(new_value, (list, tuple)):
            raise InvalidDataError("Value must be an Array")

        # validate each item of the new array
        new_value = [self.validate_attr(attr_name, item) for item in new_value]
        validate.array_items(new_value, attr_def, attr_name)

        old_value = self._multi_value(attr_name)
        if new_value == old_value:
            return

        self._oapi_values[attr_name] = new_value
        self._note_unsaved_change(attr_name, old_value)

    setter.__name__ = attr_name
    return setter


def _add_array_methods(cls, attr_name, attr_def):
    """<name>_append, _prepend, _insert, _delete_at, _delete_if"""

    def append(self, new_value):
        new_value = self.validate_attr(attr_name, new_value)
        array = self._multi_value(attr_name)
        validate.array_items(array + [new_value], attr_def, attr_name)
        old_array = list(array)
        array.append(new_value)
        self._note_unsaved_change(attr_name, old_array)

    def prepend(self, new_value):
        new_value = self.validate_attr(attr_name, new_value)
        array = self._multi_value(attr_name)
        validate.array_items(array + [new_value], attr_def, attr_name)
        old_array = list(array)
        array.insert(0, new_value)
        self._note_unsaved_change(attr_name, old_array)

    def insert(self, index, new_value):
        new_value = self.validate_attr(attr_name, new_value)
        array = self._multi_value(attr_name)
        validate.array_items(array + [new_value], attr_def, attr_name)
        old_array = list(array)
        array.insert(index, new_value)
        self._note_unsaved_change(attr_name, old_array)

    def delete_at(self, index):
        """remove and return the item at index, or None if there isn't one"""
        array = self._multi_value(attr_name)
        if not -len(array) <= index < len(array):
            return None
        old_array = list(array)
        deleted = array.pop(index)
        self._note_unsaved_change(attr_name, old_array)
        return deleted

    def delete_if(self, func):
        """remove all items for which func(item) is true"""
        array = self._multi_value(attr_name)
        old_array = list(array)
        array[:] = [item for item in array if not func(item)]
        if array != old_array:
            self._note_unsaved_change(attr_name, old_array)

    for suffix, method in (
        ("append", append),
        ("prepend", prepend),
        ("insert", insert),
        ("delete_at", delete_at),
        ("delete_if", delete_if),
    ):
        method.__name__ = f"{attr_name}_{suffix}"
        setattr(cls, method.__name__, method)
