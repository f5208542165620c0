#!/usr/bin/env python3

"""
CollectionResource: an OAPIObject that lives in a collection on the server,
e.g. /v1/categories, and can be listed, fetched, created, updated and deleted.

Subclasses combine this with a schema class, e.g.

    class Category(CollectionResource, oapi_schemas.Category):
        LIST_PATH = "v1/categories"
        ...

Paths are relative to the API base and may contain "{id}".
"""

import re
from urllib.parse import urlencode

from .exceptions import (
    InvalidDataError,
    MissingDataError,
    NoSuchItemError,
    UnknownAttributeError,
    UnsupportedError,
)
from .oapi_object import OAPIObject

# the comparison operators of RSQL filters
FILTER_KEY_RE = re.compile(r"([A-Za-z_][\w.]*)\s*(?:==|!=|=lt=|=le=|=gt=|=ge=|=in=|=out=|<=|>=|<|>)")


class CollectionResource(OAPIObject):
    """base class for Jamf Pro API objects that belong to a collection"""

    LIST_PATH = None
    GET_PATH = None
    POST_PATH = None
    PUT_PATH = None
    PATCH_PATH = None
    DELETE_PATH = None

    # when not empty, sort and filter keys must be in these
    SORT_KEYS = []
    FILTER_KEYS = []

    DEFAULT_PAGE_SIZE = 100
    MAX_PAGE_SIZE = 2000

    def __init__(self, cnx=None, creating_from_create=False, **data):
        self.cnx = cnx
        super().__init__(creating_from_create=creating_from_create, **data)

    # Class methods
    #####################################

    @classmethod
    def all(cls, cnx, sort=None, filter=None, page_size=None):
        """Return all items in the collection as raw dicts, one page at a time.

        sort is a string like "name:asc" or a list of them, filter an RSQL
        string like 'name=="Printers"'."""
        if not cls.LIST_PATH:
            raise UnsupportedError(f"{cls.__name__} objects can't be listed")

        page_size = page_size or cls.DEFAULT_PAGE_SIZE
        if not 1 <= page_size <= cls.MAX_PAGE_SIZE:
            raise InvalidDataError(f"page_size must be from 1 to {cls.MAX_PAGE_SIZE}")

        params = {}
        if sort:
            params["sort"] = cls._sort_param(sort)
        if filter:
            params["filter"] = cls._filter_param(filter)

        results = []
        page = 0
        while True:
            query = urlencode({"page": page, "page-size": page_size, **params})
            data = cnx.jp_get(f"{cls.LIST_PATH}?{query}") or {}
            page_results = data.get("results", [])
            results.extend(page_results)
            total = data.get("totalCount", len(results))
            if not page_results or len(results) >= total:
                break
            page += 1
        return results

    @classmethod
    def _sort_param(cls, sort):
        sorts = [sort] if isinstance(sort, str) else list(sort)
        for item in sorts:
            key = item.split(":")[0]
            if cls.SORT_KEYS and key not in cls.SORT_KEYS:
                raise InvalidDataError(
                    f"Can't sort {cls.__name__} by '{key}'. "
                    f"Must be one of: {', '.join(cls.SORT_KEYS)}"
                )
        return ",".join(sorts)

    @classmethod
    def _filter_param(cls, filter):
        if not isinstance(filter, str):
            raise InvalidDataError("filter must be an RSQL String")
        if cls.FILTER_KEYS:
            for key in FILTER_KEY_RE.findall(filter):
                if key not in cls.FILTER_KEYS:
                    raise InvalidDataError(
                        f"Can't filter {cls.__name__} by '{key}'. "
                        f"Must be one of: {', '.join(cls.FILTER_KEYS)}"
                    )
        return filter

    @classmethod
    def all_ids(cls, cnx, cached_list=None):
        """the ids of all items, as strings"""
        items = cached_list if cached_list is not None else cls.all(cnx)
        return [str(item["id"]) for item in items]

    @classmethod
    def map_all(cls, cnx, ident, to, cached_list=None):
        """a dict mapping one attribute of every item to another, e.g.
        map_all(cnx, "id", to="name")"""
        for attr_name in (ident, to):
            if attr_name not in cls.OAPI_PROPERTIES:
                raise UnknownAttributeError(
                    f"Unknown attribute: {attr_name} for {cls.__name__} objects"
                )
        items = cached_list if cached_list is not None else cls.all(cnx)
        return {item.get(ident): item.get(to) for item in items}

    @classmethod
    def valid_id(cls, cnx, searchterm=None, cached_list=None, **ident):
        """Return the id of the item matching one identifier, e.g. name="foo",
        or matching searchterm in any identifier. None if there's no match.
        String matches are case-insensitive."""
        if ident:
            if len(ident) > 1:
                raise InvalidDataError("Only one identifier may be given")
            key, value = next(iter(ident.items()))
            if key not in cls.identifiers():
                raise UnknownAttributeError(
                    f"{key} is not an identifier for {cls.__name__} objects. "
                    f"Must be one of: {', '.join(cls.identifiers())}"
                )
            keys = [key]
        elif searchterm is not None:
            value = searchterm
            keys = cls.identifiers()
        else:
            raise MissingDataError("An identifier or a searchterm is required")

        items = cached_list if cached_list is not None else cls.all(cnx)
        for key in keys:
            for item in items:
                if _matches(item.get(key), value):
                    return str(item["id"])
        return None

    @classmethod
    def fetch(cls, cnx, searchterm=None, **ident):
        """Return an instance of an existing item, looked up by one identifier
        or a searchterm."""
        if not cls.GET_PATH:
            raise UnsupportedError(f"{cls.__name__} objects can't be fetched")

        # no need for a list lookup
        if list(ident) == ["id"] and ident["id"] is not None:
            obj_id = str(ident["id"])
        else:
            obj_id = cls.valid_id(cnx, searchterm, **ident)
        if not obj_id:
            description = searchterm if searchterm is not None else ident
            raise NoSuchItemError(f"No {cls.__name__} found matching {description}")

        data = cnx.jp_get(cls.GET_PATH.format(id=obj_id))
        return cls(cnx=cnx, **data)

    @classmethod
    def create(cls, cnx, **data):
        """Return a new, unsaved instance. Call save() to create it in Jamf Pro."""
        if not cls.POST_PATH:
            raise UnsupportedError(f"{cls.__name__} objects can't be created")
        return cls(cnx=cnx, creating_from_create=True, **data)

    @classmethod
    def delete_ids(cls, cnx, *ids):
        """delete items by id"""
        if not cls.DELETE_PATH:
            raise UnsupportedError(f"{cls.__name__} objects can't be deleted")
        for obj_id in ids:
            cnx.jp_delete(cls.DELETE_PATH.format(id=obj_id))

    # Instance methods
    #####################################

    def _ident_value(self):
        return self._oapi_values.get(self.primary_identifier() or "id")

    def save(self):
        """Create or update this item in Jamf Pro. Returns its id."""
        if not self.mutable():
            raise UnsupportedError(f"{type(self).__name__} objects are read-only")
        if self.cnx is None:
            raise MissingDataError("No connection for saving")

        if self._ident_value() is None:
            return self._create_in_jamf()

        if self.unsaved_changes_present():
            self._update_in_jamf()
            self.clear_unsaved_changes()
        return self._ident_value()

    def _create_in_jamf(self):
        missing = self.missing_required_attributes()
        if missing:
            raise MissingDataError(
                f"Missing required attributes for {type(self).__name__}: {', '.join(missing)}"
            )

        result = self.cnx.jp_post(self.POST_PATH, self.to_jamf())
        new_id = str(result["id"])
        self._oapi_values[self.primary_identifier() or "id"] = new_id
        self.clear_unsaved_changes()
        return new_id

    def _update_in_jamf(self):
        obj_id = self._ident_value()
        if self.PATCH_PATH:
            self.cnx.jp_patch(self.PATCH_PATH.format(id=obj_id), self.to_jamf_changes_only())
        elif self.PUT_PATH:
            self.cnx.jp_put(self.PUT_PATH.format(id=obj_id), self.to_jamf())
        else:
            raise UnsupportedError(f"{type(self).__name__} objects can't be updated")

    def delete(self):
        """delete this item from Jamf Pro"""
        if self._ident_value() is None:
            raise MissingDataError(f"This {type(self).__name__} has not been saved")
        self.delete_ids(self.cnx, self._ident_value())


def _matches(candidate, value):
    if candidate is None:
        return False
    if isinstance(candidate, str) and isinstance(value, str):
        return candidate.lower() == value.lower()
    return str(candidate) == str(value)
