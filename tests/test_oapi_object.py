"""Unit tests for jamf_oapi_lib.oapi_object module."""

import json

import pytest

from jamf_oapi_lib.exceptions import (
    InvalidDataError,
    UnknownAttributeError,
    UnsupportedError,
)
from jamf_oapi_lib.oapi_object import Immutable, OAPIObject
from jamf_oapi_lib.oapi_schemas import (
    ComputerInventoryFileVault,
    ComputerPartitionEncryption,
    IdAndName,
    MobileDeviceDetails,
)
from jamf_oapi_lib.timestamp import Timestamp

from conftest import Widget


class FrozenWidget(Immutable, OAPIObject):
    OAPI_PROPERTIES = {
        "name": {"class": "string"},
        "tags": {"class": "string", "multi": True},
    }


class TestPropertyGeneration:
    """Tests for the accessors made from OAPI_PROPERTIES."""

    def test_getters_return_parsed_values(self, file_vault):
        assert file_vault.name == "Mac-17"
        assert file_vault.computerId == "17"
        assert file_vault.institutionalRecoveryKeyPresent is False

    def test_boolean_predicate_alias(self, file_vault):
        assert file_vault.is_institutionalRecoveryKeyPresent is False
        file_vault.institutionalRecoveryKeyPresent = True
        assert file_vault.is_institutionalRecoveryKeyPresent is True

    def test_predicate_is_none_when_unset(self):
        assert Widget(name="w").is_enabled is None

    def test_no_predicate_for_non_booleans(self):
        assert not hasattr(ComputerInventoryFileVault, "is_name")

    def test_readonly_attribute_has_no_setter(self, file_vault):
        with pytest.raises(AttributeError):
            file_vault.computerId = "99"
        assert file_vault.computerId == "17"

    def test_writeonly_attribute_has_no_getter(self):
        w = Widget(name="w")
        w.secret = "hunter2"
        with pytest.raises(AttributeError):
            w.secret
        assert w.to_jamf()["secret"] == "hunter2"

    def test_array_getter_returns_a_copy(self, widget):
        tags = widget.tags
        assert tags == ("a", "b")
        assert isinstance(tags, tuple)
        assert widget.tags is not tags

    def test_array_getter_of_unset_attribute(self):
        assert Widget(name="w").tags == ()

    def test_array_methods_exist(self):
        for suffix in ("append", "prepend", "insert", "delete_at", "delete_if"):
            assert callable(getattr(Widget, f"tags_{suffix}"))

    def test_no_array_methods_for_readonly_or_single_values(self):
        assert not hasattr(Widget, "name_append")
        assert not hasattr(Widget, "id_append")

    def test_two_primary_identifiers_fail_at_class_creation(self):
        with pytest.raises(UnsupportedError, match="Two identifiers marked as primary"):

            class Broken(OAPIObject):
                OAPI_PROPERTIES = {
                    "id": {"class": "j_id", "identifier": "primary"},
                    "uuid": {"class": "string", "identifier": "primary"},
                }

    def test_unknown_class_fails_at_class_creation(self):
        with pytest.raises(UnsupportedError):

            class Broken(OAPIObject):
                OAPI_PROPERTIES = {"when": {"class": "datetime"}}

    def test_class_helpers(self):
        assert Widget.required_attributes() == ["name"]
        assert Widget.identifiers() == ["id", "name"]
        assert Widget.primary_identifier() == "id"
        assert ComputerInventoryFileVault.primary_identifier() is None
        assert Widget.mutable() is True
        assert FrozenWidget.mutable() is False


class TestChangeTracking:
    """Tests for unsaved change tracking."""

    def test_parsed_object_is_clean(self, file_vault):
        assert file_vault.unsaved_changes() == {}
        assert file_vault.unsaved_changes_present() is False

    def test_setting_same_value_twice_records_one_change(self, file_vault):
        file_vault.institutionalRecoveryKeyPresent = True
        file_vault.institutionalRecoveryKeyPresent = True
        assert file_vault.unsaved_changes() == {
            "institutionalRecoveryKeyPresent": {"old": False, "new": True}
        }

    def test_setting_current_value_is_a_noop(self, file_vault):
        file_vault.name = "Mac-17"
        assert file_vault.unsaved_changes_present() is False

    def test_original_old_value_is_kept(self, file_vault):
        file_vault.name = "first"
        file_vault.name = "second"
        assert file_vault.unsaved_changes() == {
            "name": {"old": "Mac-17", "new": "second"}
        }

    def test_nested_changes_are_merged(self, file_vault):
        file_vault.bootPartitionEncryptionDetails.partitionFileVault2Percent = 50
        assert file_vault.unsaved_changes() == {
            "bootPartitionEncryptionDetails": {
                "partitionFileVault2Percent": {"old": 100, "new": 50}
            }
        }
        assert file_vault.unsaved_changes_present() is True

    def test_changes_in_array_items_are_merged(self, widget):
        widget.parts[0].name = "sprocket"
        assert widget.unsaved_changes() == {
            "parts": {0: {"name": {"old": "cog", "new": "sprocket"}}}
        }

    def test_clear_unsaved_changes_is_recursive(self, file_vault, widget):
        file_vault.name = "renamed"
        file_vault.bootPartitionEncryptionDetails.partitionName = "Data"
        file_vault.clear_unsaved_changes()
        assert file_vault.unsaved_changes_present() is False
        assert file_vault.bootPartitionEncryptionDetails.unsaved_changes() == {}

        widget.parts[0].name = "sprocket"
        widget.clear_unsaved_changes()
        assert widget.unsaved_changes_present() is False

    def test_failed_validation_leaves_state_unchanged(self, file_vault):
        with pytest.raises(InvalidDataError):
            file_vault.individualRecoveryKeyValidityStatus = "MAYBE"
        assert file_vault.individualRecoveryKeyValidityStatus == "VALID"
        assert file_vault.unsaved_changes_present() is False

    def test_type_violation(self, file_vault):
        with pytest.raises(InvalidDataError):
            file_vault.name = 5

    def test_enum_violation_lists_allowed_values(self, file_vault):
        with pytest.raises(InvalidDataError) as exc_info:
            file_vault.individualRecoveryKeyValidityStatus = "MAYBE"
        assert "Must be one of: VALID, INVALID, UNKNOWN, NOT_APPLICABLE" in str(
            exc_info.value
        )

    def test_setting_nested_object_from_dict(self, file_vault):
        file_vault.bootPartitionEncryptionDetails = {"partitionName": "Data"}
        details = file_vault.bootPartitionEncryptionDetails
        assert isinstance(details, ComputerPartitionEncryption)
        assert details.partitionName == "Data"
        assert "bootPartitionEncryptionDetails" in file_vault.unsaved_changes()

    def test_nested_object_from_dict_is_validated(self, file_vault):
        original = file_vault.bootPartitionEncryptionDetails
        with pytest.raises(InvalidDataError):
            file_vault.bootPartitionEncryptionDetails = {"partitionFileVault2Percent": 500}
        with pytest.raises(InvalidDataError):
            file_vault.bootPartitionEncryptionDetails = {"partitionName": 42}
        with pytest.raises(InvalidDataError):
            file_vault.bootPartitionEncryptionDetails = {"partitionFileVault2State": "MELTED"}
        assert file_vault.bootPartitionEncryptionDetails is original
        assert file_vault.unsaved_changes_present() is False

    def test_nested_object_from_dict_converts_values(self, file_vault):
        file_vault.bootPartitionEncryptionDetails = {"partitionFileVault2Percent": "40"}
        details = file_vault.bootPartitionEncryptionDetails
        assert details.partitionFileVault2Percent == 40
        assert details.unsaved_changes_present() is False
        assert file_vault.unsaved_changes()["bootPartitionEncryptionDetails"]["new"] is details

    def test_nested_object_from_dict_rejects_unknown_keys(self, file_vault):
        with pytest.raises(UnknownAttributeError):
            file_vault.bootPartitionEncryptionDetails = {"partitionColour": "red"}

    def test_array_items_from_dicts_are_validated(self, widget):
        with pytest.raises(InvalidDataError):
            widget.parts_append({"id": "not-a-number", "name": "cog"})
        assert len(widget.parts) == 1


class TestArrayChanges:
    """Tests for the array setter methods."""

    def test_append_keeps_original_old_value(self, widget):
        widget.tags_append("c")
        assert widget.tags == ("a", "b", "c")
        assert widget.unsaved_changes() == {
            "tags": {"old": ["a", "b"], "new": ["a", "b", "c"]}
        }

    def test_successive_array_changes(self, widget):
        widget.tags_prepend("z")
        widget.tags_insert(1, "y")
        assert widget.tags == ("z", "y", "a", "b")
        assert widget.unsaved_changes()["tags"]["old"] == ["a", "b"]

    def test_delete_at(self, widget):
        assert widget.tags_delete_at(0) == "a"
        assert widget.tags == ("b",)
        assert widget.unsaved_changes()["tags"] == {"old": ["a", "b"], "new": ["b"]}

    def test_delete_at_out_of_range_is_not_a_change(self, widget):
        assert widget.tags_delete_at(5) is None
        assert widget.unsaved_changes_present() is False

    def test_delete_if(self, widget):
        widget.tags_delete_if(lambda tag: tag == "b")
        assert widget.tags == ("a",)
        assert "tags" in widget.unsaved_changes()

    def test_delete_if_without_matches_is_not_a_change(self, widget):
        widget.tags_delete_if(lambda tag: tag == "q")
        assert widget.unsaved_changes_present() is False

    def test_append_validates_item(self, widget):
        with pytest.raises(InvalidDataError):
            widget.tags_append(7)
        assert widget.tags == ("a", "b")

    def test_whole_array_setter(self, widget):
        widget.tags = ["x"]
        assert widget.tags == ("x",)
        assert widget.unsaved_changes() == {"tags": {"old": ["a", "b"], "new": ["x"]}}

    def test_whole_array_setter_requires_a_list(self, widget):
        with pytest.raises(InvalidDataError, match="Value must be an Array"):
            widget.tags = "x"

    def test_whole_array_setter_validates_items(self, widget):
        with pytest.raises(InvalidDataError):
            widget.tags = ["x", 1]
        assert widget.tags == ("a", "b")

    def test_whole_array_setter_checks_size(self, widget):
        with pytest.raises(InvalidDataError):
            widget.tags = ["1", "2", "3", "4"]

    def test_append_checks_size(self, widget):
        widget.tags_append("c")
        with pytest.raises(InvalidDataError):
            widget.tags_append("d")
        assert widget.tags == ("a", "b", "c")

    def test_same_array_is_a_noop(self, widget):
        widget.tags = ("a", "b")
        assert widget.unsaved_changes_present() is False

    def test_change_record_does_not_expose_the_stored_list(self, widget):
        widget.tags_append("c")
        widget.unsaved_changes()["tags"]["new"].append("injected")
        widget.unsaved_changes()["tags"]["old"].append("injected")
        assert widget.tags == ("a", "b", "c")
        assert widget.unsaved_changes()["tags"] == {
            "old": ["a", "b"],
            "new": ["a", "b", "c"],
        }

    def test_earlier_change_record_is_not_updated_by_later_edits(self, widget):
        widget.tags_append("c")
        earlier = widget.unsaved_changes()
        widget.tags_delete_at(0)
        assert earlier["tags"]["new"] == ["a", "b", "c"]
        assert widget.unsaved_changes()["tags"]["new"] == ["b", "c"]

    def test_changes_only_payload_is_a_copy(self, widget):
        widget.tags_append("c")
        payload = widget.to_jamf_changes_only()
        payload["tags"].append("d")
        assert widget.tags == ("a", "b", "c")


class TestConstruction:
    """Tests for building objects from API data or for creation."""

    def test_j_id_values_become_strings(self, widget):
        assert widget.id == "3"
        assert IdAndName(id=5).id == "5"

    def test_nested_values_are_parsed(self, file_vault, widget):
        assert isinstance(file_vault.bootPartitionEncryptionDetails, ComputerPartitionEncryption)
        assert isinstance(widget.parts[0], IdAndName)

    def test_none_stays_none(self, file_vault_data):
        file_vault_data["bootPartitionEncryptionDetails"] = None
        fv = ComputerInventoryFileVault(**file_vault_data)
        assert fv.bootPartitionEncryptionDetails is None

    def test_missing_required_key_fails(self):
        with pytest.raises(InvalidDataError, match="must include the key 'name'"):
            Widget(tags=[])

    def test_enum_checked_when_parsing(self, file_vault_data):
        file_vault_data["individualRecoveryKeyValidityStatus"] = "MAYBE"
        with pytest.raises(InvalidDataError):
            ComputerInventoryFileVault(**file_vault_data)

    def test_unknown_keys_from_the_api_are_ignored(self):
        part = IdAndName(id="1", name="cog", colour="blue")
        assert part.to_jamf() == {"id": "1", "name": "cog"}

    def test_creating_marks_supplied_values_dirty(self):
        w = Widget(creating_from_create=True, name="new", tags=["a"])
        assert w.unsaved_changes() == {
            "name": {"old": None, "new": "new"},
            "tags": {"old": [], "new": ["a"]},
        }
        assert w.missing_required_attributes() == []

    def test_creating_does_not_enforce_required(self):
        w = Widget(creating_from_create=True, tags=["a"])
        assert w.missing_required_attributes() == ["name"]

    def test_creating_with_readonly_value_fails(self):
        with pytest.raises(UnsupportedError):
            Widget(creating_from_create=True, id="4", name="new")

    def test_creating_with_unknown_attribute_fails(self):
        with pytest.raises(UnknownAttributeError):
            Widget(creating_from_create=True, nmae="typo")

    def test_validate_attr_unknown_attribute(self):
        with pytest.raises(UnknownAttributeError, match="Unknown attribute: nope"):
            ComputerInventoryFileVault.validate_attr("nope", 1)

    def test_unknown_attribute_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            Widget.validate_attr("nope", 1)

    def test_timestamps_are_parsed(self):
        device = MobileDeviceDetails(
            id=1,
            lastInventoryUpdateTimestamp="2023-04-13T17:22:31.123Z",
            extensionAttributes=[
                {"id": "2", "name": "Dept", "type": "STRING", "value": ["IT"]}
            ],
        )
        assert isinstance(device.lastInventoryUpdateTimestamp, Timestamp)
        assert device.extensionAttributes[0].value == ("IT",)
        assert device.to_jamf()["lastInventoryUpdateTimestamp"] == "2023-04-13T17:22:31.123Z"


class TestSerialization:
    """Tests for to_jamf and to_jamf_changes_only."""

    def test_to_jamf_matches_api_data(self, file_vault, file_vault_data):
        assert file_vault.to_jamf() == file_vault_data

    def test_round_trip(self, file_vault, widget):
        assert ComputerInventoryFileVault(**file_vault.to_jamf()) == file_vault
        assert Widget(**widget.to_jamf()) == widget

    def test_round_trip_with_timestamps(self):
        device = MobileDeviceDetails(
            id="8",
            name="iPad",
            initialEntryTimestamp="2022-01-02T03:04:05Z",
            type="ios",
            site={"id": "-1", "name": "None"},
        )
        assert MobileDeviceDetails(**device.to_jamf()) == device

    def test_missing_nested_value_is_none(self):
        fv = ComputerInventoryFileVault(name="x")
        assert fv.to_jamf()["bootPartitionEncryptionDetails"] is None

    def test_unset_array_is_empty_list(self):
        assert Widget(name="w").to_jamf()["tags"] == []

    def test_changes_only_payload(self, file_vault):
        file_vault.name = "renamed"
        file_vault.institutionalRecoveryKeyPresent = True
        assert file_vault.to_jamf_changes_only() == {
            "name": "renamed",
            "institutionalRecoveryKeyPresent": True,
        }

    def test_changes_only_payload_is_empty_when_clean(self, file_vault):
        assert file_vault.to_jamf_changes_only() == {}

    def test_changes_only_never_includes_readonly(self, file_vault):
        # force a change to a readonly attribute
        file_vault._oapi_values["computerId"] = "99"
        file_vault._note_unsaved_change("computerId", "17")
        assert "computerId" in file_vault.unsaved_changes()
        assert "computerId" not in file_vault.to_jamf_changes_only()

    def test_changes_only_skips_none(self, file_vault):
        file_vault.personalRecoveryKey = None
        assert file_vault.unsaved_changes_present() is True
        assert file_vault.to_jamf_changes_only() == {}

    def test_changes_only_for_nested_changes(self, file_vault):
        file_vault.bootPartitionEncryptionDetails.partitionFileVault2Percent = 50
        assert file_vault.to_jamf_changes_only() == {
            "bootPartitionEncryptionDetails": {"partitionFileVault2Percent": 50}
        }

    def test_changes_only_skips_empty_nested_payload(self, file_vault):
        file_vault.bootPartitionEncryptionDetails.partitionName = None
        assert file_vault.unsaved_changes_present() is True
        assert file_vault.to_jamf_changes_only() == {}

    def test_changes_only_for_replaced_nested_object(self, file_vault):
        file_vault.bootPartitionEncryptionDetails = {"partitionName": "Data"}
        payload = file_vault.to_jamf_changes_only()
        assert payload["bootPartitionEncryptionDetails"]["partitionName"] == "Data"

    def test_changes_only_sends_whole_array(self, widget):
        widget.tags_append("c")
        assert widget.to_jamf_changes_only() == {"tags": ["a", "b", "c"]}

    def test_changes_only_for_changed_array_item(self, widget):
        widget.parts[0].name = "sprocket"
        assert widget.to_jamf_changes_only() == {
            "parts": [{"id": "1", "name": "sprocket"}]
        }

    def test_pretty_jamf_json(self, file_vault, capsys):
        file_vault.pretty_jamf_json()
        assert json.loads(capsys.readouterr().out) == file_vault.to_jamf()

    def test_equality(self, file_vault, file_vault_data):
        other = ComputerInventoryFileVault(**file_vault_data)
        assert other == file_vault
        other.name = "different"
        assert other != file_vault
        assert IdAndName(id="1") != ComputerPartitionEncryption()


class TestImmutable:
    """Tests for classes that mix in Immutable."""

    def test_no_setters(self):
        frozen = FrozenWidget(name="ice", tags=["a"])
        with pytest.raises(AttributeError):
            frozen.name = "water"
        assert not hasattr(FrozenWidget, "tags_append")

    def test_never_dirty(self):
        frozen = FrozenWidget(name="ice")
        assert frozen.unsaved_changes() == {}
        assert frozen.unsaved_changes_present() is False
        frozen.clear_unsaved_changes()

    def test_changes_only_payload_is_none(self):
        assert FrozenWidget(name="ice").to_jamf_changes_only() is None

    def test_full_payload_still_works(self):
        assert FrozenWidget(name="ice", tags=["a"]).to_jamf() == {
            "name": "ice",
            "tags": ["a"],
        }

    def test_creating_fails(self):
        with pytest.raises(UnsupportedError):
            FrozenWidget(creating_from_create=True, name="ice")
