#!/usr/bin/env python3

"""
** Jamf OAPI Tool: List, show, create, update and delete Jamf Pro API objects

Credentials can be supplied from the command line as arguments, or inputted, or
from an existing PLIST or JSON file containing values for JSS_URL, API_USERNAME
and API_PASSWORD, for example an AutoPkg preferences file:
~/Library/Preferences/com.github.autopkg.plist

Updates only send the changed attributes where the endpoint supports PATCH.

For usage, run jamf_oapi_tool.py --help
"""


import argparse
import sys

from jamf_oapi_lib import actions, api_connect, api_objects
from jamf_oapi_lib.exceptions import JamfError, UnknownAttributeError, UnsupportedError


def list_objects(cnx, object_class, sort, search_filter):
    """print the id and name of every object"""
    objects = object_class.all(cnx, sort=sort, filter=search_filter)
    print(f"\n{len(objects)} {object_class.__name__} objects found:\n")
    for obj in objects:
        print(f"{str(obj.get('id')):>8}  {obj.get('name')}")


def get_object(cnx, object_class, args):
    """fetch an object by id or name"""
    if args.id:
        return object_class.fetch(cnx, id=args.id)
    return object_class.fetch(cnx, name=args.name)


def update_object(obj, new_values, verbosity):
    """apply key=value changes to a fetched or new object and save it"""
    for key, value in new_values.items():
        attr_def = obj.OAPI_PROPERTIES.get(key)
        if attr_def is None:
            raise UnknownAttributeError(f"Unknown attribute: {key}")
        if attr_def.get("readonly") or attr_def.get("multi"):
            raise UnsupportedError(f"{key} can't be set from the command line")
        setattr(obj, key, value)

    if not obj.unsaved_changes_present():
        print("No changes to save.")
        return

    if verbosity:
        print("\nUnsaved changes:")
        for attr_name, change in obj.unsaved_changes().items():
            print(f"  {attr_name}: {change}")

    obj_id = obj.save()
    print(f"{type(obj).__name__} id {obj_id} saved")


def get_args():
    """Parse any command line arguments"""
    parser = argparse.ArgumentParser()

    parser.add_argument(
        "--type",
        default="category",
        choices=["building", "category", "department", "mobile_device"],
        help="The type of object to work with. Default is category",
    )
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--list", action="store_true", help="list all objects")
    group.add_argument("--id", help="the id of the object to show, update or delete")
    group.add_argument("--name", help="the name of the object to show, update or delete")
    group.add_argument(
        "--create", action="store_true", help="create a new object from --set values"
    )
    parser.add_argument(
        "--set",
        action="append",
        dest="set_values",
        default=[],
        help="key=value to set on the object. Multiple allowed.",
    )
    parser.add_argument(
        "--delete", action="store_true", help="delete the object given by --id or --name",
    )
    parser.add_argument(
        "--sort", default="", help="sort for --list, e.g. 'name:asc'",
    )
    parser.add_argument(
        "--filter",
        default="",
        help="RSQL filter for --list, e.g. 'name==\"Printers\"'",
    )
    parser.add_argument(
        "--url", default="", help="the Jamf Pro Server URL",
    )
    parser.add_argument(
        "--user", default="", help="a user with the rights to manage the objects",
    )
    parser.add_argument(
        "--password", default="", help="password of the user",
    )
    parser.add_argument(
        "--prefs",
        default="",
        help=(
            "full path to an AutoPkg prefs file containing "
            "JSS URL, API_USERNAME and API_PASSWORD, "
            "for example an AutoPkg preferences file which has been configured "
            "for use with JSSImporter (~/Library/Preferences/com.github.autopkg.plist) "
            "or a JSON file with the same keys"
        ),
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="print verbose output headers",
    )
    args = parser.parse_args()

    # --delete and --set only apply to a single existing or new object
    if args.delete and not (args.id or args.name):
        parser.error("--delete requires --id or --name")
    if args.delete and args.set_values:
        parser.error("--delete can't be combined with --set")
    if args.list and args.set_values:
        parser.error("--set can't be combined with --list")
    if (args.sort or args.filter) and not args.list:
        parser.error("--sort and --filter only apply to --list")

    return args


def run(args):
    verbosity = args.verbose
    object_class = api_objects.object_types(args.type)
    new_values = actions.parse_key_values(args.set_values)

    # grab values from a prefs file if supplied
    jamf_url, jamf_user, jamf_password = api_connect.get_creds_from_args(args)
    cnx = api_connect.Connection(jamf_url, jamf_user, jamf_password, verbosity=verbosity)

    if args.list:
        list_objects(cnx, object_class, args.sort or None, args.filter or None)
        return

    if args.create:
        obj = object_class.create(cnx, **new_values)
        update_object(obj, {}, verbosity)
        return

    obj = get_object(cnx, object_class, args)
    if args.delete:
        if actions.confirm(prompt=f"Delete {object_class.__name__} '{obj.name}'?"):
            obj.delete()
            print(f"{object_class.__name__} '{obj.name}' deleted")
        return

    if new_values:
        update_object(obj, new_values, verbosity)
    else:
        obj.pretty_jamf_json()


def main():
    """Do the main thing here"""
    print("\n** Jamf OAPI tool")
    print("** Lists, shows and changes objects using the Jamf Pro API.")

    args = get_args()
    try:
        run(args)
    except JamfError as error:
        print(f"ERROR: {error}")
        sys.exit(1)

    print()


if __name__ == "__main__":
    main()
