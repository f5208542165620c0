#!/usr/bin/env python3

import getpass
import json
import plistlib
from base64 import b64encode

import requests
from requests_toolbelt.utils import dump

from .exceptions import (
    AlreadyExistsError,
    APIRequestError,
    AuthorizationError,
    MissingDataError,
    NoSuchItemError,
)


def get_credentials(prefs_file):
    """return credentials from a prefs_file"""
    prefs = {}
    if prefs_file.endswith(".plist"):
        with open(prefs_file, "rb") as pl:
            prefs = plistlib.load(pl)

    read_as_json = (".json", ".env")
    if list(filter(prefs_file.endswith, read_as_json)) != []:
        with open(prefs_file) as js:
            prefs = json.load(js)

    jamf_url = prefs.get("JSS_URL", "")
    jamf_user = prefs.get("API_USERNAME", "")
    jamf_password = prefs.get("API_PASSWORD", "")
    return jamf_url, jamf_user, jamf_password


def encode_creds(jamf_user, jamf_password):
    """encode the username and password into a basic auth b64 encoded string so that we can
    get the session token"""
    credentials = f"{jamf_user}:{jamf_password}"
    enc_creds_bytes = b64encode(credentials.encode("utf-8"))
    return str(enc_creds_bytes, "utf-8")


def get_creds_from_args(args):
    """call me directly - I return the url, user and password from the args,
    a prefs file, or input"""
    if args.prefs:
        (jamf_url, jamf_user, jamf_password) = get_credentials(args.prefs)
    else:
        jamf_url = ""
        jamf_user = ""
        jamf_password = ""

    # CLI arguments override any values from a prefs file
    if args.url:
        jamf_url = args.url
    elif not jamf_url:
        jamf_url = input("Enter Jamf Pro Server URL : ")
    if args.user:
        jamf_user = args.user
    elif not jamf_user:
        jamf_user = input("Enter a Jamf Pro user with API rights : ")
    if args.password:
        jamf_password = args.password
    elif not jamf_password:
        jamf_password = getpass.getpass(f"Enter the password for '{jamf_user}' : ")

    return jamf_url, jamf_user, jamf_password


def logging_hook(response, *args, **kwargs):
    """print the whole HTTP exchange"""
    data = dump.dump_all(response)
    print(data.decode("utf-8", errors="replace"))


def error_message(r):
    """extract the error descriptions from a Jamf Pro API error response"""
    try:
        output = r.json()
    except ValueError:
        return r.text.strip()
    if isinstance(output, dict) and output.get("errors"):
        return "; ".join(
            str(error.get("description") or error.get("code"))
            for error in output["errors"]
        )
    return str(output)


def status_check(r, request, url):
    """raise the appropriate error if the HTTP response was not a success"""
    if r.status_code < 400:
        return

    message = f"{request} {url} failed - {error_message(r)} (status code {r.status_code})"
    if r.status_code == 404:
        raise NoSuchItemError(message, status_code=r.status_code, response=r)
    if r.status_code == 409:
        raise AlreadyExistsError(message, status_code=r.status_code, response=r)
    if r.status_code in (401, 403):
        raise AuthorizationError(message, status_code=r.status_code, response=r)
    raise APIRequestError(message, status_code=r.status_code, response=r)


class Connection:
    """A connection to the Jamf Pro API of one server, using a bearer token
    obtained with basic auth.

    Paths given to the jp_* methods are relative to <jamf_url>/api/,
    e.g. "v1/categories". Request bodies are dicts and are sent as JSON.
    Responses are returned parsed, or None when there is no body.
    """

    TOKEN_PATH = "v1/auth/token"

    def __init__(
        self, jamf_url, jamf_user="", password="", token="", verbosity=0, timeout=60
    ):
        if not jamf_url:
            raise MissingDataError("No URL supplied")
        self.jamf_url = jamf_url.rstrip("/")
        self.jamf_user = jamf_user
        self.verbosity = verbosity
        self.timeout = timeout

        self.http = requests.Session()
        if verbosity > 2:
            self.http.hooks["response"] = [logging_hook]

        if token:
            self.token = token
        elif jamf_user and password:
            self.token = self.get_api_token(encode_creds(jamf_user, password))
        else:
            raise MissingDataError("Insufficient credentials provided, cannot continue")

    def output(self, message, verbose_level=1):
        if self.verbosity >= verbose_level:
            print(message)

    def get_api_token(self, enc_creds):
        """get a token for the Jamf Pro API"""
        url = f"{self.jamf_url}/api/{self.TOKEN_PATH}"
        headers = {
            "authorization": f"Basic {enc_creds}",
            "accept": "application/json",
        }
        r = self.http.post(url, headers=headers, timeout=self.timeout)
        if r.status_code == 200:
            try:
                token = str(r.json()["token"])
            except (KeyError, ValueError) as error:
                raise AuthorizationError(
                    "No token received", status_code=r.status_code, response=r
                ) from error
            self.output("Session token received")
            self.output(f"Expires: {r.json().get('expires')}", verbose_level=2)
            return token
        raise AuthorizationError(
            f"No token received (HTTP response {r.status_code})",
            status_code=r.status_code,
            response=r,
        )

    def request(self, method, path, data=None):
        url = f"{self.jamf_url}/api/{path.lstrip('/')}"
        headers = {
            "authorization": f"Bearer {self.token}",
            "accept": "application/json",
        }
        body = None
        if data is not None:
            headers["content-type"] = "application/json"
            body = json.dumps(data)
            self.output(f"{method} data:\n{json.dumps(data, indent=2)}", verbose_level=3)

        self.output(f"{method} {url}", verbose_level=2)
        r = self.http.request(method, url, headers=headers, data=body, timeout=self.timeout)
        self.output(f"HTTP response: {r.status_code}", verbose_level=2)
        status_check(r, method, url)

        if not r.content:
            return None
        return r.json()

    def jp_get(self, path):
        return self.request("GET", path)

    def jp_post(self, path, data):
        return self.request("POST", path, data)

    def jp_put(self, path, data):
        return self.request("PUT", path, data)

    def jp_patch(self, path, data):
        return self.request("PATCH", path, data)

    def jp_delete(self, path):
        return self.request("DELETE", path)
