#!/usr/bin/env python3

from .exceptions import InvalidDataError


def parse_key_values(pairs):
    """turn a list of 'key=value' strings from the command line into a dict.
    Values stay strings; the attribute validators convert them where needed."""
    data = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise InvalidDataError(f"'{pair}' is not in the form key=value")
        data[key.strip()] = value
    return data


def confirm(prompt="Confirm", default=False):
    """ask a yes or no question on the command line. Pressing enter alone
    gives the default, which is shown in brackets, e.g. "Delete? [n]|y: ".
    """
    choices = "[y]|n" if default else "[n]|y"
    answers = {"y": True, "yes": True, "n": False, "no": False}
    while True:
        answer = input(f"{prompt} {choices}: ").strip().lower()
        if not answer:
            return default
        if answer in answers:
            return answers[answer]
        print("Please enter Y or N.")
