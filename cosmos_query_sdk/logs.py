"""
Parsing of structured transaction event logs.
"""
import json
from typing import Any, List

from .exceptions import FormatError
from .models import Attribute, Event, Log


def _parse_attribute(input: Any) -> Attribute:
    if not isinstance(input, dict) or not isinstance(input.get("key"), str):
        raise FormatError(f"Attribute must have a string key: {input!r}")
    value = input.get("value")
    if value is None:
        value = ""
    if not isinstance(value, str):
        raise FormatError(f"Attribute value must be a string: {input!r}")
    return Attribute(key=input["key"], value=value)


def _parse_event(input: Any) -> Event:
    if not isinstance(input, dict) or not isinstance(input.get("type"), str):
        raise FormatError(f"Event must have a string type: {input!r}")
    attributes = input.get("attributes") or []
    if not isinstance(attributes, list):
        raise FormatError("Event's attributes must be a list")
    return Event(type=input["type"], attributes=[_parse_attribute(a) for a in attributes])


def parse_log(input: Any) -> Log:
    if not isinstance(input, dict):
        raise FormatError("Log item must be an object")
    msg_index = input.get("msg_index", 0)
    if isinstance(msg_index, bool) or not isinstance(msg_index, int):
        raise FormatError(f"Log's msg_index must be an integer: {msg_index!r}")
    log = input.get("log") or ""
    if not isinstance(log, str):
        raise FormatError("Log's log must be a string")
    events = input.get("events") or []
    if not isinstance(events, list):
        raise FormatError("Log's events must be a list")
    return Log(msg_index=msg_index, log=log, events=[_parse_event(e) for e in events])


def parse_logs(input: Any) -> List[Log]:
    """
    Parse the ``logs`` array of a transaction result.

    Raises:
        FormatError: If the structure does not match the event log schema
    """
    if not isinstance(input, list):
        raise FormatError("Logs must be a list")
    return [parse_log(item) for item in input]


def parse_raw_log(raw_log: str = "[]") -> List[Log]:
    """Parse logs from a JSON encoded ``raw_log`` string"""
    try:
        logs_json = json.loads(raw_log)
    except ValueError as e:
        raise FormatError(f"Raw log is not valid JSON: {e}") from e
    return parse_logs(logs_json)


def find_attribute(logs: List[Log], event_type: str, attr_key: str) -> Attribute:
    """
    Find the first attribute with ``attr_key`` in an event of ``event_type``.

    Raises:
        KeyError: If no such attribute exists in any log
    """
    for log in logs:
        for event in log.events:
            if event.type != event_type:
                continue
            for attribute in event.attributes:
                if attribute.key == attr_key:
                    return attribute
    raise KeyError(f"Could not find attribute '{attr_key}' in any event of type '{event_type}'")
