"""Reading identifiers out of transaction event logs.

Instantiating a contract that instantiates others (staking -> xASTRO token,
factory -> pairs) emits one `contract_address` attribute per contract, in
creation order, on the first event of the first log. Which address belongs
to which contract is only known by that position, so every lookup by
position goes through `extract_address_by_role`.
"""
import json
from typing import Dict, List

CONTRACT_ADDRESS = "contract_address"


def get_logs(result) -> List[dict]:
    return json.loads(result.raw_log)


def get_events(result, msg_index: int = 0) -> List[dict]:
    return get_logs(result)[msg_index]["events"]


def attribute_values(events: List[dict], key: str, event_index: int = 0) -> List[str]:
    return [entry["value"] for entry in events[event_index]["attributes"] if entry["key"] == key]


def extract_address_by_role(events: List[dict], role: str = CONTRACT_ADDRESS, occurrence: int = 0) -> str:
    values = attribute_values(events, role)
    if occurrence >= len(values):
        raise LookupError(f"expected at least {occurrence + 1} {role!r} attributes, found {len(values)}")
    return values[occurrence]


def events_by_type(events: List[dict]) -> Dict[str, Dict[str, List[str]]]:
    grouped: Dict[str, Dict[str, List[str]]] = {}
    for event in events:
        attributes = grouped.setdefault(event["type"], {})
        for entry in event["attributes"]:
            attributes.setdefault(entry["key"], []).append(entry["value"])
    return grouped


def find_attribute(result, event_type: str, key: str, msg_index: int = 0) -> str:
    grouped = events_by_type(get_events(result, msg_index))
    try:
        return grouped[event_type][key][0]
    except (KeyError, IndexError):
        raise LookupError(f"no {key!r} attribute in {event_type!r} events of tx {getattr(result, 'txhash', '?')}")
