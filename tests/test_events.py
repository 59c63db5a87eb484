import json
from types import SimpleNamespace

import pytest

from fury_sdk.events import events_by_type, extract_address_by_role, find_attribute, get_events


def instantiate_result(*addresses):
    attributes = [{"key": "creator", "value": "terra1mint"}, {"key": "code_id", "value": "9"}]
    for address in addresses:
        attributes.append({"key": "contract_address", "value": address})
        attributes.append({"key": "code_id", "value": "10"})
    events = [
        {"type": "instantiate_contract", "attributes": attributes},
        {"type": "wasm", "attributes": [{"key": "contract_address", "value": "terra1ignored"}]},
    ]
    return SimpleNamespace(txhash="ABC", raw_log=json.dumps([{"msg_index": 0, "log": "", "events": events}]))


def test_addresses_are_assigned_in_attribute_order():
    events = get_events(instantiate_result("terra1factory", "terra1pair", "terra1lp"))
    assert extract_address_by_role(events) == "terra1factory"
    assert extract_address_by_role(events, occurrence=1) == "terra1pair"
    assert extract_address_by_role(events, occurrence=2) == "terra1lp"


def test_only_the_first_event_is_scanned():
    events = get_events(instantiate_result("terra1staking"))
    with pytest.raises(LookupError):
        extract_address_by_role(events, occurrence=1)


def test_events_by_type_groups_attribute_values():
    grouped = events_by_type(get_events(instantiate_result("terra1a", "terra1b")))
    assert grouped["instantiate_contract"]["contract_address"] == ["terra1a", "terra1b"]
    assert grouped["instantiate_contract"]["code_id"] == ["9", "10", "10"]
    assert grouped["wasm"]["contract_address"] == ["terra1ignored"]


def test_find_attribute():
    result = instantiate_result("terra1a")
    assert find_attribute(result, "wasm", "contract_address") == "terra1ignored"
    with pytest.raises(LookupError):
        find_attribute(result, "from_contract", "pair_contract_addr")
