import json

import pytest

from appleui_mcp.resources import ResourceCatalog, ResourceDefinition, _template_regex, default_catalog


def test_list_resources_has_descriptors():
    resources = default_catalog.list_resources()
    uris = [item["uri"] for item in resources]
    assert "appleui://spacing" in uris
    assert "appleui://materials/css" in uris
    assert all(item["mimeType"] == "application/json" for item in resources)


def test_read_static_resource():
    content = default_catalog.read("appleui://shadows/css")
    assert content["uri"] == "appleui://shadows/css"
    assert set(json.loads(content["text"])) >= {"sm", "md", "lg", "xl"}


def test_template_resource_by_category():
    content = default_catalog.read("appleui://colors/system")
    assert "blue" in json.loads(content["text"])


def test_template_rejecting_value_counts_as_not_found():
    assert default_catalog.read("appleui://colors/neon") is None
    assert default_catalog.read("appleui://typography/watchos") is None


def test_typography_platform_subset():
    data = json.loads(default_catalog.read("appleui://typography/ios")["text"])
    assert set(data) == {"fontFamily", "scale", "weights"}


def test_unknown_uri_and_non_string():
    assert default_catalog.read("appleui://nope") is None
    assert default_catalog.read(42) is None


def test_exact_uri_wins_over_template():
    calls = []
    catalog = ResourceCatalog(
        [
            ResourceDefinition("demo://items/{id}", "Item", "by id", lambda id: calls.append(id) or "template"),
            ResourceDefinition("demo://items/all", "All", "everything", lambda: "exact"),
        ]
    )
    assert catalog.read("demo://items/all")["text"] == "exact"
    assert catalog.read("demo://items/7")["text"] == "template"
    assert calls == ["7"]


def test_template_does_not_cross_segments():
    assert default_catalog.resolve("appleui://colors/system/extra") is None


def test_template_needs_exactly_one_parameter():
    with pytest.raises(ValueError):
        _template_regex("demo://{a}/{b}")


def test_data_produced_on_every_read():
    counter = {"n": 0}

    def produce():
        counter["n"] += 1
        return str(counter["n"])

    catalog = ResourceCatalog([ResourceDefinition("demo://count", "Count", "counter", produce)])
    assert catalog.read("demo://count")["text"] == "1"
    assert catalog.read("demo://count")["text"] == "2"
