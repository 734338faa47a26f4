from appleui_mcp.prompts import default_catalog, string_arguments


def test_string_arguments_drops_non_strings():
    assert string_arguments({"a": "x", "b": 3, "c": None, "d": ["y"]}) == {"a": "x"}
    assert string_arguments("nope") == {}
    assert string_arguments(None) == {}


def test_list_prompts_describes_arguments():
    prompts = {item["name"]: item for item in default_catalog.list_prompts()}
    review = prompts["review_component"]
    assert {arg["name"] for arg in review["arguments"]} == {"componentCode", "componentType", "platform"}
    brand = next(arg for arg in prompts["create_design_system"]["arguments"] if arg["name"] == "brandColors")
    assert brand["required"] is False


def test_render_review_component():
    rendered = default_catalog.render(
        "review_component",
        {"componentCode": "<Button/>", "componentType": "button", "platform": "web", "extra": 5},
    )
    assert rendered["description"] == "Review a UI component for Apple design compliance"
    text = rendered["messages"][0]["content"]["text"]
    assert "<Button/>" in text
    assert "## Component Type\nbutton" in text


def test_render_missing_optional_argument_is_empty():
    text = default_catalog.render(
        "create_design_system", {"projectType": "web app", "platforms": "web"}
    )["messages"][0]["content"]["text"]
    assert "Brand Colors" not in text
    assert "for a web app" in text


def test_render_with_non_string_argument_values():
    text = default_catalog.render("adapt_for_platform", {"sourcePlatform": 1, "targetPlatform": "macos"})[
        "messages"
    ][0]["content"]["text"]
    assert "from  to macos" in text
    assert "hover states" in text


def test_unknown_prompt():
    assert default_catalog.render("missing") is None
    assert default_catalog.get(None) is None
