import pytest

from appleui_mcp.metrics import default_metrics
from appleui_mcp.tools import ToolDefinition, ToolRegistry, default_registry, error_content
from appleui_mcp.tools.component_generator import ComponentGeneratorInput, generate_component
from appleui_mcp.tools.design_review import DesignReviewInput, review_design
from appleui_mcp.tools.style_guide import StyleGuideInput, get_style_guide
from pydantic import BaseModel


def test_review_flags_small_font_and_hardcoded_color():
    result = review_design(
        DesignReviewInput(code=".x { color: #123456; font-size: 9px; }", codeType="css", platform="web")
    )
    categories = [issue["category"] for issue in result["issues"]]
    assert "colors" in categories
    assert "typography" in categories
    assert result["overallScore"] == 100 - 5 - 15


def test_review_score_is_clamped():
    code = "\n".join(f'<img src="{i}.png"><button>x</button>' for i in range(3)) + " font-size: 8px; "
    code += " ".join(f"font-family: Comic{i};" for i in range(20))
    result = review_design(DesignReviewInput(code=code, codeType="react", platform="ios"))
    assert result["overallScore"] == 0


def test_review_focus_areas_limit_checks():
    result = review_design(
        DesignReviewInput(
            code=".x { color: #123456; font-size: 9px; }", codeType="css", platform="web", focusAreas=["spacing"]
        )
    )
    assert result["issues"] == []
    assert result["overallScore"] == 100


def test_review_detects_positives():
    code = ".card { font-family: -apple-system; backdrop-filter: blur(20px); }"
    result = review_design(DesignReviewInput(code=code, codeType="css", platform="macos"))
    assert "Uses Apple system fonts for native feel" in result["positives"]
    assert "Uses Apple-style blur/material effects" in result["positives"]


def test_generate_component_swiftui():
    result = generate_component(ComponentGeneratorInput(componentType="toggle", platform="swiftui"))
    assert "struct AppleToggle" in result["code"]
    assert ".spring(" in result["code"]
    assert result["tokens"]["colors"] == ["system.default"]


def test_generate_component_css_respects_flags():
    result = generate_component(
        ComponentGeneratorInput(
            componentType="card",
            platform="css",
            darkModeSupport=False,
            includeAnimations=False,
            customizations={"primaryColor": "#ff9500", "roundedCorners": "large", "useBlur": True},
        )
    )
    assert "prefers-color-scheme" not in result["styles"]
    assert "transition" not in result["styles"]
    assert "border-radius: 16px" in result["styles"]
    assert "backdrop-filter" in result["styles"]
    assert result["tokens"]["colors"] == []


def test_generate_component_rejects_bad_shadow_level():
    with pytest.raises(ValueError):
        ComponentGeneratorInput(componentType="card", platform="react", customizations={"shadowLevel": 9})


def test_style_guide_summary_omits_guidelines_and_tokens():
    result = get_style_guide(StyleGuideInput(topic="colors", format="summary"))
    assert result["guidelines"] == []
    assert "tokens" not in result


def test_style_guide_filters_examples_by_platform():
    result = get_style_guide(StyleGuideInput(topic="colors", platform="ios"))
    assert [example["platform"] for example in result["codeExamples"]] == ["SwiftUI"]


def test_style_guide_fallback_topic():
    result = get_style_guide(StyleGuideInput(topic="haptics", includeExamples=False))
    assert result["topic"] == "Colors"
    assert "codeExamples" not in result


def test_input_schema_is_derived_from_model():
    tool = default_registry.get("generate_component")
    schema = tool.input_schema
    assert set(schema["required"]) == {"componentType", "platform"}
    assert "button" in schema["properties"]["componentType"]["enum"]


@pytest.mark.asyncio
async def test_registry_call_success_records_metrics():
    tool = default_registry.get("get_style_guide")
    result = await default_registry.call(tool, {"topic": "spacing"})
    assert result["content"][0]["text"].startswith("# Spacing - Apple Design Guidelines")
    assert default_metrics.snapshot()["tool_success"] == {"get_style_guide": 1}


@pytest.mark.asyncio
async def test_registry_call_missing_arguments_is_validation_error():
    tool = default_registry.get("review_design")
    result = await default_registry.call(tool, None)
    assert result["isError"] is True
    assert "Invalid arguments for review_design" in result["content"][0]["text"]
    assert default_metrics.snapshot()["tool_error"] == {"review_design": 1}


class _EmptyInput(BaseModel):
    pass


@pytest.mark.asyncio
async def test_registry_call_handler_failure_and_async_handler():
    def broken(_params):
        raise RuntimeError("generator exploded")

    async def slow(_params):
        return {"value": "done"}

    registry = ToolRegistry(
        [
            ToolDefinition("broken", "fails", _EmptyInput, broken, lambda r: "unused"),
            ToolDefinition("slow", "async", _EmptyInput, slow, lambda r: r["value"]),
        ]
    )
    assert await registry.call(registry.get("broken"), {}) == error_content("generator exploded")
    assert await registry.call(registry.get("slow"), {}) == {"content": [{"type": "text", "text": "done"}]}
