"""Apple Human Interface Guidelines lookups by topic."""

from __future__ import annotations

import json
from typing import Any, Dict, List, Literal

from pydantic import BaseModel, Field

from appleui_mcp.design_tokens import (
    ANIMATION_TOKENS,
    COLOR_TOKENS,
    MATERIAL_TOKENS,
    SHADOW_TOKENS,
    SPACING_TOKENS,
    TYPOGRAPHY_TOKENS,
)

Topic = Literal[
    "colors", "typography", "spacing", "shadows", "blur", "animations", "gestures", "haptics",
    "navigation", "accessibility", "layout", "iconography", "buttons", "forms", "modals", "lists",
    "dark-mode", "principles",
]


class StyleGuideInput(BaseModel):
    topic: Topic = Field(description="Topic to get guidance on")
    platform: Literal["ios", "macos", "web", "all"] = Field(default="all", description="Target platform")
    includeExamples: bool = Field(default=True, description="Include code examples")
    includeCodeSnippets: bool = Field(default=True, description="Include code snippets")
    format: Literal["detailed", "summary"] = Field(default="detailed", description="Response format")


GUIDES: Dict[str, Dict[str, Any]] = {
    "colors": {
        "title": "Colors",
        "principles": [
            "Use system colors to ensure consistency across iOS/macOS",
            "Semantic colors automatically adapt to light/dark mode",
            "Maintain sufficient contrast for accessibility (4.5:1 for text)",
        ],
        "guidelines": [
            {
                "title": "System Colors",
                "description": "System colors are optimized for both light and dark modes.",
                "do": ["Use system blue for primary actions and links", "Use system red for destructive actions"],
                "dont": ["Hardcode colors that clash with system UI", "Use too many colors in one view"],
            },
        ],
        "tokens": COLOR_TOKENS,
        "examples": [
            {
                "platform": "CSS",
                "description": "CSS custom properties for Apple system colors",
                "code": ":root { --system-blue: #007AFF; }\n"
                "@media (prefers-color-scheme: dark) { :root { --system-blue: #0A84FF; } }",
            },
            {
                "platform": "SwiftUI",
                "description": "SwiftUI semantic color usage",
                "code": 'Text("Hello").foregroundColor(.primary)',
            },
        ],
        "references": ["Human Interface Guidelines > Foundations > Color"],
    },
    "typography": {
        "title": "Typography",
        "principles": [
            "Use San Francisco (SF Pro) as the primary typeface",
            "Body text should be at least 17pt for readability",
            "Support Dynamic Type for accessibility",
        ],
        "guidelines": [
            {
                "title": "Font Family",
                "description": "San Francisco is Apple's system font, optimized for screens.",
                "do": ["Use -apple-system or SF Pro for web", "Use SF Mono for code"],
                "dont": ["Mix multiple font families in one app", "Use light weights for body text"],
            },
        ],
        "tokens": TYPOGRAPHY_TOKENS,
        "examples": [
            {
                "platform": "CSS",
                "description": "System font stack",
                "code": f"body {{ font-family: {TYPOGRAPHY_TOKENS['fontFamily']['system']}; font-size: 17px; }}",
            },
        ],
        "references": ["Human Interface Guidelines > Foundations > Typography"],
    },
    "spacing": {
        "title": "Spacing",
        "principles": ["Use an 8pt grid", "Keep touch targets at least 44x44 points"],
        "guidelines": [
            {
                "title": "8pt Grid",
                "description": "Spacing values are multiples of 4 or 8.",
                "do": ["Use 16pt screen margins on compact widths"],
                "dont": ["Use arbitrary values like 13px or 7px"],
            },
        ],
        "tokens": SPACING_TOKENS,
        "examples": [],
        "references": ["Human Interface Guidelines > Foundations > Layout"],
    },
    "shadows": {
        "title": "Shadows",
        "principles": ["Use elevation sparingly to convey hierarchy"],
        "guidelines": [
            {
                "title": "Elevation",
                "description": "Higher surfaces cast softer, larger shadows.",
                "do": ["Reserve deep shadows for modals and popovers"],
                "dont": ["Stack multiple heavy shadows"],
            },
        ],
        "tokens": SHADOW_TOKENS,
        "examples": [],
        "references": ["Human Interface Guidelines > Foundations > Materials"],
    },
    "blur": {
        "title": "Blur & Materials",
        "principles": ["Materials create depth while preserving context"],
        "guidelines": [
            {
                "title": "Materials",
                "description": "Translucent materials let underlying content show through.",
                "do": ["Use thin materials for overlays on rich content"],
                "dont": ["Place low-contrast text on ultra-thin materials"],
            },
        ],
        "tokens": MATERIAL_TOKENS,
        "examples": [
            {
                "platform": "CSS",
                "description": "Regular material",
                "code": ".material { backdrop-filter: saturate(180%) blur(30px); }",
            },
        ],
        "references": ["Human Interface Guidelines > Foundations > Materials"],
    },
    "animations": {
        "title": "Animations",
        "principles": ["Motion should be purposeful and brief", "Prefer spring animations"],
        "guidelines": [
            {
                "title": "Springs",
                "description": "Springs feel natural because they preserve velocity.",
                "do": ["Honor reduced motion preferences"],
                "dont": ["Animate purely for decoration"],
            },
        ],
        "tokens": ANIMATION_TOKENS,
        "examples": [
            {
                "platform": "SwiftUI",
                "description": "Spring animation",
                "code": "withAnimation(.spring(response: 0.3, dampingFraction: 0.7)) { isOn.toggle() }",
            },
        ],
        "references": ["Human Interface Guidelines > Foundations > Motion"],
    },
    "accessibility": {
        "title": "Accessibility",
        "principles": ["Everyone should be able to use your interface", "Support VoiceOver and Dynamic Type"],
        "guidelines": [
            {
                "title": "Labels",
                "description": "Every interactive element needs an accessible name.",
                "do": ["Provide accessibilityLabel or aria-label for icon buttons"],
                "dont": ["Convey information by color alone"],
            },
        ],
        "tokens": {"minimumContrast": COLOR_TOKENS["accessible"]["minimumContrast"], "minTouchTarget": 44},
        "examples": [],
        "references": ["Human Interface Guidelines > Foundations > Accessibility"],
    },
    "principles": {
        "title": "Design Principles",
        "principles": ["Clarity", "Deference", "Depth"],
        "guidelines": [
            {
                "title": "Clarity",
                "description": "Text is legible, icons are precise and adornments are subtle.",
                "do": ["Use negative space to focus attention"],
                "dont": ["Overload screens with competing elements"],
            },
        ],
        "tokens": None,
        "examples": [],
        "references": ["Human Interface Guidelines > Getting Started"],
    },
}


def get_style_guide(params: StyleGuideInput) -> Dict[str, Any]:
    """Return guidance for a topic; topics without a dedicated guide fall back to colors."""
    guide = GUIDES.get(params.topic, GUIDES["colors"])
    result: Dict[str, Any] = {
        "topic": guide["title"],
        "principles": list(guide["principles"]),
        "guidelines": list(guide["guidelines"]),
        "higReferences": list(guide["references"]),
    }
    if params.format == "detailed" and guide["tokens"] is not None:
        result["tokens"] = guide["tokens"]
    if params.format == "summary":
        result["guidelines"] = []
    if params.includeExamples and guide["examples"]:
        examples: List[Dict[str, str]] = guide["examples"]
        if params.platform != "all":
            wanted = {"ios": ("SwiftUI",), "macos": ("SwiftUI",), "web": ("CSS", "React")}[params.platform]
            examples = [example for example in examples if example["platform"] in wanted] or examples
        result["codeExamples"] = examples
    return result


def format_style_guide(result: Dict[str, Any]) -> str:
    output = f"# {result['topic']} - Apple Design Guidelines\n\n"
    output += "## Core Principles\n" + "\n".join(f"- {p}" for p in result["principles"]) + "\n\n"
    for guideline in result["guidelines"]:
        output += f"## {guideline['title']}\n{guideline['description']}\n\n"
        output += "### Do\n" + "\n".join(f"- {item}" for item in guideline["do"]) + "\n\n"
        output += "### Don't\n" + "\n".join(f"- {item}" for item in guideline["dont"]) + "\n\n"
    if result.get("codeExamples"):
        output += "## Code Examples\n\n"
        for example in result["codeExamples"]:
            output += f"### {example['platform']}\n{example['description']}\n```\n{example['code']}\n```\n\n"
    if result.get("tokens"):
        output += f"## Design Tokens\n```json\n{json.dumps(result['tokens'], indent=2)}\n```\n\n"
    output += "## HIG References\n" + "\n".join(f"- {ref}" for ref in result["higReferences"])
    return output
