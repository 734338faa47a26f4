"""Argument-templated prompts for common Apple design workflows."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional

PromptRenderer = Callable[[Mapping[str, str]], str]


@dataclass(frozen=True, slots=True)
class PromptArgument:
    name: str
    description: str
    required: bool = False


@dataclass(slots=True)
class PromptDefinition:
    name: str
    description: str
    arguments: List[PromptArgument]
    renderer: PromptRenderer

    def describe(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "arguments": [
                {"name": arg.name, "description": arg.description, "required": arg.required}
                for arg in self.arguments
            ],
        }


def string_arguments(raw: Any) -> Dict[str, str]:
    """Keep only string-valued arguments; anything else is dropped silently."""
    if not isinstance(raw, dict):
        return {}
    return {key: value for key, value in raw.items() if isinstance(key, str) and isinstance(value, str)}


def _render_review_component(args: Mapping[str, str]) -> str:
    return f"""You are an Apple design expert reviewing a UI component for compliance with Human Interface Guidelines.

## Component Type
{args.get('componentType', '')}

## Target Platform
{args.get('platform', '')}

## Code to Review
```
{args.get('componentCode', '')}
```

Please analyze this component and provide:

1. **Overall Apple Design Compliance Score** (0-100)
2. **Visual Design Analysis**: colors, typography, spacing and depth
3. **Interaction Design Analysis**: feedback, animations and gestures
4. **Accessibility Considerations**: contrast, touch targets, screen readers, reduced motion
5. **Specific Improvements**: current snippet, suggested fix and the relevant HIG section
6. **Positive Patterns**: what the component already does well

Focus on actionable, specific feedback that will make this component feel more "Apple-like.\""""


def _render_create_design_system(args: Mapping[str, str]) -> str:
    brand = args.get("brandColors")
    brand_section = f"## Brand Colors\n{brand}\n" if brand else ""
    platforms = args.get("platforms", "")
    return f"""You are creating an Apple-inspired design system for a {args.get('projectType', '')}.

## Target Platforms
{platforms}

{brand_section}
Please create a comprehensive design system including:

## 1. Color Tokens
- Primary/accent colors (incorporating brand colors if provided)
- System and semantic colors with light and dark mode variants

## 2. Typography Scale
- Font family stack, type scale from largeTitle through caption, weights and line heights

## 3. Spacing System
- 8pt base unit, spacing scale and touch target guidelines

## 4. Shadow/Elevation System
- 4-5 elevation levels with light and dark mode values

## 5. Animation System
- Spring configurations, timing curves and reduced motion alternatives

## 6. Component Specifications
- Button, Card, Input, Toggle and Modal with states, sizing and accessibility requirements

## 7. Accessibility Guidelines
- Contrast, touch target minimums, screen reader and dynamic type support

Provide all values in formats usable for {platforms} development."""


def _render_accessibility_audit(args: Mapping[str, str]) -> str:
    platform = args.get("platform", "")
    if platform in ("ios", "macos"):
        screen_reader = (
            "- VoiceOver labels for all interactive elements\n"
            "- Proper accessibility traits\n"
            "- Logical reading order"
        )
    else:
        screen_reader = "- ARIA labels and roles\n- Semantic HTML elements\n- Logical tab order and focus management"
    return f"""You are an accessibility expert auditing a {platform} component for Apple accessibility compliance.

## Code to Audit
```
{args.get('code', '')}
```

Please evaluate the following accessibility criteria:

## 1. Color Contrast
- Text contrast of at least 4.5:1 (3:1 for large text)

## 2. Touch/Click Targets
- Minimum size: 44x44 points

## 3. Screen Reader Compatibility
{screen_reader}

## 4. Dynamic Type Support
## 5. Reduced Motion Support
## 6. High Contrast Support

For each issue found report the problem, its impact, the current code, the fix and how to verify it."""


def _render_adapt_for_platform(args: Mapping[str, str]) -> str:
    source = args.get("sourcePlatform", "")
    target = args.get("targetPlatform", "")
    notes = {
        "ios": "- Use SwiftUI components and modifiers\n- Follow iOS navigation patterns\n- Support Dynamic Type",
        "swiftui": "- Use SwiftUI components and modifiers\n- Follow iOS navigation patterns\n- Support Dynamic Type",
        "macos": "- Add hover states for pointer interaction\n- Use sidebar navigation\n- Support keyboard shortcuts",
        "web": "- Use CSS custom properties for theming\n- Include ARIA attributes\n- Support reduced motion",
        "react": "- Use CSS custom properties for theming\n- Include ARIA attributes\n- Support reduced motion",
    }.get(target, "")
    return f"""You are adapting a UI component from {source} to {target} following Apple design guidelines.

## Source Code ({source})
```
{args.get('sourceCode', '')}
```

## Platform-Specific Considerations
{notes}

## Adaptation Tasks
1. Map {source} patterns to their {target} equivalents
2. Adjust typography, spacing, color tokens and elevation
3. Adapt input methods, gestures and feedback
4. Provide the adapted code and explain each significant change

Provide the complete adapted code ready for use on {target}."""


ALL_PROMPTS: List[PromptDefinition] = [
    PromptDefinition(
        name="review_component",
        description="Review a UI component for Apple design compliance",
        arguments=[
            PromptArgument("componentCode", "The component code to review", True),
            PromptArgument("componentType", "Type of component (button, card, modal, etc.)", True),
            PromptArgument("platform", "Target platform (ios, macos, web)", True),
        ],
        renderer=_render_review_component,
    ),
    PromptDefinition(
        name="create_design_system",
        description="Create a complete Apple-inspired design system for a project",
        arguments=[
            PromptArgument("projectType", "Type of project (mobile app, web app, desktop app)", True),
            PromptArgument("brandColors", "Primary brand colors to incorporate (optional)", False),
            PromptArgument("platforms", "Target platforms (ios, macos, web)", True),
        ],
        renderer=_render_create_design_system,
    ),
    PromptDefinition(
        name="accessibility_audit",
        description="Audit a design or component for Apple accessibility guidelines",
        arguments=[
            PromptArgument("code", "The code to audit", True),
            PromptArgument("platform", "Target platform (ios, macos, web)", True),
        ],
        renderer=_render_accessibility_audit,
    ),
    PromptDefinition(
        name="adapt_for_platform",
        description="Adapt a design from one platform to another following Apple guidelines",
        arguments=[
            PromptArgument("sourceCode", "The source platform code", True),
            PromptArgument("sourcePlatform", "Source platform (ios, macos, web, react, swiftui)", True),
            PromptArgument("targetPlatform", "Target platform (ios, macos, web, react, swiftui)", True),
        ],
        renderer=_render_adapt_for_platform,
    ),
]


class PromptCatalog:
    def __init__(self, prompts: List[PromptDefinition]) -> None:
        self._prompts: Dict[str, PromptDefinition] = {prompt.name: prompt for prompt in prompts}

    def list_prompts(self) -> List[Dict[str, Any]]:
        return [prompt.describe() for prompt in self._prompts.values()]

    def get(self, name: Any) -> Optional[PromptDefinition]:
        if not isinstance(name, str):
            return None
        return self._prompts.get(name)

    def render(self, name: str, arguments: Any = None) -> Optional[Dict[str, Any]]:
        """Render a prompt into MCP message form, or None if the prompt is unknown."""
        prompt = self.get(name)
        if prompt is None:
            return None
        text = prompt.renderer(string_arguments(arguments))
        return {
            "description": prompt.description,
            "messages": [{"role": "user", "content": {"type": "text", "text": text}}],
        }


default_catalog = PromptCatalog(ALL_PROMPTS)
