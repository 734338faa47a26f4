"""Apple-styled component skeletons for React, SwiftUI, React Native, Tailwind and CSS."""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from appleui_mcp.design_tokens import COLOR_TOKENS, SHADOW_TOKENS, SPACING_TOKENS, TYPOGRAPHY_TOKENS

ComponentType = Literal[
    "button", "card", "modal", "navigation-bar", "tab-bar", "sidebar", "list", "form-input",
    "toggle", "slider", "alert", "sheet", "menu", "toolbar", "search-bar", "segmented-control",
    "stepper", "picker", "avatar", "badge", "tooltip", "checkbox", "radio-group", "textarea",
    "progress-ring", "skeleton", "toast", "accordion", "divider", "breadcrumb",
]

RADII = {"none": 0, "small": 6, "medium": 12, "large": 16, "full": 9999}
VARIANT_COLORS = {
    "default": COLOR_TOKENS["system"]["blue"],
    "prominent": COLOR_TOKENS["system"]["indigo"],
    "subtle": COLOR_TOKENS["system"]["gray"],
    "destructive": COLOR_TOKENS["system"]["red"],
}


class AccessibilityOptions(BaseModel):
    reducedMotion: Optional[bool] = None
    highContrast: Optional[bool] = None
    dynamicType: Optional[bool] = None


class Customizations(BaseModel):
    primaryColor: Optional[str] = None
    roundedCorners: Optional[Literal["none", "small", "medium", "large", "full"]] = None
    useBlur: Optional[bool] = None
    shadowLevel: Optional[float] = Field(default=None, ge=0, le=4)
    size: Optional[Literal["xs", "sm", "md", "lg", "xl"]] = None


class ComponentGeneratorInput(BaseModel):
    componentType: ComponentType = Field(description="Type of component to generate")
    platform: Literal["react", "swiftui", "react-native", "tailwind", "css"] = Field(
        description="Target platform/framework"
    )
    variant: Literal["default", "prominent", "subtle", "destructive"] = Field(
        default="default", description="Visual variant"
    )
    darkModeSupport: bool = Field(default=True, description="Include dark mode styles")
    includeAnimations: bool = Field(default=True, description="Include Apple-style animations")
    accessibilityOptions: Optional[AccessibilityOptions] = None
    customizations: Optional[Customizations] = None


def _pascal(component_type: str) -> str:
    return "".join(part.capitalize() for part in component_type.split("-"))


def _css_class(component_type: str) -> str:
    return f"apple-{component_type}"


def _style_values(params: ComponentGeneratorInput) -> Dict[str, Any]:
    custom = params.customizations or Customizations()
    color = VARIANT_COLORS[params.variant]
    shadow_level = int(custom.shadowLevel) if custom.shadowLevel is not None else 1
    shadow_css = ["none", "sm", "md", "lg", "xl"][shadow_level]
    return {
        "accent": custom.primaryColor or color["light"],
        "accent_dark": custom.primaryColor or color["dark"],
        "radius": RADII[custom.roundedCorners or "medium"],
        "padding": SPACING_TOKENS["components"]["button"]["paddingHorizontal"],
        "min_height": SPACING_TOKENS["components"]["button"]["minHeight"],
        "shadow": SHADOW_TOKENS["css"].get(shadow_css, "none"),
        "blur": bool(custom.useBlur),
    }


def _css(params: ComponentGeneratorInput, values: Dict[str, Any]) -> str:
    cls = _css_class(params.componentType)
    lines = [
        f".{cls} {{",
        f"  font-family: {TYPOGRAPHY_TOKENS['fontFamily']['system']};",
        f"  padding: 12px {values['padding']}px;",
        f"  min-height: {values['min_height']}px;",
        f"  border-radius: {values['radius']}px;",
        f"  color: {values['accent']};",
        f"  box-shadow: {values['shadow']};",
    ]
    if values["blur"]:
        lines.append("  backdrop-filter: saturate(180%) blur(20px);")
    if params.includeAnimations:
        lines.append("  transition: transform 0.1s cubic-bezier(0.25, 0.1, 0.25, 1);")
    lines.append("}")
    if params.includeAnimations:
        lines += ["", f".{cls}:active {{", "  transform: scale(0.97);", "}"]
        if not params.accessibilityOptions or params.accessibilityOptions.reducedMotion is not False:
            lines += [
                "",
                "@media (prefers-reduced-motion: reduce) {",
                f"  .{cls} {{ transition: none; }}",
                "}",
            ]
    if params.darkModeSupport:
        lines += [
            "",
            "@media (prefers-color-scheme: dark) {",
            f"  .{cls} {{ color: {values['accent_dark']}; }}",
            "}",
        ]
    return "\n".join(lines)


def _react(params: ComponentGeneratorInput, values: Dict[str, Any]) -> Dict[str, Any]:
    name = _pascal(params.componentType)
    code = (
        f"export function {name}({{ children, ...props }}) {{\n"
        f"  return (\n"
        f'    <div className="{_css_class(params.componentType)}" role="group" {{...props}}>\n'
        f"      {{children}}\n"
        f"    </div>\n"
        f"  );\n"
        f"}}"
    )
    return {"code": code, "styles": _css(params, values), "usage": f"<{name}>Content</{name}>"}


def _tailwind(params: ComponentGeneratorInput, values: Dict[str, Any]) -> Dict[str, Any]:
    name = _pascal(params.componentType)
    classes = ["font-sans", "px-5", "py-3", "min-h-[44px]", f"rounded-[{values['radius']}px]", "shadow-sm"]
    if values["blur"]:
        classes.append("backdrop-blur-xl")
    if params.includeAnimations:
        classes += ["transition-transform", "active:scale-[0.97]", "motion-reduce:transition-none"]
    if params.darkModeSupport:
        classes += ["bg-white", "dark:bg-[#1C1C1E]"]
    code = (
        f"export function {name}({{ children }}) {{\n"
        f'  return <div className="{" ".join(classes)}">{{children}}</div>;\n'
        f"}}"
    )
    return {"code": code, "styles": None, "usage": f"<{name}>Content</{name}>"}


def _swiftui(params: ComponentGeneratorInput, values: Dict[str, Any]) -> Dict[str, Any]:
    name = f"Apple{_pascal(params.componentType)}"
    tint = ".red" if params.variant == "destructive" else ".accentColor"
    lines = [
        f"struct {name}<Content: View>: View {{",
        "    @ViewBuilder var content: Content",
        "",
        "    var body: some View {",
        "        content",
        f"            .padding(.horizontal, {values['padding']})",
        f"            .frame(minHeight: {values['min_height']})",
        f"            .background(.{'regularMaterial' if values['blur'] else 'background'})",
        f"            .clipShape(RoundedRectangle(cornerRadius: {values['radius']}, style: .continuous))",
        f"            .tint({tint})",
    ]
    if params.includeAnimations:
        lines.append("            .transaction { $0.animation = .spring(response: 0.3, dampingFraction: 0.7) }")
    lines += ["    }", "}"]
    return {"code": "\n".join(lines), "styles": None, "usage": f"{name} {{ Text(\"Content\") }}"}


def _react_native(params: ComponentGeneratorInput, values: Dict[str, Any]) -> Dict[str, Any]:
    name = f"Apple{_pascal(params.componentType)}"
    code = (
        "import { View, StyleSheet } from 'react-native';\n\n"
        f"export function {name}({{ children }}) {{\n"
        "  return <View style={styles.container} accessible>{children}</View>;\n"
        "}\n\n"
        "const styles = StyleSheet.create({\n"
        "  container: {\n"
        f"    paddingHorizontal: {values['padding']},\n"
        f"    minHeight: {values['min_height']},\n"
        f"    borderRadius: {values['radius']},\n"
        "  },\n"
        "});"
    )
    return {"code": code, "styles": None, "usage": f"<{name}>...</{name}>"}


def _css_only(params: ComponentGeneratorInput, values: Dict[str, Any]) -> Dict[str, Any]:
    cls = _css_class(params.componentType)
    return {
        "code": f'<div class="{cls}">Content</div>',
        "styles": _css(params, values),
        "usage": f'Add class="{cls}" to the element.',
    }


GENERATORS = {
    "react": _react,
    "tailwind": _tailwind,
    "swiftui": _swiftui,
    "react-native": _react_native,
    "css": _css_only,
}


def generate_component(params: ComponentGeneratorInput) -> Dict[str, Any]:
    values = _style_values(params)
    generated = GENERATORS[params.platform](params, values)
    notes: List[str] = ["Minimum touch target of 44x44 points is applied"]
    if params.darkModeSupport:
        notes.append("Dark mode colors follow the system palette")
    if params.includeAnimations:
        notes.append("Press feedback uses a subtle 0.97 scale")
    custom_color = params.customizations is not None and params.customizations.primaryColor
    generated["tokens"] = {
        "colors": [] if custom_color else [f"system.{params.variant}"],
        "spacing": ["components.button.paddingHorizontal", "components.button.minHeight"],
        "typography": ["fontFamily.system"],
    }
    generated["notes"] = notes
    return generated


def format_component(result: Dict[str, Any]) -> str:
    output = f"# Generated Component\n\n## Code\n```tsx\n{result['code']}\n```\n\n"
    if result.get("styles"):
        output += f"## Styles\n```css\n{result['styles']}\n```\n\n"
    output += f"## Usage\n```tsx\n{result['usage']}\n```\n\n"
    tokens = result["tokens"]
    output += f"## Design Tokens Used\n- **Colors:** {', '.join(tokens['colors']) or 'None'}\n"
    output += f"- **Spacing:** {', '.join(tokens['spacing']) or 'None'}\n"
    output += f"- **Typography:** {', '.join(tokens['typography']) or 'None'}\n\n"
    if result["notes"]:
        output += "## Notes\n" + "\n".join(f"- {note}" for note in result["notes"])
    return output
