"""Heuristic review of UI code against Apple Human Interface Guidelines."""

from __future__ import annotations

import re
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from appleui_mcp.design_tokens import COLOR_TOKENS, TYPOGRAPHY_TOKENS

FocusArea = Literal[
    "colors", "typography", "spacing", "shadows", "animations", "layout", "accessibility", "navigation"
]

HEX_COLOR = re.compile(r"#[0-9a-fA-F]{6}\b")
RGB_COLOR = re.compile(r"rgb\(\s*\d+")
RGBA_COLOR = re.compile(r"rgba\(\s*\d+")
FONT_SIZE = re.compile(r"font-size:\s*(\d+)px")
FONT_FAMILY = re.compile(r"font-family:\s*([^;]+)")
SPACING_VALUE = re.compile(r"(?:padding|margin|gap):\s*(\d+)px")
SIZE_VALUE = re.compile(r"(?:width|height|min-width|min-height):\s*(\d+)px")
LIGHT_WEIGHTS = ("font-weight: 100", "font-weight: 200", "font-weight: 300", "ultralight", "thin", "light")


class DesignReviewInput(BaseModel):
    code: str = Field(description="The code to analyze (CSS, React, SwiftUI, HTML, or Tailwind)")
    codeType: Literal["css", "react", "swiftui", "html", "tailwind"] = Field(description="Type of code")
    platform: Literal["ios", "macos", "web", "cross-platform"] = Field(description="Target platform")
    focusAreas: Optional[List[FocusArea]] = Field(
        default=None, description="Specific areas to focus the review on"
    )
    strictMode: bool = Field(default=False, description="Enforce strict HIG compliance")


def _issue(
    severity: str,
    category: str,
    description: str,
    suggested_fix: str,
    *,
    current_code: Optional[str] = None,
    reference: Optional[str] = None,
) -> Dict[str, Any]:
    return {
        "severity": severity,
        "category": category,
        "description": description,
        "currentCode": current_code,
        "suggestedFix": suggested_fix,
        "higReference": reference,
    }


def _system_hex_values() -> set[str]:
    values = set()
    for color in COLOR_TOKENS["system"].values():
        values.add(color["light"].lower())
        values.add(color["dark"].lower())
    return values


def _analyze_colors(code: str) -> List[Dict[str, Any]]:
    issues = []
    system_values = _system_hex_values()
    for pattern, _label in ((HEX_COLOR, "hex"), (RGB_COLOR, "rgb"), (RGBA_COLOR, "rgba")):
        matches = pattern.findall(code)
        custom = [match for match in matches if match.lower() not in system_values]
        if custom:
            issues.append(
                _issue(
                    "warning",
                    "colors",
                    f"Found {len(custom)} hardcoded color(s). Consider using Apple system colors "
                    "for consistency and dark mode support.",
                    "Use system colors like var(--system-blue) or Color.blue in SwiftUI",
                    current_code=", ".join(custom[:3]),
                    reference="Human Interface Guidelines > Color",
                )
            )

    if "#000000" in code or "#ffffff" in code.lower():
        issues.append(
            _issue(
                "suggestion",
                "colors",
                "Pure black (#000000) or pure white (#FFFFFF) detected. Apple recommends softer alternatives.",
                "Use semantic colors like background.primary or label.primary for automatic dark mode handling",
                reference="Human Interface Guidelines > Color > Semantic Colors",
            )
        )
    return issues


def _analyze_typography(code: str) -> List[Dict[str, Any]]:
    issues = []
    for match in FONT_SIZE.finditer(code):
        size = int(match.group(1))
        if size < 11:
            issues.append(
                _issue(
                    "critical",
                    "typography",
                    f"Font size {size}px is too small. Minimum readable size is 11px.",
                    "Use at least 11px for caption text, 17px for body text",
                    current_code=match.group(0),
                    reference="Human Interface Guidelines > Typography",
                )
            )
        elif 11 < size < 15:
            issues.append(
                _issue(
                    "suggestion",
                    "typography",
                    f"Font size {size}px is quite small. Consider 17px for body text.",
                    "Use 17px for body text, 13px for footnotes, 11-12px for captions",
                    current_code=match.group(0),
                    reference="Human Interface Guidelines > Typography",
                )
            )

    for match in FONT_FAMILY.finditer(code):
        family = match.group(1).lower()
        if "-apple-system" not in family and "sf pro" not in family and "system-ui" not in family:
            issues.append(
                _issue(
                    "warning",
                    "typography",
                    "Non-system font detected. System fonts ensure consistency with iOS/macOS.",
                    f"Use font-family: {TYPOGRAPHY_TOKENS['fontFamily']['system']}",
                    current_code=match.group(0),
                    reference="Human Interface Guidelines > Typography > System Fonts",
                )
            )

    lowered = code.lower()
    if any(pattern in lowered for pattern in LIGHT_WEIGHTS):
        issues.append(
            _issue(
                "warning",
                "typography",
                "Light font weight detected. Light weights can be hard to read.",
                "Use regular (400), medium (500), or semibold (600) for better readability",
                reference="Human Interface Guidelines > Typography > Font Weight",
            )
        )
    return issues


def _analyze_spacing(code: str) -> List[Dict[str, Any]]:
    issues = []
    odd = []
    for match in SPACING_VALUE.finditer(code):
        value = int(match.group(1))
        if value > 0 and value % 4 != 0 and value not in odd:
            odd.append(value)
    if odd:
        issues.append(
            _issue(
                "suggestion",
                "spacing",
                f"Found spacing values not on the 4pt/8pt grid: {', '.join(str(v) for v in odd)}px",
                "Use multiples of 4 or 8 for consistent spacing (4, 8, 12, 16, 24, 32, 48, 64)",
                reference="Human Interface Guidelines > Layout > Spacing",
            )
        )

    small = [match.group(0) for match in SIZE_VALUE.finditer(code) if 0 < int(match.group(1)) < 44]
    if small:
        issues.append(
            _issue(
                "warning",
                "spacing",
                "Potential small touch targets detected. Minimum should be 44x44 points.",
                "Ensure interactive elements are at least 44x44 points",
                current_code=", ".join(small[:3]),
                reference="Human Interface Guidelines > Accessibility > Touch Targets",
            )
        )
    return issues


def _analyze_accessibility(code: str, code_type: str) -> List[Dict[str, Any]]:
    issues = []
    if code_type == "react":
        if "<button" in code and "aria-label" not in code:
            issues.append(
                _issue(
                    "warning",
                    "accessibility",
                    "Button elements may be missing accessibility labels.",
                    "Add aria-label or aria-labelledby to buttons without visible text",
                    reference="Human Interface Guidelines > Accessibility > Labels",
                )
            )
        if "<img" in code and "alt=" not in code:
            issues.append(
                _issue(
                    "critical",
                    "accessibility",
                    "Image elements missing alt text.",
                    'Add alt="" for decorative images, descriptive alt text for informative images',
                    reference="Human Interface Guidelines > Accessibility > Images",
                )
            )

    if code_type == "swiftui" and ("Button" in code or "Image" in code) and "accessibilityLabel" not in code:
        issues.append(
            _issue(
                "warning",
                "accessibility",
                "Consider adding accessibility labels for VoiceOver support.",
                'Add .accessibilityLabel("Description") to interactive or informative elements',
                reference="Human Interface Guidelines > Accessibility > VoiceOver",
            )
        )

    animated = "animation" in code or "transition" in code
    if animated and "prefers-reduced-motion" not in code and "reducedMotion" not in code:
        issues.append(
            _issue(
                "suggestion",
                "accessibility",
                "Animations detected without reduced motion check.",
                "Respect prefers-reduced-motion media query or UIAccessibility.isReduceMotionEnabled",
                reference="Human Interface Guidelines > Accessibility > Motion",
            )
        )
    return issues


POSITIVE_PATTERNS = (
    (("-apple-system", "SF Pro", "system-ui"), "Uses Apple system fonts for native feel"),
    (("--system-", "Color.blue", "Color.primary"), "Uses Apple system colors"),
    (("prefers-color-scheme", "colorScheme"), "Supports dark mode"),
    (("backdrop-filter", ".blur", "Material"), "Uses Apple-style blur/material effects"),
    (("44px", "44pt", "minHeight: 44"), "Uses proper touch target sizing (44pt)"),
    (("safe-area", "safeAreaInset"), "Respects safe area insets"),
    ((".spring", "spring("), "Uses spring animations for natural feel"),
    (("accessibilityLabel", "aria-label", "VoiceOver"), "Includes accessibility support"),
)


def _detect_positives(code: str) -> List[str]:
    return [message for needles, message in POSITIVE_PATTERNS if any(needle in code for needle in needles)]


def _recommendations(code: str, code_type: str, platform: str, strict: bool) -> List[str]:
    recommendations = []
    if "prefers-color-scheme" not in code and "colorScheme" not in code and code_type != "swiftui":
        recommendations.append("Add dark mode support using @media (prefers-color-scheme: dark)")
    if "backdrop-filter" not in code and ".blur" not in code and "Material" not in code:
        recommendations.append("Consider using blur/material effects for depth and hierarchy")
    if "border-radius" not in code and "cornerRadius" not in code and "rounded" not in code:
        recommendations.append("Use rounded corners (10-16px radius) for Apple aesthetic")
    if platform == "ios" and code_type == "react":
        recommendations.append("Consider using iOS-specific patterns like sheets, tab bars, and navigation bars")
    if platform == "web":
        recommendations.append("Use -webkit-font-smoothing: antialiased for crisp text rendering")
    if strict:
        recommendations.append("Audit all colors against Apple HIG color specifications")
        recommendations.append("Verify all spacing uses the 8pt grid system")
        recommendations.append("Ensure all interactive elements have proper feedback states")
    return recommendations


def review_design(params: DesignReviewInput) -> Dict[str, Any]:
    """
    Score UI code for HIG compliance.

    The score starts at 100 and loses points per issue, weighted by severity
    and category, then is clamped to 0-100.
    """
    focus = params.focusAreas or []

    def wanted(area: str) -> bool:
        return not focus or area in focus

    issues: List[Dict[str, Any]] = []
    score = 100

    if wanted("colors"):
        found = _analyze_colors(params.code)
        score -= 15 * sum(1 for i in found if i["severity"] == "critical")
        score -= 5 * sum(1 for i in found if i["severity"] == "warning")
        issues.extend(found)
    if wanted("typography"):
        found = _analyze_typography(params.code)
        score -= 15 * sum(1 for i in found if i["severity"] == "critical")
        score -= 5 * sum(1 for i in found if i["severity"] == "warning")
        issues.extend(found)
    if wanted("spacing"):
        found = _analyze_spacing(params.code)
        score -= 3 * sum(1 for i in found if i["severity"] == "warning")
        issues.extend(found)
    if wanted("accessibility"):
        found = _analyze_accessibility(params.code, params.codeType)
        score -= 20 * sum(1 for i in found if i["severity"] == "critical")
        score -= 8 * sum(1 for i in found if i["severity"] == "warning")
        issues.extend(found)

    return {
        "overallScore": max(0, min(100, score)),
        "issues": issues,
        "positives": _detect_positives(params.code),
        "recommendations": _recommendations(params.code, params.codeType, params.platform, params.strictMode),
    }


SEVERITY_ICONS = {"critical": "\U0001f534", "warning": "\U0001f7e1"}


def format_review(result: Dict[str, Any]) -> str:
    output = f"# Design Review Results\n\n## Overall Score: {result['overallScore']}/100\n\n"
    if result["positives"]:
        output += "## Positive Patterns\n" + "\n".join(f"- {p}" for p in result["positives"]) + "\n\n"
    if result["issues"]:
        output += f"## Issues Found ({len(result['issues'])})\n\n"
        for issue in result["issues"]:
            icon = SEVERITY_ICONS.get(issue["severity"], "\U0001f535")
            output += f"### {icon} {issue['category'].upper()}: {issue['description']}\n"
            if issue.get("currentCode"):
                output += f"**Current:** `{issue['currentCode']}`\n"
            output += f"**Suggested Fix:** {issue['suggestedFix']}\n"
            if issue.get("higReference"):
                output += f"*Reference: {issue['higReference']}*\n"
            output += "\n"
    if result["recommendations"]:
        output += "## Recommendations\n" + "\n".join(f"- {r}" for r in result["recommendations"])
    return output
