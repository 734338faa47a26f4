"""Representative Apple design tokens backing resources and tools."""

from __future__ import annotations

from typing import Any, Dict

COLOR_TOKENS: Dict[str, Any] = {
    "system": {
        "blue": {"light": "#007AFF", "dark": "#0A84FF"},
        "green": {"light": "#34C759", "dark": "#30D158"},
        "indigo": {"light": "#5856D6", "dark": "#5E5CE6"},
        "orange": {"light": "#FF9500", "dark": "#FF9F0A"},
        "pink": {"light": "#FF2D55", "dark": "#FF375F"},
        "purple": {"light": "#AF52DE", "dark": "#BF5AF2"},
        "red": {"light": "#FF3B30", "dark": "#FF453A"},
        "teal": {"light": "#5AC8FA", "dark": "#64D2FF"},
        "yellow": {"light": "#FFCC00", "dark": "#FFD60A"},
        "gray": {"light": "#8E8E93", "dark": "#8E8E93"},
        "gray6": {"light": "#F2F2F7", "dark": "#1C1C1E"},
    },
    "semantic": {
        "background": {
            "primary": {"light": "#FFFFFF", "dark": "#000000"},
            "secondary": {"light": "#F2F2F7", "dark": "#1C1C1E"},
            "tertiary": {"light": "#FFFFFF", "dark": "#2C2C2E"},
        },
        "label": {
            "primary": {"light": "#000000", "dark": "#FFFFFF"},
            "secondary": {"light": "rgba(60, 60, 67, 0.6)", "dark": "rgba(235, 235, 245, 0.6)"},
            "tertiary": {"light": "rgba(60, 60, 67, 0.3)", "dark": "rgba(235, 235, 245, 0.3)"},
        },
        "separator": {
            "opaque": {"light": "#C6C6C8", "dark": "#38383A"},
            "nonOpaque": {"light": "rgba(60, 60, 67, 0.36)", "dark": "rgba(84, 84, 88, 0.65)"},
        },
        "link": {"light": "#007AFF", "dark": "#0A84FF"},
    },
    "gradients": {
        "vibrantBlue": ["#007AFF", "#00C6FF"],
        "sunset": ["#FF9500", "#FF2D55"],
        "purple": ["#5856D6", "#AF52DE"],
    },
    "accessible": {
        "minimumContrast": 4.5,
        "largeTextContrast": 3.0,
    },
}

TYPOGRAPHY_TOKENS: Dict[str, Any] = {
    "fontFamily": {
        "system": '-apple-system, BlinkMacSystemFont, "SF Pro Display", "SF Pro Text", "Helvetica Neue", system-ui, sans-serif',
        "mono": '"SF Mono", ui-monospace, Menlo, Monaco, monospace',
        "rounded": '"SF Pro Rounded", -apple-system, BlinkMacSystemFont, system-ui, sans-serif',
    },
    "ios": {
        "largeTitle": {"size": 34, "weight": 700, "lineHeight": 41},
        "title1": {"size": 28, "weight": 700, "lineHeight": 34},
        "title2": {"size": 22, "weight": 700, "lineHeight": 28},
        "headline": {"size": 17, "weight": 600, "lineHeight": 22},
        "body": {"size": 17, "weight": 400, "lineHeight": 22},
        "footnote": {"size": 13, "weight": 400, "lineHeight": 18},
        "caption1": {"size": 12, "weight": 400, "lineHeight": 16},
    },
    "macos": {
        "largeTitle": {"size": 26, "weight": 700, "lineHeight": 32},
        "title1": {"size": 22, "weight": 700, "lineHeight": 26},
        "headline": {"size": 13, "weight": 700, "lineHeight": 16},
        "body": {"size": 13, "weight": 400, "lineHeight": 16},
        "caption1": {"size": 10, "weight": 500, "lineHeight": 13},
    },
    "web": {
        "largeTitle": {"size": 34, "weight": 700, "lineHeight": 1.2},
        "title1": {"size": 28, "weight": 700, "lineHeight": 1.2},
        "headline": {"size": 17, "weight": 600, "lineHeight": 1.29},
        "body": {"size": 17, "weight": 400, "lineHeight": 1.47},
        "caption1": {"size": 12, "weight": 400, "lineHeight": 1.33},
    },
    "weights": {
        "regular": 400,
        "medium": 500,
        "semibold": 600,
        "bold": 700,
    },
}

SPACING_TOKENS: Dict[str, Any] = {
    "baseUnit": 8,
    "scale": {"xxs": 2, "xs": 4, "sm": 8, "md": 16, "lg": 24, "xl": 32, "xxl": 48, "xxxl": 64},
    "layout": {
        "screenMargin": {"compact": 16, "regular": 20},
        "sectionSpacing": 32,
        "componentGap": 8,
    },
    "components": {
        "listItem": {"paddingVertical": 11, "paddingHorizontal": 16, "minHeight": 44},
        "card": {"padding": 16, "borderRadius": 12},
        "button": {"paddingVertical": 12, "paddingHorizontal": 20, "minHeight": 44, "borderRadius": 12},
        "input": {"paddingVertical": 12, "paddingHorizontal": 16, "minHeight": 44, "borderRadius": 10},
    },
}

ANIMATION_TOKENS: Dict[str, Any] = {
    "springs": {
        "default": {"stiffness": 300, "damping": 30, "mass": 1},
        "bouncy": {"stiffness": 400, "damping": 20, "mass": 1},
        "gentle": {"stiffness": 200, "damping": 35, "mass": 1},
    },
    "bezierCurves": {
        "easeOut": "cubic-bezier(0.25, 0.1, 0.25, 1)",
        "easeInOut": "cubic-bezier(0.42, 0, 0.58, 1)",
        "spring": "cubic-bezier(0.5, 1.5, 0.5, 1)",
    },
    "patterns": {
        "buttonPress": {"scale": 0.97, "duration": 100},
        "modalPresent": {"duration": 350, "curve": "easeOut"},
        "sheetDismiss": {"duration": 250, "curve": "easeInOut"},
    },
}

SHADOW_TOKENS: Dict[str, Any] = {
    "levels": {
        "0": {"offsetY": 0, "blur": 0, "opacity": 0},
        "1": {"offsetY": 1, "blur": 3, "opacity": 0.1},
        "2": {"offsetY": 4, "blur": 12, "opacity": 0.12},
        "3": {"offsetY": 8, "blur": 24, "opacity": 0.15},
        "4": {"offsetY": 16, "blur": 48, "opacity": 0.2},
    },
    "css": {
        "sm": "0 1px 3px rgba(0, 0, 0, 0.1)",
        "md": "0 4px 12px rgba(0, 0, 0, 0.12)",
        "lg": "0 8px 24px rgba(0, 0, 0, 0.15)",
        "xl": "0 16px 48px rgba(0, 0, 0, 0.2)",
    },
}

MATERIAL_TOKENS: Dict[str, Any] = {
    "materials": {
        "ultraThin": {"blur": 10, "opacity": 0.5},
        "thin": {"blur": 20, "opacity": 0.6},
        "regular": {"blur": 30, "opacity": 0.7},
        "thick": {"blur": 40, "opacity": 0.8},
    },
    "css": {
        "ultraThin": "saturate(180%) blur(10px)",
        "thin": "saturate(180%) blur(20px)",
        "regular": "saturate(180%) blur(30px)",
        "thick": "saturate(180%) blur(40px)",
    },
}
