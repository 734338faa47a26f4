"""URI-addressed, read-only design token resources."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Pattern, Tuple

from appleui_mcp.design_tokens import (
    ANIMATION_TOKENS,
    COLOR_TOKENS,
    MATERIAL_TOKENS,
    SHADOW_TOKENS,
    SPACING_TOKENS,
    TYPOGRAPHY_TOKENS,
)

JSON_MIME_TYPE = "application/json"
TEMPLATE_SEGMENT = re.compile(r"\{([A-Za-z_][A-Za-z0-9_]*)\}")

DataProducer = Callable[..., str]


def _dump(value: Any) -> str:
    return json.dumps(value, indent=2)


@dataclass(slots=True)
class ResourceDefinition:
    uri: str
    name: str
    description: str
    producer: DataProducer
    mime_type: str = JSON_MIME_TYPE

    @property
    def is_template(self) -> bool:
        return TEMPLATE_SEGMENT.search(self.uri) is not None

    def describe(self) -> Dict[str, Any]:
        return {
            "uri": self.uri,
            "name": self.name,
            "description": self.description,
            "mimeType": self.mime_type,
        }


def _template_regex(uri: str) -> Tuple[Pattern[str], str]:
    segments = TEMPLATE_SEGMENT.findall(uri)
    if len(segments) != 1:
        raise ValueError(f"Resource template must contain exactly one parameter: {uri}")
    prefix, _name, suffix = TEMPLATE_SEGMENT.split(uri)
    pattern = re.compile(re.escape(prefix) + r"(?P<value>[^/]+)" + re.escape(suffix))
    return pattern, segments[0]


class ResourceCatalog:
    """Resolve URIs to resources by exact match first, then by template."""

    def __init__(self, resources: List[ResourceDefinition]) -> None:
        self._exact: Dict[str, ResourceDefinition] = {}
        self._templates: List[Tuple[Pattern[str], str, ResourceDefinition]] = []
        self._ordered = list(resources)
        for resource in resources:
            if resource.is_template:
                pattern, param = _template_regex(resource.uri)
                self._templates.append((pattern, param, resource))
            else:
                self._exact[resource.uri] = resource

    def list_resources(self) -> List[Dict[str, Any]]:
        return [resource.describe() for resource in self._ordered]

    def list_templates(self) -> List[Dict[str, Any]]:
        templates = []
        for _pattern, _param, resource in self._templates:
            described = resource.describe()
            described["uriTemplate"] = described.pop("uri")
            templates.append(described)
        return templates

    def resolve(self, uri: str) -> Optional[Tuple[ResourceDefinition, Dict[str, str]]]:
        if not isinstance(uri, str):
            return None
        resource = self._exact.get(uri)
        if resource is not None:
            return resource, {}
        for pattern, param, template in self._templates:
            match = pattern.fullmatch(uri)
            if match:
                return template, {param: match.group("value")}
        return None

    def read(self, uri: str) -> Optional[Dict[str, Any]]:
        """
        Materialize a resource for ``uri``.

        Returns None when nothing matches or a template producer rejects the
        parameter value with ``LookupError``. Data is produced on every call.
        """
        resolved = self.resolve(uri)
        if resolved is None:
            return None
        resource, args = resolved
        try:
            text = resource.producer(**args)
        except LookupError:
            return None
        return {"uri": uri, "mimeType": resource.mime_type, "text": text}


def _color_category(category: str) -> str:
    if category == "all":
        return _dump(COLOR_TOKENS)
    return _dump(COLOR_TOKENS[category])


def _typography_platform(platform: str) -> str:
    if platform == "all":
        return _dump(TYPOGRAPHY_TOKENS)
    if platform not in ("ios", "macos", "web"):
        raise KeyError(platform)
    return _dump(
        {
            "fontFamily": TYPOGRAPHY_TOKENS["fontFamily"],
            "scale": TYPOGRAPHY_TOKENS[platform],
            "weights": TYPOGRAPHY_TOKENS["weights"],
        }
    )


def _static(value: Any) -> DataProducer:
    return lambda: _dump(value)


ALL_RESOURCES: List[ResourceDefinition] = [
    ResourceDefinition(
        uri="appleui://colors/{category}",
        name="Apple Colors",
        description="Apple color tokens by category (system, semantic, gradients, accessible, all)",
        producer=_color_category,
    ),
    ResourceDefinition(
        uri="appleui://typography/{platform}",
        name="Apple Typography",
        description="Apple typography scale by platform (ios, macos, web, all)",
        producer=_typography_platform,
    ),
    ResourceDefinition(
        uri="appleui://spacing",
        name="Apple Spacing System",
        description="8pt grid spacing system with layout and component values",
        producer=_static(SPACING_TOKENS),
    ),
    ResourceDefinition(
        uri="appleui://spacing/scale",
        name="Spacing Scale",
        description="Base spacing scale values (xxs to xxxl)",
        producer=_static(SPACING_TOKENS["scale"]),
    ),
    ResourceDefinition(
        uri="appleui://spacing/components",
        name="Component Spacing",
        description="Spacing values for common UI components",
        producer=_static(SPACING_TOKENS["components"]),
    ),
    ResourceDefinition(
        uri="appleui://animations",
        name="Apple Animation System",
        description="Spring animations, timing curves, and motion patterns",
        producer=_static(ANIMATION_TOKENS),
    ),
    ResourceDefinition(
        uri="appleui://animations/springs",
        name="Spring Animations",
        description="Spring animation configurations for natural motion",
        producer=_static(ANIMATION_TOKENS["springs"]),
    ),
    ResourceDefinition(
        uri="appleui://animations/curves",
        name="Bezier Curves",
        description="CSS cubic-bezier timing functions",
        producer=_static(ANIMATION_TOKENS["bezierCurves"]),
    ),
    ResourceDefinition(
        uri="appleui://animations/patterns",
        name="Animation Patterns",
        description="Common UI animation patterns with timing",
        producer=_static(ANIMATION_TOKENS["patterns"]),
    ),
    ResourceDefinition(
        uri="appleui://shadows",
        name="Apple Shadow System",
        description="Elevation levels and shadow specifications",
        producer=_static(SHADOW_TOKENS),
    ),
    ResourceDefinition(
        uri="appleui://shadows/css",
        name="CSS Shadow Values",
        description="Pre-computed CSS box-shadow values",
        producer=_static(SHADOW_TOKENS["css"]),
    ),
    ResourceDefinition(
        uri="appleui://materials",
        name="Apple Materials",
        description="Blur and vibrancy material specifications",
        producer=_static(MATERIAL_TOKENS),
    ),
    ResourceDefinition(
        uri="appleui://materials/css",
        name="CSS Material Values",
        description="CSS backdrop-filter values for materials",
        producer=_static(MATERIAL_TOKENS["css"]),
    ),
]


default_catalog = ResourceCatalog(ALL_RESOURCES)
