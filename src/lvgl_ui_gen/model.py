"""Data model for the layout, style and project manifest files."""

import enum
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .type_utils import is_number

logger = logging.getLogger(__name__)

# Keys of a widget node that are structure, not properties
STRUCTURAL_KEYS = ("type", "id", "children", "styleId")


class BindingKind(enum.Enum):
    NONE = "none"
    HANDLER = "handler"  # user named an existing handler function
    STUB = "stub"  # generate an empty handler with an editable region


@dataclass(frozen=True)
class EventBinding:
    kind: BindingKind
    handler: Optional[str] = None

    @classmethod
    def from_value(cls, value: Any) -> "EventBinding":
        """
        Classifies a raw JSON event value.

        A non-empty string names a handler. `true` or a non-empty object asks for a
        stub. Anything else (absent, null, false, "", {}, numbers) is no binding.
        """
        if isinstance(value, str):
            if value.strip():
                return cls(BindingKind.HANDLER, value.strip())
            return NO_BINDING
        if value is True:
            return cls(BindingKind.STUB)
        if isinstance(value, dict) and value:
            return cls(BindingKind.STUB)
        return NO_BINDING

    def __bool__(self):
        return self.kind is not BindingKind.NONE


NO_BINDING = EventBinding(BindingKind.NONE)


@dataclass
class WidgetNode:
    type: str = "obj"
    id: Optional[str] = None
    children: List["WidgetNode"] = field(default_factory=list)
    style_id: Optional[str] = None
    props: Dict[str, Any] = field(default_factory=dict)

    def get_number(self, key: str) -> Optional[float]:
        value = self.props.get(key)
        return value if is_number(value) else None

    def get_string(self, key: str) -> Optional[str]:
        value = self.props.get(key)
        return value if isinstance(value, str) else None

    def get_bool(self, key: str) -> bool:
        return self.props.get(key) is True

    def event_binding(self, key: str) -> EventBinding:
        return EventBinding.from_value(self.props.get(key))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WidgetNode":
        if not isinstance(data, dict):
            raise TypeError(f"expected dict for widget node, got {type(data)}")
        node_type = data.get("type")
        if not isinstance(node_type, str) or not node_type:
            logger.warning(f"Widget node without a string 'type' ({node_type!r}), using 'obj'")
            node_type = "obj"
        node_id = data.get("id")
        if node_id is not None and not isinstance(node_id, str):
            node_id = str(node_id)
        style_id = data.get("styleId")
        children = []
        for child in data.get("children") or []:
            if isinstance(child, dict):
                children.append(cls.from_dict(child))
            else:
                logger.warning(f"Skipping non-object child in '{node_type}': {child!r}")
        props = {k: v for k, v in data.items() if k not in STRUCTURAL_KEYS}
        return cls(
            type=node_type,
            id=node_id or None,
            children=children,
            style_id=style_id if isinstance(style_id, str) and style_id else None,
            props=props,
        )


@dataclass
class SharedStyle:
    id: str
    props: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Optional["SharedStyle"]:
        style_id = data.get("id") if isinstance(data, dict) else None
        if not isinstance(style_id, str) or not style_id:
            logger.warning(f"Skipping shared style without a string 'id': {data!r}")
            return None
        return cls(id=style_id, props={k: v for k, v in data.items() if k != "id"})


@dataclass
class Layout:
    version: int = 1
    root: Optional[WidgetNode] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Layout":
        root = data.get("root")
        return cls(
            version=data.get("version", 1),
            root=WidgetNode.from_dict(root) if isinstance(root, dict) else None,
        )


@dataclass
class Styles:
    version: int = 1
    shared: List[SharedStyle] = field(default_factory=list)
    theme: Optional[Dict[str, Any]] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Styles":
        shared = []
        for entry in data.get("shared") or []:
            style = SharedStyle.from_dict(entry)
            if style is not None:
                shared.append(style)
        theme = data.get("theme")
        return cls(
            version=data.get("version", 1),
            shared=shared,
            theme=theme if isinstance(theme, dict) else None,
        )


@dataclass
class ProjectManifest:
    """lvproj.json"""

    lvgl_version: str
    resolution: Dict[str, int]
    version: int = 1
    color_depth: int = 16
    target_mcu: Optional[str] = None
    theme: Optional[str] = None
    generator: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Optional["ProjectManifest"]:
        """Returns None when required fields are missing."""
        if data.get("version") != 1 or not data.get("lvglVersion") or not data.get("resolution"):
            return None
        generator = data.get("generator")
        return cls(
            lvgl_version=str(data["lvglVersion"]),
            resolution=data["resolution"],
            version=1,
            color_depth=data.get("colorDepth", 16),
            target_mcu=data.get("targetMcu"),
            theme=data.get("theme"),
            generator=generator if isinstance(generator, dict) else {},
        )
