import abc
import logging
from typing import Dict, List, Optional

from .events import EventHookup, get_widget_event_bindings
from .identifiers import IdentifierMap, ROOT_PATH, assign_ids, child_path, walk
from .model import Layout, SharedStyle, Styles, WidgetNode
from .type_utils import valid_c_identifier

logger = logging.getLogger(__name__)


class BaseCodeEmitter(abc.ABC):
    """
    Walks a layout and its shared styles and asks the concrete emitter to render
    each piece. The walk order is fixed here so every back end emits the same
    structure: styles, per-node storage, stub handlers, then construction.
    """

    def __init__(self, layout: Layout, styles: Styles):
        self.layout = layout
        self.styles = styles
        self.id_map: IdentifierMap = assign_ids(layout.root)
        self.style_map: Dict[str, str] = self.build_style_map(styles)

    @staticmethod
    def build_style_map(styles: Styles) -> Dict[str, str]:
        """Shared style id -> valid C id, in collection order."""
        return {s.id: valid_c_identifier(s.id) for s in styles.shared}

    # --- Abstract rendering hooks ---

    @abc.abstractmethod
    def declare_style(self, style: SharedStyle, c_id: str) -> None:
        """Emits the forward declaration and storage definition of one shared style."""
        pass

    @abc.abstractmethod
    def declare_widget(self, path: str, widget_id: str) -> None:
        """Emits the forward declaration and storage definition of one widget."""
        pass

    @abc.abstractmethod
    def emit_stub_handler(self, hookup: EventHookup) -> None:
        """Emits an empty event handler with an editable region keyed by hookup.region_key."""
        pass

    @abc.abstractmethod
    def init_style(self, style: SharedStyle, c_id: str) -> None:
        """Emits the statements that initialize a shared style at runtime."""
        pass

    @abc.abstractmethod
    def create_entity(self, node: WidgetNode, widget_id: str, parent_id: Optional[str]) -> None:
        """
        Emits the create statement for a widget.
        Args:
            node: The widget being created.
            widget_id: Its resolved identifier.
            parent_id: Identifier of the parent widget, or None for the root.
        """
        pass

    @abc.abstractmethod
    def attach_style(self, widget_id: str, style_c_id: str) -> None:
        pass

    @abc.abstractmethod
    def apply_properties(self, node: WidgetNode, widget_id: str) -> None:
        """Emits setters for the node's plain properties (position, size, text, ...)."""
        pass

    @abc.abstractmethod
    def bind_event(self, widget_id: str, hookup: EventHookup) -> None:
        pass

    # --- Concrete traversal ---

    def collect_event_handler_stubs(self) -> List[EventHookup]:
        """
        Stub hookups for the whole tree, de-duplicated by handler name.
        The first occurrence in pre-order wins.
        """
        stubs: Dict[str, EventHookup] = {}
        for path, node in walk(self.layout.root):
            for hookup in get_widget_event_bindings(node, self.id_map[path]):
                if hookup.is_stub and hookup.handler_name not in stubs:
                    stubs[hookup.handler_name] = hookup
        return list(stubs.values())

    def process_node(self, node: WidgetNode, path: str, parent_id: Optional[str]) -> None:
        widget_id = self.id_map[path]
        self.create_entity(node, widget_id, parent_id)

        if node.style_id is not None:
            style_c_id = self.style_map.get(node.style_id)
            if style_c_id is not None:
                self.attach_style(widget_id, style_c_id)
            else:
                logger.warning(f"Widget '{widget_id}' references unknown style '{node.style_id}'. Skipping.")

        self.apply_properties(node, widget_id)

        # Children are constructed before this node's event wiring
        for i, child in enumerate(node.children):
            self.process_node(child, child_path(path, i), widget_id)

        for hookup in get_widget_event_bindings(node, widget_id):
            self.bind_event(widget_id, hookup)

    def process_ui(self) -> None:
        for style in self.styles.shared:
            self.declare_style(style, self.style_map[style.id])
        for path, widget_id in self.id_map.items():
            self.declare_widget(path, widget_id)
        for hookup in self.collect_event_handler_stubs():
            self.emit_stub_handler(hookup)
        if self.layout.root is None:
            return
        for style in self.styles.shared:
            self.init_style(style, self.style_map[style.id])
        self.process_node(self.layout.root, ROOT_PATH, None)

