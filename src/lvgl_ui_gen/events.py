# events.py
import logging
from typing import List, NamedTuple, Optional

from .model import BindingKind, EventBinding, WidgetNode
from .type_utils import valid_c_identifier

logger = logging.getLogger(__name__)

# Event property -> LVGL event code. Iteration order is the emission order.
EVENT_MAP = {
    "onClick": "LV_EVENT_CLICKED",
    "onClicked": "LV_EVENT_CLICKED",
    "onValueChanged": "LV_EVENT_VALUE_CHANGED",
    "onPressed": "LV_EVENT_PRESSED",
    "onReleased": "LV_EVENT_RELEASED",
    "onFocus": "LV_EVENT_FOCUSED",
    "onFocused": "LV_EVENT_FOCUSED",
    "onDefocus": "LV_EVENT_DEFOCUSED",
    "onDefocused": "LV_EVENT_DEFOCUSED",
}

STUB_HANDLER_PREFIX = "ui_"


class EventHookup(NamedTuple):
    event_code: str
    handler_name: str
    region_key: str
    is_stub: bool


def event_key_suffix(key: str) -> str:
    """onClicked -> clicked, onValueChanged -> valueChanged"""
    s = key[2:] if key.startswith("on") else key
    return s[:1].lower() + s[1:]


def resolve_event_handler(binding: EventBinding, widget_id: str, event_key: str) -> Optional[EventHookup]:
    """Returns the hookup for one binding, or None when the binding produces nothing."""
    if binding.kind is BindingKind.HANDLER:
        # Case is kept: the user owns this function and its exact C name
        name = valid_c_identifier(binding.handler, lowercase=False)
        return EventHookup(EVENT_MAP[event_key], name, name, False)
    if binding.kind is BindingKind.STUB:
        name = f"{STUB_HANDLER_PREFIX}{widget_id}_{event_key_suffix(event_key)}"
        return EventHookup(EVENT_MAP[event_key], name, name, True)
    return None


def get_widget_event_bindings(node: WidgetNode, widget_id: str) -> List[EventHookup]:
    hookups = []
    for key in EVENT_MAP:
        hookup = resolve_event_handler(node.event_binding(key), widget_id, key)
        if hookup is not None:
            hookups.append(hookup)
    return hookups
