# c_emitter.py
import logging
import re
from typing import Optional

from .emitter_base import BaseCodeEmitter
from .events import EventHookup
from .guards import begin_marker, end_marker
from .model import Layout, SharedStyle, Styles, WidgetNode
from .type_utils import (
    TEXT_WIDGET_CLASSES,
    VALUE_WIDGET_CLASSES,
    c_string_literal,
    format_c_value,
    format_number,
    lv_create_func,
    lvgl_widget_class,
)

logger = logging.getLogger(__name__)

GENERATED_BANNER = "/* Generated by lvgl-ui-gen - do not edit */"
DEFAULT_HEADER_NAME = "ui.h"
INIT_FUNCTION = "ui_init"
INIT_REGION = "init"
INDENT = "    "


def widget_var(widget_id):
    return f"ui_{widget_id}"


def style_var(style_c_id):
    return f"ui_style_{style_c_id}"


def header_guard(header_name):
    return re.sub(r'[^A-Za-z0-9]', '_', header_name).upper()


class LvglCodeEmitter(BaseCodeEmitter):
    """Renders the layout as an LVGL C header (ui.h) and implementation (ui.c)."""

    def __init__(self, layout: Layout, styles: Styles, header_name: str = DEFAULT_HEADER_NAME):
        super().__init__(layout, styles)
        self.header_name = header_name
        self._reset()

    def _reset(self):
        self.h_lines_styles = []   # extern lv_style_t ...
        self.h_lines_widgets = []  # extern lv_obj_t * ...
        self.c_lines_styles = []   # lv_style_t storage
        self.c_lines_widgets = []  # lv_obj_t * storage
        self.c_lines_stubs = []    # static event handlers
        self.c_lines_init = []     # body of ui_init

    def _add_init(self, line):
        self.c_lines_init.append(INDENT + line if line else "")

    def _add_guard(self, lines, region_id):
        lines.append(INDENT + begin_marker(region_id))
        lines.append(INDENT + end_marker(region_id))

    # --- Declarations ---

    def declare_style(self, style: SharedStyle, c_id: str) -> None:
        self.h_lines_styles.append(f"extern lv_style_t {style_var(c_id)};")
        self.c_lines_styles.append(f"lv_style_t {style_var(c_id)};")

    def declare_widget(self, path: str, widget_id: str) -> None:
        self.h_lines_widgets.append(f"extern lv_obj_t *{widget_var(widget_id)};")
        self.c_lines_widgets.append(f"lv_obj_t *{widget_var(widget_id)} = NULL;")

    def emit_stub_handler(self, hookup: EventHookup) -> None:
        self.c_lines_stubs.append("")
        self.c_lines_stubs.append(f"static void {hookup.handler_name}(lv_event_t * e) {{")
        self.c_lines_stubs.append(f"{INDENT}lv_obj_t * obj = lv_event_get_target(e);")
        self.c_lines_stubs.append(f"{INDENT}LV_UNUSED(obj);")
        self._add_guard(self.c_lines_stubs, hookup.region_key)
        self.c_lines_stubs.append("}")

    # --- ui_init body ---

    def init_style(self, style: SharedStyle, c_id: str) -> None:
        var = style_var(c_id)
        self._add_init(f"lv_style_init(&{var});")
        for prop_name, value in style.props.items():
            c_value = format_c_value(prop_name, value)
            if c_value is None:
                logger.warning(f"Style '{style.id}': cannot render '{prop_name}' value {value!r}. Skipping.")
                continue
            self._add_init(f"lv_style_set_{prop_name}(&{var}, {c_value});")
        self._add_init("")

    def create_entity(self, node: WidgetNode, widget_id: str, parent_id: Optional[str]) -> None:
        parent = widget_var(parent_id) if parent_id is not None else "NULL"
        create_fn = lv_create_func(node.type)
        self._add_init(f"{widget_var(widget_id)} = {create_fn}({parent});")

    def attach_style(self, widget_id: str, style_c_id: str) -> None:
        self._add_init(f"lv_obj_add_style({widget_var(widget_id)}, &{style_var(style_c_id)}, 0);")

    def apply_properties(self, node: WidgetNode, widget_id: str) -> None:
        var = widget_var(widget_id)
        cls = lvgl_widget_class(node.type)

        x, y = node.get_number("x"), node.get_number("y")
        if x is not None or y is not None:
            self._add_init(f"lv_obj_set_pos({var}, {format_number(x or 0)}, {format_number(y or 0)});")

        width, height = node.get_number("width"), node.get_number("height")
        if width is not None and height is not None:
            self._add_init(f"lv_obj_set_size({var}, {format_number(width)}, {format_number(height)});")
        elif width is not None:
            self._add_init(f"lv_obj_set_width({var}, {format_number(width)});")
        elif height is not None:
            self._add_init(f"lv_obj_set_height({var}, {format_number(height)});")

        text = node.get_string("text")
        if text is not None:
            if cls in TEXT_WIDGET_CLASSES:
                self._add_init(f"{cls}_set_text({var}, {c_string_literal(text)});")
            else:
                logger.debug(f"'text' is not supported on {cls} ('{widget_id}'). Skipping.")

        if cls in VALUE_WIDGET_CLASSES:
            self._apply_value_properties(node, var, cls, VALUE_WIDGET_CLASSES[cls])

        if node.get_bool("checked"):
            self._add_init(f"lv_obj_add_state({var}, LV_STATE_CHECKED);")
        if node.get_bool("hidden"):
            self._add_init(f"lv_obj_add_flag({var}, LV_OBJ_FLAG_HIDDEN);")

    def _apply_value_properties(self, node, var, cls, takes_anim):
        low, high = node.get_number("min"), node.get_number("max")
        if low is not None and high is not None:
            self._add_init(f"{cls}_set_range({var}, {format_number(low)}, {format_number(high)});")
        elif low is not None or high is not None:
            logger.warning(f"'{var}': 'min' and 'max' must be given together. Skipping range.")
        value = node.get_number("value")
        if value is not None:
            anim = ", LV_ANIM_OFF" if takes_anim else ""
            self._add_init(f"{cls}_set_value({var}, {format_number(value)}{anim});")

    def bind_event(self, widget_id: str, hookup: EventHookup) -> None:
        self._add_init(
            f"lv_obj_add_event_cb({widget_var(widget_id)}, {hookup.handler_name}, {hookup.event_code}, NULL);"
        )

    # --- Assembly ---

    def generate_header(self) -> str:
        guard = header_guard(self.header_name)
        lines = [
            GENERATED_BANNER,
            f"#ifndef {guard}",
            f"#define {guard}",
            "",
            "#include \"lvgl.h\"",
            "",
        ]
        if self.h_lines_styles:
            lines.extend(self.h_lines_styles)
            lines.append("")
        if self.h_lines_widgets:
            lines.extend(self.h_lines_widgets)
            lines.append("")
        lines.append(f"void {INIT_FUNCTION}(void);")
        lines.append("")
        lines.append(f"#endif /* {guard} */")
        return "\n".join(lines) + "\n"

    def generate_source(self) -> str:
        lines = [GENERATED_BANNER, f"#include \"{self.header_name}\"", ""]
        if self.c_lines_styles:
            lines.extend(self.c_lines_styles)
            lines.append("")
        if self.c_lines_widgets:
            lines.extend(self.c_lines_widgets)
        if self.c_lines_stubs:
            lines.extend(self.c_lines_stubs)
        if self.c_lines_widgets or self.c_lines_stubs:
            lines.append("")

        lines.append(f"void {INIT_FUNCTION}(void)")
        lines.append("{")
        if self.layout.root is None:
            lines.append(f"{INDENT}/* Empty layout */")
        else:
            lines.extend(self.c_lines_init)
        self._add_guard(lines, INIT_REGION)
        lines.append("}")
        return "\n".join(lines) + "\n"

    def generate(self):
        """Returns (header_text, source_text)."""
        self._reset()
        self.process_ui()
        return self.generate_header(), self.generate_source()


def generate_ui_files(layout: Layout, styles: Styles, header_name: str = DEFAULT_HEADER_NAME):
    """Emits fresh (ui.h, ui.c) contents. No user code is merged in."""
    return LvglCodeEmitter(layout, styles, header_name=header_name).generate()
