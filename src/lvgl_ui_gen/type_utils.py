# type_utils.py
import logging
import re

logger = logging.getLogger(__name__)

# Widget type (lowercased) -> LVGL class prefix. Create functions are "<class>_create".
WIDGET_CLASSES = {
    "obj": "lv_obj",
    "object": "lv_obj",
    "btn": "lv_btn",
    "button": "lv_btn",
    "label": "lv_label",
    "img": "lv_img",
    "image": "lv_img",
    "slider": "lv_slider",
    "bar": "lv_bar",
    "switch": "lv_switch",
    "checkbox": "lv_checkbox",
    "dropdown": "lv_dropdown",
    "roller": "lv_roller",
    "textarea": "lv_textarea",
    "canvas": "lv_canvas",
    "arc": "lv_arc",
    "spinner": "lv_spinner",
}
DEFAULT_WIDGET_CLASS = "lv_obj"

# Classes that own a text buffer (lv_<class>_set_text)
TEXT_WIDGET_CLASSES = {"lv_label", "lv_checkbox", "lv_textarea"}
# Classes with a value/range; the flag says whether the setter takes an anim argument
VALUE_WIDGET_CLASSES = {"lv_slider": True, "lv_bar": True, "lv_arc": False}

COLOR_SUFFIX = "_color"
FALLBACK_IDENTIFIER = "obj"


def to_snake_case(name, lowercase=True):
    """Collapses every run of non-alphanumerics to one '_' and lowercases. Empty -> 'obj'."""
    s = re.sub(r'[^a-zA-Z0-9]+', '_', name).strip('_')
    if lowercase:
        s = s.lower()
    return s or FALLBACK_IDENTIFIER


def valid_c_identifier(name, lowercase=True):
    """Like to_snake_case, but also escapes a leading digit so the result is a valid C name."""
    s = to_snake_case(name, lowercase)
    if s[0].isdigit():
        s = "_" + s
    return s


def lvgl_widget_class(widget_type):
    """Extracts 'lv_btn' from 'button', 'lv_label' from 'Label'. Unknown types map to lv_obj."""
    cls = WIDGET_CLASSES.get(str(widget_type).lower())
    if cls is None:
        logger.debug(f"Unknown widget type '{widget_type}', falling back to {DEFAULT_WIDGET_CLASS}")
        return DEFAULT_WIDGET_CLASS
    return cls


def lv_create_func(widget_type):
    return f"{lvgl_widget_class(widget_type)}_create"


def is_number(value):
    # bool is an int subclass but is never a numeric property
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def format_color(value):
    """Renders a numeric color as lv_color_hex(0xrrggbb), zero-padded lowercase hex."""
    return f"lv_color_hex(0x{int(value):06x})"


def format_number(value):
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_c_value(prop_name, value):
    """
    Converts a JSON property value to a C expression string.

    Colors (properties ending in '_color') become lv_color_hex() calls, other numbers
    plain decimal, booleans true/false. Strings are inserted verbatim as C expressions.
    Returns None for values that have no C rendering.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if is_number(value):
        if prop_name.endswith(COLOR_SUFFIX):
            return format_color(value)
        return format_number(value)
    if isinstance(value, str):
        return value
    return None


def c_string_literal(text):
    """Wraps text in double quotes. No escaping is applied."""
    return f"\"{text}\""
