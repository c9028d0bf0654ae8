"""Tests for event binding resolution."""

import pytest

from lvgl_ui_gen.events import EventHookup, event_key_suffix, get_widget_event_bindings
from lvgl_ui_gen.model import BindingKind, EventBinding


class TestEventBinding:
    @pytest.mark.parametrize("value", ["handler", "  handler  "])
    def test_string_is_handler(self, value):
        binding = EventBinding.from_value(value)
        assert binding.kind is BindingKind.HANDLER
        assert binding.handler == "handler"

    @pytest.mark.parametrize("value", [True, {"debounce": 10}])
    def test_true_or_object_is_stub(self, value):
        assert EventBinding.from_value(value).kind is BindingKind.STUB

    @pytest.mark.parametrize("value", [None, False, "", "   ", {}, 0, 1])
    def test_everything_else_is_none(self, value):
        binding = EventBinding.from_value(value)
        assert binding.kind is BindingKind.NONE
        assert not binding


class TestSuffix:
    def test_strips_on_and_lowercases(self):
        assert event_key_suffix("onClicked") == "clicked"
        assert event_key_suffix("onValueChanged") == "valueChanged"


class TestWidgetBindings:
    def test_stub_binding(self, make_node):
        node = make_node(type="button", onClick=True)
        assert get_widget_event_bindings(node, "btn") == [
            EventHookup("LV_EVENT_CLICKED", "ui_btn_click", "ui_btn_click", True),
        ]

    def test_explicit_handler_is_normalized(self, make_node):
        node = make_node(type="slider", onValueChanged="My-Handler")
        assert get_widget_event_bindings(node, "s") == [
            EventHookup("LV_EVENT_VALUE_CHANGED", "My_Handler", "My_Handler", False),
        ]

    @pytest.mark.parametrize("name, expected", [("mySliderHandler", "mySliderHandler"), ("2ndHandler", "_2ndHandler")])
    def test_explicit_handler_keeps_case(self, make_node, name, expected):
        node = make_node(type="slider", onValueChanged=name)
        assert get_widget_event_bindings(node, "s") == [
            EventHookup("LV_EVENT_VALUE_CHANGED", expected, expected, False),
        ]

    def test_table_order_not_declaration_order(self, make_node):
        node = make_node(onDefocused=True, onPressed="press", onClicked=True)
        codes = [h.event_code for h in get_widget_event_bindings(node, "w")]
        assert codes == ["LV_EVENT_CLICKED", "LV_EVENT_PRESSED", "LV_EVENT_DEFOCUSED"]

    def test_synonyms_get_distinct_stubs(self, make_node):
        node = make_node(onFocus=True, onFocused=True)
        names = [h.handler_name for h in get_widget_event_bindings(node, "w")]
        assert names == ["ui_w_focus", "ui_w_focused"]

    def test_unknown_and_empty_bindings_are_ignored(self, make_node):
        node = make_node(onClick=False, onHover=True, onPressed="")
        assert get_widget_event_bindings(node, "w") == []
