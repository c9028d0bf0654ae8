"""Pytest configuration and fixtures."""

import json
import re

import pytest

from lvgl_ui_gen.model import Layout, SharedStyle, Styles, WidgetNode


def region_body(text, region_id):
    """Text strictly between a region's markers, trailing whitespace trimmed."""
    m = re.search(
        r'/\* USER CODE BEGIN ' + region_id + r' \*/(.*?)/\* USER CODE END ' + region_id + r' \*/',
        text,
        re.DOTALL,
    )
    assert m, f"region {region_id} not found"
    return m.group(1).rstrip()


@pytest.fixture
def button_layout():
    """A root container with one auto-stub button."""
    return Layout.from_dict({
        "version": 1,
        "root": {
            "type": "obj",
            "children": [{"type": "button", "onClick": True}],
        },
    })


@pytest.fixture
def panel_layout():
    """A styled panel with a label, a slider bound to a named handler and a nested button."""
    return Layout.from_dict({
        "version": 1,
        "root": {
            "type": "obj",
            "id": "Main Screen",
            "styleId": "card",
            "width": 320,
            "height": 240,
            "children": [
                {"type": "label", "id": "title", "x": 10, "y": 5, "text": "Hello"},
                {"type": "slider", "id": "volume", "min": 0, "max": 100, "value": 30,
                 "onValueChanged": "mySliderHandler"},
                {"type": "obj", "children": [
                    {"type": "btn", "id": "ok", "onClick": True, "onPressed": {"haptic": 1}},
                ]},
            ],
        },
    })


@pytest.fixture
def card_styles():
    return Styles(shared=[
        SharedStyle(id="card", props={"bg_color": 0xFF0000, "radius": 8, "pad_all": 4}),
    ])


@pytest.fixture
def empty_styles():
    return Styles()


@pytest.fixture
def make_node():
    def _make(**data):
        data.setdefault("type", "obj")
        return WidgetNode.from_dict(data)
    return _make


@pytest.fixture
def project_dir(tmp_path):
    """A minimal project on disk with a one-button layout and a shared style."""
    (tmp_path / "lvproj.json").write_text(json.dumps({
        "version": 1,
        "lvglVersion": "9.0.0",
        "resolution": {"width": 320, "height": 240},
        "colorDepth": 16,
    }), encoding="utf-8")
    (tmp_path / "layout.json").write_text(json.dumps({
        "version": 1,
        "root": {"type": "obj", "id": "screen", "styleId": "base",
                 "children": [{"type": "button", "id": "go", "onClick": True}]},
    }), encoding="utf-8")
    (tmp_path / "styles.json").write_text(json.dumps({
        "version": 1,
        "shared": [{"id": "base", "bg_color": 0x00FF00}],
    }), encoding="utf-8")
    return tmp_path
