"""Generates LVGL C code (ui.h / ui.c) from a widget layout, keeping USER CODE regions."""

from .c_emitter import LvglCodeEmitter, generate_ui_files
from .errors import DroppedRegionsError, GeneratorError, MalformedGuardsError, ProjectConfigError
from .guards import detect_malformed_guards, extract_guarded_blocks, merge_guarded_blocks
from .identifiers import assign_ids
from .model import BindingKind, EventBinding, Layout, SharedStyle, Styles, WidgetNode
from .pipeline import GenerationResult, regenerate

__version__ = "0.1.0"
