# config.py
import logging
from dataclasses import dataclass, replace
from typing import Any, Dict, Optional

from .c_emitter import DEFAULT_HEADER_NAME

logger = logging.getLogger(__name__)

LVPROJ_FILENAME = "lvproj.json"
LAYOUT_FILENAME = "layout.json"
STYLES_FILENAME = "styles.json"
DIR_GENERATED = "generated"

OUTPUT_DIR_DEFAULT = "generated/ui"  # relative to the project root
SOURCE_NAME_DEFAULT = "ui.c"

# lvproj.json "generator" key -> GeneratorSettings field
_MANIFEST_KEYS = {
    "outputDir": "output_dir",
    "sourceName": "source_name",
    "headerName": "header_name",
    "warnDroppedRegions": "warn_dropped_regions",
    "failOnDroppedRegions": "fail_on_dropped_regions",
}


@dataclass(frozen=True)
class GeneratorSettings:
    output_dir: str = OUTPUT_DIR_DEFAULT
    source_name: str = SOURCE_NAME_DEFAULT
    header_name: str = DEFAULT_HEADER_NAME
    warn_dropped_regions: bool = True
    fail_on_dropped_regions: bool = False

    def with_manifest(self, generator_section: Dict[str, Any]) -> "GeneratorSettings":
        """Overlays the manifest's "generator" section. Unknown keys are ignored."""
        changes = {}
        for key, value in generator_section.items():
            field_name = _MANIFEST_KEYS.get(key)
            if field_name is None:
                logger.debug(f"Ignoring generator setting '{key}'")
                continue
            expected = type(getattr(self, field_name))
            if not isinstance(value, expected):
                logger.warning(f"Generator setting '{key}' should be {expected.__name__}, got {value!r}. Ignoring.")
                continue
            changes[field_name] = value
        return replace(self, **changes)

    def with_overrides(self, **overrides: Optional[Any]) -> "GeneratorSettings":
        """Applies command-line overrides; None means "not given"."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})
