# project.py
"""Reading the project files and writing generated output."""
import json
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Optional, Union

from .config import DIR_GENERATED, LAYOUT_FILENAME, LVPROJ_FILENAME, STYLES_FILENAME, GeneratorSettings
from .errors import GeneratorError, ProjectConfigError
from .model import Layout, ProjectManifest, Styles

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def is_project_dir(directory: PathLike) -> bool:
    return (Path(directory) / LVPROJ_FILENAME).is_file()


def find_project_root(file_or_dir: PathLike) -> Optional[Path]:
    """Find the project root by walking up from a file or directory."""
    current = Path(file_or_dir).resolve()
    for candidate in [current, *current.parents]:
        if is_project_dir(candidate):
            return candidate
    return None


def _read_json(path: Path):
    with open(path, 'r', encoding='utf-8') as f:
        return json.load(f)


def read_manifest(project_root: PathLike) -> ProjectManifest:
    path = Path(project_root) / LVPROJ_FILENAME
    try:
        data = _read_json(path)
    except (OSError, ValueError) as e:
        # ValueError covers both bad JSON and bytes that are not UTF-8
        raise ProjectConfigError(f"Cannot read {path}: {e}") from e
    manifest = ProjectManifest.from_dict(data) if isinstance(data, dict) else None
    if manifest is None:
        raise ProjectConfigError(f"Invalid {LVPROJ_FILENAME}: need version 1, lvglVersion and resolution")
    return manifest


def read_layout(project_root: PathLike) -> Layout:
    path = Path(project_root) / LAYOUT_FILENAME
    try:
        data = _read_json(path)
        if isinstance(data, dict) and data.get("version") == 1:
            return Layout.from_dict(data)
        logger.warning(f"{path} has an unsupported version. Using an empty layout.")
    except FileNotFoundError:
        logger.info(f"No {LAYOUT_FILENAME} in project. Using an empty layout.")
    except (OSError, ValueError, TypeError) as e:
        logger.error(f"Failed to read layout: {e}")
    return Layout()


def read_styles(project_root: PathLike) -> Styles:
    path = Path(project_root) / STYLES_FILENAME
    try:
        data = _read_json(path)
        if isinstance(data, dict) and data.get("version") == 1:
            return Styles.from_dict(data)
        logger.warning(f"{path} has an unsupported version. Using no shared styles.")
    except FileNotFoundError:
        logger.info(f"No {STYLES_FILENAME} in project. Using no shared styles.")
    except (OSError, ValueError) as e:
        logger.error(f"Failed to read styles: {e}")
    return Styles()


def output_dir(project_root: PathLike, settings: GeneratorSettings) -> Path:
    return Path(project_root) / settings.output_dir


def read_previous_source(project_root: PathLike, settings: GeneratorSettings) -> Optional[str]:
    """The previous implementation file, or None if it has never been generated."""
    path = output_dir(project_root, settings) / settings.source_name
    if not path.is_file():
        return None
    try:
        return path.read_text(encoding='utf-8')
    except UnicodeDecodeError as e:
        raise GeneratorError(f"{path} is not valid UTF-8 ({e}); refusing to overwrite it") from e


def write_atomic(path: Path, content: str) -> None:
    """
    Writes content to a temp file next to `path` and renames it into place, so
    readers only ever see the old or the complete new file.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=str(path.parent), prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, 'w', encoding='utf-8', newline='') as tmp_f:
            tmp_f.write(content)
            tmp_f.flush()
            os.fsync(tmp_f.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.remove(tmp_name)
        except OSError as e:
            logger.warning(f"Could not remove temporary file {tmp_name}: {e}")
        raise


def write_generated(project_root: PathLike, settings: GeneratorSettings, header: str, source: str):
    """Writes ui.c then ui.h. Returns their paths."""
    out = output_dir(project_root, settings)
    source_path = out / settings.source_name
    header_path = out / settings.header_name
    write_atomic(source_path, source)
    write_atomic(header_path, header)
    logger.info(f"Wrote {source_path} and {header_path}")
    return source_path, header_path


def clean_generated(project_root: PathLike) -> bool:
    """Empties generated/. Returns False if there was nothing to clean."""
    generated = Path(project_root) / DIR_GENERATED
    if not generated.exists():
        return False
    shutil.rmtree(generated)
    generated.mkdir(parents=True)
    logger.info(f"Cleaned {generated}")
    return True
