# generator.py
import argparse
import logging
import sys
from pathlib import Path

from . import project
from .config import DIR_GENERATED, LVPROJ_FILENAME, GeneratorSettings
from .errors import DroppedRegionsError, GeneratorError, MalformedGuardsError
from .guards import detect_malformed_guards
from .identifiers import assign_ids, display_path, walk
from .pipeline import regenerate

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(levelname)s: [%(filename)s:%(lineno)d] %(message)s'
COMMANDS = ("generate", "check", "clean", "tree")


def confirm(question):
    """Asks a yes/no question on the terminal. Anything but y/yes is no."""
    try:
        answer = input(f"{question} [y/N] ")
    except EOFError:
        return False
    return answer.strip().lower() in ("y", "yes")


def build_parser():
    parser = argparse.ArgumentParser(description="LVGL UI code generator with preserved USER CODE regions")
    parser.add_argument("command", nargs="?", choices=COMMANDS, default="generate",
                        help="'generate' (default) writes ui.c/ui.h, 'check' validates guard markers in the "
                             "existing ui.c, 'clean' empties generated/ only (an output directory elsewhere "
                             "is left alone), 'tree' lists widget identifiers.")
    parser.add_argument("-p", "--project", default=".",
                        help=f"Project directory or any path inside it (searched upwards for {LVPROJ_FILENAME}).")
    parser.add_argument("-o", "--output-dir", default=None,
                        help="Output directory, relative to the project root. Overrides lvproj.json.")
    parser.add_argument("--header-name", default=None, help="File name of the generated header (default ui.h).")
    parser.add_argument("--source-name", default=None, help="File name of the generated source (default ui.c).")
    parser.add_argument("-f", "--force", action="store_true",
                        help="Overwrite ui.c even if its USER CODE markers are malformed.")
    parser.add_argument("-y", "--yes", action="store_true", help="Do not ask before cleaning generated/.")
    parser.add_argument("--fail-on-dropped", action="store_true", default=None,
                        help="Refuse to write if user code in a removed region would be discarded.")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging.")
    return parser


def load_settings(manifest, args):
    settings = GeneratorSettings().with_manifest(manifest.generator)
    return settings.with_overrides(
        output_dir=args.output_dir,
        header_name=args.header_name,
        source_name=args.source_name,
        fail_on_dropped_regions=args.fail_on_dropped,
    )


def run_generate(project_root, settings, args):
    layout = project.read_layout(project_root)
    styles = project.read_styles(project_root)
    previous = project.read_previous_source(project_root, settings)

    try:
        result = regenerate(layout, styles, previous, overwrite_malformed=args.force,
                            header_name=settings.header_name)
    except MalformedGuardsError as e:
        for diag in e.diagnostics:
            logger.warning(str(diag))
        if not confirm(f"{e}. Overwrite anyway?"):
            logger.error("Generation cancelled; nothing was written.")
            return 1
        result = regenerate(layout, styles, previous, overwrite_malformed=True,
                            header_name=settings.header_name)

    if result.dropped:
        if settings.fail_on_dropped_regions:
            raise DroppedRegionsError(result.dropped)
        if settings.warn_dropped_regions:
            for region_id in result.dropped:
                logger.warning(f"Region '{region_id}' no longer exists; its user code is discarded.")

    project.write_generated(project_root, settings, result.header, result.source)
    return 0


def run_check(project_root, settings):
    previous = project.read_previous_source(project_root, settings)
    if previous is None:
        logger.info(f"No {settings.source_name} generated yet. Nothing to check.")
        return 0
    diagnostics = detect_malformed_guards(previous)
    for diag in diagnostics:
        logger.error(str(diag))
    if diagnostics:
        return 1
    logger.info(f"All USER CODE markers in {settings.source_name} are balanced.")
    return 0


def run_clean(project_root, args):
    if args.output_dir and Path(args.output_dir).parts[:1] != (DIR_GENERATED,):
        logger.info(f"clean only empties {DIR_GENERATED}/; {args.output_dir} is left alone.")
    if not (Path(project_root) / DIR_GENERATED).exists():
        logger.info(f"Nothing to clean. {DIR_GENERATED}/ does not exist.")
        return 0
    if not args.yes and not confirm(f"Delete all files in {DIR_GENERATED}/?"):
        logger.info("Clean cancelled.")
        return 1
    project.clean_generated(project_root)
    return 0


def run_tree(project_root):
    layout = project.read_layout(project_root)
    id_map = assign_ids(layout.root)
    for path, node in walk(layout.root):
        depth = path.count("_")
        print(f"{'  ' * depth}{display_path(path)}  {node.type}  ui_{id_map[path]}")
    return 0


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.debug else logging.INFO, format=LOG_FORMAT)

    project_root = project.find_project_root(args.project)
    if project_root is None:
        logger.error(f"No project found at or above '{args.project}' (folder with {LVPROJ_FILENAME}).")
        return 1

    try:
        if args.command == "clean":
            return run_clean(project_root, args)
        manifest = project.read_manifest(project_root)
        settings = load_settings(manifest, args)
        if args.command == "check":
            return run_check(project_root, settings)
        if args.command == "tree":
            return run_tree(project_root)
        logger.info(f"Generating code for {project_root} (LVGL {manifest.lvgl_version})")
        return run_generate(project_root, settings, args)
    except GeneratorError as e:
        logger.critical(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
