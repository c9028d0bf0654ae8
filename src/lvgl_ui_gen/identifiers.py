# identifiers.py
import logging
from typing import Dict, Iterator, Optional, Tuple

from .model import WidgetNode
from .type_utils import valid_c_identifier

logger = logging.getLogger(__name__)

ROOT_PATH = "root"

# Path ("root", "root_0_2", ...) -> C identifier, in pre-order insertion order
IdentifierMap = Dict[str, str]


def child_path(parent_path: str, index: int) -> str:
    return f"{parent_path}_{index}"


def display_path(path: str) -> str:
    """root_0_2 -> root.0.2, for listings shown to people."""
    return path.replace("_", ".")


def walk(root: Optional[WidgetNode], path: str = ROOT_PATH) -> Iterator[Tuple[str, WidgetNode]]:
    """Yields (path, node) pairs in pre-order, children in sibling order."""
    if root is None:
        return
    yield path, root
    for i, child in enumerate(root.children):
        yield from walk(child, child_path(path, i))


def node_identifier(node: WidgetNode, path: str) -> str:
    """
    A user-supplied id is normalized into a C name. Without one the name is the
    normalized widget type plus the path, which is unique because paths are.
    """
    if node.id:
        return valid_c_identifier(node.id)
    return f"{valid_c_identifier(node.type)}_{path}"


def assign_ids(root: Optional[WidgetNode]) -> IdentifierMap:
    """
    Assign stable IDs to widgets; returns map of path -> id.

    Duplicate user ids are kept as-is: two nodes with "id": "ok" both become "ok"
    and the C compiler reports the clash.
    """
    id_map: IdentifierMap = {}
    for path, node in walk(root):
        id_map[path] = node_identifier(node, path)
    logger.debug(f"Assigned {len(id_map)} widget identifiers")
    return id_map
