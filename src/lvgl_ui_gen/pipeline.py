# pipeline.py
import logging
from typing import List, NamedTuple, Optional

from .c_emitter import DEFAULT_HEADER_NAME, generate_ui_files
from .errors import MalformedGuardsError
from .guards import GuardDiagnostic, detect_malformed_guards, extract_guarded_blocks, merge_guarded_blocks
from .model import Layout, Styles

logger = logging.getLogger(__name__)


class GenerationResult(NamedTuple):
    header: str
    source: str
    diagnostics: List[GuardDiagnostic]  # non-empty only when malformed guards were overwritten
    preserved: List[str]
    dropped: List[str]


def regenerate(layout: Layout, styles: Styles, previous_source: Optional[str] = None, *,
               overwrite_malformed: bool = False,
               header_name: str = DEFAULT_HEADER_NAME) -> GenerationResult:
    """
    One full generation pass: validate and extract the previous ui.c, emit fresh
    documents, then splice the preserved user code back in.

    Raises MalformedGuardsError if the previous source has unbalanced markers and
    `overwrite_malformed` is False. With it set, the previous source is ignored and
    none of its user code survives.
    """
    blocks = {}
    diagnostics = []
    if previous_source is not None:
        diagnostics = detect_malformed_guards(previous_source)
        if diagnostics and not overwrite_malformed:
            raise MalformedGuardsError(diagnostics)
        if diagnostics:
            logger.warning(f"Overwriting despite {len(diagnostics)} malformed guard(s); user code will not be preserved")
        else:
            blocks = extract_guarded_blocks(previous_source)
            logger.debug(f"Extracted {len(blocks)} guarded block(s) from previous source")

    header, source = generate_ui_files(layout, styles, header_name=header_name)
    merged = merge_guarded_blocks(source, blocks)

    kept = [rid for rid in merged.preserved if blocks.get(rid)]
    if kept:
        logger.info(f"Preserved user code in: {', '.join(kept)}")
    return GenerationResult(header, merged.text, diagnostics, merged.preserved, merged.dropped)
