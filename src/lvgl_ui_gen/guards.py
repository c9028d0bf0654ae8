# guards.py
"""
USER CODE guard regions.

The marker grammar lives here and nowhere else. Emission uses `begin_marker` /
`end_marker`, extraction, validation and merging use BEGIN_RE / END_RE:

    /* USER CODE BEGIN <id> */
    /* USER CODE END <id> */

<id> is a bare word (letters, digits, underscore). Region bodies are opaque text.
"""
import logging
import re
from typing import Dict, List, NamedTuple

logger = logging.getLogger(__name__)

BEGIN_MARKER = "/* USER CODE BEGIN {id} */"
END_MARKER = "/* USER CODE END {id} */"

BEGIN_RE = re.compile(r'/\*\s*USER\s+CODE\s+BEGIN\s+(\w+)\s*\*/')
END_RE = re.compile(r'/\*\s*USER\s+CODE\s+END\s+(\w+)\s*\*/')

# Region id -> preserved text between the markers, trailing whitespace trimmed
GuardBlocks = Dict[str, str]


def begin_marker(region_id):
    return BEGIN_MARKER.format(id=region_id)


def end_marker(region_id):
    return END_MARKER.format(id=region_id)


class GuardDiagnostic(NamedTuple):
    region_id: str
    missing: str  # the marker kind that is missing: "END" or "BEGIN"

    def __str__(self):
        found = "BEGIN" if self.missing == "END" else "END"
        return f"USER CODE {found} {self.region_id} has no matching {self.missing}"


class MergeResult(NamedTuple):
    text: str
    preserved: List[str]  # region ids whose old content was re-inserted
    dropped: List[str]  # region ids with old content but no place in the new text


def _spans(matches):
    """Region id -> (start of its first marker, end of its last marker), in order of first appearance."""
    spans = {}
    for m in matches:
        first = spans.get(m.group(1), (m.start(), None))[0]
        spans[m.group(1)] = (first, m.end())
    return spans


def detect_malformed_guards(content: str) -> List[GuardDiagnostic]:
    """
    Check for malformed guard markers (BEGIN without END or vice versa).

    Order matters: an END that comes before every BEGIN of its id has no BEGIN,
    and a BEGIN with no END after it has no END. At most one diagnostic is
    reported per id and missing kind.
    """
    begins = _spans(BEGIN_RE.finditer(content))
    ends = _spans(END_RE.finditer(content))
    errors = []
    for rid, (_, last_begin) in begins.items():
        if rid not in ends or ends[rid][1] < last_begin:
            errors.append(GuardDiagnostic(rid, "END"))
    for rid, (first_end, _) in ends.items():
        if rid not in begins or first_end < begins[rid][0]:
            errors.append(GuardDiagnostic(rid, "BEGIN"))
    for err in errors:
        logger.debug(f"Malformed guard: {err}")
    return errors


def extract_guarded_blocks(content: str) -> GuardBlocks:
    """
    Extract content of USER CODE BEGIN id ... USER CODE END id guard blocks.

    Each BEGIN is paired with the first END of the same id that starts after it.
    When an id repeats, the first pairing found wins. This is positional, so two
    overlapping regions with one id may pair "wrongly"; callers validate first.
    """
    blocks: GuardBlocks = {}
    ends = [(m.group(1), m.start()) for m in END_RE.finditer(content)]
    for begin in BEGIN_RE.finditer(content):
        region_id = begin.group(1)
        if region_id in blocks:
            continue
        for end_id, end_start in ends:
            if end_id == region_id and end_start >= begin.end():
                blocks[region_id] = content[begin.end():end_start].rstrip()
                break
    return blocks


def _line_indent(content, pos):
    """Whitespace between the start of the line and pos, or '' if the line has other text."""
    line_start = content.rfind("\n", 0, pos) + 1
    prefix = content[line_start:pos]
    return prefix if not prefix.strip() else ""


def merge_guarded_blocks(content: str, blocks: GuardBlocks) -> MergeResult:
    """
    Re-inject preserved region bodies into freshly emitted text.

    For each marker pair in `content` whose id is in `blocks`, the body becomes the
    preserved text followed by a newline and the END marker's indentation. An empty
    preserved body keeps the emitted body, so regenerating is byte-stable.
    """
    pieces = []
    pos = 0
    preserved = []
    ends = [(m.group(1), m.start()) for m in END_RE.finditer(content)]
    for begin in BEGIN_RE.finditer(content):
        region_id = begin.group(1)
        if begin.start() < pos or region_id not in blocks or region_id in preserved:
            continue
        end_start = next((s for eid, s in ends if eid == region_id and s >= begin.end()), None)
        if end_start is None:
            continue
        preserved.append(region_id)
        body = blocks[region_id]
        if not body:
            continue
        pieces.append(content[pos:begin.end()])
        pieces.append(f"{body}\n{_line_indent(content, end_start)}")
        pos = end_start
    pieces.append(content[pos:])

    # Empty regions carry no user code, so losing them is not worth reporting
    dropped = [rid for rid in blocks if rid not in preserved and blocks[rid]]
    return MergeResult("".join(pieces), preserved, dropped)
