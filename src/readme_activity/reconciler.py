"""Bring the marked activity section of a README in line with a new list.

The document is handled as a list of lines. Only the lines strictly between
the start and end markers are ever rewritten; a new list is built from the
slices around the region instead of splicing in place.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from itertools import takewhile
from typing import List, Sequence

from .formatter import Formatter

START_MARKER = "<!--START_SECTION:activity-->"
END_MARKER = "<!--END_SECTION:activity-->"


class SectionState(str, Enum):
    NO_START = "no_start"
    START_NO_END = "start_no_end"
    EMPTY = "empty"
    POPULATED = "populated"
    NO_CHANGE = "no_change"


@dataclass(slots=True, frozen=True)
class Reconciliation:
    state: SectionState
    lines: List[str]

    @property
    def changed(self) -> bool:
        return self.state not in (SectionState.NO_START, SectionState.NO_CHANGE)


def find_marker(lines: Sequence[str], marker: str, start: int = 0) -> int | None:
    for idx in range(start, len(lines)):
        if lines[idx].strip() == marker:
            return idx
    return None


def _replace_region(region: Sequence[str], rendered: Sequence[str]) -> List[str]:
    # Blank lines stay where they are; every other line takes the next entry.
    out: List[str] = []
    used = 0
    insert_at = 0
    for line in region:
        if not line.strip():
            out.append(line)
            continue
        if used < len(rendered):
            out.append(rendered[used])
            used += 1
            insert_at = len(out)
    out[insert_at:insert_at] = rendered[used:]
    return out


def reconcile(lines: Sequence[str], entries: Sequence[str], formatter: Formatter) -> Reconciliation:
    original = list(lines)
    start = find_marker(original, START_MARKER)
    if start is None:
        return Reconciliation(SectionState.NO_START, original)

    rendered = formatter.render_list(list(takewhile(bool, entries)))
    before = original[: start + 1]
    end = find_marker(original, END_MARKER, start + 1)
    if end is None:
        updated = before + rendered + [END_MARKER] + original[start + 1 :]
        return Reconciliation(SectionState.START_NO_END, updated)

    region = original[start + 1 : end]
    if "\n".join(region).strip() == "\n".join(rendered).strip():
        return Reconciliation(SectionState.NO_CHANGE, original)

    if not region:
        state = SectionState.EMPTY
        new_region = rendered
    else:
        state = SectionState.POPULATED
        new_region = _replace_region(region, rendered)

    updated = before + new_region + original[end:]
    if updated == original:
        return Reconciliation(SectionState.NO_CHANGE, original)
    return Reconciliation(state, updated)
