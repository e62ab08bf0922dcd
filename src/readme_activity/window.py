"""Merge fresh events with the stored window and pick what to display."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List

from .errors import PersistenceReadError
from .events import ActivityEvent

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class Window:
    selected: List[ActivityEvent] = field(default_factory=list)
    to_persist: List[Dict[str, Any]] = field(default_factory=list)


def parse_events(records: Iterable[Any]) -> List[ActivityEvent]:
    """Parse API or stored records, skipping ones that cannot be displayed."""

    events: List[ActivityEvent] = []
    for record in records:
        try:
            events.append(ActivityEvent.from_record(record))
        except ValueError as exc:
            logger.warning("Skipping unreadable event record: %s", exc)
    return events


def decode_window(text: str | None) -> List[ActivityEvent]:
    if text is None or not text.strip():
        raise PersistenceReadError("stored window is empty")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise PersistenceReadError(f"stored window is not valid JSON: {exc}") from exc
    if not isinstance(data, list):
        raise PersistenceReadError("stored window is not a JSON array")
    return parse_events(data)


def encode_window(records: List[Dict[str, Any]]) -> str:
    return json.dumps(records, separators=(",", ":"), ensure_ascii=False)


def select_window(
    fresh: Iterable[ActivityEvent],
    persisted: Iterable[ActivityEvent],
    max_count: int,
) -> Window:
    """Fresh events first, unsupported types dropped, first id wins, then truncated.

    ``to_persist`` is the reduced form of exactly the displayed events, so the
    next run can re-render them after they age out of the API feed.
    """

    selected: List[ActivityEvent] = []
    if max_count <= 0:
        return Window()
    seen: set[str] = set()
    for event in [*fresh, *persisted]:
        if not event.supported or event.id in seen:
            continue
        seen.add(event.id)
        selected.append(event)
        if len(selected) >= max_count:
            break
    return Window(selected=selected, to_persist=[event.as_record() for event in selected])
