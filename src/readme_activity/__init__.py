from .config import Settings, build_settings
from .events import ActivityEvent, EventKind
from .formatter import Formatter
from .reconciler import END_MARKER, START_MARKER, Reconciliation, SectionState, reconcile
from .runner import ActivityUpdater, RunResult
from .window import Window, select_window

__all__ = [
    "ActivityEvent",
    "ActivityUpdater",
    "END_MARKER",
    "EventKind",
    "Formatter",
    "Reconciliation",
    "RunResult",
    "START_MARKER",
    "SectionState",
    "Settings",
    "Window",
    "build_settings",
    "reconcile",
    "select_window",
]
