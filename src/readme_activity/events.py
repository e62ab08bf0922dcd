from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping


class EventKind(str, Enum):
    ISSUE_COMMENT = "IssueCommentEvent"
    ISSUES = "IssuesEvent"
    PULL_REQUEST = "PullRequestEvent"
    UNSUPPORTED = "unsupported"

    @classmethod
    def from_type(cls, value: str) -> "EventKind":
        for kind in cls:
            if kind is not cls.UNSUPPORTED and kind.value == value:
                return kind
        return cls.UNSUPPORTED


SUPPORTED_KINDS = frozenset(kind for kind in EventKind if kind is not EventKind.UNSUPPORTED)


def _mapping(value: Any, field: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ValueError(f"{field} must be an object, got {type(value).__name__}")
    return value


def _number(value: Any, field: str) -> int:
    if isinstance(value, bool) or value is None:
        raise ValueError(f"missing {field}")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"invalid {field}: {value!r}") from exc


@dataclass(slots=True, frozen=True)
class ActivityEvent:
    """One entry of a user's public activity feed.

    Built from either a full GitHub API event or the reduced record kept in
    the stored window; ``as_record`` produces the latter.
    """

    id: str
    kind: EventKind
    type: str
    repo: str
    action: str = ""
    issue_number: int | None = None
    pr_number: int | None = None
    merged: bool = False

    @property
    def supported(self) -> bool:
        return self.kind is not EventKind.UNSUPPORTED

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "ActivityEvent":
        if not isinstance(record, Mapping):
            raise ValueError("event record must be a mapping")
        event_id = record.get("id")
        if event_id in (None, ""):
            raise ValueError("event record has no id")
        event_type = str(record.get("type") or "")
        kind = EventKind.from_type(event_type)
        repo = str(_mapping(record.get("repo"), "repo").get("name") or "")
        if kind is EventKind.UNSUPPORTED:
            return cls(id=str(event_id), kind=kind, type=event_type, repo=repo)
        if not repo:
            raise ValueError(f"event {event_id} has no repository name")

        payload = _mapping(record.get("payload"), "payload")
        action = str(payload.get("action") or "")
        if kind is EventKind.PULL_REQUEST:
            pull_request = _mapping(payload.get("pull_request"), "pull_request")
            number = pull_request.get("number", payload.get("number"))
            return cls(
                id=str(event_id),
                kind=kind,
                type=event_type,
                repo=repo,
                action=action,
                pr_number=_number(number, "pull_request.number"),
                merged=bool(pull_request.get("merged")),
            )

        issue = _mapping(payload.get("issue"), "issue")
        if kind is EventKind.ISSUES and not action:
            raise ValueError(f"event {event_id} has no action")
        return cls(
            id=str(event_id),
            kind=kind,
            type=event_type,
            repo=repo,
            action=action,
            issue_number=_number(issue.get("number"), "issue.number"),
        )

    def as_record(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {}
        if self.kind is EventKind.ISSUE_COMMENT:
            payload = {"issue": {"number": self.issue_number}}
            if self.action:
                payload = {"action": self.action, **payload}
        elif self.kind is EventKind.ISSUES:
            payload = {"action": self.action, "issue": {"number": self.issue_number}}
        elif self.kind is EventKind.PULL_REQUEST:
            payload = {
                "action": self.action,
                "pull_request": {"number": self.pr_number, "merged": self.merged},
            }
        return {
            "id": self.id,
            "type": self.type,
            "repo": {"name": self.repo},
            "payload": payload,
        }
