from __future__ import annotations

from typing import List, Sequence

from .events import ActivityEvent, EventKind

URL_PREFIX = "https://github.com"
DEFAULT_ICON_BASE = "./icons/activities"


def capitalize(word: str) -> str:
    """Uppercase the first character only; ``"reopened"`` -> ``"Reopened"``."""

    return word[:1].upper() + word[1:]


class Formatter:
    """Renders activity events as README lines.

    Every line starts with the event icon; ``html`` only decides whether the
    issue and repository references are ``<a>`` tags or markdown links.
    """

    def __init__(self, html: bool, icon_base: str = DEFAULT_ICON_BASE):
        self.html = html
        self.icon_base = icon_base.rstrip("/")

    def _link(self, label: str, url: str) -> str:
        if self.html:
            return f'<a href="{url}">{label}</a>'
        return f"[{label}]({url})"

    def format_reference(self, target: ActivityEvent | str) -> str:
        if isinstance(target, str):
            return self._link(target, f"{URL_PREFIX}/{target}")
        if target.issue_number is not None:
            number = target.issue_number
            url = f"{URL_PREFIX}/{target.repo}/issues/{number}"
        else:
            number = target.pr_number
            url = f"{URL_PREFIX}/{target.repo}/pull/{number}"
        return self._link(f"#{number}", url)

    def label(self, event: ActivityEvent) -> str:
        if event.kind is EventKind.ISSUE_COMMENT:
            return "Commented on"
        if event.kind is EventKind.PULL_REQUEST and event.merged:
            return "Merged"
        return capitalize(event.action)

    def icon_key(self, event: ActivityEvent) -> str:
        if event.kind is EventKind.ISSUE_COMMENT:
            return "commented_on"
        if event.kind is EventKind.ISSUES:
            return f"{event.action}_issue"
        if event.merged:
            return "merged_pull_request"
        return f"{event.action}_pull_request"

    def icon(self, event: ActivityEvent) -> str:
        return (
            f'<img alt="{self.label(event)}" height="24px" valign="bottom" '
            f'src="{self.icon_base}/{self.icon_key(event)}.png">'
        )

    def format_event(self, event: ActivityEvent) -> str | None:
        if event.kind is EventKind.UNSUPPORTED:
            return None
        noun = "PR" if event.kind is EventKind.PULL_REQUEST else "Issue"
        reference = self.format_reference(event)
        repo = self.format_reference(event.repo)
        return f" {self.icon(event)}  {noun} {reference} in {repo}"

    def format_events(self, events: Sequence[ActivityEvent]) -> List[str]:
        lines: List[str] = []
        for event in events:
            line = self.format_event(event)
            if line:
                lines.append(line)
        return lines

    def render_entry(self, number: int, line: str) -> str:
        text = f"{number}. {line}"
        if self.html:
            return f'<p align="left">{text}</p>'
        return text

    def render_list(self, lines: Sequence[str]) -> List[str]:
        return [self.render_entry(idx + 1, line) for idx, line in enumerate(lines)]
