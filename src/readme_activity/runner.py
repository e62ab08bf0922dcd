from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from .config import Settings
from .errors import ConfigurationError, GitHubAPIError, NoActivityError, PersistenceReadError, ReadmeActivityError
from .events import ActivityEvent
from .formatter import Formatter
from .github import GitHubClient
from .reconciler import START_MARKER, SectionState, reconcile
from .utils import read_lines, write_lines
from .vcs import GitRepo
from .window import Window, decode_window, encode_window, parse_events, select_window

logger = logging.getLogger(__name__)

WROTE = "Wrote to README"
UPDATED = "Updated README with the Recent Activity"
NO_CHANGES = "No changes detected"
PUSHED = "Pushed to remote repository"


@dataclass(slots=True)
class RunResult:
    ok: bool
    message: str
    state: SectionState | None = None
    entries: List[str] = field(default_factory=list)

    @property
    def exit_code(self) -> int:
        return 0 if self.ok else 1


class ActivityUpdater:
    """One scheduled pass: fetch, window, persist, reconcile, commit."""

    def __init__(self, settings: Settings, client: GitHubClient, git: GitRepo, workspace: str | Path = "."):
        self.settings = settings
        self.client = client
        self.git = git
        self.workspace = Path(workspace)
        self.formatter = Formatter(settings.html_encoding, settings.icon_base)

    @property
    def readme_path(self) -> Path:
        return self.workspace / self.settings.readme_path

    # ------------------------------------------------------------------
    # Event window
    # ------------------------------------------------------------------
    def load_persisted(self) -> List[ActivityEvent]:
        s = self.settings
        raw = self.client.read_variable(s.username, s.username, s.variable_name)
        try:
            return decode_window(raw)
        except PersistenceReadError as exc:
            logger.warning("Ignoring stored window %s: %s", s.variable_name, exc)
            return []

    def collect(self) -> Window:
        s = self.settings
        logger.debug("Getting activity for %s", s.username)
        fresh = parse_events(self.client.fetch_user_events(s.username, per_page=s.page_size))
        persisted = self.load_persisted()
        logger.debug("Activity for %s, %d events found", s.username, len(fresh) + len(persisted))
        window = select_window(fresh, persisted, s.max_lines)
        logger.debug("Activity for %s, %d events processed", s.username, len(window.selected))
        return window

    def persist(self, window: Window) -> None:
        s = self.settings
        try:
            self.client.write_variable(s.username, s.username, s.variable_name, encode_window(window.to_persist))
        except GitHubAPIError as exc:
            logger.error("Could not store event window: %s", exc)

    # ------------------------------------------------------------------
    # Run
    # ------------------------------------------------------------------
    def run(self, dry_run: bool = False) -> RunResult:
        try:
            return self._run(dry_run)
        except ReadmeActivityError as exc:
            logger.error("%s", exc)
            return RunResult(False, str(exc))
        except Exception as exc:
            logger.exception("Something went wrong")
            return RunResult(False, str(exc) or exc.__class__.__name__)

    def _run(self, dry_run: bool) -> RunResult:
        s = self.settings
        window = self.collect()
        if not dry_run:
            self.persist(window)

        entries = self.formatter.format_events(window.selected)
        lines = read_lines(self.readme_path)
        result = reconcile(lines, entries, self.formatter)
        rendered = self.formatter.render_list(entries)

        if result.state is SectionState.NO_START:
            raise ConfigurationError(f"Couldn't find the {START_MARKER} comment. Exiting!")
        if not entries:
            raise NoActivityError("No PullRequest/Issue/IssueComment events found")
        if len(entries) < s.max_lines:
            logger.info("Found less than %d activities", s.max_lines)

        if not result.changed:
            return RunResult(True, NO_CHANGES, result.state, rendered)
        if dry_run:
            return RunResult(True, f"README would be updated ({result.state.value})", result.state, rendered)

        write_lines(self.readme_path, result.lines)
        if result.state is SectionState.POPULATED:
            logger.info(UPDATED)
        else:
            logger.info(WROTE)
        self.git.commit_and_push(s.readme_path, s.commit_message, s.committer_name, s.committer_email)

        message = WROTE if result.state is SectionState.START_NO_END else PUSHED
        return RunResult(True, message, result.state, rendered)
