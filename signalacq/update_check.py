"""Checking for a newer release and the dialog that reports the result."""

from __future__ import annotations

import json
import logging
import re
import threading
import urllib.request
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any, Callable, Mapping

from signalacq import settings as keys
from signalacq.settings import Settings
from signalacq.signals import Signal

log = logging.getLogger(__name__)

CURRENT_VERSION = "1.0.1"
"""Version of the running application."""

FETCH_TIMEOUT = 30.0
"""Seconds to wait for the release information."""

CANCELED_MESSAGE = "Network error: Operation canceled"
CHECKING_TEXT = "Checking update..."
NO_UPDATE_TEXT = "There is no update yet."
FAILED_PREFIX = "Update check failed.\n"

_LEADING_VERSION = re.compile(r"(\d+(?:\.\d+)*)")

Fetch = Callable[[str], bytes]


@dataclass(frozen=True)
class UpdateResult:
    """Outcome of a successful update check."""

    found: bool
    version: str = ""
    download_url: str = ""


class UpdateCheckError(Exception):
    """The release information could not be fetched or parsed."""


def parse_version(text: str) -> tuple[int, ...]:
    """Return the leading dot separated numbers of ``text``; empty if none."""
    match = _LEADING_VERSION.match(text)
    if not match:
        return ()
    return tuple(int(part) for part in match.group(1).split("."))


def evaluate_release(data: Any, current_version: str) -> UpdateResult:
    """Decide from a release description whether it is newer than ``current_version``.

    ``data`` is either the raw JSON document (``bytes`` or ``str``) or an
    already decoded object holding ``tag_name`` and ``html_url``. Raises
    ``UpdateCheckError`` if the document is not valid JSON.
    """
    if isinstance(data, (bytes, bytearray, str)):
        try:
            data = json.loads(data)
        except ValueError as exc:
            offset = getattr(exc, "pos", 0)
            message = getattr(exc, "msg", str(exc))
            log.error("%r", data)
            raise UpdateCheckError(f"JSon parsing error at {offset}: {message}") from exc

    release: Mapping[str, Any] = data if isinstance(data, Mapping) else {}
    tag = release.get("tag_name")
    version = tag.replace("v", "") if isinstance(tag, str) else ""

    latest = parse_version(version)
    current = parse_version(current_version)
    log.info("latest version %s, current version %s", latest, current)
    if latest > current:
        url = release.get("html_url")
        if isinstance(url, str) and url:
            return UpdateResult(True, version, url)
    return UpdateResult(False)


def _urlopen_fetch(url: str) -> bytes:
    request = urllib.request.Request(
        url, headers={"Accept": "application/json", "User-Agent": "SignalAcq"}
    )
    with urllib.request.urlopen(request, timeout=FETCH_TIMEOUT) as response:
        return response.read()


class UpdateChecker:
    """Fetches release information and announces whether an update exists.

    ``check_finished`` is emitted with ``(found, version, download_url)``;
    ``check_failed`` with an error message. With ``background`` the fetch
    runs on a worker thread, otherwise inside ``check_update``.
    """

    def __init__(
        self,
        url: str,
        current_version: str = CURRENT_VERSION,
        fetch: Fetch | None = None,
        background: bool = True,
    ) -> None:
        self.url = url
        self.current_version = current_version
        self._fetch = fetch or _urlopen_fetch
        self._background = background
        self.check_finished = Signal()
        self.check_failed = Signal()
        self._lock = threading.Lock()
        self._active: object | None = None
        self._thread: threading.Thread | None = None

    def is_checking(self) -> bool:
        """Whether a check is in progress."""
        return self._active is not None

    def check_update(self) -> None:
        """Start a check unless one is already running."""
        with self._lock:
            if self._active is not None:
                return
            token = object()
            self._active = token
        if self._background:
            self._thread = threading.Thread(
                target=self._run, args=(token,), name="update-check", daemon=True
            )
            self._thread.start()
        else:
            self._run(token)

    def cancel_check(self) -> None:
        """Abort the running check; it is reported as failed."""
        with self._lock:
            if self._active is None:
                return
            self._active = None
        self.check_failed.emit(CANCELED_MESSAGE)

    def wait(self, timeout: float | None = None) -> None:
        """Wait for the worker thread of the last check to end."""
        if self._thread is not None:
            self._thread.join(timeout)

    def _run(self, token: object) -> None:
        result: UpdateResult | UpdateCheckError
        try:
            data = self._fetch(self.url)
        except OSError as exc:
            result = UpdateCheckError(f"Network error: {exc}")
        else:
            try:
                result = evaluate_release(data, self.current_version)
            except UpdateCheckError as exc:
                result = exc

        with self._lock:
            if self._active is not token:
                return
            self._active = None

        if isinstance(result, UpdateCheckError):
            self.check_failed.emit(str(result))
        else:
            self.check_finished.emit(result.found, result.version, result.download_url)


class UpdateCheckDialog:
    """Runs update checks when shown or periodically and keeps their outcome."""

    def __init__(
        self,
        checker: UpdateChecker,
        today: Callable[[], date] = date.today,
        package_manager: bool = False,
    ) -> None:
        self.checker = checker
        self._today = today
        self.package_manager = package_manager
        self.periodic_check = True
        self.visible = False
        self.label_text = ""
        # start from yesterday so that the first run checks
        self.last_check: date | None = today() - timedelta(days=1)

        checker.check_failed.connect(self._on_check_failed)
        checker.check_finished.connect(self._on_check_finished)

    def _on_check_failed(self, message: str) -> None:
        self.last_check = self._today()
        self.label_text = FAILED_PREFIX + message
        log.error("Update error: %s", message)

    def _on_check_finished(self, found: bool, version: str, url: str) -> None:
        if not found:
            text = NO_UPDATE_TEXT
        else:
            self.visible = True
            if self.package_manager:
                text = (
                    f"There is a new version: {version}. "
                    "Use your package manager to update"
                    f' or click to <a href="{url}">download</a>.'
                )
            else:
                text = (
                    f"Found update to version {version}. "
                    f'Click to <a href="{url}">download</a>.'
                )
        self.last_check = self._today()
        self.label_text = text

    def on_show(self) -> None:
        """Show the dialog and start a check."""
        self.visible = True
        self.label_text = CHECKING_TEXT
        self.checker.check_update()

    def on_close(self) -> None:
        """Hide the dialog, cancelling a running check."""
        self.visible = False
        if self.checker.is_checking():
            self.checker.cancel_check()

    def save_settings(self, settings: Settings) -> None:
        """Store the update check settings into ``settings``."""
        with settings.group(keys.GROUP_UPDATE_CHECK):
            settings.set_value(keys.UPDATE_CHECK_PERIODIC, self.periodic_check)
            settings.set_value(
                keys.UPDATE_CHECK_LAST_CHECK,
                self.last_check.isoformat() if self.last_check else "",
            )

    def load_settings(self, settings: Settings) -> None:
        """Load the settings and start a periodic check if one is due."""
        with settings.group(keys.GROUP_UPDATE_CHECK):
            periodic = settings.value(keys.UPDATE_CHECK_PERIODIC, self.periodic_check)
            if isinstance(periodic, str):
                periodic = periodic.strip().lower() not in ("", "0", "false")
            self.periodic_check = bool(periodic)

            default = self.last_check.isoformat() if self.last_check else ""
            text = str(settings.value(keys.UPDATE_CHECK_LAST_CHECK, default) or "")
            try:
                self.last_check = date.fromisoformat(text)
            except ValueError:
                self.last_check = None

        if self.periodic_check and (
            self.last_check is None or self.last_check < self._today()
        ):
            self.checker.check_update()