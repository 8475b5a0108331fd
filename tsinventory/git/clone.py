"""Repository acquisition: resolve a locator to a local source tree."""

from __future__ import annotations

import os
import re
import shutil
import subprocess
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Iterable, Iterator
from urllib.parse import urlsplit, urlunsplit

from ..errors import AcquisitionError
from ..logging import get_logger

_URL_PREFIXES = ("https://", "http://", "ssh://", "git://", "file://")
_SCP_LIKE = re.compile(r"^[\w.-]+@[\w.-]+:[^/].*")

logger = get_logger("git.clone")


def is_remote_locator(locator: str) -> bool:
    """Return True when ``locator`` looks like something ``git clone`` accepts."""
    lowered = locator.lower()
    return lowered.startswith(_URL_PREFIXES) or bool(_SCP_LIKE.match(locator))


def redact_locator(locator: str) -> str:
    """Strip credentials from URL-style locators before logging them."""
    if not locator.lower().startswith(_URL_PREFIXES):
        return locator
    parts = urlsplit(locator)
    if not parts.username and not parts.password:
        return locator
    host = parts.hostname or ""
    if parts.port:
        host = f"{host}:{parts.port}"
    return urlunsplit((parts.scheme, host, parts.path, parts.query, parts.fragment))


def _is_local_locator(locator: str) -> bool:
    return not is_remote_locator(locator) or locator.lower().startswith("file://")


class RepoAcquirer:
    """Hands out local checkouts for repository locators.

    Local directories are used in place. Remote locators are cloned into a
    fresh temporary directory that is removed when the ``checkout`` context
    exits, whether the body succeeded or raised. With ``allow_local=False``
    only network locators are accepted: local paths and ``file://`` URLs are
    rejected before anything touches the filesystem.
    """

    def __init__(
        self,
        runner: Callable[..., str] | None = None,
        *,
        depth: int | None = 1,
        timeout: float | None = 300.0,
        temp_root: Path | None = None,
        allow_local: bool = True,
    ) -> None:
        self._runner = runner or self._default_runner
        self._depth = depth
        self._timeout = timeout
        self._temp_root = temp_root
        self._allow_local = allow_local

    @contextmanager
    def checkout(self, locator: str) -> Iterator[Path]:
        locator = (locator or "").strip()
        if not locator:
            raise AcquisitionError("Repository locator is required")
        if not self._allow_local and _is_local_locator(locator):
            raise AcquisitionError(
                f"Local repositories are not allowed: {redact_locator(locator)}"
            )

        if is_remote_locator(locator):
            temp_dir = Path(
                tempfile.mkdtemp(
                    prefix="repo-",
                    dir=str(self._temp_root) if self._temp_root else None,
                )
            )
            try:
                self._clone(locator, temp_dir)
                yield temp_dir
            finally:
                self._cleanup(temp_dir)
            return

        local = Path(locator).expanduser()
        if local.is_dir():
            yield local.resolve()
            return
        raise AcquisitionError(f"Unsupported repository locator: {redact_locator(locator)}")

    # ------------------------------------------------------------------
    # Helpers

    def _clone(self, locator: str, destination: Path) -> None:
        args = ["git", "clone"]
        if self._depth:
            args.extend(["--depth", str(self._depth)])
        args.extend(["--", locator, str(destination)])

        env = os.environ.copy()
        env["GIT_TERMINAL_PROMPT"] = "0"

        display = redact_locator(locator)
        logger.info("Cloning %s", display)
        try:
            self._runner(args, cwd=destination.parent, env=env, capture_output=True)
        except subprocess.TimeoutExpired as exc:
            raise AcquisitionError(f"Timed out cloning {display}") from exc
        except subprocess.CalledProcessError as exc:
            detail = (exc.stderr or "").strip().splitlines()
            reason = detail[-1] if detail else f"git exited with status {exc.returncode}"
            raise AcquisitionError(f"Failed to clone {display}: {reason}") from exc
        except OSError as exc:
            raise AcquisitionError(f"Failed to clone {display}: {exc}") from exc

    @staticmethod
    def _cleanup(path: Path) -> None:
        try:
            shutil.rmtree(path)
        except FileNotFoundError:
            return
        except OSError as exc:
            logger.warning("Failed to remove temporary checkout %s: %s", path, exc)

    def _default_runner(
        self,
        args: Iterable[str],
        *,
        cwd: Path,
        env: dict[str, str] | None = None,
        capture_output: bool = False,
    ) -> str:
        completed = subprocess.run(
            list(args),
            cwd=str(cwd),
            env=env,
            check=True,
            text=True,
            capture_output=capture_output,
            timeout=self._timeout,
        )
        if capture_output:
            return completed.stdout
        return ""


__all__ = ["RepoAcquirer", "is_remote_locator", "redact_locator"]
