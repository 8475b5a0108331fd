"""Git helpers for acquiring repositories to analyze."""

from .clone import RepoAcquirer, is_remote_locator, redact_locator

__all__ = ["RepoAcquirer", "is_remote_locator", "redact_locator"]
