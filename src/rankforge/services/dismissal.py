"""Dismissal Service for rankforge.

Users can hide individual validation issues (usually advisories they have
decided to live with). A dismissal is keyed on the rank, the issue category,
the item involved and a short hash of the message, so that a changed message
brings the issue back.
"""

from __future__ import annotations

import hashlib
import logging

from rankforge.interfaces.storage import IDismissalStore
from rankforge.validation.issues import ValidationIssue, ValidationResult

logger = logging.getLogger(__name__)

MESSAGE_HASH_LENGTH = 16


class ValidationDismissalService:
    """Service for tracking which validation issues the user dismissed."""

    def __init__(self, store: IDismissalStore):
        self.store = store
        self._keys: set[str] = store.load()

    @staticmethod
    def key_for(issue: ValidationIssue) -> str | None:
        """Build the dismissal key for an issue.

        Args:
            issue: Issue to key

        Returns:
            The key, or None for issues that are not tied to a rank
        """
        if not issue.rank_id:
            return None
        digest = hashlib.sha256(issue.message.encode("utf-8")).hexdigest().upper()
        return f"{issue.rank_id}|{issue.category}|{issue.item_name or ''}|{digest[:MESSAGE_HASH_LENGTH]}"

    @property
    def dismissed_count(self) -> int:
        return len(self._keys)

    def dismiss(self, issue: ValidationIssue) -> bool:
        """Dismiss an issue and persist the change.

        Args:
            issue: Issue to hide from future results

        Returns:
            True if the issue was newly dismissed
        """
        key = self.key_for(issue)
        if key is None or key in self._keys:
            return False
        self._keys.add(key)
        self.store.save(self._keys)
        logger.info("dismissed '%s' on rank %s", issue.message, issue.rank_name or issue.rank_id)
        return True

    def restore(self, issue: ValidationIssue) -> bool:
        """Undo a dismissal; returns whether anything changed."""
        key = self.key_for(issue)
        if key is None or key not in self._keys:
            return False
        self._keys.discard(key)
        self.store.save(self._keys)
        return True

    def is_dismissed(self, issue: ValidationIssue) -> bool:
        key = self.key_for(issue)
        return key is not None and key in self._keys

    def clear_all(self) -> int:
        """Forget every dismissal.

        Returns:
            Number of dismissals removed
        """
        removed = len(self._keys)
        self._keys.clear()
        self.store.save(self._keys)
        logger.info("cleared %d dismissed validation issue(s)", removed)
        return removed

    def filter_result(self, result: ValidationResult) -> ValidationResult:
        """Return a copy of ``result`` without the dismissed issues."""
        return ValidationResult([issue for issue in result.issues if not self.is_dismissed(issue)])
