"""Services orchestrating editing, validation and persistence."""

from rankforge.services.dismissal import ValidationDismissalService
from rankforge.services.session import PROPERTY_CHANGES, EditSession, PendingEdit

__all__ = ["EditSession", "PROPERTY_CHANGES", "PendingEdit", "ValidationDismissalService"]
