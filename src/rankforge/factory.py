"""Service Factory for rankforge.

This module provides factory functions for creating service instances with
their production dependencies (settings-driven file locations, catalogs).

For testing, construct the services directly and inject in-memory fakes.

Example:
    # Production usage
    from rankforge.factory import create_edit_session
    session = create_edit_session(hierarchy, catalogs)

    # Testing usage
    from rankforge.repository import MemoryDismissalStore
    from rankforge.services import EditSession, ValidationDismissalService

    session = EditSession(hierarchy, dismissals=ValidationDismissalService(MemoryDismissalStore()))
"""

from __future__ import annotations

from pathlib import Path

from rankforge.codec.grouping import group_into_hierarchy
from rankforge.codec.xml_codec import read_ranks_file
from rankforge.config import Settings, get_settings
from rankforge.domain.models import RankHierarchy
from rankforge.repository.json_store import JsonDismissalStore
from rankforge.services.dismissal import ValidationDismissalService
from rankforge.services.session import EditSession
from rankforge.validation.references import CatalogSet


def create_dismissal_service(settings: Settings | None = None) -> ValidationDismissalService:
    """Create a ValidationDismissalService backed by the JSON store.

    Args:
        settings: Settings to read the data directory from (defaults to get_settings())

    Returns:
        Dismissal service with previously dismissed keys loaded
    """
    settings = settings or get_settings()
    return ValidationDismissalService(JsonDismissalStore(settings.dismissals_path))


def create_edit_session(
    hierarchy: RankHierarchy | None = None,
    catalogs: CatalogSet | None = None,
    settings: Settings | None = None,
) -> EditSession:
    """Create an EditSession with persistent dismissals.

    Args:
        hierarchy: Hierarchy to edit (a new, empty one when omitted)
        catalogs: Catalogs used for reference validation
        settings: Settings (defaults to get_settings())

    Returns:
        Fully initialized EditSession
    """
    settings = settings or get_settings()
    return EditSession(
        hierarchy,
        catalogs=catalogs,
        settings=settings,
        dismissals=create_dismissal_service(settings),
    )


def open_ranks_file(
    path: Path | str,
    catalogs: CatalogSet | None = None,
    settings: Settings | None = None,
    *,
    group_pay_bands: bool = True,
) -> EditSession:
    """Load a ``Ranks.xml`` file into a new EditSession.

    Args:
        path: File to read
        catalogs: Catalogs used for reference validation
        settings: Settings (defaults to get_settings())
        group_pay_bands: Rebuild parent ranks from Roman-numeral suffixes

    Returns:
        EditSession over the loaded hierarchy
    """
    ranks = read_ranks_file(path)
    hierarchy = group_into_hierarchy(ranks) if group_pay_bands else RankHierarchy(ranks)
    return create_edit_session(hierarchy, catalogs, settings)
