"""Integration tests for the edit session: commands, validation and export together."""

from __future__ import annotations

import pytest

from rankforge.codec import deserialize
from rankforge.commands import BulkAddStationsCommand, CommandError
from rankforge.config import Settings
from rankforge.domain.enums import Severity
from rankforge.domain.models import Rank, RankHierarchy, StationAssignment
from rankforge.factory import create_edit_session, open_ranks_file
from rankforge.repository import MemoryDismissalStore
from rankforge.services import PROPERTY_CHANGES, EditSession, ValidationDismissalService


def _settings(tmp_path) -> Settings:
    return Settings(_env_file=None, data_dir=tmp_path / "data")


def _session(tmp_path) -> EditSession:
    rookie = Rank(name="Rookie", required_points=0, salary=1000)
    officer = Rank(name="Officer", required_points=100, salary=1500)
    return EditSession(RankHierarchy([rookie, officer]), settings=_settings(tmp_path))


def test_first_rank_defaults(tmp_path):
    session = EditSession(settings=_settings(tmp_path))
    assert session.result.has_errors

    rank = session.add_rank()

    assert (rank.name, rank.required_points, rank.salary) == ("New Rank 1", 0, 30)
    assert not session.result.has_errors


def test_add_rank_between_uses_midpoint(tmp_path):
    session = _session(tmp_path)
    rookie = session.hierarchy.ranks[0]

    rank = session.add_rank(rookie)

    assert [r.name for r in session.hierarchy.ranks] == ["Rookie", "New Rank 3", "Officer"]
    assert (rank.required_points, rank.salary) == (50, 1250)


def test_add_rank_before_parent_uses_first_pay_band(tmp_path):
    """The midpoint targets the next rank's first band, not its stored values."""
    rookie = Rank(name="Rookie", required_points=0, salary=1000)
    officer = Rank(name="Officer", required_points=0, salary=0)
    officer.add_pay_band()
    officer.add_pay_band()
    officer.pay_bands[0].required_points, officer.pay_bands[0].salary = 100, 2000
    officer.pay_bands[1].required_points, officer.pay_bands[1].salary = 200, 3000
    session = EditSession(RankHierarchy([rookie, officer]), settings=_settings(tmp_path))

    rank = session.add_rank(rookie)

    assert (rank.required_points, rank.salary) == (50, 1500)
    assert not session.result.has_errors


def test_add_rank_at_end_steps_up(tmp_path):
    session = _session(tmp_path)

    rank = session.add_rank(session.hierarchy.ranks[-1])

    assert (rank.required_points, rank.salary) == (200, 1650)
    assert session.hierarchy.ranks[-1] is rank


def test_add_pay_bands_and_undo(tmp_path):
    session = _session(tmp_path)
    officer = session.hierarchy.ranks[1]

    first = session.add_pay_band(officer)
    assert (first.name, first.required_points, first.salary) == ("Officer I", 100, 1500)
    assert session.result.error_count == 1
    assert session.node_status(officer).message == "Rank must have more than one pay band"

    second = session.add_pay_band(officer)
    assert second.name == "Officer II"
    assert (second.required_points, second.salary) == (100, 1500)
    assert session.result.has_errors

    session.begin_edit(second).required_points = 200
    session.commit_changes()
    assert not session.result.has_errors

    middle = session.add_pay_band(first)
    assert [band.name for band in officer.pay_bands] == ["Officer I", "Officer II", "Officer III"]
    assert officer.pay_bands[1] is middle
    assert middle.required_points == 150

    assert session.undo()
    assert [band.name for band in officer.pay_bands] == ["Officer I", "Officer II"]
    assert session.undo()
    assert second.required_points == 100
    assert session.result.has_errors


def test_commit_changes_is_one_undo_step(tmp_path):
    session = _session(tmp_path)
    rookie = session.hierarchy.ranks[0]

    pending = session.begin_edit(rookie)
    pending.name = "Cadet"
    pending.salary = 900
    composite = session.commit_changes()

    assert composite is not None
    assert composite.description == PROPERTY_CHANGES
    assert composite.sub_descriptions == [
        "Change Name of 'Rookie' from Rookie to Cadet",
        "Change Salary of 'Rookie' from 1000 to 900",
    ]
    assert (rookie.name, rookie.salary) == ("Cadet", 900)
    assert session.history.undo_count == 1

    session.undo()
    assert (rookie.name, rookie.salary) == ("Rookie", 1000)
    session.redo()
    assert (rookie.name, rookie.salary) == ("Cadet", 900)


def test_commit_without_changes_is_a_no_op(tmp_path):
    session = _session(tmp_path)
    session.begin_edit(session.hierarchy.ranks[0])

    assert session.commit_changes() is None
    assert not session.history.can_undo


def test_begin_edit_on_other_rank_commits_pending(tmp_path):
    session = _session(tmp_path)
    rookie, officer = session.hierarchy.ranks

    session.begin_edit(rookie).required_points = 5
    session.begin_edit(officer)

    assert rookie.required_points == 5
    assert session.history.undo_count == 1


def test_move_clone_promote_remove(tmp_path):
    session = _session(tmp_path)
    rookie, officer = session.hierarchy.ranks

    assert not session.move_up(rookie)
    assert session.move_down(rookie)
    assert [r.name for r in session.hierarchy.ranks] == ["Officer", "Rookie"]
    session.undo()

    clone = session.clone(officer)
    assert clone.name == "Officer (Copy)"
    assert session.hierarchy.ranks[-1] is clone

    session.add_pay_band(officer)
    band = session.add_pay_band(officer)
    assert not session.move_up(band)
    session.promote(band)
    assert session.hierarchy.ranks[2] is band
    assert session.node_status(officer).severity is Severity.ERROR

    session.remove(band)
    assert band.id not in session.hierarchy

    assert session.remove_all()
    assert len(session.hierarchy) == 0
    assert not session.remove_all()
    session.undo()
    assert len(session.hierarchy) == 3


def test_failed_command_keeps_history(tmp_path):
    session = _session(tmp_path)
    rookie = session.hierarchy.ranks[0]
    session.add_rank(rookie)
    stale = BulkAddStationsCommand(session.hierarchy, rookie, [StationAssignment("Davis")])
    session.remove(rookie)

    with pytest.raises(CommandError):
        session.execute(stale)

    assert session.history.undo_count == 2


def test_can_generate_requires_stations(tmp_path):
    session = _session(tmp_path)
    assert not session.can_generate()

    for rank in session.hierarchy.ranks:
        session.execute(BulkAddStationsCommand(session.hierarchy, rank, [StationAssignment("Mission Row")]))

    assert session.can_generate()
    assert [rank.name for rank in deserialize(session.export_xml())] == ["Rookie", "Officer"]


def test_dismissed_issues_hidden_from_node_status(tmp_path):
    dismissals = ValidationDismissalService(MemoryDismissalStore())
    session = EditSession(
        RankHierarchy([Rank(name="Rookie", required_points=0, salary=10)]),
        settings=_settings(tmp_path),
        dismissals=dismissals,
    )
    rookie = session.hierarchy.ranks[0]
    assert session.node_status(rookie).severity is Severity.ADVISORY

    for issue in session.result.advisories:
        dismissals.dismiss(issue)

    assert session.node_status(rookie).severity is Severity.NONE
    assert session.worst_severity() is Severity.NONE
    assert session.result.has_advisories


def test_factory_opens_and_groups_file(tmp_path):
    path = tmp_path / "Ranks.xml"
    path.write_text(
        "<Ranks>"
        "<Rank><Name>Rookie</Name><RequiredPoints>0</RequiredPoints><Salary>10</Salary></Rank>"
        "<Rank><Name>Officer I</Name><RequiredPoints>100</RequiredPoints><Salary>20</Salary></Rank>"
        "<Rank><Name>Officer II</Name><RequiredPoints>200</RequiredPoints><Salary>30</Salary></Rank>"
        "</Ranks>",
        encoding="utf-8",
    )
    settings = _settings(tmp_path)

    session = open_ranks_file(path, settings=settings)

    assert [rank.name for rank in session.hierarchy.ranks] == ["Rookie", "Officer"]
    assert not session.result.has_errors
    assert session.dismissals is not None
    issue = session.result.advisories[0]
    session.dismissals.dismiss(issue)
    assert create_edit_session(settings=settings).dismissals.is_dismissed(issue)
