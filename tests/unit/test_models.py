"""Tests for the rank entity model and the hierarchy index."""

from __future__ import annotations

import pytest

from rankforge.codec import deserialize, group_into_hierarchy, serialize
from rankforge.domain import Gender
from rankforge.domain.models import (
    OutfitVariation,
    Rank,
    RankHierarchy,
    Station,
    StationAssignment,
    Vehicle,
    flatten,
    infer_agency,
    parse_position,
    roman_numeral,
)


def _officer_with_bands() -> Rank:
    officer = Rank(name="Officer", required_points=100, salary=1500)
    officer.add_pay_band()
    officer.add_pay_band()
    officer.pay_bands[1].required_points = 200
    return officer


class TestRomanNumerals:
    """Tests for pay-band suffixes."""

    @pytest.mark.parametrize(
        ("number", "expected"),
        [(1, "I"), (2, "II"), (4, "IV"), (9, "IX"), (10, "X"), (11, "11"), (0, "")],
    )
    def test_roman_numeral(self, number, expected):
        """Roman numerals cover I to X and fall back to digits."""
        assert roman_numeral(number) == expected


class TestRank:
    """Tests for Rank helpers."""

    def test_add_pay_band_names_and_links(self):
        """New bands are numbered after the parent and linked to it."""
        officer = _officer_with_bands()

        assert officer.is_parent
        assert [band.name for band in officer.pay_bands] == ["Officer I", "Officer II"]
        assert all(band.parent_id == officer.id for band in officer.pay_bands)
        assert officer.pay_bands[0].required_points == 100
        assert officer.pay_bands[0].salary == 1500

    def test_max_values_follow_pay_bands(self):
        """Maximum XP and salary come from the highest band."""
        officer = _officer_with_bands()
        officer.pay_bands[1].salary = 2000

        assert officer.max_required_points == 200
        assert officer.max_salary == 2000

    def test_clone_is_deep_with_fresh_ids(self):
        """A clone shares no ids or mutable lists with its source."""
        officer = _officer_with_bands()
        officer.stations.append(StationAssignment("Mission Row", zones=["Downtown"]))
        officer.vehicles.append(Vehicle("police", "Police Cruiser"))

        clone = officer.clone()

        assert clone.name == "Officer (Copy)"
        assert clone.id != officer.id
        assert [band.parent_id for band in clone.pay_bands] == [clone.id, clone.id]
        assert {band.id for band in clone.pay_bands}.isdisjoint({band.id for band in officer.pay_bands})
        clone.stations[0].zones.append("Vinewood")
        assert officer.stations[0].zones == ["Downtown"]

    def test_clone_renames_pay_bands_after_copy(self):
        """Cloned bands carry the copy's name so they regroup after reload."""
        hierarchy = RankHierarchy([_officer_with_bands()])

        clone = hierarchy.ranks[0].clone()
        hierarchy.insert_rank(1, clone)
        regrouped = group_into_hierarchy(deserialize(serialize(hierarchy.ranks)))

        assert [band.name for band in clone.pay_bands] == ["Officer (Copy) I", "Officer (Copy) II"]
        assert [rank.name for rank in regrouped.ranks] == ["Officer", "Officer (Copy)"]
        assert len(regrouped.ranks[1].pay_bands) == 2

    def test_promote_to_parent_detaches_band(self):
        """Promotion clears the parent link of a band."""
        officer = _officer_with_bands()
        band = officer.pay_bands[0]

        band.promote_to_parent()

        assert band.parent_id is None
        assert not band.is_parent

    def test_summary_for_leaf_and_parent(self):
        """Summaries show XP ranges and formatted salaries."""
        rookie = Rank(name="Rookie", required_points=0, salary=1000)
        officer = _officer_with_bands()

        assert rookie.summary(officer) == "Rookie (XP: 0-99 | $1,000)"
        assert rookie.summary() == "Rookie (XP: 0+ | $1,000)"
        assert officer.summary() == "Officer (XP: 100-200 | $1,500-$1,500)"

    def test_has_any_vehicles_includes_station_overrides(self):
        """Station overrides count as assigned vehicles."""
        rank = Rank(name="Rookie")
        assert not rank.has_any_vehicles()

        rank.stations.append(StationAssignment("Mission Row", vehicle_overrides=[Vehicle("police")]))
        assert rank.has_any_vehicles()
        assert not rank.has_any_outfits()


class TestCatalogValues:
    """Tests for vehicles, outfits and stations."""

    def test_vehicle_equality_is_by_model(self):
        """Vehicles compare case-insensitively by model."""
        first = Vehicle("POLICE", "Cruiser", ("lspd",))
        second = Vehicle("police", "Other name")

        assert first == second
        assert len({first, second}) == 1
        assert str(first) == "Cruiser (POLICE) [LSPD]"

    def test_vehicle_agencies(self):
        """Agency helpers report membership and the primary agency."""
        vehicle = Vehicle("sheriff", agencies=("lssd", "bcso"))

        assert vehicle.primary_agency == "lssd"
        assert vehicle.is_shared
        assert vehicle.belongs_to_agency("BCSO")
        assert Vehicle("taxi").primary_agency == "Unknown"

    def test_outfit_gender_checks_female_first(self):
        """Female script names are not mistaken for male ones."""
        female = OutfitVariation("LSPD Class A", "Female", "lspd_female_class_a")
        male = OutfitVariation("LSPD Class A", "Male", "lspd_m_class_a")
        neutral = OutfitVariation("LSPD Class A", "Base", "lspd_class_a")

        assert female.inferred_gender is Gender.FEMALE
        assert male.inferred_gender is Gender.MALE
        assert neutral.inferred_gender is Gender.UNISEX

    def test_outfit_combined_name_and_agency(self):
        """Outfit variations combine names and infer the agency."""
        outfit = OutfitVariation("Sheriff Patrol", "Winter")

        assert outfit.combined_name == "Sheriff Patrol.Winter"
        assert outfit.inferred_agency == "LSSD"
        assert infer_agency("Park Ranger") == "SASP"
        assert outfit == OutfitVariation("sheriff patrol", "winter")

    def test_parse_position(self):
        """Positions accept float suffixes and mixed separators."""
        assert parse_position("460.3f, -990.7f, 30.6f") == (460.3, -990.7)
        assert parse_position("") is None
        assert parse_position("bogus") is None

    def test_station_assignment_display(self):
        """Assignments display the agency of their resolved station."""
        station = Station("Mission Row", agency="lspd")
        assignment = StationAssignment("Mission Row", station_reference=station)

        assert station.display_name == "[LSPD] Mission Row"
        assert assignment.display_name == "[LSPD] Mission Row"
        assert assignment.is_valid
        assert StationAssignment("Nowhere").display_name == "[UNKNOWN] Nowhere"


class TestRankHierarchy:
    """Tests for the id-indexed hierarchy."""

    def test_rebuild_indexes_every_node(self):
        """Rebuilding indexes bands and restores their parent ids."""
        rookie = Rank(name="Rookie")
        officer = _officer_with_bands()
        for band in officer.pay_bands:
            band.parent_id = None

        hierarchy = RankHierarchy([rookie, officer])

        assert len(hierarchy) == 2
        assert all(node.id in hierarchy for node in hierarchy.nodes())
        assert hierarchy.parent_of(officer.pay_bands[1]) is officer
        assert hierarchy.index_of(officer.pay_bands[1]) == 1

    def test_flatten_replaces_parents_with_bands(self):
        """Flattening emits pay bands in place of their parent."""
        rookie = Rank(name="Rookie")
        hierarchy = RankHierarchy([rookie, _officer_with_bands()])

        assert [rank.name for rank in hierarchy.flatten()] == ["Rookie", "Officer I", "Officer II"]
        assert flatten(hierarchy.ranks) == hierarchy.flatten()

    def test_insert_and_pop_pay_band_renumber(self):
        """Band names follow their position after insert and pop."""
        officer = _officer_with_bands()
        hierarchy = RankHierarchy([officer])
        band = Rank(name="temporary")

        hierarchy.insert_pay_band(officer, 0, band)
        assert [b.name for b in officer.pay_bands] == ["Officer I", "Officer II", "Officer III"]
        assert band.parent_id == officer.id

        hierarchy.pop_pay_band(officer, 0)
        assert band.id not in hierarchy
        assert [b.name for b in officer.pay_bands] == ["Officer I", "Officer II"]

    def test_removing_last_band_clears_parent_flag(self):
        """A parent with no bands left becomes a plain rank."""
        officer = Rank(name="Officer")
        officer.add_pay_band()
        hierarchy = RankHierarchy([officer])

        hierarchy.pop_pay_band(officer, 0)

        assert not officer.is_parent
        assert officer.pay_bands == []

    def test_pop_rank_unregisters_bands(self):
        """Removing a rank drops its bands from the index."""
        officer = _officer_with_bands()
        hierarchy = RankHierarchy([officer])

        hierarchy.pop_rank(0)

        assert officer.id not in hierarchy
        assert all(band.id not in hierarchy for band in officer.pay_bands)
