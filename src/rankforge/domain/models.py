"""Entity model for the rank hierarchy editor.

Ranks form a two-level tree: top-level ranks, each optionally split into an
ordered list of pay bands. The tree is owned by a :class:`RankHierarchy`,
which indexes every node by id so that commands and validation can address
ranks without holding on to object references that may go stale.
"""

from __future__ import annotations

import uuid
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import NewType

from rankforge.domain.enums import Gender

RankID = NewType("RankID", str)

UNKNOWN_AGENCY = "Unknown"

_ROMAN_NUMERALS = ("I", "II", "III", "IV", "V", "VI", "VII", "VIII", "IX", "X")


def new_rank_id() -> RankID:
    """Return a fresh opaque rank identifier."""

    return RankID(str(uuid.uuid4()))


def roman_numeral(number: int) -> str:
    """Return the pay-band suffix for a 1-based position.

    Positions beyond ten fall back to plain digits.
    """

    if number < 1:
        return ""
    if number <= len(_ROMAN_NUMERALS):
        return _ROMAN_NUMERALS[number - 1]
    return str(number)


# ---------------------------------------------------------------------------
# Catalog entries (read-only data supplied by external catalogs)
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class Station:
    """Physical station known to the station catalog."""

    name: str
    agency: str = ""
    script_name: str = ""
    position: str = ""
    heading: float = 0.0

    @property
    def display_name(self) -> str:
        return f"[{self.agency.upper()}] {self.name}"

    @property
    def coordinates(self) -> tuple[float, float] | None:
        return parse_position(self.position)


def parse_position(raw: str) -> tuple[float, float] | None:
    """Parse ``"460.3f, -990.7f, 30.6f"`` style positions into ``(x, y)``."""

    if not raw:
        return None
    cleaned = raw.replace("f", "").replace("F", "")
    parts = cleaned.replace(",", " ").split()
    if len(parts) < 2:
        return None
    try:
        return float(parts[0]), float(parts[1])
    except ValueError:
        return None


@dataclass(frozen=True, slots=True, eq=False)
class Vehicle:
    """Vehicle value; two vehicles are the same when their models match."""

    model: str
    display_name: str = ""
    agencies: tuple[str, ...] = ()
    category: str = ""

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vehicle):
            return NotImplemented
        return self.model.casefold() == other.model.casefold()

    def __hash__(self) -> int:
        return hash(self.model.casefold())

    def __str__(self) -> str:
        agencies = ", ".join(agency.upper() for agency in self.agencies)
        return f"{self.display_name} ({self.model}) [{agencies}]"

    @property
    def primary_agency(self) -> str:
        return self.agencies[0] if self.agencies else UNKNOWN_AGENCY

    @property
    def is_shared(self) -> bool:
        return len(self.agencies) > 1

    def belongs_to_agency(self, agency: str) -> bool:
        target = agency.casefold()
        return any(item.casefold() == target for item in self.agencies)


_AGENCY_MARKERS: tuple[tuple[tuple[str, ...], str], ...] = (
    (("LSPD",), "LSPD"),
    (("LSSD", "SHERIFF"), "LSSD"),
    (("BCSO",), "BCSO"),
    (("SAHP", "HIGHWAY"), "SAHP"),
    (("SASP", "RANGER"), "SASP"),
)


def infer_agency(outfit_name: str) -> str:
    """Guess the owning agency from an outfit name."""

    upper = outfit_name.upper()
    for markers, agency in _AGENCY_MARKERS:
        if any(marker in upper for marker in markers):
            return agency
    return UNKNOWN_AGENCY


@dataclass(frozen=True, slots=True, eq=False)
class OutfitVariation:
    """One variation of a catalog outfit, addressed by its combined name."""

    outfit_name: str
    variation_name: str
    script_name: str = ""

    @property
    def combined_name(self) -> str:
        if not self.outfit_name:
            return self.variation_name
        return f"{self.outfit_name}.{self.variation_name}"

    @property
    def inferred_agency(self) -> str:
        return infer_agency(self.outfit_name)

    @property
    def inferred_gender(self) -> Gender:
        script = self.script_name.lower()
        # "female" contains "male", so it has to be checked first.
        if "_f_" in script or "female" in script:
            return Gender.FEMALE
        if "_m_" in script or "male" in script:
            return Gender.MALE
        return Gender.UNISEX

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OutfitVariation):
            return NotImplemented
        return self.combined_name.casefold() == other.combined_name.casefold()

    def __hash__(self) -> int:
        return hash(self.combined_name.casefold())

    def __str__(self) -> str:
        return self.combined_name


# ---------------------------------------------------------------------------
# Rank tree
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class StationAssignment:
    """A rank's claim on a catalog station, with station-scoped overrides."""

    station_name: str
    zones: list[str] = field(default_factory=list)
    style_id: int = 1
    vehicle_overrides: list[Vehicle] = field(default_factory=list)
    outfit_overrides: list[str] = field(default_factory=list)
    station_reference: Station | None = field(default=None, compare=False, repr=False)

    @property
    def agency(self) -> str | None:
        if self.station_reference is None:
            return None
        return self.station_reference.agency

    @property
    def display_name(self) -> str:
        agency = (self.agency or "UNKNOWN").upper()
        return f"[{agency}] {self.station_name}"

    @property
    def is_valid(self) -> bool:
        return self.station_reference is not None

    def copy(self) -> StationAssignment:
        """Return an independent copy sharing only the catalog reference."""

        return StationAssignment(
            station_name=self.station_name,
            zones=list(self.zones),
            style_id=self.style_id,
            vehicle_overrides=list(self.vehicle_overrides),
            outfit_overrides=list(self.outfit_overrides),
            station_reference=self.station_reference,
        )


@dataclass(slots=True)
class Rank:
    """A progression tier, either a leaf rank or a container of pay bands."""

    name: str
    required_points: int = 0
    salary: int = 0
    id: RankID = field(default_factory=new_rank_id)
    is_parent: bool = False
    parent_id: RankID | None = None
    pay_bands: list[Rank] = field(default_factory=list)
    stations: list[StationAssignment] = field(default_factory=list)
    vehicles: list[Vehicle] = field(default_factory=list)
    outfits: list[str] = field(default_factory=list)

    @property
    def is_pay_band(self) -> bool:
        return self.parent_id is not None

    @property
    def is_parent_with_pay_bands(self) -> bool:
        """Top-level rank whose XP and salary are derived from its pay bands."""

        return self.parent_id is None and bool(self.pay_bands)

    @property
    def max_required_points(self) -> int:
        if self.pay_bands:
            return max(band.required_points for band in self.pay_bands)
        return self.required_points

    @property
    def max_salary(self) -> int:
        if self.pay_bands:
            return max(band.salary for band in self.pay_bands)
        return self.salary

    def has_any_vehicles(self) -> bool:
        return bool(self.vehicles) or any(s.vehicle_overrides for s in self.stations)

    def has_any_outfits(self) -> bool:
        return bool(self.outfits) or any(s.outfit_overrides for s in self.stations)

    def add_pay_band(self) -> Rank:
        """Append a pay band seeded from this rank's own values."""

        band = Rank(
            name=f"{self.name} {roman_numeral(len(self.pay_bands) + 1)}",
            required_points=self.required_points,
            salary=self.salary,
            parent_id=self.id,
        )
        self.pay_bands.append(band)
        self.is_parent = True
        return band

    def clone(self) -> Rank:
        """Deep copy with fresh ids and a ``" (Copy)"`` name suffix.

        Cloned pay bands are renamed after the copy, so ``Officer (Copy)``
        holds ``Officer (Copy) I``, ``Officer (Copy) II`` and so on.
        """

        copy = Rank(
            name=f"{self.name} (Copy)",
            required_points=self.required_points,
            salary=self.salary,
            is_parent=self.is_parent,
            stations=[station.copy() for station in self.stations],
            vehicles=list(self.vehicles),
            outfits=list(self.outfits),
        )
        for position, band in enumerate(self.pay_bands, start=1):
            band_copy = band.clone()
            band_copy.name = f"{copy.name} {roman_numeral(position)}"
            band_copy.parent_id = copy.id
            copy.pay_bands.append(band_copy)
        return copy

    def promote_to_parent(self) -> None:
        """Detach a pay band so it can stand as a top-level rank."""

        if self.parent_id is None:
            return
        self.parent_id = None
        self.is_parent = False
        self.pay_bands.clear()

    def summary(self, next_rank: Rank | None = None) -> str:
        """One-line description of the XP range and salary."""

        if self.is_parent and self.pay_bands:
            min_xp = min(band.required_points for band in self.pay_bands)
            max_xp = max(band.required_points for band in self.pay_bands)
            min_salary = min(band.salary for band in self.pay_bands)
            max_salary = max(band.salary for band in self.pay_bands)
            xp_range = f"{min_xp}-{max_xp}+" if next_rank is not None else f"{min_xp}-{max_xp}"
            return f"{self.name} (XP: {xp_range} | ${min_salary:,}-${max_salary:,})"
        if next_rank is not None:
            xp_range = f"{self.required_points}-{next_rank.required_points - 1}"
        else:
            xp_range = f"{self.required_points}+"
        return f"{self.name} (XP: {xp_range} | ${self.salary:,})"

    def __str__(self) -> str:
        return self.name


def flatten(ranks: Iterable[Rank]) -> list[Rank]:
    """Return the serialization order: pay bands replace their parent."""

    flat: list[Rank] = []
    for rank in ranks:
        if rank.pay_bands:
            flat.extend(rank.pay_bands)
        else:
            flat.append(rank)
    return flat


class RankHierarchy:
    """Ordered top-level ranks plus an id index over every node.

    All structural edits go through the ``insert_*``/``pop_*`` helpers so that
    the index and the ``parent_id`` back-references stay in sync.
    """

    def __init__(self, ranks: Iterable[Rank] = ()) -> None:
        self.ranks: list[Rank] = list(ranks)
        self._nodes: dict[RankID, Rank] = {}
        self.rebuild_parent_references()

    def __len__(self) -> int:
        return len(self.ranks)

    def __iter__(self) -> Iterator[Rank]:
        return iter(self.ranks)

    def __contains__(self, rank_id: object) -> bool:
        return rank_id in self._nodes

    # -- lookup -------------------------------------------------------------

    def get(self, rank_id: RankID) -> Rank | None:
        return self._nodes.get(rank_id)

    def parent_of(self, rank: Rank) -> Rank | None:
        if rank.parent_id is None:
            return None
        parent = self._nodes.get(rank.parent_id)
        assert parent is not None, f"dangling parent reference on rank {rank.id}"
        return parent

    def index_of(self, rank: Rank) -> int:
        """Position of ``rank`` among its siblings, or ``-1``."""

        siblings = self.siblings_of(rank)
        for index, candidate in enumerate(siblings):
            if candidate.id == rank.id:
                return index
        return -1

    def siblings_of(self, rank: Rank) -> list[Rank]:
        parent = self.parent_of(rank)
        return parent.pay_bands if parent is not None else self.ranks

    def flatten(self) -> list[Rank]:
        return flatten(self.ranks)

    def nodes(self) -> Iterator[Rank]:
        """Every rank in tree order, parents before their pay bands."""

        for rank in self.ranks:
            yield rank
            yield from rank.pay_bands

    # -- structural edits ---------------------------------------------------

    def insert_rank(self, index: int, rank: Rank) -> None:
        rank.parent_id = None
        self.ranks.insert(index, rank)
        self._register(rank)

    def pop_rank(self, index: int) -> Rank:
        rank = self.ranks.pop(index)
        self._unregister(rank)
        return rank

    def replace_ranks(self, ranks: Iterable[Rank]) -> None:
        self.ranks[:] = list(ranks)
        self.rebuild_parent_references()

    def insert_pay_band(self, parent: Rank, index: int, band: Rank) -> None:
        band.parent_id = parent.id
        band.is_parent = False
        parent.pay_bands.insert(index, band)
        parent.is_parent = True
        self._nodes[band.id] = band
        self.renumber_pay_bands(parent)

    def pop_pay_band(self, parent: Rank, index: int) -> Rank:
        band = parent.pay_bands.pop(index)
        band.parent_id = None
        self._nodes.pop(band.id, None)
        if parent.pay_bands:
            self.renumber_pay_bands(parent)
        else:
            parent.is_parent = False
        return band

    @staticmethod
    def renumber_pay_bands(parent: Rank) -> None:
        """Keep pay-band names as ``{parent} {I, II, ...}``."""

        for position, band in enumerate(parent.pay_bands, start=1):
            band.name = f"{parent.name} {roman_numeral(position)}"

    def rebuild_parent_references(self) -> None:
        """Restore the id index and back-references after bulk loading."""

        self._nodes.clear()
        for rank in self.ranks:
            rank.parent_id = None
            self._register(rank)

    def _register(self, rank: Rank) -> None:
        self._nodes[rank.id] = rank
        for band in rank.pay_bands:
            band.parent_id = rank.id
            self._nodes[band.id] = band
        if rank.pay_bands:
            rank.is_parent = True

    def _unregister(self, rank: Rank) -> None:
        self._nodes.pop(rank.id, None)
        for band in rank.pay_bands:
            self._nodes.pop(band.id, None)
