"""Reader and writer for the canonical ``Ranks.xml`` file.

The file is flat: a parent rank is never written, its pay bands take its place
in the ``<Ranks>`` sequence. Element order inside ``<Rank>`` is fixed
(``Name``, ``RequiredPoints``, ``Salary``, ``Stations``, ``Vehicles``,
``Outfits``) and empty collections are left out entirely.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from lxml import etree

from rankforge.domain.models import Rank, StationAssignment, Vehicle, flatten

logger = logging.getLogger(__name__)

XML_DECLARATION = '<?xml version="1.0" encoding="utf-8"?>\n'
DEFAULT_STYLE_ID = 1
MAX_FRAGMENT_LENGTH = 120


class RanksDecodeError(ValueError):
    """Raised when a ranks document cannot be turned back into ranks."""

    def __init__(self, message: str, *, fragment: str = "", line: int | None = None) -> None:
        location = f" (line {line})" if line is not None else ""
        super().__init__(f"{message}{location}")
        self.fragment = fragment
        self.line = line


class RanksEncodeError(ValueError):
    """Raised when a rank holds text that XML 1.0 cannot represent."""

    def __init__(self, message: str, *, rank_name: str = "") -> None:
        super().__init__(message)
        self.rank_name = rank_name


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------


def _text_element(parent: etree._Element, tag: str, value: object) -> etree._Element:
    element = etree.SubElement(parent, tag)
    element.text = str(value)
    return element


def _append_vehicles(parent: etree._Element, vehicles: list[Vehicle]) -> None:
    if not vehicles:
        return
    container = etree.SubElement(parent, "Vehicles")
    for vehicle in vehicles:
        element = etree.SubElement(container, "Vehicle", model=vehicle.model)
        element.text = vehicle.display_name


def _append_outfits(parent: etree._Element, outfits: list[str]) -> None:
    if not any(outfits):
        return
    container = etree.SubElement(parent, "Outfits")
    for outfit in outfits:
        if outfit:
            _text_element(container, "Outfit", outfit)
        else:
            logger.warning("skipping empty outfit name")


def _station_element(parent: etree._Element, station: StationAssignment) -> None:
    element = etree.SubElement(parent, "Station")
    _text_element(element, "StationName", station.station_name)
    if any(zone.strip() for zone in station.zones):
        zones = etree.SubElement(element, "Zones")
        for zone in station.zones:
            if zone.strip():
                _text_element(zones, "Zone", zone)
            else:
                logger.warning("skipping blank zone of station %r", station.station_name)
    _text_element(element, "StyleID", station.style_id)
    _append_vehicles(element, station.vehicle_overrides)
    _append_outfits(element, station.outfit_overrides)


def _rank_element(parent: etree._Element, rank: Rank) -> None:
    element = etree.SubElement(parent, "Rank")
    _text_element(element, "Name", rank.name)
    _text_element(element, "RequiredPoints", rank.required_points)
    _text_element(element, "Salary", rank.salary)
    if rank.stations:
        stations = etree.SubElement(element, "Stations")
        for station in rank.stations:
            _station_element(stations, station)
    _append_vehicles(element, rank.vehicles)
    _append_outfits(element, rank.outfits)


def serialize(ranks: Iterable[Rank]) -> str:
    """Render ranks as an indented UTF-8 ``Ranks.xml`` document.

    Blank zones and empty outfit names are skipped, as the reader skips them.

    Raises:
        RanksEncodeError: If a rank holds NUL or other control characters
    """

    root = etree.Element("Ranks")
    flat = flatten(ranks)
    for rank in flat:
        try:
            _rank_element(root, rank)
        except ValueError as exc:
            raise RanksEncodeError(f"rank {rank.name!r} cannot be written: {exc}", rank_name=rank.name) from exc
    body = etree.tostring(root, pretty_print=True, encoding="unicode")
    logger.debug("serialized %d rank(s)", len(flat))
    return XML_DECLARATION + body


def write_ranks_file(path: Path | str, ranks: Iterable[Rank]) -> Path:
    """Write ``serialize(ranks)`` to ``path`` as UTF-8 without a BOM."""

    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes(serialize(ranks).encode("utf-8"))
    return target


# ---------------------------------------------------------------------------
# Deserialization
# ---------------------------------------------------------------------------


def _fragment(element: etree._Element) -> str:
    text = etree.tostring(element, encoding="unicode", with_tail=False)
    if len(text) > MAX_FRAGMENT_LENGTH:
        return text[: MAX_FRAGMENT_LENGTH - 3] + "..."
    return text


def _source_line(data: bytes, line: int | None) -> str:
    if not line:
        return data[:MAX_FRAGMENT_LENGTH].decode("utf-8", errors="replace")
    lines = data.splitlines()
    if 0 < line <= len(lines):
        return lines[line - 1].decode("utf-8", errors="replace").strip()[:MAX_FRAGMENT_LENGTH]
    return ""


def _child_text(element: etree._Element, tag: str) -> str | None:
    child = element.find(tag)
    if child is None:
        return None
    return child.text or ""


def _int_child(element: etree._Element, tag: str, default: int) -> int:
    child = element.find(tag)
    if child is None:
        return default
    raw = (child.text or "").strip()
    try:
        return int(raw)
    except ValueError:
        raise RanksDecodeError(
            f"<{tag}> must be an integer, got {raw!r}",
            fragment=_fragment(child),
            line=child.sourceline,
        ) from None


def _parse_vehicles(container: etree._Element | None) -> list[Vehicle]:
    if container is None:
        return []
    vehicles: list[Vehicle] = []
    for element in container.findall("Vehicle"):
        model = (element.get("model") or "").strip()
        if not model:
            raise RanksDecodeError(
                "<Vehicle> is missing its model attribute",
                fragment=_fragment(element),
                line=element.sourceline,
            )
        vehicles.append(Vehicle(model=model, display_name=element.text or ""))
    return vehicles


def _parse_outfits(container: etree._Element | None) -> list[str]:
    if container is None:
        return []
    outfits: list[str] = []
    for element in container.findall("Outfit"):
        if element.text:
            outfits.append(element.text)
        else:
            logger.warning("skipping empty <Outfit> on line %s", element.sourceline)
    return outfits


def _parse_station(element: etree._Element) -> StationAssignment:
    zones: list[str] = []
    zones_element = element.find("Zones")
    if zones_element is not None:
        for zone in zones_element.findall("Zone"):
            if zone.text and zone.text.strip():
                zones.append(zone.text)
            else:
                logger.warning("skipping empty <Zone> on line %s", zone.sourceline)
    return StationAssignment(
        station_name=_child_text(element, "StationName") or "",
        zones=zones,
        style_id=_int_child(element, "StyleID", DEFAULT_STYLE_ID),
        vehicle_overrides=_parse_vehicles(element.find("Vehicles")),
        outfit_overrides=_parse_outfits(element.find("Outfits")),
    )


def _parse_rank(element: etree._Element) -> Rank:
    stations_element = element.find("Stations")
    stations = []
    if stations_element is not None:
        stations = [_parse_station(station) for station in stations_element.findall("Station")]
    name = _child_text(element, "Name")
    return Rank(
        name=name if name is not None else "Unknown",
        required_points=_int_child(element, "RequiredPoints", 0),
        salary=_int_child(element, "Salary", 0),
        stations=stations,
        vehicles=_parse_vehicles(element.find("Vehicles")),
        outfits=_parse_outfits(element.find("Outfits")),
    )


def deserialize(document: str | bytes) -> list[Rank]:
    """Parse a ``Ranks.xml`` document into a flat list of top-level ranks."""

    data = document.encode("utf-8") if isinstance(document, str) else document
    parser = etree.XMLParser(resolve_entities=False, no_network=True)
    try:
        root = etree.fromstring(data, parser)
    except etree.XMLSyntaxError as exc:
        raise RanksDecodeError(
            f"malformed ranks document: {exc.msg}",
            fragment=_source_line(data, exc.lineno),
            line=exc.lineno,
        ) from exc

    if root.tag != "Ranks":
        raise RanksDecodeError(
            f"expected <Ranks> root element, found <{root.tag}>",
            fragment=_fragment(root),
            line=root.sourceline,
        )

    ranks = [_parse_rank(element) for element in root.findall("Rank")]
    logger.debug("deserialized %d rank(s)", len(ranks))
    return ranks


def read_ranks_file(path: Path | str) -> list[Rank]:
    """Read and parse a ``Ranks.xml`` file."""

    return deserialize(Path(path).read_bytes())
