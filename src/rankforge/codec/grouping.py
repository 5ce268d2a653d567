"""Re-infer parent ranks from the flat list stored in ``Ranks.xml``.

The file does not record which ranks were pay bands, so ranks whose names
differ only by a trailing Roman numeral ("Officer I", "Officer II") are
gathered back under a parent named after the shared prefix.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from rankforge.domain.models import Rank, RankHierarchy

_ROMAN_WORD = re.compile(r"^[IVXLCDM]+$")


def base_name(name: str) -> str:
    """Strip a trailing Roman-numeral word (``"III"``, ``"III+I"``) from a name."""

    parts = name.split(" ")
    if len(parts) > 1 and _ROMAN_WORD.match(parts[-1].replace("+", "")):
        return " ".join(parts[:-1])
    return name


def group_into_hierarchy(ranks: Iterable[Rank]) -> RankHierarchy:
    """Build a hierarchy, turning each group of same-base ranks into pay bands."""

    groups: dict[str, list[Rank]] = {}
    for rank in ranks:
        groups.setdefault(base_name(rank.name), []).append(rank)

    top_level: list[Rank] = []
    for key, members in groups.items():
        if len(members) == 1:
            top_level.append(members[0])
            continue
        bands = sorted(members, key=lambda rank: rank.required_points)
        parent = Rank(
            name=key,
            required_points=bands[0].required_points,
            salary=bands[0].salary,
            is_parent=True,
        )
        for band in bands:
            band.pay_bands.clear()
            band.is_parent = False
            parent.pay_bands.append(band)
        top_level.append(parent)

    return RankHierarchy(top_level)
