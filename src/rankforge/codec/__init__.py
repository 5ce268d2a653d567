"""Codec for the on-disk ``Ranks.xml`` format."""

from rankforge.codec.grouping import base_name, group_into_hierarchy
from rankforge.codec.xml_codec import (
    RanksDecodeError,
    RanksEncodeError,
    deserialize,
    read_ranks_file,
    serialize,
    write_ranks_file,
)

__all__ = [
    "RanksDecodeError",
    "RanksEncodeError",
    "base_name",
    "deserialize",
    "group_into_hierarchy",
    "read_ranks_file",
    "serialize",
    "write_ranks_file",
]
