"""Neighborhood types and their notation parameters."""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from .symmetry import HEX_TABLE, MOORE_TABLE, VON_NEUMANN_TABLE, SymmetryTable


class NeighborhoodKind(Enum):
    """Supported neighborhood variants."""

    LIFELIKE = "lifelike"
    HEX = "hex"
    VON_NEUMANN = "von-neumann"
    ISOTROPIC_LIFE = "isotropic"
    ISOTROPIC_HEX = "isotropic-hex"
    ISOTROPIC_VON_NEUMANN = "isotropic-von-neumann"


@dataclass(frozen=True)
class Neighborhood:
    """Notation parameters of one neighborhood variant.

    Totalistic neighborhoods index rule data by neighbor count; the others
    index it by raw neighbor configuration and read class letters from their
    symmetry table.

    Attributes:
        kind: Variant tag
        description: Human-readable name
        neighbor_count: Number of neighbors of a cell
        suffix: Mandatory suffix of the rule string, e.g. 'H' in 'B2/S34H'
        symmetry: Symmetry table for non-totalistic variants, None otherwise
    """

    kind: NeighborhoodKind
    description: str
    neighbor_count: int
    suffix: Optional[str] = None
    symmetry: Optional[SymmetryTable] = None

    @property
    def name(self) -> str:
        return self.kind.value

    @property
    def is_totalistic(self) -> bool:
        return self.symmetry is None

    @property
    def base(self) -> int:
        """Radix of the count digits in the rule string."""
        return self.neighbor_count + 1

    @property
    def size(self) -> int:
        """Number of neighbor-state codes per side of the rule data."""
        if self.is_totalistic:
            return self.neighbor_count + 1
        return 1 << self.neighbor_count

    @property
    def raw(self) -> "Neighborhood":
        """The non-totalistic variant with the same neighbors."""
        return NEIGHBORHOODS[_RAW_KINDS[self.kind].value]

    def __str__(self) -> str:
        return self.description


LIFELIKE = Neighborhood(NeighborhoodKind.LIFELIKE, "Totalistic life-like", 8)
HEX = Neighborhood(NeighborhoodKind.HEX, "Totalistic hexagonal", 6, suffix="H")
VON_NEUMANN = Neighborhood(NeighborhoodKind.VON_NEUMANN, "Totalistic von Neumann", 4, suffix="V")
ISOTROPIC_LIFE = Neighborhood(
    NeighborhoodKind.ISOTROPIC_LIFE, "Non-totalistic life-like", 8, symmetry=MOORE_TABLE
)
ISOTROPIC_HEX = Neighborhood(
    NeighborhoodKind.ISOTROPIC_HEX, "Non-totalistic hexagonal", 6, suffix="H", symmetry=HEX_TABLE
)
ISOTROPIC_VON_NEUMANN = Neighborhood(
    NeighborhoodKind.ISOTROPIC_VON_NEUMANN,
    "Non-totalistic von Neumann",
    4,
    suffix="V",
    symmetry=VON_NEUMANN_TABLE,
)

NEIGHBORHOODS: Dict[str, Neighborhood] = {
    nbhd.name: nbhd
    for nbhd in (LIFELIKE, HEX, VON_NEUMANN, ISOTROPIC_LIFE, ISOTROPIC_HEX, ISOTROPIC_VON_NEUMANN)
}

_RAW_KINDS = {
    NeighborhoodKind.LIFELIKE: NeighborhoodKind.ISOTROPIC_LIFE,
    NeighborhoodKind.HEX: NeighborhoodKind.ISOTROPIC_HEX,
    NeighborhoodKind.VON_NEUMANN: NeighborhoodKind.ISOTROPIC_VON_NEUMANN,
    NeighborhoodKind.ISOTROPIC_LIFE: NeighborhoodKind.ISOTROPIC_LIFE,
    NeighborhoodKind.ISOTROPIC_HEX: NeighborhoodKind.ISOTROPIC_HEX,
    NeighborhoodKind.ISOTROPIC_VON_NEUMANN: NeighborhoodKind.ISOTROPIC_VON_NEUMANN,
}


def get_neighborhood(name: str) -> Neighborhood:
    """Look up a neighborhood by name.

    Args:
        name: One of the keys of NEIGHBORHOODS, case-insensitive; underscores
            are accepted in place of hyphens

    Returns:
        The neighborhood

    Raises:
        ValueError: If the name is unknown
    """
    key = name.strip().lower().replace("_", "-")
    if key not in NEIGHBORHOODS:
        raise ValueError(f"Unknown neighborhood '{name}'. Available: {', '.join(NEIGHBORHOODS)}")
    return NEIGHBORHOODS[key]
