"""Symmetry-class tables for isotropic non-totalistic notation.

A raw configuration is a bitmask of the live neighbors of a cell. The tables
group the raw configurations of each population count into classes that are
equivalent under the rotations and reflections of the neighborhood, and name
each class with a letter. Counts whose configurations form a single class
have one unnamed class.

Bit layouts, most significant bit first:

    Moore (8 neighbors):        NW N NE W E SW S SE
    Hexagonal (6 neighbors):    NW N W E S SE
    von Neumann (4 neighbors):  N W E S

For example ``42 = 0b00101010`` is the Moore configuration::

    0 0 1
    0 _ 1
    0 1 0
"""

from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

import numpy as np


@dataclass(frozen=True)
class SymmetryClass:
    """A named group of equivalent raw configurations.

    Attributes:
        count: Number of live neighbors shared by every configuration
        letter: Class letter, or None for the only class of its count
        codes: Raw configurations in ascending order
    """

    count: int
    letter: Optional[str]
    codes: Tuple[int, ...]


def popcounts(neighbor_count: int) -> np.ndarray:
    """Population count of every raw configuration.

    Args:
        neighbor_count: Number of neighbor bits

    Returns:
        Array of length ``2 ** neighbor_count`` indexed by raw configuration
    """
    return np.array([bin(code).count("1") for code in range(1 << neighbor_count)], dtype=np.int64)


def _orbit(code: int, ring: Sequence[int], step: int) -> Tuple[int, ...]:
    """All images of a configuration under the dihedral group of the ring.

    ``ring`` lists the neighbor bits in the order they occur going around
    the cell; rotations move by multiples of ``step`` ring positions.
    """
    length = len(ring)
    positions = [i for i, bit in enumerate(ring) if code >> bit & 1]
    images = set()
    for sign in (1, -1):
        for shift in range(0, length, step):
            image = 0
            for position in positions:
                image |= 1 << ring[(sign * position + shift) % length]
            images.add(image)
    return tuple(sorted(images))


class SymmetryTable:
    """Read-only lookup from (count, letter) to raw configurations."""

    def __init__(
        self,
        name: str,
        neighbor_count: int,
        representatives: Dict[int, Sequence[Tuple[str, int]]],
        ring: Optional[Sequence[int]] = None,
        step: int = 1,
    ) -> None:
        """Build the table.

        Args:
            name: Neighborhood name, used in error messages
            neighbor_count: Number of neighbor bits
            representatives: For each count with several classes, the
                class letters in notation order with one member each
            ring: Neighbor bits in cyclic order, required when
                representatives are given
            step: Ring positions per rotation of the symmetry group

        Raises:
            ValueError: If the classes of a count do not partition its
                configurations
        """
        self.name = name
        self.neighbor_count = neighbor_count

        counts = popcounts(neighbor_count)
        self._classes: Dict[int, Tuple[SymmetryClass, ...]] = {}
        self._by_code: Dict[int, SymmetryClass] = {}

        for count in range(neighbor_count + 1):
            population = tuple(int(code) for code in np.flatnonzero(counts == count))
            members = representatives.get(count)
            if not members:
                classes: Tuple[SymmetryClass, ...] = (SymmetryClass(count, None, population),)
            else:
                classes = tuple(
                    SymmetryClass(count, letter, _orbit(code, ring, step)) for letter, code in members
                )

            covered = sorted(code for cls in classes for code in cls.codes)
            if covered != list(population):
                raise ValueError(f"{name}: classes of count {count} do not partition its configurations")

            self._classes[count] = classes
            for cls in classes:
                for code in cls.codes:
                    self._by_code[code] = cls

    @property
    def max_count(self) -> int:
        return self.neighbor_count

    def classes(self, count: int) -> Tuple[SymmetryClass, ...]:
        """Classes of a population count, in notation order."""
        return self._classes[count]

    def letters(self, count: int) -> List[str]:
        """Class letters of a population count; empty when it has a single class."""
        return [cls.letter for cls in self._classes[count] if cls.letter is not None]

    def has_letters(self, count: int) -> bool:
        return len(self._classes[count]) > 1

    def codes(self, count: int, letter: Optional[str] = None) -> Tuple[int, ...]:
        """Raw configurations of one class.

        Args:
            count: Population count
            letter: Class letter; None selects the whole population

        Returns:
            Tuple of raw configurations

        Raises:
            KeyError: If the count has no class with this letter
        """
        if letter is None:
            return tuple(code for cls in self._classes[count] for code in cls.codes)
        for cls in self._classes[count]:
            if cls.letter == letter:
                return cls.codes
        raise KeyError(f"{self.name}: no class {count}{letter}")

    def classify(self, code: int) -> SymmetryClass:
        """Find the class containing a raw configuration."""
        return self._by_code[code]

    def __iter__(self) -> Iterator[SymmetryClass]:
        for count in range(self.neighbor_count + 1):
            yield from self._classes[count]

    def __repr__(self) -> str:
        return f"SymmetryTable({self.name!r}, neighbor_count={self.neighbor_count})"


# Moore neighbors going around the cell: NW N NE E SE S SW W
MOORE_RING = (7, 6, 5, 3, 0, 1, 2, 4)

# Hensel notation
MOORE_REPRESENTATIVES = {
    1: (("c", 0x01), ("e", 0x02)),
    2: (("c", 0x05), ("e", 0x0A), ("k", 0x0C), ("a", 0x03), ("i", 0x18), ("n", 0x24)),
    3: (
        ("c", 0x25),
        ("e", 0x1A),
        ("k", 0x32),
        ("a", 0x0B),
        ("i", 0x07),
        ("n", 0x0D),
        ("y", 0x31),
        ("q", 0x26),
        ("j", 0x0E),
        ("r", 0x19),
    ),
    4: (
        ("c", 0xA5),
        ("e", 0x5A),
        ("k", 0x33),
        ("a", 0x0F),
        ("i", 0x1D),
        ("n", 0x27),
        ("y", 0x35),
        ("q", 0x36),
        ("j", 0x3A),
        ("r", 0x1B),
        ("t", 0x39),
        ("w", 0x2E),
        ("z", 0x3C),
    ),
    5: (
        ("c", 0x5B),
        ("e", 0xA7),
        ("k", 0x75),
        ("a", 0x2F),
        ("i", 0x1F),
        ("n", 0x3B),
        ("y", 0x5D),
        ("q", 0x3E),
        ("j", 0x37),
        ("r", 0x3D),
    ),
    6: (("c", 0x5F), ("e", 0xAF), ("k", 0x77), ("a", 0x3F), ("i", 0xBD), ("n", 0x7E)),
    7: (("c", 0x7F), ("e", 0xBF)),
}

# Hexagonal neighbors going around the cell: NW N E SE S W
HEX_RING = (5, 4, 2, 0, 1, 3)

# o: ortho (adjacent), m: meta (one apart), p: para (opposite)
HEX_REPRESENTATIVES = {
    2: (("o", 0x03), ("m", 0x06), ("p", 0x0C)),
    3: (("o", 0x07), ("m", 0x0D), ("p", 0x19)),
    4: (("o", 0x0F), ("m", 0x1B), ("p", 0x1E)),
}

MOORE_TABLE = SymmetryTable("moore", 8, MOORE_REPRESENTATIVES, ring=MOORE_RING, step=2)
HEX_TABLE = SymmetryTable("hex", 6, HEX_REPRESENTATIVES, ring=HEX_RING, step=1)
VON_NEUMANN_TABLE = SymmetryTable("von_neumann", 4, {})
