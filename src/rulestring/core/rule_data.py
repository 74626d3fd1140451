"""Bitset representation of birth/survival conditions."""

from typing import Dict, FrozenSet, Iterable, Iterator, Optional
import numpy as np

from .errors import ConvertErrorKind, ConvertRuleError
from .neighborhood import ISOTROPIC_LIFE, Neighborhood
from .symmetry import popcounts

# Generation counts are unsigned 32-bit numbers
GEN_MAX = 2**32 - 1

_MOORE_CODES = np.arange(256, dtype=np.int64)

# For every Moore configuration, the configuration of the neighbors it shares
# with a neighborhood of the given size (NE and SW are not hex neighbors)
MOORE_PROJECTIONS: Dict[int, np.ndarray] = {
    8: _MOORE_CODES,
    6: ((_MOORE_CODES & 0xC0) >> 2) | ((_MOORE_CODES & 0x18) >> 1) | (_MOORE_CODES & 0x03),
    4: ((_MOORE_CODES & 0x40) >> 3) | ((_MOORE_CODES & 0x18) >> 2) | ((_MOORE_CODES & 0x02) >> 1),
}


class RuleData:
    """Birth and survival conditions of a rule as a fixed-size bit vector.

    The vector has ``2 * size`` bits where ``size`` is the number of
    neighbor-state codes of the neighborhood. Bit ``k < size`` is set when
    code ``k`` causes birth, bit ``size + k`` when it causes survival.

    Instances are immutable values: the bit array is read-only and two rules
    compare equal when they share neighborhood and bits.
    """

    def __init__(self, neighborhood: Neighborhood, bits: Optional[Iterable[bool]] = None) -> None:
        """Initialize rule data.

        Args:
            neighborhood: Neighborhood the codes refer to
            bits: Initial bit vector of length ``2 * neighborhood.size``,
                all clear when omitted

        Raises:
            ValueError: If the bit vector has the wrong length
        """
        length = 2 * neighborhood.size
        if bits is None:
            data = np.zeros(length, dtype=bool)
        else:
            data = np.array(bits, dtype=bool)
            if data.shape != (length,):
                raise ValueError(
                    f"{neighborhood} rule data needs {length} bits, got shape {data.shape}"
                )
        data.flags.writeable = False

        self._neighborhood = neighborhood
        self._bits = data

    @classmethod
    def empty(cls, neighborhood: Neighborhood) -> "RuleData":
        """Rule with no birth or survival conditions, i.e. ``B/S``."""
        return cls(neighborhood)

    @classmethod
    def from_bs(
        cls, neighborhood: Neighborhood, birth: Iterable[int], survival: Iterable[int]
    ) -> "RuleData":
        """Create rule data from birth and survival codes.

        Args:
            neighborhood: Neighborhood the codes refer to
            birth: Codes that cause birth
            survival: Codes that cause survival

        Returns:
            New RuleData instance

        Raises:
            ValueError: If a code is outside the neighborhood's range
        """
        size = neighborhood.size
        data = np.zeros(2 * size, dtype=bool)
        for offset, codes in ((0, birth), (size, survival)):
            for code in codes:
                if not 0 <= int(code) < size:
                    raise ValueError(f"Code {code} out of range [0, {size}) for {neighborhood}")
                data[offset + int(code)] = True
        return cls(neighborhood, data)

    @property
    def neighborhood(self) -> Neighborhood:
        return self._neighborhood

    @property
    def size(self) -> int:
        """Number of neighbor-state codes per side."""
        return self._neighborhood.size

    @property
    def bits(self) -> np.ndarray:
        """Read-only bit vector, birth half first."""
        return self._bits

    @property
    def birth(self) -> FrozenSet[int]:
        return frozenset(self.iter_b())

    @property
    def survival(self) -> FrozenSet[int]:
        return frozenset(self.iter_s())

    def contains_b(self, code: int) -> bool:
        """Whether this code causes birth."""
        return 0 <= code < self.size and bool(self._bits[code])

    def contains_s(self, code: int) -> bool:
        """Whether this code causes survival."""
        return 0 <= code < self.size and bool(self._bits[self.size + code])

    def iter_b(self) -> Iterator[int]:
        """Birth codes in ascending order."""
        return (int(code) for code in np.flatnonzero(self._bits[: self.size]))

    def iter_s(self) -> Iterator[int]:
        """Survival codes in ascending order."""
        return (int(code) for code in np.flatnonzero(self._bits[self.size :]))

    def lift(self) -> "RuleData":
        """Express a totalistic rule by raw neighbor configurations.

        Every configuration whose population is a birth (survival) count
        becomes a birth (survival) configuration. Non-totalistic rules are
        returned unchanged.

        Returns:
            RuleData over ``neighborhood.raw``
        """
        if not self._neighborhood.is_totalistic:
            return self

        counts = popcounts(self._neighborhood.neighbor_count)
        birth = self._bits[: self.size][counts]
        survival = self._bits[self.size :][counts]
        return RuleData(self._neighborhood.raw, np.concatenate([birth, survival]))

    def to_moore(self) -> "RuleData":
        """Express the rule by configurations of the 8 Moore neighbors.

        A Moore configuration causes birth (survival) when its cells shared
        with this rule's neighborhood form a birth (survival) configuration;
        the other Moore neighbors are ignored. Hexagonal rules thus become
        rules that disregard NE and SW, von Neumann rules ones that disregard
        all corners.

        Returns:
            RuleData over ISOTROPIC_LIFE
        """
        data = self.lift()
        projection = MOORE_PROJECTIONS[data.neighborhood.neighbor_count]
        birth = data.bits[: data.size][projection]
        survival = data.bits[data.size :][projection]
        return RuleData(ISOTROPIC_LIFE, np.concatenate([birth, survival]))

    def with_gen(self, gen: int) -> "GenRuleData":
        """Wrap this rule as a Generations rule with ``gen`` states."""
        return GenRuleData(self, gen)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RuleData):
            return NotImplemented
        return self._neighborhood == other._neighborhood and bool(np.array_equal(self._bits, other._bits))

    def __hash__(self) -> int:
        return hash((self._neighborhood, self._bits.tobytes()))

    def __repr__(self) -> str:
        return (
            f"RuleData({self._neighborhood.name}, birth={sorted(self.birth)}, "
            f"survival={sorted(self.survival)})"
        )

    def __str__(self) -> str:
        from .map_codec import to_string_map
        from .printer import to_string_bs

        try:
            return to_string_bs(self)
        except ConvertRuleError:
            return to_string_map(self)


class GenRuleData:
    """A rule together with its number of Generations states.

    ``gen == 2`` behaves exactly like the plain two-state rule.
    """

    def __init__(self, rule: RuleData, gen: int) -> None:
        """Initialize a Generations rule.

        Args:
            rule: Birth and survival conditions
            gen: Number of states, between 2 and GEN_MAX

        Raises:
            ValueError: If gen is out of range
        """
        if not 2 <= gen <= GEN_MAX:
            raise ValueError(f"Number of states must be in [2, {GEN_MAX}], got {gen}")
        self._rule = rule
        self._gen = int(gen)

    @classmethod
    def from_rule(cls, rule: RuleData) -> "GenRuleData":
        """Lossless conversion of a two-state rule; always succeeds."""
        return cls(rule, 2)

    def to_rule(self) -> RuleData:
        """Convert back to a two-state rule.

        Returns:
            The wrapped RuleData

        Raises:
            ConvertRuleError: If the rule has more than 2 states
        """
        if self._gen != 2:
            raise ConvertRuleError(ConvertErrorKind.GEN_GREATER_THAN_2)
        return self._rule

    @property
    def rule(self) -> RuleData:
        return self._rule

    @property
    def gen(self) -> int:
        return self._gen

    @property
    def neighborhood(self) -> Neighborhood:
        return self._rule.neighborhood

    @property
    def birth(self) -> FrozenSet[int]:
        return self._rule.birth

    @property
    def survival(self) -> FrozenSet[int]:
        return self._rule.survival

    def lift(self) -> "GenRuleData":
        return GenRuleData(self._rule.lift(), self._gen)

    def to_moore(self) -> "GenRuleData":
        return GenRuleData(self._rule.to_moore(), self._gen)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GenRuleData):
            return NotImplemented
        return self._gen == other._gen and self._rule == other._rule

    def __hash__(self) -> int:
        return hash((self._rule, self._gen))

    def __repr__(self) -> str:
        return (
            f"GenRuleData({self.neighborhood.name}, birth={sorted(self.birth)}, "
            f"survival={sorted(self.survival)}, gen={self._gen})"
        )

    def __str__(self) -> str:
        from .map_codec import to_string_gen_map
        from .printer import to_string_sbg

        try:
            return to_string_sbg(self)
        except ConvertRuleError:
            return to_string_gen_map(self)
