"""Tests for RuleData and GenRuleData."""

import numpy as np
import pytest
from rulestring.core.errors import ConvertErrorKind, ConvertRuleError
from rulestring.core.neighborhood import (
    HEX,
    ISOTROPIC_HEX,
    ISOTROPIC_LIFE,
    ISOTROPIC_VON_NEUMANN,
    LIFELIKE,
    VON_NEUMANN,
    get_neighborhood,
)
from rulestring.core.rule_data import GEN_MAX, GenRuleData, RuleData


class TestNeighborhood:
    """Test neighborhood parameters."""

    def test_sizes(self):
        """Test the number of codes per side."""
        assert LIFELIKE.size == 9
        assert HEX.size == 7
        assert VON_NEUMANN.size == 5
        assert ISOTROPIC_LIFE.size == 256
        assert ISOTROPIC_HEX.size == 64
        assert ISOTROPIC_VON_NEUMANN.size == 16

    def test_raw(self):
        """Test the non-totalistic counterparts."""
        assert LIFELIKE.raw is ISOTROPIC_LIFE
        assert HEX.raw is ISOTROPIC_HEX
        assert VON_NEUMANN.raw is ISOTROPIC_VON_NEUMANN
        assert ISOTROPIC_HEX.raw is ISOTROPIC_HEX

    def test_suffix(self):
        """Test only hex and von Neumann rules carry a suffix."""
        assert LIFELIKE.suffix is None
        assert ISOTROPIC_LIFE.suffix is None
        assert HEX.suffix == ISOTROPIC_HEX.suffix == "H"
        assert VON_NEUMANN.suffix == ISOTROPIC_VON_NEUMANN.suffix == "V"

    def test_get_neighborhood(self):
        """Test lookup by name."""
        assert get_neighborhood("hex") is HEX
        assert get_neighborhood("Isotropic_Von_Neumann") is ISOTROPIC_VON_NEUMANN

    def test_get_unknown_neighborhood(self):
        """Test lookup of an unknown name."""
        with pytest.raises(ValueError, match="Unknown neighborhood"):
            get_neighborhood("triangular")


class TestRuleData:
    """Test cases for the RuleData class."""

    def test_empty(self):
        """Test the empty rule has no conditions."""
        rule = RuleData.empty(LIFELIKE)
        assert rule.bits.shape == (18,)
        assert not rule.bits.any()
        assert rule.birth == frozenset()
        assert rule.survival == frozenset()

    def test_from_bs(self):
        """Test construction from birth and survival codes."""
        rule = RuleData.from_bs(LIFELIKE, [3], [2, 3])
        assert rule.birth == {3}
        assert rule.survival == {2, 3}
        assert list(rule.iter_b()) == [3]
        assert list(rule.iter_s()) == [2, 3]
        assert rule.bits[3]
        assert rule.bits[9 + 2]

    def test_contains(self):
        """Test membership queries."""
        rule = RuleData.from_bs(HEX, [2], [3, 4])
        assert rule.contains_b(2)
        assert not rule.contains_b(3)
        assert rule.contains_s(4)
        assert not rule.contains_s(7)
        assert not rule.contains_s(-1)

    def test_code_out_of_range(self):
        """Test codes outside the neighborhood are rejected."""
        with pytest.raises(ValueError, match="out of range"):
            RuleData.from_bs(LIFELIKE, [9], [])
        with pytest.raises(ValueError):
            RuleData.from_bs(VON_NEUMANN, [], [-1])

    def test_wrong_length(self):
        """Test a bit vector of the wrong length is rejected."""
        with pytest.raises(ValueError, match="needs 18 bits"):
            RuleData(LIFELIKE, np.zeros(10, dtype=bool))

    def test_bits_read_only(self):
        """Test rule data cannot be modified in place."""
        rule = RuleData.from_bs(LIFELIKE, [3], [2, 3])
        with pytest.raises(ValueError):
            rule.bits[0] = True

    def test_input_array_copied(self):
        """Test later changes to the input array do not leak in."""
        bits = np.zeros(18, dtype=bool)
        rule = RuleData(LIFELIKE, bits)
        bits[0] = True
        assert not rule.contains_b(0)

    def test_equality_and_hash(self):
        """Test value semantics."""
        a = RuleData.from_bs(LIFELIKE, [3], [2, 3])
        b = RuleData.from_bs(LIFELIKE, [3], [3, 2])
        c = RuleData.from_bs(LIFELIKE, [3], [2])
        assert a == b
        assert hash(a) == hash(b)
        assert a != c
        assert len({a, b, c}) == 2

    def test_different_neighborhoods_not_equal(self):
        """Test equal codes in different neighborhoods differ."""
        assert RuleData.from_bs(LIFELIKE, [2], [3]) != RuleData.from_bs(HEX, [2], [3])

    def test_lift(self):
        """Test lifting a totalistic rule to raw configurations."""
        lifted = RuleData.from_bs(LIFELIKE, [3], [2, 3]).lift()
        assert lifted.neighborhood is ISOTROPIC_LIFE
        assert len(lifted.birth) == 56
        assert len(lifted.survival) == 28 + 56
        assert all(bin(code).count("1") == 3 for code in lifted.birth)

    def test_lift_von_neumann(self):
        """Test lifting keeps counts 0 and 4 as single codes."""
        lifted = RuleData.from_bs(VON_NEUMANN, [0], [4]).lift()
        assert lifted.neighborhood is ISOTROPIC_VON_NEUMANN
        assert lifted.birth == {0}
        assert lifted.survival == {15}

    def test_lift_non_totalistic_unchanged(self):
        """Test non-totalistic data is returned as is."""
        rule = RuleData.from_bs(ISOTROPIC_HEX, [3], [5])
        assert rule.lift() is rule

    def test_to_moore_lifelike(self):
        """Test a life-like rule projects to its lifted form."""
        rule = RuleData.from_bs(LIFELIKE, [3], [2, 3])
        assert rule.to_moore() == rule.lift()

    def test_to_moore_hex(self):
        """Test hexagonal configurations ignore the NE and SW neighbors."""
        moore = RuleData.from_bs(ISOTROPIC_HEX, [0b111111], []).to_moore()
        assert moore.neighborhood is ISOTROPIC_LIFE
        assert moore.birth == {0b11011011, 0b11111011, 0b11011111, 0b11111111}

    def test_to_moore_von_neumann(self):
        """Test von Neumann configurations ignore the corners."""
        moore = RuleData.from_bs(VON_NEUMANN, [], [0]).to_moore()
        assert len(moore.survival) == 16
        assert all(code & 0b01011010 == 0 for code in moore.survival)

    def test_repr(self):
        """Test the debug representation."""
        rule = RuleData.from_bs(LIFELIKE, [3], [2, 3])
        assert repr(rule) == "RuleData(lifelike, birth=[3], survival=[2, 3])"


class TestGenRuleData:
    """Test cases for Generations rules."""

    def test_from_rule(self):
        """Test wrapping a two-state rule."""
        rule = RuleData.from_bs(LIFELIKE, [3], [2, 3])
        gen_rule = GenRuleData.from_rule(rule)
        assert gen_rule.gen == 2
        assert gen_rule.rule == rule
        assert gen_rule.to_rule() == rule

    def test_to_rule_with_more_states(self):
        """Test conversion fails with more than 2 states."""
        gen_rule = RuleData.from_bs(LIFELIKE, [3, 5, 7], [3, 4, 5, 7]).with_gen(5)
        with pytest.raises(ConvertRuleError) as excinfo:
            gen_rule.to_rule()
        assert excinfo.value.kind is ConvertErrorKind.GEN_GREATER_THAN_2

    def test_gen_range(self):
        """Test the number of states must be between 2 and GEN_MAX."""
        rule = RuleData.empty(LIFELIKE)
        with pytest.raises(ValueError):
            GenRuleData(rule, 1)
        with pytest.raises(ValueError):
            GenRuleData(rule, GEN_MAX + 1)
        assert GenRuleData(rule, GEN_MAX).gen == GEN_MAX

    def test_delegates(self):
        """Test accessors of the wrapped rule."""
        gen_rule = GenRuleData(RuleData.from_bs(HEX, [2], [3, 4]), 3)
        assert gen_rule.neighborhood is HEX
        assert gen_rule.birth == {2}
        assert gen_rule.survival == {3, 4}

    def test_equality(self):
        """Test equality takes the number of states into account."""
        rule = RuleData.from_bs(LIFELIKE, [3], [2, 3])
        assert GenRuleData(rule, 3) == GenRuleData(rule, 3)
        assert GenRuleData(rule, 3) != GenRuleData(rule, 4)
        assert hash(GenRuleData(rule, 3)) == hash(GenRuleData(rule, 3))

    def test_lift(self):
        """Test lifting keeps the number of states."""
        lifted = RuleData.from_bs(LIFELIKE, [3], [2, 3]).with_gen(4).lift()
        assert lifted.gen == 4
        assert lifted.neighborhood is ISOTROPIC_LIFE

    def test_to_moore(self):
        """Test projecting keeps the number of states."""
        moore = RuleData.from_bs(HEX, [2], [3, 4]).with_gen(4).to_moore()
        assert moore.gen == 4
        assert moore.neighborhood is ISOTROPIC_LIFE
