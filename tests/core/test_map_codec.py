"""Tests for the MAP notation."""

import pytest
from rulestring.core.errors import ParseErrorKind, ParseRuleError
from rulestring.core.map_codec import parse_gen_rule_map, parse_rule_map, to_string_gen_map, to_string_map
from rulestring.core.neighborhood import (
    HEX,
    ISOTROPIC_HEX,
    ISOTROPIC_LIFE,
    ISOTROPIC_VON_NEUMANN,
    LIFELIKE,
    VON_NEUMANN,
)
from rulestring.core.parser import parse_rule
from rulestring.core.rule_data import GenRuleData, RuleData

CONWAY_MAP = "MAPARYXfhZofugWaH7oaIDogBZofuhogOiAaIDogIAAgAAWaH7oaIDogGiA6ICAAIAAaIDogIAAgACAAIAAAAAAAA"


def map_error(func, *args):
    with pytest.raises(ParseRuleError) as excinfo:
        func(*args)
    return excinfo.value.kind


class TestParseRuleMap:
    """Test cases for decoding MAP strings."""

    def test_von_neumann(self):
        """Test a von Neumann MAP equals the lifted totalistic rule."""
        rule = parse_rule_map("MAPHmlphg", ISOTROPIC_VON_NEUMANN)
        assert rule == parse_rule("B2/S013V", VON_NEUMANN).lift()

    def test_conway(self):
        """Test the MAP string of Conway's Life."""
        rule = parse_rule_map(CONWAY_MAP)
        assert rule.neighborhood is ISOTROPIC_LIFE
        assert rule == parse_rule("B3/S23").lift()

    def test_padding_optional(self):
        """Test padded and unpadded payloads are both accepted."""
        assert parse_rule_map("MAPHmlphg==", ISOTROPIC_VON_NEUMANN) == parse_rule_map(
            "MAPHmlphg", ISOTROPIC_VON_NEUMANN
        )

    def test_totalistic_neighborhood(self):
        """Test totalistic neighborhoods decode into their raw variant."""
        assert parse_rule_map("MAPHmlphg", VON_NEUMANN).neighborhood is ISOTROPIC_VON_NEUMANN

    def test_not_map(self):
        """Test strings without the prefix."""
        assert map_error(parse_rule_map, "B3/S23") is ParseErrorKind.NOT_MAP_RULE

    def test_truncated(self):
        """Test a payload that is too short."""
        assert map_error(parse_rule_map, CONWAY_MAP[:-7]) is ParseErrorKind.INVALID_LENGTH

    def test_wrong_neighborhood(self):
        """Test a payload for another neighborhood size."""
        assert map_error(parse_rule_map, "MAPHmlphg", ISOTROPIC_HEX) is ParseErrorKind.INVALID_LENGTH

    def test_invalid_character(self):
        """Test a character outside the base64 alphabet."""
        corrupted = CONWAY_MAP[:50] + "!" + CONWAY_MAP[51:]
        assert map_error(parse_rule_map, corrupted) is ParseErrorKind.BASE64_ERROR

    def test_non_ascii(self):
        """Test non-ASCII payloads."""
        assert map_error(parse_rule_map, "MAPHmlphé", ISOTROPIC_VON_NEUMANN) is ParseErrorKind.BASE64_ERROR

    def test_trailing_bits(self):
        """Test unused trailing bits must be zero."""
        assert map_error(parse_rule_map, "MAPHmlphh", ISOTROPIC_VON_NEUMANN) is ParseErrorKind.BASE64_ERROR

    def test_impossible_length(self):
        """Test a payload length no encoding can have."""
        assert map_error(parse_rule_map, "MAPHmlph", ISOTROPIC_VON_NEUMANN) is ParseErrorKind.BASE64_ERROR


class TestParseGenRuleMap:
    """Test cases for MAP strings with a number of states."""

    def test_states(self):
        """Test a trailing number of states."""
        rule = parse_gen_rule_map("MAPHmlphg/5", ISOTROPIC_VON_NEUMANN)
        assert rule.gen == 5
        assert rule.rule == parse_rule_map("MAPHmlphg", ISOTROPIC_VON_NEUMANN)

    def test_default_states(self):
        """Test a missing or empty number of states gives 2."""
        assert parse_gen_rule_map("MAPHmlphg", ISOTROPIC_VON_NEUMANN).gen == 2
        assert parse_gen_rule_map("MAPHmlphg/", ISOTROPIC_VON_NEUMANN).gen == 2

    def test_slash_in_payload(self):
        """Test a slash inside the payload is not a separator."""
        rule = RuleData.from_bs(ISOTROPIC_VON_NEUMANN, range(16), range(16))
        text = to_string_map(rule)
        assert text == "MAP/////w"
        assert parse_gen_rule_map(text, ISOTROPIC_VON_NEUMANN) == GenRuleData(rule, 2)
        assert parse_gen_rule_map(text + "/3", ISOTROPIC_VON_NEUMANN) == GenRuleData(rule, 3)

    def test_gen_less_than_2(self):
        """Test fewer than 2 states."""
        assert map_error(parse_gen_rule_map, "MAPHmlphg/1", ISOTROPIC_VON_NEUMANN) is ParseErrorKind.GEN_LESS_THAN_2

    def test_extra_junk(self):
        """Test characters after the number of states."""
        assert map_error(parse_gen_rule_map, "MAPHmlphg/5x", ISOTROPIC_VON_NEUMANN) is ParseErrorKind.EXTRA_JUNK

    def test_overflow(self):
        """Test a number of states above 2**32 - 1."""
        error = map_error(parse_gen_rule_map, "MAPHmlphg/4294967296", ISOTROPIC_VON_NEUMANN)
        assert error is ParseErrorKind.GEN_OVERFLOW


class TestToStringMap:
    """Test cases for encoding MAP strings."""

    def test_conway(self):
        """Test totalistic rules are lifted before encoding."""
        assert to_string_map(parse_rule("B3/S23")) == CONWAY_MAP

    def test_von_neumann(self):
        """Test the encoding has no padding."""
        assert to_string_map(parse_rule("B2/S013V", VON_NEUMANN)) == "MAPHmlphg"

    @pytest.mark.parametrize(
        "text,neighborhood",
        [("B2-a/S12", ISOTROPIC_LIFE), ("B2o3p/S2-m4H", ISOTROPIC_HEX), ("B2/S34H", HEX), ("B36/S23", LIFELIKE)],
    )
    def test_round_trip(self, text, neighborhood):
        """Test decoding an encoded rule gives the raw rule back."""
        rule = parse_rule(text, neighborhood)
        assert parse_rule_map(to_string_map(rule), neighborhood) == rule.lift()

    def test_generations(self):
        """Test the number of states is appended unless it is 2."""
        rule = parse_rule("B2/S013V", VON_NEUMANN)
        assert to_string_gen_map(GenRuleData(rule, 2)) == "MAPHmlphg"
        assert to_string_gen_map(GenRuleData(rule, 5)) == "MAPHmlphg/5"
