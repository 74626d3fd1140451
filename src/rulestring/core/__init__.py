"""Core rule string parsing and encoding."""

from .errors import ConvertErrorKind, ConvertRuleError, ParseErrorKind, ParseRuleError
from .neighborhood import (
    HEX,
    ISOTROPIC_HEX,
    ISOTROPIC_LIFE,
    ISOTROPIC_VON_NEUMANN,
    LIFELIKE,
    NEIGHBORHOODS,
    VON_NEUMANN,
    Neighborhood,
    NeighborhoodKind,
    get_neighborhood,
)
from .rule_data import GEN_MAX, GenRuleData, RuleData
from .symmetry import HEX_TABLE, MOORE_TABLE, VON_NEUMANN_TABLE, SymmetryClass, SymmetryTable
from .parser import NotationParser, detect_rule, parse_gen_rule, parse_rule
from .printer import (
    to_string_bs,
    to_string_bsg,
    to_string_catagolue,
    to_string_catagolue_gen,
    to_string_sb,
    to_string_sbg,
)
from .map_codec import parse_gen_rule_map, parse_rule_map, to_string_gen_map, to_string_map

__all__ = [
    "ConvertErrorKind",
    "ConvertRuleError",
    "ParseErrorKind",
    "ParseRuleError",
    "HEX",
    "ISOTROPIC_HEX",
    "ISOTROPIC_LIFE",
    "ISOTROPIC_VON_NEUMANN",
    "LIFELIKE",
    "NEIGHBORHOODS",
    "VON_NEUMANN",
    "Neighborhood",
    "NeighborhoodKind",
    "get_neighborhood",
    "GEN_MAX",
    "GenRuleData",
    "RuleData",
    "HEX_TABLE",
    "MOORE_TABLE",
    "VON_NEUMANN_TABLE",
    "SymmetryClass",
    "SymmetryTable",
    "NotationParser",
    "detect_rule",
    "parse_gen_rule",
    "parse_rule",
    "to_string_bs",
    "to_string_bsg",
    "to_string_catagolue",
    "to_string_catagolue_gen",
    "to_string_sb",
    "to_string_sbg",
    "parse_gen_rule_map",
    "parse_rule_map",
    "to_string_gen_map",
    "to_string_map",
]
