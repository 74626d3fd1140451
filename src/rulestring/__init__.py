"""Parsing and encoding of cellular automaton rule strings."""

__version__ = "0.1.0"

from .core.errors import ConvertRuleError, ParseRuleError
from .core.neighborhood import HEX, ISOTROPIC_HEX, ISOTROPIC_LIFE, ISOTROPIC_VON_NEUMANN, LIFELIKE, VON_NEUMANN
from .core.parser import detect_rule, parse_gen_rule, parse_rule
from .core.rule_data import GenRuleData, RuleData

__all__ = [
    "ConvertRuleError",
    "ParseRuleError",
    "HEX",
    "ISOTROPIC_HEX",
    "ISOTROPIC_LIFE",
    "ISOTROPIC_VON_NEUMANN",
    "LIFELIKE",
    "VON_NEUMANN",
    "detect_rule",
    "parse_gen_rule",
    "parse_rule",
    "GenRuleData",
    "RuleData",
]
