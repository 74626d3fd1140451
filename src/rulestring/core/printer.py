"""Writing rules in the textual notations."""

from typing import Tuple

from .codec import NeighborhoodCodec, Side
from .rule_data import GenRuleData, RuleData


def _parts(rule: RuleData) -> Tuple[str, str]:
    codec = NeighborhoodCodec.for_neighborhood(rule.neighborhood)
    return codec.write(rule, Side.BIRTH), codec.write(rule, Side.SURVIVAL)


def _suffix(rule: RuleData, upper: bool = True) -> str:
    suffix = rule.neighborhood.suffix or ""
    return suffix.upper() if upper else suffix.lower()


def to_string_bs(rule: RuleData) -> str:
    """B/S notation, e.g. ``B3/S23``.

    Raises:
        ConvertRuleError: If a non-totalistic rule is not isotropic
    """
    b, s = _parts(rule)
    return f"B{b}/S{s}{_suffix(rule)}"


def to_string_sb(rule: RuleData) -> str:
    """S/B notation, e.g. ``23/3``."""
    b, s = _parts(rule)
    return f"{s}/{b}{_suffix(rule)}"


def to_string_catagolue(rule: RuleData) -> str:
    """Catagolue's notation, e.g. ``b3s23``."""
    b, s = _parts(rule)
    return f"b{b}s{s}{_suffix(rule, upper=False)}"


def to_string_bsg(rule: GenRuleData) -> str:
    """B/S/G notation, e.g. ``B357/S3457/G5``."""
    b, s = _parts(rule.rule)
    return f"B{b}/S{s}/G{rule.gen}{_suffix(rule.rule)}"


def to_string_sbg(rule: GenRuleData) -> str:
    """Golly's Generations notation, e.g. ``3457/357/5``."""
    b, s = _parts(rule.rule)
    return f"{s}/{b}/{rule.gen}{_suffix(rule.rule)}"


def to_string_catagolue_gen(rule: GenRuleData) -> str:
    """Catagolue's Generations notation, e.g. ``g5b357s3457``."""
    b, s = _parts(rule.rule)
    return f"g{rule.gen}b{b}s{s}{_suffix(rule.rule, upper=False)}"
