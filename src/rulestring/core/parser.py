"""Parsing rule strings in B/S, S/B, Generations and MAP notations.

Supported notations, with ``<tok>`` the token run of one side:

    B<tok>/S<tok>                   B3/S23, B3S23, b3s23
    <tok>/<tok>                     23/3
    B<tok>/S<tok>/[C|G]<states>     B357/S3457/C5, B3S23G3
    [C|G]<states>/B<tok>/S<tok>     G5/B357/S3457
    <tok>/<tok>/<states>            3457/357/5 (Golly)
    g<states>b<tok>s<tok>           g5b357s3457 (Catagolue)
    MAP<base64>[/<states>]          non-totalistic neighborhoods only

Hexagonal and von Neumann rules end with an 'H' or 'V' suffix.
"""

import logging
from typing import Callable, List, Optional, Set, Tuple, TypeVar, Union

import numpy as np

from .codec import CharCursor, NeighborhoodCodec, Side, read_number
from .errors import ParseErrorKind, ParseRuleError
from .map_codec import MAP_PREFIX, parse_gen_rule_map, parse_rule_map
from .neighborhood import (
    HEX,
    ISOTROPIC_HEX,
    ISOTROPIC_LIFE,
    ISOTROPIC_VON_NEUMANN,
    LIFELIKE,
    VON_NEUMANN,
    Neighborhood,
)
from .rule_data import GenRuleData, RuleData

logger = logging.getLogger(__name__)

T = TypeVar("T")

GEN_MARKERS = ("C", "c", "G", "g")

# Order in which detect_rule tries neighborhoods
DETECTION_ORDER = (LIFELIKE, HEX, VON_NEUMANN, ISOTROPIC_LIFE, ISOTROPIC_HEX, ISOTROPIC_VON_NEUMANN)

# Other neighborhoods the isotropic life parser accepts, in the order tried
MOORE_FALLBACKS = (ISOTROPIC_HEX, ISOTROPIC_VON_NEUMANN)


class NotationParser:
    """Parser for the rule strings of one neighborhood."""

    def __init__(self, neighborhood: Neighborhood) -> None:
        """Initialize the parser.

        Args:
            neighborhood: Neighborhood the rule strings describe
        """
        self.neighborhood = neighborhood
        self.codec = NeighborhoodCodec.for_neighborhood(neighborhood)

    def parse(self, text: str) -> RuleData:
        """Parse a two-state rule in B/S or S/B notation.

        Args:
            text: Rule string

        Returns:
            Parsed RuleData

        Raises:
            ParseRuleError: At the first syntax error
        """
        cursor = CharCursor(text)
        data = self._new_data()

        if cursor.take_if("B", "b"):
            self._read_bs(cursor, data)
        else:
            self._read_sb(cursor, data)

        self._read_suffix(cursor)
        self._expect_end(cursor)
        return RuleData(self.neighborhood, data)

    def parse_gen(self, text: str) -> GenRuleData:
        """Parse a Generations rule in any of the B/S/G notations.

        A rule without a number of states has 2 states.

        Args:
            text: Rule string

        Returns:
            Parsed GenRuleData

        Raises:
            ParseRuleError: At the first syntax error
        """
        cursor = CharCursor(text)
        data = self._new_data()
        gen = 2

        if cursor.take_if("B", "b"):
            self._read_bs(cursor, data)
            if cursor.take_if("/"):
                cursor.take_if(*GEN_MARKERS)
                gen = read_number(cursor)
            elif cursor.take_if(*GEN_MARKERS):
                gen = read_number(cursor)
        elif cursor.take_if(*GEN_MARKERS):
            gen = read_number(cursor)
            cursor.take_if("/")
            self._expect_letter(cursor, "B")
            self.codec.read(cursor, data, Side.BIRTH)
            cursor.take_if("/")
            self._expect_letter(cursor, "S")
            self.codec.read(cursor, data, Side.SURVIVAL)
        else:
            self._read_sb(cursor, data)
            if cursor.take_if("/"):
                gen = read_number(cursor)

        self._read_suffix(cursor)
        if gen < 2:
            raise ParseRuleError(ParseErrorKind.GEN_LESS_THAN_2)
        self._expect_end(cursor)
        return GenRuleData(RuleData(self.neighborhood, data), gen)

    def _new_data(self) -> np.ndarray:
        return np.zeros(2 * self.neighborhood.size, dtype=bool)

    def _read_bs(self, cursor: CharCursor, data: np.ndarray) -> None:
        self.codec.read(cursor, data, Side.BIRTH)
        cursor.take_if("/")
        self._expect_letter(cursor, "S")
        self.codec.read(cursor, data, Side.SURVIVAL)

    def _read_sb(self, cursor: CharCursor, data: np.ndarray) -> None:
        self.codec.read(cursor, data, Side.SURVIVAL)
        position = cursor.position
        if cursor.take() != "/":
            raise ParseRuleError.missing("/", position)
        self.codec.read(cursor, data, Side.BIRTH)

    @staticmethod
    def _expect_letter(cursor: CharCursor, letter: str) -> None:
        position = cursor.position
        char = cursor.take()
        if char is None or char.upper() != letter:
            raise ParseRuleError.missing(letter, position)

    def _read_suffix(self, cursor: CharCursor) -> None:
        suffix = self.neighborhood.suffix
        if suffix is None:
            return
        position = cursor.position
        char = cursor.take()
        if char is None or char.upper() != suffix.upper():
            raise ParseRuleError.missing(suffix, position)

    @staticmethod
    def _expect_end(cursor: CharCursor) -> None:
        if not cursor.at_end:
            raise ParseRuleError(ParseErrorKind.EXTRA_JUNK, position=cursor.position)


def _is_map(text: str, neighborhood: Neighborhood) -> bool:
    return not neighborhood.is_totalistic and text.startswith(MAP_PREFIX)


def _parse(
    text: str, neighborhood: Neighborhood, generations: bool, project: bool = True
) -> Union[RuleData, GenRuleData]:
    """Parse with one neighborhood.

    With ``project`` set, rules the isotropic life parser rejects are also
    read as isotropic hex and von Neumann rules and projected onto Moore
    neighbors. The error of the isotropic life attempt is kept when all fail.
    """
    if _is_map(text, neighborhood):
        if generations:
            return parse_gen_rule_map(text, neighborhood)
        return parse_rule_map(text, neighborhood)

    def read(nbhd: Neighborhood) -> Union[RuleData, GenRuleData]:
        parser = NotationParser(nbhd)
        return parser.parse_gen(text) if generations else parser.parse(text)

    try:
        return read(neighborhood)
    except ParseRuleError as e:
        if not project or neighborhood is not ISOTROPIC_LIFE:
            raise
        error = e

    for fallback in MOORE_FALLBACKS:
        try:
            rule = read(fallback)
        except ParseRuleError:
            continue
        logger.debug("Projecting %s rule %r onto Moore neighbors", fallback.name, text)
        return rule.to_moore()
    raise error


def parse_rule(
    text: str,
    neighborhood: Neighborhood = LIFELIKE,
    from_bs: Optional[Callable[[Set[int], Set[int]], T]] = None,
) -> Union[RuleData, T]:
    """Parse a two-state rule string.

    Non-totalistic neighborhoods also accept MAP strings. The isotropic life
    neighborhood also accepts isotropic hex and von Neumann rules, projected
    onto Moore neighbors with RuleData.to_moore. Generations rule strings such
    as 'g4b2s345' are rejected here; use parse_gen_rule for them.

    Args:
        text: Rule string, e.g. 'B3/S23'
        neighborhood: Neighborhood the rule is for
        from_bs: Optional constructor called once with the birth and
            survival codes after a successful parse

    Returns:
        The result of ``from_bs``, or the RuleData if it is not given

    Raises:
        ParseRuleError: If the rule string is invalid
    """
    rule = _parse(text, neighborhood, generations=False)
    logger.debug("Parsed %r as %s rule", text, neighborhood.name)

    if from_bs is None:
        return rule
    return from_bs(set(rule.iter_b()), set(rule.iter_s()))


def parse_gen_rule(
    text: str,
    neighborhood: Neighborhood = LIFELIKE,
    from_bsg: Optional[Callable[[Set[int], Set[int], int], T]] = None,
) -> Union[GenRuleData, T]:
    """Parse a Generations rule string.

    Two-state rule strings are accepted and give 2 states. Non-totalistic
    neighborhoods accept the same extra forms as parse_rule.

    Args:
        text: Rule string, e.g. '3457/357/5' or 'g5b357s3457'
        neighborhood: Neighborhood the rule is for
        from_bsg: Optional constructor called once with the birth codes,
            survival codes and number of states after a successful parse

    Returns:
        The result of ``from_bsg``, or the GenRuleData if it is not given

    Raises:
        ParseRuleError: If the rule string is invalid
    """
    rule = _parse(text, neighborhood, generations=True)
    logger.debug("Parsed %r as %s Generations rule with %d states", text, neighborhood.name, rule.gen)

    if from_bsg is None:
        return rule
    return from_bsg(set(rule.rule.iter_b()), set(rule.rule.iter_s()), rule.gen)


def detect_rule(text: str, generations: bool = False) -> Union[RuleData, GenRuleData]:
    """Parse a rule string without knowing its neighborhood.

    Neighborhoods are tried in DETECTION_ORDER, so totalistic readings win
    over non-totalistic ones. Rules are kept in the neighborhood that accepts
    them and are never projected onto Moore neighbors.

    Args:
        text: Rule string
        generations: Parse as a Generations rule

    Returns:
        RuleData or GenRuleData of the first neighborhood that accepts it

    Raises:
        ParseRuleError: The error of the first attempt, or for MAP strings
            the error of the first MAP attempt
    """
    failures: List[Tuple[Neighborhood, ParseRuleError]] = []

    for neighborhood in DETECTION_ORDER:
        try:
            return _parse(text, neighborhood, generations, project=False)
        except ParseRuleError as e:
            logger.debug("Not a %s rule: %s", neighborhood.name, e)
            failures.append((neighborhood, e))

    if text.startswith(MAP_PREFIX):
        raise next(e for nbhd, e in failures if not nbhd.is_totalistic)
    raise failures[0][1]
