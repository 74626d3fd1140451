"""MAP notation: base64 serialization of the full rule bitset.

A MAP string holds one bit for every state of the neighborhood including the
cell itself, read most significant bit first. For the Moore neighborhood
this is ``2 ** 9 = 512`` bits, so B3/S23 is::

    MAPARYXfhZofugWaH7oaIDogBZofuhogOiAaIDogIAAgAAWaH7oaIDogGiA6ICAAIAAaIDogIAAgACAAIAAAAAAAA

Inside a MAP index the bit of the center cell selects birth (clear) or
survival (set); the bits above it, shifted down by one, and the bits below
it form the raw neighbor configuration.
"""

import base64
import binascii
import logging
from typing import Dict

import numpy as np

from .codec import CharCursor, read_number
from .errors import ParseErrorKind, ParseRuleError
from .neighborhood import ISOTROPIC_LIFE, Neighborhood
from .rule_data import GenRuleData, RuleData

logger = logging.getLogger(__name__)

MAP_PREFIX = "MAP"


def _layout(neighbor_count: int) -> np.ndarray:
    """RuleData index of every MAP bit position."""
    half = neighbor_count // 2
    center = 1 << half
    right = center - 1
    left = right << (half + 1)

    k = np.arange(2 << neighbor_count, dtype=np.int64)
    raw = ((k & left) >> 1) | (k & right)
    survival = (k & center) != 0
    return raw + survival.astype(np.int64) * (1 << neighbor_count)


_LAYOUTS: Dict[int, np.ndarray] = {n: _layout(n) for n in (4, 6, 8)}


def _decode_payload(payload: str, neighborhood: Neighborhood, position: int) -> np.ndarray:
    """Decode a base64 payload into a RuleData bit vector.

    Padding is optional. Payloads whose unused trailing bits are not zero
    are rejected, so every rule has exactly one unpadded encoding.
    """
    try:
        encoded = payload.encode("ascii")
    except UnicodeEncodeError:
        raise ParseRuleError(ParseErrorKind.BASE64_ERROR, position=position) from None

    stripped = encoded.rstrip(b"=")
    try:
        decoded = base64.b64decode(stripped + b"=" * (-len(stripped) % 4), validate=True)
    except binascii.Error:
        raise ParseRuleError(ParseErrorKind.BASE64_ERROR, position=position) from None
    if base64.b64encode(decoded).rstrip(b"=") != stripped:
        raise ParseRuleError(ParseErrorKind.BASE64_ERROR, position=position)

    n = neighborhood.neighbor_count
    if len(decoded) * 8 != 2 << n:
        raise ParseRuleError(ParseErrorKind.INVALID_LENGTH, position=position)

    bits = np.unpackbits(np.frombuffer(decoded, dtype=np.uint8)).astype(bool)
    data = np.zeros(2 << n, dtype=bool)
    data[_LAYOUTS[n]] = bits
    logger.debug("Decoded %d MAP bytes for %s", len(decoded), neighborhood.name)
    return data


def parse_rule_map(text: str, neighborhood: Neighborhood = ISOTROPIC_LIFE) -> RuleData:
    """Parse a MAP string.

    Args:
        text: Rule string starting with 'MAP'
        neighborhood: Neighborhood whose neighbors the MAP covers; totalistic
            neighborhoods are replaced by their non-totalistic variant

    Returns:
        RuleData over raw neighbor configurations

    Raises:
        ParseRuleError: NOT_MAP_RULE, BASE64_ERROR or INVALID_LENGTH
    """
    nbhd = neighborhood.raw
    if not text.startswith(MAP_PREFIX):
        raise ParseRuleError(ParseErrorKind.NOT_MAP_RULE, position=0)
    return RuleData(nbhd, _decode_payload(text[len(MAP_PREFIX) :], nbhd, len(MAP_PREFIX)))


def parse_gen_rule_map(text: str, neighborhood: Neighborhood = ISOTROPIC_LIFE) -> GenRuleData:
    """Parse a MAP string with an optional ``/<states>`` suffix.

    Since '/' is also a base64 character, the last '/' only separates the
    number of states when the characters before it are enough to hold the
    whole payload.

    Args:
        text: Rule string such as 'MAP...' or 'MAP.../5'
        neighborhood: Neighborhood whose neighbors the MAP covers

    Returns:
        GenRuleData over raw neighbor configurations; 2 states if omitted

    Raises:
        ParseRuleError: On a malformed payload or number of states
    """
    nbhd = neighborhood.raw
    if not text.startswith(MAP_PREFIX):
        raise ParseRuleError(ParseErrorKind.NOT_MAP_RULE, position=0)

    gen = 2
    end = len(text)
    slash = text.rfind("/")
    if slash >= 0 and (slash - len(MAP_PREFIX)) * 6 >= 2 << nbhd.neighbor_count:
        end = slash
        cursor = CharCursor(text, slash + 1)
        if not cursor.at_end:
            gen = read_number(cursor)
            if not cursor.at_end:
                raise ParseRuleError(ParseErrorKind.EXTRA_JUNK, position=cursor.position)

    data = _decode_payload(text[len(MAP_PREFIX) : end], nbhd, len(MAP_PREFIX))
    if gen < 2:
        raise ParseRuleError(ParseErrorKind.GEN_LESS_THAN_2, position=end + 1)
    return GenRuleData(RuleData(nbhd, data), gen)


def to_string_map(rule: RuleData) -> str:
    """Encode a rule as an unpadded MAP string.

    Totalistic rules are lifted to raw neighbor configurations first.
    """
    data = rule.lift()
    bits = data.bits[_LAYOUTS[data.neighborhood.neighbor_count]]
    payload = base64.b64encode(np.packbits(bits).tobytes()).decode("ascii")
    return MAP_PREFIX + payload.rstrip("=")


def to_string_gen_map(rule: GenRuleData) -> str:
    """Encode a Generations rule as a MAP string, adding ``/<states>`` unless 2."""
    string = to_string_map(rule.rule)
    if rule.gen != 2:
        string += f"/{rule.gen}"
    return string
