"""Readers and writers for the birth or survival part of a rule string."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import List, Optional, Sequence

import numpy as np

from .errors import ConvertErrorKind, ConvertRuleError, ParseErrorKind, ParseRuleError
from .neighborhood import Neighborhood
from .rule_data import GEN_MAX, RuleData


class Side(Enum):
    """Which half of the rule data a token run describes."""

    BIRTH = "B"
    SURVIVAL = "S"


class CharCursor:
    """Peekable cursor over the characters of a rule string."""

    def __init__(self, text: str, start: int = 0) -> None:
        self.text = text
        self._pos = start

    @property
    def position(self) -> int:
        return self._pos

    @property
    def at_end(self) -> bool:
        return self._pos >= len(self.text)

    def peek(self) -> Optional[str]:
        """Next character without consuming it, None at the end."""
        if self._pos < len(self.text):
            return self.text[self._pos]
        return None

    def take(self) -> Optional[str]:
        """Consume and return the next character, None at the end."""
        char = self.peek()
        if char is not None:
            self._pos += 1
        return char

    def take_if(self, *chars: str) -> bool:
        """Consume the next character if it is one of ``chars``."""
        if self.peek() in chars:
            self._pos += 1
            return True
        return False


def digit_value(char: Optional[str], base: int) -> Optional[int]:
    """Value of an ASCII decimal digit below ``base``, None otherwise."""
    if char is None or not "0" <= char <= "9":
        return None
    value = ord(char) - ord("0")
    return value if value < base else None


def read_number(cursor: CharCursor) -> int:
    """Consume a decimal generation count.

    Raises:
        ParseRuleError: MISSING_NUMBER if no digit follows, GEN_OVERFLOW if
            the number does not fit in GEN_MAX
    """
    if digit_value(cursor.peek(), 10) is None:
        raise ParseRuleError(ParseErrorKind.MISSING_NUMBER, position=cursor.position)

    start = cursor.position
    number = 0
    while True:
        value = digit_value(cursor.peek(), 10)
        if value is None:
            return number
        cursor.take()
        number = number * 10 + value
        if number > GEN_MAX:
            raise ParseRuleError(ParseErrorKind.GEN_OVERFLOW, position=start)


class NeighborhoodCodec(ABC):
    """Reads and writes the token run of one side of a rule string."""

    def __init__(self, neighborhood: Neighborhood) -> None:
        self.neighborhood = neighborhood

    @staticmethod
    def for_neighborhood(neighborhood: Neighborhood) -> "NeighborhoodCodec":
        """Select the codec for a neighborhood."""
        if neighborhood.is_totalistic:
            return TotalisticCodec(neighborhood)
        return SymmetryCodec(neighborhood)

    def _offset(self, side: Side) -> int:
        return 0 if side is Side.BIRTH else self.neighborhood.size

    @abstractmethod
    def read(self, cursor: CharCursor, data: np.ndarray, side: Side) -> None:
        """Consume one token run and set the codes it names.

        Args:
            cursor: Input positioned at the start of the run
            data: Mutable bit vector of length ``2 * neighborhood.size``
            side: Half of ``data`` to fill

        Raises:
            ParseRuleError: If the run contains an unexpected character
        """

    @abstractmethod
    def write(self, rule: RuleData, side: Side) -> str:
        """Token run describing one side of a rule."""


class TotalisticCodec(NeighborhoodCodec):
    """Token runs of neighbor counts, one digit per count."""

    def read(self, cursor: CharCursor, data: np.ndarray, side: Side) -> None:
        offset = self._offset(side)
        base = self.neighborhood.base
        while True:
            value = digit_value(cursor.peek(), base)
            if value is None:
                return
            cursor.take()
            data[offset + value] = True

    def write(self, rule: RuleData, side: Side) -> str:
        codes = rule.iter_b() if side is Side.BIRTH else rule.iter_s()
        return "".join(str(code) for code in codes)


class SymmetryCodec(NeighborhoodCodec):
    """Token runs in isotropic non-totalistic notation, e.g. ``2-a3ce4``.

    Each count may be followed by class letters to include, or by ``-`` and
    class letters to exclude; a bare count stands for all its classes.
    """

    def __init__(self, neighborhood: Neighborhood) -> None:
        super().__init__(neighborhood)
        self.table = neighborhood.symmetry
        terminators = set("/BbSsCcGg")
        if neighborhood.suffix:
            terminators.update((neighborhood.suffix.upper(), neighborhood.suffix.lower()))
        self._terminators = frozenset(terminators)

    def read(self, cursor: CharCursor, data: np.ndarray, side: Side) -> None:
        offset = self._offset(side)
        table = self.table
        while True:
            char = cursor.peek()
            if char is None:
                return
            count = digit_value(char, table.max_count + 1)
            if count is None:
                if char in self._terminators:
                    return
                raise ParseRuleError.unexpected(char, cursor.position)
            cursor.take()

            if not table.has_letters(count):
                codes: Sequence[int] = table.codes(count)
            else:
                letters = table.letters(count)
                if cursor.take_if("-"):
                    named = self._read_letters(cursor, letters)
                    chosen = [letter for letter in letters if letter not in named]
                elif cursor.peek() in letters:
                    chosen = self._read_letters(cursor, letters)
                else:
                    chosen = letters
                codes = [code for letter in chosen for code in table.codes(count, letter)]

            data[offset + np.asarray(codes, dtype=np.int64)] = True

    @staticmethod
    def _read_letters(cursor: CharCursor, letters: List[str]) -> List[str]:
        named: List[str] = []
        while cursor.peek() in letters:
            letter = cursor.take()
            if letter not in named:
                named.append(letter)
        return named

    def write(self, rule: RuleData, side: Side) -> str:
        offset = self._offset(side)
        bits = rule.bits[offset : offset + rule.size]
        parts = []
        for count in range(self.table.max_count + 1):
            classes = self.table.classes(count)
            included = []
            for cls in classes:
                states = bits[list(cls.codes)]
                if states.all():
                    included.append(cls)
                elif states.any():
                    raise ConvertRuleError(ConvertErrorKind.NOT_ISOTROPIC)

            if not included:
                continue
            if len(included) == len(classes):
                parts.append(str(count))
                continue

            excluded = [cls for cls in classes if cls not in included]
            if len(excluded) < len(included):
                parts.append(f"{count}-" + "".join(cls.letter for cls in excluded))
            else:
                parts.append(f"{count}" + "".join(cls.letter for cls in included))
        return "".join(parts)
