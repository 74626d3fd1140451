"""Errors raised when parsing or converting rule strings."""

from enum import Enum
from typing import Optional


class ParseErrorKind(Enum):
    """Reasons a rule string can be rejected."""

    MISSING = "missing"
    MISSING_NUMBER = "missing_number"
    UNEXPECTED = "unexpected"
    EXTRA_JUNK = "extra_junk"
    GEN_LESS_THAN_2 = "gen_less_than_2"
    GEN_OVERFLOW = "gen_overflow"
    NOT_MAP_RULE = "not_map_rule"
    BASE64_ERROR = "base64_error"
    INVALID_LENGTH = "invalid_length"


_PARSE_MESSAGES = {
    ParseErrorKind.MISSING: "Missing expected {char!r}",
    ParseErrorKind.MISSING_NUMBER: "Missing expected number",
    ParseErrorKind.UNEXPECTED: "Unexpected {char!r}",
    ParseErrorKind.EXTRA_JUNK: "Extra unparsed junk at the end of the rule string",
    ParseErrorKind.GEN_LESS_THAN_2: "Number of states less than 2 in Generations rule",
    ParseErrorKind.GEN_OVERFLOW: "Generations number overflow for Generations rule",
    ParseErrorKind.NOT_MAP_RULE: "Not a MAP rule",
    ParseErrorKind.BASE64_ERROR: "Invalid Base64 encoding for MAP rule",
    ParseErrorKind.INVALID_LENGTH: "Invalid length for MAP rule",
}


class ParseRuleError(ValueError):
    """A rule string could not be parsed.

    Two errors compare equal when they have the same kind and character;
    the position is informational only.

    Attributes:
        kind: What went wrong
        char: Expected character for MISSING, offending one for UNEXPECTED
        position: Index in the input where the error was detected
    """

    def __init__(
        self, kind: ParseErrorKind, char: Optional[str] = None, position: Optional[int] = None
    ) -> None:
        self.kind = kind
        self.char = char
        self.position = position
        message = _PARSE_MESSAGES[kind].format(char=char)
        if position is not None:
            message = f"{message} (at position {position})"
        super().__init__(message)

    @classmethod
    def missing(cls, char: str, position: Optional[int] = None) -> "ParseRuleError":
        return cls(ParseErrorKind.MISSING, char, position)

    @classmethod
    def unexpected(cls, char: str, position: Optional[int] = None) -> "ParseRuleError":
        return cls(ParseErrorKind.UNEXPECTED, char, position)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ParseRuleError):
            return NotImplemented
        return self.kind == other.kind and self.char == other.char

    def __hash__(self) -> int:
        return hash((self.kind, self.char))

    def __repr__(self) -> str:
        if self.char is None:
            return f"ParseRuleError({self.kind.name})"
        return f"ParseRuleError({self.kind.name}, {self.char!r})"


class ConvertErrorKind(Enum):
    """Reasons a rule cannot be converted to another form."""

    GEN_GREATER_THAN_2 = "gen_greater_than_2"
    NOT_ISOTROPIC = "not_isotropic"


_CONVERT_MESSAGES = {
    ConvertErrorKind.GEN_GREATER_THAN_2: "Number of states greater than 2 in Generations rule",
    ConvertErrorKind.NOT_ISOTROPIC: "Rule is not a union of symmetry classes",
}


class ConvertRuleError(ValueError):
    """A rule cannot be converted to the requested form."""

    def __init__(self, kind: ConvertErrorKind) -> None:
        self.kind = kind
        super().__init__(_CONVERT_MESSAGES[kind])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConvertRuleError):
            return NotImplemented
        return self.kind == other.kind

    def __hash__(self) -> int:
        return hash(self.kind)
