"""Command-line interface for inspecting and converting rule strings."""

import argparse
import logging
import sys
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple, Union

from ..core.errors import ConvertRuleError, ParseRuleError
from ..core.map_codec import to_string_gen_map, to_string_map
from ..core.neighborhood import NEIGHBORHOODS, get_neighborhood
from ..core.parser import detect_rule, parse_gen_rule, parse_rule
from ..core.printer import (
    to_string_bs,
    to_string_bsg,
    to_string_catagolue,
    to_string_catagolue_gen,
    to_string_sb,
    to_string_sbg,
)
from ..core.rule_data import GenRuleData, RuleData

logger = logging.getLogger(__name__)

AnyRule = Union[RuleData, GenRuleData]

FORMATS = ("bs", "sb", "catagolue", "map")

# Writers per format: (two-state, Generations)
WRITERS: Dict[str, Tuple[Callable[[RuleData], str], Callable[[GenRuleData], str]]] = {
    "bs": (to_string_bs, to_string_bsg),
    "sb": (to_string_sb, to_string_sbg),
    "catagolue": (to_string_catagolue, to_string_catagolue_gen),
    "map": (to_string_map, to_string_gen_map),
}


class CLIRuleString:
    """Command-line interface for parsing and re-encoding rule strings."""

    def parse(self, text: str, neighborhood: str = "auto", generations: bool = False) -> AnyRule:
        """Parse a rule string.

        Args:
            text: Rule string
            neighborhood: Neighborhood name, or 'auto' to detect it
            generations: Parse as a Generations rule

        Returns:
            RuleData, or GenRuleData when generations is set

        Raises:
            ParseRuleError: If the rule string is invalid
            ValueError: If the neighborhood name is unknown
        """
        if neighborhood == "auto":
            return detect_rule(text, generations=generations)

        nbhd = get_neighborhood(neighborhood)
        if generations:
            return parse_gen_rule(text, nbhd)
        return parse_rule(text, nbhd)

    def convert(self, rule: AnyRule, fmt: str) -> str:
        """Encode a rule in one notation.

        Args:
            rule: Parsed rule
            fmt: One of FORMATS

        Returns:
            Rule string

        Raises:
            ConvertRuleError: If the rule cannot be written in this notation
        """
        plain, gen = WRITERS[fmt]
        if isinstance(rule, GenRuleData):
            return gen(rule)
        return plain(rule)

    def list_neighborhoods(self) -> None:
        """List the supported neighborhoods."""
        print("Available neighborhoods:")
        for name, nbhd in NEIGHBORHOODS.items():
            suffix = f", suffix '{nbhd.suffix}'" if nbhd.suffix else ""
            print(f"  {name}: {nbhd.description}, {nbhd.neighbor_count} neighbors{suffix}")


def format_codes(codes: Iterable[int], limit: int = 16) -> str:
    """Format neighbor-state codes for display.

    Args:
        codes: Codes in ascending order
        limit: Maximum number of codes to show

    Returns:
        Comma-separated codes, shortened with the total when over the limit
    """
    codes = list(codes)
    if not codes:
        return "(none)"
    shown = ", ".join(str(code) for code in codes[:limit])
    if len(codes) > limit:
        return f"{shown}, ... ({len(codes)} total)"
    return shown


def print_results(cli: CLIRuleString, rule: AnyRule, formats: Sequence[str], verbose: bool) -> int:
    """Print a parsed rule and its encodings.

    Args:
        cli: CLI instance used for conversion
        rule: Parsed rule
        formats: Notations to print
        verbose: Whether to list every code instead of a shortened list

    Returns:
        Exit code (0 for success, 1 if a requested notation failed)
    """
    data = rule.rule if isinstance(rule, GenRuleData) else rule
    limit = data.size if verbose else 16

    print(f"Neighborhood: {data.neighborhood.description} ({data.neighborhood.name})")
    print(f"Birth: {format_codes(data.iter_b(), limit)}")
    print(f"Survival: {format_codes(data.iter_s(), limit)}")
    if isinstance(rule, GenRuleData):
        print(f"States: {rule.gen}")

    status = 0
    for fmt in formats:
        try:
            print(f"{fmt}: {cli.convert(rule, fmt)}")
        except ConvertRuleError as e:
            if len(formats) == 1:
                print(f"Error: {e}")
                status = 1
            else:
                print(f"{fmt}: ({e})")
    return status


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        description="Parse cellular automaton rule strings and convert between notations",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Show Conway's Life in every notation
  rulestring B3/S23

  # Hexagonal rule in Catagolue notation
  rulestring B2/S34H --format catagolue

  # Isotropic non-totalistic rule as MAP string
  rulestring B2-a/S12 -n isotropic -f map

  # Generations rule in Golly notation
  rulestring 3457/357/5 --generations

  # List available neighborhoods
  rulestring --list-neighborhoods
        """,
    )

    parser.add_argument("rule", nargs="?", help="Rule string to parse")

    parser.add_argument(
        "-n",
        "--neighborhood",
        default="auto",
        choices=["auto"] + list(NEIGHBORHOODS),
        help="Neighborhood of the rule (default: auto)",
    )

    parser.add_argument(
        "-g",
        "--generations",
        action="store_true",
        help="Parse as a Generations rule",
    )

    parser.add_argument(
        "-f",
        "--format",
        default="all",
        choices=list(FORMATS) + ["all"],
        help="Notation to print (default: all)",
    )

    parser.add_argument(
        "--list-neighborhoods",
        action="store_true",
        help="List available neighborhoods and exit",
    )

    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    return parser


def validate_args(args: argparse.Namespace) -> bool:
    """Validate command-line arguments.

    Args:
        args: Parsed arguments

    Returns:
        True if arguments are valid
    """
    errors = []

    if not args.rule:
        errors.append("A rule string is required")
    elif args.rule != args.rule.strip():
        errors.append("Rule string must not have surrounding whitespace")

    if errors:
        print("Error: Invalid arguments:")
        for error in errors:
            print(f"  - {error}")
        return False

    return True


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI interface.

    Args:
        argv: Command-line arguments, sys.argv[1:] when None

    Returns:
        Exit code (0 for success, 1 for error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    cli = CLIRuleString()

    if args.list_neighborhoods:
        cli.list_neighborhoods()
        return 0

    if not validate_args(args):
        return 1

    formats = FORMATS if args.format == "all" else (args.format,)

    try:
        rule = cli.parse(args.rule, args.neighborhood, args.generations)
    except ParseRuleError as e:
        logger.debug("Failed to parse %r: %r", args.rule, e)
        print(f"Error: {e}")
        return 1

    return print_results(cli, rule, formats, args.verbose)


if __name__ == "__main__":
    sys.exit(main())
