#!/usr/bin/env python3
"""
Example usage of the rulestring package.
"""

from rulestring import ISOTROPIC_LIFE, detect_rule, parse_gen_rule, parse_rule
from rulestring.core import to_string_catagolue, to_string_map, to_string_sb


def main():
    """Demonstrate programmatic usage of the rulestring package."""
    # Parse Conway's Life and write it in other notations
    life = parse_rule("B3/S23")
    print(f"Birth: {sorted(life.birth)}, survival: {sorted(life.survival)}")
    print(f"S/B notation: {to_string_sb(life)}")
    print(f"Catagolue: {to_string_catagolue(life)}")
    print(f"MAP: {to_string_map(life)}")
    print()

    # Isotropic non-totalistic rules name neighbor configurations by letter
    tlife = parse_rule("B3/S2-i34q", ISOTROPIC_LIFE)
    print(f"{tlife}: {len(tlife.birth)} birth and {len(tlife.survival)} survival configurations")
    print()

    # Generations rules carry a number of states
    star_wars = parse_gen_rule("g4b2s345")
    print(f"Star Wars: {star_wars} with {star_wars.gen} states")
    print()

    # Let the parser find the neighborhood
    for text in ["B2/S34H", "B2/S013V", "B2-a/S12", "MAPHmlphg"]:
        rule = detect_rule(text)
        print(f"{text}: {rule.neighborhood}")

    # Build your own type from the parsed sets
    as_tuple = parse_rule("23/36", from_bs=lambda b, s: (sorted(b), sorted(s)))
    print(f"HighLife as tuple: {as_tuple}")


if __name__ == "__main__":
    main()
