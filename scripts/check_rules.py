#!/usr/bin/env python3
"""
Validate an RSLP rule file and optionally stem sample words with it.

Prints one line per stage (name, guards, rule count). Exits with status 1
and the offending line on stderr if the file does not parse.
"""

import sys
from pathlib import Path

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from src.rslp import RSLPStemmer, RuleFormatError, load_rules

DEFAULT_RULES = project_root / "assets" / "portuguese.rslp"


def describe_stages(stages) -> None:
    """Print a summary table of parsed stages."""
    print("=" * 80)
    print(f"{'Stage':<16} {'Min len':>7} {'Whole-word':>10} {'Rules':>6}  Conditions")
    print("-" * 80)
    for stage in stages:
        conditions = ", ".join(stage.conditions) or "-"
        print(
            f"{stage.name:<16} {stage.min_word_length:>7} "
            f"{'yes' if stage.whole_word_exceptions else 'no':>10} "
            f"{stage.rule_count:>6}  {conditions}"
        )
    print("=" * 80)


def main(argv=None) -> int:
    """Main entry point."""
    args = sys.argv[1:] if argv is None else argv

    if args and args[0] in ("-h", "--help"):
        print("Usage:")
        print("  python scripts/check_rules.py [RULES_FILE] [WORD ...]")
        print("\nExamples:")
        print("  python scripts/check_rules.py")
        print("  python scripts/check_rules.py assets/portuguese.rslp casas caminhando")
        return 0

    rules_file = Path(args[0]) if args else DEFAULT_RULES
    words = args[1:]

    try:
        stages = load_rules(rules_file)
    except (RuleFormatError, FileNotFoundError) as e:
        print(f"Error loading {rules_file}: {e}", file=sys.stderr)
        return 1

    describe_stages(stages)

    if words:
        stemmer = RSLPStemmer(stages)
        for word in words:
            print(f"  {word} → {stemmer.stem(word)}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
