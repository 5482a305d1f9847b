"""
Rule table value types.

A rule table is a tuple of Stage; each Stage holds a tuple of Rule.
Both are frozen so a parsed table can be shared by every stem() call.
"""

from dataclasses import dataclass, field
from typing import Tuple


@dataclass(frozen=True)
class Rule:
    """Single suffix transformation"""
    suffix: str                  # May be empty (catch-all)
    min_stem_length: int         # Minimum length left after removing suffix
    replacement: str = ""
    exceptions: Tuple[str, ...] = ()

    def __post_init__(self):
        if self.min_stem_length < 0:
            raise ValueError(f"min_stem_length must be >= 0, got {self.min_stem_length}")


@dataclass(frozen=True)
class Stage:
    """One phase of the algorithm (plural reduction, verb reduction, ...)"""
    name: str
    min_word_length: int
    whole_word_exceptions: bool = False  # Exceptions compared to the whole word, not as suffixes
    conditions: Tuple[str, ...] = ()     # Word must end with one of these for the stage to run
    rules: Tuple[Rule, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if self.min_word_length < 0:
            raise ValueError(f"min_word_length must be >= 0, got {self.min_word_length}")

    @property
    def rule_count(self) -> int:
        return len(self.rules)
