"""
RSLP stemmer for Portuguese.

Applies a parsed rule table to one word:
1. Lowercase
2. Drop everything except letters (ASCII + Latin-1 accented) and digits
3. Run each stage in order (at most one rule per stage)
4. Remove accents once from the final stem

Examples (bundled assets/portuguese.rslp):
- "casas" → "cas"
- "caminhando" → "caminh"
- "livrinho" → "livr"
- "felicidade" → "felic"
"""

import re
import unicodedata
from typing import Iterable, Tuple

from .model import Rule, Stage

_NON_WORD_CHARS = re.compile(r"[^a-zA-ZÀ-ÖØ-öø-ÿ0-9]")


def normalize(word: str) -> str:
    """Lowercase and strip punctuation/symbols (digits are kept)"""
    return _NON_WORD_CHARS.sub("", word.lower()).strip()


def strip_accents(word: str) -> str:
    """
    Remove diacritics, keeping the base letter.

    Examples:
        >>> strip_accents("coração")
        'coracao'
    """
    decomposed = unicodedata.normalize("NFD", word)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return unicodedata.normalize("NFC", stripped)


def can_apply_rule(word: str, rule: Rule, whole_word_exceptions: bool = False) -> bool:
    if not word.endswith(rule.suffix):
        return False

    if rule.exceptions:
        if whole_word_exceptions:
            if word in rule.exceptions:
                return False
        elif any(word.endswith(exception) for exception in rule.exceptions):
            return False

    return len(word) - len(rule.suffix) >= rule.min_stem_length


def apply_rule(word: str, rule: Rule) -> str:
    # str.endswith("") is True but word[:-0] would be empty
    stem = word[:len(word) - len(rule.suffix)]
    return stem + rule.replacement


class RSLPStemmer:
    """
    Stemmer bound to one immutable rule table.

    Holds no mutable state, so one instance can serve concurrent callers.
    """

    def __init__(self, stages: Iterable[Stage], remove_accents: bool = True):
        """
        Args:
            stages: Rule table (usually from parse_rules/load_rules)
            remove_accents: Strip diacritics from the final stem
        """
        self._stages: Tuple[Stage, ...] = tuple(stages)
        self._remove_accents = remove_accents

    @property
    def stages(self) -> Tuple[Stage, ...]:
        return self._stages

    def stem(self, word):
        """
        Stem a single word.

        Args:
            word: Word to stem. Empty strings, None and non-string values
                are returned unchanged.

        Returns:
            Stemmed word
        """
        if not word or not isinstance(word, str):
            return word

        stemmed = normalize(word)

        for stage in self._stages:
            stemmed = self._apply_stage(stemmed, stage)

        if self._remove_accents:
            stemmed = strip_accents(stemmed)

        return stemmed

    @staticmethod
    def _apply_stage(word: str, stage: Stage) -> str:
        if len(word) < stage.min_word_length:
            return word

        # Cheap pre-filter, rules still check their own suffix
        if stage.conditions and not any(word.endswith(c) for c in stage.conditions):
            return word

        for rule in stage.rules:
            if can_apply_rule(word, rule, stage.whole_word_exceptions):
                return apply_rule(word, rule)

        return word
