"""
RSLP (Removedor de Sufixos da Língua Portuguesa) stemming engine.

Components:
- model: immutable Rule and Stage value types
- grammar: single-line record parsing (stage headers, rules)
- parser: rule file → ordered tuple of Stage
- stemmer: RSLPStemmer applying a rule table to one word

Usage:
    from src.rslp import RSLPStemmer, load_rules

    stemmer = RSLPStemmer(load_rules("assets/portuguese.rslp"))
    stemmer.stem("caminhando")  # 'caminh'

The rule table is parsed once and shared; stem() is pure and thread-safe.
"""

from .model import Rule, Stage
from .grammar import RuleFormatError
from .parser import parse_rules, load_rules
from .stemmer import RSLPStemmer

__all__ = [
    "Rule",
    "Stage",
    "RuleFormatError",
    "parse_rules",
    "load_rules",
    "RSLPStemmer",
]
