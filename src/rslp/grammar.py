"""
Record-level grammar of RSLP rule files.

Two record kinds, one per line:

    { "Plural", 3, 0, {"s"},                  <- stage header
    {"ns",1,"m"},                             <- rule
    {"ães",1,"ão",{"mães"}},                  <- rule with exceptions
    {"s",2,"",{"lápis","cais"}}};             <- last rule of the stage

Header fields: name, minimum word length, whole-word exception flag (1 = on),
list of condition suffixes. Rule fields: suffix, minimum stem length, optional
replacement, optional list of exceptions.

This module only turns single lines into values. Line ordering and stage
assembly live in parser.py.
"""

import re
from typing import NamedTuple, Optional, Tuple

from .model import Rule

# Ends the last rule line of a stage: {"s",2,"",{...}}};
STAGE_TERMINATOR = "};"

COMMENT_PREFIX = "#"

_HEADER_RE = re.compile(
    r'^\{\s*"([^"]+)"\s*,\s*([0-9]+)\s*,\s*([0-9]+)\s*,\s*([\{\[].*)$'
)
_RULE_RE = re.compile(
    r'^\{\s*"([^"]*)"\s*,\s*([0-9]+)'
    r'(?:\s*,\s*"([^"]*)")?'
    r'(?:\s*,\s*\{([^\}]*)\})?'
    r'\s*\}'
)
_QUOTED_RE = re.compile(r'"([^"]+)"')


class RuleFormatError(ValueError):
    """Rule file violates the grammar"""

    def __init__(self, reason: str, line: Optional[str] = None, line_number: Optional[int] = None):
        self.reason = reason
        self.line = line
        self.line_number = line_number

        message = reason
        if line_number is not None:
            message = f"line {line_number}: {message}"
        if line is not None:
            message = f"{message}: {line!r}"
        super().__init__(message)


class StageHeader(NamedTuple):
    """Parsed stage header (a Stage without rules)"""
    name: str
    min_word_length: int
    whole_word_exceptions: bool
    conditions: Tuple[str, ...]


def _quoted_strings(text: str) -> Tuple[str, ...]:
    return tuple(m.strip() for m in _QUOTED_RE.findall(text) if m.strip())


def is_blank_or_comment(line: str) -> bool:
    return not line or line.startswith(COMMENT_PREFIX)


def ends_stage(line: str) -> bool:
    return line.endswith(STAGE_TERMINATOR)


def looks_like_rule(line: str) -> bool:
    """True if the line is a rule record (terminated or not)"""
    if ends_stage(line):
        line = line[:-len(STAGE_TERMINATOR)]
    return _RULE_RE.match(line) is not None


def parse_stage_header(line: str) -> StageHeader:
    """
    Parse a stage header line.

    Args:
        line: Stripped header line, e.g. '{ "Plural", 3, 0, {"s"},'

    Returns:
        StageHeader

    Raises:
        RuleFormatError: line is not a header record

    Examples:
        >>> parse_stage_header('{ "Adverb", 0, 0, {},')
        StageHeader(name='Adverb', min_word_length=0, whole_word_exceptions=False, conditions=())
    """
    match = _HEADER_RE.match(line)
    if not match:
        raise RuleFormatError("invalid stage header", line=line)

    name, min_word_length, flag, conditions = match.groups()
    return StageHeader(
        name=name,
        min_word_length=int(min_word_length),
        whole_word_exceptions=flag == "1",
        conditions=_quoted_strings(conditions),
    )


def parse_rule(line: str) -> Rule:
    """
    Parse a rule record.

    The stage terminator must already be stripped. Anything after the closing
    brace (usually a separating comma) is ignored.

    Args:
        line: Stripped rule line, e.g. '{"ães",1,"ão",{"mães"}},'

    Returns:
        Rule with replacement defaulting to "" and exceptions to ()

    Raises:
        RuleFormatError: line is not a rule record
    """
    match = _RULE_RE.match(line)
    if not match:
        raise RuleFormatError("invalid rule", line=line)

    suffix, min_stem_length, replacement, exceptions = match.groups()
    return Rule(
        suffix=suffix,
        min_stem_length=int(min_stem_length),
        replacement=replacement or "",
        exceptions=_quoted_strings(exceptions) if exceptions else (),
    )
