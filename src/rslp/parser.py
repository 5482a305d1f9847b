"""
RSLP rule file parser.

Turns rule file text into an ordered tuple of Stage. The parser is a two-state
machine driven one line at a time:

- AwaitingStageHeader: the next record must be a stage header
- InsideStage: rules accumulate until a rule ending with "};" closes the stage

Any grammar violation raises RuleFormatError with the raw line and its
1-based line number. Nothing is returned for a partially valid file.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple, Union

from .grammar import (
    STAGE_TERMINATOR,
    RuleFormatError,
    StageHeader,
    ends_stage,
    is_blank_or_comment,
    looks_like_rule,
    parse_rule,
    parse_stage_header,
)
from .model import Rule, Stage

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AwaitingStageHeader:
    pass


@dataclass(frozen=True)
class InsideStage:
    header: StageHeader
    rules: Tuple[Rule, ...] = ()

    def with_rule(self, rule: Rule) -> "InsideStage":
        return InsideStage(self.header, self.rules + (rule,))

    def close(self) -> Stage:
        return Stage(
            name=self.header.name,
            min_word_length=self.header.min_word_length,
            whole_word_exceptions=self.header.whole_word_exceptions,
            conditions=self.header.conditions,
            rules=self.rules,
        )


ParserState = Union[AwaitingStageHeader, InsideStage]


def transition(state: ParserState, line: str) -> Tuple[ParserState, Optional[Stage]]:
    """
    Advance the parser by one significant (non-blank, non-comment) line.

    Args:
        state: Current parser state
        line: Stripped line

    Returns:
        (next state, completed Stage or None)

    Raises:
        RuleFormatError: line does not fit the current state
    """
    if isinstance(state, AwaitingStageHeader):
        if looks_like_rule(line):
            raise RuleFormatError("rule without an owning stage", line=line)
        return InsideStage(parse_stage_header(line)), None

    if ends_stage(line):
        rule = parse_rule(line[:-len(STAGE_TERMINATOR)])
        return AwaitingStageHeader(), state.with_rule(rule).close()

    return state.with_rule(parse_rule(line)), None


def parse_rules(source: str) -> Tuple[Stage, ...]:
    """
    Parse RSLP rule file text.

    Args:
        source: Full rule file contents

    Returns:
        Stages in file order, each with its rules in file order

    Raises:
        RuleFormatError: malformed header or rule, rule outside a stage,
            or input ending inside a stage

    Examples:
        >>> stages = parse_rules('{ "Adverb", 0, 0, {},\\n{"mente",4,"",{"experimente"}}};')
        >>> stages[0].rules[0].suffix
        'mente'
    """
    stages = []
    state: ParserState = AwaitingStageHeader()

    for line_number, raw_line in enumerate(source.splitlines(), start=1):
        line = raw_line.strip()
        if is_blank_or_comment(line):
            continue

        try:
            state, completed = transition(state, line)
        except RuleFormatError as e:
            raise RuleFormatError(e.reason, line=raw_line, line_number=line_number) from None

        if completed is not None:
            logger.debug(f"Parsed stage '{completed.name}' ({completed.rule_count} rules)")
            stages.append(completed)

    if isinstance(state, InsideStage):
        raise RuleFormatError(
            f"unterminated stage '{state.header.name}' (missing '{STAGE_TERMINATOR}')"
        )

    return tuple(stages)


def load_rules(path: Union[str, Path]) -> Tuple[Stage, ...]:
    """
    Read and parse a rule file.

    Args:
        path: Rule file path (UTF-8)

    Returns:
        Parsed stages

    Raises:
        FileNotFoundError: path does not exist
        RuleFormatError: file violates the grammar
    """
    path = Path(path)
    source = path.read_text(encoding="utf-8")
    stages = parse_rules(source)

    rule_count = sum(stage.rule_count for stage in stages)
    logger.info(f"Loaded {len(stages)} stages ({rule_count} rules) from {path}")
    return stages
