from __future__ import annotations

"""
Directive Extraction Service.

Line-oriented lexer for template sources. Removes line and block comments
while preserving column offsets, then finds every directive invocation
(`#name(args)` or `#{name}(args)`) with its raw arguments and position.
"""

import re
from dataclasses import dataclass
from typing import Iterable, Iterator, List

from vmdep.domain.constants import (
    BLOCK_COMMENT_CLOSE,
    BLOCK_COMMENT_OPEN,
    LINE_COMMENT,
)
from vmdep.domain.models import DirectiveMatch

# Line terminators of template sources; form feeds and other separators stay in-line
_LINE_BREAK = re.compile(r"\r\n|[\r\n\u2028\u2029]")


@dataclass
class CommentState:
    """Cross-line lexer state: whether the cursor is inside a block comment."""
    in_block: bool = False


# ==============================================================================
# PUBLIC API
# ==============================================================================

def compile_directive_pattern(directives: Iterable[str]) -> re.Pattern:
    """
    Build the directive matcher for a set of directive names.

    Group 1 is the directive name, group 2 the raw argument list.
    """
    names = "|".join(re.escape(d) for d in directives)
    return re.compile(r"#\{?(" + names + r")\}?\(\s*([^)]+)\s*\)")


def strip_comments(line: str, state: CommentState) -> str:
    """
    Remove comment text from a single physical line.

    Line comments truncate the line. A line that closes a block comment has
    the comment text replaced by spaces so the remaining code keeps its
    original columns. A block comment opener drops the rest of the line,
    and `state` is set when no closer follows it on the same line.

    Args:
        line: Physical line without its terminator.
        state: Block comment state carried from the previous line.

    Returns:
        str: The line with comments removed.
    """
    cut = line.find(LINE_COMMENT)
    if cut > -1:
        line = line[:cut]

    if state.in_block:
        close = line.find(BLOCK_COMMENT_CLOSE)
        if close < 0:
            return ""
        start = close + len(BLOCK_COMMENT_CLOSE)
        state.in_block = False
        return " " * start + line[start:]

    opening = line.find(BLOCK_COMMENT_OPEN)
    if opening < 0:
        return line
    if line.find(BLOCK_COMMENT_CLOSE, opening + len(BLOCK_COMMENT_OPEN)) < 0:
        state.in_block = True
    return line[:opening]


class DirectiveExtractor:
    """
    Directive lexer compiled once per traversal session.

    Args:
        directives: Directive names to recognize (e.g. include, parse).
    """

    def __init__(self, directives: Iterable[str]) -> None:
        self.directives: List[str] = list(directives)
        self.pattern = compile_directive_pattern(self.directives)

    def iter_matches(self, content: str) -> Iterator[DirectiveMatch]:
        """
        Yield every directive found in a template source, in order.

        Block comment state starts closed for every call.

        Args:
            content: Full text of one template file.

        Yields:
            DirectiveMatch: One record per directive invocation.
        """
        state = CommentState()
        for lineno, raw_line in enumerate(_LINE_BREAK.split(content), start=1):
            line = strip_comments(raw_line, state)
            if not line:
                continue
            for m in self.pattern.finditer(line):
                yield DirectiveMatch(
                    directive=m.group(1),
                    arguments=m.group(2).split(),
                    line=lineno,
                    column=m.start(),
                )
