# parser/lexer.py
# This file is part of Causeway - Vector-Clock Log Causality Analysis
#
# Lexical analyzer for user-supplied regular expressions using SLY

"""Lexical analyzer for named-group log patterns.

Log patterns are regular expressions that name their captures either with
the `(?<name>...)` syntax used by the bundled example catalog or with
Python's own `(?P<name>...)`. Before such a pattern can be compiled its
named-group openers must be found and rewritten, which requires knowing
which parentheses are real group openers and which are escaped or sit
inside a character class.

Supported Tokens:
- ESCAPE: a backslash and the character it escapes
- CHARSET: a bracketed character class, including escaped brackets
- PY_NAMED_GROUP: Python-style named group opener `(?P<name>`
- NAMED_GROUP: angle-bracket named group opener `(?<name>`
- GROUP: any other opening parenthesis (plain, `(?:`, look-arounds)
- TEXT: every run of characters that is none of the above
"""

from sly import Lexer
from utils.logger import get_logger

from .exceptions import PatternError


class PatternLexer(Lexer):
    """SLY-based lexer that splits a pattern into group-relevant tokens.

    Order of the rules matters: named openers must be tried before the
    generic GROUP rule, and CHARSET before TEXT so that `(` inside a class
    is never read as a group.

    Attributes:
        tokens: Set of valid token types
        ESCAPE, CHARSET, PY_NAMED_GROUP, NAMED_GROUP, GROUP, TEXT: Token patterns
    """

    tokens = {
        "ESCAPE",
        "CHARSET",
        "PY_NAMED_GROUP",
        "NAMED_GROUP",
        "GROUP",
        "TEXT",
    }

    ESCAPE = r"\\[\s\S]"
    CHARSET = r"\[\^?\]?(?:\\[\s\S]|[^\]\\])*\]"
    PY_NAMED_GROUP = r"\(\?P<[A-Za-z_][A-Za-z0-9_]*>"
    NAMED_GROUP = r"\(\?<[A-Za-z_][A-Za-z0-9_]*>"
    GROUP = r"\("
    TEXT = r"[^\\\[(]+"

    def error(self, t):
        """Handle characters no rule accepts.

        Only an unterminated character class or a trailing lone backslash
        end up here.

        Args:
            t: SLY token object containing error context

        Raises:
            PatternError: Always raised with character and position information
        """
        logger = get_logger()

        illegal_char = t.value[0]
        error_pos = self.index

        logger.debug(f"Unexpected '{illegal_char}' at position {error_pos} in pattern")

        self.index += 1

        raise PatternError(
            f"Unterminated '{illegal_char}' at position {error_pos} in pattern",
            t.value,
        )


def group_name(token) -> str:
    """Extract the group name from a NAMED_GROUP or PY_NAMED_GROUP token."""
    return token.value[token.value.index("<") + 1 : -1]
