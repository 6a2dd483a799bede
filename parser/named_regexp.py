# parser/named_regexp.py
# This file is part of Causeway - Vector-Clock Log Causality Analysis
#
# Regular expressions with named captures in (?<name>...) syntax

"""Named-capture regular expressions for log patterns.

NamedRegExp accepts the `(?<name>...)` capture syntax used throughout the
example catalog (as well as Python's `(?P<name>...)`), records the group
names in the order they appear, rejects duplicated names, and compiles the
result with the standard `re` module.

Example:
    >>> rx = NamedRegExp(r"(?<host>\\S+) (?<clock>{.*})\\n(?<event>.*)")
    >>> rx.names
    ['host', 'clock', 'event']
"""

import re
from typing import Iterator, List, Optional

from utils.logger import get_logger

from .exceptions import PatternError
from .lexer import PatternLexer, group_name


class NamedRegExp:
    """A compiled pattern together with the ordered names of its captures.

    Attributes:
        source: Pattern text exactly as supplied
        translated: Equivalent pattern in Python syntax
        flags: `re` flags the pattern was compiled with
    """

    def __init__(self, source: str, flags: int = 0):
        """Translate and compile `source`.

        Args:
            source: Pattern text using (?<name>...) or (?P<name>...) captures
            flags: Flags passed to re.compile

        Raises:
            PatternError: A capture name is duplicated, the pattern has an
                unterminated construct, or it does not compile
        """
        logger = get_logger()

        self.source = source
        self.flags = flags
        self._names: List[str] = []

        self.translated = self._translate(source)

        try:
            self._regex = re.compile(self.translated, flags)
        except re.error as exc:
            logger.debug(f"Pattern failed to compile: {exc}")
            raise PatternError(
                f"The regular expression is invalid: {exc}", source
            ) from exc

        logger.debug(f"Compiled pattern {source!r} with groups {self._names}")

    def _translate(self, source: str) -> str:
        parts: List[str] = []
        try:
            for token in PatternLexer().tokenize(source):
                if token.type in ("NAMED_GROUP", "PY_NAMED_GROUP"):
                    name = group_name(token)
                    if name in self._names:
                        raise PatternError(
                            f"There are multiple capture groups named {name!r}",
                            source,
                        )
                    self._names.append(name)
                    parts.append(f"(?P<{name}>")
                else:
                    parts.append(token.value)
        except PatternError as exc:
            if exc.pattern == source:
                raise
            raise PatternError(str(exc), source) from exc
        return "".join(parts)

    @property
    def names(self) -> List[str]:
        """Capture group names in order of appearance."""
        return list(self._names)

    def has_name(self, name: str) -> bool:
        return name in self._names

    def finditer(self, text: str, pos: int = 0, endpos: Optional[int] = None) -> Iterator[re.Match]:
        """Iterate over non-overlapping matches in `text[pos:endpos]`."""
        if endpos is None:
            return self._regex.finditer(text, pos)
        return self._regex.finditer(text, pos, endpos)

    def search(self, text: str, pos: int = 0) -> Optional[re.Match]:
        return self._regex.search(text, pos)

    def test(self, text: str) -> bool:
        """True if the pattern matches anywhere in `text`."""
        return self._regex.search(text) is not None

    def __repr__(self) -> str:
        return f"NamedRegExp({self.source!r}, names={self._names})"
