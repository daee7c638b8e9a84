# backend/app/services/roster/roster_parser.py
"""
Plain-text roster parser.

One student per non-blank line: an identifying token followed by the names.

    1. 陳大文 Peter
    (2) 李小龍 | Bruce
    12A	張學友	Jacky

The token may be bare (``1``, ``12A``), dotted (``1.``), closed (``1)``) or
parenthesised (``(1)``). With an explicit delimiter (tab, ``|`` or ``,``) the
first field is the local name and the second the foreign name. Without one,
words holding non-ASCII characters form the local name and ASCII words form
the foreign name.

The parser is all-or-nothing: a single malformed line rejects the text.
"""

import logging
import re
from typing import List, Optional, Tuple

from seating_engine.core.problem_model import RosterEntry

from ...core.exceptions import RosterParseError

logger = logging.getLogger(__name__)

LINE_PATTERN = re.compile(
    r"^\s*(?:\(\s*(?P<paren>\d[0-9A-Za-z-]*)\s*\)|(?P<bare>\d[0-9A-Za-z-]*)[.):、,]?)"
    r"\s*(?P<rest>.*?)\s*$"
)
DELIMITERS = ("\t", "|", ",")


class TextRosterParser:
    """Turns roster text into ``RosterEntry`` records in input order."""

    def parse(self, text: Optional[str]) -> List[RosterEntry]:
        if not text or not text.strip():
            return []

        entries: List[RosterEntry] = []
        for line_number, line in enumerate(text.splitlines(), start=1):
            if not line.strip():
                continue
            entries.append(self.parse_line(line, line_number))

        logger.debug(f"Parsed {len(entries)} roster entries")
        return entries

    def parse_line(self, line: str, line_number: int = 1) -> RosterEntry:
        match = LINE_PATTERN.match(line)
        if match is None:
            raise RosterParseError(
                f"Line {line_number} does not start with a class number",
                line_number=line_number,
                line=line.strip(),
            )

        token = match.group("paren") or match.group("bare")
        names = self._split_names(match.group("rest"))
        if names is None:
            raise RosterParseError(
                f"Line {line_number} has more than two name fields",
                line_number=line_number,
                line=line.strip(),
            )
        name_local, name_foreign = names
        if not name_local and not name_foreign:
            raise RosterParseError(
                f"Line {line_number} has no student name",
                line_number=line_number,
                line=line.strip(),
            )
        return RosterEntry(
            class_no_raw=token, name_local=name_local, name_foreign=name_foreign
        )

    @staticmethod
    def _split_names(rest: str) -> Optional[Tuple[str, str]]:
        for delimiter in DELIMITERS:
            if delimiter in rest:
                fields = [field.strip() for field in rest.split(delimiter)]
                # Leading or trailing delimiters leave empty fields behind
                while len(fields) > 2 and not fields[-1]:
                    fields.pop()
                while len(fields) > 2 and not fields[0]:
                    fields.pop(0)
                if len(fields) != 2:
                    return None
                return fields[0], fields[1]

        local_words = []
        foreign_words = []
        for word in rest.split():
            if word.isascii():
                foreign_words.append(word)
            else:
                local_words.append(word)
        return " ".join(local_words), " ".join(foreign_words)
