from __future__ import annotations

import re
from typing import List, Optional, Tuple

from .errors import MalformedGroupError

INDEX_LINE = re.compile(r"^ *[0-9]+ *$")

# index, timestamp, primary text, secondary text
RecordFields = Tuple[str, str, Optional[str], Optional[str]]


def normalize_line_endings(text: str) -> str:
    """Turn \\r\\n and lone \\r into \\n and drop a leading byte-order mark."""
    text = (text or "").lstrip("\ufeff")
    return text.replace("\r\n", "\n").replace("\r", "\n")


def _close_group(lines: List[str], groups: List[str]) -> None:
    while lines and not lines[-1].strip():
        lines.pop()
    if lines:
        groups.append("\n".join(lines))


def split_into_groups(text: str) -> List[str]:
    """Split a whole subtitle file into one string per entry.

    A line holding only a number starts a new group, unless the line before it
    already started one: in "12\\n7\\n" only "12" is an index. The first line
    of the file opens the first group whatever it holds, so headerless input
    comes back as a single group.

    Content lines lose their trailing whitespace, index lines lose their
    spaces, and trailing blank lines of each group are removed.
    """
    groups: List[str] = []
    current: List[str] = []
    previous_was_index = False

    for i, line in enumerate(normalize_line_endings(text).split("\n")):
        if INDEX_LINE.match(line):
            if i == 0:
                current.append(line.replace(" ", ""))
                continue
            if not previous_was_index:
                _close_group(current, groups)
                current = [line.replace(" ", "")]
                previous_was_index = True
                continue
        current.append(line.rstrip())
        previous_was_index = False

    _close_group(current, groups)
    return groups


def _header(entry: List[str]) -> Tuple[str, str]:
    index = entry[0]
    timestamp = entry[1] if len(entry) > 1 else ""
    return index, timestamp


def build_subtitle_fields(group: str) -> RecordFields:
    """Map a bilingual subtitle-file group to its fields.

    One content line is the secondary (target-language) text; two are primary
    then secondary. More than two raise MalformedGroupError.
    """
    entry = group.split("\n")
    index, timestamp = _header(entry)
    content = entry[2:]
    if len(content) > 2:
        raise MalformedGroupError(group)
    if len(content) == 2:
        return index, timestamp, content[0] or None, content[1] or None
    if len(content) == 1:
        return index, timestamp, None, content[0] or None
    return index, timestamp, None, None


def build_caption_fields(group: str) -> RecordFields:
    """Map a raw caption group to its fields; all content folds into the primary text."""
    entry = group.split("\n")
    index, timestamp = _header(entry)
    primary = " ".join(entry[2:])
    return index, timestamp, primary or None, None
