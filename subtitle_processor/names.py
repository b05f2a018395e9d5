"""
Name dictionary tools.

A raw name dictionary maps a source-language full name to its target-language
rendering ("Tony Stark" -> "托尼·斯塔克"). organize_name_dict() derives two
lookup tables from it:

- full_names: every delimited entry, with its delimiters canonicalized
- partial_names: each source token mapped to the aligned target segment, kept
  only when the token count matches the segment count

translate_names() then rewrites untranslated names by literal substring
replacement, longest key first, full names before partial names.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Set

from .constants import NAME_DELIMITER, NAME_DELIMITERS

NameDict = Dict[str, str]

_EQUALS_RE = re.compile(r"\s*=\s*")
_LATIN_NAME_RE = re.compile(r"(?:[a-zA-Z][a-zA-Z'.]*\s)*[a-zA-Z']+")
_LATIN_TOKEN_RE = re.compile(r"[a-zA-Z']+")
_LATIN_CHAR_RE = re.compile(r"[a-zA-Z]")


@dataclass(frozen=True)
class OrganizedNameDict:
    full_names: NameDict = field(default_factory=dict)
    partial_names: NameDict = field(default_factory=dict)


def _delimiter_re(delimiters: Iterable[str]) -> "re.Pattern[str]":
    return re.compile("|".join(re.escape(d) for d in delimiters))


def construct_raw_name_dict(text: str) -> NameDict:
    """Parse "source = target" lines into a raw name dictionary.

    Only the first two "="-separated segments are used. Blank lines, comment
    lines starting with "#", and entries with an empty source or target are
    skipped. A later duplicate source overrides an earlier one.
    """
    name_dict: NameDict = {}
    for raw in (text or "").replace("\r\n", "\n").replace("\r", "\n").split("\n"):
        entry = raw.strip()
        if not entry or entry.startswith("#"):
            continue
        parts = _EQUALS_RE.split(entry)
        if len(parts) < 2:
            continue
        source, target = parts[0].strip(), parts[1].strip()
        if source and target:
            name_dict[source] = target
    return name_dict


def organize_name_dict(
    raw_name_dict: NameDict,
    *,
    delimiters: Iterable[str] = NAME_DELIMITERS,
    canonical_delimiter: str = NAME_DELIMITER,
) -> OrganizedNameDict:
    """Split a raw dictionary into full-name and partial-name tables.

    Entries whose target carries no delimiter are not full names and are left
    out of both tables.
    """
    delimiters = tuple(delimiters)
    split_re = _delimiter_re(delimiters)
    full_names: NameDict = {}
    partial_names: NameDict = {}
    for source, target in raw_name_dict.items():
        if not any(d in target for d in delimiters):
            continue
        target_segments = split_re.split(target)
        source_segments = source.split()
        if len(source_segments) == len(target_segments) and all(target_segments):
            for token, segment in zip(source_segments, target_segments):
                partial_names[token] = segment
        full_names[source] = split_re.sub(canonical_delimiter, target)
    return OrganizedNameDict(full_names=full_names, partial_names=partial_names)


def _longest_first(keys: Iterable[str]) -> List[str]:
    return sorted(keys, key=lambda k: (-len(k), k))


def translate_names(text: str, name_dict: OrganizedNameDict) -> str:
    """Replace every occurrence of every known name in text.

    Matching is literal and unanchored, so a key that is part of a longer
    unrelated word is replaced there as well.
    """
    for table in (name_dict.full_names, name_dict.partial_names):
        for source in _longest_first(table):
            text = text.replace(source, table[source])
    return text


def find_untranslated_names(lines: Iterable[Optional[str]]) -> List[str]:
    """Collect Latin-alphabet runs left in target-language lines.

    Single tokens that are part of a longer discovered name are dropped, so
    only the maximal names remain. The result is sorted.
    """
    full_names: Set[str] = set()
    for line in lines:
        if not line or not _LATIN_CHAR_RE.search(line):
            continue
        full_names.update(_LATIN_NAME_RE.findall(line))

    partial_names: Set[str] = set()
    for name in full_names:
        segments = _LATIN_TOKEN_RE.findall(name)
        if len(segments) > 1:
            partial_names.update(segments)

    return sorted(name for name in full_names if name not in partial_names)
