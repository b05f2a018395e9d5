"""
Line-level rewrites for subtitle text.

Every function here takes one line and returns the rewritten line. Input that
does not match a rule's trigger comes back unchanged, and None/empty input is
returned as-is. Only caption_cleanup() may turn a line into None, which tells
the owning list to drop the record.
"""
from __future__ import annotations

import re
from typing import Iterable, Optional

from .constants import CREDIT_PATTERNS, LYRICS_MARKER

# -----------------------
# Dialog and lyrics
# -----------------------

# "- first [- second]": the first part runs greedily up to the next dash,
# the optional second part takes the rest of the line.
_DIALOG_RE = re.compile(
    r"""^\s*-\s*
        (?P<first>[^\s-][^-]*)      # first speaker, up to the next dash
        \s*-?\s*
        (?P<second>.+)?             # second speaker, optional
        $""",
    re.VERBOSE,
)

# "#lyrics[#]": leading marker required, trailing one optional.
_LYRICS_RE = re.compile(
    r"""^\s*\#\s*
        (?P<lyrics>[^\s\#][^\#]*)
        \s*\#?\s*$""",
    re.VERBOSE,
)


def format_dialog(line: Optional[str]) -> Optional[str]:
    """Normalize a dialog line to "- first  - second", or to "first" alone.

    >>> format_dialog("- Hello there - Goodbye")
    '- Hello there  - Goodbye'
    >>> format_dialog("-Hi")
    'Hi'
    """
    if not line:
        return line
    m = _DIALOG_RE.match(line)
    if m is None:
        return line
    first = m.group("first").rstrip()
    second = (m.group("second") or "").rstrip()
    if not second:
        return first
    return f"- {first}  - {second}"


def format_lyrics(line: Optional[str]) -> Optional[str]:
    """Normalize a lyrics line to "# lyrics #"."""
    if not line:
        return line
    m = _LYRICS_RE.match(line)
    if m is None:
        return line
    lyrics = m.group("lyrics").rstrip()
    return f"{LYRICS_MARKER} {lyrics} {LYRICS_MARKER}"


# -----------------------
# Punctuation
# -----------------------

# Private-use character; keeps "..." out of reach of the period rule.
_ELLIPSIS_PLACEHOLDER = "\ue000"

_LEADING_ELLIPSIS_RE = re.compile(r"(^|-\s*)\.\.\.")
_ELLIPSIS_RE = re.compile(r"\s*\.\.\.\s*")
_QUESTION_RE = re.compile(r"\s*[？?]\s*")
_EXCLAMATION_RE = re.compile(r"\s*[！!]\s*")
_COMMA_PERIOD_RE = re.compile(r"\s*([,.])\s*")
_ABBREVIATION_RE = re.compile(r"(?:[A-Z]\.\s*)+")
_ABBREVIATION_GAP_RE = re.compile(r"\.\s*")
_LEADING_QUOTE_RE = re.compile(r"^\s*[\"“”]\s*")
_TRAILING_QUOTE_RE = re.compile(r"\s*[\"“”]\s*$")


def _close_abbreviation(m: re.Match) -> str:
    return _ABBREVIATION_GAP_RE.sub(".", m.group(0)) + " "


def format_punctuation(line: Optional[str]) -> Optional[str]:
    """Fix spacing around punctuation and fold full-width marks to half-width.

    Rule order is significant:
    ellipsis placeholder -> ?! -> , . -> abbreviations -> quotes -> restore.
    """
    if not line:
        return line

    # a leading "..." (or one right after a dialog dash) is dropped
    line = _LEADING_ELLIPSIS_RE.sub(r"\1", line)
    line = _ELLIPSIS_RE.sub(_ELLIPSIS_PLACEHOLDER + " ", line)

    line = _QUESTION_RE.sub("? ", line)
    line = _EXCLAMATION_RE.sub("! ", line)
    line = _COMMA_PERIOD_RE.sub(r"\1 ", line)

    # "T. J. " -> "T.J. "
    line = _ABBREVIATION_RE.sub(_close_abbreviation, line)

    line = _LEADING_QUOTE_RE.sub('"', line)
    line = _TRAILING_QUOTE_RE.sub('"', line)

    return line.replace(_ELLIPSIS_PLACEHOLDER, "...")


# -----------------------
# Raw caption cleanup
# -----------------------

_HEARING_AID_RE = re.compile(r"\[[^\]]*\]")
_MUSIC_NOTE = "♪"
_ITALICS_RE = re.compile(r"</?i>")
_WHITESPACE_RE = re.compile(r"\s+")
_UNDERSCORES_RE = re.compile(r"^_+$")


def is_credit_line(line: str, credit_patterns: Iterable[str] = CREDIT_PATTERNS) -> bool:
    return any(pattern in line for pattern in credit_patterns)


def caption_cleanup(
    line: Optional[str],
    *,
    credit_patterns: Iterable[str] = CREDIT_PATTERNS,
) -> Optional[str]:
    """Clean one raw caption line.

    Returns None when the line is a credit, or when nothing meaningful is left
    (blank, or nothing but underscores).
    """
    if line is None:
        return None
    if is_credit_line(line, credit_patterns):
        return None

    line = _HEARING_AID_RE.sub(" ", line)
    line = line.replace(_MUSIC_NOTE, LYRICS_MARKER)
    line = _ITALICS_RE.sub(" ", line)
    line = _WHITESPACE_RE.sub(" ", line).strip()
    line = _UNDERSCORES_RE.sub("", line)

    if not line.strip():
        return None
    return line


# Stripping a single speaker's dash can expose a lyrics marker or an opening
# quote, so the rules are repeated until the line settles.
_MAX_REFORMAT_ROUNDS = 8


def _reformat_once(line: str) -> str:
    line = line.strip()
    line = format_punctuation(line)
    line = format_lyrics(line)
    line = format_dialog(line)
    return line.rstrip()


def reformat_line(line: Optional[str]) -> Optional[str]:
    """trim -> punctuation -> lyrics -> dialog; absent or blank input gives None.

    The sequence is applied until the line no longer changes, so a second
    pass returns its input unchanged ("- #la la" -> "# la la #").
    """
    if not line:
        return None
    for _ in range(_MAX_REFORMAT_ROUNDS):
        updated = _reformat_once(line)
        if updated == line:
            break
        line = updated
    return line or None
