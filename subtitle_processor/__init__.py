"""Subtitle cleanup, reformatting and name translation.

Exposes the list type, the loaders and the name dictionary helpers.
"""

from .constants import EOL, LINE_SENTINEL, NAME_DELIMITER
from .errors import MalformedGroupError, SentinelCollisionError, SubtitleError
from .names import OrganizedNameDict, construct_raw_name_dict, organize_name_dict
from .subtitles import SubtitleList, SubtitleRecord


def load_subtitles(text: str) -> SubtitleList:
    """Build a SubtitleList from a bilingual subtitle file."""
    return SubtitleList.from_subtitles(text)


def load_captions(text: str) -> SubtitleList:
    """Build a SubtitleList from a raw closed-caption transcript."""
    return SubtitleList.from_captions(text)


__all__ = [
    "EOL",
    "LINE_SENTINEL",
    "NAME_DELIMITER",
    "MalformedGroupError",
    "SentinelCollisionError",
    "SubtitleError",
    "OrganizedNameDict",
    "construct_raw_name_dict",
    "organize_name_dict",
    "SubtitleList",
    "SubtitleRecord",
    "load_subtitles",
    "load_captions",
]
