from __future__ import annotations


class SubtitleError(Exception):
    """Base error for subtitle processing."""


class MalformedGroupError(SubtitleError, ValueError):
    """A subtitle-file group carries more than two content lines."""

    def __init__(self, group: str) -> None:
        super().__init__(f'There are too many lines in group: "{group}"')
        self.group = group


class SentinelCollisionError(SubtitleError, ValueError):
    """The join sentinel appeared inside the text it was meant to separate."""
