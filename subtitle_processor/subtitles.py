"""
SubtitleList: an ordered collection of subtitle records and the passes over it.

Every pass returns a new SubtitleList and leaves the one it was called on
untouched, so passes chain:

    SubtitleList.from_captions(text).clean_up_captions().reformat().translate_names(names)

Records keep their original order; only cleanup and reformat drop records.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Callable, Iterable, Iterator, List, Optional, Sequence, Tuple

from . import formatter
from .constants import CREDIT_PATTERNS, EOL, LINE_SENTINEL
from .errors import SentinelCollisionError
from .groups import RecordFields, build_caption_fields, build_subtitle_fields, split_into_groups
from .logging_helper import log_debug, log_trace_block
from .names import NameDict, OrganizedNameDict, find_untranslated_names, organize_name_dict
from .names import translate_names as translate_text


@dataclass(frozen=True)
class SubtitleRecord:
    """One subtitle entry. index and timestamp are kept verbatim."""

    index: str
    timestamp: str
    primary: Optional[str] = None
    secondary: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return not self.primary and not self.secondary

    def render(self, eol: str = EOL) -> str:
        out = self.index + eol + self.timestamp + eol
        if self.primary:
            out += self.primary + eol
        if self.secondary:
            out += self.secondary + eol
        return out


def _build(text: str, builder: Callable[[str], RecordFields]) -> Tuple[SubtitleRecord, ...]:
    groups = split_into_groups(text)
    log_debug(f"Split input into {len(groups)} group(s)")
    return tuple(SubtitleRecord(*builder(group)) for group in groups)


class SubtitleList:
    """Ordered, immutable sequence of SubtitleRecord."""

    def __init__(self, records: Iterable[SubtitleRecord] = ()) -> None:
        self._records: Tuple[SubtitleRecord, ...] = tuple(records)

    @classmethod
    def from_subtitles(cls, text: str) -> "SubtitleList":
        """Build from a bilingual subtitle file (at most two content lines per entry)."""
        return cls(_build(text, build_subtitle_fields))

    @classmethod
    def from_captions(cls, text: str) -> "SubtitleList":
        """Build from a raw closed-caption transcript."""
        return cls(_build(text, build_caption_fields))

    @property
    def records(self) -> Tuple[SubtitleRecord, ...]:
        return self._records

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[SubtitleRecord]:
        return iter(self._records)

    def __getitem__(self, i: int) -> SubtitleRecord:
        return self._records[i]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SubtitleList):
            return NotImplemented
        return self._records == other._records

    def __repr__(self) -> str:
        return f"SubtitleList({len(self._records)} records)"

    # -----------------------
    # Passes
    # -----------------------

    def clean_up_captions(self, credit_patterns: Sequence[str] = CREDIT_PATTERNS) -> "SubtitleList":
        """Clean every primary line; records whose line is cleaned away are dropped.

        Meant for lists built with from_captions(). Records that had no primary
        text to begin with are kept as long as they carry secondary text.
        """
        kept: List[SubtitleRecord] = []
        for record in self._records:
            if record.primary is None:
                if record.secondary:
                    kept.append(record)
                continue
            primary = formatter.caption_cleanup(record.primary, credit_patterns=credit_patterns)
            if primary is None:
                continue
            kept.append(replace(record, primary=primary))
        log_debug(f"Caption cleanup dropped {len(self._records) - len(kept)} record(s)")
        return SubtitleList(kept)

    def reformat(self) -> "SubtitleList":
        """Reformat primary and secondary text; records left with neither are dropped."""
        kept: List[SubtitleRecord] = []
        for record in self._records:
            updated = replace(
                record,
                primary=formatter.reformat_line(record.primary),
                secondary=formatter.reformat_line(record.secondary),
            )
            if not updated.is_empty:
                kept.append(updated)
        log_debug(f"Reformat dropped {len(self._records) - len(kept)} empty record(s)")
        return SubtitleList(kept)

    def find_untranslated_names(self) -> List[str]:
        """Latin-alphabet names still present in the secondary lines, sorted."""
        names = find_untranslated_names(record.secondary for record in self._records)
        log_debug(f"Found {len(names)} untranslated name(s)")
        return names

    def translate_names(
        self,
        name_dict: NameDict | OrganizedNameDict,
        *,
        sentinel: str = LINE_SENTINEL,
    ) -> "SubtitleList":
        """Translate names in all secondary lines at once.

        The secondary lines are joined with sentinel, translated as one block and
        split back. name_dict may be raw or already organized.
        """
        if not sentinel:
            raise ValueError("sentinel must be a non-empty string")
        if not self._records:
            return SubtitleList()
        if not isinstance(name_dict, OrganizedNameDict):
            name_dict = organize_name_dict(name_dict)
        log_debug(
            f"Translating with {len(name_dict.full_names)} full and "
            f"{len(name_dict.partial_names)} partial name(s)"
        )

        fields = [record.secondary or "" for record in self._records]
        for record, value in zip(self._records, fields):
            if sentinel in value:
                raise SentinelCollisionError(
                    f"Sentinel {sentinel!r} found inside record {record.index}: {value!r}"
                )

        block = translate_text(sentinel.join(fields), name_dict)
        log_trace_block("Translated block", block)
        translated = block.split(sentinel)
        if len(translated) != len(self._records):
            raise SentinelCollisionError(
                f"Expected {len(self._records)} lines after translation, got {len(translated)}; "
                f"a dictionary target contains the sentinel {sentinel!r}"
            )

        return SubtitleList(
            replace(record, secondary=value or None)
            for record, value in zip(self._records, translated)
        )

    # -----------------------
    # Serialization
    # -----------------------

    def to_string(self, eol: str = EOL) -> str:
        """Render every record followed by a blank line."""
        return "".join(record.render(eol) + eol for record in self._records)

    def __str__(self) -> str:
        return self.to_string()
