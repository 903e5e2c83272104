"""
MTrk track chunk parser with end-of-track repair.

A track is accepted as-is when its declared payload ends with the
end-of-track marker (full, or without its leading delta byte). Otherwise
the payload is searched backwards for an embedded MThd tag: a hit means a
later file was saved over this track, so the track is cut at the tag. With
no hit the declared payload is kept. Either way a synthetic end-of-track
marker is appended and the track is flagged as repaired.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from midicarver.formats.smf.constants import (
    END_OF_TRACK,
    END_OF_TRACK_PARTIAL,
    HEADER_TAG,
    TAG_SIZE,
    TRACK_PREAMBLE_SIZE,
    TRACK_TAG,
)
from midicarver.models.issues import Issue, IssueKind
from midicarver.models.track import Track
from midicarver.utils.cursor import ByteCursor
from midicarver.utils.validation import TagMismatchError, TruncatedChunkError

logger = logging.getLogger(__name__)


@dataclass
class TrackParseResult:
    """
    Outcome of parsing one track chunk.

    consumed counts only bytes taken from the source blob, never the
    synthetic end-of-track marker.
    """

    track: Track
    consumed: int
    split_offset: Optional[int] = None  # Offset of an embedded MThd that cut the track
    issues: List[Issue] = field(default_factory=list)

    @property
    def repaired(self) -> bool:
        return self.track.repaired


class TrackChunkParser:
    """
    Parser for MTrk chunks found in a blob.

    Example:
        parser = TrackChunkParser(ByteCursor(blob))
        result = parser.parse(offset)
        offset += result.consumed
    """

    def __init__(self, cursor: ByteCursor):
        self.cursor = cursor

    def parse(self, offset: int) -> TrackParseResult:
        """
        Parse the track chunk at offset.

        Args:
            offset: Absolute offset of the MTrk tag

        Returns:
            TrackParseResult with the (possibly repaired) track

        Raises:
            TagMismatchError: If offset does not carry the MTrk tag
            TruncatedChunkError: If the 8-byte tag and length don't fit
        """
        cursor = self.cursor
        if not cursor.matches(offset, TRACK_TAG):
            raise TagMismatchError(offset, TRACK_TAG, cursor.slice(offset, offset + TAG_SIZE))
        if not cursor.fits(offset, TRACK_PREAMBLE_SIZE):
            raise TruncatedChunkError(offset, TRACK_PREAMBLE_SIZE, cursor.remaining(offset))

        declared = cursor.u32be(offset + 4)
        start = offset + TRACK_PREAMBLE_SIZE
        end = start + declared
        logger.debug("MTrk is %d bytes long", declared)

        if declared >= 4 and cursor.matches(end - 4, END_OF_TRACK):
            logger.debug("Got complete end-of-track")
            return self._accept(offset, declared, start, end)

        if declared >= 3 and cursor.matches(end - 3, END_OF_TRACK_PARTIAL):
            logger.info("Got partial (FF 2F 00) end-of-track, unusual but OK")
            return self._accept(offset, declared, start, end)

        return self._recover(offset, declared, start, end)

    def _accept(self, offset: int, declared: int, start: int, end: int) -> TrackParseResult:
        track = Track(
            declared_length=declared,
            data=self.cursor.read(start, declared),
            repaired=False,
            offset=offset,
        )
        return TrackParseResult(track=track, consumed=end - offset)

    def _recover(self, offset: int, declared: int, start: int, end: int) -> TrackParseResult:
        cursor = self.cursor
        issues: List[Issue] = []

        tail = cursor.slice(end - 4, end)
        logger.warning(
            "Expected end-of-track at %d but got %s. Backtracking for an overwrite.",
            end,
            tail.hex(" ") or "<end of data>",
        )

        # Candidate tags may straddle the end of the declared payload
        split = cursor.rfind(HEADER_TAG, start, end - 1)

        if split >= 0:
            logger.warning(
                "Track was saved over by a header at %d. Truncating %d -> %d bytes.",
                split,
                declared,
                split - start,
            )
            issues.append(
                Issue(
                    severity="warning",
                    kind=IssueKind.DESYNC_DAMAGE,
                    offset=split,
                    message="Track overwritten by a later header, truncated at tag",
                    expected=f"{declared} bytes",
                    actual=f"{split - start} bytes",
                )
            )
            payload = cursor.slice(start, split)
        else:
            available_end = min(end, len(cursor))
            payload = cursor.slice(start, available_end)
            if available_end < end:
                logger.warning(
                    "Track runs past end of data, keeping %d of %d bytes.",
                    len(payload),
                    declared,
                )
            else:
                logger.warning("Track was simply damaged. Appending a terminator.")
            issues.append(
                Issue(
                    severity="warning",
                    kind=IssueKind.DESYNC_DAMAGE,
                    offset=offset,
                    message="Missing end-of-track marker, terminator appended",
                    expected=END_OF_TRACK.hex(" "),
                    actual=tail.hex(" "),
                )
            )

        track = Track(
            declared_length=declared,
            data=payload + END_OF_TRACK,
            repaired=True,
            offset=offset,
        )
        return TrackParseResult(
            track=track,
            consumed=TRACK_PREAMBLE_SIZE + track.source_length,
            split_offset=split if split >= 0 else None,
            issues=issues,
        )
