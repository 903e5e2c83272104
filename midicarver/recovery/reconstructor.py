"""
Reconstruction of a MIDI structure's track list ("smart extract").

Starting right after a header (or at the first track of an orphan run),
tracks are parsed one after another until the declared count is reached.
A missing MTrk tag starts a bounded forward search for the next one; an
MThd tag ends the structure early, since it belongs to another file.

States:
    EXPECTING_TRACK -> EXPECTING_TRACK | RECOVERY_SEARCH | DONE
    RECOVERY_SEARCH -> EXPECTING_TRACK | DONE
"""

import logging
from enum import Enum
from typing import Optional, Tuple

from midicarver.config import CarverConfig
from midicarver.formats.smf.constants import HEADER_TAG, MAX_TRACKS, TRACK_TAG
from midicarver.formats.smf.track_parser import TrackChunkParser
from midicarver.formats.smf.writer import SMFWriter
from midicarver.models.header import Header
from midicarver.models.issues import IssueKind
from midicarver.recovery.report import CarvedStructure, DoneReason
from midicarver.utils.cursor import ByteCursor
from midicarver.utils.validation import EmptyStructureError, TruncatedChunkError

logger = logging.getLogger(__name__)


class ExtractState(Enum):
    EXPECTING_TRACK = "expecting_track"
    RECOVERY_SEARCH = "recovery_search"
    DONE = "done"


class Reconstructor:
    """
    Fills a Header's track list from the blob and hands it to the writer.

    Example:
        recon = Reconstructor(cursor, config, SMFWriter(config))
        carved = recon.reconstruct(header, start)
    """

    def __init__(
        self,
        cursor: ByteCursor,
        config: Optional[CarverConfig] = None,
        writer: Optional[SMFWriter] = None,
    ):
        self.cursor = cursor
        self.config = config or CarverConfig()
        self.writer = writer or SMFWriter(self.config)
        self.track_parser = TrackChunkParser(cursor)

    def reconstruct(self, header: Header, start: int) -> CarvedStructure:
        """
        Extract tracks for header starting at start, then write it out.

        Args:
            header: Parsed or synthesized header, tracks still empty
            start: Absolute offset of the first expected track

        Returns:
            CarvedStructure describing the result
        """
        consumed, reason = self.extract(header, start)
        return self._emit(header, consumed, reason)

    def extract(self, header: Header, start: int) -> Tuple[int, DoneReason]:
        """
        Run the extraction state machine.

        Returns:
            Tuple of (bytes consumed from start, reason for stopping)
        """
        cursor = self.cursor
        pos = start
        parsed = 0
        reason = DoneReason.COMPLETE
        state = ExtractState.EXPECTING_TRACK

        while state is not ExtractState.DONE:
            if state is ExtractState.EXPECTING_TRACK:
                if cursor.matches(pos, HEADER_TAG):
                    logger.warning(
                        "Collision with another MIDI at %d, came up short in tracks "
                        "(expected %d, got %d).",
                        pos,
                        header.track_count,
                        parsed,
                    )
                    header.add_issue(
                        "warning",
                        IssueKind.DESYNC_DAMAGE,
                        pos,
                        "Another header found before all tracks were read",
                        str(header.track_count),
                        str(parsed),
                    )
                    reason = DoneReason.COLLISION
                    state = self._finish_short(header, parsed)

                elif cursor.matches(pos, TRACK_TAG):
                    logger.debug("Found MTrk for track %d at %d", parsed, pos)
                    try:
                        result = self.track_parser.parse(pos)
                    except TruncatedChunkError as e:
                        logger.warning("Track %d is cut off by end of data: %s", parsed, e)
                        header.add_issue(
                            "warning", IssueKind.DESYNC_DAMAGE, pos, "Track preamble truncated"
                        )
                        # Nothing after the cut-off tag can belong to another structure
                        pos = len(cursor)
                        reason = DoneReason.LOST_SYNC
                        state = self._finish_short(header, parsed)
                        continue

                    header.add_track(result.track)
                    header.issues.extend(result.issues)
                    if result.repaired:
                        header.mark_damaged()
                    pos += result.consumed
                    parsed += 1

                    if parsed >= header.track_count or parsed >= MAX_TRACKS:
                        reason = DoneReason.COMPLETE
                        state = ExtractState.DONE

                else:
                    logger.warning(
                        "Missing MTrk tag for track %d at %d, this indicates a damaged "
                        "MIDI file. Starting recovery search.",
                        parsed,
                        pos,
                    )
                    header.add_issue(
                        "warning",
                        IssueKind.DESYNC_DAMAGE,
                        pos,
                        f"Missing MTrk tag for track {parsed}",
                        TRACK_TAG.decode("ascii"),
                        cursor.slice(pos, pos + 4).hex(" ") or "<end of data>",
                    )
                    header.mark_damaged()
                    state = ExtractState.RECOVERY_SEARCH

            elif state is ExtractState.RECOVERY_SEARCH:
                found = self._search_forward(pos)
                if found >= 0:
                    logger.warning(
                        "Found an MTrk tag at %d. %d bytes were lost, but sync is regained.",
                        found,
                        found - pos,
                    )
                    header.add_issue(
                        "info",
                        IssueKind.DESYNC_DAMAGE,
                        pos,
                        f"{found - pos} bytes skipped to regain sync",
                    )
                    pos = found
                    state = ExtractState.EXPECTING_TRACK
                else:
                    logger.warning(
                        "Recovery search hit end of data, max distance, or another "
                        "header. Truncating MIDI file here."
                    )
                    reason = DoneReason.LOST_SYNC
                    state = self._finish_short(header, parsed)

        return pos - start, reason

    def _finish_short(self, header: Header, parsed: int) -> ExtractState:
        header.track_count = parsed
        header.mark_damaged()
        return ExtractState.DONE

    def _search_forward(self, pos: int) -> int:
        """
        Look for the next MTrk tag after pos without crossing an MThd.

        The bound is the smaller of the bytes left in the blob and the
        configured maximum search distance.

        Returns:
            Absolute offset of the MTrk tag, or -1
        """
        limit = min(self.cursor.remaining(pos), self.config.max_search_distance)
        end = pos + limit

        track_at = self.cursor.find(TRACK_TAG, pos + 1, end)
        header_at = self.cursor.find(HEADER_TAG, pos + 1, end)

        if track_at < 0:
            return -1
        if 0 <= header_at < track_at:
            logger.debug("Recovery search stopped at header tag at %d", header_at)
            return -1
        return track_at

    def _emit(self, header: Header, consumed: int, reason: DoneReason) -> CarvedStructure:
        classification = header.classification
        logger.info(
            "Structure at %d classified %s (%d track(s), %s)",
            header.offset,
            classification.status,
            len(header.tracks),
            reason.value,
        )

        carved = CarvedStructure(
            offset=header.offset,
            classification=classification,
            reason=reason,
            format_type=header.format_type,
            division=header.division,
            declared_tracks=header.declared_track_count,
            tracks=len(header.tracks),
            repaired_tracks=header.repaired_tracks,
            consumed=consumed,
            issues=header.issues,
        )

        try:
            carved.path = self.writer.write(header, header.offset, classification)
            carved.written = self.writer.config.writes_files
        except EmptyStructureError:
            logger.error("Refusing to write trackless MIDI file (offset %d).", header.offset)
            header.add_issue(
                "error", IssueKind.EMPTY_STRUCTURE, header.offset, "No tracks recovered"
            )
        except OSError as e:
            path = self.writer.path_for(header.offset, classification)
            logger.error("Could not write %s: %s", path, e)
            header.add_issue(
                "error", IssueKind.IO_FAILURE, header.offset, f"Could not write {path}: {e}"
            )

        # Release the track data once it is on disk
        header.tracks.clear()
        return carved
