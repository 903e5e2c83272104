"""
MThd header chunk parser.
"""

import logging

from midicarver.formats.smf.constants import (
    HEADER_CHUNK_SIZE,
    HEADER_DATA_LENGTH,
    HEADER_TAG,
    TAG_SIZE,
)
from midicarver.models.header import Header
from midicarver.models.issues import IssueKind
from midicarver.utils.cursor import ByteCursor
from midicarver.utils.validation import (
    TagMismatchError,
    TruncatedChunkError,
    check_format_type,
    check_header_length,
)

logger = logging.getLogger(__name__)


class HeaderChunkParser:
    """
    Parser for MThd chunks found in a blob.

    The chunk is always treated as 14 bytes, whatever its length field
    says. Odd field values are recorded as issues on the returned Header
    and never stop parsing.

    Example:
        parser = HeaderChunkParser(ByteCursor(blob))
        header = parser.parse(offset)
    """

    CHUNK_SIZE = HEADER_CHUNK_SIZE

    def __init__(self, cursor: ByteCursor):
        self.cursor = cursor

    def parse(self, offset: int) -> Header:
        """
        Parse the header chunk at offset.

        Args:
            offset: Absolute offset of the MThd tag

        Returns:
            Header with best-effort field values

        Raises:
            TagMismatchError: If offset does not carry the MThd tag
            TruncatedChunkError: If the 14-byte chunk runs past the buffer
        """
        cursor = self.cursor
        if not cursor.matches(offset, HEADER_TAG):
            raise TagMismatchError(offset, HEADER_TAG, cursor.slice(offset, offset + TAG_SIZE))
        if not cursor.fits(offset, HEADER_CHUNK_SIZE):
            raise TruncatedChunkError(offset, HEADER_CHUNK_SIZE, cursor.remaining(offset))

        header = Header(offset=offset)

        length = cursor.u32be(offset + 4)
        warning = check_header_length(length, HEADER_DATA_LENGTH)
        if warning:
            logger.warning("%s. Continuing anyway.", warning)
            header.add_issue(
                "warning",
                IssueKind.INCONSISTENT_FIELD,
                offset + 4,
                "Header length field is not 6",
                str(HEADER_DATA_LENGTH),
                str(length),
            )
        else:
            logger.debug("Header indicates 6 bytes length")

        header.format_type = cursor.u16be(offset + 8)
        warning = check_format_type(header.format_type)
        if warning:
            logger.warning("%s. Continuing anyway.", warning)
            header.add_issue(
                "warning",
                IssueKind.INCONSISTENT_FIELD,
                offset + 8,
                "Unknown format type",
                "0-2",
                str(header.format_type),
            )

        header.track_count = cursor.u16be(offset + 10)
        header.declared_track_count = header.track_count
        logger.info(
            "Type %d header declares %d track(s)", header.format_type, header.track_count
        )

        # Format 0 carries exactly one track
        if header.format_type == 0 and header.track_count != 1:
            logger.warning(
                "Type 0 should have only 1 track, got %d. Altering type to 1.",
                header.track_count,
            )
            header.add_issue(
                "warning",
                IssueKind.INCONSISTENT_FIELD,
                offset + 8,
                "Type 0 header with track count other than 1, coerced to type 1",
                "1 track",
                f"{header.track_count} tracks",
            )
            header.format_type = 1

        # Division can't really be verified
        header.division = cursor.u16be(offset + 12)
        logger.debug("Division: %d", header.division)

        return header
