# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
ID3v2 frame walker

Enumerates the frame records of a located ID3v2 tag. Each frame starts
with a 10-byte header: 4-byte identifier, 4-byte body size (plain for
ID3v2.2/2.3, synchsafe for ID3v2.4) and 2 flag bytes.

Copyright 2025 DNAi inc.
"""

import logging
from typing import List

from id3reader.buffer import ByteBuffer, ByteView
from id3reader.size_codec import frame_size_to_int
from id3reader.tag_locator import ID3v2TagHeader

logger = logging.getLogger(__name__)

FRAME_HEADER_SIZE = 10


class ID3v2FrameHeader:
    """
    View over a 10-byte frame header inside an ID3v2 tag.
    """

    def __init__(self, tag: ID3v2TagHeader, offset: int):
        self.tag = tag
        self.view = ByteView(tag.buffer, offset, FRAME_HEADER_SIZE)

    @property
    def offset(self) -> int:
        return self.view.offset

    @property
    def frame_id(self) -> str:
        data = self.view.buffer.data
        return data[self.offset:self.offset + 4].decode('latin-1')

    @property
    def size_bytes(self) -> bytes:
        data = self.view.buffer.data
        return data[self.offset + 4:self.offset + 8]

    @property
    def size(self) -> int:
        """Frame body length, decoded for the enclosing tag's version."""
        return frame_size_to_int(self.tag.version_major, self.size_bytes)

    @property
    def flags(self) -> bytes:
        data = self.view.buffer.data
        return data[self.offset + 8:self.offset + 10]

    @property
    def body_offset(self) -> int:
        return self.offset + FRAME_HEADER_SIZE

    @property
    def body(self) -> ByteView:
        return ByteView(self.view.buffer, self.body_offset, self.size)

    def __eq__(self, other) -> bool:
        if not isinstance(other, ID3v2FrameHeader):
            return NotImplemented
        return self.view == other.view

    def __hash__(self) -> int:
        return hash(self.view)

    def __repr__(self) -> str:
        return f"ID3v2FrameHeader(id={self.frame_id!r}, offset={self.offset}, size={self.size})"


def walk_frames(buffer: ByteBuffer, tag: ID3v2TagHeader) -> List[ID3v2FrameHeader]:
    """
    Enumerate the frames of an ID3v2 tag.

    Walking stops at the first of: too few bytes left in the buffer for a
    frame header, no room left in the declared tag body for another frame
    header, a zero identifier byte (padding), or a frame whose declared size
    runs past the tag body or the buffer.

    Args:
        buffer: Loaded file contents
        tag: Tag header located in ``buffer``

    Returns:
        Frame headers in file order
    """
    data = buffer.data
    length = len(data)
    start = tag.frames_offset
    tag_end = start + tag.size
    frames: List[ID3v2FrameHeader] = []

    pos = start
    while True:
        if pos + FRAME_HEADER_SIZE > length:
            logger.debug("Tag at %d: buffer ends before frame header at %d", tag.offset, pos)
            break
        if pos >= tag_end - FRAME_HEADER_SIZE:
            break
        if data[pos] == 0:
            logger.debug("Tag at %d: padding reached at %d", tag.offset, pos)
            break

        frame = ID3v2FrameHeader(tag, pos)
        frame_end = frame.body_offset + frame.size
        if frame_end > tag_end or frame_end > length:
            logger.warning(
                "Tag at %d: frame %r at %d declares %d bytes past the tag body, stopping",
                tag.offset, frame.frame_id, pos, frame_end - min(tag_end, length)
            )
            break

        frames.append(frame)
        pos = frame_end

    logger.debug("Tag at %d: %d frame(s)", tag.offset, len(frames))
    return frames
