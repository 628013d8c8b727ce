# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
ID3 tag locator

This module finds ID3v1 and ID3v2 tags inside a loaded ByteBuffer.

ID3v1 is a fixed 128-byte block that must be the last 128 bytes of the
file. ID3v2 tags start with a 10-byte header ('ID3', version, flags,
synchsafe body size). By default every occurrence of the 'ID3' signature
is reported, at any offset, which also picks up signatures that happen to
appear inside unrelated binary data. The anchored mode only accepts a tag
at offset 0 and further tags that start after the previous one ends.

Copyright 2025 DNAi inc.
"""

import logging
from typing import List, Optional

from id3reader.buffer import ByteBuffer, ByteView
from id3reader.config import TagScanMode
from id3reader.genres import genre_name
from id3reader.size_codec import synchsafe_to_int

logger = logging.getLogger(__name__)

ID3V1_SIGNATURE = b'TAG'
ID3V1_SIZE = 128

ID3V2_SIGNATURE = b'ID3'
ID3V2_HEADER_SIZE = 10


def _latin1_field(raw: bytes) -> str:
    # Fixed-width fields are padded with NULs or spaces
    return raw.split(b'\x00', 1)[0].decode('latin-1').rstrip(' ')


class ID3v1Tag:
    """
    View over the 128-byte ID3v1 block at the end of the buffer.

    Layout: 'TAG'(3) title(30) artist(30) album(30) year(4) comment(30) genre(1).
    ID3v1.1 stores a track number in the last comment byte when the byte
    before it is zero.
    """

    def __init__(self, buffer: ByteBuffer, offset: int):
        self.view = ByteView(buffer, offset, ID3V1_SIZE)

    @property
    def offset(self) -> int:
        return self.view.offset

    def _raw(self, start: int, length: int) -> bytes:
        data = self.view.buffer.data
        base = self.view.offset + start
        return data[base:base + length]

    @property
    def magic(self) -> bytes:
        return self._raw(0, 3)

    @property
    def title(self) -> str:
        return _latin1_field(self._raw(3, 30))

    @property
    def artist(self) -> str:
        return _latin1_field(self._raw(33, 30))

    @property
    def album(self) -> str:
        return _latin1_field(self._raw(63, 30))

    @property
    def year(self) -> str:
        return _latin1_field(self._raw(93, 4))

    @property
    def comment(self) -> str:
        raw = self._raw(97, 30)
        if self.track is not None:
            raw = raw[:28]
        return _latin1_field(raw)

    @property
    def track(self) -> Optional[int]:
        """ID3v1.1 track number, or None for a plain ID3v1 tag."""
        raw = self._raw(97, 30)
        if raw[28] == 0 and raw[29] != 0:
            return raw[29]
        return None

    @property
    def genre(self) -> int:
        return self._raw(127, 1)[0]

    @property
    def genre_name(self) -> Optional[str]:
        return genre_name(self.genre)

    def __repr__(self) -> str:
        return f"ID3v1Tag(offset={self.offset}, title={self.title!r}, artist={self.artist!r})"


class ID3v2TagHeader:
    """
    View over a 10-byte ID3v2 tag header.

    The size field is always synchsafe and covers the tag body, not the
    header itself.
    """

    def __init__(self, buffer: ByteBuffer, offset: int):
        self.view = ByteView(buffer, offset, ID3V2_HEADER_SIZE)

    @property
    def buffer(self) -> ByteBuffer:
        return self.view.buffer

    @property
    def offset(self) -> int:
        return self.view.offset

    def _byte(self, index: int) -> int:
        return self.view.buffer.data[self.view.offset + index]

    @property
    def version_major(self) -> int:
        return self._byte(3)

    @property
    def version_minor(self) -> int:
        return self._byte(4)

    @property
    def flags(self) -> int:
        return self._byte(5)

    @property
    def size_bytes(self) -> bytes:
        data = self.view.buffer.data
        return data[self.offset + 6:self.offset + 10]

    @property
    def size(self) -> int:
        """Declared tag body size in bytes (header excluded)."""
        return synchsafe_to_int(self.size_bytes)

    @property
    def frames_offset(self) -> int:
        return self.offset + ID3V2_HEADER_SIZE

    @property
    def end(self) -> int:
        """Offset just past the declared tag body."""
        return self.frames_offset + self.size

    @property
    def version(self) -> str:
        return f"2.{self.version_major}.{self.version_minor}"

    def __eq__(self, other) -> bool:
        if not isinstance(other, ID3v2TagHeader):
            return NotImplemented
        return self.view == other.view

    def __hash__(self) -> int:
        return hash(self.view)

    def __repr__(self) -> str:
        return f"ID3v2TagHeader(offset={self.offset}, version={self.version}, size={self.size})"


def find_id3v1(buffer: ByteBuffer) -> Optional[ID3v1Tag]:
    """
    Locate the ID3v1 tag at the end of the buffer.

    Args:
        buffer: Loaded file contents

    Returns:
        ID3v1Tag view, or None when the buffer has no ID3v1 tag
    """
    length = len(buffer)
    if length < ID3V1_SIZE:
        return None

    offset = length - ID3V1_SIZE
    if buffer.data[offset:offset + 3] != ID3V1_SIGNATURE:
        return None

    logger.debug("ID3v1 tag at offset %d", offset)
    return ID3v1Tag(buffer, offset)


def find_id3v2_tags(
    buffer: ByteBuffer,
    scan_mode: TagScanMode = TagScanMode.SCAN
) -> List[ID3v2TagHeader]:
    """
    Locate ID3v2 tag headers.

    Args:
        buffer: Loaded file contents
        scan_mode: SCAN reports every 'ID3' signature at offsets
                   ``0 <= i < len(buffer) - 10``; ANCHORED requires a tag at
                   offset 0 and resumes the search after each tag body

    Returns:
        Tag headers ordered by offset, earliest first
    """
    if scan_mode == TagScanMode.ANCHORED:
        return _find_anchored(buffer)

    data = buffer.data
    limit = len(data) - ID3V2_HEADER_SIZE
    tags = []
    i = data.find(ID3V2_SIGNATURE, 0)
    while 0 <= i < limit:
        tags.append(ID3v2TagHeader(buffer, i))
        i = data.find(ID3V2_SIGNATURE, i + 1)

    logger.debug("Found %d ID3v2 tag header(s)", len(tags))
    return tags


def _find_anchored(buffer: ByteBuffer) -> List[ID3v2TagHeader]:
    data = buffer.data
    limit = len(data) - ID3V2_HEADER_SIZE
    tags: List[ID3v2TagHeader] = []
    if limit <= 0 or data[:3] != ID3V2_SIGNATURE:
        return tags

    tag = ID3v2TagHeader(buffer, 0)
    tags.append(tag)
    i = data.find(ID3V2_SIGNATURE, tag.end)
    while 0 <= i < limit:
        tag = ID3v2TagHeader(buffer, i)
        tags.append(tag)
        i = data.find(ID3V2_SIGNATURE, max(tag.end, i + 1))

    logger.debug("Found %d anchored ID3v2 tag header(s)", len(tags))
    return tags
