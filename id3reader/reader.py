# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Metadata assembler and reader session

This module combines the tag locator, frame walker and payload decoder
into a single MetadataRecord, and provides the MP3Reader session class
that owns a loaded buffer.

Frames are folded in scan order: every ID3v2 tag in the buffer, every
frame in each tag. A later frame of the same kind overwrites an earlier
one, also across tags.

Copyright 2025 DNAi inc.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Any, Optional, List, Union

from id3reader.buffer import ByteBuffer, ByteView
from id3reader.config import ReaderConfig, TagScanMode
from id3reader.frame_walker import ID3v2FrameHeader, walk_frames
from id3reader.mpeg_header import MPEGFrameHeader, find_first_frame
from id3reader.payload_decoder import decode_picture, decode_text
from id3reader.tag_locator import (
    ID3v1Tag,
    ID3v2TagHeader,
    ID3V2_SIGNATURE,
    find_id3v1,
    find_id3v2_tags,
)

logger = logging.getLogger(__name__)

# Frame id -> MetadataRecord field
TEXT_FRAMES: Dict[str, str] = {
    'TIT2': 'title',
    'TPE1': 'artist',
    'TALB': 'album',
    'TYER': 'year',
    'TDRC': 'year',
    'TRCK': 'track',
    'TCON': 'genre',
}

PICTURE_FRAME = 'APIC'


@dataclass
class MetadataRecord:
    """
    Metadata assembled from the ID3v2 tags of a buffer.

    ``image`` is a view into the reader's buffer. Copy it with
    ``image.tobytes()`` before the buffer is released if it is needed later.
    """
    title: Optional[str] = None
    artist: Optional[str] = None
    album: Optional[str] = None
    year: Optional[str] = None
    track: Optional[str] = None
    genre: Optional[str] = None
    mime_type: Optional[str] = None
    picture_type: Optional[int] = None
    description: Optional[str] = None
    image_size: int = 0
    image: Optional[ByteView] = None

    @property
    def has_picture(self) -> bool:
        return self.image is not None

    def is_empty(self) -> bool:
        return not any((
            self.title, self.artist, self.album, self.year,
            self.track, self.genre, self.image is not None,
        ))


def locate_id3v1(buffer: ByteBuffer) -> Optional[ID3v1Tag]:
    """Locate the trailing ID3v1 tag (see ``tag_locator.find_id3v1``)."""
    return find_id3v1(buffer)


def locate_id3v2_tags(
    buffer: ByteBuffer,
    scan_mode: TagScanMode = TagScanMode.SCAN
) -> List[ID3v2TagHeader]:
    """Locate ID3v2 tag headers (see ``tag_locator.find_id3v2_tags``)."""
    return find_id3v2_tags(buffer, scan_mode)


def frames(buffer: ByteBuffer, tag: ID3v2TagHeader) -> List[ID3v2FrameHeader]:
    """Enumerate the frames of one tag (see ``frame_walker.walk_frames``)."""
    return walk_frames(buffer, tag)


def extract_metadata(buffer: ByteBuffer, config: Optional[ReaderConfig] = None) -> MetadataRecord:
    """
    Assemble a MetadataRecord from every ID3v2 tag in the buffer.

    Args:
        buffer: Loaded file contents
        config: Optional reader configuration (defaults to ReaderConfig())

    Returns:
        MetadataRecord; all fields empty when the buffer has no ID3v2 tags
    """
    config = config or ReaderConfig()
    record = MetadataRecord()

    tags = find_id3v2_tags(buffer, config.scan_mode)
    for tag in tags:
        if tag.version_major < 2 or tag.version_major > 4:
            logger.debug("Tag at %d has unexpected version %s", tag.offset, tag.version)
        for frame in walk_frames(buffer, tag):
            frame_id = frame.frame_id
            if frame_id in TEXT_FRAMES:
                setattr(record, TEXT_FRAMES[frame_id], decode_text(buffer, tag, frame, config.utf16_mode))
            elif frame_id == PICTURE_FRAME:
                picture = decode_picture(buffer, tag, frame, config.utf16_mode)
                record.mime_type = picture.mime_type
                record.picture_type = picture.picture_type
                record.description = picture.description
                record.image_size = picture.image_size
                record.image = picture.image

    return record


class MP3Reader:
    """
    Reader session over one loaded audio file.

    Owns the ByteBuffer; every tag, frame and image view handed out stays
    valid until ``close()`` (or the end of a ``with`` block).
    """

    def __init__(
        self,
        source: Union[str, Path, ByteBuffer],
        config: Optional[ReaderConfig] = None
    ):
        """
        Initialize the reader.

        Args:
            source: Path to an audio file, or an already loaded ByteBuffer
            config: Optional reader configuration

        Raises:
            MetadataReadError: If the file cannot be read
        """
        if isinstance(source, ByteBuffer):
            self.buffer = source
        else:
            self.buffer = ByteBuffer.load(source)
        self.config = config or ReaderConfig()

    @property
    def file_path(self) -> Optional[Path]:
        return self.buffer.source

    def get_metadata(self) -> MetadataRecord:
        return extract_metadata(self.buffer, self.config)

    def get_id3v1_tag(self) -> Optional[ID3v1Tag]:
        return find_id3v1(self.buffer)

    def get_id3v2_tags(self) -> List[ID3v2TagHeader]:
        return find_id3v2_tags(self.buffer, self.config.scan_mode)

    def get_first_frame(self) -> Optional[MPEGFrameHeader]:
        """
        Find the first MPEG audio frame.

        The search starts after a leading ID3v2 tag so that sync-like bytes
        inside tag data are skipped.
        """
        start = 0
        data = self.buffer.data
        if len(data) >= 10 and data[:3] == ID3V2_SIGNATURE:
            start = ID3v2TagHeader(self.buffer, 0).end
        return find_first_frame(self.buffer, start)

    def to_dict(
        self,
        include_frame_info: bool = False,
        record: Optional[MetadataRecord] = None
    ) -> Dict[str, Any]:
        """
        Flatten everything found into ``Group:Tag`` keys.

        Args:
            include_frame_info: Also decode the first MPEG audio frame header
            record: Result of an earlier ``get_metadata`` call to reuse

        Returns:
            Dictionary of tag names to values
        """
        metadata: Dict[str, Any] = {}
        if self.file_path is not None:
            metadata['File:FileName'] = self.file_path.name
        metadata['File:FileSize'] = len(self.buffer)

        tags = self.get_id3v2_tags()
        if tags:
            metadata['ID3v2:TagCount'] = len(tags)
            metadata['ID3v2:Version'] = tags[0].version

        if record is None:
            record = self.get_metadata()
        for key, value in (
            ('Title', record.title),
            ('Artist', record.artist),
            ('Album', record.album),
            ('Year', record.year),
            ('Track', record.track),
            ('Genre', record.genre),
        ):
            if value:
                metadata[f'ID3v2:{key}'] = value
        if record.image is not None:
            metadata['ID3v2:PictureMIMEType'] = record.mime_type
            metadata['ID3v2:PictureType'] = record.picture_type
            if record.description:
                metadata['ID3v2:PictureDescription'] = record.description
            metadata['ID3v2:PictureLength'] = record.image_size

        id3v1 = self.get_id3v1_tag()
        if id3v1 is not None:
            for key, value in (
                ('Title', id3v1.title),
                ('Artist', id3v1.artist),
                ('Album', id3v1.album),
                ('Year', id3v1.year),
                ('Comment', id3v1.comment),
                ('Track', id3v1.track),
                ('Genre', id3v1.genre_name),
            ):
                if value:
                    metadata[f'ID3v1:{key}'] = value

        if include_frame_info:
            header = self.get_first_frame()
            if header is not None:
                metadata['MPEG:MPEGAudioVersion'] = header.version
                metadata['MPEG:AudioLayer'] = header.layer
                metadata['MPEG:AudioBitrate'] = f"{header.bitrate} kbps"
                metadata['MPEG:SampleRate'] = header.sample_rate
                metadata['MPEG:ChannelMode'] = header.channel_mode
                metadata['MPEG:Emphasis'] = header.emphasis
                if header.frame_length is not None:
                    metadata['MPEG:FrameLength'] = header.frame_length

        return metadata

    def close(self) -> None:
        """Release the buffer. Views handed out earlier become invalid."""
        self.buffer.release()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()

