# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
id3reader - Pure Python ID3 tag reader

Reads ID3v1 and ID3v2 (2.2-2.4) metadata from audio files by parsing
the tag structures directly, without decoding audio.

All parsing runs over one in-memory buffer; tags, frames and embedded
pictures are views into it.

Copyright 2025 DNAi inc.
"""

__version__ = "0.1.0"
__author__ = "DNAi inc."

from id3reader.buffer import ByteBuffer, ByteView, load
from id3reader.config import ReaderConfig, TagScanMode, UTF16Mode
from id3reader.exceptions import (
    ID3ReaderError,
    MetadataReadError,
    BufferReleasedError,
    InvalidViewError,
)
from id3reader.size_codec import synchsafe_to_int, plain_to_int, frame_size_to_int
from id3reader.tag_locator import ID3v1Tag, ID3v2TagHeader
from id3reader.frame_walker import ID3v2FrameHeader
from id3reader.payload_decoder import PictureFrame, decode_text, decode_picture
from id3reader.mpeg_header import MPEGFrameHeader, find_first_frame
from id3reader.reader import (
    MetadataRecord,
    MP3Reader,
    extract_metadata,
    frames,
    locate_id3v1,
    locate_id3v2_tags,
)

__all__ = [
    "ByteBuffer",
    "ByteView",
    "load",
    "ReaderConfig",
    "TagScanMode",
    "UTF16Mode",
    "ID3ReaderError",
    "MetadataReadError",
    "BufferReleasedError",
    "InvalidViewError",
    "synchsafe_to_int",
    "plain_to_int",
    "frame_size_to_int",
    "ID3v1Tag",
    "ID3v2TagHeader",
    "ID3v2FrameHeader",
    "PictureFrame",
    "decode_text",
    "decode_picture",
    "MPEGFrameHeader",
    "find_first_frame",
    "MetadataRecord",
    "MP3Reader",
    "extract_metadata",
    "frames",
    "locate_id3v1",
    "locate_id3v2_tags",
]
