# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
ID3v2 frame payload decoder

Text frames (T***) start with an encoding byte:
- 0 = ISO-8859-1
- 1 = UTF-16 with byte order mark
- 2 = UTF-16BE without byte order mark
- 3 = UTF-8

UTF-16 text is reduced to its ASCII code units by default for
compatibility, which loses every non-ASCII character; pass
``UTF16Mode.FULL`` to transcode properly.

Picture frames (APIC) carry an encoding byte, a NUL-terminated Latin-1
mime type, a picture type byte, a NUL-terminated description in the frame
encoding and the raw image bytes. The image is returned as a view into the
buffer, not a copy.

Copyright 2025 DNAi inc.
"""

import logging
from dataclasses import dataclass
from typing import Tuple

from id3reader.buffer import ByteBuffer, ByteView
from id3reader.config import UTF16Mode
from id3reader.frame_walker import ID3v2FrameHeader
from id3reader.size_codec import frame_size_to_int
from id3reader.tag_locator import ID3v2TagHeader

logger = logging.getLogger(__name__)

ENCODING_LATIN1 = 0
ENCODING_UTF16 = 1
ENCODING_UTF16BE = 2
ENCODING_UTF8 = 3

DEFAULT_MIME_TYPE = 'image/jpeg'

# APIC picture type byte
PICTURE_TYPES = {
    0x00: 'Other',
    0x01: '32x32 pixels file icon (PNG only)',
    0x02: 'Other file icon',
    0x03: 'Cover (front)',
    0x04: 'Cover (back)',
    0x05: 'Leaflet page',
    0x06: 'Media (e.g. label side of CD)',
    0x07: 'Lead artist/lead performer/soloist',
    0x08: 'Artist/performer',
    0x09: 'Conductor',
    0x0A: 'Band/Orchestra',
    0x0B: 'Composer',
    0x0C: 'Lyricist/text writer',
    0x0D: 'Recording Location',
    0x0E: 'During recording',
    0x0F: 'During performance',
    0x10: 'Movie/video screen capture',
    0x11: 'A bright coloured fish',
    0x12: 'Illustration',
    0x13: 'Band/artist logotype',
    0x14: 'Publisher/Studio logotype',
}


@dataclass
class PictureFrame:
    """Decoded APIC frame. ``image`` borrows the buffer's bytes."""
    mime_type: str
    picture_type: int
    description: str
    image: ByteView

    @property
    def image_size(self) -> int:
        return self.image.length

    @property
    def picture_type_name(self) -> str:
        return PICTURE_TYPES.get(self.picture_type, 'Unknown')


def _utf16_byte_order(payload: bytes, encoding: int) -> Tuple[str, bytes]:
    if encoding == ENCODING_UTF16:
        if payload[:2] == b'\xff\xfe':
            return 'le', payload[2:]
        if payload[:2] == b'\xfe\xff':
            return 'be', payload[2:]
        # No BOM: little-endian, the common writer default
        return 'le', payload
    return 'be', payload


def decode_utf16_ascii(payload: bytes, encoding: int) -> str:
    """
    Decode UTF-16 text keeping only code units 1-127.

    Args:
        payload: Text bytes after the encoding selector
        encoding: ENCODING_UTF16 (BOM-detected order) or ENCODING_UTF16BE

    Returns:
        The ASCII characters of the text, everything else dropped
    """
    order, units = _utf16_byte_order(payload, encoding)
    chars = []
    for i in range(0, len(units) - 1, 2):
        if order == 'le':
            unit = units[i] | (units[i + 1] << 8)
        else:
            unit = (units[i] << 8) | units[i + 1]
        if 0 < unit < 128:
            chars.append(chr(unit))
    return ''.join(chars)


def decode_utf16_full(payload: bytes, encoding: int) -> str:
    """Decode UTF-16 text, surrogate pairs included."""
    order, units = _utf16_byte_order(payload, encoding)
    codec = 'utf-16-le' if order == 'le' else 'utf-16-be'
    return units.decode(codec, errors='replace')


def decode_text_payload(
    encoding: int,
    payload: bytes,
    utf16_mode: UTF16Mode = UTF16Mode.ASCII_ONLY
) -> str:
    """
    Decode text bytes under an ID3v2 encoding selector.

    Args:
        encoding: Encoding selector byte (0-3)
        payload: Text bytes
        utf16_mode: Handling of encodings 1 and 2

    Returns:
        Decoded text without trailing NUL terminators; empty string for
        unknown encodings
    """
    if encoding == ENCODING_LATIN1:
        text = payload.decode('latin-1')
    elif encoding in (ENCODING_UTF16, ENCODING_UTF16BE):
        if utf16_mode == UTF16Mode.FULL:
            text = decode_utf16_full(payload, encoding)
        else:
            text = decode_utf16_ascii(payload, encoding)
    elif encoding == ENCODING_UTF8:
        # Invalid bytes survive as surrogates and re-encode unchanged
        text = payload.decode('utf-8', errors='surrogateescape')
    else:
        logger.debug("Unknown text encoding %d", encoding)
        return ''
    return text.rstrip('\x00')


def decode_text(
    buffer: ByteBuffer,
    tag: ID3v2TagHeader,
    frame: ID3v2FrameHeader,
    utf16_mode: UTF16Mode = UTF16Mode.ASCII_ONLY
) -> str:
    """
    Decode a text frame (TIT2, TPE1, TALB, TYER, TDRC, TRCK, TCON, ...).

    Args:
        buffer: Loaded file contents
        tag: Tag the frame belongs to (selects the frame size convention)
        frame: Frame header view
        utf16_mode: Handling of UTF-16 text

    Returns:
        Decoded text, empty when the frame has no body
    """
    data = buffer.data
    start = frame.body_offset
    end = min(start + _frame_size(tag, frame), len(data))
    if end <= start:
        return ''

    encoding = data[start]
    return decode_text_payload(encoding, data[start + 1:end], utf16_mode)


def decode_picture(
    buffer: ByteBuffer,
    tag: ID3v2TagHeader,
    frame: ID3v2FrameHeader,
    utf16_mode: UTF16Mode = UTF16Mode.ASCII_ONLY
) -> PictureFrame:
    """
    Decode an APIC frame.

    Args:
        buffer: Loaded file contents
        tag: Tag the frame belongs to
        frame: APIC frame header view
        utf16_mode: Handling of a UTF-16 description

    Returns:
        PictureFrame whose image is a view into ``buffer``
    """
    data = buffer.data
    base = frame.body_offset
    size = max(0, min(_frame_size(tag, frame), len(data) - base))
    body = data[base:base + size]

    encoding = body[0] if size else ENCODING_LATIN1
    pos = 1

    # Mime type, always Latin-1
    terminator = body.find(b'\x00', pos)
    if terminator == -1:
        mime_type = ''
        pos = size + 1
    else:
        mime_type = body[pos:terminator].decode('latin-1')
        pos = terminator + 1
    if not mime_type:
        mime_type = DEFAULT_MIME_TYPE

    picture_type = body[pos] if pos < size else 0
    pos += 1

    # Description, terminator width follows the text encoding
    if encoding in (ENCODING_UTF16, ENCODING_UTF16BE):
        desc_start = pos
        while pos < size - 1 and not (body[pos] == 0 and body[pos + 1] == 0):
            pos += 2
        desc_raw = body[desc_start:min(pos, size)]
        pos += 2
        description = decode_text_payload(encoding, desc_raw, utf16_mode)
    elif encoding in (ENCODING_LATIN1, ENCODING_UTF8):
        desc_start = pos
        terminator = body.find(b'\x00', pos) if pos < size else -1
        pos = terminator if terminator != -1 else max(pos, size)
        desc_raw = body[desc_start:pos]
        pos += 1
        description = decode_text_payload(encoding, desc_raw, utf16_mode)
    else:
        # Unknown encoding: no description, image follows the type byte
        logger.debug("APIC with unknown text encoding %d", encoding)
        description = ''

    image_offset = min(base + min(pos, size), len(data))
    image_size = max(0, size - pos)
    logger.debug("APIC %s, %d image bytes at %d", mime_type, image_size, image_offset)
    return PictureFrame(
        mime_type=mime_type,
        picture_type=picture_type,
        description=description,
        image=ByteView(buffer, image_offset, image_size),
    )


def _frame_size(tag: ID3v2TagHeader, frame: ID3v2FrameHeader) -> int:
    return frame_size_to_int(tag.version_major, frame.size_bytes)
