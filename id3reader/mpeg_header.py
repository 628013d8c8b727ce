# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
MPEG audio frame header diagnostics

Decodes the 4-byte header of the first MPEG audio frame for display.
None of this feeds into tag extraction.

Header bits (most significant first):
    AAAAAAAA AAABBCCD EEEEFFGH IIJJKLMM
    A sync (all ones), B version, C layer, D protection,
    E bitrate index, F sample rate index, G padding, H private,
    I channel mode, J mode extension, K copyright, L original, M emphasis

Copyright 2025 DNAi inc.
"""

import logging
import struct
from dataclasses import dataclass, asdict
from typing import Dict, Any, Optional

from id3reader.buffer import ByteBuffer

logger = logging.getLogger(__name__)

# Version bits
MPEG_2_5 = 0
MPEG_RESERVED = 1
MPEG_2 = 2
MPEG_1 = 3

VERSION_NAMES = ('MPEG 2.5', 'Reserved', 'MPEG 2', 'MPEG 1')

# kbps, rows are Layer I, II, III
BITRATES_MPEG1 = (
    (0, 32, 64, 96, 128, 160, 192, 224, 256, 288, 320, 352, 384, 416, 448, 0),
    (0, 32, 48, 56, 64, 80, 96, 112, 128, 160, 192, 224, 256, 320, 384, 0),
    (0, 32, 40, 48, 56, 64, 80, 96, 112, 128, 160, 192, 224, 256, 320, 0),
)

# kbps for MPEG 2 and 2.5, rows are Layer I, II, III
BITRATES_MPEG2 = (
    (0, 32, 48, 56, 64, 80, 96, 112, 128, 144, 160, 176, 192, 224, 256, 0),
    (0, 8, 16, 24, 32, 40, 48, 56, 64, 80, 96, 112, 128, 144, 160, 0),
    (0, 8, 16, 24, 32, 40, 48, 56, 64, 80, 96, 112, 128, 144, 160, 0),
)

# Hz, indexed by version bits
SAMPLE_RATES = {
    MPEG_1: (44100, 48000, 32000, 0),
    MPEG_2: (22050, 24000, 16000, 0),
    MPEG_2_5: (11025, 12000, 8000, 0),
}

CHANNEL_MODES = ('Stereo', 'Joint stereo', 'Dual Mono', 'Mono')

EMPHASIS = ('none', '50/15 ms', 'Reserved', 'CCIT J.17')


@dataclass(frozen=True)
class MPEGFrameHeader:
    """Decoded MPEG audio frame header."""
    offset: int
    version: str
    layer: int
    protected: bool
    bitrate: int  # kbps, 0 for free format
    sample_rate: int  # Hz
    padding: bool
    channel_mode: str
    copyright: bool
    original: bool
    emphasis: str
    frame_length: Optional[int]  # bytes, None for free format

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def is_frame_header(header: bytes) -> bool:
    """
    Check whether 4 bytes form a plausible MPEG audio frame header.

    Args:
        header: Candidate header bytes

    Returns:
        True when the sync word is set and no field holds a reserved value
    """
    if len(header) < 4:
        return False
    value = struct.unpack('>I', header[:4])[0]
    if (value >> 21) & 0x7FF != 0x7FF:
        return False
    if (value >> 19) & 0x03 == MPEG_RESERVED:
        return False
    if (value >> 17) & 0x03 == 0:
        return False
    if (value >> 12) & 0x0F == 0x0F:
        return False
    if (value >> 10) & 0x03 == 3:
        return False
    return True


def parse_frame_header(header: bytes, offset: int = 0) -> Optional[MPEGFrameHeader]:
    """
    Decode a 4-byte MPEG audio frame header.

    Args:
        header: Header bytes
        offset: Position of the header in the file (informational)

    Returns:
        MPEGFrameHeader, or None if the bytes are not a valid header
    """
    if not is_frame_header(header):
        return None

    value = struct.unpack('>I', header[:4])[0]
    version_bits = (value >> 19) & 0x03
    layer = 4 - ((value >> 17) & 0x03)
    bitrate_index = (value >> 12) & 0x0F
    sample_rate_index = (value >> 10) & 0x03
    padding = (value >> 9) & 0x01

    table = BITRATES_MPEG1 if version_bits == MPEG_1 else BITRATES_MPEG2
    bitrate = table[layer - 1][bitrate_index]
    sample_rate = SAMPLE_RATES[version_bits][sample_rate_index]

    frame_length = None
    if bitrate:
        bps = bitrate * 1000
        if layer == 1:
            frame_length = (12 * bps // sample_rate + padding) * 4
        elif layer == 3 and version_bits != MPEG_1:
            frame_length = 72 * bps // sample_rate + padding
        else:
            frame_length = 144 * bps // sample_rate + padding

    return MPEGFrameHeader(
        offset=offset,
        version=VERSION_NAMES[version_bits],
        layer=layer,
        protected=not (value >> 16) & 0x01,
        bitrate=bitrate,
        sample_rate=sample_rate,
        padding=bool(padding),
        channel_mode=CHANNEL_MODES[(value >> 6) & 0x03],
        copyright=bool((value >> 3) & 0x01),
        original=bool((value >> 2) & 0x01),
        emphasis=EMPHASIS[value & 0x03],
        frame_length=frame_length,
    )


def find_first_frame(buffer: ByteBuffer, start: int = 0) -> Optional[MPEGFrameHeader]:
    """
    Find the first MPEG audio frame header at or after ``start``.

    Args:
        buffer: Loaded file contents
        start: Offset to start scanning from

    Returns:
        Decoded header, or None if no frame sync is found
    """
    data = buffer.data
    pos = data.find(b'\xff', max(start, 0))
    while 0 <= pos <= len(data) - 4:
        if is_frame_header(data[pos:pos + 4]):
            logger.debug("First MPEG frame at offset %d", pos)
            return parse_frame_header(data[pos:pos + 4], offset=pos)
        pos = data.find(b'\xff', pos + 1)
    return None
