# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
ID3v2 size field codec

Tag header sizes are always synchsafe (7 bits per byte). Frame sizes are
plain big-endian integers up to ID3v2.3 and synchsafe from ID3v2.4 on.

Copyright 2025 DNAi inc.
"""

import struct
from typing import Sequence


def synchsafe_to_int(size_bytes: Sequence[int]) -> int:
    """
    Decode a 4-byte synchsafe integer.

    Args:
        size_bytes: Four size bytes, most significant first

    Returns:
        Decoded size (28 significant bits)
    """
    b0, b1, b2, b3 = size_bytes[:4]
    return ((b0 & 0x7F) << 21) | ((b1 & 0x7F) << 14) | ((b2 & 0x7F) << 7) | (b3 & 0x7F)


def plain_to_int(size_bytes: Sequence[int]) -> int:
    """Decode a 4-byte big-endian unsigned integer."""
    return struct.unpack('>I', bytes(size_bytes[:4]))[0]


def frame_size_to_int(version_major: int, size_bytes: Sequence[int]) -> int:
    """
    Decode a frame size field for the given tag major version.

    Args:
        version_major: Major version of the enclosing ID3v2 tag
        size_bytes: Four size bytes from the frame header

    Returns:
        Frame body length in bytes
    """
    if version_major >= 4:
        return synchsafe_to_int(size_bytes)
    return plain_to_int(size_bytes)
