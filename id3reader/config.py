# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Reader configuration

Copyright 2025 DNAi inc.
"""

from enum import Enum


class TagScanMode(Enum):
    """How ID3v2 tag headers are located in the buffer."""
    SCAN = "scan"  # Report every "ID3" signature at any offset
    ANCHORED = "anchored"  # Tag at offset 0, further tags only after the previous one ends


class UTF16Mode(Enum):
    """How text frames with encoding 1 or 2 are decoded."""
    ASCII_ONLY = "ascii_only"  # Keep only code units 1-127 (lossy)
    FULL = "full"  # Proper UTF-16 transcoding, surrogate pairs included


class ReaderConfig:
    """
    Configuration for metadata extraction.

    The defaults keep the compatible behaviour: a brute-force tag scan
    and ASCII-only UTF-16 text. Both stricter/correct variants are opt-in.
    """

    def __init__(
        self,
        scan_mode: TagScanMode = TagScanMode.SCAN,
        utf16_mode: UTF16Mode = UTF16Mode.ASCII_ONLY,
    ):
        """
        Initialize reader configuration.

        Args:
            scan_mode: Tag location strategy (SCAN or ANCHORED)
            utf16_mode: UTF-16 text handling (ASCII_ONLY or FULL)
        """
        self.scan_mode = TagScanMode(scan_mode)
        self.utf16_mode = UTF16Mode(utf16_mode)

    def __repr__(self) -> str:
        return f"ReaderConfig(scan_mode={self.scan_mode.value}, utf16_mode={self.utf16_mode.value})"
