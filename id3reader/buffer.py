# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
In-memory byte buffer and non-owning views

The whole file is loaded once into a ByteBuffer. Every tag, frame and
picture found afterwards is a ByteView: an (offset, length) pair plus a
reference to the owning buffer. Views are validated against the buffer
on every access, so a view used after ``release()`` raises instead of
returning stale data.

Copyright 2025 DNAi inc.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from id3reader.exceptions import (
    BufferReleasedError,
    InvalidViewError,
    MetadataReadError,
)

logger = logging.getLogger(__name__)


class ByteBuffer:
    """
    Immutable, fixed-length file contents owned by one reader session.
    """

    def __init__(self, data: bytes, source: Optional[Union[str, Path]] = None):
        """
        Initialize the buffer.

        Args:
            data: File contents
            source: Optional path the data was read from (informational)
        """
        self._data: Optional[bytes] = bytes(data)
        self._length = len(self._data)
        self.source = Path(source) if source is not None else None

    @classmethod
    def load(cls, file_path: Union[str, Path]) -> "ByteBuffer":
        """
        Read a whole file into a new buffer.

        Args:
            file_path: Path to the audio file

        Returns:
            Loaded ByteBuffer

        Raises:
            MetadataReadError: If the file cannot be opened or read
        """
        path = Path(file_path)
        try:
            with open(path, 'rb') as f:
                data = f.read()
        except OSError as e:
            raise MetadataReadError(f"Failed to read {path}: {e}") from e

        logger.debug("Loaded %d bytes from %s", len(data), path)
        return cls(data, source=path)

    @property
    def data(self) -> bytes:
        """The underlying bytes. Raises once the buffer is released."""
        if self._data is None:
            raise BufferReleasedError("Buffer has been released")
        return self._data

    @property
    def released(self) -> bool:
        return self._data is None

    def release(self) -> None:
        """Drop the file contents. All derived views become invalid."""
        self._data = None

    def view(self, offset: int, length: int) -> "ByteView":
        """
        Create a view into this buffer.

        Args:
            offset: Start offset
            length: Number of bytes covered

        Returns:
            ByteView over ``[offset, offset + length)``
        """
        return ByteView(self, offset, length)

    def __len__(self) -> int:
        return self._length

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.release()

    def __repr__(self) -> str:
        state = "released" if self.released else f"{self._length} bytes"
        return f"ByteBuffer({state}, source={self.source})"


class ByteView:
    """
    Non-owning (offset, length) window into a ByteBuffer.
    """

    def __init__(self, buffer: ByteBuffer, offset: int, length: int):
        if offset < 0 or length < 0 or offset + length > len(buffer):
            raise InvalidViewError(
                f"View [{offset}, {offset + length}) outside buffer of {len(buffer)} bytes"
            )
        self.buffer = buffer
        self.offset = offset
        self.length = length

    def tobytes(self) -> bytes:
        """
        Copy the viewed bytes out of the buffer.

        Returns:
            A standalone bytes object that survives ``buffer.release()``
        """
        return self.buffer.data[self.offset:self.offset + self.length]

    @property
    def end(self) -> int:
        return self.offset + self.length

    def __len__(self) -> int:
        return self.length

    def __bytes__(self) -> bytes:
        return self.tobytes()

    def __eq__(self, other) -> bool:
        if not isinstance(other, ByteView):
            return NotImplemented
        return (
            self.buffer is other.buffer
            and self.offset == other.offset
            and self.length == other.length
        )

    def __hash__(self) -> int:
        return hash((id(self.buffer), self.offset, self.length))

    def __repr__(self) -> str:
        return f"ByteView(offset={self.offset}, length={self.length})"


def load(file_path: Union[str, Path]) -> ByteBuffer:
    """Read a whole file into a ByteBuffer (see ``ByteBuffer.load``)."""
    return ByteBuffer.load(file_path)
