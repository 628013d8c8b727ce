# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Exception classes for id3reader

This module defines custom exceptions for the id3reader library.
Structural absence (no tag, no frames, unknown encodings) is never
an error; these exceptions cover loading and view lifetime only.

Copyright 2025 DNAi inc.
"""


class ID3ReaderError(Exception):
    """
    Base exception for all id3reader errors.

    All id3reader exceptions inherit from this class, allowing
    catch-all error handling for any id3reader-related errors.
    """
    def __init__(self, message: str = ""):
        """
        Initialize the exception with an optional error message.

        Args:
            message: Descriptive error message explaining what went wrong
        """
        self.message = message
        super().__init__(message)


class MetadataReadError(ID3ReaderError):
    """
    Raised when a file cannot be loaded into memory.

    This exception is raised when:
    - File does not exist
    - File permissions prevent reading
    - The read itself fails part way

    Parsing never starts once this has been raised.
    """
    pass


class BufferReleasedError(ID3ReaderError):
    """
    Raised when a view is accessed after its buffer was released.

    Tag, frame and image views borrow the bytes of the buffer they were
    derived from. Copy the data out with ``tobytes()`` before releasing
    the buffer if it is needed afterwards.
    """
    pass


class InvalidViewError(ID3ReaderError):
    """
    Raised when a view would reach outside its buffer.
    """
    pass
