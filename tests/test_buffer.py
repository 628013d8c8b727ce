"""
Tests for the byte buffer, its loader and view lifetime.
"""

import pytest

from id3reader.buffer import ByteBuffer, ByteView, load
from id3reader.exceptions import BufferReleasedError, InvalidViewError, MetadataReadError


class TestByteBufferLoad:
    """Test loading files into memory."""

    def test_load_reads_whole_file(self, tmp_path):
        path = tmp_path / "a.bin"
        path.write_bytes(b"0123456789")

        buffer = load(path)

        assert len(buffer) == 10
        assert buffer.data == b"0123456789"
        assert buffer.source == path

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(MetadataReadError) as exc_info:
            ByteBuffer.load(tmp_path / "missing.mp3")

        assert "missing.mp3" in exc_info.value.message
        assert isinstance(exc_info.value.__cause__, OSError)

    def test_directory_raises(self, tmp_path):
        with pytest.raises(MetadataReadError):
            ByteBuffer.load(tmp_path)


class TestByteView:
    """Test non-owning views."""

    def test_tobytes_copies_range(self):
        buffer = ByteBuffer(b"abcdefgh")
        view = buffer.view(2, 3)

        assert view.tobytes() == b"cde"
        assert len(view) == 3
        assert view.end == 5

    def test_empty_view_at_end(self):
        buffer = ByteBuffer(b"abc")
        assert buffer.view(3, 0).tobytes() == b""

    def test_out_of_bounds_rejected(self):
        buffer = ByteBuffer(b"abc")
        with pytest.raises(InvalidViewError):
            ByteView(buffer, 2, 2)
        with pytest.raises(InvalidViewError):
            ByteView(buffer, -1, 1)

    def test_equality_requires_same_buffer(self):
        first = ByteBuffer(b"abcdef")
        second = ByteBuffer(b"abcdef")

        assert first.view(1, 2) == first.view(1, 2)
        assert first.view(1, 2) != second.view(1, 2)
        assert first.view(1, 2) != first.view(1, 3)

    def test_view_invalid_after_release(self):
        buffer = ByteBuffer(b"abcdef")
        view = buffer.view(0, 3)
        copied = view.tobytes()

        buffer.release()

        assert buffer.released
        assert copied == b"abc"
        with pytest.raises(BufferReleasedError):
            view.tobytes()

    def test_context_manager_releases(self):
        with ByteBuffer(b"abc") as buffer:
            view = buffer.view(0, 1)
            assert view.tobytes() == b"a"

        with pytest.raises(BufferReleasedError):
            buffer.data
