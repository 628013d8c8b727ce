"""
Tests for MPEG audio frame header diagnostics.
"""

from id3reader.buffer import ByteBuffer
from id3reader.mpeg_header import find_first_frame, is_frame_header, parse_frame_header


class TestParseFrameHeader:
    """Test decoding of single headers."""

    def test_mpeg1_layer3(self, id3):
        header = parse_frame_header(id3.mpeg_header, offset=42)

        assert header.offset == 42
        assert header.version == "MPEG 1"
        assert header.layer == 3
        assert header.protected is False
        assert header.bitrate == 128
        assert header.sample_rate == 44100
        assert header.padding is False
        assert header.channel_mode == "Joint stereo"
        assert header.copyright is False
        assert header.original is True
        assert header.emphasis == "none"
        assert header.frame_length == 417

    def test_mpeg2_layer3_with_padding(self):
        # MPEG 2, Layer III, CRC, 64 kbps, 22050 Hz, padded, mono
        header = parse_frame_header(b"\xff\xf2\x82\xc0")

        assert header.version == "MPEG 2"
        assert header.layer == 3
        assert header.protected is True
        assert header.bitrate == 64
        assert header.sample_rate == 22050
        assert header.padding is True
        assert header.channel_mode == "Mono"
        assert header.frame_length == 72 * 64000 // 22050 + 1

    def test_layer1_frame_length(self):
        # MPEG 1, Layer I, 384 kbps, 48000 Hz
        header = parse_frame_header(b"\xff\xff\xc4\x00")

        assert header.layer == 1
        assert header.bitrate == 384
        assert header.sample_rate == 48000
        assert header.frame_length == (12 * 384000 // 48000) * 4

    def test_free_format_has_no_length(self):
        header = parse_frame_header(b"\xff\xfb\x00\x00")
        assert header.bitrate == 0
        assert header.frame_length is None

    def test_to_dict(self, id3):
        data = parse_frame_header(id3.mpeg_header).to_dict()
        assert data["bitrate"] == 128
        assert data["version"] == "MPEG 1"


class TestIsFrameHeader:
    """Test rejection of reserved values."""

    def test_valid(self, id3):
        assert is_frame_header(id3.mpeg_header)

    def test_no_sync(self):
        assert not is_frame_header(b"\xff\x1b\x90\x64")

    def test_reserved_version(self):
        assert not is_frame_header(b"\xff\xeb\x90\x64")

    def test_reserved_layer(self):
        assert not is_frame_header(b"\xff\xf9\x90\x64")

    def test_bad_bitrate(self):
        assert not is_frame_header(b"\xff\xfb\xf0\x64")

    def test_reserved_sample_rate(self):
        assert not is_frame_header(b"\xff\xfb\x9c\x64")

    def test_too_short(self):
        assert not is_frame_header(b"\xff\xfb")
        assert parse_frame_header(b"\xff\xfb") is None


class TestFindFirstFrame:
    """Test scanning for the first frame."""

    def test_finds_after_junk(self, id3):
        data = b"\x00\xff\x00\xff\x1f" + id3.mpeg_header + b"\x00" * 10
        header = find_first_frame(ByteBuffer(data))
        assert header.offset == 5

    def test_start_offset(self, id3):
        data = id3.mpeg_header + b"\x00" * 10 + id3.mpeg_header + b"\x00" * 4
        header = find_first_frame(ByteBuffer(data), start=1)
        assert header.offset == 14

    def test_none_found(self):
        assert find_first_frame(ByteBuffer(b"\x00" * 100)) is None
