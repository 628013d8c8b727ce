"""
Tests for ID3v2 frame enumeration.
"""

import struct

from id3reader.buffer import ByteBuffer
from id3reader.frame_walker import walk_frames
from id3reader.tag_locator import find_id3v2_tags


def _walk(data):
    buffer = ByteBuffer(data)
    tag = find_id3v2_tags(buffer)[0]
    return tag, walk_frames(buffer, tag)


class TestWalkFrames:
    """Test frame walking and its stop conditions."""

    def test_frames_in_order(self, id3):
        data = id3.tag([
            id3.text_frame("TIT2", "Title"),
            id3.text_frame("TPE1", "Artist"),
            id3.text_frame("TXXX", "custom"),
        ]) + b"\x00" * 32
        tag, frames = _walk(data)

        assert [f.frame_id for f in frames] == ["TIT2", "TPE1", "TXXX"]
        assert frames[0].offset == 10
        assert frames[0].size == 6
        assert frames[1].offset == 10 + 10 + 6

    def test_stops_at_padding(self, id3):
        data = id3.tag([id3.text_frame("TIT2", "Title")], padding=100) + b"\x00" * 16
        _, frames = _walk(data)
        assert [f.frame_id for f in frames] == ["TIT2"]

    def test_v24_synchsafe_frame_size(self, id3):
        long_text = "x" * 200
        data = id3.tag([
            id3.text_frame("TIT2", long_text, version=4),
            id3.text_frame("TALB", "Album", version=4),
        ], version=4) + b"\x00" * 16
        _, frames = _walk(data)

        assert [f.frame_id for f in frames] == ["TIT2", "TALB"]
        assert frames[0].size == 201
        assert frames[0].size_bytes == bytes([0, 0, 1, 73])

    def test_stops_when_no_room_for_header(self, id3):
        # Declared body leaves fewer than 10 bytes after the first frame
        body = id3.text_frame("TIT2", "Title") + b"TPE1\x00"
        data = b"ID3\x03\x00\x00" + id3.synchsafe(len(body)) + body + b"\xff" * 40
        _, frames = _walk(data)
        assert [f.frame_id for f in frames] == ["TIT2"]

    def test_oversized_frame_stops_walk(self, id3):
        bogus = b"TPE1" + struct.pack(">I", 0x7FFFFFFF) + b"\x00\x00" + b"\x00abc"
        data = id3.tag([id3.text_frame("TIT2", "Title"), bogus]) + b"\x00" * 16
        _, frames = _walk(data)
        assert [f.frame_id for f in frames] == ["TIT2"]

    def test_truncated_buffer(self, id3):
        data = id3.tag([id3.text_frame("TIT2", "Title"), id3.text_frame("TPE1", "Artist")])
        _, frames = _walk(data[:30])
        assert [f.frame_id for f in frames] == ["TIT2"]

    def test_frames_stay_inside_declared_body(self, id3):
        frames_data = [id3.text_frame("T%03d" % i, "v" * i) for i in range(12)]
        data = id3.tag(frames_data, padding=3) + b"\x00" * 50
        tag, frames = _walk(data)

        assert len(frames) == 12
        for frame in frames:
            assert frame.body_offset + frame.size <= tag.offset + 10 + tag.size

    def test_walk_is_repeatable(self, id3):
        data = id3.tag([id3.text_frame("TIT2", "Title")]) + b"\x00" * 16
        buffer = ByteBuffer(data)
        tag = find_id3v2_tags(buffer)[0]

        assert walk_frames(buffer, tag) == walk_frames(buffer, tag)

    def test_frame_body_view(self, id3):
        data = id3.tag([id3.text_frame("TIT2", "Title")]) + b"\x00" * 16
        _, frames = _walk(data)
        assert frames[0].body.tobytes() == b"\x00Title"
