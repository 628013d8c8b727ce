"""Test configuration and fixtures: synthetic ID3 buffers"""

import struct
from types import SimpleNamespace

import pytest

from id3reader.buffer import ByteBuffer

# MPEG 1 Layer III, 128 kbps, 44100 Hz, joint stereo, original
MPEG_HEADER = b'\xff\xfb\x90\x64'


def synchsafe(value):
    return bytes([(value >> 21) & 0x7F, (value >> 14) & 0x7F, (value >> 7) & 0x7F, value & 0x7F])


def frame(frame_id, body, version=3):
    if version >= 4:
        size = synchsafe(len(body))
    else:
        size = struct.pack('>I', len(body))
    return frame_id.encode('latin-1') + size + b'\x00\x00' + body


def text_frame(frame_id, text, encoding=0, version=3):
    if isinstance(text, str):
        codec = {0: 'latin-1', 1: 'utf-16', 2: 'utf-16-be', 3: 'utf-8'}[encoding]
        text = text.encode(codec)
    return frame(frame_id, bytes([encoding]) + text, version)


def apic_frame(mime, image, description=b'', picture_type=3, encoding=0, version=3):
    if encoding in (1, 2):
        terminator = b'\x00\x00'
    else:
        terminator = b'\x00'
    body = bytes([encoding]) + mime.encode('latin-1') + b'\x00' + bytes([picture_type])
    body += description + terminator + image
    return frame('APIC', body, version)


def id3v2_tag(frames, version=3, padding=0):
    body = b''.join(frames) + b'\x00' * padding
    return b'ID3' + bytes([version, 0, 0]) + synchsafe(len(body)) + body


def id3v1_block(title='', artist='', album='', year='', comment='', genre=255, track=None, pad=b' '):
    def field(text, width):
        return text.encode('latin-1')[:width].ljust(width, pad)

    comment_raw = field(comment, 30)
    if track is not None:
        comment_raw = field(comment, 28)[:28] + b'\x00' + bytes([track])
    block = b'TAG' + field(title, 30) + field(artist, 30) + field(album, 30) + field(year, 4)
    return block + comment_raw + bytes([genre])


@pytest.fixture
def id3():
    """Builders for synthetic ID3 structures"""
    return SimpleNamespace(
        synchsafe=synchsafe,
        frame=frame,
        text_frame=text_frame,
        apic_frame=apic_frame,
        tag=id3v2_tag,
        id3v1=id3v1_block,
        mpeg_header=MPEG_HEADER,
    )


@pytest.fixture
def image_bytes():
    # JPEG SOI + filler + EOI
    return b'\xff\xd8\xff\xe0' + bytes(range(256)) * 4 + b'\xff\xd9'


@pytest.fixture
def sample_mp3_bytes(image_bytes):
    """ID3v2.3 tag (title + cover), audio frames, trailing ID3v1 tag"""
    tag = id3v2_tag([
        text_frame('TIT2', 'Override'),
        apic_frame('image/jpeg', image_bytes, description=b'cover'),
    ], padding=64)
    audio = (MPEG_HEADER + b'\x00' * 413) * 3
    return tag + audio + id3v1_block(title='Override', artist='Yoshida Yasei', album='Override', year='2023', genre=52)


@pytest.fixture
def sample_buffer(sample_mp3_bytes):
    return ByteBuffer(sample_mp3_bytes)


@pytest.fixture
def sample_mp3_file(tmp_path, sample_mp3_bytes):
    path = tmp_path / "Yoshida Yasei - Override.mp3"
    path.write_bytes(sample_mp3_bytes)
    return path
