import pytest

from payload_toolkit.core.policies import UploadPolicy
from payload_toolkit.infrastructure.sniffing.content_type import (
    DEFAULT_CONTENT_TYPE,
    content_type_allowed,
    detect_content_type,
)

from conftest import JPEG_BYTES, PNG_BYTES


@pytest.mark.parametrize(
    "data, expected",
    [
        (b"", "text/plain; charset=utf-8"),
        (b"\x00\x01\x02\x03", DEFAULT_CONTENT_TYPE),
        (PNG_BYTES, "image/png"),
        (JPEG_BYTES, "image/jpeg"),
        (b"GIF89a\x01\x00\x01\x00", "image/gif"),
        (b"%PDF-1.7\n", "application/pdf"),
        (b"   \n<!DOCTYPE html><html></html>", "text/html; charset=utf-8"),
        (b"<HtMl>", "text/html; charset=utf-8"),
        (b"<htmlx>", "text/plain; charset=utf-8"),
        (b"\n<?xml version='1.0'?>", "text/xml; charset=utf-8"),
        (b"\xef\xbb\xbfhello", "text/plain; charset=utf-8"),
        (b"\xfe\xff\x00h", "text/plain; charset=utf-16be"),
        (b"RIFF\x00\x00\x00\x00WEBPVP8 ", "image/webp"),
        (b"RIFF\x24\x00\x00\x00WAVEfmt ", "audio/wave"),
        (b"\x00\x00\x00\x18ftypmp42\x00\x00\x00\x00mp42isom", "video/mp4"),
        (b"\x1f\x8b\x08\x00", "application/x-gzip"),
        (b"PK\x03\x04\x14\x00", "application/zip"),
        (b"wOF2\x00\x01", "font/woff2"),
        (b"\x00asm\x01\x00\x00\x00", "application/wasm"),
        (b"plain text, nothing else", "text/plain; charset=utf-8"),
    ],
)
def test_detect_content_type(data, expected):
    assert detect_content_type(data) == expected


def test_detect_content_type_only_looks_at_first_512_bytes():
    data = b"a" * 512 + b"\x00\x01"
    assert detect_content_type(data) == "text/plain; charset=utf-8"


@pytest.mark.parametrize(
    "detected, allowed, expected",
    [
        ("image/png", [], True),
        ("image/png", ["image/png"], True),
        ("image/png", ["IMAGE/PNG"], True),
        ("image/png", ["image/jpeg"], False),
        ("text/plain; charset=utf-8", ["text/plain"], True),
        ("text/plain; charset=utf-8", ["TEXT/PLAIN; CHARSET=UTF-8"], True),
        ("text/html; charset=utf-8", ["text/plain"], False),
    ],
)
def test_content_type_allowed(detected, allowed, expected):
    policy = UploadPolicy(allowed_content_types=frozenset(allowed))
    assert content_type_allowed(detected, policy.allowed_content_types) is expected
