"""Detecção de tipo de conteúdo pelos bytes iniciais (MIME sniffing).

Segue a tabela do padrão WHATWG "MIME Sniffing": o tipo declarado pelo
cliente é ignorado e apenas os primeiros ``SNIFF_LEN`` bytes são
inspecionados. Quando nada casa, o resultado é
``application/octet-stream``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import AbstractSet, Protocol

SNIFF_LEN = 512
DEFAULT_CONTENT_TYPE = "application/octet-stream"

_WS = b"\t\n\x0c\r "
_TAG_TERMINATORS = b" >"


class _Sig(Protocol):
    def match(self, data: bytes, first_non_ws: int) -> str | None: ...


@dataclass(frozen=True)
class _ExactSig:
    sig: bytes
    ct: str

    def match(self, data: bytes, first_non_ws: int) -> str | None:
        return self.ct if data.startswith(self.sig) else None


@dataclass(frozen=True)
class _MaskedSig:
    mask: bytes
    pat: bytes
    ct: str
    skip_ws: bool = False

    def match(self, data: bytes, first_non_ws: int) -> str | None:
        if self.skip_ws:
            data = data[first_non_ws:]
        if len(self.pat) != len(self.mask) or len(data) < len(self.pat):
            return None
        for i, pb in enumerate(self.pat):
            if data[i] & self.mask[i] != pb:
                return None
        return self.ct


@dataclass(frozen=True)
class _HTMLSig:
    tag: bytes

    def match(self, data: bytes, first_non_ws: int) -> str | None:
        data = data[first_non_ws:]
        if len(data) < len(self.tag) + 1:
            return None
        for i, b in enumerate(self.tag):
            db = data[i]
            if 0x41 <= b <= 0x5A:  # A-Z: compara sem caixa
                db &= 0xDF
            if b != db:
                return None
        if data[len(self.tag)] not in _TAG_TERMINATORS:
            return None
        return "text/html; charset=utf-8"


class _MP4Sig:
    def match(self, data: bytes, first_non_ws: int) -> str | None:
        if len(data) < 12:
            return None
        box_size = int.from_bytes(data[:4], "big")
        if len(data) < box_size or box_size % 4 != 0:
            return None
        if data[4:8] != b"ftyp":
            return None
        for st in range(8, box_size, 4):
            if st == 12:
                # minor version
                continue
            if data[st:st + 3] == b"mp4":
                return "video/mp4"
        return None


class _TextSig:
    def match(self, data: bytes, first_non_ws: int) -> str | None:
        for b in data[first_non_ws:]:
            if b <= 0x08 or b == 0x0B or 0x0E <= b <= 0x1A or 0x1C <= b <= 0x1F:
                return None
        return "text/plain; charset=utf-8"


def _html(*tags: str) -> list[_Sig]:
    return [_HTMLSig(t.encode("ascii")) for t in tags]


_SNIFF_SIGNATURES: list[_Sig] = [
    *_html(
        "<!DOCTYPE HTML", "<HTML", "<HEAD", "<SCRIPT", "<IFRAME", "<H1", "<DIV",
        "<FONT", "<TABLE", "<A", "<STYLE", "<TITLE", "<B", "<BODY", "<BR", "<P", "<!--",
    ),
    _MaskedSig(b"\xff\xff\xff\xff\xff", b"<?xml", "text/xml; charset=utf-8", skip_ws=True),
    _ExactSig(b"%PDF-", "application/pdf"),
    _ExactSig(b"%!PS-Adobe-", "application/postscript"),
    # BOMs UTF
    _MaskedSig(b"\xff\xff\x00\x00", b"\xfe\xff\x00\x00", "text/plain; charset=utf-16be"),
    _MaskedSig(b"\xff\xff\x00\x00", b"\xff\xfe\x00\x00", "text/plain; charset=utf-16le"),
    _MaskedSig(b"\xff\xff\xff\x00", b"\xef\xbb\xbf\x00", "text/plain; charset=utf-8"),
    # imagens
    _ExactSig(b"\x00\x00\x01\x00", "image/x-icon"),
    _ExactSig(b"\x00\x00\x02\x00", "image/x-icon"),
    _ExactSig(b"BM", "image/bmp"),
    _ExactSig(b"GIF87a", "image/gif"),
    _ExactSig(b"GIF89a", "image/gif"),
    _MaskedSig(
        b"\xff\xff\xff\xff\x00\x00\x00\x00\xff\xff\xff\xff\xff\xff",
        b"RIFF\x00\x00\x00\x00WEBPVP",
        "image/webp",
    ),
    _ExactSig(b"\x89PNG\r\n\x1a\n", "image/png"),
    _ExactSig(b"\xff\xd8\xff", "image/jpeg"),
    # áudio e vídeo
    _MaskedSig(b"\xff\xff\xff\xff", b".snd", "audio/basic"),
    _MaskedSig(b"\xff\xff\xff\xff\x00\x00\x00\x00\xff\xff\xff\xff", b"FORM\x00\x00\x00\x00AIFF", "audio/aiff"),
    _MaskedSig(b"\xff\xff\xff", b"ID3", "audio/mpeg"),
    _MaskedSig(b"\xff\xff\xff\xff\xff", b"OggS\x00", "application/ogg"),
    _MaskedSig(b"\xff\xff\xff\xff\xff\xff\xff\xff", b"MThd\x00\x00\x00\x06", "audio/midi"),
    _MaskedSig(b"\xff\xff\xff\xff\x00\x00\x00\x00\xff\xff\xff\xff", b"RIFF\x00\x00\x00\x00AVI ", "video/avi"),
    _MaskedSig(b"\xff\xff\xff\xff\x00\x00\x00\x00\xff\xff\xff\xff", b"RIFF\x00\x00\x00\x00WAVE", "audio/wave"),
    _MP4Sig(),
    _ExactSig(b"\x1a\x45\xdf\xa3", "video/webm"),
    # fontes
    _MaskedSig(b"\x00" * 34 + b"\xff\xff", b"\x00" * 34 + b"LP", "application/vnd.ms-fontobject"),
    _ExactSig(b"\x00\x01\x00\x00", "font/ttf"),
    _ExactSig(b"OTTO", "font/otf"),
    _ExactSig(b"ttcf", "font/collection"),
    _ExactSig(b"wOFF", "font/woff"),
    _ExactSig(b"wOF2", "font/woff2"),
    # arquivos compactados
    _ExactSig(b"\x1f\x8b\x08", "application/x-gzip"),
    _ExactSig(b"PK\x03\x04", "application/zip"),
    _ExactSig(b"Rar!\x1a\x07\x00", "application/x-rar-compressed"),
    _ExactSig(b"Rar!\x1a\x07\x01\x00", "application/x-rar-compressed"),
    _ExactSig(b"\x00asm", "application/wasm"),
    # precisa ser o último
    _TextSig(),
]


def detect_content_type(data: bytes) -> str:
    """Retorna o tipo de conteúdo detectado para ``data``.

    Sempre devolve um valor válido; no pior caso
    ``application/octet-stream``.
    """
    data = bytes(data[:SNIFF_LEN])

    first_non_ws = 0
    while first_non_ws < len(data) and data[first_non_ws] in _WS:
        first_non_ws += 1

    for sig in _SNIFF_SIGNATURES:
        ct = sig.match(data, first_non_ws)
        if ct:
            return ct
    return DEFAULT_CONTENT_TYPE


def content_type_allowed(detected: str, allowed: AbstractSet[str]) -> bool:
    """Compara o tipo detectado com a whitelist, sem diferenciar caixa.

    Aceita tanto o valor completo ("text/plain; charset=utf-8") quanto a
    essência ("text/plain"). Whitelist vazia aceita tudo. A whitelist já
    chega normalizada (minúsculas, sem espaços), como em
    ``UploadPolicy.allowed_content_types``.
    """
    if not allowed:
        return True

    full = detected.strip().lower()
    essence = full.split(";", 1)[0].strip()
    return full in allowed or essence in allowed
