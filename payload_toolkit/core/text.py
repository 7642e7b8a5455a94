# payload_toolkit/core/text.py
import re

_NON_SLUG = re.compile(r"[^a-z0-9]+")


def slugify(text: str) -> str:
    if not text:
        raise ValueError("String vazia não é permitida.")

    slug = _NON_SLUG.sub("-", text.lower()).strip("-")
    if not slug:
        raise ValueError("Depois de remover os caracteres, o slug ficou vazio.")
    return slug
