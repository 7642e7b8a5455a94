# payload_toolkit/infrastructure/security/random_string.py
import secrets
import string

# 64 símbolos: a-z, A-Z, 0-9, "_" e "+"
RANDOM_STRING_SOURCE = string.ascii_lowercase + string.ascii_uppercase + string.digits + "_+"

DEFAULT_SIZE = 25


def random_string(size: int = DEFAULT_SIZE) -> str:
    if size < 0:
        raise ValueError("size não pode ser negativo.")
    return "".join(secrets.choice(RANDOM_STRING_SOURCE) for _ in range(size))
