__all__ = [
    "PrivateKey",
    "PublicKey",
    "generate_access_token",
    "generate_salt",
    "str_checksum",
]

from .checksums import str_checksum
from .keys import PrivateKey, PublicKey
from .tokens import generate_access_token, generate_salt
