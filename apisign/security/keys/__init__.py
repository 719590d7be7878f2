__all__ = [
    "PrivateKey",
    "PublicKey",
    "get_padding",
    "padding_overhead",
]

from .asymmetric import PrivateKey, PublicKey, get_padding, padding_overhead
