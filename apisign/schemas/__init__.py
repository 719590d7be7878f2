__all__ = [
    "Envelope",
    "JsonPayload",
    "KeyPair",
    "PrivateKeyData",
    "PublicKeyData",
    "SignedPayload",
    "canonical_json",
    "generate_key_pair",
]

from .envelope import Envelope
from .keys import KeyPair, PrivateKeyData, PublicKeyData, generate_key_pair
from .payload import JsonPayload, SignedPayload, canonical_json
