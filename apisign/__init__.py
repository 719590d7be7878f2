__all__ = [
    "Envelope",
    "JsonPayload",
    "KeyPair",
    "PrivateKey",
    "PublicKey",
    "RequestProcessor",
    "RequestSigner",
    "SignedPayload",
    "generate_access_token",
    "generate_key_pair",
    "generate_salt",
]

__version__ = "1.0.0"

from apisign.schemas import Envelope, JsonPayload, KeyPair, SignedPayload, generate_key_pair
from apisign.security.keys import PrivateKey, PublicKey
from apisign.security.tokens import generate_access_token, generate_salt
from apisign.signing import RequestProcessor, RequestSigner
