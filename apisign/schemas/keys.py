from __future__ import annotations

from apisign.const import DEFAULT_KEY_SIZE
from apisign.security.keys import PrivateKey, PublicKey

from pydantic import BaseModel, ConfigDict


class PublicKeyData(BaseModel):
    """Distributable part of a key pair.

    Modulus and exponent are base64 of big-endian integers, enough for any
    RSA-capable client to encrypt a signature string without this package.
    """

    model_config = ConfigDict(frozen=True)

    modulus: str
    exponent: str
    encoded: str

    def key(self) -> PublicKey:
        return PublicKey(self.encoded)


class PrivateKeyData(BaseModel):
    model_config = ConfigDict(frozen=True)

    encoded: str

    def key(self) -> PrivateKey:
        return PrivateKey(self.encoded)


class KeyPair(BaseModel):
    model_config = ConfigDict(frozen=True)

    public_key: PublicKeyData
    private_key: PrivateKeyData

    @staticmethod
    def from_private_key(private_key: PrivateKey, encoding: str = "utf8") -> KeyPair:
        public_key = private_key.public_key()

        return KeyPair(
            public_key=PublicKeyData(
                modulus=public_key.modulus(),
                exponent=public_key.exponent(),
                encoded=public_key.bytes().decode(encoding),
            ),
            private_key=PrivateKeyData(
                encoded=private_key.bytes().decode(encoding),
            ),
        )


def generate_key_pair(key_size: int = DEFAULT_KEY_SIZE) -> KeyPair:
    """Generates a new RSA key pair of the given size in bits."""
    return KeyPair.from_private_key(PrivateKey(key_size=key_size))
