from __future__ import annotations

from apisign.const import DEFAULT_KEY_SIZE, DEFAULT_PUBLIC_EXPONENT, PADDING_OAEP, PADDING_PKCS1V15
from apisign.security.utils import b64_to_int, int_to_b64

from cryptography.hazmat.backends import default_backend
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import padding
from cryptography.hazmat.primitives.asymmetric.padding import AsymmetricPadding
from cryptography.hazmat.primitives.asymmetric.rsa import (
    RSAPrivateKey,
    RSAPublicKey,
    RSAPublicNumbers,
    generate_private_key,
)
from cryptography.hazmat.primitives.hashes import SHA256
from cryptography.hazmat.primitives.serialization import (
    load_pem_private_key,
    load_pem_public_key,
    load_ssh_public_key,
)


def get_padding(name: str) -> AsymmetricPadding:
    """Returns the padding scheme used by both the encrypting and the
    decrypting side.

    Args:
        name (str):
            One of "pkcs1v15" or "oaep".

    Raises:
        ValueError if the padding is not supported.
    """
    if name == PADDING_PKCS1V15:
        return padding.PKCS1v15()

    if name == PADDING_OAEP:
        return padding.OAEP(mgf=padding.MGF1(algorithm=SHA256()), algorithm=SHA256(), label=None)

    raise ValueError(f"unsupported padding={name}")


def padding_overhead(name: str) -> int:
    """Number of bytes of a RSA block consumed by the padding scheme."""
    if name == PADDING_PKCS1V15:
        return 11

    if name == PADDING_OAEP:
        # 2 * hash length + 2
        return 2 * SHA256.digest_size + 2

    raise ValueError(f"unsupported padding={name}")


class PrivateKey:
    def __init__(
        self,
        data: str | bytes | RSAPrivateKey | None = None,
        encoding: str = "utf8",
        key_size: int = DEFAULT_KEY_SIZE,
    ) -> None:
        """Creates a new private key. If the data parameter is not set, then
        generates a new key of the given size.

        Args:
            data (str | bytes | RSAPrivateKey | None, optional):
                PEM content collected from somewhere. If it is of type str, then
                the data will be converted to bytes using the encoding parameter.
                Defaults to None.
            encoding (str, optional):
                Encoding to use to convert data to bytes.
                Defaults to "utf8".
            key_size (int, optional):
                Size in bits of a newly generated key. It must be large enough
                to hold a whole signature string after padding.
                Defaults to 2048.
        """
        if data is None:
            self.key: RSAPrivateKey = generate_private_key(
                public_exponent=DEFAULT_PUBLIC_EXPONENT,
                key_size=key_size,
                backend=default_backend(),
            )

        elif isinstance(data, RSAPrivateKey):
            self.key: RSAPrivateKey = data

        else:
            if isinstance(data, str):
                data = data.encode(encoding)

            key = load_pem_private_key(data, password=None, backend=default_backend())

            if not isinstance(key, RSAPrivateKey):
                raise ValueError("only RSA private keys are supported")

            self.key: RSAPrivateKey = key

    @property
    def key_size(self) -> int:
        return self.key.key_size

    def bytes(self) -> bytes:
        """Get the private bytes from the private key.

        This is useful when writing the key to a binary sink, like a database
        or a file.

        :return:
            The PEM (PKCS8) representation of this private key.
        """
        return self.key.private_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PrivateFormat.PKCS8,
            encryption_algorithm=serialization.NoEncryption(),
        )

    def public_key(self) -> PublicKey:
        return PublicKey(self.key.public_key())

    def decrypt(self, data: bytes, padding_name: str = PADDING_PKCS1V15) -> bytes:
        """Decrypt a block encrypted with the matching public key.

        :param data:
            Ciphertext, exactly one RSA block long.
        :param padding_name:
            Padding used when the data was encrypted.
        :raise:
            ValueError if the decryption fails.
        :return:
            The plain bytes.
        """
        return self.key.decrypt(data, get_padding(padding_name))


class PublicKey:
    def __init__(self, data: bytes | str | RSAPublicKey, encoding: str = "utf8") -> None:
        """Wraps a RSA public key.

        Both PEM (SubjectPublicKeyInfo) and OpenSSH encodings are accepted when
        the key is given as str or bytes.
        """
        if isinstance(data, RSAPublicKey):
            self.key: RSAPublicKey = data
        else:
            if isinstance(data, str):
                data = data.encode(encoding)

            if data.startswith(b"ssh-rsa"):
                key = load_ssh_public_key(data, backend=default_backend())
            else:
                key = load_pem_public_key(data, backend=default_backend())

            if not isinstance(key, RSAPublicKey):
                raise ValueError("only RSA public keys are supported")

            self.key: RSAPublicKey = key

    @staticmethod
    def from_numbers(modulus: str, exponent: str) -> PublicKey:
        """Rebuilds a public key from the base64 modulus and exponent, the same
        values exposed by `modulus()` and `exponent()`."""
        numbers = RSAPublicNumbers(e=b64_to_int(exponent), n=b64_to_int(modulus))
        return PublicKey(numbers.public_key(default_backend()))

    @property
    def key_size(self) -> int:
        return self.key.key_size

    def bytes(self) -> bytes:
        return self.key.public_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        )

    def modulus(self) -> str:
        """Base64 of the big-endian modulus."""
        return int_to_b64(self.key.public_numbers().n)

    def exponent(self) -> str:
        """Base64 of the big-endian public exponent."""
        return int_to_b64(self.key.public_numbers().e)

    def max_plaintext_size(self, padding_name: str = PADDING_PKCS1V15) -> int:
        """Largest number of bytes that can be encrypted in a single block."""
        return self.key_size // 8 - padding_overhead(padding_name)

    def encrypt(self, data: str | bytes, encoding: str = "utf8", padding_name: str = PADDING_PKCS1V15) -> bytes:
        """Encrypts a single block of data.

        Args:
            data (str | bytes):
                Content to be encrypted. If the content is of str type,
                then it will be converted to bytes using the encoding
                arguments.
            encoding (str, optional):
                Encoding to use in the string-byte conversion.
                Defaults to "utf8".
            padding_name (str, optional):
                Padding scheme, must match the one used to decrypt.
                Defaults to "pkcs1v15".

        Raises:
            ValueError if the content does not fit in one block.

        Returns:
            bytes:
                The encrypted data.
        """
        if isinstance(data, str):
            data = data.encode(encoding)

        max_size = self.max_plaintext_size(padding_name)

        if len(data) > max_size:
            raise ValueError(f"content of {len(data)} bytes exceeds the maximum of {max_size} bytes for this key")

        return self.key.encrypt(data, get_padding(padding_name))
