from apisign.const import PADDING_PKCS1V15
from apisign.exceptions import DecryptionError
from apisign.security.keys import PrivateKey
from apisign.security.utils import decode_from_transfer

import binascii


def decrypt_signature(
    signature: str,
    private_key: PrivateKey,
    padding_name: str = PADDING_PKCS1V15,
    encoding: str = "utf8",
) -> str:
    """Recovers the signature string from the base64 ciphertext.

    Only the owner of the private key can do this, so the service that hands
    out the public key is also the one verifying the requests.

    With PKCS1v15 padding recent OpenSSL versions do not always report a
    ciphertext produced with another key: they may return random bytes
    instead. Those bytes usually fail the UTF-8 decoding here, otherwise the
    field count or the digest check rejects them later.

    :raise:
        DecryptionError if the ciphertext is not base64, has the wrong length,
        was produced with another key, or does not decode to text.
    """
    try:
        ciphertext = decode_from_transfer(signature, encoding)
    except (binascii.Error, ValueError) as e:
        raise DecryptionError(f"signature is not valid base64: {e}")

    expected = private_key.key_size // 8

    if len(ciphertext) != expected:
        raise DecryptionError(f"signature is {len(ciphertext)} bytes long, expected {expected}")

    try:
        data = private_key.decrypt(ciphertext, padding_name)
    except ValueError as e:
        raise DecryptionError(f"could not decrypt signature: {e}")

    try:
        return data.decode(encoding)
    except UnicodeDecodeError:
        raise DecryptionError("decrypted signature is not valid text")
