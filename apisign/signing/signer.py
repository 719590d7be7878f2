from typing import Generic
from datetime import datetime, timezone

from apisign.const import DEFAULT_SALT_LENGTH, PADDING_PKCS1V15
from apisign.exceptions import EncryptionError
from apisign.logging import get_logger
from apisign.schemas.envelope import Envelope, PayloadT
from apisign.security.keys import PublicKey
from apisign.security.tokens import generate_salt
from apisign.security.utils import encode_to_transfer
from apisign.signing.signature import SignatureString

import asyncio

LOGGER = get_logger(__name__)


def encrypt_signature(
    signature: str,
    public_key: PublicKey,
    padding_name: str = PADDING_PKCS1V15,
    encoding: str = "utf8",
) -> str:
    """Encrypts a signature string and returns the ciphertext in base64.

    Raises:
        EncryptionError if the signature string is larger than what the key can
        hold with the chosen padding. Content is never truncated.
    """
    data = signature.encode(encoding)
    max_size = public_key.max_plaintext_size(padding_name)

    if len(data) > max_size:
        raise EncryptionError(
            f"signature string of {len(data)} bytes does not fit in a {public_key.key_size} bits key "
            f"with {padding_name} padding (max {max_size} bytes): use a shorter token or salt, or a larger key"
        )

    try:
        ciphertext = public_key.encrypt(data, encoding, padding_name)
    except ValueError as e:
        raise EncryptionError(str(e))

    return encode_to_transfer(ciphertext, encoding)


class RequestSigner(Generic[PayloadT]):
    """Sender side of the protocol.

    Holds the public key handed out by the service and the access token of the
    caller, and wraps payloads into signed envelopes. Each call draws a new salt.
    """

    def __init__(
        self,
        public_key: PublicKey,
        access_token: str,
        salt_length: int = DEFAULT_SALT_LENGTH,
        padding_name: str = PADDING_PKCS1V15,
        encoding: str = "utf8",
    ) -> None:
        self.public_key: PublicKey = public_key
        self.access_token: str = access_token
        self.salt_length: int = salt_length
        self.padding_name: str = padding_name
        self.encoding: str = encoding

    def sign(self, payload: PayloadT, now: datetime | None = None) -> Envelope[PayloadT]:
        """Creates the envelope for the given payload.

        :param payload:
            Request body to sign.
        :param now:
            Signing time, defaults to the current UTC time.
        :raise:
            EncryptionError if the signature string does not fit in the key.
        """
        if now is None:
            now = datetime.now(timezone.utc)

        signature = SignatureString.create(
            self.access_token,
            now,
            payload.request_key(),
            generate_salt(self.salt_length),
            self.encoding,
        )

        envelope = Envelope[type(payload)](  # type: ignore
            request=payload,
            date=signature.date,
            signature=encrypt_signature(signature.build(), self.public_key, self.padding_name, self.encoding),
        )

        LOGGER.debug(f"signed request date={envelope.date}")

        return envelope

    async def sign_a(self, payload: PayloadT, now: datetime | None = None) -> Envelope[PayloadT]:
        """Async variant of `sign`, the encryption runs in a worker thread."""
        return await asyncio.to_thread(self.sign, payload, now)
