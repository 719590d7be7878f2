"""Errors raised while signing and verifying requests.

Every error carries a stable ``kind`` string. The request processor never lets
these escape: it stores the kind and the message in the processing result and
lets the caller decide what to do with a rejected request.
"""


class SigningError(Exception):
    kind: str = "SigningError"

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.kind)
        self.message: str = message or self.kind


class MalformedEnvelope(SigningError):
    """Required envelope fields are missing or have an invalid shape."""

    kind = "MalformedEnvelope"


class EncryptionError(SigningError):
    """The signature string does not fit in the key for the chosen padding."""

    kind = "EncryptionError"


class DecryptionError(SigningError):
    """The signature is not valid base64, is truncated, or belongs to another key."""

    kind = "DecryptionError"


class SignatureFormatError(SigningError):
    """The decrypted signature string does not have exactly four fields."""

    kind = "SignatureFormatError"


class DigestMismatch(SigningError):
    """The payload does not match the digest stored in the signature."""

    kind = "DigestMismatch"


class TimestampMismatch(SigningError):
    """The envelope date differs from the date stored in the signature."""

    kind = "TimestampMismatch"


class RequestExpired(SigningError):
    """The request is older than the staleness window, or comes from the future."""

    kind = "RequestExpired"


class UnauthorizedToken(SigningError):
    """The access token was refused by the caller-supplied validator."""

    kind = "UnauthorizedToken"
