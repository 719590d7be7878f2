"""Verification of signed requests on the receiving side.

A request goes through the states::

    UNVALIDATED -> DECODED -> DECRYPTED -> FIELDS_PARSED -> VERIFIED

and ends in FAILED as soon as one check does not pass. The processor does not
decide whether the access token is allowed: it only proves that the request was
signed for that token with the service public key. The caller checks the
token against its own registry, directly or through ``token_validator``.
"""

from __future__ import annotations

from typing import Any, Callable, Generic
from datetime import datetime, timedelta, timezone
from enum import Enum

from apisign.const import DEFAULT_CLOCK_SKEW, DEFAULT_MAX_AGE, PADDING_PKCS1V15
from apisign.exceptions import (
    DigestMismatch,
    MalformedEnvelope,
    RequestExpired,
    SigningError,
    TimestampMismatch,
    UnauthorizedToken,
)
from apisign.logging import get_logger
from apisign.schemas.envelope import Envelope, PayloadT
from apisign.security.checksums import same_checksum, str_checksum
from apisign.security.keys import PrivateKey
from apisign.signing.decoder import decrypt_signature
from apisign.signing.signature import SignatureString, parse_timestamp

from pydantic import BaseModel, ValidationError, computed_field

import asyncio

LOGGER = get_logger(__name__)


TokenValidator = Callable[[str, Any], bool]


class ProcessingState(Enum):
    UNVALIDATED = "unvalidated"
    DECODED = "decoded"
    DECRYPTED = "decrypted"
    FIELDS_PARSED = "fields_parsed"
    VERIFIED = "verified"
    FAILED = "failed"


class ProcessingError(BaseModel):
    # one of the SigningError kinds
    kind: str
    message: str
    # state reached before the failure
    state: ProcessingState


class ProcessingResult(BaseModel, Generic[PayloadT]):
    state: ProcessingState = ProcessingState.UNVALIDATED
    error: ProcessingError | None = None

    payload: PayloadT | None = None
    access_token: str | None = None
    timestamp: datetime | None = None
    salt: str | None = None

    @computed_field
    @property
    def successful(self) -> bool:
        return self.state == ProcessingState.VERIFIED


class RequestProcessor(Generic[PayloadT]):
    def __init__(
        self,
        payload_type: type[PayloadT],
        private_key: PrivateKey,
        max_age: float | None = DEFAULT_MAX_AGE,
        clock_skew: float = DEFAULT_CLOCK_SKEW,
        token_validator: TokenValidator | None = None,
        padding_name: str = PADDING_PKCS1V15,
        encoding: str = "utf8",
    ) -> None:
        """Verifier of envelopes carrying payloads of a single type.

        Args:
            payload_type (type[PayloadT]):
                Class of the expected payload, used to parse the request and to
                derive its request key.
            private_key (PrivateKey):
                Key that decrypts the signatures.
            max_age (float | None, optional):
                Maximum age in seconds of a request. None disables the
                staleness check.
                Defaults to 300.
            clock_skew (float, optional):
                How many seconds a request may come from the future.
                Defaults to 30.
            token_validator (TokenValidator | None, optional):
                Called with the access token and the payload of a verified
                request; a False answer rejects the request.
                Defaults to None.
            padding_name (str, optional):
                Padding scheme used by the senders.
                Defaults to "pkcs1v15".
            encoding (str, optional):
                Encoding of the signature string.
                Defaults to "utf8".
        """
        self.payload_type: type[PayloadT] = payload_type
        self.envelope_type: type[Envelope[PayloadT]] = Envelope[payload_type]  # type: ignore
        self.private_key: PrivateKey = private_key
        self.max_age: timedelta | None = None if max_age is None else timedelta(seconds=max_age)
        self.clock_skew: timedelta = timedelta(seconds=clock_skew)
        self.token_validator: TokenValidator | None = token_validator
        self.padding_name: str = padding_name
        self.encoding: str = encoding

    # --- transitions -------------------

    def decode(self, data: str | bytes | dict[str, Any] | Envelope[PayloadT]) -> Envelope[PayloadT]:
        """UNVALIDATED -> DECODED"""
        try:
            if isinstance(data, Envelope):
                data = data.model_dump(by_alias=True)

            if isinstance(data, (str, bytes)):
                return self.envelope_type.model_validate_json(data)

            return self.envelope_type.model_validate(data)

        except ValidationError as e:
            fields = ", ".join(".".join(str(loc) for loc in err["loc"]) or "envelope" for err in e.errors())
            raise MalformedEnvelope(f"invalid envelope fields: {fields}")

    def decrypt(self, envelope: Envelope[PayloadT]) -> str:
        """DECODED -> DECRYPTED"""
        return decrypt_signature(envelope.signature, self.private_key, self.padding_name, self.encoding)

    def parse(self, text: str) -> SignatureString:
        """DECRYPTED -> FIELDS_PARSED"""
        return SignatureString.parse(text)

    def verify(self, envelope: Envelope[PayloadT], signature: SignatureString, now: datetime) -> datetime:
        """FIELDS_PARSED -> VERIFIED

        Returns the signing time of the request.
        """
        try:
            digest = str_checksum(envelope.request.request_key(), self.encoding)
        except Exception as e:
            LOGGER.exception(e)
            raise MalformedEnvelope(f"could not compute the request key digest: {e}")

        if not same_checksum(digest, signature.digest, self.encoding):
            raise DigestMismatch("payload does not match the signed digest")

        if envelope.date != signature.date:
            raise TimestampMismatch(f"envelope date={envelope.date!r} differs from the signed date")

        timestamp = parse_timestamp(envelope.date)

        if self.max_age is not None:
            age = now - timestamp

            if age < -self.clock_skew:
                raise RequestExpired(f"request date={envelope.date} is in the future")

            if age > self.max_age:
                raise RequestExpired(f"request date={envelope.date} is older than {self.max_age.total_seconds()}s")

        return timestamp

    def authorize(self, access_token: str, payload: PayloadT) -> None:
        if self.token_validator is None:
            return

        try:
            allowed = self.token_validator(access_token, payload)
        except Exception as e:
            LOGGER.exception(e)
            raise UnauthorizedToken(f"access token could not be validated: {e}")

        if not allowed:
            raise UnauthorizedToken("access token refused")

    # --- processing --------------------

    def process(
        self,
        data: str | bytes | dict[str, Any] | Envelope[PayloadT],
        now: datetime | None = None,
    ) -> ProcessingResult[PayloadT]:
        """Runs all the verification steps on a received envelope.

        :param data:
            The envelope as JSON text, as a dictionary, or already parsed.
        :param now:
            Reference time for the staleness check, defaults to the current
            UTC time.
        :return:
            The result of the verification. This method does not raise for an
            invalid request: check `successful` and `error` on the result.
        """
        if now is None:
            now = datetime.now(timezone.utc)
        elif now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)

        result: ProcessingResult[PayloadT] = ProcessingResult[self.payload_type]()  # type: ignore

        try:
            envelope = self.decode(data)
            result.state = ProcessingState.DECODED

            text = self.decrypt(envelope)
            result.state = ProcessingState.DECRYPTED

            signature = self.parse(text)
            result.state = ProcessingState.FIELDS_PARSED

            timestamp = self.verify(envelope, signature, now)

            self.authorize(signature.access_token, envelope.request)

        except SigningError as e:
            LOGGER.warning(f"request rejected in state={result.state.value}: {e.kind}: {e.message}")

            result.error = ProcessingError(kind=e.kind, message=e.message, state=result.state)
            result.state = ProcessingState.FAILED
            return result

        result.state = ProcessingState.VERIFIED
        result.payload = envelope.request
        result.access_token = signature.access_token
        result.timestamp = timestamp
        result.salt = signature.salt

        LOGGER.debug(f"request verified date={envelope.date}")

        return result

    async def process_a(
        self,
        data: str | bytes | dict[str, Any] | Envelope[PayloadT],
        now: datetime | None = None,
    ) -> ProcessingResult[PayloadT]:
        """Async variant of `process`, the decryption runs in a worker thread."""
        return await asyncio.to_thread(self.process, data, now)
