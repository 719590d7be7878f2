"""Construction and parsing of the signature string.

The string that gets encrypted is::

    access_token|date|sha256(request_key)|salt

Fields are joined with a literal ``|`` and nothing is escaped. A token or a
salt containing the separator still produces a signature, but one that can no
longer be split back into four fields: verification of such a request fails
with ``SignatureFormatError``. Third-party signers must keep the separator out
of their tokens.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

from apisign.const import DATE_FORMAT, SEPARATOR
from apisign.exceptions import MalformedEnvelope, SignatureFormatError
from apisign.logging import get_logger
from apisign.security.checksums import str_checksum

LOGGER = get_logger(__name__)


def format_timestamp(timestamp: datetime) -> str:
    """Formats a timestamp as "MM/dd/yyyy HH:mm:ss AM|PM" in UTC.

    Hours are on 24 hours, followed by the AM/PM marker. Naive datetimes are
    considered already in UTC. The marker is added by hand so that the output
    does not depend on the process locale.
    """
    if timestamp.tzinfo is not None:
        timestamp = timestamp.astimezone(timezone.utc)

    marker = "AM" if timestamp.hour < 12 else "PM"

    return f"{timestamp.strftime(DATE_FORMAT)} {marker}"


def parse_timestamp(text: str) -> datetime:
    """Inverse of `format_timestamp`, returns an aware UTC datetime.

    Signers that write the hour on 12 hours ("01:00:00 PM", "12:05:09 AM") are
    accepted too: both forms map to the same time.

    Raises:
        MalformedEnvelope if the text is not in the expected format or if the
        marker contradicts the hour.
    """
    value, _, marker = text.rpartition(" ")

    if marker not in ("AM", "PM"):
        raise MalformedEnvelope(f"invalid date={text!r}: missing AM/PM marker")

    try:
        timestamp = datetime.strptime(value, DATE_FORMAT)
    except ValueError as e:
        raise MalformedEnvelope(f"invalid date={text!r}: {e}")

    hour = timestamp.hour

    if marker == "AM":
        if hour > 12:
            raise MalformedEnvelope(f"invalid date={text!r}: hour {hour} with AM marker")
        if hour == 12:
            hour = 0
    elif hour == 0:
        raise MalformedEnvelope(f"invalid date={text!r}: hour 0 with PM marker")
    elif hour < 12:
        hour += 12

    return timestamp.replace(hour=hour, tzinfo=timezone.utc)


@dataclass(frozen=True)
class SignatureString:
    access_token: str
    date: str
    digest: str
    salt: str

    @staticmethod
    def create(
        access_token: str,
        timestamp: datetime | str,
        request_key: str,
        salt: str,
        encoding: str = "utf8",
    ) -> SignatureString:
        """Builds the signature fields from the request key of a payload.

        Args:
            access_token (str):
                Token of the caller.
            timestamp (datetime | str):
                Signing time. Strings are used as they are, and must already be
                in the envelope date format.
            request_key (str):
                Canonical key of the payload; only its digest is kept.
            salt (str):
                Fresh random salt.
            encoding (str, optional):
                Encoding of the request key before hashing, must match the one
                of the processor.
                Defaults to "utf8".
        """
        date = timestamp if isinstance(timestamp, str) else format_timestamp(timestamp)

        for name, value in (("access_token", access_token), ("salt", salt)):
            if SEPARATOR in value:
                LOGGER.warning(f"{name} contains the separator {SEPARATOR!r}: the signature will not verify")

        return SignatureString(
            access_token=access_token,
            date=date,
            digest=str_checksum(request_key, encoding),
            salt=salt,
        )

    @staticmethod
    def parse(text: str) -> SignatureString:
        """Splits a decrypted signature string.

        Raises:
            SignatureFormatError if the string does not contain exactly four fields.
        """
        fields = text.split(SEPARATOR)

        if len(fields) != 4:
            raise SignatureFormatError(f"expected 4 fields in signature string, found {len(fields)}")

        access_token, date, digest, salt = fields

        return SignatureString(
            access_token=access_token,
            date=date,
            digest=digest,
            salt=salt,
        )

    def build(self) -> str:
        return SEPARATOR.join((self.access_token, self.date, self.digest, self.salt))


def build_signature_string(
    access_token: str,
    timestamp: datetime | str,
    request_key: str,
    salt: str,
    encoding: str = "utf8",
) -> str:
    return SignatureString.create(access_token, timestamp, request_key, salt, encoding).build()
