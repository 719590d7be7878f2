from datetime import datetime, timedelta, timezone

from apisign.schemas.payload import JsonPayload
from apisign.security.keys import PrivateKey, PublicKey
from apisign.signing import (
    ProcessingState,
    RequestProcessor,
    RequestSigner,
    SignatureString,
    encrypt_signature,
    format_timestamp,
)

from tests.utils import PointsRequest

import json
import pytest

NOW = datetime(2024, 3, 7, 13, 0, 0, tzinfo=timezone.utc)


def signed_dict(signer: RequestSigner[PointsRequest], now: datetime = NOW, points: int = 10) -> dict:
    envelope = signer.sign(PointsRequest(increase_points=points, username="foo-bar"), now)
    return json.loads(envelope.dump_json())


def test_round_trip(signer: RequestSigner[PointsRequest], processor: RequestProcessor[PointsRequest], access_token):
    envelope = signer.sign(PointsRequest(increase_points=10, username="foo-bar"), NOW)

    result = processor.process(envelope.dump_json(), now=NOW + timedelta(seconds=5))

    assert result.successful
    assert result.error is None
    assert result.state == ProcessingState.VERIFIED
    assert result.payload is not None
    assert result.payload.increase_points == 10
    assert result.payload.username == "foo-bar"
    assert result.payload.request_key() == "10|foo-bar"
    assert result.access_token == access_token
    assert result.timestamp == NOW
    assert result.salt is not None and len(result.salt) == 8


@pytest.mark.parametrize("kind", ["text", "bytes", "dict", "envelope"])
def test_accepted_inputs(signer: RequestSigner[PointsRequest], processor: RequestProcessor[PointsRequest], kind: str):
    envelope = signer.sign(PointsRequest(increase_points=10, username="foo-bar"))

    data = {
        "text": envelope.dump_json(),
        "bytes": envelope.dump_json().encode(),
        "dict": json.loads(envelope.dump_json()),
        "envelope": envelope,
    }[kind]

    assert processor.process(data).successful


def test_tampered_payload(signer: RequestSigner[PointsRequest], processor: RequestProcessor[PointsRequest]):
    data = signed_dict(signer)
    data["request"]["increasePoints"] = 11

    result = processor.process(data, now=NOW)

    assert not result.successful
    assert result.state == ProcessingState.FAILED
    assert result.error is not None
    assert result.error.kind == "DigestMismatch"
    assert result.error.state == ProcessingState.FIELDS_PARSED
    assert result.payload is None
    assert result.access_token is None


def test_tampered_date(signer: RequestSigner[PointsRequest], processor: RequestProcessor[PointsRequest]):
    data = signed_dict(signer)
    data["date"] = format_timestamp(NOW + timedelta(seconds=1))

    result = processor.process(data, now=NOW)

    assert not result.successful
    assert result.error is not None
    assert result.error.kind == "TimestampMismatch"


def test_expired_request(signer: RequestSigner[PointsRequest], processor: RequestProcessor[PointsRequest]):
    data = signed_dict(signer, now=NOW - timedelta(minutes=10))

    result = processor.process(data, now=NOW)

    assert not result.successful
    assert result.error is not None
    assert result.error.kind == "RequestExpired"


def test_request_from_the_future(signer: RequestSigner[PointsRequest], processor: RequestProcessor[PointsRequest]):
    assert processor.process(signed_dict(signer, now=NOW + timedelta(seconds=20)), now=NOW).successful

    result = processor.process(signed_dict(signer, now=NOW + timedelta(minutes=2)), now=NOW)

    assert result.error is not None
    assert result.error.kind == "RequestExpired"


def test_staleness_disabled(signer: RequestSigner[PointsRequest], private_key: PrivateKey):
    processor = RequestProcessor(PointsRequest, private_key, max_age=None)

    data = signed_dict(signer, now=NOW - timedelta(days=365))

    assert processor.process(data, now=NOW).successful


def test_naive_now_is_utc(signer: RequestSigner[PointsRequest], processor: RequestProcessor[PointsRequest]):
    result = processor.process(signed_dict(signer), now=NOW.replace(tzinfo=None))

    assert result.successful


@pytest.mark.parametrize(
    "data",
    [
        "{",
        "[]",
        {"request": {"increasePoints": 10, "username": "foo-bar"}, "date": "03/07/2024 13:00:00 PM"},
        {"request": {"username": "foo-bar"}, "date": "03/07/2024 13:00:00 PM", "signature": "AAAA"},
        {"date": "03/07/2024 13:00:00 PM", "signature": "AAAA"},
    ],
)
def test_malformed_envelope(processor: RequestProcessor[PointsRequest], data):
    result = processor.process(data)

    assert not result.successful
    assert result.error is not None
    assert result.error.kind == "MalformedEnvelope"
    assert result.error.state == ProcessingState.UNVALIDATED


@pytest.mark.parametrize(
    "signature",
    [
        "not base64!",
        "AAAA",
        "",
    ],
)
def test_invalid_signature(signer: RequestSigner[PointsRequest], processor: RequestProcessor[PointsRequest], signature):
    data = signed_dict(signer)
    data["signature"] = signature

    result = processor.process(data, now=NOW)

    assert result.error is not None
    assert result.error.kind == "DecryptionError"
    assert result.error.state == ProcessingState.DECODED


def test_truncated_signature(signer: RequestSigner[PointsRequest], processor: RequestProcessor[PointsRequest]):
    data = signed_dict(signer)
    data["signature"] = data["signature"][:-8]

    result = processor.process(data, now=NOW)

    assert result.error is not None
    assert result.error.kind == "DecryptionError"


def test_signed_with_another_key(other_private_key: PrivateKey, processor: RequestProcessor[PointsRequest]):
    signer = RequestSigner(other_private_key.public_key(), "token")

    result = processor.process(signed_dict(signer), now=NOW)

    assert not result.successful
    assert result.error is not None
    # depending on the OpenSSL version, PKCS1v15 either fails or yields random bytes
    assert result.error.kind in ("DecryptionError", "SignatureFormatError", "DigestMismatch")


def test_signed_with_another_key_oaep(other_private_key: PrivateKey, private_key: PrivateKey):
    signer = RequestSigner(other_private_key.public_key(), "token", padding_name="oaep")
    processor = RequestProcessor(PointsRequest, private_key, padding_name="oaep")

    result = processor.process(signed_dict(signer), now=NOW)

    assert result.error is not None
    assert result.error.kind == "DecryptionError"


def test_wrong_field_count(public_key: PublicKey, processor: RequestProcessor[PointsRequest]):
    date = format_timestamp(NOW)

    data = {
        "request": {"increasePoints": 10, "username": "foo-bar"},
        "date": date,
        "signature": encrypt_signature(f"token|{date}|digest", public_key),
    }

    result = processor.process(data, now=NOW)

    assert result.error is not None
    assert result.error.kind == "SignatureFormatError"
    assert result.error.state == ProcessingState.DECRYPTED


def test_separator_in_token(public_key: PublicKey, processor: RequestProcessor[PointsRequest]):
    signer = RequestSigner(public_key, "to|ken")

    result = processor.process(signed_dict(signer), now=NOW)

    assert result.error is not None
    assert result.error.kind == "SignatureFormatError"


def test_unparsable_signed_date(public_key: PublicKey, processor: RequestProcessor[PointsRequest]):
    signature = SignatureString.create("token", "yesterday", "10|foo-bar", "12345678")

    data = {
        "request": {"increasePoints": 10, "username": "foo-bar"},
        "date": "yesterday",
        "signature": encrypt_signature(signature.build(), public_key),
    }

    result = processor.process(data, now=NOW)

    assert result.error is not None
    assert result.error.kind == "MalformedEnvelope"
    assert result.error.state == ProcessingState.FIELDS_PARSED


@pytest.mark.parametrize("date", ["03/07/2024 13:00:00 PM", "03/07/2024 01:00:00 PM"])
def test_hand_signed_date(public_key: PublicKey, processor: RequestProcessor[PointsRequest], date: str):
    signature = SignatureString.create("token", date, "10|foo-bar", "12345678")

    data = {
        "request": {"increasePoints": 10, "username": "foo-bar"},
        "date": date,
        "signature": encrypt_signature(signature.build(), public_key),
    }

    result = processor.process(data, now=NOW)

    assert result.successful
    assert result.timestamp == NOW


def test_non_default_encoding(public_key: PublicKey, private_key: PrivateKey):
    signer = RequestSigner(public_key, "token", encoding="latin-1")
    processor = RequestProcessor(PointsRequest, private_key, encoding="latin-1")

    envelope = signer.sign(PointsRequest(increase_points=10, username="jürgen"), NOW)
    result = processor.process(envelope.dump_json(), now=NOW)

    assert result.successful
    assert result.payload is not None
    assert result.payload.username == "jürgen"


def test_token_validator(signer: RequestSigner[PointsRequest], private_key: PrivateKey, access_token: str):
    seen = list()

    def known(token: str, payload: PointsRequest) -> bool:
        seen.append((token, payload.username))
        return token == access_token

    processor = RequestProcessor(PointsRequest, private_key, token_validator=known)
    assert processor.process(signed_dict(signer), now=NOW).successful
    assert seen == [(access_token, "foo-bar")]

    processor = RequestProcessor(PointsRequest, private_key, token_validator=lambda token, _: False)
    result = processor.process(signed_dict(signer), now=NOW)

    assert result.error is not None
    assert result.error.kind == "UnauthorizedToken"


def test_token_validator_failure(signer: RequestSigner[PointsRequest], private_key: PrivateKey):
    def registry_down(token: str, payload: PointsRequest) -> bool:
        raise RuntimeError("registry down")

    processor = RequestProcessor(PointsRequest, private_key, token_validator=registry_down)
    result = processor.process(signed_dict(signer), now=NOW)

    assert not result.successful
    assert result.error is not None
    assert result.error.kind == "UnauthorizedToken"
    assert "registry down" in result.error.message
    assert result.error.state == ProcessingState.FIELDS_PARSED


class BrokenKeyRequest(PointsRequest):
    def request_key(self) -> str:
        raise KeyError("username")


def test_request_key_failure(public_key: PublicKey, private_key: PrivateKey):
    date = format_timestamp(NOW)
    signature = SignatureString.create("token", date, "10|foo-bar", "12345678")

    data = {
        "request": {"increasePoints": 10, "username": "foo-bar"},
        "date": date,
        "signature": encrypt_signature(signature.build(), public_key),
    }

    processor = RequestProcessor(BrokenKeyRequest, private_key)
    result = processor.process(data, now=NOW)

    assert result.error is not None
    assert result.error.kind == "MalformedEnvelope"
    assert result.error.state == ProcessingState.FIELDS_PARSED


def test_json_payload(public_key: PublicKey, private_key: PrivateKey):
    signer = RequestSigner(public_key, "token")
    processor = RequestProcessor(JsonPayload, private_key)

    envelope = signer.sign(JsonPayload.model_validate({"user": "foo", "amount": 3}))
    data = json.loads(envelope.dump_json())

    result = processor.process(data)
    assert result.successful
    assert result.payload is not None
    assert result.payload.model_dump() == {"user": "foo", "amount": 3}

    data["request"]["extra"] = True
    result = processor.process(data)
    assert result.error is not None
    assert result.error.kind == "DigestMismatch"


def test_result_dump(signer: RequestSigner[PointsRequest], processor: RequestProcessor[PointsRequest]):
    data = signed_dict(signer)
    data["request"]["increasePoints"] = 11

    dump = json.loads(processor.process(data, now=NOW).model_dump_json())

    assert dump["successful"] is False
    assert dump["state"] == "failed"
    assert dump["error"]["kind"] == "DigestMismatch"


@pytest.mark.asyncio
async def test_process_async(signer: RequestSigner[PointsRequest], processor: RequestProcessor[PointsRequest]):
    envelope = await signer.sign_a(PointsRequest(increase_points=10, username="foo-bar"))

    result = await processor.process_a(envelope.dump_json())

    assert result.successful
    assert result.payload is not None
    assert result.payload.increase_points == 10
