"""Implementation of the CLI features regarding signed requests"""

from apisign.cli.visualization import show_one, show_string
from apisign.config import config_manager
from apisign.schemas.envelope import Envelope
from apisign.schemas.payload import JsonPayload
from apisign.security.keys import PrivateKey, PublicKey
from apisign.signing import ProcessingResult, RequestProcessor, RequestSigner

from pathlib import Path

import json


def _read(path: str | None, what: str) -> str:
    if not path:
        raise ValueError(f"Provide the path of the {what}")

    with open(Path(path), "r") as f:
        return f.read()


async def sign_request(
    public_key: str | None = None,
    token: str | None = None,
    payload: str | None = None,
) -> Envelope[JsonPayload]:
    """Sign the JSON object found in the payload file and print the envelope.

    The public key defaults to the one in the configured workdir.

    Raises:
        ValueError: if one of the arguments is missing
        EncryptionError: if the signature does not fit in the key
    """
    if not token:
        raise ValueError("Provide an access token")

    conf = config_manager.get()

    if not public_key:
        public_key = str(conf.public_key_location())

    content = json.loads(_read(payload, "payload"))

    if not isinstance(content, dict):
        raise ValueError("The payload must be a JSON object")

    signer = RequestSigner[JsonPayload](
        PublicKey(_read(public_key, "public key")),
        token,
        salt_length=conf.signing.salt_length,
        padding_name=conf.signing.padding,
        encoding=conf.signing.encoding,
    )

    envelope = await signer.sign_a(JsonPayload(**content))

    show_string(envelope.dump_json())

    return envelope


async def verify_request(
    private_key: str | None = None,
    envelope: str | None = None,
    max_age: float | None = None,
) -> ProcessingResult[JsonPayload]:
    """Verify the envelope found in the given file and print the outcome.

    The private key defaults to the one in the configured workdir.
    """
    conf = config_manager.get()

    if not private_key:
        private_key = str(conf.private_key_location())

    if max_age is None:
        staleness = conf.signing.staleness()
    else:
        staleness = max_age if max_age > 0 else None

    processor = RequestProcessor(
        JsonPayload,
        PrivateKey(_read(private_key, "private key")),
        max_age=staleness,
        clock_skew=conf.signing.clock_skew,
        padding_name=conf.signing.padding,
        encoding=conf.signing.encoding,
    )

    result = await processor.process_a(_read(envelope, "envelope"))

    show_one(result)

    return result
