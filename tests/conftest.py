from apisign.security.keys import PrivateKey, PublicKey
from apisign.security.tokens import generate_access_token
from apisign.signing import RequestProcessor, RequestSigner

from .utils import PointsRequest

import pytest


@pytest.fixture(scope="session")
def private_key() -> PrivateKey:
    return PrivateKey(key_size=2048)


@pytest.fixture(scope="session")
def public_key(private_key: PrivateKey) -> PublicKey:
    return private_key.public_key()


@pytest.fixture(scope="session")
def other_private_key() -> PrivateKey:
    return PrivateKey(key_size=2048)


@pytest.fixture()
def access_token() -> str:
    return generate_access_token()


@pytest.fixture()
def signer(public_key: PublicKey, access_token: str) -> RequestSigner[PointsRequest]:
    return RequestSigner(public_key, access_token)


@pytest.fixture()
def processor(private_key: PrivateKey) -> RequestProcessor[PointsRequest]:
    return RequestProcessor(PointsRequest, private_key)
