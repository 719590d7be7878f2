from typing import Generic, TypeVar

from apisign.schemas.payload import SignedPayload

from pydantic import BaseModel, ConfigDict

PayloadT = TypeVar("PayloadT", bound=SignedPayload)


class Envelope(BaseModel, Generic[PayloadT]):
    """What travels on the wire.

    The payload is in clear text: the signature only binds it to the access
    token and to the date, it does not hide it.
    """

    model_config = ConfigDict(frozen=True)

    # request body, in the format of the payload type
    request: PayloadT
    # signing time in UTC, "MM/dd/yyyy HH:mm:ss AM|PM"
    date: str
    # base64 ciphertext of the signature string
    signature: str

    def dump_json(self) -> str:
        return self.model_dump_json(by_alias=True)
