from apisign.schemas.payload import SignedPayload

from pydantic import Field

import random
import string


def random_string(length: int) -> str:
    return "".join(random.choice(string.ascii_letters) for _ in range(length))


class PointsRequest(SignedPayload):
    increase_points: int = Field(alias="increasePoints")
    username: str

    def request_key(self) -> str:
        return f"{self.increase_points}|{self.username}"
