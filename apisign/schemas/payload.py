from typing import Any
from abc import ABC, abstractmethod

from pydantic import BaseModel, ConfigDict

import json


def canonical_json(obj: Any) -> str:
    """Canonical JSON encoding: sorted keys, minimal separators, no ASCII escaping."""
    return json.dumps(obj, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


class SignedPayload(BaseModel, ABC):
    """Base class for every request body that can be signed.

    Subclasses decide which fields take part in the authorization and how they
    are combined: two instances with the same values for those fields must
    return the same request key, and any difference in one of them must
    produce a different key. Only the sha256 of the key travels inside the
    signature, so its length does not matter.
    """

    model_config = ConfigDict(populate_by_name=True)

    @abstractmethod
    def request_key(self) -> str:
        raise NotImplementedError()


class JsonPayload(SignedPayload):
    """Payload accepting any JSON object.

    The request key is the canonical JSON of the whole object, so every field
    is authorization-relevant.
    """

    model_config = ConfigDict(extra="allow")

    def request_key(self) -> str:
        return canonical_json(self.model_dump(mode="json"))
