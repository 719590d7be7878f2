__all__ = [
    "signed_request",
]

from .dependencies import signed_request
