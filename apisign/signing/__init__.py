__all__ = [
    "ProcessingError",
    "ProcessingResult",
    "ProcessingState",
    "RequestProcessor",
    "RequestSigner",
    "SignatureString",
    "TokenValidator",
    "build_signature_string",
    "decrypt_signature",
    "encrypt_signature",
    "format_timestamp",
    "parse_timestamp",
]

from .decoder import decrypt_signature
from .processor import ProcessingError, ProcessingResult, ProcessingState, RequestProcessor, TokenValidator
from .signature import SignatureString, build_signature_string, format_timestamp, parse_timestamp
from .signer import RequestSigner, encrypt_signature
