from apisign.const import DEFAULT_SALT_LENGTH, DEFAULT_TOKEN_LENGTH

import secrets
import string

TOKEN_ALPHABET = string.ascii_letters + string.digits


def generate_access_token(length: int = DEFAULT_TOKEN_LENGTH) -> str:
    """Random opaque access token made of letters and digits.

    Longer tokens leave less room in the signature string: the whole string
    must fit in one RSA block.
    """
    if length < 1:
        raise ValueError("token length must be positive")

    return "".join(secrets.choice(TOKEN_ALPHABET) for _ in range(length))


def generate_salt(length: int = DEFAULT_SALT_LENGTH) -> str:
    """Random decimal digits, regenerated for each signed request."""
    if length < 1:
        raise ValueError("salt length must be positive")

    return "".join(secrets.choice(string.digits) for _ in range(length))
