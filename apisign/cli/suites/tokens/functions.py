"""Implementation of the CLI features regarding access tokens"""

from apisign.cli.visualization import show_string
from apisign.config import config_manager
from apisign.security.tokens import generate_access_token


async def create_token(length: int | None = None) -> str:
    """Print a new random access token"""
    token = generate_access_token(length or config_manager.get().signing.token_length)

    show_string(token)

    return token
