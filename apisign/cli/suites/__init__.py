__all__ = [
    "keys_cli_suite",
    "requests_cli_suite",
    "tokens_cli_suite",
]

from .keys.suite import keys_cli_suite
from .requests.suite import requests_cli_suite
from .tokens.suite import tokens_cli_suite
