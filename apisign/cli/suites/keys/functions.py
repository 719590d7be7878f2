"""Implementation of the CLI features regarding key pairs"""

from apisign.cli.visualization import show_string
from apisign.config import config_manager
from apisign.logging import get_logger
from apisign.schemas.keys import KeyPair, generate_key_pair

import os

LOGGER = get_logger(__name__)


async def create_key_pair(size: int | None = None, output: str | None = None) -> KeyPair:
    """Generates a new key pair and writes it to the output directory.

    Args:
        size (int | None): key size in bits, defaults to the configured one
        output (str | None): destination directory, defaults to the configured workdir

    Raises:
        ValueError: if one of the key files already exists

    Returns:
        KeyPair: the generated keys
    """
    conf = config_manager.get()

    if output:
        conf = conf.model_copy(update={"workdir": output})

    key_size = size or conf.signing.key_size

    private_path = conf.private_key_location()
    public_path = conf.public_key_location()
    numbers_path = conf.public_numbers_location()

    for path in (private_path, public_path, numbers_path):
        if os.path.exists(path):
            raise ValueError(f"destination path {path} already exists")

    LOGGER.info(f"generating key pair of size={key_size}")

    key_pair = generate_key_pair(key_size)

    os.makedirs(conf.get_workdir(), exist_ok=True)

    with open(private_path, "w") as f:
        f.write(key_pair.private_key.encoded)
    os.chmod(private_path, 0o600)

    with open(public_path, "w") as f:
        f.write(key_pair.public_key.encoded)

    with open(numbers_path, "w") as f:
        f.write(key_pair.public_key.model_dump_json(indent=2, include={"modulus", "exponent"}))

    show_string(f"private key: {private_path}")
    show_string(f"public key:  {public_path}")
    show_string(f"modulus and exponent: {numbers_path}")

    return key_pair
