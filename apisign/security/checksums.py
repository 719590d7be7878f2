from hashlib import sha256

import hmac


def str_checksum(
    content: str | bytes,
    encoding: str = "utf8",
) -> str:
    """Returns the checksum of a the given content. The checksum is done
    using the sha256 algorithm.

    Args:
        content (str | bytes):
            The content to calculate the checksum for.
        encoding (str, optional):
            The encoding of the string.
            Defaults to "utf8".

    Returns:
        str:
            The hex checksum value for the given content.
    """
    if isinstance(content, str):
        content = content.encode(encoding)

    checksum = sha256()
    checksum.update(content)

    return checksum.hexdigest()


def same_checksum(a: str, b: str, encoding: str = "utf8") -> bool:
    """Constant-time comparison of two checksums."""
    return hmac.compare_digest(a.encode(encoding), b.encode(encoding))
