from base64 import b64encode, b64decode


def encode_to_transfer(content: str | bytes, encoding: str = "utf8") -> str:
    """Encode a content that will be sent through a transfer between client and server.

    :param content:
        Content to encode.
    :param encoding:
        Encoding to use in the string-byte conversion.
    :return:
        Base64 text.
    """
    if isinstance(content, str):
        content = content.encode(encoding)
    b64_bytes: bytes = b64encode(content)
    out_text: str = b64_bytes.decode(encoding)
    return out_text


def decode_from_transfer(text: str, encoding: str = "utf8") -> bytes:
    """Decode the string received through a transfer between client and server.

    :param text:
        Base64 text to decode.
    :param encoding:
        Encoding to use in the string-byte conversion.
    :raise:
        binascii.Error if the text is not valid base64.
    :return:
        Decoded bytes.
    """
    in_bytes: bytes = text.encode(encoding)
    return b64decode(in_bytes, validate=True)


def int_to_b64(value: int) -> str:
    length = max(1, (value.bit_length() + 7) // 8)
    return encode_to_transfer(value.to_bytes(length, "big"))


def b64_to_int(text: str) -> int:
    return int.from_bytes(decode_from_transfer(text), "big")
