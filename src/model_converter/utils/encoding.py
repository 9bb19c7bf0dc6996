# ABOUTME: Byte/text helpers for encoded model payloads

import base64


def bytes_to_base64(data: bytes) -> str:
    """Encode bytes as standard base64 text."""
    return base64.b64encode(data).decode('ascii')


def base64_to_bytes(text: str) -> bytes:
    """Decode standard base64 text, rejecting non-alphabet characters."""
    return base64.b64decode(text, validate=True)
