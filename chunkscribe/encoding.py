"""Binary-to-text encoding for audio payloads."""

import base64
import binascii


def encode_audio(data: bytes) -> str:
    """Encode raw bytes as a padded base64 ASCII string."""
    return base64.b64encode(data).decode("ascii")


def decode_audio(encoded: str) -> bytes:
    """Decode a string produced by :func:`encode_audio`.

    Raises:
        ValueError: If ``encoded`` is not valid base64.
    """
    try:
        return base64.b64decode(encoded, validate=True)
    except binascii.Error as exc:
        raise ValueError(f"Invalid base64 audio payload: {exc}") from exc
