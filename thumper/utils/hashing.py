# Thumper Hashing Utilities
# Content digests for checksum-gated uploads

import hashlib

from thumper.errors import EncodingError

DIGEST_SIZE = 32


def content_digest(content: str | bytes) -> bytes:
    """
    Calculate the SHA-256 digest of content.

    Args:
        content: String or bytes content.

    Returns:
        Raw 32-byte digest.
    """
    if isinstance(content, str):
        content = content.encode("utf-8")

    return hashlib.sha256(content).digest()


def decode_checksum(hex_checksum: str | None) -> bytes | None:
    """
    Decode a hex checksum reported by the storage API.

    The API reports upper-case hex; an empty or missing checksum means
    the store has no digest for the object.

    Args:
        hex_checksum: Hex-encoded SHA-256 digest, or None.

    Returns:
        Raw 32-byte digest, or None if absent.

    Raises:
        EncodingError: If the checksum is not valid hex or has the wrong length.
    """
    if not hex_checksum:
        return None

    try:
        checksum = bytes.fromhex(hex_checksum)
    except ValueError as e:
        raise EncodingError(f"Malformed checksum {hex_checksum!r}") from e

    if len(checksum) != DIGEST_SIZE:
        raise EncodingError(f"Checksum {hex_checksum!r} is {len(checksum)} bytes, expected {DIGEST_SIZE}")

    return checksum
