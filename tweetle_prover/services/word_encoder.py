"""
Word Encoder

Conversions between a 5-letter word, its ASCII byte form and the packed
big-integer (felt) form used by the contract and the circuit.
"""

from ..utils.errors import EncodingError

WORD_LENGTH = 5
_PACKED_LIMIT = 256 ** WORD_LENGTH


def bytes_of(word: str) -> bytes:
    """
    Converts a word into its 5 ASCII byte values.

    Args:
        word: A 5-character ASCII string

    Returns:
        bytes: The ASCII codes, in word order

    Raises:
        EncodingError: If word is not a string, is not 5 characters long,
            or contains non-ASCII characters
    """
    if not isinstance(word, str):
        raise EncodingError(f"Word must be a string, got {type(word).__name__}")
    if len(word) != WORD_LENGTH:
        raise EncodingError(f"Word must be exactly {WORD_LENGTH} characters, got {len(word)}")
    try:
        return word.encode('ascii')
    except UnicodeEncodeError as e:
        raise EncodingError(f"Word '{word}' contains non-ASCII characters") from e


def word_of(word: bytes) -> str:
    """Inverse of bytes_of."""
    _check_word_bytes(word)
    try:
        return word.decode('ascii')
    except UnicodeDecodeError as e:
        raise EncodingError(f"Word bytes {list(word)} are not ASCII") from e


def pack_word(word: bytes) -> int:
    """Packs 5 bytes into one integer, most significant byte first."""
    _check_word_bytes(word)
    return int.from_bytes(word, 'big')


def unpack_word(value: int) -> bytes:
    """
    Unpacks an integer into exactly 5 bytes.

    Leading zero bytes are kept, so every packed word round-trips.

    Raises:
        EncodingError: If value is negative or does not fit in 5 bytes
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise EncodingError(f"Packed word must be an integer, got {type(value).__name__}")
    if value < 0 or value >= _PACKED_LIMIT:
        raise EncodingError(f"Packed word {value} does not fit in {WORD_LENGTH} bytes")
    return value.to_bytes(WORD_LENGTH, 'big')


def packed_hex(word: bytes) -> str:
    """Packed word as a 0x-prefixed lowercase hex string."""
    return hex(pack_word(word))


def _check_word_bytes(word: bytes) -> None:
    if not isinstance(word, (bytes, bytearray)):
        raise EncodingError(f"Word bytes must be bytes, got {type(word).__name__}")
    if len(word) != WORD_LENGTH:
        raise EncodingError(f"Word must be exactly {WORD_LENGTH} bytes, got {len(word)}")
