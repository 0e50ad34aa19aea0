"""
Clue Engine

Wordle letter evaluation. The on-chain contract and the proof circuit each
implement the same comparison; this module must stay bit-exact with both or
proofs will fail verification.
"""

from typing import List, Optional, Sequence

from ..models.clue import CLUE_WEIGHTS, Clue, ClueSlot
from ..utils.errors import EncodingError
from .word_encoder import WORD_LENGTH

ALL_CORRECT_CLUE = 682  # 2*256 + 2*64 + 2*16 + 2*4 + 2
_PACKED_CLUE_LIMIT = 4 ** WORD_LENGTH


def compute_clue(solution: Sequence[int], guess: Sequence[int]) -> Clue:
    """
    Implements the two-pass Wordle evaluation used by the contract and circuit.

    Exact matches are marked first and consume their solution position. Then
    each remaining guess position, in order, claims the lowest unconsumed
    solution position holding the same letter.

    Args:
        solution: 5 byte values of the hidden word
        guess: 5 byte values of the guessed word

    Returns:
        Clue: one slot per guess position
    """
    result: List[Optional[ClueSlot]] = [None] * WORD_LENGTH
    used = [False] * WORD_LENGTH

    # First pass: exact matches
    for i in range(WORD_LENGTH):
        if guess[i] == solution[i]:
            result[i] = ClueSlot.CORRECT
            used[i] = True

    # Second pass: wrong-position matches, scanning solution positions in order
    for i in range(WORD_LENGTH):
        if result[i] is not None:
            continue
        result[i] = ClueSlot.ABSENT
        for j in range(WORD_LENGTH):
            if not used[j] and guess[i] == solution[j]:
                result[i] = ClueSlot.PRESENT
                used[j] = True
                break

    return Clue(slots=tuple(result))


def pack_clue(slots: Sequence[int]) -> int:
    """Packs 5 clue slots as base-4 digits: s0*256 + s1*64 + s2*16 + s3*4 + s4."""
    if len(slots) != WORD_LENGTH:
        raise EncodingError(f"Clue must have exactly {WORD_LENGTH} slots, got {len(slots)}")
    try:
        return sum(int(ClueSlot(slot)) * weight for slot, weight in zip(slots, CLUE_WEIGHTS))
    except ValueError as e:
        raise EncodingError(f"Clue {list(slots)} has an invalid slot value") from e


def decode_clue(packed: int) -> Clue:
    """
    Inverse of pack_clue.

    Raises:
        EncodingError: If packed is outside 0..1023 or has a digit that is not a ClueSlot
    """
    if isinstance(packed, bool) or not isinstance(packed, int):
        raise EncodingError(f"Packed clue must be an integer, got {type(packed).__name__}")
    if packed < 0 or packed >= _PACKED_CLUE_LIMIT:
        raise EncodingError(f"Packed clue {packed} out of range 0..{_PACKED_CLUE_LIMIT - 1}")

    slots = []
    for weight in CLUE_WEIGHTS:
        digit = (packed // weight) % 4
        try:
            slots.append(ClueSlot(digit))
        except ValueError as e:
            raise EncodingError(f"Packed clue {packed} has invalid slot value {digit}") from e
    return Clue(slots=tuple(slots))
