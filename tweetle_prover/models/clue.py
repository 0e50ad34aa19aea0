"""
Clue Data Models

Per-letter evaluation of a guess against the hidden solution.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import List, Tuple

# Weights of the five clue slots in the packed form: base-4 digits, slot 0 most significant
CLUE_WEIGHTS: Tuple[int, ...] = (256, 64, 16, 4, 1)


class ClueSlot(IntEnum):
    """Letter evaluation status, numbered as the contract and circuit expect."""
    ABSENT = 0
    PRESENT = 1
    CORRECT = 2


@dataclass(frozen=True)
class Clue:
    """Five clue slots, one per guess position."""
    slots: Tuple[ClueSlot, ClueSlot, ClueSlot, ClueSlot, ClueSlot]

    @property
    def packed(self) -> int:
        return sum(int(slot) * weight for slot, weight in zip(self.slots, CLUE_WEIGHTS))

    @property
    def is_solved(self) -> bool:
        return all(slot == ClueSlot.CORRECT for slot in self.slots)

    def to_list(self) -> List[int]:
        return [int(slot) for slot in self.slots]
