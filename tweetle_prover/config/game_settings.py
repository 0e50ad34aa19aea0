"""
Tournament Word List Module

Loads the fixed, ordered list of solution words shared with the on-chain
contract. A tournament refers to its solution by index into this list, so the
order of words.json must never change once tournaments have been created.
"""

import json
import os
from typing import Final, List, Optional, Sequence


# Load word list from JSON file
def _load_word_list() -> List[str]:
    """
    Load word list from words.json file.

    Returns:
        List[str]: List of lowercase 5-letter words, in file order

    Raises:
        FileNotFoundError: If words.json file is not found
        ValueError: If JSON is malformed, the list is empty or contains invalid words
    """
    config_dir = os.path.dirname(os.path.abspath(__file__))
    json_file_path = os.path.join(config_dir, 'words.json')

    try:
        with open(json_file_path, 'r', encoding='utf-8') as f:
            word_list = json.load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"Word list file not found: {json_file_path}")
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in words.json: {e}") from e

    if not isinstance(word_list, list):
        raise ValueError("JSON file must contain an array of words")

    if not word_list:
        raise ValueError("Word list cannot be empty")

    # Solutions are stored lowercase; guesses are normalized to match
    lowercase_words = [word.lower() for word in word_list]

    for word in lowercase_words:
        if len(word) != 5:
            raise ValueError(f"Word '{word}' is not 5 characters long")
        if not (word.isascii() and word.isalpha()):
            raise ValueError(f"Word '{word}' contains non-alphabetic characters")

    return lowercase_words


# Ordered solution word list loaded from JSON file
WORD_LIST: Final[List[str]] = _load_word_list()


def word_count(words: Optional[Sequence[str]] = None) -> int:
    """Number of candidate solution words."""
    return len(WORD_LIST if words is None else words)


def word_at(index: int, words: Optional[Sequence[str]] = None) -> str:
    """
    Returns the solution word stored at ``index``.

    Args:
        index: Position in the word list
        words: Word list to read instead of WORD_LIST

    Raises:
        IndexError: If index is outside 0 <= index < word_count(words)
    """
    words = WORD_LIST if words is None else words
    if index < 0 or index >= len(words):
        raise IndexError(f"Word index {index} out of range 0..{len(words) - 1}")
    return words[index]


def validate_word_list_integrity() -> bool:
    """
    Validates the integrity and consistency of the word database.

    This function performs validation to ensure:
    1. Length validation: All words must be exactly 5 characters
    2. Character validation: Only ASCII alphabetic characters allowed
    3. Format validation: Consistent lowercase formatting
    4. Uniqueness validation: No duplicate entries

    Returns:
        bool: True if word list passes all validation checks

    Raises:
        ValueError: If any validation check fails with detailed error message
    """
    if not WORD_LIST:
        raise ValueError("Word list cannot be empty")

    for index, word in enumerate(WORD_LIST):
        if len(word) != 5:
            raise ValueError(f"Word at index {index} '{word}' is not 5 characters long")

        if not (word.isascii() and word.isalpha()):
            raise ValueError(f"Word at index {index} '{word}' contains non-alphabetic characters")

        if not word.islower():
            raise ValueError(f"Word at index {index} '{word}' is not in lowercase format")

    if len(WORD_LIST) != len(set(WORD_LIST)):
        duplicates = sorted({word for word in WORD_LIST if WORD_LIST.count(word) > 1})
        raise ValueError(f"Duplicate words found in word list: {duplicates}")

    return True


def get_word_statistics() -> dict:
    """
    Summarizes the word list.

    Returns:
        dict: total_words, avg_vowel_count, letter_frequency and most_common_letters
    """
    if not WORD_LIST:
        return {"error": "Word list is empty"}

    vowels = set('aeiou')
    total_vowels = sum(len([char for char in word if char in vowels]) for word in WORD_LIST)

    letter_frequency = {}
    for word in WORD_LIST:
        for char in word:
            letter_frequency[char] = letter_frequency.get(char, 0) + 1

    return {
        "total_words": len(WORD_LIST),
        "avg_vowel_count": round(total_vowels / len(WORD_LIST), 2),
        "letter_frequency": letter_frequency,
        "most_common_letters": sorted(letter_frequency.items(), key=lambda x: x[1], reverse=True)[:5]
    }


if __name__ == "__main__":

    try:
        validate_word_list_integrity()
        print(" Word list validation passed")

        stats = get_word_statistics()
        print(f" Word list statistics: {stats}")
    except ValueError as config_error:
        print(f" Word list validation failed: {config_error}")
        exit(1)
