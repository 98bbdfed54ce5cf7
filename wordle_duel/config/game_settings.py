"""
Game Configuration Constants Module

Fixed game rules shared by both room variants, and the per-language
secret-word lists the server draws from when it picks a word itself.
"""

import json
import os
import random
from typing import Dict, Final, List

WORD_LENGTH: Final[int] = 5
"""Every secret word and guess has exactly this many letters."""

MAX_ROWS: Final[int] = 6
"""Rows in the shared grid before a shared-turn game ends without a winner."""

ROOM_CODE_ALPHABET: Final[str] = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"

SUPPORTED_LANGUAGES: Final[List[str]] = ["en", "it"]


def _load_word_list(language: str) -> List[str]:
    """
    Load the secret-word list for a language from words_<language>.json.

    Returns:
        List[str]: List of uppercase 5-letter words

    Raises:
        FileNotFoundError: If the JSON file is not found
        ValueError: If the word list is empty or contains invalid words
    """
    config_dir = os.path.dirname(os.path.abspath(__file__))
    json_file_path = os.path.join(config_dir, f'words_{language}.json')

    try:
        with open(json_file_path, 'r', encoding='utf-8') as f:
            word_list = json.load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"Word list file not found: {json_file_path}")

    if not isinstance(word_list, list):
        raise ValueError(f"{json_file_path} must contain an array of words")

    if not word_list:
        raise ValueError("Word list cannot be empty")

    uppercase_words = [word.upper() for word in word_list]

    for word in uppercase_words:
        if len(word) != WORD_LENGTH:
            raise ValueError(f"Word '{word}' is not {WORD_LENGTH} characters long")
        if not word.isalpha():
            raise ValueError(f"Word '{word}' contains non-alphabetic characters")

    return uppercase_words


WORD_LISTS: Final[Dict[str, List[str]]] = {
    language: _load_word_list(language) for language in SUPPORTED_LANGUAGES
}


def resolve_language(language, default: str = "en") -> str:
    """Map a client-supplied language to a supported one."""
    if isinstance(language, str) and language.strip().lower() in WORD_LISTS:
        return language.strip().lower()
    return default


def pick_secret_word(language: str) -> str:
    """Server-side secret word selection for shared-turn rooms."""
    return random.choice(WORD_LISTS[resolve_language(language)])
