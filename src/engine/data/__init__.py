"""Bundled word list and dictionary loading."""

from .wordlist import Dictionary, DictionaryLoadError, load_dictionary, DEFAULT_WORD_LIST

__all__ = [
    "Dictionary",
    "DictionaryLoadError",
    "load_dictionary",
    "DEFAULT_WORD_LIST",
]
