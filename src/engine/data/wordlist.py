# Word list loading for the puzzle engine.
# The bundled list (words.txt) is a small common-English list so the engine
# runs offline; any newline-delimited list can be loaded in its place.

import logging
from pathlib import Path
from typing import Iterable

from ..constants import MIN_WORD_LENGTH, MAX_WORD_LENGTH
from ..trie import Trie

logger = logging.getLogger("wordfall")

DEFAULT_WORD_LIST = Path(__file__).parent / "words.txt"


class DictionaryLoadError(Exception):
    '''Raised when a word list cannot be turned into a usable dictionary.'''


class Dictionary(object):
    '''
    The two views of one word list the engine needs: a flat membership set
    for final submission checks and a trie for prefix feedback and search.
    '''
    def __init__(self, words: Iterable[str]):
        kept = set()
        for raw in words:
            word = raw.strip().upper()
            if MIN_WORD_LENGTH <= len(word) <= MAX_WORD_LENGTH and word.isalpha():
                kept.add(word)
        self.words = frozenset(kept)
        self.trie = Trie()
        for word in sorted(self.words):
            self.trie.insert(word)

    def __contains__(self, word):
        return word in self.words

    def __len__(self):
        return len(self.words)

    def search(self, text):
        return self.trie.search(text)


def load_dictionary(path=DEFAULT_WORD_LIST) -> Dictionary:
    '''
    Load a newline-delimited word list.

    Raises DictionaryLoadError if the file cannot be read or holds no
    words of a playable length.
    '''
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise DictionaryLoadError(f"Could not read word list {path}: {e}") from e

    dictionary = Dictionary(text.splitlines())
    if not len(dictionary):
        raise DictionaryLoadError(f"Word list {path} has no words of length "
                                  f"{MIN_WORD_LENGTH}-{MAX_WORD_LENGTH}")

    logger.info("Loaded %d words from %s", len(dictionary), path)
    return dictionary
