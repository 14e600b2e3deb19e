"""Prefix trie with three-way lookup."""

from __future__ import annotations


# Lookup results
NO_MATCH = 0  # Not a prefix of any word
PREFIX_ONLY = 1  # Prefix of a word, but not a word itself
EXACT_WORD = 2  # A complete word


class TrieNode:
    __slots__ = ("children", "is_word")

    def __init__(self):
        self.children: dict[str, TrieNode] = {}
        self.is_word: bool = False


class Trie:
    def __init__(self):
        self.root = TrieNode()
        self._size = 0

    def insert(self, word: str):
        node = self.root
        for ch in word:
            if ch not in node.children:
                node.children[ch] = TrieNode()
            node = node.children[ch]
        if not node.is_word:
            node.is_word = True
            self._size += 1

    def search(self, text: str) -> int:
        """Classify `text` as NO_MATCH, PREFIX_ONLY or EXACT_WORD."""
        node = self.root
        for ch in text:
            node = node.children.get(ch)
            if node is None:
                return NO_MATCH
        return EXACT_WORD if node.is_word else PREFIX_ONLY

    def __contains__(self, word: str) -> bool:
        return self.search(word) == EXACT_WORD

    def __len__(self) -> int:
        return self._size
