"""Prefix tree over register names."""
from typing import Dict, Iterable, List, Optional, Tuple

from . import ast


class TrieNode:
    """A node keyed by single characters.

    terminal holds the index of the register whose name ends at this node,
    or None. A node can have both children and a terminal when one name is a
    prefix of another ("a" and "ab").
    """

    def __init__(self):
        self.children: Dict[str, 'TrieNode'] = {}
        self.terminal: Optional[int] = None

    def insert(self, key: str, index: int):
        node = self
        for c in key:
            child = node.children.get(c)
            if child is None:
                child = TrieNode()
                node.children[c] = child
            node = child
        assert node.terminal is None, f"name {key!r} inserted twice"
        node.terminal = index

    def sorted_children(self) -> List[Tuple[str, 'TrieNode']]:
        """Children in ascending code point order."""
        return sorted(self.children.items(), key=lambda item: ord(item[0]))

    def lookup(self, key: str) -> Optional[int]:
        node = self
        for c in key:
            node = node.children.get(c)
            if node is None:
                return None
        return node.terminal

    def num_names(self) -> int:
        """Number of names stored under this node."""
        count = 1 if self.terminal is not None else 0
        return count + sum(child.num_names() for child in self.children.values())


def trie_key(name: str, encoding: Optional[str] = None) -> str:
    """Key under which a name is stored.

    With an encoding, each byte of the encoded name becomes one character so
    that the trie branches on bytes, the way C code walking a char * does.
    """
    if encoding is None:
        return name
    return name.encode(encoding).decode('latin-1')


def build_trie(registers: Iterable[ast.Register], encoding: Optional[str] = None) -> TrieNode:
    root = TrieNode()
    for reg in registers:
        for name in reg.names:
            root.insert(trie_key(name, encoding), reg.index)
    return root
