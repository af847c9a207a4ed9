"""
Trie-based file name index.

Names are stored lowercased, one node per character. Each terminal node owns
an insertion-ordered set of absolute paths, so the same name can live in many
directories and re-inserting a path is a no-op.
"""

from typing import Dict, List


class _TrieNode:
    __slots__ = ('children', 'is_terminal', 'paths')

    def __init__(self):
        self.children: Dict[str, '_TrieNode'] = {}
        self.is_terminal = False
        # dict keys act as an ordered set
        self.paths: Dict[str, None] = {}


class NameIndex:
    """
    Prefix tree mapping lowercased file names to the paths that carry them.

    insert and search_exact cost O(len(name)); search_by_prefix costs
    O(len(prefix) + size of the subtree below the prefix).
    """

    def __init__(self):
        self._root = _TrieNode()
        self._size = 0

    def insert(self, name: str, path: str) -> None:
        """Add a path under the given file name."""
        node = self._root
        for char in name.lower():
            child = node.children.get(char)
            if child is None:
                child = _TrieNode()
                node.children[char] = child
            node = child

        node.is_terminal = True
        if path not in node.paths:
            node.paths[path] = None
            self._size += 1

    def _find(self, key: str):
        node = self._root
        for char in key.lower():
            node = node.children.get(char)
            if node is None:
                return None
        return node

    def search_exact(self, name: str) -> List[str]:
        """Return the paths stored under exactly this name, in insertion order."""
        node = self._find(name)
        if node is None or not node.is_terminal:
            return []
        return list(node.paths)

    def search_by_prefix(self, prefix: str) -> List[str]:
        """Return every path whose file name starts with prefix."""
        node = self._find(prefix)
        if node is None:
            return []

        result: List[str] = []
        self._collect(node, result)
        return result

    def _collect(self, node: _TrieNode, result: List[str]) -> None:
        # pre-order, children in insertion order
        stack = [node]
        while stack:
            current = stack.pop()
            if current.is_terminal:
                result.extend(current.paths)
            stack.extend(reversed(list(current.children.values())))

    def clear(self) -> None:
        self._root = _TrieNode()
        self._size = 0

    def __len__(self) -> int:
        return self._size

    def __contains__(self, name: str) -> bool:
        node = self._find(name)
        return node is not None and node.is_terminal
