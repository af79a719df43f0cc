from typing import List, Optional, Sequence

from huff_errors import InvalidArgumentError
from huff_list import TreeQueue

ALPHABET_SIZE = 0xFFFF + 1


class HuffmanTree:
    """A leaf (character) or an internal node with exactly two children.

    frequency is only meaningful while the tree is being built; decoded trees
    leave it at -1.
    """
    __slots__ = ['character', 'frequency', 'left', 'right']

    def __init__(self, character: int = 0, frequency: int = -1,
                 left: Optional['HuffmanTree'] = None, right: Optional['HuffmanTree'] = None):
        self.character = character
        self.frequency = frequency
        self.left = left
        self.right = right

    def is_leaf(self) -> bool:
        # right is None if and only if left is None
        return self.left is None

    def leaf_count(self) -> int:
        count = 0
        stack = [self]
        while stack:
            node = stack.pop()
            if node.is_leaf():
                count += 1
            else:
                stack.append(node.right)
                stack.append(node.left)
        return count

    def depth(self) -> int:
        deepest = 0
        stack = [(self, 0)]
        while stack:
            node, level = stack.pop()
            if node.is_leaf():
                deepest = max(deepest, level)
            else:
                stack.append((node.right, level + 1))
                stack.append((node.left, level + 1))
        return deepest

    def __repr__(self):
        if self.is_leaf():
            return f"HuffmanTree(character={self.character:#06x}, frequency={self.frequency})"
        return f"HuffmanTree(frequency={self.frequency}, left={self.left!r}, right={self.right!r})"


def count_frequencies(units: Sequence[int]) -> List[int]:
    frequencies = [0] * ALPHABET_SIZE
    for c in units:
        frequencies[c] += 1
    return frequencies


def generate_huffman_tree(units: Sequence[int], list_factory=TreeQueue) -> HuffmanTree:
    """Build the Huffman tree of a sequence of 16-bit code units.

    Leaves enter the list in ascending character order. The two lowest trees
    are merged repeatedly (first removed on the left) until one is left. Text
    made of a single distinct character yields a lone leaf.
    """
    if len(units) == 0:
        raise InvalidArgumentError("Empty text.")

    frequencies = count_frequencies(units)
    tree_list = list_factory()

    for i in range(ALPHABET_SIZE):
        if frequencies[i] != 0:
            tree_list.add(HuffmanTree(i, frequencies[i]))

    while not tree_list.has_exactly_one_tree():
        top1 = tree_list.remove_top_tree()
        top2 = tree_list.remove_top_tree()
        tree_list.add(HuffmanTree(frequency=top1.frequency + top2.frequency, left=top1, right=top2))

    return tree_list.remove_top_tree()
