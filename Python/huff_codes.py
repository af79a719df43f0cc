from collections import namedtuple
from typing import Iterator, List, Optional, Tuple

from huff_tree import ALPHABET_SIZE, HuffmanTree


class HuffmanCode(namedtuple('HuffmanCode', ['code', 'length'])):
    """code holds length bits, right-justified, read MSB first"""
    __slots__ = ()

    def __str__(self):
        return format(self.code, f"0{self.length}b")


class HuffmanCodeTable:
    def __init__(self, tree: HuffmanTree):
        self.code_table: List[Optional[HuffmanCode]] = [None] * ALPHABET_SIZE
        self.number_of_codes = 0

        # if the text entirely consists of a single character
        if tree.is_leaf():
            self.code_table[tree.character] = HuffmanCode(0, 1)
            self.number_of_codes = 1
            return

        self._get_all_huffman_codes(tree, 0, 0)

    def _get_all_huffman_codes(self, tree: HuffmanTree, code: int, code_length: int):
        if tree.is_leaf():
            self.code_table[tree.character] = HuffmanCode(code, code_length)
            self.number_of_codes += 1
            return

        code <<= 1
        code_length += 1
        self._get_all_huffman_codes(tree.left, code, code_length)
        self._get_all_huffman_codes(tree.right, code | 1, code_length)

    def get_huffman_code(self, character: int) -> Optional[HuffmanCode]:
        return self.code_table[character]

    def items(self) -> Iterator[Tuple[int, HuffmanCode]]:
        for character, code in enumerate(self.code_table):
            if code is not None:
                yield character, code

    @property
    def max_code_length(self) -> int:
        return max((code.length for _, code in self.items()), default=0)

    def is_prefix_free(self) -> bool:
        # in sorted order a prefix is immediately followed by a code it prefixes
        bit_strings = sorted(str(code) for _, code in self.items())
        for shorter, longer in zip(bit_strings, bit_strings[1:]):
            if longer.startswith(shorter):
                return False
        return True


def print_char(c: int, file=None):
    if 0x20 <= c < 127:
        print(f"'{chr(c)}'", end="", file=file)
    else:
        print(f"{c:#06x}", end="", file=file)


def print_model(tree: HuffmanTree, code_table: HuffmanCodeTable, file=None):
    stack = [tree]
    leaves = []
    while stack:
        node = stack.pop()
        if node.is_leaf():
            leaves.append(node)
        else:
            stack.append(node.right)
            stack.append(node.left)

    for leaf in sorted(leaves, key=lambda node: node.character):
        print("node=", end="", file=file)
        print_char(leaf.character, file)
        print(f"  count={leaf.frequency:5d}", end="", file=file)
        print(f"  Huffman code={code_table.get_huffman_code(leaf.character)}", file=file)
