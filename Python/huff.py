#Brad Arrington
import struct
from collections import namedtuple
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple, Union

from bitio import CompressorBitio
from huff_codes import HuffmanCodeTable
from huff_errors import CorruptFormatError, HuffmanError, InvalidArgumentError, UnsupportedVersionError
from huff_tree import HuffmanTree, generate_huffman_tree

COMPRESSION_NAME = "static Huffman coding of 16-bit text"
USAGE = "infile outfile [-d]\n\nSpecifying -d will dump the modeling data\n"

FILE_FORMAT_VERSION = 0
METADATA_SIZE = 4
CHAR_BITS = 16
# a 1 bit and 16 bits for the character of a lone leaf
MIN_TREE_LENGTH = 3
# 65536 leaves of 17 bits and 65535 internal nodes of 1 bit
MAX_TREE_LENGTH = 147456
# metadata, the smallest tree and at least 1 byte of text
MIN_FILE_LENGTH = METADATA_SIZE + MIN_TREE_LENGTH + 1

# metadata word: 6 bits version, 18 bits tree length, 4 bits per last-byte bit count
METADATA_FORMAT = ">I"

Metadata = namedtuple('Metadata', ['version', 'tree_length', 'tree_bits', 'text_bits'])

Text = Union[str, Sequence[int]]


@dataclass(frozen=True)
class CompressionInfo:
    total_chars: int
    metadata_size: int
    tree_size: int
    text_size: int

    @property
    def compressed_size(self) -> int:
        return self.metadata_size + self.tree_size + self.text_size

    def __str__(self):
        return "\n".join([
            f"{self.total_chars:,} char(s) total",
            f"{self.compressed_size:,} byte(s) total",
            f"{self.metadata_size:,} byte(s) for metadata",
            f"{self.tree_size:,} byte(s) for tree",
            f"{self.text_size:,} byte(s) for text",
        ])


@dataclass(frozen=True)
class DecodeResult:
    """Outcome of decoding: either the code units or the error describing the corruption."""
    units: Optional[List[int]] = None
    error: Optional[HuffmanError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def text(self) -> str:
        return from_code_units(self.unwrap())

    def unwrap(self) -> List[int]:
        if self.error is not None:
            raise self.error
        return self.units


def to_code_units(text: Text) -> List[int]:
    if isinstance(text, str):
        raw = text.encode("utf-16-be", "surrogatepass")
        return list(struct.unpack(f">{len(raw) // 2}H", raw))

    units = list(text)
    for c in units:
        if not isinstance(c, int) or not 0 <= c <= 0xFFFF:
            raise InvalidArgumentError(f"Not a 16-bit code unit: {c!r}")
    return units


def from_code_units(units: Sequence[int]) -> str:
    return struct.pack(f">{len(units)}H", *units).decode("utf-16-be", "surrogatepass")


def pack_metadata(tree_length: int, tree_bits: int, text_bits: int,
                  version: int = FILE_FORMAT_VERSION) -> bytes:
    word = (version << 26) | (tree_length << 8) | (tree_bits << 4) | text_bits
    return struct.pack(METADATA_FORMAT, word)


def unpack_metadata(data: bytes) -> Metadata:
    word, = struct.unpack_from(METADATA_FORMAT, data)
    return Metadata(
        version=word >> 26,
        tree_length=(word >> 8) & 0x3FFFF,
        tree_bits=(word >> 4) & 0x0F,
        text_bits=word & 0x0F,
    )


def encode_tree(tree: HuffmanTree, buffer: 'CompressorBitio.BitBuffer'):
    if tree.is_leaf():
        buffer.output_bit(1)
        buffer.output_bits(tree.character, CHAR_BITS)
        return

    buffer.output_bit(0)
    encode_tree(tree.left, buffer)
    encode_tree(tree.right, buffer)


def encode_text(units: Sequence[int], code_table: HuffmanCodeTable, buffer: 'CompressorBitio.BitBuffer'):
    for c in units:
        code = code_table.get_huffman_code(c)
        buffer.output_bits(code.code, code.length)


def encode_to_bytes(text: Text) -> Tuple[bytes, CompressionInfo]:
    units = to_code_units(text)
    if not units:
        return b"", CompressionInfo(0, 0, 0, 0)

    tree = generate_huffman_tree(units)
    code_table = HuffmanCodeTable(tree)

    tree_buffer = CompressorBitio.BitBuffer()
    encode_tree(tree, tree_buffer)

    text_buffer = CompressorBitio.BitBuffer()
    encode_text(units, code_table, text_buffer)

    metadata = pack_metadata(tree_buffer.length_in_bytes, tree_buffer.bits_of_last_byte,
                             text_buffer.bits_of_last_byte)
    data = metadata + tree_buffer.to_bytes() + text_buffer.to_bytes()
    info = CompressionInfo(len(units), METADATA_SIZE, tree_buffer.length_in_bytes, text_buffer.length_in_bytes)
    return data, info


def encode(text: Text, filename: str) -> CompressionInfo:
    """Encode text and write it to filename, returning the size breakdown.

    The whole file is built in memory before anything is written; empty text
    produces an empty file.
    """
    data, info = encode_to_bytes(text)
    CompressorBitio.write_all_bytes(filename, data)
    return info


def decode_tree(data: bytes, bit_position: int, end_position: int) -> Optional[HuffmanTree]:
    """Rebuild a preordered tree from data, never reading at or past end_position.

    Returns None when the bits do not describe a tree inside that region.
    """
    reader = CompressorBitio.BitReader(data, bit_position, end_position)
    root = HuffmanTree()
    stack = [root]

    while stack:
        node = stack.pop()
        if reader.bits_remaining() <= 0:
            return None

        if reader.input_bit():
            if reader.bits_remaining() < CHAR_BITS:
                return None
            node.character = reader.input_bits(CHAR_BITS)
        else:
            node.left = HuffmanTree()
            node.right = HuffmanTree()
            stack.append(node.right)
            stack.append(node.left)
            # every pending subtree needs at least one leaf
            if len(stack) * (1 + CHAR_BITS) > reader.bits_remaining():
                return None

    return root


def decode_text(data: bytes, tree: HuffmanTree, text_start: int, text_bits: int, name: str) -> DecodeResult:
    end_position = (len(data) - 1) * 8 + text_bits

    # if the text entirely consists of a single character its code is a lone 0 bit
    if tree.is_leaf():
        if any(data[text_start:]):
            return DecodeResult(error=CorruptFormatError(name, "single character text has a 1 bit"))
        return DecodeResult(units=[tree.character] * (end_position - text_start * 8))

    reader = CompressorBitio.BitReader(data, text_start * 8, end_position)
    units = []
    node = tree
    while reader.bits_remaining() > 0:
        node = node.right if reader.input_bit() else node.left
        if node is None:
            return DecodeResult(error=CorruptFormatError(name, "code leads to a missing child"))
        if node.is_leaf():
            units.append(node.character)
            node = tree

    return DecodeResult(units=units)


def try_decode_bytes(data: bytes, name: str = "<bytes>") -> DecodeResult:
    if len(data) == 0:
        return DecodeResult(units=[])

    if len(data) < MIN_FILE_LENGTH:
        return DecodeResult(error=CorruptFormatError(name, f"{len(data)} bytes is too short"))

    metadata = unpack_metadata(data)
    if metadata.version > FILE_FORMAT_VERSION:
        return DecodeResult(error=UnsupportedVersionError(name, metadata.version))

    if not 1 <= metadata.tree_bits <= 8 or not 1 <= metadata.text_bits <= 8:
        return DecodeResult(error=CorruptFormatError(name, "bit count of a last byte out of range"))
    if not MIN_TREE_LENGTH <= metadata.tree_length <= MAX_TREE_LENGTH:
        return DecodeResult(error=CorruptFormatError(name, f"tree length {metadata.tree_length} out of range"))
    if len(data) < METADATA_SIZE + metadata.tree_length + 1:
        return DecodeResult(error=CorruptFormatError(name, "file shorter than its tree"))

    tree_start = METADATA_SIZE * 8
    tree_end = tree_start + (metadata.tree_length - 1) * 8 + metadata.tree_bits
    tree = decode_tree(data, tree_start, tree_end)
    if tree is None:
        return DecodeResult(error=CorruptFormatError(name, "tree overruns its region"))

    return decode_text(data, tree, METADATA_SIZE + metadata.tree_length, metadata.text_bits, name)


def decode_bytes(data: bytes, name: str = "<bytes>") -> str:
    return try_decode_bytes(data, name).text


def decode_units(filename: str) -> List[int]:
    return try_decode_bytes(CompressorBitio.read_all_bytes(filename), filename).unwrap()


def decode(filename: str) -> str:
    return from_code_units(decode_units(filename))
