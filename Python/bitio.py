#Bradford Arrington 2025
from array import array

from huff_errors import StorageError


class CompressorBitio:
    WORD_BITS = 16

    class BitBuffer:
        """In-memory bit sink packed MSB first into 16-bit words."""

        def __init__(self):
            self.words = array('H')
            self.bit_position: int = 0

        def output_bit(self, bit: int):
            index = self.bit_position // CompressorBitio.WORD_BITS
            if index == len(self.words):
                self.words.append(0)
            if bit != 0:
                self.words[index] |= 0x8000 >> (self.bit_position % CompressorBitio.WORD_BITS)
            self.bit_position += 1

        def output_bits(self, code: int, count: int):
            # count may exceed the word size; the code is split across words
            while count > 0:
                index = self.bit_position // CompressorBitio.WORD_BITS
                if index == len(self.words):
                    self.words.append(0)
                free = CompressorBitio.WORD_BITS - (self.bit_position % CompressorBitio.WORD_BITS)
                take = min(free, count)
                chunk = (code >> (count - take)) & ((1 << take) - 1)
                self.words[index] |= chunk << (free - take)
                self.bit_position += take
                count -= take

        @property
        def length_in_bytes(self) -> int:
            return (self.bit_position + 7) // 8

        @property
        def bits_of_last_byte(self) -> int:
            bits = self.bit_position % 8
            return 8 if bits == 0 else bits

        def to_bytes(self) -> bytes:
            out = bytearray()
            for word in self.words:
                # 8 more-significant bits, then 8 less-significant bits
                out.append(word >> 8)
                out.append(word & 0xFF)
            del out[self.length_in_bytes:]
            return bytes(out)

    class BitReader:
        """Reads bits MSB first from a byte string, between two absolute bit positions."""

        def __init__(self, data: bytes, bit_position: int = 0, end_position: int = None):
            self.data = data
            self.bit_position = bit_position
            self.end_position = len(data) * 8 if end_position is None else end_position
            self.rack: int = 0
            self.mask: int = 0x80 >> (bit_position % 8)
            if self.mask != 0x80:
                self.rack = data[bit_position // 8]

        def bits_remaining(self) -> int:
            return self.end_position - self.bit_position

        def input_bit(self) -> int:
            if self.bit_position >= self.end_position:
                raise EOFError("Fatal error in InputBit! End of bit region reached.")
            if self.mask == 0x80:
                self.rack = self.data[self.bit_position // 8]
            value = self.rack & self.mask
            self.mask >>= 1
            if self.mask == 0:
                self.mask = 0x80
            self.bit_position += 1
            return 1 if value != 0 else 0

        def input_bits(self, bit_count: int) -> int:
            if self.bit_position + bit_count > self.end_position:
                raise EOFError("Fatal error in InputBits! End of bit region reached.")
            return_value: int = 0
            for _ in range(bit_count):
                return_value = (return_value << 1) | self.input_bit()
            return return_value

    @staticmethod
    def read_all_bytes(name: str) -> bytes:
        try:
            with open(name, "rb") as file_stream:
                return file_stream.read()
        except OSError as e:
            raise StorageError(f"Fatal error reading '{name}'! {e}", name) from e

    @staticmethod
    def write_all_bytes(name: str, data: bytes):
        try:
            with open(name, "wb") as file_stream:
                file_stream.write(data)
        except OSError as e:
            raise StorageError(f"Fatal error writing '{name}'! {e}", name) from e
