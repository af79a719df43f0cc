import pytest

from bitio import CompressorBitio
from huff_errors import StorageError


def test_output_bits_msb_first():
    buffer = CompressorBitio.BitBuffer()
    buffer.output_bits(0b101, 3)

    assert buffer.bit_position == 3
    assert buffer.length_in_bytes == 1
    assert buffer.bits_of_last_byte == 3
    assert buffer.to_bytes() == b"\xa0"


def test_output_bit():
    buffer = CompressorBitio.BitBuffer()
    for bit in (1, 1, 0, 1):
        buffer.output_bit(bit)

    assert buffer.to_bytes() == b"\xd0"
    assert buffer.bits_of_last_byte == 4


def test_code_split_across_words():
    buffer = CompressorBitio.BitBuffer()
    buffer.output_bits(0, 15)
    buffer.output_bits(0b11, 2)

    assert list(buffer.words) == [0x0001, 0x8000]
    assert buffer.to_bytes() == b"\x00\x01\x80"
    assert buffer.length_in_bytes == 3
    assert buffer.bits_of_last_byte == 1


def test_code_wider_than_a_word():
    buffer = CompressorBitio.BitBuffer()
    buffer.output_bits(0xABCDE, 20)

    assert buffer.to_bytes() == b"\xab\xcd\xe0"
    assert buffer.bits_of_last_byte == 4


def test_full_last_byte_counts_eight_bits():
    buffer = CompressorBitio.BitBuffer()
    buffer.output_bit(1)
    buffer.output_bits(0x1234, 16)
    buffer.output_bits(0x7F, 7)

    assert buffer.bit_position == 24
    assert buffer.bits_of_last_byte == 8
    assert buffer.to_bytes() == b"\x89\x1a\x7f"


def test_reader_reads_bits_and_codes():
    reader = CompressorBitio.BitReader(b"\xa5\x0f")

    assert reader.input_bits(4) == 0xA
    assert [reader.input_bit() for _ in range(4)] == [0, 1, 0, 1]
    assert reader.input_bits(8) == 0x0F
    assert reader.bits_remaining() == 0


def test_reader_starts_inside_a_byte():
    reader = CompressorBitio.BitReader(b"\xa5\xc3", bit_position=4)

    assert reader.input_bits(8) == 0x5C
    assert reader.bit_position == 12
    assert reader.bits_remaining() == 4


def test_reader_stops_at_end_position():
    reader = CompressorBitio.BitReader(b"\xff\xff", 0, 3)

    assert reader.input_bits(3) == 0b111
    with pytest.raises(EOFError):
        reader.input_bit()

    reader = CompressorBitio.BitReader(b"\xff\xff", 0, 10)
    with pytest.raises(EOFError):
        reader.input_bits(11)


def test_read_and_write_all_bytes(tmp_path):
    name = str(tmp_path / "raw.bin")
    CompressorBitio.write_all_bytes(name, b"\x00\x01\x02")

    assert CompressorBitio.read_all_bytes(name) == b"\x00\x01\x02"


def test_missing_file_raises_storage_error(tmp_path):
    name = str(tmp_path / "missing.huf")
    with pytest.raises(StorageError) as excinfo:
        CompressorBitio.read_all_bytes(name)

    assert isinstance(excinfo.value.__cause__, FileNotFoundError)
    assert excinfo.value.name == name


def test_unwritable_destination_raises_storage_error(tmp_path):
    with pytest.raises(StorageError):
        CompressorBitio.write_all_bytes(str(tmp_path), b"x")
