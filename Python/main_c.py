# Bradford Arrington 2025
import os
import sys

import huff
from bitio import CompressorBitio
from huff_codes import HuffmanCodeTable, print_model
from huff_errors import HuffmanError, StorageError
from huff_tree import generate_huffman_tree
from perf import print_ratios, track_performance


def short_program_name(prog_name: str) -> str:
    short_name = prog_name
    last_slash = max(prog_name.rfind('\\'), prog_name.rfind('/'), prog_name.rfind(':'))
    if last_slash != -1:
        short_name = prog_name[last_slash + 1:]
    extension = short_name.rfind('.')
    if extension != -1:
        short_name = short_name[:extension]
    return short_name


def read_text(name: str) -> str:
    return CompressorBitio.read_all_bytes(name).decode("utf-8", "surrogatepass")


def dump_model(text: str):
    units = huff.to_code_units(text)
    if not units:
        return
    tree = generate_huffman_tree(units)
    print_model(tree, HuffmanCodeTable(tree))


def main(arguments=None) -> int:
    arguments = sys.argv if arguments is None else arguments
    if len(arguments) < 3:
        print(f"\nUsage:  {short_program_name(arguments[0])} {huff.USAGE}")
        return 0

    dump = False
    for arg in arguments[3:]:
        if arg == "-d":
            dump = True
        else:
            print(f"Unknown argument: {arg}")

    try:
        text = track_performance("ReadText", read_text, arguments[1])
        info = track_performance("Encode", huff.encode, text, arguments[2])
        if dump:
            dump_model(text)
        print(f"\nCompressing {arguments[1]} to {arguments[2]}")
        print(f"Using {huff.COMPRESSION_NAME}\n")
        print(info)
        print_ratios(arguments[1], arguments[2])
    except StorageError as e:
        if isinstance(e.__cause__, FileNotFoundError) and not os.path.exists(arguments[1]):
            print(f"Error: Input file '{arguments[1]}' not found.")
        else:
            print(f"An error occurred: {e}")
        return 1
    except (HuffmanError, UnicodeDecodeError) as e:
        print(f"An error occurred: {e}")
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
