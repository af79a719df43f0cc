# Bradford Arrington 2025
import os
import sys

import huff
from bitio import CompressorBitio
from huff_errors import HuffmanError, StorageError
from main_c import short_program_name
from perf import track_performance

USAGE = "infile outfile\n\n"


def write_text(name: str, text: str):
    CompressorBitio.write_all_bytes(name, text.encode("utf-8", "surrogatepass"))


def main(arguments=None) -> int:
    arguments = sys.argv if arguments is None else arguments
    if len(arguments) < 3:
        print(f"\nUsage:  {short_program_name(arguments[0])} {USAGE}")
        return 0

    for arg in arguments[3:]:
        print(f"Unknown argument: {arg}")

    try:
        print(f"\nDecompressing {arguments[1]} to {arguments[2]}")
        print(f"Using {huff.COMPRESSION_NAME}\n")
        text = track_performance("Decode", huff.decode, arguments[1])
        track_performance("WriteText", write_text, arguments[2], text)
    except StorageError as e:
        if isinstance(e.__cause__, FileNotFoundError) and not os.path.exists(arguments[1]):
            print(f"Error: Input file '{arguments[1]}' not found.")
        else:
            print(f"An error occurred: {e}")
        return 1
    except HuffmanError as e:
        print(f"An error occurred: {e}")
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
