import os
import sys
from datetime import datetime
from pathlib import Path

import huff
from bitio import CompressorBitio
from huff_errors import HuffmanError, StorageError


class ChurnProgram:
    """Round-trips every text file under a directory through the Huffman codec."""

    COMPRESSED_NAME = "TEST.CMP"
    LOG_NAME = "CHURN.LOG"

    def __init__(self):
        self.total_files = 0
        self.total_passed = 0
        self.total_failed = 0
        self.total_skipped = 0
        self.log_file = None

    def main(self, args) -> int:
        if len(args) != 1:
            self.usage_exit()

        # Ensure path ends with separator
        root_dir = os.path.normpath(args[0]) + os.sep

        with open(self.LOG_NAME, "w", encoding="utf-8") as self.log_file:
            self.write_log_header()

            start_time = datetime.now()
            self.churn_files(root_dir)
            stop_time = datetime.now()

            self.write_log_summary(start_time, stop_time)

        if os.path.exists(self.COMPRESSED_NAME):
            os.remove(self.COMPRESSED_NAME)
        return 1 if self.total_failed else 0

    def churn_files(self, path):
        try:
            entries = sorted(os.scandir(path), key=lambda entry: entry.name)
        except PermissionError as ex:
            print(f"Access denied to {path}: {ex}", file=sys.stderr)
            return

        for entry in entries:
            if entry.is_dir(follow_symlinks=False):
                self.churn_files(entry.path)
            elif entry.is_file(follow_symlinks=False):
                if self.file_is_already_compressed(entry.path):
                    continue
                print(f"Testing {entry.path}", file=sys.stderr)
                if not self.compress(entry.path):
                    print("Comparison failed!", file=sys.stderr)

    def file_is_already_compressed(self, name):
        compressed_extensions = {".zip", ".ice", ".lzh", ".arc", ".gif", ".pak", ".arj", ".cmp", ".log"}
        extension = Path(name).suffix.lower()
        return extension in compressed_extensions

    def compress(self, file_name) -> bool:
        self.log_file.write(f"{file_name:<40} ")
        try:
            text = CompressorBitio.read_all_bytes(file_name).decode("utf-8", "surrogatepass")
        except StorageError as ex:
            self.total_failed += 1
            self.log_file.write(f"Failed: {ex}\n")
            return False
        except UnicodeDecodeError:
            self.log_file.write("Skipped (not UTF-8 text)\n")
            self.total_skipped += 1
            return True

        self.total_files += 1
        try:
            info = huff.encode(text, self.COMPRESSED_NAME)
            decoded = huff.decode(self.COMPRESSED_NAME)
        except HuffmanError as ex:
            self.total_failed += 1
            self.log_file.write(f"Failed: {ex}\n")
            return False

        old_size = os.path.getsize(file_name)
        new_size = info.compressed_size
        self.log_file.write(f" {old_size:8} {new_size:8} ")

        if old_size == 0:
            old_size = 1

        ratio = 100 - (new_size * 100 // old_size)
        self.log_file.write(f"{ratio:4}%  ")

        if decoded != text:
            self.log_file.write("Failed\n")
            self.total_failed += 1
            return False

        self.log_file.write("Passed\n")
        self.total_passed += 1
        return True

    def write_log_header(self):
        self.log_file.write("                                          Original   Packed\n")
        self.log_file.write("            File Name                     Size      Size   Ratio  Result\n")
        self.log_file.write("-------------------------------------     --------  --------  ----  ------\n")

    def write_log_summary(self, start_time, stop_time):
        elapsed_time = (stop_time - start_time).total_seconds()
        self.log_file.write(f"\nTotal elapsed time: {elapsed_time:.2f} seconds\n")
        self.log_file.write(f"Total files:   {self.total_files}\n")
        self.log_file.write(f"Total passed:  {self.total_passed}\n")
        self.log_file.write(f"Total failed:  {self.total_failed}\n")
        self.log_file.write(f"Total skipped: {self.total_skipped}\n")

    def usage_exit(self):
        usage = """
CHURN 1.0. Usage: CHURN root-dir

CHURN tests the Huffman text codec by compressing and expanding all text files in a directory.
Results are written to CHURN.LOG.
"""
        print(usage)
        sys.exit(1)


def main() -> int:
    return ChurnProgram().main(sys.argv[1:])


if __name__ == "__main__":
    sys.exit(main())
