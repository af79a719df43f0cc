from typing import Optional


class HuffmanError(Exception):
    """Base class for every error raised by the Huffman text compressor."""

    def __init__(self, message: str, name: Optional[str] = None):
        super().__init__(message)
        self.name = name


class InvalidArgumentError(HuffmanError, ValueError):
    pass


class StorageError(HuffmanError):
    """A read or write of a compressed/plain file failed.

    The underlying OSError is kept as __cause__.
    """


class UnsupportedVersionError(HuffmanError):
    def __init__(self, name: Optional[str], version: int):
        super().__init__(
            f"File '{name}' has a newer format (file format version {version:02d}), "
            "or is invalid or corrupted.",
            name,
        )
        self.version = version


class CorruptFormatError(HuffmanError):
    def __init__(self, name: Optional[str], reason: str = ""):
        message = f"File '{name}' is invalid or corrupted."
        if reason:
            message += f" ({reason})"
        super().__init__(message, name)
        self.reason = reason
