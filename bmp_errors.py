"""
bmp_errors.py

Exception kinds raised by the BMP codecs and the processing functions.
Every class carries a ``kind`` string so a front end can report the failure
without isinstance chains.
"""


class BMPError(Exception):
    kind = "BMPError"


# ------------------ I/O ------------------

class BMPIOError(BMPError, OSError):
    kind = "IOError"


class OpenError(BMPIOError):
    kind = "IOOpenError"


class ReadError(BMPIOError):
    kind = "IOReadError"


class WriteError(BMPIOError):
    kind = "IOWriteError"


# ------------------ Format ------------------

class BMPFormatError(BMPError, ValueError):
    kind = "FormatError"


class BadSignatureError(BMPFormatError):
    kind = "BadSignature"


class UnsupportedDepthError(BMPFormatError):
    kind = "UnsupportedDepth"


class UnsupportedCompressionError(BMPFormatError):
    kind = "UnsupportedCompression"


class InvalidDimensionsError(BMPFormatError):
    kind = "InvalidDimensions"


# ------------------ Processing ------------------

class InvalidKernelError(BMPError, ValueError):
    kind = "InvalidKernel"


class AllocationError(BMPError, MemoryError):
    kind = "AllocationFailure"


class InvalidStateError(BMPError, RuntimeError):
    kind = "InvalidState"
