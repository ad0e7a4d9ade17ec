"""Standard message codec.

Reads and writes the self-describing binary encoding used by
AssetManifest.bin. Every value starts with a one-byte type tag; lengths
use a compact size prefix; numbers are little-endian. Float64 values and
wide typed lists are padded so their payload starts on an aligned offset
measured from the beginning of the message.
"""

import struct
from typing import Any

# Type tags
NULL = 0
TRUE = 1
FALSE = 2
INT32 = 3
INT64 = 4
LARGE_INT = 5  # Retired; never written, rejected when read
FLOAT64 = 6
STRING = 7
UINT8_LIST = 8
INT32_LIST = 9
INT64_LIST = 10
FLOAT64_LIST = 11
LIST = 12
MAP = 13
FLOAT32_LIST = 14

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

# Lists and maps nested deeper than this are rejected as corrupt
MAX_NESTING_DEPTH = 256

# Typed list tag -> (struct element format, element width, alignment)
_TYPED_LISTS = {
    INT32_LIST: ("i", 4, 4),
    INT64_LIST: ("q", 8, 8),
    FLOAT64_LIST: ("d", 8, 8),
    FLOAT32_LIST: ("f", 4, 4),
}


class CorruptMessageError(ValueError):
    """The bytes do not form a single well-formed message."""


class _ReadBuffer:
    """Cursor over message bytes with aligned little-endian reads."""

    def __init__(self, data: bytes):
        self.data = memoryview(data)
        self.offset = 0

    @property
    def has_remaining(self) -> bool:
        return self.offset < len(self.data)

    def read_bytes(self, count: int) -> bytes:
        """Read count bytes and advance offset"""
        end = self.offset + count
        if end > len(self.data):
            raise CorruptMessageError(
                f"Message truncated: needed {count} bytes at offset {self.offset}"
            )
        result = bytes(self.data[self.offset:end])
        self.offset = end
        return result

    def read(self, fmt: str) -> Any:
        return struct.unpack("<" + fmt, self.read_bytes(struct.calcsize(fmt)))[0]

    def align_to(self, alignment: int) -> None:
        mod = self.offset % alignment
        if mod:
            self.offset += alignment - mod


class _WriteBuffer:
    def __init__(self) -> None:
        self.data = bytearray()

    def write(self, fmt: str, value: Any) -> None:
        self.data += struct.pack("<" + fmt, value)

    def align_to(self, alignment: int) -> None:
        mod = len(self.data) % alignment
        if mod:
            self.data += bytes(alignment - mod)


class StandardMessageCodec:
    """Encoder and decoder for standard codec messages.

    Example:
        >>> codec = StandardMessageCodec()
        >>> codec.decode_message(codec.encode_message({"a.png": []}))
        {'a.png': []}
    """

    def decode_message(self, message: bytes | bytearray | memoryview | None) -> Any:
        """Decode a complete message.

        Args:
            message: Raw message bytes. None or empty bytes mean no value.

        Returns:
            The decoded value built from None, bool, int, float, str,
            bytes, list and dict.

        Raises:
            CorruptMessageError: On truncation, unknown tags, trailing bytes
                or containers nested deeper than MAX_NESTING_DEPTH
        """
        if message is None or len(message) == 0:
            return None

        buffer = _ReadBuffer(bytes(message))
        result = self._read_value(buffer)
        if buffer.has_remaining:
            raise CorruptMessageError(
                f"Message corrupted: {len(buffer.data) - buffer.offset} trailing bytes"
            )
        return result

    def encode_message(self, value: Any) -> bytes:
        """Encode a value as a complete message.

        Raises:
            ValueError: If an int does not fit in 64 bits
            TypeError: If the value contains an unsupported type
        """
        buffer = _WriteBuffer()
        self._write_value(buffer, value)
        return bytes(buffer.data)

    def _read_size(self, buffer: _ReadBuffer) -> int:
        value = buffer.read("B")
        if value < 254:
            return value
        if value == 254:
            return buffer.read("H")
        return buffer.read("I")

    def _read_value(self, buffer: _ReadBuffer, depth: int = 0) -> Any:
        if not buffer.has_remaining:
            raise CorruptMessageError("Message corrupted: expected a value")
        tag = buffer.read("B")

        if tag == NULL:
            return None
        if tag == TRUE:
            return True
        if tag == FALSE:
            return False
        if tag == INT32:
            return buffer.read("i")
        if tag == INT64:
            return buffer.read("q")
        if tag == FLOAT64:
            buffer.align_to(8)
            return buffer.read("d")
        if tag == STRING:
            length = self._read_size(buffer)
            try:
                return buffer.read_bytes(length).decode("utf-8")
            except UnicodeDecodeError as e:
                raise CorruptMessageError(f"Invalid UTF-8 in string: {e}") from e
        if tag == UINT8_LIST:
            length = self._read_size(buffer)
            return buffer.read_bytes(length)
        if tag in _TYPED_LISTS:
            element_format, width, alignment = _TYPED_LISTS[tag]
            length = self._read_size(buffer)
            buffer.align_to(alignment)
            raw = buffer.read_bytes(length * width)
            return list(struct.unpack(f"<{length}{element_format}", raw))
        if tag in (LIST, MAP) and depth >= MAX_NESTING_DEPTH:
            raise CorruptMessageError(
                f"Message nested too deeply: more than {MAX_NESTING_DEPTH} levels"
            )
        if tag == LIST:
            length = self._read_size(buffer)
            return [self._read_value(buffer, depth + 1) for _ in range(length)]
        if tag == MAP:
            length = self._read_size(buffer)
            result: dict[Any, Any] = {}
            for _ in range(length):
                key = self._read_value(buffer, depth + 1)
                value = self._read_value(buffer, depth + 1)
                try:
                    result[key] = value
                except TypeError as e:
                    raise CorruptMessageError(f"Unhashable map key: {key!r}") from e
            return result

        raise CorruptMessageError(f"Message corrupted: unknown type tag {tag}")

    def _write_size(self, buffer: _WriteBuffer, size: int) -> None:
        if size < 254:
            buffer.write("B", size)
        elif size <= 0xFFFF:
            buffer.write("B", 254)
            buffer.write("H", size)
        else:
            buffer.write("B", 255)
            buffer.write("I", size)

    def _write_value(self, buffer: _WriteBuffer, value: Any) -> None:
        # bool is checked before int since it is an int subclass
        if value is None:
            buffer.write("B", NULL)
        elif value is True:
            buffer.write("B", TRUE)
        elif value is False:
            buffer.write("B", FALSE)
        elif isinstance(value, int):
            if INT32_MIN <= value <= INT32_MAX:
                buffer.write("B", INT32)
                buffer.write("i", value)
            elif INT64_MIN <= value <= INT64_MAX:
                buffer.write("B", INT64)
                buffer.write("q", value)
            else:
                raise ValueError(f"Integer out of 64-bit range: {value}")
        elif isinstance(value, float):
            buffer.write("B", FLOAT64)
            buffer.align_to(8)
            buffer.write("d", value)
        elif isinstance(value, str):
            encoded = value.encode("utf-8")
            buffer.write("B", STRING)
            self._write_size(buffer, len(encoded))
            buffer.data += encoded
        elif isinstance(value, (bytes, bytearray, memoryview)):
            raw = bytes(value)
            buffer.write("B", UINT8_LIST)
            self._write_size(buffer, len(raw))
            buffer.data += raw
        elif isinstance(value, (list, tuple)):
            buffer.write("B", LIST)
            self._write_size(buffer, len(value))
            for item in value:
                self._write_value(buffer, item)
        elif isinstance(value, dict):
            buffer.write("B", MAP)
            self._write_size(buffer, len(value))
            for key, item in value.items():
                self._write_value(buffer, key)
                self._write_value(buffer, item)
        else:
            raise TypeError(f"Cannot encode value of type {type(value).__name__}")
