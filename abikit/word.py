import binascii
import string
from typing import Iterator, Union

from abikit.exceptions import InvalidHexData, OverflowException, WordSizeMismatch
from abikit.utils import signed_to_unsigned, unsigned_to_signed

_HEX_DIGITS = frozenset(string.hexdigits)

BytesLike = Union[bytes, bytearray, memoryview]


class ByteWord:
    """
    Immutable sequence of bytes with a `0x`-prefixed hex representation.

    Equality and hashing are by content, so a `FixedWord` compares equal to a
    `ByteWord` holding the same bytes.
    """

    __slots__ = ("_bytes",)

    def __init__(self, value: BytesLike = b""):
        if not isinstance(value, (bytes, bytearray, memoryview)):
            raise TypeError(f"Expected bytes, got {type(value).__name__}")
        object.__setattr__(self, "_bytes", bytes(value))

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    @classmethod
    def from_hex(cls, value: str):
        if not isinstance(value, str):
            raise InvalidHexData(f"Expected a hex string, got {type(value).__name__}", value)
        if not value.startswith("0x"):
            raise InvalidHexData(f"Hex string must start with '0x': {value!r}", value)
        digits = value[2:]
        if len(digits) % 2 != 0:
            raise InvalidHexData(f"Odd number of hex digits: {value!r}", value)
        if not _HEX_DIGITS.issuperset(digits):
            raise InvalidHexData(f"Invalid hex digits: {value!r}", value)
        return cls(binascii.unhexlify(digits))

    @classmethod
    def from_bytes(cls, value: BytesLike):
        return cls(value)

    @classmethod
    def coerce(cls, value):
        """
        Accept a `ByteWord`, raw bytes or a hex string.
        """
        if isinstance(value, ByteWord):
            return value
        if isinstance(value, str):
            return cls.from_hex(value)
        return cls.from_bytes(value)

    @property
    def bytes(self) -> bytes:
        return self._bytes

    @property
    def size(self) -> int:
        return len(self._bytes)

    def to_hex(self) -> str:
        return "0x" + self._bytes.hex()

    def concat(self, *others: "ByteWord") -> "ByteWord":
        return ByteWord(b"".join([self._bytes] + [o.bytes for o in others]))

    def slice(self, start: int, end: int) -> "ByteWord":
        return ByteWord(self._bytes[start:end])

    def chunks(self, size: int = 32) -> Iterator["ByteWord"]:
        for i in range(0, len(self._bytes), size):
            yield ByteWord(self._bytes[i : i + size])

    def __add__(self, other):
        if not isinstance(other, ByteWord):
            return NotImplemented
        return self.concat(other)

    def __len__(self):
        return len(self._bytes)

    def __bytes__(self):
        return self._bytes

    def __eq__(self, other):
        if not isinstance(other, ByteWord):
            return NotImplemented
        return self._bytes == other._bytes

    def __hash__(self):
        return hash(self._bytes)

    def __str__(self):
        return self.to_hex()

    def __repr__(self):
        return f"{type(self).__name__}({self.to_hex()!r})"


class FixedWord(ByteWord):
    """
    A 32-byte word, the slot every scalar ABI value occupies.
    """

    __slots__ = ()

    SIZE_BYTES = 32
    SIZE_HEX = 2 + SIZE_BYTES * 2

    def __init__(self, value: BytesLike):
        if len(value) != self.SIZE_BYTES:
            raise WordSizeMismatch(self.SIZE_BYTES, len(value), "fixed word")
        super().__init__(value)

    @classmethod
    def from_word(cls, word: ByteWord) -> "FixedWord":
        if isinstance(word, cls):
            return word
        return cls(word.bytes)

    @classmethod
    def from_int(cls, value: int) -> "FixedWord":
        """
        Pack `value` as a 256-bit two's complement integer, big-endian.
        """
        if not -(2**255) <= value < 2**256:
            raise OverflowException(f"Value {value} does not fit in a 256-bit word", value=value)
        return cls(signed_to_unsigned(value, 256).to_bytes(cls.SIZE_BYTES, byteorder="big"))

    def to_int(self, signed: bool = False) -> int:
        ret = int.from_bytes(self._bytes, byteorder="big")
        if signed:
            return unsigned_to_signed(ret, 256)
        return ret

