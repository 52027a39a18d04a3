import binascii
import string
from typing import Any, List, Optional, Sequence, Tuple

from abikit.exceptions import InvalidABIType, InvalidHexData, InvalidType, OverflowException
from abikit.settings import get_global_settings
from abikit.utils import checksum_encode, int_bounds, is_checksum_encoded
from abikit.word import FixedWord

_DIGITS = frozenset(string.digits)
_HEX_DIGITS = frozenset(string.hexdigits)


def _parse_size_suffix(name: str, prefix: str) -> Optional[int]:
    """
    Return the numeric suffix of `name` after `prefix`, `None` if the
    suffix is empty, or raise if it is present but malformed.
    """
    suffix = name[len(prefix) :]
    if suffix == "":
        return None
    if not _DIGITS.issuperset(suffix) or suffix != str(int(suffix)):
        raise InvalidABIType(f"Invalid size suffix in type name: {name!r}")
    return int(suffix)


# https://solidity.readthedocs.io/en/latest/abi-spec.html#types
class ABIType:
    # attributes which identify the type; two types are equal when they
    # are of the same class and these attributes match
    _equality_attrs: Tuple[str, ...] = ()

    # aka has tail
    def is_dynamic(self):
        raise NotImplementedError("ABIType.is_dynamic")

    # size (in bytes) in the static section (aka 'head')
    def static_size(self):
        raise NotImplementedError("ABIType.static_size")

    # The canonical name of the type for calculating the function selector
    def selector_name(self):
        raise NotImplementedError("ABIType.selector_name")

    # Parse a canonical name. Return None if `name` does not belong to this
    # family at all, raise InvalidABIType if it does but is malformed.
    @classmethod
    def from_name(cls, name: str) -> Optional["ABIType"]:
        raise NotImplementedError("ABIType.from_name")

    def encode(self, value: Any) -> FixedWord:
        raise NotImplementedError("ABIType.encode")

    def decode(self, word: FixedWord) -> Any:
        raise NotImplementedError("ABIType.decode")

    def encode_words(self, value: Any) -> List[FixedWord]:
        return [self.encode(value)]

    def decode_words(self, words: Sequence[FixedWord]) -> Any:
        assert len(words) == self.static_size() // 32
        return self.decode(words[0])

    def _get_equality_attrs(self):
        return tuple(getattr(self, attr) for attr in self._equality_attrs)

    def __hash__(self):
        return hash((type(self),) + self._get_equality_attrs())

    def __eq__(self, other):
        if self is other:
            return True
        return (
            type(self) is type(other) and self._get_equality_attrs() == other._get_equality_attrs()
        )

    def __setattr__(self, name, value):
        if name in self.__dict__:
            raise AttributeError(f"{type(self).__name__} is immutable")
        super().__setattr__(name, value)

    def __str__(self):
        return self.selector_name()

    def __repr__(self):
        return str({type(self).__name__: vars(self)})


# uint<M>: unsigned integer type of M bits, 0 < M <= 256, M % 8 == 0. e.g. uint32, uint8, uint256.
# int<M>: two's complement signed integer type of M bits, 0 < M <= 256, M % 8 == 0.
class ABI_GIntM(ABIType):
    """
    Common base of the integer families.

    Every integer occupies a full 32-byte word regardless of `m_bits`:
    negative values are sign-extended, everything else zero-extended.
    """

    _equality_attrs = ("m_bits", "signed")
    _prefix: str

    def __init__(self, m_bits, signed):
        if not isinstance(m_bits, int) or isinstance(m_bits, bool):
            raise InvalidABIType(f"Invalid M provided for GIntM: {m_bits!r}")
        if not (0 < m_bits <= 256 and 0 == m_bits % 8):
            raise InvalidABIType(f"Invalid M provided for GIntM: {m_bits}")

        self.m_bits = m_bits
        self.signed = signed

    @property
    def bits(self) -> int:
        return self.m_bits

    @property
    def bytes(self) -> int:
        return self.m_bits // 8

    @property
    def min_value(self) -> int:
        raise NotImplementedError("ABI_GIntM.min_value")

    @property
    def max_value(self) -> int:
        raise NotImplementedError("ABI_GIntM.max_value")

    def is_value_valid(self, value: int) -> bool:
        raise NotImplementedError("ABI_GIntM.is_value_valid")

    def is_dynamic(self):
        return False

    def static_size(self):
        return 32

    def selector_name(self):
        return f"{self._prefix}{self.m_bits}"

    @classmethod
    def from_name(cls, name):
        if not name.startswith(cls._prefix):
            return None
        bits = _parse_size_suffix(name, cls._prefix)
        if bits is None:
            return cls()
        return cls(bits)

    def _validate(self, value, stage):
        if not self.is_value_valid(value):
            raise OverflowException(
                f"Value {value} out of range for {self.selector_name()} {stage}",
                value=value,
                typ=self,
            )

    def encode(self, value):
        if not isinstance(value, int) or isinstance(value, bool):
            raise InvalidType(
                f"Expected int for {self.selector_name()}, got {type(value).__name__}"
            )
        self._validate(value, "on encode")
        return FixedWord.from_int(value)

    def decode(self, word):
        value = FixedWord.from_word(word).to_int(signed=self.signed)
        self._validate(value, "on decode")
        return value


class ABI_UIntM(ABI_GIntM):
    _prefix = "uint"

    def __init__(self, m_bits=256):
        super().__init__(m_bits, False)

    @staticmethod
    def max_value_for(bits: int) -> int:
        if bits < 0:
            raise InvalidABIType(f"Negative number of bits: {bits}")
        return 2**bits

    @property
    def min_value(self):
        return 0

    # exclusive
    @property
    def max_value(self):
        return self.max_value_for(self.m_bits)

    def is_value_valid(self, value):
        return self.min_value <= value < self.max_value


class ABI_IntM(ABI_GIntM):
    _prefix = "int"

    def __init__(self, m_bits=256):
        super().__init__(m_bits, True)

    @property
    def min_value(self):
        return int_bounds(True, self.m_bits)[0]

    # inclusive
    @property
    def max_value(self):
        return int_bounds(True, self.m_bits)[1]

    def is_value_valid(self, value):
        return self.min_value <= value <= self.max_value


# address: equivalent to uint160, except for the assumed interpretation
#   and language typing. For computing the function selector, address is used.
class ABI_Address(ABIType):
    SIZE_BYTES = 20

    def is_dynamic(self):
        return False

    def static_size(self):
        return 32

    def selector_name(self):
        return "address"

    @classmethod
    def from_name(cls, name):
        if name != "address":
            return None
        return cls()

    def _to_bytes(self, value) -> bytes:
        if isinstance(value, (bytes, bytearray)):
            if len(value) != self.SIZE_BYTES:
                raise InvalidType(f"Address must be {self.SIZE_BYTES} bytes, got {len(value)}")
            return bytes(value)
        if not isinstance(value, str):
            raise InvalidType(f"Expected address string or bytes, got {type(value).__name__}")
        if not value.startswith("0x") or len(value) != 2 + 2 * self.SIZE_BYTES:
            raise InvalidHexData(f"Invalid address: {value!r}", value)
        digits = value[2:]
        if not _HEX_DIGITS.issuperset(digits):
            raise InvalidHexData(f"Invalid address: {value!r}", value)
        if digits != digits.lower() and digits != digits.upper():
            if not is_checksum_encoded(value):
                raise InvalidHexData(
                    f"Address has an invalid checksum: {value}",
                    value,
                    hint=checksum_encode(value.lower()),
                )
        return binascii.unhexlify(digits)

    def encode(self, value):
        return FixedWord(self._to_bytes(value).rjust(32, b"\x00"))

    def decode(self, word):
        raw = FixedWord.from_word(word).bytes
        pad_len = 32 - self.SIZE_BYTES
        if raw[:pad_len] != b"\x00" * pad_len:
            raise OverflowException(
                f"Address has non-zero high bytes: 0x{raw.hex()}", value=raw, typ=self
            )
        ret = "0x" + raw[pad_len:].hex()
        if get_global_settings().get_checksum_addresses():
            return checksum_encode(ret)
        return ret


# bool: equivalent to uint8 restricted to the values 0 and 1.
#  For computing the function selector, bool is used.
class ABI_Bool(ABIType):
    def is_dynamic(self):
        return False

    def static_size(self):
        return 32

    def selector_name(self):
        return "bool"

    @classmethod
    def from_name(cls, name):
        if name != "bool":
            return None
        return cls()

    def encode(self, value):
        if not isinstance(value, bool):
            raise InvalidType(f"Expected bool, got {type(value).__name__}")
        return FixedWord.from_int(int(value))

    def decode(self, word):
        value = FixedWord.from_word(word).to_int()
        if value not in (0, 1):
            raise OverflowException(f"Value {value} out of range for bool", value=value, typ=self)
        return value == 1


# bytes<M>: binary type of M bytes, 0 < M <= 32.
class ABI_BytesM(ABIType):
    _equality_attrs = ("m_bytes",)

    def __init__(self, m_bytes):
        if not isinstance(m_bytes, int) or isinstance(m_bytes, bool):
            raise InvalidABIType(f"Invalid M for BytesM: {m_bytes!r}")
        if not 0 < m_bytes <= 32:
            raise InvalidABIType(f"Invalid M for BytesM: {m_bytes!r}")

        self.m_bytes = m_bytes

    def is_dynamic(self):
        return False

    def static_size(self):
        return 32

    def selector_name(self):
        return f"bytes{self.m_bytes}"

    @classmethod
    def from_name(cls, name):
        if not name.startswith("bytes"):
            return None
        m_bytes = _parse_size_suffix(name, "bytes")
        if m_bytes is None:
            # dynamic `bytes`, not a member of this family
            return None
        return cls(m_bytes)

    def encode(self, value):
        if not isinstance(value, (bytes, bytearray)):
            raise InvalidType(
                f"Expected bytes for {self.selector_name()}, got {type(value).__name__}"
            )
        if len(value) > self.m_bytes:
            raise OverflowException(
                f"Value of {len(value)} bytes too long for {self.selector_name()}",
                value=value,
                typ=self,
            )
        return FixedWord(bytes(value).ljust(32, b"\x00"))

    def decode(self, word):
        raw = FixedWord.from_word(word).bytes
        if raw[self.m_bytes :] != b"\x00" * (32 - self.m_bytes):
            raise OverflowException(
                f"Non-zero padding for {self.selector_name()}: 0x{raw.hex()}", value=raw, typ=self
            )
        return raw[: self.m_bytes]
