from typing import Callable, Iterable

from abikit.exceptions import WordSizeMismatch
from abikit.utils import fourbytes_to_int, keccak256, method_id
from abikit.word import ByteWord, BytesLike

Digest = Callable[[bytes], bytes]


class MethodSelector(ByteWord):
    """
    The 4-byte identifier of a contract method: the first four bytes of the
    digest of its canonical signature, e.g. `transfer(address,uint256)`.
    """

    __slots__ = ()

    SIZE_BYTES = 4
    SIZE_HEX = 2 + SIZE_BYTES * 2

    def __init__(self, value: BytesLike):
        if len(value) != self.SIZE_BYTES:
            raise WordSizeMismatch(self.SIZE_BYTES, len(value), "method selector")
        super().__init__(value)

    @classmethod
    def from_canonical(cls, signature: str, digest: Digest = keccak256) -> "MethodSelector":
        return cls(method_id(signature, digest))

    @classmethod
    def from_signature(
        cls, name: str, type_names: Iterable[str], digest: Digest = keccak256
    ) -> "MethodSelector":
        return cls.from_canonical(f"{name}({','.join(type_names)})", digest)

    def to_int(self) -> int:
        return fourbytes_to_int(self._bytes)
