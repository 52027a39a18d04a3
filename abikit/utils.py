import functools

from Crypto.Hash import keccak  # type: ignore


def keccak256(x: bytes) -> bytes:
    return keccak.new(digest_bits=256, data=x).digest()


# Converts four bytes to an integer
def fourbytes_to_int(inp):
    return (inp[0] << 24) + (inp[1] << 16) + (inp[2] << 8) + inp[3]


# converts a signature like Func(bool,uint256,address) to its 4 byte method ID
def method_id(method_str: str, digest=keccak256) -> bytes:
    return digest(bytes(method_str, "utf-8"))[:4]


def signed_to_unsigned(int_, bits):
    """
    Reinterpret a signed integer with n bits as an unsigned integer.
    Assumes the input is in bounds for int<bits>.
    """
    if int_ < 0:
        return int_ + 2**bits
    return int_


def unsigned_to_signed(int_, bits):
    """
    Reinterpret an unsigned integer with n bits as a signed integer.
    Assumes the input is in bounds for uint<bits>.
    """
    if int_ > (2 ** (bits - 1)) - 1:
        return int_ - (2**bits)
    return int_


@functools.lru_cache(maxsize=128)
def int_bounds(signed, bits):
    """
    calculate the bounds on an integer type
    ex. int_bounds(True, 8) -> (-128, 127)
        int_bounds(False, 8) -> (0, 255)
    """
    if signed:
        return -(2 ** (bits - 1)), (2 ** (bits - 1)) - 1
    return 0, (2**bits) - 1


# Converts bytes to an integer
def bytes_to_int(bytez):
    return int.from_bytes(bytez, byteorder="big")


def is_checksum_encoded(addr):
    return addr == checksum_encode(addr)


# Encodes an address using ethereum's checksum scheme
def checksum_encode(addr):  # Expects an input of the form 0x<40 hex chars>
    assert addr[:2] == "0x" and len(addr) == 42, addr
    o = ""
    v = bytes_to_int(keccak256(addr[2:].lower().encode("utf-8")))
    for i, c in enumerate(addr[2:]):
        if c in "0123456789":
            o += c
        else:
            o += c.upper() if (v & (2 ** (255 - 4 * i))) else c.lower()
    return "0x" + o
