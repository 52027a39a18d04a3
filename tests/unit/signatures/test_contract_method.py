import pytest
from eth_abi import encode as eth_abi_encode

from abikit.abi_types import ABI_Address, ABI_Bool, ABI_UIntM
from abikit.exceptions import (
    ArgumentException,
    InstantiationException,
    JSONError,
    SignatureSyntaxException,
    UnknownType,
)
from abikit.method import ContractMethod, MethodSpec, StateMutability
from abikit.method_id import MethodSelector
from abikit.parameters import EMPTY, ParameterList
from abikit.registry import TypeRegistry
from abikit.word import ByteWord

BAZ_CALL = (
    "0xcdcd77c0"
    "0000000000000000000000000000000000000000000000000000000000000045"
    "0000000000000000000000000000000000000000000000000000000000000001"
)


def test_encode_call_regression_vector():
    method = ContractMethod.from_signature("baz(uint32,bool)")
    assert method.encode_call(69, True).to_hex() == BAZ_CALL


def test_parse_transfer():
    method = ContractMethod.from_signature("transfer(address,uint256)")

    assert method.name == "transfer"
    assert list(method.inputs) == [ABI_Address(), ABI_UIntM(256)]
    assert method.outputs.is_empty()
    assert not method.constant
    assert method.selector.to_hex() == "0xa9059cbb"


def test_parse_with_outputs(registry):
    method = ContractMethod.from_signature("balanceOf(address):(uint256)", registry, constant=True)

    assert method.constant
    assert list(method.outputs) == [ABI_UIntM(256)]
    assert method.selector.to_hex() == "0x70a08231"


@pytest.mark.parametrize(
    "text", ["transfer(address uint256)", "foo()::()", "foo", "foo(uint256):uint256"]
)
def test_parse_format_errors(text):
    with pytest.raises(SignatureSyntaxException):
        ContractMethod.from_signature(text)


@pytest.mark.parametrize("text", ["foo(string)", "foo():(string)x)", "foo(tuple)"])
def test_parse_unknown_types(text):
    with pytest.raises(UnknownType) as e:
        ContractMethod.from_signature(text)
    assert text in str(e.value)


def test_parse_with_custom_registry():
    registry = TypeRegistry([ABI_Bool.from_name])
    assert list(ContractMethod.from_signature("f(bool)", registry).inputs) == [ABI_Bool()]
    with pytest.raises(UnknownType):
        ContractMethod.from_signature("f(uint256)", registry)


@pytest.mark.parametrize(
    "text,expected",
    [
        ("foo()", "foo()"),
        ("foo():()", "foo()"),
        ("foo(uint):(int)", "foo(uint256):(int256)"),
        ("balanceOf(address):(uint256)", "balanceOf(address):(uint256)"),
        ("baz(uint32,bool)", "baz(uint32,bool)"),
    ],
)
def test_abi_signature(text, expected):
    method = ContractMethod.from_signature(text)
    assert method.abi_signature() == expected
    assert str(method) == expected
    assert ContractMethod.from_signature(method.abi_signature()).abi_signature() == expected


def test_canonical_signature_excludes_outputs():
    method = ContractMethod.from_signature("balanceOf(address):(uint256)")
    assert method.canonical_signature == "balanceOf(address)"


def test_decode_response():
    method = ContractMethod.from_signature("getReserves():(uint112,uint112,uint32)")
    data = eth_abi_encode(["uint112", "uint112", "uint32"], [10**20, 5, 1700000000])

    assert method.decode_response(data) == [10**20, 5, 1700000000]
    assert method.decode_response(ByteWord(data)) == [10**20, 5, 1700000000]


def test_encode_call_arity():
    method = ContractMethod.from_signature("baz(uint32,bool)")
    with pytest.raises(ArgumentException):
        method.encode_call(69)


def test_encode_call_matches_reference():
    method = ContractMethod.from_signature("transfer(address,uint256)")
    to = "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed"
    call_data = method.encode_call(to, 10**18)

    assert call_data.slice(0, 4) == method.selector
    assert call_data.slice(4, call_data.size).bytes == eth_abi_encode(
        ["address", "uint256"], [to, 10**18]
    )


def test_equality_by_selector_only():
    # constness and outputs do not take part in method identity
    a = ContractMethod("foo", False, [ABI_UIntM(256)])
    b = ContractMethod("foo", True, [ABI_UIntM(256)], [ABI_Bool()])
    c = ContractMethod("foo", False, [ABI_UIntM(128)])
    d = ContractMethod("bar", False, [ABI_UIntM(256)])

    assert a == b
    assert hash(a) == hash(b)
    assert a != c
    assert a != d
    assert len({a, b, c, d}) == 3
    assert a != a.selector


def test_constructor_defaults():
    method = ContractMethod("totalSupply")

    assert method.inputs == EMPTY
    assert method.outputs == EMPTY
    assert not method.constant
    assert method.selector == MethodSelector.from_canonical("totalSupply()")
    assert method.encode_call().to_hex() == "0x18160ddd"


def test_accepts_parameter_list_or_iterable():
    params = ParameterList([ABI_UIntM(8)])
    assert ContractMethod("f", inputs=params).inputs is params
    assert ContractMethod("f", inputs=(ABI_UIntM(8),)).inputs == params


@pytest.mark.parametrize("name", [None, "", 42])
def test_invalid_name(name):
    with pytest.raises(InstantiationException):
        ContractMethod(name)


def test_immutable():
    method = ContractMethod("foo")
    with pytest.raises(AttributeError):
        method.name = "bar"
    with pytest.raises(AttributeError):
        method.selector = MethodSelector(b"\x00" * 4)


def test_injected_digest():
    def digest(data):
        return b"\xaa\xbb\xcc\xdd" + b"\x00" * 28

    method = ContractMethod("foo", digest=digest)
    assert method.selector.to_hex() == "0xaabbccdd"


def test_method_spec_build():
    spec = MethodSpec(name="transfer", inputs=[ABI_Address(), ABI_UIntM()], constant=False)
    method = spec.build()

    assert method == ContractMethod.from_signature("transfer(address,uint256)")
    assert method.abi_signature() == "transfer(address,uint256)"


def test_method_spec_requires_name():
    with pytest.raises(InstantiationException):
        MethodSpec(inputs=[ABI_Bool()]).build()


def test_method_spec_defaults():
    method = MethodSpec(name="foo", constant=True).build()
    assert method.constant
    assert method.inputs.is_empty()
    assert method.outputs.is_empty()


@pytest.mark.parametrize(
    "abi,expected",
    [
        ({"stateMutability": "view"}, StateMutability.VIEW),
        ({"stateMutability": "pure"}, StateMutability.PURE),
        ({"stateMutability": "payable"}, StateMutability.PAYABLE),
        ({"payable": True}, StateMutability.PAYABLE),
        ({"constant": True}, StateMutability.VIEW),
        ({"constant": False}, StateMutability.NONPAYABLE),
        ({}, StateMutability.NONPAYABLE),
    ],
)
def test_state_mutability_from_abi(abi, expected):
    assert StateMutability.from_abi(abi) == expected


def test_from_abi():
    abi = {
        "type": "function",
        "name": "balanceOf",
        "inputs": [{"name": "owner", "type": "address"}],
        "outputs": [{"name": "", "type": "uint256"}],
        "stateMutability": "view",
    }
    method = ContractMethod.from_abi(abi)

    assert method.constant
    assert method.abi_signature() == "balanceOf(address):(uint256)"


def test_from_abi_legacy_constant():
    abi = {"name": "owner", "inputs": [], "outputs": [{"type": "address"}], "constant": True}
    assert ContractMethod.from_abi(abi).constant


@pytest.mark.parametrize(
    "abi",
    [
        {"inputs": []},
        {"name": "f", "inputs": [{"name": "x"}]},
        {"name": "f", "stateMutability": "x"},
        ["not", "a", "dict"],
    ],
)
def test_from_abi_malformed(abi):
    with pytest.raises(JSONError):
        ContractMethod.from_abi(abi)


def test_from_abi_unknown_type():
    abi = {"name": "setName", "inputs": [{"name": "n", "type": "string"}], "outputs": []}
    with pytest.raises(UnknownType) as e:
        ContractMethod.from_abi(abi)
    assert "function setName" in str(e.value)
