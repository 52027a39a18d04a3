import warnings

import pytest

from abikit.abi_types import ABI_Address
from abikit.settings import (
    ABIKIT_CHECKSUM_ADDRESSES,
    Settings,
    anchor_settings,
    get_global_settings,
)
from abikit.warnings import AbikitWarning, SkippedABIEntry, abikit_warn, warnings_filter

ADDRESS = "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed"


def test_default_settings():
    assert Settings().checksum_addresses is None
    assert Settings().get_checksum_addresses() == ABIKIT_CHECKSUM_ADDRESSES
    assert Settings(checksum_addresses=False).get_checksum_addresses() is False


def test_settings_dict():
    assert Settings().as_dict() == {}
    assert Settings(checksum_addresses=True).as_dict() == {"checksum_addresses": True}
    assert Settings.from_dict({"checksum_addresses": False}) == Settings(checksum_addresses=False)


def test_settings_sanity():
    with pytest.raises(AssertionError):
        Settings(checksum_addresses="yes")


def test_anchor_settings():
    outer = get_global_settings()
    inner = Settings(checksum_addresses=False)

    with anchor_settings(inner):
        assert get_global_settings() is inner
    assert get_global_settings() is outer


def test_anchor_settings_restores_on_error():
    outer = get_global_settings()
    with pytest.raises(ValueError):
        with anchor_settings(Settings(checksum_addresses=False)):
            raise ValueError
    assert get_global_settings() is outer


def test_address_decoding_follows_settings():
    word = ABI_Address().encode(ADDRESS)

    with anchor_settings(Settings(checksum_addresses=True)):
        assert ABI_Address().decode(word) == ADDRESS
    with anchor_settings(Settings(checksum_addresses=False)):
        assert ABI_Address().decode(word) == ADDRESS.lower()


def test_abikit_warn():
    with warnings.catch_warnings(record=True) as w:
        warnings.simplefilter("always")
        abikit_warn("something odd", "line one")
        abikit_warn(SkippedABIEntry("skipped"))

    assert len(w) == 2
    assert isinstance(w[0].message, AbikitWarning)
    assert str(w[0].message) == "something odd\n\n  line one"
    assert w[1].category is SkippedABIEntry


def test_warnings_filter():
    with warnings_filter("error"):
        with pytest.raises(SkippedABIEntry):
            abikit_warn(SkippedABIEntry("skipped"))

    with warnings.catch_warnings(record=True) as w:
        with warnings_filter("none"):
            abikit_warn("ignored")
    assert len(w) == 0

    warnings.resetwarnings()


def test_warnings_filter_restores_filters():
    with warnings.catch_warnings(record=True) as w:
        warnings.simplefilter("always")
        with warnings_filter("error"):
            with pytest.raises(AbikitWarning):
                abikit_warn("fatal here")
        abikit_warn("recorded here")

    assert len(w) == 1
    assert w[0].message.message == "recorded here"
