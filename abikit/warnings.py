import contextlib
import warnings
from typing import Optional

from abikit.exceptions import _BaseAbikitException


class AbikitWarning(_BaseAbikitException, Warning):
    pass


class SkippedABIEntry(AbikitWarning):
    """
    A JSON ABI entry that could not be loaded
    """


def abikit_warn(warning: AbikitWarning | str, *annotations):
    if isinstance(warning, str):
        warning = AbikitWarning(warning, *annotations)
    warnings.warn(warning, stacklevel=2)


_FILTER_ACTIONS = {None: "default", "error": "error", "none": "ignore"}


@contextlib.contextmanager
def warnings_filter(warnings_control: Optional[str]):
    """
    Apply `-W` style control to abikit warnings for the duration of the block.
    The previous filters are restored on exit.
    """
    action = _FILTER_ACTIONS[warnings_control]
    with warnings.catch_warnings():
        if warnings_control is not None:
            # simplefilter only prepends, drop filters from earlier calls
            warnings.resetwarnings()
        warnings.simplefilter(action, category=AbikitWarning)  # type: ignore[arg-type]
        yield
