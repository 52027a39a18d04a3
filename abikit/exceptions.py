import contextlib


class _BaseAbikitException(Exception):
    """
    Base abikit exception class.

    This exception is not raised directly. Other exceptions inherit it in
    order to display context annotations in the error string.
    """

    def __init__(self, message="Error Message not found.", *annotations, hint=None):
        """
        Exception initializer.

        Arguments
        ---------
        message : str
            Error message to display with the exception.
        *annotations : str, optional
            Descriptions of where the exception occurred, e.g. the argument
            index and type that was being encoded. Rendered in the order given.
        hint : str | Callable[[], str], optional
            Suggestion shown after the message.
        """
        self._message = message
        self._hint = hint
        # strip out None so that None can be passed as a valid
        # annotation (in case it is only available optionally)
        self.annotations = [a for a in annotations if a is not None]

    def append_annotation(self, annotation):
        self.annotations = [annotation] + self.annotations

    @property
    def hint(self):
        if callable(self._hint):
            return self._hint()
        return self._hint

    @hint.setter
    def hint(self, value):
        self._hint = value

    @property
    def message(self):
        msg = self._message
        if self.hint:
            msg += f"\n\n  (hint: {self.hint})"
        return msg

    def __str__(self):
        if not self.annotations:
            return self.message
        annotation_msg = "\n".join(f"  {a}" for a in self.annotations)
        return f"{self.message}\n\n{annotation_msg}"


class AbikitException(_BaseAbikitException):
    pass


class FormatException(AbikitException):
    """Malformed textual or binary input."""


class InvalidHexData(FormatException):
    """Hex string is not `0x` followed by an even number of hex digits."""

    def __init__(self, message, value=None, **kwargs):
        super().__init__(message, **kwargs)
        self.value = value


class WordSizeMismatch(FormatException):
    """Byte sequence does not have the length required by a fixed-size word."""

    def __init__(self, expected, actual, kind="word"):
        super().__init__(f"Invalid {kind} length: expected {expected} bytes, got {actual}")
        self.expected = expected
        self.actual = actual


class SignatureSyntaxException(FormatException):
    """Invalid method signature syntax."""

    def __init__(self, message, signature, col_offset=None):
        if col_offset is not None:
            annotation = f"{signature}\n  {' ' * col_offset}^"
        else:
            annotation = signature
        super().__init__(message, annotation)
        self.signature = signature
        self.col_offset = col_offset


class OverflowException(AbikitException):
    """Numeric value out of range for the given type."""

    def __init__(self, message, value=None, typ=None, **kwargs):
        super().__init__(message, **kwargs)
        self.value = value
        self.typ = typ


class StructureException(AbikitException):
    """Invalid structure for a collection of methods or parameters."""


class ArgumentException(StructureException):
    """Call to a method with invalid arguments."""

    def __init__(self, message, expected=None, actual=None, **kwargs):
        super().__init__(message, **kwargs)
        self.expected = expected
        self.actual = actual


class TruncatedData(StructureException):
    """Encoded data ends before every declared parameter was consumed."""

    def __init__(self, message, index=None, needed=None, available=None):
        super().__init__(message)
        self.index = index
        self.needed = needed
        self.available = available


class UnknownType(StructureException):
    """Reference to a type that does not exist."""

    def __init__(self, message, name=None, index=None, **kwargs):
        super().__init__(message, **kwargs)
        self.name = name
        self.index = index


class InvalidType(AbikitException):
    """Python value is of the wrong kind for the ABI type."""


class InvalidABIType(AbikitException):
    """Attempt to construct an invalid ABI type."""


class InstantiationException(AbikitException):
    """Object cannot be constructed from the given fields."""


class JSONError(Exception):

    """Invalid JSON ABI input."""

    def __init__(self, msg, entry=None):
        super().__init__(msg)
        self.entry = entry


@contextlib.contextmanager
def tag_exceptions(annotation):
    """
    Attach `annotation` to any abikit exception raised inside the block.
    Other exceptions propagate unchanged.
    """
    try:
        yield
    except _BaseAbikitException as e:
        e.append_annotation(annotation)
        raise e
