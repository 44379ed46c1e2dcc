"""
Error kinds raised by the T02 protocol core and its collaborators
"""


class T02ProtocolError(Exception):
    """Base class for every failure surfaced by this package"""

    kind = "protocol"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"{self.label}: {self.message}"

    @property
    def label(self) -> str:
        return "Protocol error"


class ParameterError(T02ProtocolError):
    """A command parameter is outside the range the printer accepts"""

    kind = "parameter"

    @property
    def label(self) -> str:
        return "Invalid parameter"


class ConversionError(T02ProtocolError):
    """The image could not be turned into a monochrome bitmap"""

    kind = "conversion"

    @property
    def label(self) -> str:
        return "Conversion failed"


class InputError(T02ProtocolError):
    """The source image could not be read or decoded"""

    kind = "input"

    @property
    def label(self) -> str:
        return "Invalid image"


class TransportError(T02ProtocolError):
    kind = "transport"

    @property
    def label(self) -> str:
        return "Transport failed"
