"""
Exceptions raised while converting and reconstructing key shares.

Every error is a ValueError so callers that only care about "bad input"
can catch one type. None of them is retried inside this package.
"""


class ShareBridgeError(ValueError):
    """Base class. Extra keyword context is kept on the instance."""

    def __init__(self, message: str, **context):
        super().__init__(message)
        self.context = context

    def __getattr__(self, name):
        try:
            return self.__dict__["context"][name]
        except KeyError:
            raise AttributeError(name) from None


class MalformedHex(ShareBridgeError):
    pass


class ScalarTooLong(ShareBridgeError):
    pass


class NonCanonicalScalar(ShareBridgeError):
    pass


class InvalidPoint(ShareBridgeError):
    pass


class DuplicatePoint(ShareBridgeError):
    pass


class SingularDenominator(ShareBridgeError):
    pass


class InsufficientShares(ShareBridgeError):
    pass


class EmptyInput(ShareBridgeError):
    pass


class FieldInversionFailure(ShareBridgeError, ZeroDivisionError):
    pass


class MismatchedParticipantSet(ShareBridgeError):
    pass


class InconsistentShares(ShareBridgeError):
    """Shares do not lie on a polynomial of the declared degree."""


class SharedKeyMismatch(ShareBridgeError):
    """Reconstructed C_0 differs from the expected shared public key."""


class SimulationModeRequired(ShareBridgeError):
    """A trusted-dealer shortcut was requested outside simulation mode."""
