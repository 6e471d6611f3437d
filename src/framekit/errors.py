"""Exceptions raised by framekit.

All exceptions derive from the built-in exception that best describes the
failure, so callers that already catch ``ValueError`` or ``KeyError`` keep
working.
"""


class DegenerateQuaternionError(ValueError):
    """Raised when normalizing a quaternion whose norm is (nearly) zero."""


class NumericalDivergenceError(RuntimeError):
    """Raised when an iterative solver fails to converge within its iteration cap."""


class FrameTreeError(KeyError):
    """Raised for unknown frames, duplicate names, missing parents or cycles in a frame tree."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the message readable.
        return str(self.args[0]) if self.args else ""
