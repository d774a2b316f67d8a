"""
Error taxonomy for secret reconstruction.

Every failure is terminal for a single reconstruction attempt. The inputs
fully determine the computation, so nothing is retried. Each error records
the stage it came from:

    load         the share set document could not be turned into a ShareSet
    decode       a selected share could not be turned into a point
    interpolate  the selected points do not define an integer secret

All errors subclass ValueError, so existing ``except ValueError`` handlers
keep catching invalid input.
"""

from typing import Any, Optional

from .crypto.encoding import format_decimal


class ReconstructionError(ValueError):
    """Base class for all reconstruction failures."""

    stage = "reconstruct"

    def to_dict(self) -> dict[str, Any]:
        """Structured form used by the JSON output of the CLI."""
        return {
            "stage": self.stage,
            "error": type(self).__name__,
            "message": str(self),
        }


class MalformedShareSet(ReconstructionError):
    """The share set document itself is unusable (bad JSON, bad metadata)."""

    stage = "load"

    def __init__(self, reason: str, source: Optional[str] = None):
        self.reason = reason
        self.source = source
        if source:
            super().__init__(f"Malformed share set {source}: {reason}")
        else:
            super().__init__(f"Malformed share set: {reason}")


class MalformedIndex(ReconstructionError):
    """A share identifier is not a base-10 non-negative integer."""

    stage = "decode"

    def __init__(self, identifier: str):
        self.identifier = identifier
        super().__init__(
            f"Failed to parse x-coordinate {identifier!r} as a base-10 integer"
        )


class MalformedShareValue(ReconstructionError):
    """A share's base or value field cannot be parsed."""

    stage = "decode"

    def __init__(self, identifier: str, field: str, reason: str):
        self.identifier = identifier
        self.field = field
        self.reason = reason
        super().__init__(f"Invalid {field} for share {identifier!r}: {reason}")


class InsufficientShares(ReconstructionError):
    """Fewer usable shares than the threshold requires."""

    stage = "decode"

    def __init__(self, needed: int, got: int):
        self.needed = needed
        self.got = got
        super().__init__(f"Not enough shares provided: need {needed}, got {got}")

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result.update(needed=self.needed, got=self.got)
        return result


class DegenerateInterpolation(ReconstructionError):
    """Two selected points share an x-coordinate."""

    stage = "interpolate"

    def __init__(self, x: int):
        self.x = x
        super().__init__(
            f"Duplicate x-coordinate {format_decimal(x)} among selected shares"
        )


class NonIntegerResult(ReconstructionError):
    """
    The interpolated constant term is not an integer.

    This means the shares are corrupted or were not taken from one integer
    polynomial. ``value`` holds the exact fraction, ``rendered`` a rounded
    decimal form of it.
    """

    stage = "interpolate"

    def __init__(self, value: Any, rendered: str):
        self.value = value
        self.rendered = rendered
        super().__init__(f"Final result is not an integer: {rendered} ({value})")

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["value"] = self.rendered
        return result
