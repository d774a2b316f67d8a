"""
Shamir secret reconstruction over the integers.

This module implements the reconstruction half of (k, n) threshold secret
sharing where:
- A secret S is the constant term of an unknown integer polynomial
- Each share is a point (x_i, f(x_i)) on that polynomial
- Any k distinct points determine the polynomial, and so S = f(0)

Unlike field-based variants, no modulus is involved. Shares can be any
size and the arithmetic is exact over the rationals, so the result is only
accepted when it comes out as an integer.

Mathematical Basis:
    f(0) = sum_{j} y_j * L_j(0)

    L_j(0) = product_{i != j} x_i / (x_i - x_j)

Reference:
    Shamir, A. (1979). "How to share a secret". Communications of the ACM.
"""

import logging
from dataclasses import dataclass

from ..config import DEFAULT_PRECISION
from ..errors import DegenerateInterpolation, InsufficientShares, NonIntegerResult
from .rational import ZERO, Rational


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Share:
    """
    A single decoded share: one point on the polynomial.

    Attributes:
        x: The share index (evaluation point), non-negative.
        y: The polynomial evaluated at x.
    """

    x: int
    y: int


def _check_distinct(shares: list[Share]) -> None:
    """Raise DegenerateInterpolation on the first repeated x value."""
    seen = set()
    for share in shares:
        if share.x in seen:
            raise DegenerateInterpolation(share.x)
        seen.add(share.x)


def lagrange_basis_at_zero(shares: list[Share], j: int) -> tuple[int, int]:
    """
    Compute L_j(0) as an unreduced (numerator, denominator) pair.

    numerator   = product_{i != j} x_i
    denominator = product_{i != j} (x_i - x_j)

    Args:
        shares: The selected points
        j: Index of the point whose basis polynomial is evaluated

    Returns:
        Tuple of (numerator, denominator)

    Raises:
        DegenerateInterpolation: If another point has the same x as point j
    """
    xj = shares[j].x
    numerator = 1
    denominator = 1

    for i, share in enumerate(shares):
        if i == j:
            continue

        diff = share.x - xj
        if diff == 0:
            raise DegenerateInterpolation(xj)

        numerator *= share.x
        denominator *= diff

    return numerator, denominator


def interpolate_at_zero(shares: list[Share]) -> Rational:
    """
    Evaluate the interpolating polynomial at x = 0 as an exact fraction.

    Each point contributes (y_j * numerator_j) / denominator_j. The y value
    is multiplied into the numerator before the fraction is formed, and the
    terms are summed over a common denominator.

    Raises:
        InsufficientShares: If no shares are given
        DegenerateInterpolation: If two shares have the same x
    """
    if not shares:
        raise InsufficientShares(needed=1, got=0)

    _check_distinct(shares)

    total = ZERO
    for j, share in enumerate(shares):
        numerator, denominator = lagrange_basis_at_zero(shares, j)
        total = total.add(Rational(share.y * numerator, denominator))

    logger.debug("Interpolated f(0) = %s over %d shares", total, len(shares))
    return total


def reconstruct_secret(shares: list[Share], precision: int = DEFAULT_PRECISION) -> int:
    """
    Reconstruct the secret from exactly the shares given.

    The result is the constant term of the unique polynomial of degree
    < len(shares) through the given points. The caller decides which and how
    many shares to pass; see ``ssrecover.core.decoder`` for the selection rule.

    Args:
        shares: Points with pairwise distinct x values
        precision: Decimal digits used to render a non-integer result

    Returns:
        Reconstructed secret

    Raises:
        InsufficientShares: If the list is empty
        DegenerateInterpolation: If two shares have the same x
        NonIntegerResult: If f(0) is not an integer

    Example:
        >>> reconstruct_secret([Share(1, 13), Share(2, 30), Share(3, 57)])
        6
    """
    total = interpolate_at_zero(shares)

    # The shares come from an integer polynomial, so anything else means
    # corrupted or inconsistent input.
    if not total.is_integer():
        raise NonIntegerResult(total, total.float_string(precision))

    return total.to_int()
