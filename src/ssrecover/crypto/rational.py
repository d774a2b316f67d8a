"""
Exact rational numbers for Lagrange interpolation over the integers.

Interpolating at x = 0 over plain integers (not a prime field) produces
fractional Lagrange coefficients. The sum of all weighted terms is an integer
whenever the shares come from an integer polynomial, but the intermediate
terms are not. Floating point would lose the low digits of large shares, so
every step is kept as an exact numerator/denominator pair.
"""

from dataclasses import dataclass
from math import gcd

from .encoding import format_decimal


@dataclass(frozen=True)
class Rational:
    """
    An exact fraction numerator / denominator.

    The denominator is always positive. Values produced by arithmetic are
    reduced to lowest terms; values built directly keep the given pair until
    ``reduced()`` is called.

    Attributes:
        numerator: Arbitrary-precision integer
        denominator: Arbitrary-precision integer, never zero
    """

    numerator: int = 0
    denominator: int = 1

    def __post_init__(self):
        if self.denominator == 0:
            raise ZeroDivisionError("Rational with zero denominator")
        if self.denominator < 0:
            object.__setattr__(self, "numerator", -self.numerator)
            object.__setattr__(self, "denominator", -self.denominator)

    def reduced(self) -> "Rational":
        """Return the same value in lowest terms."""
        divisor = gcd(self.numerator, self.denominator)
        return Rational(self.numerator // divisor, self.denominator // divisor)

    def add(self, other: "Rational") -> "Rational":
        """
        Exact addition over a common denominator.

        a/b + c/d = (a*d + c*b) / (b*d), then reduced.
        """
        numerator = self.numerator * other.denominator + other.numerator * self.denominator
        denominator = self.denominator * other.denominator
        return Rational(numerator, denominator).reduced()

    def __add__(self, other: "Rational") -> "Rational":
        if not isinstance(other, Rational):
            return NotImplemented
        return self.add(other)

    def is_integer(self) -> bool:
        """True when the denominator divides the numerator exactly."""
        return self.numerator % self.denominator == 0

    def to_int(self) -> int:
        """
        Convert an integral value to int.

        Raises:
            ValueError: If the value has a fractional part
        """
        if not self.is_integer():
            raise ValueError(f"{self} is not an integer")
        return self.numerator // self.denominator

    def float_string(self, precision: int) -> str:
        """
        Render as a decimal string with ``precision`` fractional digits.

        The last digit is rounded to nearest, halves away from zero. Only
        integer arithmetic is used, so large values render exactly.

        Example:
            >>> Rational(2, 3).float_string(5)
            '0.66667'
            >>> Rational(-1, 8).float_string(2)
            '-0.13'
        """
        if precision < 0:
            raise ValueError("Precision must be non-negative")

        quotient, remainder = divmod(abs(self.numerator), self.denominator)
        scale = 10**precision
        fraction, leftover = divmod(remainder * scale, self.denominator)

        if 2 * leftover >= self.denominator:
            fraction += 1
            if fraction >= scale:
                quotient += 1
                fraction -= scale

        sign = "-" if self.numerator < 0 else ""
        if precision == 0:
            return sign + format_decimal(quotient)
        digits = format_decimal(fraction).zfill(precision)
        return f"{sign}{format_decimal(quotient)}.{digits}"

    def __str__(self) -> str:
        if self.denominator == 1:
            return format_decimal(self.numerator)
        return f"{format_decimal(self.numerator)}/{format_decimal(self.denominator)}"


ZERO = Rational(0, 1)
