"""
Radix decoding for share indices and share values.

Share values arrive as digit strings in a declared radix. Digits follow the
usual big-integer text convention:

    radix 2..36   0-9 then a-z, letters case-insensitive
    radix 37..62  0-9, then a-z for 10..35, then A-Z for 36..61

A single leading "+" or "-" is allowed on values. Prefixes such as "0x",
underscores and surrounding whitespace are rejected, so that a string means
exactly one number under the declared radix.
"""

import string


MIN_RADIX = 2
MAX_RADIX = 62

# Digit values for radixes above 36, where case matters.
_DIGITS_62 = {
    ch: value
    for value, ch in enumerate(
        string.digits + string.ascii_lowercase + string.ascii_uppercase
    )
}

# Digit values for radixes up to 36, where case does not matter.
_DIGITS_36 = {ch: value for ch, value in _DIGITS_62.items() if value < 36}
_DIGITS_36.update({ch.upper(): value for ch, value in _DIGITS_36.items()})

# int() and str() refuse long decimal strings on recent interpreters.
_INT_STR_DIGITS = 4000

# Integers below this bit length have fewer than _INT_STR_DIGITS decimal digits.
_STR_SAFE_BITS = 13000


def parse_radix(text: str) -> int:
    """
    Parse a declared radix such as "10" or "16".

    Radix 0 (prefix auto-detection, as some big-integer parsers allow) is
    rejected: a share must name its radix explicitly.

    Args:
        text: Decimal string, optionally signed

    Returns:
        The radix as an int in [MIN_RADIX, MAX_RADIX]

    Raises:
        ValueError: If the text is not a decimal integer or out of range
    """
    if not isinstance(text, str):
        raise ValueError(f"base must be a string, got {type(text).__name__}")

    try:
        radix = _parse_digits(text, 10, allow_sign=True)
    except ValueError:
        raise ValueError(f"invalid base {text!r}") from None

    if not MIN_RADIX <= radix <= MAX_RADIX:
        raise ValueError(
            f"base {format_decimal(radix)} out of range [{MIN_RADIX}, {MAX_RADIX}]"
        )
    return radix


def parse_int(text: str, radix: int) -> int:
    """
    Parse an arbitrary-precision integer written in the given radix.

    Args:
        text: Digit string with an optional leading sign
        radix: Radix in [MIN_RADIX, MAX_RADIX]

    Returns:
        The decoded integer

    Raises:
        ValueError: On an unsupported radix or a digit outside it

    Example:
        >>> parse_int("aa", 16)
        170
        >>> parse_int("L", 36)
        21
    """
    if not MIN_RADIX <= radix <= MAX_RADIX:
        raise ValueError(f"base {radix} out of range [{MIN_RADIX}, {MAX_RADIX}]")
    if not isinstance(text, str):
        raise ValueError(f"value must be a string, got {type(text).__name__}")

    return _parse_digits(text, radix, allow_sign=True)


def parse_index(text: str) -> int:
    """
    Parse a share identifier as a base-10 non-negative integer.

    Only ASCII digits are accepted; signs are rejected.
    """
    return _parse_digits(text, 10, allow_sign=False)


def _parse_digits(text: str, radix: int, allow_sign: bool) -> int:
    negative = False
    digits = text
    if allow_sign and digits[:1] in ("+", "-"):
        negative = digits[0] == "-"
        digits = digits[1:]

    if not digits:
        raise ValueError(f"no digits in {text!r}")

    table = _DIGITS_36 if radix <= 36 else _DIGITS_62
    for ch in digits:
        value = table.get(ch)
        if value is None or value >= radix:
            raise ValueError(f"invalid digit {ch!r} for base {radix} in {text!r}")

    if radix <= 36 and (radix & (radix - 1) == 0 or len(digits) <= _INT_STR_DIGITS):
        # Every character was checked above, so int() sees no prefix,
        # underscore or whitespace it could interpret on its own.
        result = int(digits, radix)
    else:
        result = 0
        for ch in digits:
            result = result * radix + table[ch]

    return -result if negative else result


def format_decimal(value: int) -> str:
    """
    Render an integer in base 10 regardless of its size.

    str() refuses integers with more than about 4300 digits on recent
    interpreters. Large values are split around a power of ten and each half
    is rendered separately, so no global limit needs changing.
    """
    if value < 0:
        return "-" + format_decimal(-value)
    if value.bit_length() <= _STR_SAFE_BITS:
        return str(value)

    # log10(2) ~ 0.30103; take about half of the decimal digits.
    half = value.bit_length() * 30103 // 200000
    high, low = divmod(value, 10**half)
    return format_decimal(high) + format_decimal(low).zfill(half)
