"""
Share decoding: from a raw share set to the points used for interpolation.

Selection rule:
    1. Take every share identifier (the metadata key is never one)
    2. Sort them, by default as plain strings
    3. Decode the first k, in that order

Plain string order is kept for compatibility with existing share files. With
indices that are not zero-padded it picks "10" before "2"; that only changes
the result when the shares disagree, since any k consistent shares give the
same secret. SelectionOrder.NUMERIC sorts by index value instead.
"""

import logging
from typing import Optional

from ..config import SelectionOrder
from ..crypto.encoding import format_decimal, parse_index, parse_int, parse_radix
from ..crypto.shamir import Share
from ..errors import InsufficientShares, MalformedIndex, MalformedShareValue
from .shareset import ShareSet


logger = logging.getLogger(__name__)


def _numeric_key(identifier: str) -> tuple:
    # Malformed identifiers sort last so well-formed ones are preferred.
    try:
        return (0, parse_index(identifier), identifier)
    except ValueError:
        return (1, 0, identifier)


def select_identifiers(
    share_set: ShareSet,
    k: Optional[int] = None,
    order: SelectionOrder = SelectionOrder.LEXICOGRAPHIC,
) -> list[str]:
    """
    Return the identifiers of the shares that will be decoded.

    Args:
        share_set: Source of identifiers
        k: How many to select (default: the set's threshold)
        order: Sorting rule applied before truncating to k

    Returns:
        At most k identifiers, in selection order
    """
    if k is None:
        k = share_set.k

    identifiers = share_set.identifiers()
    if SelectionOrder(order) is SelectionOrder.NUMERIC:
        identifiers.sort(key=_numeric_key)
    else:
        identifiers.sort()

    logger.debug("Selection order (%s): %s", SelectionOrder(order).value, identifiers)
    return identifiers[:k]


def decode_share(identifier: str, share_set: ShareSet) -> Share:
    """
    Decode one share into a point.

    Raises:
        MalformedIndex: If the identifier is not a base-10 integer
        MalformedShareValue: If base or value cannot be parsed
    """
    try:
        x = parse_index(identifier)
    except ValueError:
        raise MalformedIndex(identifier) from None

    raw = share_set.raw_share(identifier)

    try:
        base = parse_radix(raw.base)
    except ValueError as e:
        raise MalformedShareValue(identifier, "base", str(e)) from e

    try:
        y = parse_int(raw.value, base)
    except ValueError as e:
        raise MalformedShareValue(identifier, "value", str(e)) from e

    return Share(x=x, y=y)


def decode(
    share_set: ShareSet,
    k: Optional[int] = None,
    order: SelectionOrder = SelectionOrder.LEXICOGRAPHIC,
) -> list[Share]:
    """
    Turn a share set into exactly k points.

    Args:
        share_set: Raw shares and threshold
        k: Threshold override (default: share_set.k)
        order: Selection order

    Returns:
        k points, in selection order

    Raises:
        MalformedIndex: If a selected identifier is not an integer
        MalformedShareValue: If a selected share cannot be decoded
        InsufficientShares: If fewer than k shares are present
    """
    if k is None:
        k = share_set.k

    shares = [
        decode_share(identifier, share_set)
        for identifier in select_identifiers(share_set, k, order)
    ]

    if len(shares) < k:
        raise InsufficientShares(needed=k, got=len(shares))

    logger.debug(
        "Decoded %d shares: x = %s",
        len(shares),
        ", ".join(format_decimal(s.x) for s in shares),
    )
    return shares
