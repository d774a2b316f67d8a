"""
Share set model.

A share set document looks like:

    {
        "keys": {"n": 4, "k": 3},
        "1": {"base": "10", "value": "4"},
        "2": {"base": "2", "value": "111"},
        ...
    }

The "keys" entry holds the metadata; every other top-level key is a share
identifier. Share entries are kept raw here and only validated when the
decoder selects them.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from ..config import DEFAULT_METADATA_KEY
from ..errors import MalformedShareSet, MalformedShareValue


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RawShare:
    """
    An encoded share value as found in the document.

    Attributes:
        base: The radix as a decimal string (e.g. "16")
        value: Digit string in that radix
    """

    base: str
    value: str

    @classmethod
    def from_entry(cls, identifier: str, entry: Any) -> "RawShare":
        """
        Validate the shape of one share entry.

        Raises:
            MalformedShareValue: If the entry is not an object with string
                "base" and "value" fields
        """
        if not isinstance(entry, Mapping):
            raise MalformedShareValue(
                identifier, "entry", f"expected an object, got {type(entry).__name__}"
            )

        for name in ("base", "value"):
            if name not in entry:
                raise MalformedShareValue(identifier, name, "missing")
            if not isinstance(entry[name], str):
                raise MalformedShareValue(
                    identifier,
                    name,
                    f"expected a string, got {type(entry[name]).__name__}",
                )

        return cls(base=entry["base"], value=entry["value"])


def _metadata_int(meta: Mapping[str, Any], name: str, source: Optional[str]) -> int:
    value = meta.get(name)
    # bool is an int subclass but never a valid count.
    if isinstance(value, bool) or not isinstance(value, int):
        raise MalformedShareSet(
            f"metadata field {name!r} must be an integer, got {value!r}", source
        )
    return value


@dataclass(frozen=True)
class ShareSet:
    """
    Threshold metadata plus the raw shares of one secret.

    Attributes:
        n: Total number of shares issued (informational)
        k: Threshold, the number of shares used for reconstruction
        shares: Share identifier -> raw entry (normally {"base", "value"})
        source: Where the set was loaded from, for messages
        metadata_key: Reserved key that is never a share identifier
    """

    n: int
    k: int
    shares: Mapping[str, Any] = field(default_factory=dict)
    source: Optional[str] = None
    metadata_key: str = DEFAULT_METADATA_KEY

    def __post_init__(self):
        if self.k < 1:
            raise MalformedShareSet(
                f"threshold k must be at least 1, got {self.k}", self.source
            )
        if self.n < 0:
            raise MalformedShareSet(
                f"share count n must be non-negative, got {self.n}", self.source
            )

        if self.k > self.n:
            logger.warning(
                "%s: threshold k=%d exceeds declared share count n=%d",
                self.source or "share set",
                self.k,
                self.n,
            )
        if len(self.identifiers()) > self.n:
            logger.warning(
                "%s: %d shares supplied but n=%d declared",
                self.source or "share set",
                len(self.identifiers()),
                self.n,
            )

    def identifiers(self) -> list[str]:
        """Share identifiers in document order."""
        return [key for key in self.shares if key != self.metadata_key]

    def raw_share(self, identifier: str) -> RawShare:
        """Validated raw share for one identifier."""
        return RawShare.from_entry(identifier, self.shares[identifier])

    @classmethod
    def from_mapping(
        cls,
        data: Any,
        metadata_key: str = DEFAULT_METADATA_KEY,
        source: Optional[str] = None,
    ) -> "ShareSet":
        """
        Build a ShareSet from a parsed JSON document.

        Args:
            data: Top-level JSON object
            metadata_key: Key holding the n/k metadata
            source: Optional label (file name) used in errors and logs

        Raises:
            MalformedShareSet: If the root or the metadata is unusable
        """
        if not isinstance(data, Mapping):
            raise MalformedShareSet(
                f"expected a JSON object, got {type(data).__name__}", source
            )

        meta = data.get(metadata_key)
        if not isinstance(meta, Mapping):
            raise MalformedShareSet(
                f"missing or invalid {metadata_key!r} object", source
            )

        n = _metadata_int(meta, "n", source)
        k = _metadata_int(meta, "k", source)
        shares = {key: value for key, value in data.items() if key != metadata_key}

        return cls(n=n, k=k, shares=shares, source=source, metadata_key=metadata_key)

    @classmethod
    def from_json(
        cls,
        text: str | bytes,
        metadata_key: str = DEFAULT_METADATA_KEY,
        source: Optional[str] = None,
    ) -> "ShareSet":
        """Parse a JSON document into a ShareSet."""
        try:
            data = json.loads(text)
        except ValueError as e:
            raise MalformedShareSet(f"invalid JSON: {e}", source) from e
        return cls.from_mapping(data, metadata_key=metadata_key, source=source)
