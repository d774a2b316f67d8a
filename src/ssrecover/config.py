"""Reconstruction settings shared by the solver and the CLI."""

from dataclasses import dataclass
from enum import Enum


# Reserved top-level key holding the n/k metadata in a share set document.
DEFAULT_METADATA_KEY = "keys"

# Case files processed when the CLI is given no paths.
DEFAULT_CASE_FILES = ("testcase1.json", "testcase2.json")

# Decimal digits shown when a result turns out not to be an integer.
DEFAULT_PRECISION = 5


class SelectionOrder(str, Enum):
    """How share identifiers are ordered before the first k are taken."""

    # Plain string order: "10" sorts before "2".
    LEXICOGRAPHIC = "lexicographic"
    NUMERIC = "numeric"


@dataclass(frozen=True)
class ReconstructionConfig:
    """
    Settings for one reconstruction run.

    Attributes:
        metadata_key: Top-level key holding {"n": ..., "k": ...}
        order: Share selection order when more than k shares are present
        fail_fast: Stop a batch at the first failing share set
        precision: Decimal digits in the non-integer diagnostic
    """

    metadata_key: str = DEFAULT_METADATA_KEY
    order: SelectionOrder = SelectionOrder.LEXICOGRAPHIC
    fail_fast: bool = True
    precision: int = DEFAULT_PRECISION

    def __post_init__(self):
        if not self.metadata_key:
            raise ValueError("Metadata key must not be empty")
        if self.precision < 0:
            raise ValueError("Precision must be non-negative")
