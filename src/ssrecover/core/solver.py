"""
End-to-end reconstruction: share set -> points -> secret.

Each share set is solved independently; nothing is shared between calls.
Batch runs either stop at the first failure or record it and continue,
depending on ReconstructionConfig.fail_fast.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Optional

from ..config import ReconstructionConfig
from ..crypto.encoding import format_decimal
from ..crypto.shamir import reconstruct_secret
from ..errors import ReconstructionError
from .decoder import decode
from .loader import load_share_set
from .shareset import ShareSet


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SolveResult:
    """
    Outcome of one reconstruction.

    Exactly one of ``secret`` and ``error`` is set.

    Attributes:
        source: File name or label of the share set
        secret: Reconstructed secret on success
        error: The failure otherwise
    """

    source: str
    secret: Optional[int] = None
    error: Optional[ReconstructionError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict[str, Any]:
        """JSON-friendly form; the secret is a base-10 string."""
        if self.error is not None:
            return {"source": self.source, "ok": False, **self.error.to_dict()}
        return {"source": self.source, "ok": True, "secret": format_decimal(self.secret)}


def solve(share_set: ShareSet, config: Optional[ReconstructionConfig] = None) -> int:
    """
    Reconstruct the secret of one share set.

    Args:
        share_set: Metadata and raw shares
        config: Selection order and diagnostic precision

    Returns:
        The secret

    Raises:
        ReconstructionError: On any decode or interpolation failure
    """
    if config is None:
        config = ReconstructionConfig()

    shares = decode(share_set, order=config.order)
    return reconstruct_secret(shares, precision=config.precision)


def solve_file(path: str | Path, config: Optional[ReconstructionConfig] = None) -> int:
    """Load a share set document and reconstruct its secret."""
    if config is None:
        config = ReconstructionConfig()

    share_set = load_share_set(path, metadata_key=config.metadata_key)
    return solve(share_set, config)


def solve_files(
    paths: Iterable[str | Path], config: Optional[ReconstructionConfig] = None
) -> list[SolveResult]:
    """
    Reconstruct the secret of every file.

    With ``config.fail_fast`` the run stops after the first failing file,
    which is still included in the results.

    Returns:
        One SolveResult per processed file, in input order
    """
    if config is None:
        config = ReconstructionConfig()

    results: list[SolveResult] = []
    for path in paths:
        source = str(path)
        try:
            secret = solve_file(path, config)
        except ReconstructionError as e:
            logger.info("%s: failed at %s stage: %s", source, e.stage, e)
            results.append(SolveResult(source=source, error=e))
            if config.fail_fast:
                break
            continue

        logger.info("%s: secret reconstructed", source)
        results.append(SolveResult(source=source, secret=secret))

    return results
