"""
Loading share sets from disk.

Manages a directory of share set documents:
    case_dir/
        testcase1.json
        testcase2.json
        ...
"""

from pathlib import Path

from ..config import DEFAULT_METADATA_KEY
from ..errors import MalformedShareSet
from .shareset import ShareSet


def load_share_set(
    path: str | Path, metadata_key: str = DEFAULT_METADATA_KEY
) -> ShareSet:
    """
    Read one share set document.

    Raises:
        MalformedShareSet: If the file cannot be read or parsed
    """
    path = Path(path)
    try:
        with open(path, "rb") as f:
            data = f.read()
    except OSError as e:
        raise MalformedShareSet(f"failed to read file: {e.strerror}", str(path)) from e

    return ShareSet.from_json(data, metadata_key=metadata_key, source=str(path))


class CaseStore:
    """
    A directory of share set documents, one secret per file.

    Every ".json" file directly inside the directory is one case.
    """

    SUFFIX = ".json"

    def __init__(self, case_dir: str | Path):
        """Open a case directory. The directory must exist."""
        self.case_dir = Path(case_dir)
        if not self.case_dir.is_dir():
            raise MalformedShareSet("not a directory", str(self.case_dir))

    def list_cases(self) -> list[Path]:
        """All case files, sorted by name."""
        return sorted(
            p for p in self.case_dir.iterdir() if p.is_file() and p.suffix == self.SUFFIX
        )
