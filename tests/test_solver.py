"""Tests for end-to-end reconstruction of share sets and files."""

import json
import logging

import pytest
from ssrecover.config import ReconstructionConfig, SelectionOrder
from ssrecover.core.shareset import ShareSet
from ssrecover.core.solver import SolveResult, solve, solve_file, solve_files
from ssrecover.errors import InsufficientShares, MalformedShareSet, NonIntegerResult


def write_case(path, document):
    path.write_text(json.dumps(document))
    return path


GOOD = {
    "keys": {"n": 4, "k": 3},
    "1": {"base": "10", "value": "4"},
    "2": {"base": "2", "value": "111"},
    "3": {"base": "10", "value": "12"},
    "6": {"base": "4", "value": "213"},
}

SHORT = {
    "keys": {"n": 3, "k": 3},
    "1": {"base": "10", "value": "4"},
}


class TestConfig:
    """Tests for ReconstructionConfig."""

    def test_defaults(self):
        """Defaults match the share file format."""
        config = ReconstructionConfig()
        assert config.metadata_key == "keys"
        assert config.order is SelectionOrder.LEXICOGRAPHIC
        assert config.fail_fast
        assert config.precision == 5

    def test_negative_precision(self):
        """Precision must be non-negative."""
        with pytest.raises(ValueError, match="Precision"):
            ReconstructionConfig(precision=-1)

    def test_empty_metadata_key(self):
        """The metadata key cannot be empty."""
        with pytest.raises(ValueError, match="Metadata key"):
            ReconstructionConfig(metadata_key="")


class TestSolve:
    """Tests for solve and solve_file."""

    def test_solve(self):
        """f(x) = x^2 + 3 gives 3."""
        assert solve(ShareSet.from_mapping(GOOD)) == 3

    def test_solve_numeric_order(self):
        """Numeric selection reaches the same secret on consistent shares."""
        config = ReconstructionConfig(order=SelectionOrder.NUMERIC)
        assert solve(ShareSet.from_mapping(GOOD), config) == 3

    def test_solve_uses_precision(self):
        """The configured precision reaches the diagnostic."""
        document = {
            "keys": {"n": 2, "k": 2},
            "1": {"base": "10", "value": "1"},
            "3": {"base": "10", "value": "2"},
        }
        config = ReconstructionConfig(precision=1)

        with pytest.raises(NonIntegerResult) as excinfo:
            solve(ShareSet.from_mapping(document), config)
        assert excinfo.value.rendered == "0.5"

    def test_solve_file(self, tmp_path):
        """solve_file loads and solves."""
        path = write_case(tmp_path / "case.json", GOOD)
        assert solve_file(path) == 3

    def test_solve_file_custom_metadata_key(self, tmp_path):
        """The metadata key comes from the config."""
        document = {"meta": GOOD["keys"], **{k: v for k, v in GOOD.items() if k != "keys"}}
        path = write_case(tmp_path / "case.json", document)

        assert solve_file(path, ReconstructionConfig(metadata_key="meta")) == 3

    def test_solve_file_insufficient(self, tmp_path):
        """Errors propagate unchanged."""
        path = write_case(tmp_path / "short.json", SHORT)
        with pytest.raises(InsufficientShares):
            solve_file(path)


class TestSolveFiles:
    """Tests for batch runs."""

    def test_all_succeed(self, tmp_path):
        """Each file produces a result in order."""
        paths = [
            write_case(tmp_path / "a.json", GOOD),
            write_case(tmp_path / "b.json", GOOD),
        ]
        results = solve_files(paths)

        assert [r.source for r in results] == [str(p) for p in paths]
        assert all(r.ok for r in results)
        assert [r.secret for r in results] == [3, 3]

    def test_fail_fast_stops(self, tmp_path):
        """The default stops after the first failure."""
        paths = [
            write_case(tmp_path / "a.json", SHORT),
            write_case(tmp_path / "b.json", GOOD),
        ]
        results = solve_files(paths)

        assert len(results) == 1
        assert not results[0].ok
        assert isinstance(results[0].error, InsufficientShares)

    def test_keep_going(self, tmp_path):
        """Without fail_fast every file is attempted."""
        paths = [
            write_case(tmp_path / "a.json", SHORT),
            tmp_path / "missing.json",
            write_case(tmp_path / "c.json", GOOD),
        ]
        results = solve_files(paths, ReconstructionConfig(fail_fast=False))

        assert [r.ok for r in results] == [False, False, True]
        assert isinstance(results[1].error, MalformedShareSet)
        assert results[2].secret == 3

    def test_logs_results(self, tmp_path, caplog):
        """Per-file outcomes are logged at INFO."""
        path = write_case(tmp_path / "a.json", GOOD)
        with caplog.at_level(logging.INFO, logger="ssrecover.core.solver"):
            solve_files([path])
        assert "secret reconstructed" in caplog.text


class TestSolveResult:
    """Tests for result serialization."""

    def test_success_dict(self):
        """Secrets are rendered as base-10 strings."""
        result = SolveResult(source="a.json", secret=2**100)
        assert result.to_dict() == {
            "source": "a.json",
            "ok": True,
            "secret": str(2**100),
        }

    def test_huge_secret_dict(self):
        """Secrets of 5000 digits serialize in full."""
        result = SolveResult(source="a.json", secret=10**5000)
        assert result.to_dict()["secret"] == "1" + "0" * 5000

    def test_error_dict(self):
        """Errors carry their stage and counts."""
        result = SolveResult(source="b.json", error=InsufficientShares(needed=3, got=1))
        data = result.to_dict()

        assert data["ok"] is False
        assert data["stage"] == "decode"
        assert data["error"] == "InsufficientShares"
        assert data["needed"] == 3
        assert data["got"] == 1


class TestHugeValues:
    """Share values past the int/str digit limit."""

    def test_huge_secret(self, tmp_path):
        """A constant polynomial with a 5000-digit secret."""
        value = "9" * 5000
        document = {
            "keys": {"n": 2, "k": 2},
            "1": {"base": "10", "value": value},
            "2": {"base": "10", "value": value},
        }
        results = solve_files([write_case(tmp_path / "big.json", document)])

        assert results[0].secret == 10**5000 - 1
        assert results[0].to_dict()["secret"] == value

    def test_huge_non_integer_is_recorded(self, tmp_path):
        """A failing huge case becomes a result, not a crash."""
        document = {
            "keys": {"n": 2, "k": 2},
            "1": {"base": "10", "value": "1" + "0" * 4999 + "1"},
            "3": {"base": "10", "value": "1" + "0" * 5000},
        }
        results = solve_files(
            [write_case(tmp_path / "big.json", document)],
            ReconstructionConfig(fail_fast=False),
        )

        assert isinstance(results[0].error, NonIntegerResult)
        assert results[0].to_dict()["value"].endswith("1.50000")
