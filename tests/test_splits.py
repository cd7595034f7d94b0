"""Tests for split/inplit detection."""

import pytest

from cotalake.history.splits import find_last_xplit, is_xplit_marker


class TestIsXplitMarker:
    """Test the stock spec marker pattern."""

    @pytest.mark.parametrize("spec", ["ON EB", "PN EJB N1", "ON EG", "UNT EDB", "PN  EB  "])
    def test_markers(self, spec):
        """Ex-bonus / ex-split specs match."""
        assert is_xplit_marker(spec)

    @pytest.mark.parametrize("spec", ["ON", "ON NM", "PN N2", "ON EJ", "UNT N2", ""])
    def test_regular_specs(self, spec):
        """Regular specs do not match."""
        assert not is_xplit_marker(spec)


class TestFindLastXplit:
    """Test the backward transition scan."""

    def _quotes(self, make_quote, specs):
        return [make_quote(f"2024-01-{i + 1:02d}", stock_spec=spec) for i, spec in enumerate(specs)]

    @pytest.mark.parametrize(
        "specs, expected",
        [
            ([], 0),
            (["ON", "ON", "ON"], 0),
            (["ON EB", "ON EB"], 0),
            (["ON", "ON", "ON EB", "ON EB", "ON"], 2),
            (["ON", "ON EB"], 1),
            (["ON EB", "ON"], 0),
            (["ON", "ON EB", "ON", "ON", "ON EB", "ON"], 4),
        ],
    )
    def test_last_xplit(self, make_quote, specs, expected):
        """The regime starts right after the latest unmarked-to-marked change."""
        assert find_last_xplit(self._quotes(make_quote, specs)) == expected

    def test_deterministic(self, make_quote):
        """Re-deriving from an unchanged series gives the same index."""
        quotes = self._quotes(make_quote, ["ON", "ON EB", "ON"])

        assert find_last_xplit(quotes) == find_last_xplit(list(quotes)) == 1
