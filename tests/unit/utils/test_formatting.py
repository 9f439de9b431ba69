"""Unit tests for formatting helpers."""

import pytest
from dotsweep.utils.formatting import create_table, format_risk, format_size


class TestFormatSize:
    """Tests for format_size function."""

    @pytest.mark.parametrize(
        "size,expected",
        [(None, "0 B"), (0, "0 B"), (512, "512 B"), (2048, "2.0 KB"), (5 * 1024**2, "5.0 MB")],
    )
    def test_units(self, size: int | None, expected: str) -> None:
        """Sizes are rendered with a binary unit."""
        assert format_size(size) == expected


class TestFormatRisk:
    """Tests for format_risk function."""

    def test_styles_by_level(self) -> None:
        """Scores are wrapped in their risk level style."""
        assert format_risk(10) == "[risk_low]10[/]"
        assert format_risk(50) == "[risk_medium]50[/]"
        assert format_risk(90) == "[risk_high]90[/]"

    def test_missing_score(self) -> None:
        """A missing score renders as a dash."""
        assert format_risk(None) == "[muted]-[/]"


def test_create_table_title() -> None:
    """Tables carry their title."""
    assert create_table("Artifacts").title == "Artifacts"
