"""
Unit tests for dashboard pregnancy figures.
"""
import pytest

from iatf.stats import pregnancy_rate, pregnancy_rate_by_protocol, pregnancy_success


class TestPregnancyRate:
    @pytest.mark.parametrize(
        "total,pregnant,expected",
        [(10, 5, 50), (8, 1, 13), (3, 2, 67), (3, 1, 33), (0, 0, 0), ("20", "5", 25), (None, None, 0), ("4", None, 0)],
    )
    def test_rate(self, total, pregnant, expected):
        assert pregnancy_rate(total, pregnant) == expected

    def test_negative_count_rejected(self):
        with pytest.raises(ValueError):
            pregnancy_rate(-1, 0)

    def test_by_protocol(self):
        stats = [
            {"name": "Lote A", "total": "10", "pregnantCount": 6},
            {"name": "Lote B", "total": None, "pregnantCount": None},
        ]
        rates = pregnancy_rate_by_protocol(stats)
        assert [(r.name, r.pregnancy_rate) for r in rates] == [("Lote A", 60), ("Lote B", 0)]


class TestPregnancySuccess:
    def test_split(self):
        split = pregnancy_success(12, 5)
        assert (split.pregnant, split.not_pregnant) == (5, 7)

    def test_more_pregnant_than_total(self):
        with pytest.raises(ValueError):
            pregnancy_success(3, 4)
