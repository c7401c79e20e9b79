# iatf/stats.py
"""Pregnancy figures shown next to the protocol KPIs on the dashboard."""
from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Union

Count = Union[int, str, None]


@dataclass(frozen=True)
class PregnancySplit:
    pregnant: int
    not_pregnant: int


@dataclass(frozen=True)
class ProtocolPregnancyRate:
    name: str
    pregnancy_rate: int


def _as_count(value: Count) -> int:
    # storage returns aggregate counts as strings, or null for no rows
    if value is None:
        return 0
    n = int(value)
    if n < 0:
        raise ValueError(f"count must be >= 0, got {n}")
    return n


def pregnancy_success(total_animals: Count, pregnant_animals: Count) -> PregnancySplit:
    total = _as_count(total_animals)
    pregnant = _as_count(pregnant_animals)
    if pregnant > total:
        raise ValueError(f"pregnant animals ({pregnant}) exceed total ({total})")
    return PregnancySplit(pregnant=pregnant, not_pregnant=total - pregnant)


def pregnancy_rate(total: Count, pregnant: Count) -> int:
    """Whole-number percentage of pregnant animals, 0 when there are none."""
    total = _as_count(total)
    pregnant = _as_count(pregnant)
    if total == 0:
        return 0
    # half up, not banker's rounding: 1 of 8 is 13%
    return (pregnant * 200 + total) // (2 * total)


def pregnancy_rate_by_protocol(stats: Iterable[Mapping[str, Any]]) -> List[ProtocolPregnancyRate]:
    return [
        ProtocolPregnancyRate(
            name=item.get("name") or "",
            pregnancy_rate=pregnancy_rate(item.get("total"), item.get("pregnantCount")),
        )
        for item in stats
    ]
