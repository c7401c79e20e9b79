# iatf/schedule.py
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class MilestoneCategory(str, Enum):
    DAY_0 = "Dia 0"
    DAY_7_8 = "Dia 7/8"
    DAY_9_10 = "Dia 9/10"
    IATF = "IATF"


@dataclass(frozen=True)
class MilestoneDefinition:
    """
    One veterinary event of the protocol.

    Day offsets are counted in whole calendar days from the protocol start
    date. Milestones that depend on the implant removal also carry an hour
    window relative to the removal instant; the day offsets are then the
    fallback used while the removal date is unknown.
    """

    category: MilestoneCategory
    label: str
    day_offset_start: int
    day_offset_end: int
    hours_after_removal_start: Optional[int] = None
    hours_after_removal_end: Optional[int] = None

    def __post_init__(self):
        if self.day_offset_start < 0 or self.day_offset_end < self.day_offset_start:
            raise ValueError(
                f"{self.category.value}: invalid day offsets "
                f"{self.day_offset_start}..{self.day_offset_end}"
            )
        hours = (self.hours_after_removal_start, self.hours_after_removal_end)
        if (hours[0] is None) != (hours[1] is None):
            raise ValueError(f"{self.category.value}: both removal hours are required")
        if hours[0] is not None and (hours[0] < 0 or hours[1] < hours[0]):
            raise ValueError(
                f"{self.category.value}: invalid removal hours {hours[0]}..{hours[1]}"
            )

    @property
    def removal_relative(self) -> bool:
        return self.hours_after_removal_start is not None


# ---------------------------------------------------------------------
# Canonical IATF schedule (order is the display order)
# ---------------------------------------------------------------------

PROTOCOL_SCHEDULE: Tuple[MilestoneDefinition, ...] = (
    MilestoneDefinition(
        category=MilestoneCategory.DAY_0,
        label="Colocação do dispositivo + Estradiol",
        day_offset_start=0,
        day_offset_end=0,
    ),
    MilestoneDefinition(
        category=MilestoneCategory.DAY_7_8,
        label="Prostaglandina (PGF2α) + eCG (se utilizado)",
        day_offset_start=7,
        day_offset_end=8,
    ),
    MilestoneDefinition(
        category=MilestoneCategory.DAY_9_10,
        label="Retirada do dispositivo + Nova dose de Estradiol",
        day_offset_start=9,
        day_offset_end=10,
    ),
    MilestoneDefinition(
        category=MilestoneCategory.IATF,
        label="IATF",
        day_offset_start=10,
        day_offset_end=11,
        hours_after_removal_start=48,
        hours_after_removal_end=56,
    ),
)
