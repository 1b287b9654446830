"""Static catalog of template time blocks and weekday themes."""

from __future__ import annotations

from datetime import date

from planner.core.errors import NotFoundError
from planner.models.planner import DayTheme, TimeBlockDefinition, TimeRange
from planner.utils.time_format import parse_clock_time


def _range(start: str, end: str) -> TimeRange:
    return TimeRange(start=parse_clock_time(start), end=parse_clock_time(end))


# Reference day starts at 08:00. The first entry anchors every shift.
TIME_BLOCKS: tuple[TimeBlockDefinition, ...] = (
    TimeBlockDefinition(
        id="morning",
        default_range=_range("08:00", "09:00"),
        title="Morning routine",
        description="Centering",
        editable=False,
    ),
    TimeBlockDefinition(
        id="high-focus",
        default_range=_range("09:00", "11:00"),
        title="High-focus work",
        description="Applications/learning/networking",
    ),
    TimeBlockDefinition(
        id="research",
        default_range=_range("11:00", "12:00"),
        title="Research",
        description="Admin tasks",
    ),
    TimeBlockDefinition(
        id="lunch",
        default_range=_range("12:00", "13:00"),
        title="Lunch + outdoor time",
        editable=False,
    ),
    TimeBlockDefinition(
        id="deep-work",
        default_range=_range("13:00", "14:30"),
        title="Deep work",
        description="Learning, projects, portfolio",
    ),
    TimeBlockDefinition(
        id="break",
        default_range=_range("14:30", "15:00"),
        title="Break",
        description="Movement",
    ),
    TimeBlockDefinition(
        id="networking",
        default_range=_range("15:00", "16:00"),
        title="Networking",
        description="Skill refinement",
    ),
    TimeBlockDefinition(
        id="exercise",
        default_range=_range("16:00", "17:00"),
        title="Exercise",
        description="Walk • Recharge",
    ),
    TimeBlockDefinition(
        id="evening",
        default_range=None,
        title="Creativity",
        description="Reading • Reflection",
        editable=False,
    ),
)

# Monday first, matching date.weekday()
DAY_THEMES: tuple[DayTheme, ...] = (
    DayTheme(day="Monday", theme="Momentum & Planning"),
    DayTheme(day="Tuesday", theme="Deep Focus & Skill Growth"),
    DayTheme(day="Wednesday", theme="Networking & Connection"),
    DayTheme(day="Thursday", theme="Projects & Mastery"),
    DayTheme(day="Friday", theme="Review & Celebration"),
    DayTheme(day="Saturday", theme="Joy & Life Admin"),
    DayTheme(day="Sunday", theme="Rest & Renewal"),
)

_BLOCKS_BY_ID = {block.id: block for block in TIME_BLOCKS}


def anchor_block() -> TimeBlockDefinition:
    """First catalog block; its default start is the reference day start."""
    return TIME_BLOCKS[0]


def get_block_definition(block_id: str) -> TimeBlockDefinition:
    """
    Look up a template block by id.

    Raises:
        NotFoundError: If the id is not in the catalog
    """
    block = _BLOCKS_BY_ID.get(block_id)
    if block is None:
        raise NotFoundError(f"Unknown time block: {block_id}", context={"block_id": block_id})
    return block


def is_known_block(block_id: str) -> bool:
    return block_id in _BLOCKS_BY_ID


def default_block_order() -> list[str]:
    return [block.id for block in TIME_BLOCKS]


def fixed_block_positions() -> dict[str, int]:
    """Catalog index of every non-editable block."""
    return {block.id: index for index, block in enumerate(TIME_BLOCKS) if not block.editable}


def get_day_theme(weekday: int) -> DayTheme:
    """Theme for a weekday index (0 = Monday). Out-of-range falls back to Monday."""
    if 0 <= weekday < len(DAY_THEMES):
        return DAY_THEMES[weekday]
    return DAY_THEMES[0]


def get_day_theme_for_date(day: date) -> DayTheme:
    return get_day_theme(day.weekday())
