"""Time block generation for the daily planner."""

from __future__ import annotations

from collections import deque

from structlog import get_logger

from planner.core.errors import ConfigurationError, ValidationError, degrade_on_error
from planner.models.planner import GeneratedTimeBlock, UserScheduleConfig
from planner.services.time_definitions import (
    anchor_block,
    default_block_order,
    fixed_block_positions,
    get_block_definition,
    is_known_block,
)
from planner.utils.time_format import MINUTES_PER_DAY, format_time_range, normalize_minutes

logger = get_logger()


def arrange_block_order(block_order: list[str]) -> list[str]:
    """
    Resolve a user's block order into the order blocks are placed.

    - Unknown ids are skipped
    - Repeated ids keep their first occurrence only
    - Fixed blocks sit at their catalog index; editable blocks fill the
      remaining slots in the caller's order
    - Fixed blocks missing from block_order are still placed

    Args:
        block_order: Block ids as stored in preferences

    Returns:
        Arranged block ids, each id at most once
    """
    fixed = fixed_block_positions()
    editable: deque[str] = deque()
    seen: set[str] = set()

    for block_id in block_order:
        if not is_known_block(block_id):
            logger.warning("unknown_block_id_skipped", block_id=block_id)
            continue
        if block_id in seen:
            logger.info("duplicate_block_id_skipped", block_id=block_id)
            continue
        seen.add(block_id)
        if block_id not in fixed:
            editable.append(block_id)

    fixed_at = {index: block_id for block_id, index in fixed.items()}
    unplaced_fixed = deque(sorted(fixed, key=fixed.__getitem__))

    # Once editable ids run out, remaining fixed ids follow in catalog order
    arranged: list[str] = []
    for position in range(len(editable) + len(fixed)):
        if position in fixed_at or not editable:
            arranged.append(unplaced_fixed.popleft())
        else:
            arranged.append(editable.popleft())

    return arranged


@degrade_on_error(default=[])
def generate_time_blocks(
    config: UserScheduleConfig, use_12_hour: bool = False
) -> list[GeneratedTimeBlock]:
    """
    Place template blocks on the user's day.

    Every ranged block is shifted by the distance between the user's start
    time and the anchor block's default start, then wrapped into [0, 1440).
    A block whose end falls after the planner day's end is dropped whole;
    the open-ended evening block is always kept. Output follows the
    arranged block order and is not sorted.

    Malformed configuration (zero-length day, minutes out of range) yields
    an empty list.

    Args:
        config: Day start/end minutes and block order
        use_12_hour: Render display ranges as "8:00 AM" instead of "08:00"

    Returns:
        Generated blocks in placement order
    """
    start = config.day_start_minutes
    end = config.day_end_minutes

    for value in (start, end):
        if not 0 <= value < MINUTES_PER_DAY:
            raise ValidationError(
                "Day start/end minutes out of range",
                context={"day_start_minutes": start, "day_end_minutes": end},
            )
    if start == end:
        raise ValidationError(
            "Planner day has no length",
            context={"day_start_minutes": start, "day_end_minutes": end},
        )

    anchor = anchor_block()
    anchor_range = anchor.default_range
    if anchor_range is None:
        raise ConfigurationError(
            "Anchor block has no default range", context={"block_id": anchor.id}
        )

    shift = start - anchor_range.start
    day_length = normalize_minutes(end - start)

    block_order = config.block_order if config.block_order is not None else default_block_order()

    blocks: list[GeneratedTimeBlock] = []
    for block_id in arrange_block_order(block_order):
        definition = get_block_definition(block_id)
        block_range = definition.default_range

        if block_range is None:
            blocks.append(
                GeneratedTimeBlock(
                    id=definition.id,
                    title=definition.title,
                    description=definition.description,
                    start_minutes=None,
                    end_minutes=None,
                    display_range=format_time_range(None, None),
                    editable=definition.editable,
                )
            )
            continue

        # Minutes from the day start to this block's end; the shift cancels out
        elapsed_end = block_range.start - anchor_range.start + block_range.duration
        if elapsed_end > day_length:
            logger.debug(
                "time_block_truncated",
                block_id=block_id,
                elapsed_end=elapsed_end,
                day_length=day_length,
            )
            continue

        block_start = normalize_minutes(block_range.start + shift)
        block_end = normalize_minutes(block_range.end + shift)

        blocks.append(
            GeneratedTimeBlock(
                id=definition.id,
                title=definition.title,
                description=definition.description,
                start_minutes=block_start,
                end_minutes=block_end,
                display_range=format_time_range(block_start, block_end, use_12_hour),
                editable=definition.editable,
            )
        )

    return blocks


@degrade_on_error(default=[])
def preview_time_blocks(
    start_time: str,
    end_time: str | None = None,
    block_order: list[str] | None = None,
    use_12_hour: bool = False,
) -> list[GeneratedTimeBlock]:
    """
    Live preview for the setup screen from raw "HH:MM" strings.

    Unparseable times yield an empty list so the screen can show
    "no preview available".
    """
    config = UserScheduleConfig.from_clock_times(start_time, end_time, block_order)
    return generate_time_blocks(config, use_12_hour)
