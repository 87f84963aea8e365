"""
Roll layout planner: how a sticker order lays out on a roll.

The press prints in fixed-length sections (max 42") rather than the whole
roll at once, so packing is 1-D across the roll width (stickers per row) and
1-D along each section (rows per section). Sections are separated by a
barcode gap for cutting, and every job carries one trailing allowance for
barcode / leader space regardless of how many sections or rolls it spans.
"""

import math
from typing import Optional

from ..config import default_roll_spec, settings
from ..errors import InvalidDimensions, StickerTooTall, StickerTooWide
from ..schemas import LayoutResult, MaterialRollSpec, PrintTimeEstimate, StickerSpec
from .base import FIT_TOLERANCE, BaseCalculator


class RollLayoutPlanner(BaseCalculator):

    def validate_roll(self, roll: MaterialRollSpec) -> None:
        if roll.usable_width_inches <= 0:
            raise InvalidDimensions(
                f"Usable roll width must be positive: {roll.roll_width_inches}\" roll "
                f"with {roll.margin_left_inches}\" + {roll.margin_right_inches}\" margins"
            )
        if roll.roll_length_feet <= 0:
            raise InvalidDimensions(f"Roll length must be positive, got {roll.roll_length_feet}")
        if roll.max_section_length_inches <= 0:
            raise InvalidDimensions(
                f"Max section length must be positive, got {roll.max_section_length_inches}"
            )
        for name, value in (
            ("Sticker spacing", roll.inter_sticker_spacing_inches),
            ("Section gap", roll.inter_section_gap_inches),
            ("Trailing allowance", roll.trailing_allowance_inches),
        ):
            if not math.isfinite(value) or value < 0:
                raise InvalidDimensions(f"{name} cannot be negative, got {value}")

    def plan(self, spec: StickerSpec, roll: MaterialRollSpec) -> LayoutResult:
        self.validate_sticker(spec)
        self.validate_roll(roll)

        spacing = roll.inter_sticker_spacing_inches
        width = spec.width_inches
        height = spec.height_inches
        qty = spec.quantity

        stickers_per_row = self.fit_count(roll.usable_width_inches, width, spacing)
        if stickers_per_row == 0:
            raise StickerTooWide(
                f"{width}\" sticker does not fit the {roll.usable_width_inches}\" usable roll width"
            )

        rows_per_section = self.fit_count(roll.max_section_length_inches, height, spacing)
        if rows_per_section == 0:
            raise StickerTooTall(
                f"{height}\" sticker does not fit the {roll.max_section_length_inches}\" "
                f"max print section"
            )

        stickers_per_section = stickers_per_row * rows_per_section
        full_sections = qty // stickers_per_section
        remainder = qty % stickers_per_section

        total_rows = math.ceil(qty / stickers_per_row)
        sections_needed = full_sections + (1 if remainder > 0 else 0)

        full_section_length = self.run_length(rows_per_section, height, spacing)
        final_section_length = 0.0
        if remainder > 0:
            final_rows = math.ceil(remainder / stickers_per_row)
            final_section_length = self.run_length(final_rows, height, spacing)

        gaps = max(0, sections_needed - 1)
        base_length = (
            full_sections * full_section_length
            + final_section_length
            + gaps * roll.inter_section_gap_inches
        )
        # Allowance applies once per job, never per section
        total_length_inches = base_length + roll.trailing_allowance_inches
        total_length_feet = self.inches_to_feet(total_length_inches)

        length_whole_feet = int(math.floor(total_length_inches / self.INCHES_PER_FOOT + FIT_TOLERANCE))
        length_extra_inches = max(0.0, total_length_inches - self.feet_to_inches(length_whole_feet))

        rolls_needed = total_length_feet / roll.roll_length_feet
        whole_rolls_needed = math.ceil(rolls_needed)
        feet_used_on_last_roll = total_length_feet - (whole_rolls_needed - 1) * roll.roll_length_feet

        return LayoutResult(
            stickers_per_row=stickers_per_row,
            rows_per_section=rows_per_section,
            stickers_per_section=stickers_per_section,
            full_sections=full_sections,
            remainder_stickers=remainder,
            total_rows=total_rows,
            sections_needed=sections_needed,
            total_length_inches=total_length_inches,
            total_length_feet=total_length_feet,
            length_whole_feet=length_whole_feet,
            length_extra_inches=length_extra_inches,
            rolls_needed=rolls_needed,
            whole_rolls_needed=whole_rolls_needed,
            feet_used_on_last_roll=feet_used_on_last_roll,
            feet_left_on_last_roll=roll.roll_length_feet - feet_used_on_last_roll,
        )


def plan_layout(spec: StickerSpec, roll: Optional[MaterialRollSpec] = None) -> LayoutResult:
    """Plan a job on `roll` (defaults to the configured production roll)."""
    return RollLayoutPlanner().plan(spec, roll or default_roll_spec())


def format_duration(total_seconds: int) -> str:
    """'1 hr 6 min', '6 min 40 sec' or '40 sec'."""
    hours = total_seconds // 3600
    minutes = (total_seconds % 3600) // 60
    seconds = total_seconds % 60
    if hours > 0:
        return f"{hours} hr {minutes} min"
    if minutes > 0:
        return f"{minutes} min {seconds} sec"
    return f"{seconds} sec"


def estimate_print_time(layout: LayoutResult,
                        seconds_per_section: Optional[int] = None) -> PrintTimeEstimate:
    """Press time: a fixed pass time per printed section."""
    per_section = settings.PRINT_SECONDS_PER_SECTION if seconds_per_section is None else seconds_per_section
    total_seconds = layout.sections_needed * per_section
    return PrintTimeEstimate(
        seconds=total_seconds,
        minutes=total_seconds / 60.0,
        formatted=format_duration(total_seconds),
    )
