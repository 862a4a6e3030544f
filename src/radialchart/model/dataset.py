"""
Chart Inputs
============
Value objects handed to the renderer on every call.

Classes:
    CategoryDataset: Scores, benchmarks and averages of the six categories.
    VisibilityConfig: Which optional layers to draw and how to place labels.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field, replace
from typing import Any, Iterable, Optional

from radialchart.config import DEFAULT_CONFIG

logger = logging.getLogger(__name__)

CATEGORY_COUNT: int = DEFAULT_CONFIG.slice_count


def clamp_value(value: Any, lower: float = 0.0, upper: float = DEFAULT_CONFIG.max_value) -> float:
    """
    Coerce an arbitrary input into the valid value range.

    Anything that is not a finite number (None, NaN, garbage strings) becomes
    `lower`; +inf becomes `upper`. Never raises.
    """
    try:
        number = float(value)
    except (TypeError, ValueError):
        logger.debug(f"Non-numeric value {value!r} replaced by {lower}.")
        return lower

    if math.isnan(number):
        logger.debug(f"NaN replaced by {lower}.")
        return lower

    clamped = max(lower, min(upper, number))
    if clamped != number:
        logger.debug(f"Value {number} clamped to {clamped}.")
    return clamped


def label_tunable(raw: Any, default: float) -> float:
    """Parse a label setting; empty, zero, NaN or non-numeric input gives `default`."""
    try:
        number = float(raw)
    except (TypeError, ValueError):
        return default
    if math.isnan(number) or number == 0.0:
        return default
    return number


def overlay_offset(raw: Any) -> float:
    """Parse the overlay offset; zero is kept, NaN or non-numeric input gives 0."""
    try:
        offset = float(raw)
    except (TypeError, ValueError):
        return 0.0
    return 0.0 if math.isnan(offset) else offset


def _clamped_tuple(values: Iterable[Any], name: str, upper: float) -> tuple[float, ...]:
    result = tuple(clamp_value(v, 0.0, upper) for v in values)
    if len(result) != CATEGORY_COUNT:
        raise ValueError(f"'{name}' must have {CATEGORY_COUNT} values, got {len(result)}.")
    return result


@dataclass(frozen=True)
class CategoryDataset:
    """
    One complete chart instance. Every value is clamped to [0, max_value]
    at construction, so the renderer never sees out-of-range data.
    """
    scores: tuple[float, ...] = field(default=(0.0,) * CATEGORY_COUNT)
    benchmarks: tuple[float, ...] = field(default=(0.0,) * CATEGORY_COUNT)
    averages: tuple[float, ...] = field(default=(0.0,) * CATEGORY_COUNT)

    def __post_init__(self) -> None:
        upper = DEFAULT_CONFIG.max_value
        # frozen dataclass: bypass __setattr__ for the normalised copies
        object.__setattr__(self, "scores", _clamped_tuple(self.scores, "scores", upper))
        object.__setattr__(self, "benchmarks", _clamped_tuple(self.benchmarks, "benchmarks", upper))
        object.__setattr__(self, "averages", _clamped_tuple(self.averages, "averages", upper))

    @classmethod
    def empty(cls) -> CategoryDataset:
        return cls()

    @classmethod
    def from_sequences(
        cls,
        scores: Optional[Iterable[Any]] = None,
        benchmarks: Optional[Iterable[Any]] = None,
        averages: Optional[Iterable[Any]] = None,
    ) -> CategoryDataset:
        """Build a dataset, treating a missing sequence as all zeros."""
        zeros = (0.0,) * CATEGORY_COUNT
        return cls(
            scores=tuple(scores) if scores is not None else zeros,
            benchmarks=tuple(benchmarks) if benchmarks is not None else zeros,
            averages=tuple(averages) if averages is not None else zeros,
        )


@dataclass(frozen=True)
class VisibilityConfig:
    """
    Per-call drawing options.

    Font size and vertical offset are pixels of the interactive canvas; the
    renderer rescales them to the actual surface so interactive and exported
    images line up.
    """
    show_benchmark: bool = True
    show_average: bool = True
    show_values: bool = False

    value_angle_offset_degrees: float = 0.0
    value_font_size_px: float = 60.0
    value_distance_percent: float = 100.0

    overlay_vertical_offset: float = 10.0

    def with_flags(self, **changes: Any) -> VisibilityConfig:
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)

    @classmethod
    def from_inputs(
        cls,
        *,
        show_benchmark: bool = True,
        show_average: bool = True,
        show_values: bool = False,
        angle_offset: Any = 0.0,
        font_size: Any = 60.0,
        distance_percent: Any = 100.0,
        vertical_offset: Any = 10.0,
    ) -> VisibilityConfig:
        """
        Build a config from raw UI values. Empty or zero label tunables fall
        back to their defaults; the vertical offset keeps zero.
        """
        return cls(
            show_benchmark=bool(show_benchmark),
            show_average=bool(show_average),
            show_values=bool(show_values),
            value_angle_offset_degrees=label_tunable(angle_offset, 0.0),
            value_font_size_px=label_tunable(font_size, 60.0),
            value_distance_percent=label_tunable(distance_percent, 100.0),
            overlay_vertical_offset=overlay_offset(vertical_offset),
        )
