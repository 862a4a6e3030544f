from __future__ import annotations

from enum import Enum
from typing import Any

from PySide6.QtCore import QObject, Signal

from radialchart.model.dataset import CATEGORY_COUNT, CategoryDataset, VisibilityConfig, clamp_value


class Section(str, Enum):
    """The three input rows of the panel."""
    SCORES = "scores"
    BENCHMARKS = "benchmarks"
    AVERAGES = "averages"


class ChartStore(QObject):
    """
    Current inputs of the interactive chart.

    Views write through the setters; every change emits `changed` with the
    new (dataset, visibility) snapshot so the chart can be redrawn.
    """
    changed = Signal(object, object)

    def __init__(self) -> None:
        super().__init__()
        self._values: dict[Section, list[float]] = {s: [0.0] * CATEGORY_COUNT for s in Section}
        self._visibility = VisibilityConfig()

    @property
    def visibility(self) -> VisibilityConfig:
        return self._visibility

    def dataset(self) -> CategoryDataset:
        return CategoryDataset(
            scores=tuple(self._values[Section.SCORES]),
            benchmarks=tuple(self._values[Section.BENCHMARKS]),
            averages=tuple(self._values[Section.AVERAGES]),
        )

    def value(self, section: Section, index: int) -> float:
        return self._values[section][index]

    def set_value(self, section: Section, index: int, value: Any) -> None:
        clamped = clamp_value(value)
        if self._values[section][index] == clamped:
            return
        self._values[section][index] = clamped
        self._emit()

    def set_visibility(self, **changes: Any) -> None:
        updated = self._visibility.with_flags(**changes)
        if updated == self._visibility:
            return
        self._visibility = updated
        self._emit()

    def toggle(self, flag: str) -> None:
        """Flip one of show_benchmark / show_average / show_values."""
        if flag not in ("show_benchmark", "show_average", "show_values"):
            raise ValueError(f"Unknown visibility flag '{flag}'.")
        self.set_visibility(**{flag: not getattr(self._visibility, flag)})

    def _emit(self) -> None:
        self.changed.emit(self.dataset(), self._visibility)
