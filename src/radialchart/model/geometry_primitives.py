"""
Geometric Primitives for the radial layout.

Angles are in radians, measured from the +x axis and increasing clockwise in
screen space (y grows downwards), which is the convention of the drawing
surface.
"""
from __future__ import annotations

import math
from dataclasses import dataclass


def deg2rad(degrees: float) -> float:
    return degrees * math.pi / 180


@dataclass(frozen=True)
class Point:
    """A point on the drawing surface."""
    x: float
    y: float


def polar_to_cartesian(center: Point, radius: float, angle: float) -> Point:
    """Point at `radius` from `center` in direction `angle`."""
    return Point(center.x + radius * math.cos(angle), center.y + radius * math.sin(angle))


@dataclass(frozen=True)
class Circle:
    """A full circle, used for the end caps of the average marker."""
    center: Point
    radius: float


@dataclass(frozen=True)
class AnnularBand:
    """
    The region between two concentric arcs and two radial edges.

    Attributes:
        start_radius: Inner radius.
        end_radius: Outer radius (>= start_radius).
        start_angle: Angle of the first radial edge.
        end_angle: Angle of the second radial edge (clockwise from start).
    """
    start_radius: float
    end_radius: float
    start_angle: float
    end_angle: float

    @property
    def thickness(self) -> float:
        return self.end_radius - self.start_radius

    @property
    def mid_radius(self) -> float:
        return (self.start_radius + self.end_radius) / 2

    @property
    def mid_angle(self) -> float:
        return (self.start_angle + self.end_angle) / 2

    @property
    def angular_width(self) -> float:
        return self.end_angle - self.start_angle

    def with_radii(self, start_radius: float, end_radius: float) -> AnnularBand:
        return AnnularBand(start_radius, end_radius, self.start_angle, self.end_angle)

    def clipped_to(self, start_angle: float, end_angle: float) -> AnnularBand:
        """Restrict the angular range to the intersection with [start_angle, end_angle]."""
        return AnnularBand(
            self.start_radius,
            self.end_radius,
            max(self.start_angle, start_angle),
            min(self.end_angle, end_angle),
        )

