"""Timestamped data carried from subscriptions to the writers."""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from .config import Arm

NSEC_PER_SEC = 1_000_000_000


@dataclass(frozen=True, order=True)
class Stamp:
    """A message timestamp in whole seconds and nanoseconds."""

    sec: int = 0
    nsec: int = 0

    def __post_init__(self) -> None:
        if self.sec < 0:
            raise ValueError(f"seconds must not be negative: {self.sec}")
        if not 0 <= self.nsec < NSEC_PER_SEC:
            raise ValueError(f"nanoseconds out of range: {self.nsec}")

    @classmethod
    def from_ns(cls, total_ns: int) -> Stamp:
        """Build a stamp from a count of nanoseconds."""
        sec, nsec = divmod(int(total_ns), NSEC_PER_SEC)
        return cls(sec, nsec)

    @classmethod
    def from_sec(cls, seconds: float) -> Stamp:
        """Build a stamp from fractional seconds, rounded to the nanosecond."""
        whole = math.floor(seconds)
        return cls.from_ns(whole * NSEC_PER_SEC + round((seconds - whole) * NSEC_PER_SEC))

    def to_ns(self) -> int:
        """Total nanoseconds."""
        return self.sec * NSEC_PER_SEC + self.nsec

    def to_sec(self) -> float:
        """Fractional seconds."""
        return self.sec + self.nsec / NSEC_PER_SEC

    def __sub__(self, other: Stamp) -> float:
        """Signed difference in seconds."""
        if not isinstance(other, Stamp):
            return NotImplemented
        return (self.to_ns() - other.to_ns()) / NSEC_PER_SEC


def _floats(values: Iterable[float]) -> tuple[float, ...]:
    return tuple(float(v) for v in values)


@dataclass(frozen=True)
class KinematicData:
    """One kinematic sample: joint state, Cartesian pose or Cartesian twist."""

    stamp: Stamp = field(default_factory=Stamp)
    position: tuple[float, ...] = ()
    orientation: tuple[float, ...] = ()
    velocity: tuple[float, ...] = ()
    effort: tuple[float, ...] = ()
    is_cp: bool = False


@dataclass(frozen=True, eq=False)
class ImageData:
    """One camera frame with its stamp; the image is a BGR array."""

    stamp: Stamp
    image: Any


@dataclass(frozen=True, eq=False)
class SyncedPacket:
    """Data matched at one reference time, ready to be written."""

    stamp: Stamp
    left_image: ImageData | None = None
    right_image: ImageData | None = None
    measured: Mapping[Arm, KinematicData] = field(default_factory=dict)
    setpoint: Mapping[Arm, KinematicData] = field(default_factory=dict)
    jaw_measured: Mapping[Arm, KinematicData] = field(default_factory=dict)
    jaw_setpoint: Mapping[Arm, KinematicData] = field(default_factory=dict)
    cartesian_velocity: Mapping[Arm, KinematicData] = field(default_factory=dict)


def joint_state(
    stamp: Stamp,
    position: Iterable[float] = (),
    velocity: Iterable[float] = (),
    effort: Iterable[float] = (),
) -> KinematicData:
    """Kinematic sample from a joint-state message."""
    return KinematicData(
        stamp=stamp,
        position=_floats(position),
        velocity=_floats(velocity),
        effort=_floats(effort),
        is_cp=False,
    )


def pose(
    stamp: Stamp, position: Iterable[float], orientation: Iterable[float]
) -> KinematicData:
    """Kinematic sample from a stamped pose: xyz position and xyzw quaternion."""
    xyz = _floats(position)
    xyzw = _floats(orientation)
    if len(xyz) != 3:
        raise ValueError(f"pose position needs 3 values, got {len(xyz)}")
    if len(xyzw) != 4:
        raise ValueError(f"pose orientation needs 4 values, got {len(xyzw)}")
    return KinematicData(stamp=stamp, position=xyz, orientation=xyzw, is_cp=True)


def twist(
    stamp: Stamp, linear: Iterable[float], angular: Iterable[float]
) -> KinematicData:
    """Kinematic sample from a stamped twist; velocity is linear then angular."""
    lin = _floats(linear)
    ang = _floats(angular)
    if len(lin) != 3 or len(ang) != 3:
        raise ValueError("twist needs 3 linear and 3 angular values")
    return KinematicData(stamp=stamp, velocity=lin + ang, is_cp=False)