"""Command-line configuration for the recorder."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class UsageError(ValueError):
    """Raised when the command line does not describe a valid recording."""


class KinematicType(enum.Enum):
    """Which kinematic representation is recorded."""

    JS = "js"
    CP = "cp"


class Arm(enum.Enum):
    """Arms whose kinematics can be recorded."""

    PSM1 = "PSM1"
    PSM2 = "PSM2"
    ECM = "ECM"


@dataclass(frozen=True)
class RecorderConfig:
    """What to record and how strictly streams must agree in time."""

    camera_topic_base: str = "test"
    time_tolerance: float = 0.005
    kinematic_type: KinematicType = KinematicType.JS
    use_left_image: bool = True
    use_right_image: bool = True
    arms: frozenset[Arm] = frozenset({Arm.PSM1, Arm.PSM2})
    record_cv: bool = False

    def records(self, arm: Arm) -> bool:
        """Return True if kinematics of ``arm`` are recorded."""
        return arm in self.arms

    @property
    def use_js(self) -> bool:
        return self.kinematic_type is KinematicType.JS


_VALUE_OPTIONS = frozenset({"-c", "-m", "-d", "-a", "-x", "-t"})


def usage() -> str:
    """Return the one-line usage text."""
    return (
        "Usage: synchronized_recorder "
        "-c <camera topic> -m <stereo|mono> [-d <left|right>] "
        "-a PSM1 [-a PSM2] [-a ECM] -x <js|cp> -t <time_tolerance_seconds> [-v]"
    )


def parse_arguments(argv: list[str]) -> RecorderConfig:
    """Build a configuration from command-line arguments (program name excluded)."""
    values: dict[str, str] = {}
    arm_names: list[str] = []
    record_cv = False

    args = iter(argv)
    for arg in args:
        if arg == "-v":
            record_cv = True
            continue
        if arg not in _VALUE_OPTIONS:
            raise UsageError(f"unknown argument: {arg}")
        try:
            value = next(args)
        except StopIteration:
            raise UsageError(f"missing value for {arg}") from None
        if arg == "-a":
            arm_names.append(value)
        else:
            values[arg] = value

    if not all(option in values for option in ("-c", "-m", "-t", "-x")):
        raise UsageError("Missing required parameter(s).")

    try:
        time_tolerance = float(values["-t"])
    except ValueError:
        raise UsageError(f"invalid time tolerance: {values['-t']}") from None

    camera_mode = values["-m"]
    side = values.get("-d", "")
    if camera_mode == "stereo":
        if side:
            raise UsageError("-d should not be provided when -m is stereo.")
        use_left, use_right = True, True
    elif camera_mode == "mono":
        if not side:
            raise UsageError("-d must be provided when -m is mono.")
        if side == "left":
            use_left, use_right = True, False
        elif side == "right":
            use_left, use_right = False, True
        else:
            raise UsageError("-d must be 'left' or 'right'.")
    else:
        raise UsageError("invalid camera mode.")

    if not arm_names:
        raise UsageError(
            "at least one -a parameter (PSM1, PSM2, or ECM) must be specified."
        )
    arms = set()
    for name in arm_names:
        try:
            arms.add(Arm(name))
        except ValueError:
            raise UsageError(f"invalid -a parameter: {name}") from None

    try:
        kinematic_type = KinematicType(values["-x"])
    except ValueError:
        raise UsageError("-x must be 'js' or 'cp'.") from None

    return RecorderConfig(
        camera_topic_base=values["-c"],
        time_tolerance=time_tolerance,
        kinematic_type=kinematic_type,
        use_left_image=use_left,
        use_right_image=use_right,
        arms=frozenset(arms),
        record_cv=record_cv,
    )