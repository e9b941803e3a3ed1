"""Post-processing of recorded folders: cleanup, statistics and reorganisation."""

from __future__ import annotations

import json
import shutil
from collections import Counter
from pathlib import Path

from .config import Arm, RecorderConfig

IMAGE_LEFT = "image_left.png"
IMAGE_RIGHT = "image_right.png"


def kinematics_file(arm: Arm) -> str:
    """Name of the kinematics file written for ``arm``."""
    return f"kinematics_{arm.value}.json"


def required_files(config: RecorderConfig) -> list[str]:
    """File names that a complete recording folder must contain."""
    names = []
    if config.use_left_image:
        names.append(IMAGE_LEFT)
    if config.use_right_image:
        names.append(IMAGE_RIGHT)
    names.extend(kinematics_file(arm) for arm in Arm if config.records(arm))
    return names


def _subdirectories(base_dir: Path) -> list[Path]:
    return sorted(entry for entry in Path(base_dir).iterdir() if entry.is_dir())


def cleanup_folders(config: RecorderConfig, base_dir: Path | str) -> list[Path]:
    """Remove folders missing any required file; return the removed paths."""
    base = Path(base_dir)
    if not base.exists():
        return []
    needed = required_files(config)
    removed = []
    for folder in _subdirectories(base):
        if not all((folder / name).exists() for name in needed):
            shutil.rmtree(folder)
            removed.append(folder)
    return removed


def count_folders_per_second(base_dir: Path | str) -> dict[str, int]:
    """Count recording folders per wall-clock second, keyed by the seconds part."""
    base = Path(base_dir)
    if not base.exists():
        raise FileNotFoundError(f"output directory not found: {base}")
    counts = Counter(
        folder.name.split("_", 1)[0]
        for folder in _subdirectories(base)
        if "_" in folder.name
    )
    return dict(sorted(counts.items()))


def _styled(document: dict[str, str]) -> str:
    lines = [f"   {json.dumps(key)} : {json.dumps(value)}" for key, value in document.items()]
    return "{\n" + ",\n".join(lines) + "\n}\n"


def reformat_data_storage(source_dir: Path | str, target_dir: Path | str) -> int:
    """Copy recording folders into an indexed layout; return the number copied."""
    source = Path(source_dir)
    target = Path(target_dir)
    image_dir = target / "image"
    kinematic_dir = target / "kinematic"
    time_dir = target / "time_syn"
    for directory in (image_dir, kinematic_dir, time_dir):
        directory.mkdir(parents=True, exist_ok=True)

    folders = _subdirectories(source)
    for index, folder in enumerate(folders):
        copies = [
            (folder / IMAGE_LEFT, image_dir / f"{index}_left.png"),
            (folder / IMAGE_RIGHT, image_dir / f"{index}_right.png"),
        ]
        copies.extend(
            (folder / kinematics_file(arm), kinematic_dir / f"{index}_{arm.value}.json")
            for arm in Arm
        )
        for src, dst in copies:
            if src.exists():
                shutil.copyfile(src, dst)
        (time_dir / f"{index}.json").write_text(_styled({"timestamp": folder.name}))
    return len(folders)