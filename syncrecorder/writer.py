"""Writing matched packets to disk as PNG frames and styled JSON kinematics."""

from __future__ import annotations

import time
from pathlib import Path
from typing import Any

import numpy as np
from PIL import Image

from .config import Arm, RecorderConfig
from .models import NSEC_PER_SEC, ImageData, KinematicData, SyncedPacket
from .postprocess import IMAGE_LEFT, IMAGE_RIGHT, kinematics_file
from .serialize import ecm_document, psm_document, styled_json

PNG_COMPRESS_LEVEL = 1


class WriteError(OSError):
    """Raised when a packet cannot be written completely."""


def bgr_to_rgb(image: Any) -> np.ndarray:
    """Return a three-channel RGB copy of a BGR or BGRA frame."""
    array = np.asarray(image)
    if array.ndim != 3 or array.shape[2] not in (3, 4):
        raise ValueError(
            f"expected an image with 3 or 4 channels, got shape {array.shape}"
        )
    return np.ascontiguousarray(array[..., 2::-1])


def new_folder(base_dir: Path | str, wall_time_ns: int | None = None) -> Path:
    """Create and return ``<base_dir>/<sec>_<nsec>`` for the given wall time."""
    if wall_time_ns is None:
        wall_time_ns = time.time_ns()
    sec, nsec = divmod(int(wall_time_ns), NSEC_PER_SEC)
    folder = Path(base_dir) / f"{sec}_{nsec}"
    try:
        folder.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise WriteError(f"Failed to create directory {folder}: {exc}") from exc
    return folder


def _write_image(data: ImageData | None, path: Path) -> None:
    if data is None or data.image is None:
        raise WriteError(f"no image to write to {path}")
    try:
        rgb = bgr_to_rgb(data.image)
        # The converted array is encoded with the blue-first channel convention,
        # so the file's first channel is the frame's first channel.
        encoded = np.ascontiguousarray(rgb[..., ::-1])
        Image.fromarray(encoded).save(
            path, format="PNG", compress_level=PNG_COMPRESS_LEVEL
        )
    except (ValueError, TypeError, OSError) as exc:
        raise WriteError(f"Failed to write image {path}: {exc}") from exc


def _write_text(path: Path, text: str) -> None:
    try:
        path.write_text(text)
    except OSError as exc:
        raise WriteError(f"Failed to open {path.name} for writing: {exc}") from exc


def _document(arm: Arm, packet: SyncedPacket, config: RecorderConfig) -> dict:
    measured = packet.measured.get(arm, KinematicData())
    setpoint = packet.setpoint.get(arm)
    if arm is Arm.ECM:
        return ecm_document(measured, setpoint)
    cartesian = packet.cartesian_velocity.get(arm) if config.record_cv else None
    return psm_document(
        measured,
        setpoint,
        packet.jaw_measured.get(arm),
        packet.jaw_setpoint.get(arm),
        cartesian,
    )


def write_packet(
    packet: SyncedPacket, config: RecorderConfig, folder: Path | str
) -> list[Path]:
    """Write the packet's frames and kinematics into ``folder``.

    Images come first; if one fails no kinematics are written. Returns the
    paths written, in order.
    """
    target = Path(folder)
    written: list[Path] = []

    frames = []
    if config.use_left_image:
        frames.append((packet.left_image, target / IMAGE_LEFT))
    if config.use_right_image:
        frames.append((packet.right_image, target / IMAGE_RIGHT))
    for data, path in frames:
        _write_image(data, path)
        written.append(path)

    for arm in Arm:
        if not config.records(arm):
            continue
        path = target / kinematics_file(arm)
        _write_text(path, styled_json(_document(arm, packet, config)))
        written.append(path)

    return written