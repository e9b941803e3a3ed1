import json

import numpy as np
import pytest
from PIL import Image

from syncrecorder.config import Arm, KinematicType, RecorderConfig
from syncrecorder.models import ImageData, Stamp, SyncedPacket, joint_state, pose, twist
from syncrecorder.writer import WriteError, bgr_to_rgb, new_folder, write_packet


def _frame(seed=0):
    rng = np.random.default_rng(seed)
    return rng.integers(0, 256, size=(4, 5, 3), dtype=np.uint8)


def _packet(**overrides):
    stamp = Stamp(10, 500)
    values = dict(
        stamp=stamp,
        left_image=ImageData(stamp, _frame(1)),
        right_image=ImageData(stamp, _frame(2)),
        measured={
            Arm.PSM1: joint_state(stamp, [1.0, 2.0], [0.5], [0.25]),
            Arm.ECM: pose(stamp, [1.0, 2.0, 3.0], [0.0, 0.0, 0.0, 1.0]),
        },
        setpoint={Arm.PSM1: joint_state(Stamp(9, 0), [3.0], [], [])},
        jaw_measured={Arm.PSM1: joint_state(stamp, [0.7])},
        cartesian_velocity={
            Arm.PSM1: twist(stamp, [1.0, 2.0, 3.0], [4.0, 5.0, 6.0])
        },
    )
    values.update(overrides)
    return SyncedPacket(**values)


def test_bgr_to_rgb_swaps_channels():
    image = np.array([[[1, 2, 3]]], dtype=np.uint8)
    assert bgr_to_rgb(image).tolist() == [[[3, 2, 1]]]


def test_bgr_to_rgb_drops_alpha():
    image = np.array([[[1, 2, 3, 4]]], dtype=np.uint8)
    assert bgr_to_rgb(image).tolist() == [[[3, 2, 1]]]


def test_bgr_to_rgb_twice_is_identity():
    frame = _frame(3)
    assert np.array_equal(bgr_to_rgb(bgr_to_rgb(frame)), frame)


def test_bgr_to_rgb_rejects_grayscale():
    with pytest.raises(ValueError):
        bgr_to_rgb(np.zeros((2, 2), dtype=np.uint8))


def test_new_folder_name_from_wall_time(tmp_path):
    folder = new_folder(tmp_path / "recorded_data", 1_700_000_000_000_000_123)
    assert folder.name == "1700000000_123"
    assert folder.is_dir()


def test_new_folder_exists_ok(tmp_path):
    first = new_folder(tmp_path, 5_000_000_007)
    second = new_folder(tmp_path, 5_000_000_007)
    assert first == second


def test_new_folder_failure_raises(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("x")
    with pytest.raises(WriteError):
        new_folder(blocker, 1)


def test_write_packet_stereo_psm_and_ecm(tmp_path):
    config = RecorderConfig(arms=frozenset({Arm.PSM1, Arm.ECM}))
    written = write_packet(_packet(), config, tmp_path)
    assert [p.name for p in written] == [
        "image_left.png",
        "image_right.png",
        "kinematics_PSM1.json",
        "kinematics_ECM.json",
    ]
    assert all(p.exists() for p in written)


def test_written_image_holds_frame_channels(tmp_path):
    config = RecorderConfig(arms=frozenset({Arm.PSM1}))
    packet = _packet()
    write_packet(packet, config, tmp_path)
    with Image.open(tmp_path / "image_left.png") as img:
        stored = np.asarray(img)
    assert np.array_equal(stored, packet.left_image.image)


def test_psm_json_contents(tmp_path):
    config = RecorderConfig(arms=frozenset({Arm.PSM1}))
    write_packet(_packet(), config, tmp_path)
    doc = json.loads((tmp_path / "kinematics_PSM1.json").read_text())
    assert doc["header"] == {"sec": 10, "nsec": 500}
    assert doc["arm"]["measured_data"]["position"] == [1.0, 2.0]
    assert doc["arm"]["setpoint_data"]["position"] == [3.0]
    assert doc["jaw"]["measured_data"] == {"position": [0.7]}
    assert doc["jaw"]["setpoint_data"] is None
    assert "cartesian_velocity" not in doc["arm"]["measured_data"]


def test_cartesian_velocity_written_when_enabled(tmp_path):
    config = RecorderConfig(arms=frozenset({Arm.PSM1}), record_cv=True)
    write_packet(_packet(), config, tmp_path)
    doc = json.loads((tmp_path / "kinematics_PSM1.json").read_text())
    assert doc["arm"]["measured_data"]["cartesian_velocity"] == [
        1.0, 2.0, 3.0, 4.0, 5.0, 6.0
    ]


def test_ecm_json_contents(tmp_path):
    config = RecorderConfig(
        arms=frozenset({Arm.ECM}), kinematic_type=KinematicType.CP
    )
    write_packet(_packet(), config, tmp_path)
    doc = json.loads((tmp_path / "kinematics_ECM.json").read_text())
    assert set(doc) == {"header", "measured_data", "setpoint_data"}
    assert doc["measured_data"]["orientation"] == [0.0, 0.0, 0.0, 1.0]
    assert doc["setpoint_data"] is None


def test_mono_right_writes_only_right(tmp_path):
    config = RecorderConfig(
        use_left_image=False, use_right_image=True, arms=frozenset({Arm.PSM1})
    )
    write_packet(_packet(), config, tmp_path)
    assert not (tmp_path / "image_left.png").exists()
    assert (tmp_path / "image_right.png").exists()


def test_missing_image_raises_and_skips_kinematics(tmp_path):
    config = RecorderConfig(arms=frozenset({Arm.PSM1}))
    with pytest.raises(WriteError):
        write_packet(_packet(right_image=None), config, tmp_path)
    assert not (tmp_path / "kinematics_PSM1.json").exists()


def test_missing_folder_raises(tmp_path):
    config = RecorderConfig(arms=frozenset({Arm.PSM1}))
    with pytest.raises(WriteError):
        write_packet(_packet(), config, tmp_path / "absent")