# syncrecorder

Building blocks for recording time-synchronized data sets from a stereo (or
mono) camera and the kinematics of robot arms (PSM1, PSM2, ECM): option
parsing, timestamped data models, the JSON layout of kinematics files,
writing matched packets to disk, and post-processing of the recorded folders.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Modules

### `syncrecorder.config`

`parse_arguments(argv)` turns a list of options (without the program name)
into a frozen `RecorderConfig`. Invalid or missing options raise `UsageError`
(a `ValueError`); `usage()` returns the usage line.

```
-c <camera topic> -m <stereo|mono> [-d <left|right>] \
-a PSM1 [-a PSM2] [-a ECM] -x <js|cp> -t <time_tolerance_seconds> [-v]
```

| Option | Meaning |
| ------ | ------- |
| `-c` | Camera topic base. Required. |
| `-m` | `stereo` uses both cameras, `mono` one. Required. |
| `-d` | With `mono`, which camera: `left` or `right`. Must not be given with `stereo`. |
| `-a` | An arm: `PSM1`, `PSM2` or `ECM`. Repeat for several; at least one is required. |
| `-x` | `js` (joint space) or `cp` (Cartesian pose). Required. |
| `-t` | Time tolerance in seconds. Required. |
| `-v` | Also record Cartesian velocity for the PSMs. |

`RecorderConfig` holds `camera_topic_base`, `time_tolerance`,
`kinematic_type` (a `KinematicType`), `use_left_image`, `use_right_image`,
`arms` (a frozenset of `Arm`) and `record_cv`; `records(arm)` tells whether an
arm is recorded and `use_js` whether joint space is used.

### `syncrecorder.models`

- `Stamp(sec, nsec)` — an ordered timestamp with `from_ns`, `from_sec`,
  `to_ns`, `to_sec`; subtracting two stamps gives the signed difference in
  seconds.
- `KinematicData`, `ImageData`, `SyncedPacket` — a kinematic sample, a BGR
  frame, and the data matched at one reference time (per-arm mappings for
  measured, set-point, jaw and Cartesian-velocity samples).
- `joint_state(...)`, `pose(...)`, `twist(...)` — build `KinematicData` from
  the contents of joint-state, pose and twist messages.

### `syncrecorder.serialize`

`psm_document(...)` and `ecm_document(...)` build the kinematics documents:
for a PSM a `header` (`sec`/`nsec`), an `arm` block and a `jaw` block, each
with `measured_data` and `setpoint_data`; for the ECM a `header`,
`measured_data` and `setpoint_data`. `styled_json(document)` renders them with
sorted keys and three-space indents.

### `syncrecorder.writer`

- `new_folder(base_dir, wall_time_ns=None)` creates `<base_dir>/<sec>_<nsec>`.
- `write_packet(packet, config, folder)` writes `image_left.png` /
  `image_right.png` (converted from BGR to RGB) and `kinematics_<ARM>.json`
  for each recorded arm, returning the paths written. Failures raise
  `WriteError`; if an image fails, no kinematics are written.
- `bgr_to_rgb(image)` converts a BGR or BGRA array to RGB.

### `syncrecorder.postprocess`

- `cleanup_folders(config, base_dir)` removes folders missing any file from
  `required_files(config)` and returns the removed paths.
- `count_folders_per_second(base_dir)` counts folders per wall-clock second.
- `reformat_data_storage(source_dir, target_dir)` copies folders into
  `image/<index>_left.png`, `image/<index>_right.png`,
  `kinematic/<index>_<ARM>.json` and `time_syn/<index>.json` (holding the
  original folder name as `timestamp`), and returns how many were copied.

## Example

```python
import numpy as np

from syncrecorder.config import Arm, parse_arguments
from syncrecorder.models import ImageData, Stamp, SyncedPacket, joint_state
from syncrecorder.postprocess import cleanup_folders, reformat_data_storage
from syncrecorder.writer import new_folder, write_packet

config = parse_arguments(["-c", "cam", "-m", "mono", "-d", "left",
                          "-a", "PSM1", "-x", "js", "-t", "0.005"])
stamp = Stamp(10, 0)
packet = SyncedPacket(
    stamp=stamp,
    left_image=ImageData(stamp, np.zeros((4, 4, 3), dtype=np.uint8)),
    measured={Arm.PSM1: joint_state(stamp, [0.1, 0.2], [0.0, 0.0], [0.0, 0.0])},
)
write_packet(packet, config, new_folder("recorded_data"))

cleanup_folders(config, "recorded_data")
reformat_data_storage("recorded_data", "data_save_folder")
```

## What this package does not do

There is no command to run and no live recording: the package does not
subscribe to camera or kinematics topics, and it does not match incoming
streams by time tolerance or run writer threads. Callers build
`SyncedPacket`s themselves and pass them to `write_packet`.