[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "syncrecorder"
version = "0.1.0"
description = "Building blocks for time-synchronized recordings of camera images and surgical robot arm kinematics"
requires-python = ">=3.10"
keywords = ["recording", "synchronization", "kinematics", "stereo", "robotics", "dataset"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Medical Science Apps.",
]
dependencies = [
    "numpy",
    "pillow",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["syncrecorder"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
