"""Configuration, data models, JSON serialisation, packet writing and post-processing for synchronized image and kinematics recordings."""

__version__ = "0.1.0"