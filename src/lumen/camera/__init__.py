"""Camera module for view and ray generation.

This module provides camera models for generating primary rays:

Components:
    pinhole: Simple pinhole (perspective) camera model

Camera responsibilities:
    - Transform (u, v) image coordinates to world-space rays
    - Map pixel coordinates to rays through pixel centers
    - Support look-at positioning with up vector

Ray generation uses normalized device coordinates:
    u in [0, 1]: left to right across image
    v in [0, 1]: bottom to top across image
"""

from .pinhole import PinholeCamera

__all__ = [
    "PinholeCamera",
]
