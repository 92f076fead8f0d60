"""Box aggregate built from six planar patches.

A Box is not a primitive in its own right: it is a plain collection of six
PlanarPatch faces that share their eight vertices. Four corners are given;
the remaining four are derived by vector addition. All face normals point
out of the box.

Example:
    >>> from src.lumen.core.ray import vec3
    >>> from src.lumen.geometry.box import Box
    >>> box = Box.from_corners(
    ...     top_left_front=vec3(-1.0, 1.0, 1.0),
    ...     top_left_back=vec3(-1.0, 1.0, -1.0),
    ...     top_right_front=vec3(1.0, 1.0, 1.0),
    ...     bottom_left_front=vec3(-1.0, -1.0, 1.0),
    ... )
    >>> len(box.faces())
    6
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy.typing as npt

from src.lumen.core.ray import as_vec3
from src.lumen.geometry.patch import PlanarPatch


@dataclass(frozen=True, eq=False)
class Box:
    """Six patches forming a closed box.

    Attributes:
        front: Face containing the top-left-front corner, facing forward.
        back: Opposite face of front.
        left: Face containing the top-left-back corner, facing left.
        right: Opposite face of left.
        top: Face containing the top-left-back corner, facing up.
        bottom: Opposite face of top.
    """

    front: PlanarPatch
    back: PlanarPatch
    left: PlanarPatch
    right: PlanarPatch
    top: PlanarPatch
    bottom: PlanarPatch

    @classmethod
    def from_corners(
        cls,
        top_left_front: npt.ArrayLike,
        top_left_back: npt.ArrayLike,
        top_right_front: npt.ArrayLike,
        bottom_left_front: npt.ArrayLike,
    ) -> Box:
        """Build a box from four of its corners.

        Args:
            top_left_front: Corner with negative x, positive y, positive z
                (in the box's own orientation).
            top_left_back: Corner behind top_left_front.
            top_right_front: Corner to the right of top_left_front.
            bottom_left_front: Corner below top_left_front.

        Returns:
            The box with all six faces.

        Raises:
            ValueError: If the corners are degenerate (coincide or are collinear).
        """
        tlf = as_vec3(top_left_front)
        tlb = as_vec3(top_left_back)
        trf = as_vec3(top_right_front)
        blf = as_vec3(bottom_left_front)

        across = trf - tlf
        depth = tlb - tlf

        trb = tlb + across
        brf = blf + across
        brb = brf + depth
        blb = blf + depth

        return cls(
            front=PlanarPatch.from_corners(tlf, trf, blf),
            back=PlanarPatch.from_corners(trb, tlb, brb),
            left=PlanarPatch.from_corners(tlb, tlf, blb),
            right=PlanarPatch.from_corners(trf, trb, brf),
            top=PlanarPatch.from_corners(tlb, trb, tlf),
            bottom=PlanarPatch.from_corners(blf, brf, blb),
        )

    @classmethod
    def axis_aligned(cls, min_corner: npt.ArrayLike, max_corner: npt.ArrayLike) -> Box:
        """Build an axis-aligned box spanning min_corner to max_corner."""
        lo = as_vec3(min_corner)
        hi = as_vec3(max_corner)
        return cls.from_corners(
            top_left_front=(lo[0], hi[1], hi[2]),
            top_left_back=(lo[0], hi[1], lo[2]),
            top_right_front=(hi[0], hi[1], hi[2]),
            bottom_left_front=(lo[0], lo[1], hi[2]),
        )

    def faces(self) -> tuple[PlanarPatch, ...]:
        """Return all six faces: front, back, left, right, top, bottom."""
        return (self.front, self.back, self.left, self.right, self.top, self.bottom)
