"""Two-dimensional k-d tree for nearest-neighbour queries."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable

from neuralflows.ops import distance_squared


@dataclass(eq=False)
class PointData:
    """A point in the plane with an attached payload.

    The payload is kept by reference; it is never copied.
    """

    point: tuple[float, float]
    data: Any = None


class KDTree:
    """Node of a k-d tree that alternates splitting on x and y.

    Points whose coordinate is less than or equal to the node's go to the
    left child, bigger ones to the right.
    """

    def __init__(
        self,
        points: Iterable[PointData],
        dimension: bool = False,
        parent: "KDTree | None" = None,
    ) -> None:
        items = list(points)
        if not items:
            raise ValueError("a k-d tree needs at least one point")
        self.dimension = bool(dimension)
        self.parent = parent
        self.left_child: KDTree | None = None
        self.right_child: KDTree | None = None

        axis = self._axis
        items.sort(key=lambda p: p.point[axis])
        index = len(items) // 2
        while index + 1 < len(items) and items[index].point[axis] == items[index + 1].point[axis]:
            index += 1
        self.point_data = items[index]

        left: list[PointData] = []
        right: list[PointData] = []
        after_mid = False
        for item in items:
            if item is self.point_data:
                after_mid = True
            elif after_mid:
                right.append(item)
            else:
                left.append(item)

        if left:
            self.left_child = KDTree(left, not self.dimension, self)
        if right:
            self.right_child = KDTree(right, not self.dimension, self)

    @property
    def _axis(self) -> int:
        return 1 if self.dimension else 0

    def find_nearest_neighbour(self, point: tuple[float, float]) -> tuple[PointData, float]:
        """Nearest stored point and its squared distance from ``point``."""
        axis = self._axis
        split = self.point_data.point[axis]
        own = (self.point_data, distance_squared(point, self.point_data.point))

        go_left = point[axis] <= split
        near = self.left_child if go_left else self.right_child
        far = self.right_child if go_left else self.left_child

        candidates = [own, near.find_nearest_neighbour(point) if near is not None else own]
        best = min(candidates, key=lambda candidate: candidate[1])
        if far is not None and best[1] > (split - point[axis]) ** 2:
            candidates.append(far.find_nearest_neighbour(point))
        return min(candidates, key=lambda candidate: candidate[1])