"""Graph nodes."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from graphplace.position import Position


def _round_half_away(value: float) -> float:
    return math.copysign(math.floor(abs(value) + 0.5), value)


@dataclass
class Node:
    """A node with an id, a position and the slot it occupies (-1 when none)."""

    node_id: int
    pos: Position = field(default_factory=Position)
    slot: int = field(default=-1, init=False)
    real_coords: bool = field(default=False, init=False)

    def is_placed(self) -> bool:
        """Return True if the node sits on a slot."""
        return self.slot != -1

    def toggle_coord_type(self) -> None:
        """Switch between integer and real coordinates, rounding when going to integers."""
        self.real_coords = not self.real_coords
        if not self.real_coords:
            self.pos = Position(_round_half_away(self.pos.x), _round_half_away(self.pos.y))