"""
Layout validation utilities.

Checks a generated DungeonLayout against the generator's guarantees: leaves
tile the root region, rooms sit inside their leaves, corridors are one tile
thick and unbroken, and every room is reachable from every other.
"""

from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

import numpy as np

from .conversion.tile_grid import leaf_coverage
from .generators.bsp.bsp_generator import DungeonLayout
from .generators.bsp.bsp_types import Rectangle


def _tiles_contiguous(segments: List[Rectangle]) -> bool:
    """True if the tiles covered by the segments form one 4-connected region."""
    tiles = set()
    for segment in segments:
        for x in range(segment.x, segment.x2):
            for y in range(segment.y, segment.y2):
                tiles.add((x, y))
    if not tiles:
        return True

    start = next(iter(tiles))
    visited = {start}
    queue = deque([start])
    while queue:
        x, y = queue.popleft()
        for neighbor in ((x + 1, y), (x - 1, y), (x, y + 1), (x, y - 1)):
            if neighbor in tiles and neighbor not in visited:
                visited.add(neighbor)
                queue.append(neighbor)
    return len(visited) == len(tiles)


class ValidationLevel(Enum):
    """Validation severity levels."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


@dataclass
class ValidationIssue:
    """Represents a validation issue found in a layout."""
    level: ValidationLevel
    category: str
    message: str
    location: Optional[str] = None
    suggestion: Optional[str] = None


class LayoutValidator:
    """
    Validates dungeon layouts for structural problems.

    Padding violations are warnings because narrow leaves legitimately
    produce rooms that touch their leaf border.
    """

    def __init__(self, padding: Optional[int] = None):
        """
        Initialize the layout validator.

        Args:
            padding: Expected room padding; defaults to the layout's config
        """
        self.padding = padding
        self.issues: List[ValidationIssue] = []
        self.validation_rules = {
            "check_leaf_tiling": True,
            "check_room_containment": True,
            "check_room_padding": True,
            "check_corridor_shape": True,
            "check_connectivity": True,
        }

    def validate(self, layout: DungeonLayout) -> List[ValidationIssue]:
        """
        Run every enabled check.

        Args:
            layout: Generated layout

        Returns:
            List of validation issues found
        """
        self.issues.clear()
        if not layout.rooms:
            self._add_issue(ValidationLevel.CRITICAL, "structure", "Layout contains no rooms")
            return self.issues

        if self.validation_rules.get("check_leaf_tiling", True):
            self.check_leaf_tiling(layout)
        if self.validation_rules.get("check_room_containment", True):
            self.check_room_containment(layout)
        if self.validation_rules.get("check_room_padding", True):
            self.check_room_padding(layout)
        if self.validation_rules.get("check_corridor_shape", True):
            self.check_corridor_shape(layout)
        if self.validation_rules.get("check_connectivity", True):
            self.check_connectivity(layout)

        return self.issues

    def check_leaf_tiling(self, layout: DungeonLayout) -> None:
        """Every tile of the root region must belong to exactly one leaf."""
        for leaf in layout.leaves:
            if not layout.bounds.contains_rect(leaf):
                self._add_issue(ValidationLevel.ERROR, "partition",
                                "Leaf extends outside the root region", location=str(leaf))

        coverage = leaf_coverage(layout)
        gaps = int(np.count_nonzero(coverage == 0))
        overlaps = int(np.count_nonzero(coverage > 1))
        if gaps:
            self._add_issue(ValidationLevel.ERROR, "partition",
                            f"{gaps} tiles are not covered by any leaf")
        if overlaps:
            self._add_issue(ValidationLevel.ERROR, "partition",
                            f"{overlaps} tiles are covered by more than one leaf")

    def check_room_containment(self, layout: DungeonLayout) -> None:
        leaves = set(layout.leaves)
        for room in layout.rooms:
            if room.leaf not in leaves:
                self._add_issue(ValidationLevel.ERROR, "rooms",
                                f"Room {room.id} does not belong to a generated leaf",
                                location=str(room.leaf))
            if not room.leaf.contains_rect(room.bounds):
                self._add_issue(ValidationLevel.ERROR, "rooms",
                                f"Room {room.id} extends outside its leaf",
                                location=str(room.bounds))

    def check_room_padding(self, layout: DungeonLayout) -> None:
        padding = self.padding
        if padding is None:
            padding = layout.config.get('room_padding', 0)
        for room in layout.rooms:
            leaf = room.leaf
            if (room.x - leaf.x < padding or room.y - leaf.y < padding
                    or leaf.x2 - room.bounds.x2 < padding or leaf.y2 - room.bounds.y2 < padding):
                self._add_issue(ValidationLevel.WARNING, "rooms",
                                f"Room {room.id} is closer than {padding} to its leaf edge",
                                location=str(room.bounds),
                                suggestion="Increase min_leaf_size or reduce padding")

    def check_corridor_shape(self, layout: DungeonLayout) -> None:
        for corridor in layout.connections:
            if len(corridor.path) > 2:
                self._add_issue(ValidationLevel.ERROR, "corridors",
                                f"Corridor {corridor.start_room_id}->{corridor.end_room_id} "
                                f"has {len(corridor.path)} segments")
            for segment in corridor.path:
                if segment.width != 1 and segment.height != 1:
                    self._add_issue(ValidationLevel.ERROR, "corridors",
                                    "Corridor segment is not one tile thick",
                                    location=str(segment))
            if not _tiles_contiguous(corridor.path):
                self._add_issue(ValidationLevel.ERROR, "corridors",
                                f"Corridor {corridor.start_room_id}->{corridor.end_room_id} "
                                "is broken into disconnected pieces",
                                location=str(corridor.path))

    def check_connectivity(self, layout: DungeonLayout) -> None:
        """Breadth-first walk from the first room must reach every room."""
        adjacency = layout.adjacency()
        for a, b in layout.edges:
            if a == b:
                self._add_issue(ValidationLevel.ERROR, "graph", f"Room {a} is linked to itself")

        start = layout.rooms[0].id
        visited = {start}
        queue = deque([start])
        while queue:
            current = queue.popleft()
            for neighbor in adjacency[current]:
                if neighbor not in visited:
                    visited.add(neighbor)
                    queue.append(neighbor)

        unreachable = [room.id for room in layout.rooms if room.id not in visited]
        if unreachable:
            self._add_issue(ValidationLevel.CRITICAL, "graph",
                            f"{len(unreachable)} rooms unreachable from room {start}",
                            location=str(unreachable))

    def get_issues_by_level(self, level: ValidationLevel) -> List[ValidationIssue]:
        return [issue for issue in self.issues if issue.level == level]

    def has_errors(self) -> bool:
        """True if any error or critical issue was found."""
        return any(issue.level in (ValidationLevel.ERROR, ValidationLevel.CRITICAL)
                   for issue in self.issues)

    def generate_report(self) -> str:
        """Generate a formatted validation report."""
        if not self.issues:
            return "No issues found"
        lines = []
        for issue in self.issues:
            loc = f" @ {issue.location}" if issue.location else ""
            sug = f" | Suggestion: {issue.suggestion}" if issue.suggestion else ""
            lines.append(f"[{issue.level.value.upper()}] {issue.category}: {issue.message}{loc}{sug}")
        return "\n".join(lines)

    def _add_issue(self, level: ValidationLevel, category: str,
                   message: str, location: Optional[str] = None,
                   suggestion: Optional[str] = None) -> None:
        self.issues.append(ValidationIssue(
            level=level,
            category=category,
            message=message,
            location=location,
            suggestion=suggestion
        ))


def validate_layout(layout: DungeonLayout) -> List[ValidationIssue]:
    """Validate a layout with all checks enabled."""
    return LayoutValidator().validate(layout)
