"""Record of the profiles visited during one run of best-response dynamics."""
from __future__ import annotations

from typing import FrozenSet, List, Optional, Set, Tuple

from brdsim.custom_math.profile_codec import num_profiles, smallest_missing


class VisitedProfileRegistry:
    """Two-tier history of profile codes.

    * ``global_visited`` holds every code seen since the run started, across
      restarts. It only grows and decides where a restart may go.
    * ``segment_trajectory`` is the ordered path since the last restart. A
      code already on it means the dynamics are cycling.
    """

    def __init__(self, num_players: int, start: int = 0) -> None:
        self.num_players = num_players
        self.total = num_profiles(num_players)
        self._visited: Set[int] = {start}
        self._segment: List[int] = [start]
        self._segment_set: Set[int] = {start}
        # every code below _cursor is visited; the visited set only grows
        self._cursor = 0

    # ---------------- write ----------------
    def visit(self, code: int) -> bool:
        """Append ``code`` to the current segment.

        Returns True (and leaves the segment unchanged) when ``code`` is
        already on the segment, i.e. a cycle was closed.
        """
        if code in self._segment_set:
            return True
        self._segment.append(code)
        self._segment_set.add(code)
        self._visited.add(code)
        return False

    def restart(self) -> Optional[int]:
        """Start a fresh segment at the smallest never-visited code.

        Returns the new code, or None when all 2^n profiles were visited.
        """
        code = smallest_missing(self._visited, self.num_players, self._cursor)
        if code is None:
            return None
        self._cursor = code + 1
        self._visited.add(code)
        self._segment = [code]
        self._segment_set = {code}
        return code

    # ---------------- read helpers ----------------
    @property
    def num_visited(self) -> int:
        return len(self._visited)

    @property
    def global_visited(self) -> FrozenSet[int]:
        return frozenset(self._visited)

    @property
    def segment_trajectory(self) -> Tuple[int, ...]:
        return tuple(self._segment)
