"""Section building over run tables.

Runs of adjacent scan lines that overlap are connected. A junction policy
decides whether connected runs belong to the same section or whether the
connection is only recorded as a junction between two sections of the lag.
"""

from beam_spots.models.core_models import Run, RunTable
from beam_spots.models.glyph_models import Lag, Section


class JunctionRatioPolicy:
    """Join two overlapping runs when their overlap is large enough.

    The overlap is measured relative to the shorter of the two runs, so a
    run that merely grazes a neighbour starts a new section.
    """

    def __init__(self, min_overlap_ratio: float = 0.5):
        self.min_overlap_ratio = min_overlap_ratio

    def consistent(self, run: Run, other: Run) -> bool:
        overlap = run.overlap(other)
        if overlap == 0:
            return False
        return overlap / min(run.length, other.length) >= self.min_overlap_ratio


class _UnionFind:
    def __init__(self, size: int):
        self.parent = list(range(size))

    def find(self, i: int) -> int:
        while self.parent[i] != i:
            self.parent[i] = self.parent[self.parent[i]]
            i = self.parent[i]
        return i

    def union(self, a: int, b: int) -> None:
        ra, rb = self.find(a), self.find(b)
        if ra != rb:
            # Keep the earliest run as root, so numbering follows scan order
            self.parent[max(ra, rb)] = min(ra, rb)


def _overlapping_pairs(previous: list[Run], current: list[Run]):
    """Yield index pairs of overlapping runs from two adjacent lines.

    Both sequences are sorted and non-overlapping, so a merge walk is enough.
    """
    i = j = 0
    while i < len(previous) and j < len(current):
        a, b = previous[i], current[j]
        if a.overlap(b) > 0:
            yield i, j
        if a.stop < b.stop:
            i += 1
        else:
            j += 1


class SectionFactory:
    """Create the sections of a run table into a lag."""

    def __init__(self, lag: Lag, policy: JunctionRatioPolicy):
        self.lag = lag
        self.policy = policy

    def create_sections(self, table: RunTable) -> list[Section]:
        """Build sections and junctions from all runs of the table.

        Args:
            table: Run table, with the same orientation as the lag.

        Returns:
            The sections created, ordered by their first run in scan order.
        """
        runs: list[Run] = []
        line_offsets: list[int] = []
        for seq in table.sequences:
            line_offsets.append(len(runs))
            runs.extend(seq)

        sets = _UnionFind(len(runs))
        touching: list[tuple[int, int]] = []

        for line in range(1, table.size):
            previous = table.sequences[line - 1]
            current = table.sequences[line]
            for i, j in _overlapping_pairs(previous, current):
                a = line_offsets[line - 1] + i
                b = line_offsets[line] + j
                if self.policy.consistent(runs[a], runs[b]):
                    sets.union(a, b)
                else:
                    touching.append((a, b))

        members: dict[int, list[Run]] = {}
        for index, run in enumerate(runs):
            members.setdefault(sets.find(index), []).append(run)

        section_of: dict[int, int] = {}
        sections: list[Section] = []
        for root, section_runs in members.items():
            section = self.lag.create_section(section_runs)
            section_of[root] = section.id
            sections.append(section)

        for a, b in touching:
            self.lag.add_junction(
                section_of[sets.find(a)], section_of[sets.find(b)]
            )

        return sections
