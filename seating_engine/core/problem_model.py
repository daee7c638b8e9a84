# seating_engine/core/problem_model.py

"""
Seating problem model: students, the student registry and the seat grid.

The seat grid is a row-major sequence of optional occupants. Index ``k`` sits
at row ``k // columns`` and column ``k % columns``; index 0 is the corner
farthest from the board. Grid operations never mutate in place, they return a
new grid, so a caller holding a snapshot never observes a half-applied edit.
"""

import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import (
    Callable,
    Dict,
    Iterable,
    Iterator,
    List,
    Optional,
    Sequence,
    Tuple,
)
from uuid import UUID, uuid4

from .exceptions import InvalidInputError, SeatIndexOutOfRangeError

logger = logging.getLogger(__name__)


class StudentGroup(Enum):
    """The two roster input groups. Group A is numbered first."""

    GROUP_A = "group_a"
    GROUP_B = "group_b"


@dataclass(frozen=True)
class RosterEntry:
    """A single structured record produced by a roster parser."""

    class_no_raw: str
    name_local: str
    name_foreign: str


@dataclass(frozen=True)
class Student:
    id: UUID
    name_local: str
    name_foreign: str
    class_no: int
    group: StudentGroup
    class_no_label: Optional[str] = None

    @property
    def display_class_no(self) -> str:
        return self.class_no_label or str(self.class_no)

    @property
    def display_name(self) -> str:
        return f"{self.name_local} {self.name_foreign}".strip()

    def to_dict(self) -> Dict[str, object]:
        return {
            "id": str(self.id),
            "name_local": self.name_local,
            "name_foreign": self.name_foreign,
            "class_no": self.class_no,
            "display_class_no": self.display_class_no,
            "group": self.group.value,
        }


@dataclass(frozen=True)
class StudentRegistry:
    """
    Immutable roster of students for one roster load.

    The registry is never mutated incrementally; a new roster load builds a
    fresh registry with ``from_groups``.
    """

    students: Tuple[Student, ...] = ()
    _by_id: Dict[UUID, Student] = field(
        default_factory=dict, init=False, repr=False, compare=False
    )

    def __post_init__(self):
        index = {s.id: s for s in self.students}
        if len(index) != len(self.students):
            raise InvalidInputError("Student registry contains duplicate ids")
        object.__setattr__(self, "_by_id", index)

    @classmethod
    def from_groups(
        cls,
        group_a: Sequence[RosterEntry],
        group_b: Sequence[RosterEntry],
        id_factory: Callable[[], UUID] = uuid4,
    ) -> "StudentRegistry":
        """
        Build a registry with continuous class numbers: group A receives
        ``1..|A|`` and group B ``|A|+1..|A|+|B|``, both in input order.
        Raw class tokens from the parser are ignored for numbering.
        """
        students: List[Student] = []
        for group, entries in (
            (StudentGroup.GROUP_A, group_a),
            (StudentGroup.GROUP_B, group_b),
        ):
            start = len(students)
            for i, entry in enumerate(entries):
                students.append(
                    Student(
                        id=id_factory(),
                        name_local=entry.name_local,
                        name_foreign=entry.name_foreign,
                        class_no=start + i + 1,
                        group=group,
                    )
                )
        logger.info(
            f"Registered {len(students)} students "
            f"({len(group_a)} in group A, {len(group_b)} in group B)"
        )
        return cls(tuple(students))

    def get(self, student_id: UUID) -> Optional[Student]:
        return self._by_id.get(student_id)

    def __contains__(self, student_id: object) -> bool:
        return student_id in self._by_id

    def __iter__(self) -> Iterator[Student]:
        return iter(self.students)

    def __len__(self) -> int:
        return len(self.students)

    def ids(self) -> List[UUID]:
        return [s.id for s in self.students]

    def group_sizes(self) -> Dict[StudentGroup, int]:
        sizes = {group: 0 for group in StudentGroup}
        for s in self.students:
            sizes[s.group] += 1
        return sizes


class SeatGrid:
    """Fixed-capacity, row-major arrangement of optional student occupants."""

    __slots__ = ("rows", "columns", "_seats")

    def __init__(
        self, rows: int, columns: int, seats: Optional[Iterable[Optional[Student]]] = None
    ):
        if rows < 1 or columns < 1:
            raise InvalidInputError(
                f"Grid dimensions must be positive, got {rows}x{columns}"
            )
        self.rows = rows
        self.columns = columns
        capacity = rows * columns
        values = tuple(seats) if seats is not None else (None,) * capacity
        if len(values) != capacity:
            raise InvalidInputError(
                f"Grid of {rows}x{columns} needs {capacity} seats, got {len(values)}"
            )
        self._seats: Tuple[Optional[Student], ...] = values

    # --- Construction ---

    @classmethod
    def empty(cls, rows: int, columns: int) -> "SeatGrid":
        return cls(rows, columns)

    @classmethod
    def from_occupants(
        cls, rows: int, columns: int, students: Sequence[Student]
    ) -> "SeatGrid":
        """Seat ``students`` at indices ``0..n-1`` in the given order."""
        capacity = rows * columns
        if len(students) > capacity:
            raise InvalidInputError(
                f"{len(students)} students do not fit into {capacity} seats",
                context={"students": len(students), "capacity": capacity},
            )
        seats: List[Optional[Student]] = list(students)
        seats.extend([None] * (capacity - len(students)))
        return cls(rows, columns, seats)

    # --- Sequence protocol ---

    @property
    def capacity(self) -> int:
        return self.rows * self.columns

    @property
    def seats(self) -> Tuple[Optional[Student], ...]:
        return self._seats

    def __len__(self) -> int:
        return len(self._seats)

    def __getitem__(self, index: int) -> Optional[Student]:
        self._check_index(index)
        return self._seats[index]

    def __iter__(self) -> Iterator[Optional[Student]]:
        return iter(self._seats)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SeatGrid):
            return NotImplemented
        return (
            self.rows == other.rows
            and self.columns == other.columns
            and self._seats == other._seats
        )

    def __hash__(self) -> int:
        return hash((self.rows, self.columns, self._seats))

    def __repr__(self) -> str:
        return (
            f"SeatGrid(rows={self.rows}, columns={self.columns}, "
            f"occupied={self.occupied_count})"
        )

    # --- Geometry ---

    def position(self, index: int) -> Tuple[int, int]:
        """Return ``(row, column)`` of a seat index."""
        self._check_index(index)
        return divmod(index, self.columns)

    def index_of(self, row: int, column: int) -> int:
        if not (0 <= row < self.rows and 0 <= column < self.columns):
            raise SeatIndexOutOfRangeError(
                row * self.columns + column,
                self.capacity,
                message=f"Seat ({row}, {column}) is outside a {self.rows}x{self.columns} grid",
            )
        return row * self.columns + column

    def are_adjacent(self, i: int, j: int) -> bool:
        """Chebyshev distance of exactly 1, no wraparound."""
        ri, ci = self.position(i)
        rj, cj = self.position(j)
        return max(abs(ri - rj), abs(ci - cj)) == 1

    def neighbours(self, index: int) -> List[int]:
        """Indices of the (up to 8) seats adjacent to ``index``, ascending."""
        row, column = self.position(index)
        result = []
        for dr in (-1, 0, 1):
            for dc in (-1, 0, 1):
                if dr == 0 and dc == 0:
                    continue
                r, c = row + dr, column + dc
                if 0 <= r < self.rows and 0 <= c < self.columns:
                    result.append(r * self.columns + c)
        return sorted(result)

    # --- Queries ---

    @property
    def occupied_count(self) -> int:
        return sum(1 for s in self._seats if s is not None)

    def active_occupants(self) -> List[Student]:
        """Non-empty entries in index order."""
        return [s for s in self._seats if s is not None]

    def seat_of(self, student_id: UUID) -> Optional[int]:
        for i, s in enumerate(self._seats):
            if s is not None and s.id == student_id:
                return i
        return None

    def to_export(self) -> List[Optional[str]]:
        """Row-major list of student id strings, ``None`` for empty seats."""
        return [str(s.id) if s is not None else None for s in self._seats]

    # --- Transitions (each returns a new grid) ---

    def resize(self, rows: int, columns: int) -> "SeatGrid":
        """
        Change dimensions, preserving occupants by flat index.
        Occupants at indices beyond the new capacity are dropped.
        """
        new_capacity = rows * columns
        if new_capacity == self.capacity:
            return SeatGrid(rows, columns, self._seats)

        kept = list(self._seats[:new_capacity])
        dropped = [s for s in self._seats[new_capacity:] if s is not None]
        if dropped:
            logger.warning(
                f"Resize to {rows}x{columns} drops {len(dropped)} seated students: "
                f"{[s.display_name for s in dropped]}"
            )
        kept.extend([None] * (new_capacity - len(kept)))
        return SeatGrid(rows, columns, kept)

    def swap(self, i: int, j: int) -> "SeatGrid":
        """Exchange the contents of two seats unconditionally."""
        self._check_index(i)
        self._check_index(j)
        seats = list(self._seats)
        seats[i], seats[j] = seats[j], seats[i]
        return SeatGrid(self.rows, self.columns, seats)

    def shuffle(self, rng: Optional[random.Random] = None) -> "SeatGrid":
        """
        Uniformly permute the seated students and refill from index 0.
        Empty seats collapse to the tail of the grid.
        """
        occupants = self.active_occupants()
        (rng or random.Random()).shuffle(occupants)
        return SeatGrid.from_occupants(self.rows, self.columns, occupants)

    def _check_index(self, index: int) -> None:
        if not isinstance(index, int) or not 0 <= index < len(self._seats):
            raise SeatIndexOutOfRangeError(index, len(self._seats))
