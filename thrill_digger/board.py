"""Board state for the Thrill Digger probability calculator."""

from enum import IntEnum
from typing import List, Tuple, Union

# Expert difficulty: 8 bombs + 8 rupoors on a 5x8 grid.
ROWS = 5
COLS = 8
TOTAL_CELLS = ROWS * COLS
TOTAL_BAD = 16


class CellContent(IntEnum):
    """What the player has seen in a cell."""

    HIDDEN = 0
    GREEN = 1  # 0 bad neighbors
    BLUE = 2  # 1-2 bad neighbors
    RED = 3  # 3-4 bad neighbors
    SILVER = 4  # 5-6 bad neighbors
    GOLD = 5  # 7-8 bad neighbors
    RUPOOR = 6
    BOMB = 7

    @property
    def is_clue(self) -> bool:
        return CellContent.GREEN <= self <= CellContent.GOLD

    @property
    def is_bad(self) -> bool:
        return self in (CellContent.RUPOOR, CellContent.BOMB)

    @property
    def is_revealed(self) -> bool:
        return self != CellContent.HIDDEN


_CLUE_RANGES = {
    CellContent.GREEN: (0, 0),
    CellContent.BLUE: (1, 2),
    CellContent.RED: (3, 4),
    CellContent.SILVER: (5, 6),
    CellContent.GOLD: (7, 8),
}


def clue_range(content: CellContent) -> Tuple[int, int]:
    """
    Return the inclusive (min, max) number of bad neighbors a clue implies.

    Raises:
        ValueError: If ``content`` is not a clue (hidden or bad).
    """
    try:
        return _CLUE_RANGES[CellContent(content)]
    except KeyError:
        raise ValueError(f"{CellContent(content).name} is not a clue.") from None


class Board:
    """Row-major grid of cell contents, all hidden at creation."""

    def __init__(
        self, rows: int = ROWS, cols: int = COLS, total_bad: int = TOTAL_BAD
    ) -> None:
        """
        Args:
            rows: Number of rows, must be > 0.
            cols: Number of columns, must be > 0.
            total_bad: Total bad items (bombs + rupoors) on the true board.

        Raises:
            ValueError: If dimensions or the bad count are invalid.
        """
        if rows <= 0 or cols <= 0:
            raise ValueError("rows and cols must be positive.")
        if total_bad < 0 or total_bad > rows * cols:
            raise ValueError("total_bad must be between 0 and rows * cols.")

        self.rows: int = rows
        self.cols: int = cols
        self.total_bad: int = total_bad
        self.cells: List[CellContent] = [CellContent.HIDDEN] * (rows * cols)

    @property
    def size(self) -> int:
        return self.rows * self.cols

    def index(self, row: int, col: int) -> int:
        """
        Convert (row, col) to a flat cell index.

        Raises:
            ValueError: If coordinates are outside the board.
        """
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            raise ValueError("Cell coordinates are outside the board.")
        return row * self.cols + col

    def reset(self) -> None:
        self.cells = [CellContent.HIDDEN] * self.size

    def get(self, row: int, col: int) -> CellContent:
        return self.cells[self.index(row, col)]

    def set(self, row: int, col: int, content: Union[CellContent, int]) -> None:
        """
        Overwrite one cell. Game legality (e.g. too many bad cells) is not checked.

        Raises:
            ValueError: If coordinates are outside the board or ``content``
                is not a valid cell content value.
        """
        idx = self.index(row, col)
        try:
            value = CellContent(content)
        except ValueError:
            raise ValueError(f"Invalid cell content: {content!r}.") from None
        self.cells[idx] = value

    def snapshot(self) -> Tuple[CellContent, ...]:
        """Immutable copy of the grid for a single solve."""
        return tuple(self.cells)

    def known_bad_count(self) -> int:
        return sum(1 for c in self.cells if c.is_bad)

    def revealed_count(self) -> int:
        return sum(1 for c in self.cells if c.is_revealed)

    def hidden_count(self) -> int:
        return self.size - self.revealed_count()

    def remaining_bad(self) -> int:
        return self.total_bad - self.known_bad_count()


# One-letter symbols for text rendering; "Y" is gold.
CONTENT_SYMBOLS = {
    CellContent.HIDDEN: ".",
    CellContent.GREEN: "G",
    CellContent.BLUE: "B",
    CellContent.RED: "R",
    CellContent.SILVER: "S",
    CellContent.GOLD: "Y",
    CellContent.RUPOOR: "r",
    CellContent.BOMB: "X",
}
