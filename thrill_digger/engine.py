"""Thrill Digger game engine: random bad-item placement and digging."""

import random
from typing import FrozenSet, Iterable, List, Optional, Set, Tuple

from .board import COLS, CONTENT_SYMBOLS, ROWS, CellContent
from .utils import get_neighborhoods

# Expert difficulty.
BOMBS = 8
RUPOORS = 8


def clue_for_count(bad_neighbors: int) -> CellContent:
    """
    Map a true bad-neighbor count to the rupee color a dug cell shows.

    Raises:
        ValueError: If the count is outside 0..8.
    """
    if bad_neighbors < 0 or bad_neighbors > 8:
        raise ValueError("bad_neighbors must be between 0 and 8.")
    if bad_neighbors == 0:
        return CellContent.GREEN
    if bad_neighbors <= 2:
        return CellContent.BLUE
    if bad_neighbors <= 4:
        return CellContent.RED
    if bad_neighbors <= 6:
        return CellContent.SILVER
    return CellContent.GOLD


class ThrillDigger:
    """Thrill Digger game with bombs and rupoors hidden under a grid of dirt."""

    def __init__(
        self,
        rows: int = ROWS,
        cols: int = COLS,
        bombs: int = BOMBS,
        rupoors: int = RUPOORS,
        seed: Optional[int] = None,
    ) -> None:
        """
        Initialize a game; bad items are placed on the first dig.

        Args:
            rows: Number of rows, must be > 0.
            cols: Number of columns, must be > 0.
            bombs: Bombs to hide; digging one ends the game.
            rupoors: Rupoors to hide; digging one costs rupees but play goes on.
            seed: Optional seed for reproducible placement.

        Raises:
            ValueError: If dimensions are invalid or the items do not fit.
        """
        if rows <= 0 or cols <= 0:
            raise ValueError("rows and cols must be positive.")
        if bombs < 0 or rupoors < 0:
            raise ValueError("bombs and rupoors must be non-negative.")
        if bombs + rupoors >= rows * cols:
            raise ValueError("Cannot leave a safe cell with that many bad items.")

        self.rows: int = rows
        self.cols: int = cols
        self.bombs_count: int = bombs
        self.rupoors_count: int = rupoors
        self._rng = random.Random(seed)
        self._neighborhoods = get_neighborhoods(rows, cols)

        # True contents: HIDDEN stands for "safe, not yet computed".
        self.board: List[CellContent] = [CellContent.HIDDEN] * (rows * cols)
        self.board_blank: bool = True
        self.dug: List[bool] = [False] * (rows * cols)
        self.safe_remaining: int = rows * cols - bombs - rupoors
        self.game_over: bool = False

    @classmethod
    def from_layout(
        cls,
        bombs: Iterable[Tuple[int, int]],
        rupoors: Iterable[Tuple[int, int]],
        rows: int = ROWS,
        cols: int = COLS,
    ) -> "ThrillDigger":
        """Build a game with bad items at explicit (row, col) positions."""
        bomb_cells = [r * cols + c for r, c in bombs]
        rupoor_cells = [r * cols + c for r, c in rupoors]
        if len(set(bomb_cells) | set(rupoor_cells)) != len(bomb_cells) + len(rupoor_cells):
            raise ValueError("Bad item positions must be distinct.")

        game = cls(rows, cols, len(bomb_cells), len(rupoor_cells))
        game._place(bomb_cells, rupoor_cells)
        return game

    @property
    def total_bad(self) -> int:
        return self.bombs_count + self.rupoors_count

    def _place(self, bomb_cells: List[int], rupoor_cells: List[int]) -> None:
        for idx in bomb_cells:
            self.board[idx] = CellContent.BOMB
        for idx in rupoor_cells:
            self.board[idx] = CellContent.RUPOOR

        for idx in range(self.rows * self.cols):
            if self.board[idx].is_bad:
                continue
            count = sum(1 for n in self._neighborhoods[idx] if self.board[n].is_bad)
            self.board[idx] = clue_for_count(count)

        self.board_blank = False

    def place_bad_items(self) -> None:
        """
        Place bombs and rupoors uniformly at random (one-time).

        Raises:
            ValueError: If the board is not blank.
        """
        if not self.board_blank:
            raise ValueError("The board is not blank.")

        chosen = self._rng.sample(range(self.rows * self.cols), self.total_bad)
        self._place(chosen[: self.bombs_count], chosen[self.bombs_count :])

    def bad_cells(self) -> FrozenSet[Tuple[int, int]]:
        return frozenset(
            divmod(idx, self.cols)
            for idx, content in enumerate(self.board)
            if content.is_bad
        )

    def dig(self, row: int, col: int) -> Tuple[int, CellContent]:
        """
        Dig a single cell.

        Returns:
            Tuple of (status, content) where status is:
                - -1: Bomb dug (loss)
                - 0: Non-terminal dig (or no-op on a dug cell / finished game)
                - 1: Win (every safe cell dug)
            and content is what the cell revealed.

        Raises:
            ValueError: If coordinates are out of bounds.
        """
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            raise ValueError("Cell coordinates are outside the board.")

        if self.board_blank:
            self.place_bad_items()

        idx = row * self.cols + col
        content = self.board[idx]
        if self.game_over or self.dug[idx]:
            return 0, content

        self.dug[idx] = True
        if content == CellContent.BOMB:
            self.game_over = True
            return -1, content
        if content == CellContent.RUPOOR:
            return 0, content

        self.safe_remaining -= 1
        if self.safe_remaining == 0:
            self.game_over = True
            return 1, content
        return 0, content

    # -------------------------------------------------------------------------
    # Display methods
    # -------------------------------------------------------------------------

    _ANSI_RESET = "\033[0m"
    _ANSI_COORD = "\033[96m"
    _ANSI_BAD = "\033[91m"

    def _c(self, s: str) -> str:
        """Wrap string in coordinate color."""
        return f"{self._ANSI_COORD}{s}{self._ANSI_RESET}"

    def format_board(self, reveal_all: bool = False) -> str:
        """
        Render the board as a multi-line string for terminal display.

        Args:
            reveal_all: If True, show every cell's true content.
        """

        def cell_str(idx: int) -> str:
            if not (reveal_all or self.dug[idx]) or self.board_blank:
                return "."
            symbol = CONTENT_SYMBOLS[self.board[idx]]
            if self.board[idx].is_bad:
                return f"{self._ANSI_BAD}{symbol}{self._ANSI_RESET}"
            return symbol

        header_cells = " ".join(f"{c:2d}" for c in range(self.cols))
        out = [self._c("   ") + self._c(header_cells)]
        out.append(self._c("   " + "-" * (3 * self.cols - 1)))

        for r in range(self.rows):
            row_cells = " ".join(
                f" {cell_str(r * self.cols + c)}" for c in range(self.cols)
            )
            out.append(self._c(f"{r:2d} ") + self._c("|") + row_cells)

        return "\n".join(out)


def play_cli(game: ThrillDigger) -> None:
    """
    Run a simple terminal UI for playing Thrill Digger.

    Args:
        game: A ThrillDigger instance to play against.
    """
    print("Thrill Digger CLI (enter: row col). Coordinates are 0-based. Type 'q' to quit.\n")
    print(game.format_board())

    rupoors: Set[Tuple[int, int]] = set()
    while True:
        s = input("\nDig (row col): ").strip()
        if s.lower() in {"q", "quit", "exit"}:
            print("Quit.")
            return

        parts = s.replace(",", " ").split()
        if len(parts) != 2:
            print("Invalid input. Example: 2 5")
            continue

        try:
            row = int(parts[0])
            col = int(parts[1])
            status, content = game.dig(row, col)
        except ValueError as exc:
            print(f"Invalid input. {exc}")
            continue

        print(f"\nYou dug ({row}, {col}) and found {content.name.lower()}.\n")
        print(game.format_board())

        if content == CellContent.RUPOOR:
            rupoors.add((row, col))

        if status == -1:
            print("\nYou dug up a bomb. Game over.")
            print("\nFull board:")
            print(game.format_board(reveal_all=True))
            return

        if status == 1:
            print(f"\nYou dug every safe spot ({len(rupoors)} rupoors hit). You won!")
            print("\nFull board:")
            print(game.format_board(reveal_all=True))
            return
