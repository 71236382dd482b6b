from typing import Optional, Sequence

from maze_lab.core.board import Board


def render_text(board: Board, path: Optional[Sequence[int]] = None) -> str:
    """
    ASCII drawing of the board, three characters per cell:

        +---+---+
            |   |
        +   +   +
        | *   *
        +---+---+

    Cells on `path` are marked with '*'.
    """
    on_path = set(path or ())
    size = board.board_size
    lines = []

    top = "+"
    for x in range(size):
        top += ("---" if board.cells[x].walls.top else "   ") + "+"
    lines.append(top)

    for y in range(size):
        row = ""
        bottom = "+"
        for x in range(size):
            index = board.get_index(x, y)
            walls = board.cells[index].walls
            if x == 0:
                row += "|" if walls.left else " "
            row += " * " if index in on_path else "   "
            row += "|" if walls.right else " "
            bottom += ("---" if walls.bottom else "   ") + "+"
        lines.append(row)
        lines.append(bottom)

    return "\n".join(lines)
