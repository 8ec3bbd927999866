"""SVG board renderer + JavaScript click handler for Gradio."""

from __future__ import annotations

from typing import Optional

from betaothello.game.board import BOARD_SIZE
from betaothello.game.state import OthelloGameState
from betaothello.game.types import Player, Point

# Layout constants
CELL_SIZE = 56
MARGIN = 32
BOARD_PX = MARGIN * 2 + CELL_SIZE * BOARD_SIZE
DISC_RADIUS = 23
HINT_RADIUS = 6

# Colors
BG_COLOR = "#2E7D32"
FRAME_COLOR = "#1B4D1F"
LINE_COLOR = "#123614"
X_DISC = "#1A1A1A"
O_DISC = "#F5F5F5"
O_STROKE = "#888"
LAST_MOVE_COLOR = "#E74C3C"
LEGAL_HINT_COLOR = "rgba(0, 0, 0, 0.25)"
SUGGEST_COLOR = "#FACC15"
LABEL_COLOR = "#E8F5E9"

# Banner colors by outcome
WIN_COLOR = "#4ADE80"
LOSS_COLOR = "#F87171"
NEUTRAL_COLOR = "#FFFFFF"


def _center(row: int, col: int) -> tuple[int, int]:
    """Convert 0-indexed board coordinates to the SVG pixel center of the cell."""
    x = MARGIN + col * CELL_SIZE + CELL_SIZE // 2
    y = MARGIN + row * CELL_SIZE + CELL_SIZE // 2
    return x, y


def _banner(message: str) -> str:
    if message.startswith("You win"):
        color = WIN_COLOR
    elif message.startswith("AI wins"):
        color = LOSS_COLOR
    else:
        color = NEUTRAL_COLOR
    mid = BOARD_PX // 2
    return (
        f'<rect x="{MARGIN}" y="{mid - 30}" width="{BOARD_PX - 2 * MARGIN}" height="60" '
        f'fill="rgba(0, 0, 0, 0.7)" rx="8"/>'
        f'<text x="{mid}" y="{mid + 10}" text-anchor="middle" font-size="30" '
        f'font-family="sans-serif" font-weight="bold" fill="{color}">{message}</text>'
    )


def render_board_svg(
    game_state: OthelloGameState,
    clickable: bool = True,
    highlight_last: bool = True,
    game_over_message: str = "",
    suggestion: Optional[Point] = None,
) -> str:
    """Render the board as an SVG string.

    When clickable, only the current player's legal moves get click
    targets, each marked with a small dot.
    """
    parts: list[str] = []

    parts.append(
        f'<svg xmlns="http://www.w3.org/2000/svg" '
        f'width="{BOARD_PX}" height="{BOARD_PX}" '
        f'viewBox="0 0 {BOARD_PX} {BOARD_PX}" '
        f'id="othello-board">'
    )

    parts.append(
        f'<rect width="{BOARD_PX}" height="{BOARD_PX}" fill="{FRAME_COLOR}" rx="4"/>'
    )
    parts.append(
        f'<rect x="{MARGIN}" y="{MARGIN}" width="{CELL_SIZE * BOARD_SIZE}" '
        f'height="{CELL_SIZE * BOARD_SIZE}" fill="{BG_COLOR}"/>'
    )

    # Grid lines
    for i in range(BOARD_SIZE + 1):
        offset = MARGIN + i * CELL_SIZE
        end = MARGIN + BOARD_SIZE * CELL_SIZE
        parts.append(
            f'<line x1="{offset}" y1="{MARGIN}" x2="{offset}" y2="{end}" '
            f'stroke="{LINE_COLOR}" stroke-width="1.5"/>'
        )
        parts.append(
            f'<line x1="{MARGIN}" y1="{offset}" x2="{end}" y2="{offset}" '
            f'stroke="{LINE_COLOR}" stroke-width="1.5"/>'
        )

    # Row and column indices, 0-7 like the coordinate input
    for i in range(BOARD_SIZE):
        x, y = _center(i, i)
        parts.append(
            f'<text x="{x}" y="{MARGIN - 10}" text-anchor="middle" '
            f'font-size="14" font-family="monospace" fill="{LABEL_COLOR}">{i}</text>'
        )
        parts.append(
            f'<text x="{MARGIN - 14}" y="{y + 5}" text-anchor="middle" '
            f'font-size="14" font-family="monospace" fill="{LABEL_COLOR}">{i}</text>'
        )

    # Discs
    last_point: Optional[Point] = None
    for record in reversed(game_state.moves):
        if record.point is not None:
            last_point = record.point
            break

    board = game_state.board
    for r in range(BOARD_SIZE):
        for c in range(BOARD_SIZE):
            player = board.get(r, c)
            if player is None:
                continue
            x, y = _center(r, c)
            fill = X_DISC if player is Player.X else O_DISC
            stroke = "none" if player is Player.X else O_STROKE
            parts.append(
                f'<circle cx="{x}" cy="{y}" r="{DISC_RADIUS}" '
                f'fill="{fill}" stroke="{stroke}" stroke-width="1.5"/>'
            )
            if highlight_last and Point(r, c) == last_point:
                parts.append(
                    f'<circle cx="{x}" cy="{y}" r="5" fill="{LAST_MOVE_COLOR}"/>'
                )

    if suggestion is not None:
        x, y = _center(suggestion.row, suggestion.col)
        parts.append(
            f'<circle cx="{x}" cy="{y}" r="{DISC_RADIUS}" fill="none" '
            f'stroke="{SUGGEST_COLOR}" stroke-width="3" stroke-dasharray="6,4" class="suggestion"/>'
        )

    # Click targets on legal moves only
    if clickable and not game_state.is_over:
        for pt in game_state.legal_moves():
            x, y = _center(pt.row, pt.col)
            coord_str = f"{pt.row},{pt.col}"
            parts.append(
                f'<circle cx="{x}" cy="{y}" r="{HINT_RADIUS}" fill="{LEGAL_HINT_COLOR}"/>'
            )
            half = CELL_SIZE // 2
            parts.append(
                f'<rect x="{x - half}" y="{y - half}" width="{CELL_SIZE}" height="{CELL_SIZE}" '
                f'fill="transparent" class="board-click" '
                f'data-coord="{coord_str}" style="cursor:pointer">'
                f'<title>{coord_str}</title></rect>'
            )

    if game_over_message:
        parts.append(_banner(game_over_message))

    parts.append("</svg>")
    return "\n".join(parts)


# JavaScript that handles clicks on the SVG and writes the coordinate to
# a hidden Gradio Textbox, then presses the submit button.
BOARD_CLICK_JS = """
() => {
    if (window._othelloClickBound) return;
    window._othelloClickBound = true;

    document.addEventListener('click', function(e) {
        const cell = e.target.closest('.board-click');
        if (!cell) return;
        const coord = cell.getAttribute('data-coord');
        if (!coord) return;

        const container = document.querySelector('#coord-input textarea, #coord-input input');
        if (container) {
            const nativeSetter = Object.getOwnPropertyDescriptor(
                window.HTMLInputElement.prototype, 'value'
            )?.set || Object.getOwnPropertyDescriptor(
                window.HTMLTextAreaElement.prototype, 'value'
            )?.set;
            if (nativeSetter) {
                nativeSetter.call(container, coord);
            } else {
                container.value = coord;
            }
            container.dispatchEvent(new Event('input', { bubbles: true }));
            const btn = document.querySelector('#coord-submit');
            if (btn) btn.click();
        }
    });
}
"""
