"""SVG board renderer + JavaScript click handler for Gradio."""

from __future__ import annotations

from typing import Optional

from gomokubot.game.board import BOARD_SIZE, COL_LABELS, GomokuGameState, format_point
from gomokubot.game.types import Player, Point

# Layout constants
CELL_SIZE = 40
MARGIN = 36
BOARD_PX = MARGIN * 2 + CELL_SIZE * (BOARD_SIZE - 1)
STONE_RADIUS = 17
CLICK_RADIUS = 19  # Invisible click target radius

# Colors
BG_COLOR = "#DCB35C"
LINE_COLOR = "#4A3728"
BLACK_STONE = "#1A1A1A"
WHITE_STONE = "#F5F5F5"
WHITE_STROKE = "#888"
BANNER_COLORS = {
    "You win!": "#4ADE80",
    "Bot wins!": "#F87171",
}
DEFAULT_BANNER_COLOR = "#FFFFFF"

STAR_POINTS = [Point(3, 3), Point(3, 11), Point(7, 7), Point(11, 3), Point(11, 11)]


def _coord(point: Point) -> tuple[int, int]:
    """Convert a board point to SVG pixel coordinates (x = row, top to bottom)."""
    return MARGIN + point.y * CELL_SIZE, MARGIN + point.x * CELL_SIZE


def _text(x: int, y: int, label: str) -> str:
    return (
        f'<text x="{x}" y="{y}" text-anchor="middle" '
        f'font-size="12" font-family="monospace" fill="{LINE_COLOR}">{label}</text>'
    )


def render_board_svg(
    game_state: GomokuGameState,
    clickable: bool = True,
    highlight_last: bool = True,
    game_over_message: str = "",
) -> str:
    """Render the board as an SVG string."""
    board = game_state.board
    far = MARGIN + (BOARD_SIZE - 1) * CELL_SIZE
    parts: list[str] = [
        f'<svg xmlns="http://www.w3.org/2000/svg" '
        f'width="{BOARD_PX}" height="{BOARD_PX}" '
        f'viewBox="0 0 {BOARD_PX} {BOARD_PX}" id="gomoku-board">',
        f'<rect width="{BOARD_PX}" height="{BOARD_PX}" fill="{BG_COLOR}" rx="4"/>',
    ]

    for i in range(BOARD_SIZE):
        pos = MARGIN + i * CELL_SIZE
        parts.append(
            f'<line x1="{pos}" y1="{MARGIN}" x2="{pos}" y2="{far}" '
            f'stroke="{LINE_COLOR}" stroke-width="1"/>'
        )
        parts.append(
            f'<line x1="{MARGIN}" y1="{pos}" x2="{far}" y2="{pos}" '
            f'stroke="{LINE_COLOR}" stroke-width="1"/>'
        )
        parts.append(_text(pos, MARGIN - 14, COL_LABELS[i]))
        parts.append(_text(MARGIN - 20, pos + 4, str(i + 1)))

    for star in STAR_POINTS:
        cx, cy = _coord(star)
        parts.append(f'<circle cx="{cx}" cy="{cy}" r="3" fill="{LINE_COLOR}"/>')

    last_point: Optional[Point] = game_state.moves[-1].point if game_state.moves else None
    for pt, player in board.occupied():
        x, y = _coord(pt)
        fill = BLACK_STONE if player is Player.BLACK else WHITE_STONE
        stroke = "none" if player is Player.BLACK else WHITE_STROKE
        parts.append(
            f'<circle cx="{x}" cy="{y}" r="{STONE_RADIUS}" '
            f'fill="{fill}" stroke="{stroke}" stroke-width="1.5"/>'
        )
        if highlight_last and pt == last_point:
            marker = WHITE_STONE if player is Player.BLACK else BLACK_STONE
            parts.append(f'<circle cx="{x}" cy="{y}" r="5" fill="{marker}" opacity="0.7"/>')

    if clickable and not game_state.is_over:
        for pt in game_state.legal_moves():
            x, y = _coord(pt)
            label = format_point(pt)
            parts.append(
                f'<circle cx="{x}" cy="{y}" r="{CLICK_RADIUS}" '
                f'fill="transparent" class="board-click" '
                f'data-coord="{label}" style="cursor:pointer">'
                f'<title>{label}</title></circle>'
            )

    if game_over_message:
        color = BANNER_COLORS.get(game_over_message, DEFAULT_BANNER_COLOR)
        mid = BOARD_PX // 2
        parts.append(
            f'<rect x="0" y="{mid - 30}" width="{BOARD_PX}" height="60" '
            f'fill="rgba(0, 0, 0, 0.6)"/>'
        )
        parts.append(
            f'<text x="{mid}" y="{mid + 10}" text-anchor="middle" '
            f'font-size="28" font-weight="bold" fill="{color}">{game_over_message}</text>'
        )

    parts.append("</svg>")
    return "\n".join(parts)


# Writes the clicked coordinate into the hidden #coord-input box and presses
# #coord-submit. Bound once on page load.
BOARD_CLICK_JS = """
() => {
    if (window._gomokuClickBound) return;
    window._gomokuClickBound = true;

    document.addEventListener('click', function(e) {
        const circle = e.target.closest('.board-click');
        if (!circle) return;
        const coord = circle.getAttribute('data-coord');
        const input = document.querySelector('#coord-input textarea, #coord-input input');
        if (!coord || !input) return;

        const proto = input.tagName === 'TEXTAREA'
            ? window.HTMLTextAreaElement.prototype
            : window.HTMLInputElement.prototype;
        Object.getOwnPropertyDescriptor(proto, 'value').set.call(input, coord);
        input.dispatchEvent(new Event('input', { bubbles: true }));

        const btn = document.querySelector('#coord-submit');
        if (btn) btn.click();
    });
}
"""
