"""Play tab: Human vs minimax bot with interactive SVG board."""

from __future__ import annotations

import logging
import random as _random
import time as _time
from dataclasses import dataclass, field
from typing import Optional

import gradio as gr

from gomokubot.agent.base import Agent
from gomokubot.agent.minimax_agent import MinimaxAgent
from gomokubot.agent.random_agent import RandomAgent
from gomokubot.agent.search import SearchConfig
from gomokubot.game.board import GomokuGameState, format_point, parse_coordinate
from gomokubot.game.types import Player
from gomokubot.ui.board_component import render_board_svg

logger = logging.getLogger(__name__)

AGENT_CHOICES: dict[str, Agent] = {
    "MinimaxAgent (d=2)": MinimaxAgent(SearchConfig(depth=2)),
    "MinimaxAgent (d=3)": MinimaxAgent(SearchConfig(depth=3)),
    "MinimaxAgent (d=4)": MinimaxAgent(SearchConfig(depth=4)),
    "RandomAgent": RandomAgent(),
}
DEFAULT_AGENT = "MinimaxAgent (d=3)"


@dataclass
class GameSession:
    """Per-tab game state held in gr.State."""

    game: GomokuGameState = field(default_factory=GomokuGameState)
    agent: Agent = field(default_factory=lambda: AGENT_CHOICES[DEFAULT_AGENT])
    human_player: Player = field(default=Player.BLACK)
    _turn_start: float = field(default_factory=_time.time)

    def reset(self, human_player: Optional[Player] = None) -> None:
        self.game = GomokuGameState()
        self._turn_start = _time.time()
        if human_player is not None:
            self.human_player = human_player

    def mark_turn_start(self) -> None:
        self._turn_start = _time.time()

    def elapsed_since_turn_start(self) -> float:
        return _time.time() - self._turn_start

    def bot_move(self) -> None:
        """Let the bot play for the side to move."""
        t0 = _time.time()
        move = self.agent.select_move(self.game)
        self.game.apply_move(move, elapsed=_time.time() - t0)
        self.mark_turn_start()

    @property
    def game_over_banner(self) -> str:
        """Short text for the SVG overlay banner. Empty if game is not over."""
        g = self.game
        if not g.is_over:
            return ""
        if g.winner is None:
            return "Draw!"
        return "You win!" if g.winner == self.human_player else "Bot wins!"

    @property
    def status_text(self) -> str:
        g = self.game
        if g.is_over:
            if g.winner is not None:
                return f"Game over: {self.game_over_banner} ({g.winner} by 5-in-a-row)"
            return "Game over: Draw!"
        if g.current_player == self.human_player:
            return f"Your turn ({g.current_player})"
        return f"Bot is thinking... ({g.current_player})"

    @property
    def move_history_table(self) -> list[list[str]]:
        rows: list[list[str]] = []
        for i, move in enumerate(self.game.moves):
            t = f"{move.elapsed:.2f}" if move.elapsed is not None else "-"
            rows.append([str(i + 1), str(move.player), format_point(move.point), t])
        return rows


def _make_board_html(session: GameSession) -> str:
    clickable = (
        not session.game.is_over
        and session.game.current_player == session.human_player
    )
    return render_board_svg(
        session.game,
        clickable=clickable,
        game_over_message=session.game_over_banner,
    )


def _outputs(session: GameSession, status: Optional[str] = None):
    return (
        _make_board_html(session),
        status if status is not None else session.status_text,
        session.move_history_table,
        session,
    )


def _apply_human_move(coord_text: str, session: GameSession):
    """Process a human move, then let the bot respond."""
    if session.game.is_over:
        return _outputs(session) + ("",)
    if session.game.current_player != session.human_player:
        return _outputs(session, "Wait, it's the bot's turn.") + ("",)

    point = parse_coordinate(coord_text)
    if point is None:
        return _outputs(session, f"Invalid coordinate: '{coord_text}'. Use format like H8.") + ("",)
    if not session.game.board.is_empty(point):
        return _outputs(session, f"{format_point(point)} is already occupied.") + ("",)

    session.game.apply_move(point, elapsed=session.elapsed_since_turn_start())
    if not session.game.is_over:
        session.bot_move()
    return _outputs(session) + ("",)


def _new_game_with_color(color_choice: str, agent_choice: str, session: GameSession):
    """Start a new game. color_choice is 'Black', 'White', or 'Random'."""
    if color_choice == "Random":
        human = _random.choice([Player.BLACK, Player.WHITE])
    elif color_choice == "White":
        human = Player.WHITE
    else:
        human = Player.BLACK

    session.agent = AGENT_CHOICES.get(agent_choice, AGENT_CHOICES[DEFAULT_AGENT])
    session.reset(human_player=human)
    logger.info("New game: human %s vs %s", human, session.agent.name)

    # Black moves first, so the bot opens when the human takes White.
    if human is Player.WHITE:
        session.bot_move()

    return _outputs(session) + (f"You are {human}.",)


def _undo_move(session: GameSession):
    """Undo the last move pair (bot + human)."""
    if not session.game.moves:
        return _outputs(session, "Nothing to undo.")
    if session.game.moves[-1].player != session.human_player:
        session.game.undo_move()
    if session.game.moves:
        session.game.undo_move()
    return _outputs(session)


def _resign(session: GameSession):
    if not session.game.is_over:
        session.game.resign(session.human_player)
    return _outputs(session)


def build_play_tab() -> None:
    """Construct the Play tab UI inside a gr.Blocks context."""

    session_state = gr.State(GameSession())

    with gr.Row():
        with gr.Column(scale=3):
            board_html = gr.HTML(value=render_board_svg(GomokuGameState()), label="Board")
        with gr.Column(scale=1):
            status_text = gr.Textbox(
                value="Your turn (Black)", label="Status", interactive=False, lines=2,
            )
            color_info = gr.Textbox(
                value="You are Black.", label="Color", interactive=False, lines=1,
            )

            gr.Markdown("### New Game")
            color_choice = gr.Radio(
                choices=["Random", "Black", "White"], value="Black", label="Play as",
            )
            agent_choice = gr.Dropdown(
                choices=list(AGENT_CHOICES.keys()), value=DEFAULT_AGENT, label="Opponent",
            )
            new_game_btn = gr.Button("New Game", variant="primary")

            with gr.Row():
                undo_btn = gr.Button("Undo")
                resign_btn = gr.Button("Resign", variant="stop")

            gr.Markdown("### Enter Move")
            coord_input = gr.Textbox(
                label="Coordinate (e.g. H8)", placeholder="H8", elem_id="coord-input", lines=1,
            )
            coord_submit = gr.Button("Submit Move", elem_id="coord-submit")

            gr.Markdown("### Move History")
            move_table = gr.Dataframe(
                headers=["#", "Player", "Move", "Time (s)"],
                datatype=["number", "str", "str", "str"],
                interactive=False,
            )

    board_outputs = [board_html, status_text, move_table, session_state]

    coord_submit.click(
        fn=_apply_human_move,
        inputs=[coord_input, session_state],
        outputs=board_outputs + [coord_input],
    )
    new_game_btn.click(
        fn=_new_game_with_color,
        inputs=[color_choice, agent_choice, session_state],
        outputs=board_outputs + [color_info],
    )
    undo_btn.click(fn=_undo_move, inputs=[session_state], outputs=board_outputs)
    resign_btn.click(fn=_resign, inputs=[session_state], outputs=board_outputs)
