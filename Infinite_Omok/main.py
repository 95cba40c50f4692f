"""Entry point for console matches. Load config, wire controllers, run a GameSession."""

import logging
import sys

from Infinite_Omok.Board import Stone
from Infinite_Omok.Omokgame import new_game
from Infinite_Omok.ai import heuristic
from Infinite_Omok.console import HELP_TEXT, parse_command, render_board
from Infinite_Omok.engine.errors import (
    GameOverError,
    InternalInvariantError,
    NotYourTurnError,
    OccupiedError,
    SearchCancelledError,
)
from Infinite_Omok.settings import config_from_settings, load_settings, resolve_project_path
from Infinite_Omok.utils.cli import parse_args
from Infinite_Omok.utils.logger import configure_logging, log_event

LOGGER = logging.getLogger(__name__)

MODE_AI_SIDES = {
    "human-vs-ai": {Stone.WHITE},
    "ai-vs-human": {Stone.BLACK},
    "human-vs-human": set(),
    "ai-vs-ai": {Stone.BLACK, Stone.WHITE},
}


def build_config(args):
    settings = load_settings(args.settings)
    config = config_from_settings(settings)
    return config.with_overrides(
        search_depth=args.depth,
        node_budget=args.node_budget,
        time_budget=args.time_budget,
        radius=args.radius,
        candidate_limit=args.candidate_limit,
        draw_move_limit=args.draw_limit,
        overline_wins=False if args.exact_five else None,
    )


def main(argv=None, input_fn=input, stream=None):
    """Run one console session. Returns the final GameStatus."""
    args = parse_args(argv)
    configure_logging(args.verbose)
    stream = stream or sys.stdout

    def say(message):
        log_event(message, stream=stream)

    config = build_config(args)
    weights = heuristic.load_weights(resolve_project_path(args.weights))
    session = new_game(config, weights=weights, ai_sides=MODE_AI_SIDES.get(args.mode))
    if len(session.ai_sides) < 2:
        say(HELP_TEXT)

    while True:
        last = session.last_move
        print(render_board(session.board, last.coord if last else None, margin=args.margin, view=args.view), file=stream)
        status = session.game_status()

        if status.is_terminal:
            say(f"Result: {status.describe()}")
            if len(session.ai_sides) == 2:
                return status
            prompt = "Game over. 'r' to restart, 'u' to undo, 'q' to quit: "
        elif session.is_ai_turn():
            side = session.side_to_move
            try:
                coord = session.request_ai_move()
            except SearchCancelledError:
                continue
            except InternalInvariantError:
                LOGGER.exception("Engine invariant violated; aborting session")
                raise
            say(f"Move {len(session.history)}: {side.label} (AI) {coord}")
            if args.verbose and session.stats:
                LOGGER.debug("Search stats: %s", session.stats[-1])
            continue
        else:
            prompt = f"{session.side_to_move.label} to move: "

        try:
            raw = input_fn(prompt)
        except EOFError:
            return session.game_status()

        try:
            kind, payload = parse_command(raw)
        except ValueError as exc:
            say(str(exc))
            continue

        if kind == "quit":
            return session.game_status()
        if kind == "help":
            say(HELP_TEXT)
        elif kind == "restart":
            session.restart()
            say("New game")
        elif kind == "undo":
            try:
                session.undo(payload)
            except ValueError as exc:
                say(str(exc))
        elif kind == "toggle":
            session.set_controller(payload, not session.is_ai(payload))
            owner = "AI" if session.is_ai(payload) else "Human"
            say(f"{payload.label}: {owner}")
        elif kind == "move":
            side = session.side_to_move
            try:
                session.place_human_move(payload)
            except (OccupiedError, NotYourTurnError, GameOverError) as exc:
                say(f"Rejected: {exc}")
                continue
            say(f"Move {len(session.history)}: {side.label} {payload}")


def run():
    main()
    return 0


if __name__ == "__main__":
    sys.exit(run())
