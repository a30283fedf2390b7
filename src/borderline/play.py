"""Command-line runner for playing border path puzzles in a terminal."""

from __future__ import annotations

import argparse
import random
from pathlib import Path
from typing import Callable, Optional

from .config import load_config
from .dependencies import GameDependencies, build_dependencies
from .generator import GenerationFailure
from .session import GameSession
from .state import GuessOutcome

MAX_GENERATION_ROUNDS = 5

_OUTCOME_MESSAGES = {
    GuessOutcome.CORRECT: "✅ Correct!",
    GuessOutcome.WRONG: "❌ Not on any remaining shortest path.",
    GuessOutcome.ALREADY_GUESSED: "🔁 Already guessed.",
    GuessOutcome.INVALID: "❓ Unknown country.",
}


def _format_path(deps: GameDependencies, path) -> str:
    return " → ".join(deps.world.display_name(node) for node in path)


def start_puzzle(deps: GameDependencies, session: GameSession, rng: random.Random) -> bool:
    """Generate and start a puzzle, retrying a few rounds before giving up."""
    generator = deps.puzzle_generator(rng=rng)
    for _ in range(MAX_GENERATION_ROUNDS):
        result = generator.generate()
        if not isinstance(result, GenerationFailure):
            session.start(result)
            return True
    return False


def play(
    deps: GameDependencies,
    *,
    seed: Optional[int] = None,
    read: Callable[[str], str] = input,
    write: Callable[[str], None] = print,
) -> GameSession:
    """Run one interactive puzzle until it is won, revealed, or quit."""
    session = deps.new_session()
    if not start_puzzle(deps, session, random.Random(seed)):
        write("⚠️  Could not find a puzzle with the configured path length.")
        return session

    name = deps.world.display_name
    write(
        f"🌍 Get from {name(session.start_node)} to {name(session.end_node)}: "
        f"{session.total_to_find} countries to find. "
        "Type '?' to give up, an empty line to quit."
    )

    while session.is_active:
        try:
            text = read("> ")
        except EOFError:
            break
        if not text.strip():
            break
        if text.strip() == "?":
            session.reveal()
            write(f"🗺️  One answer: {_format_path(deps, session.full_paths[0])}")
            break

        outcome = session.guess(text)
        write(f"{_OUTCOME_MESSAGES[outcome]} ({session.found_count}/{session.total_to_find})")

    if session.is_won:
        write(f"🏁 Solved: {_format_path(deps, session.completed_path)}")
        others = session.display_order[1:]
        if others:
            write(f"   {len(others)} other shortest path(s) existed.")
    return session


def main() -> None:
    parser = argparse.ArgumentParser(description="Play a border path puzzle.")
    parser.add_argument("--config", help="Path to a config.yaml file.")
    parser.add_argument("--world", help="Path to an alternative world dataset.")
    parser.add_argument("--seed", type=int, help="Seed for reproducible puzzles.")
    parser.add_argument("--min-length", type=int, help="Shortest accepted path, in countries.")
    parser.add_argument("--max-length", type=int, help="Longest accepted path, in countries.")
    args = parser.parse_args()

    overrides = {
        "puzzle": {
            "min_path_length": args.min_length,
            "max_path_length": args.max_length,
        },
        "world": {"data_path": Path(args.world).resolve() if args.world else None},
    }
    deps = build_dependencies(config=load_config(args.config, overrides=overrides))
    play(deps, seed=args.seed)


if __name__ == "__main__":
    main()
