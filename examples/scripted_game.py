"""
Example script that plays one puzzle without a terminal.

This script shows how to:
1. Load the bundled world and configuration
2. Generate a reproducible puzzle from a seed
3. Feed guesses to a session and read back its state

Usage:
    python examples/scripted_game.py
"""

import random

from src.borderline.dependencies import build_dependencies
from src.borderline.generator import GenerationFailure


def main():
    deps = build_dependencies()
    session = deps.new_session("demo")
    puzzle = deps.puzzle_generator(rng=random.Random(2024)).generate()
    if isinstance(puzzle, GenerationFailure):
        print(f"No puzzle: {puzzle.reason}")
        return

    session.start(puzzle)
    name = deps.world.display_name
    print(f"From {name(puzzle.start)} to {name(puzzle.end)}")
    print(f"{len(puzzle.paths)} shortest path(s) of {puzzle.path_length} countries")

    # Guess along the last enumerated path to show narrowing.
    for node in puzzle.paths[-1][1:-1]:
        if not session.is_active:
            break
        outcome = session.guess(name(node))
        print(
            f"  {name(node):<30} {outcome.value:<8} "
            f"{len(session.possible_paths)} possible path(s) left"
        )

    print(f"Phase: {session.phase.value}")
    print("Completed:", " -> ".join(name(n) for n in session.completed_path))


if __name__ == "__main__":
    main()
