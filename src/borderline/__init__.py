"""
Borderline: a puzzle engine for finding the countries between two countries.
"""

from .generator import GeneratedPuzzle, GenerationFailure, PuzzleGenerator, generate_puzzle
from .graph import AdjacencyGraph, GraphConfigurationError
from .pathfinding import PathSet, compute_distances, enumerate_shortest_paths
from .resolver import NameResolver, TableResolver
from .session import GameSession
from .state import GamePhase, GameState, GuessOutcome

__all__ = [
    "AdjacencyGraph",
    "GameSession",
    "GamePhase",
    "GameState",
    "GeneratedPuzzle",
    "GenerationFailure",
    "GraphConfigurationError",
    "GuessOutcome",
    "NameResolver",
    "PathSet",
    "PuzzleGenerator",
    "TableResolver",
    "compute_distances",
    "enumerate_shortest_paths",
    "generate_puzzle",
]
