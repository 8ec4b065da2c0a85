"""
Explicit game trees for testing the search.

A tree is written as nested tuples: a tuple is an internal node whose
children are reached by move index, a Score is a leaf, and the empty tuple
is a node where the side to move has no legal move.
"""

import random
from typing import List, Union

from minimax_engine.board.base import Team
from minimax_engine.evaluation.score import BASELINE, Score, TimedScore

Node = Union[tuple, Score]


def H(value: int) -> Score:
    return Score.heuristic(value)


def tree(*children) -> tuple:
    """Build a node, turning bare ints into heuristic leaves."""
    return tuple(H(c) if isinstance(c, int) else c for c in children)


class TreeBoard:
    """Board walking down an explicit tree. Both teams share the same moves."""

    def __init__(self, node: Node):
        self.node = node

    def copy(self) -> "TreeBoard":
        return TreeBoard(self.node)

    def generate_moves(self, team: Team) -> List[int]:
        if isinstance(self.node, tuple):
            return list(range(len(self.node)))
        # Leaves keep a dummy move so they are evaluated, not treated as stuck
        return [0]

    def apply(self, move: int):
        if isinstance(self.node, tuple):
            self.node = self.node[move]

    def static_score(self) -> Score:
        return self.node if isinstance(self.node, Score) else BASELINE

    def is_terminal(self) -> bool:
        return isinstance(self.node, Score)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, TreeBoard) and self.node == other.node

    def __hash__(self) -> int:
        return hash(self.node)

    def __repr__(self) -> str:
        return f"TreeBoard({self.node!r})"


# Three-way root, every leaf four plies down
SCENARIO_A = tree(
    tree(tree(tree(5, 6), tree(7, 4, 5)), tree(tree(3))),
    tree(tree(tree(6), tree(6, 9)), tree(tree(7))),
    tree(tree(tree(5)), tree(tree(9, 8), tree(6))),
)

# Binary tree of depth four with negative leaves
SCENARIO_B = tree(
    tree(tree(tree(12, 10), tree(-18, -7)), tree(tree(6, -17), tree(-3, 6))),
    tree(tree(tree(-19, -16), tree(-4, -6)), tree(tree(-1, 6), tree(9, 15))),
)


def random_tree(rng: random.Random, depth: int, max_branching: int = 3) -> tuple:
    """
    Uniform-depth tree whose leaves all hold distinct values, so no two
    subtrees are equal and no two lines tie.
    """
    values = iter(rng.sample(range(-10_000, 10_000), max_branching ** depth))

    def build(level: int) -> Node:
        if level == depth:
            return H(next(values))
        return tuple(build(level + 1) for _ in range(rng.randint(1, max_branching)))

    return build(0)


def exhaustive_minimax(node: Node, maximizing: bool):
    """
    Plain minimax over a uniform-depth tree of heuristic leaves.

    Returns:
        (best leaf value, index of the first move reaching it)
    """
    if isinstance(node, Score):
        return node.value, None

    values = [exhaustive_minimax(child, not maximizing)[0] for child in node]
    best = max(values) if maximizing else min(values)
    return best, values.index(best)


OUTCOMES = [Score.lose(), Score.win(), H(-1), H(0), H(1)]


def random_outcome_tree(rng: random.Random, depth: int, max_branching: int = 3) -> tuple:
    """
    Ragged tree over a handful of outcomes: Win and Lose leaves, repeated
    heuristic values and stuck positions at every level. Lines to equal
    outcomes differ only in length, so the turn tie-break decides them.
    """

    def build(level: int) -> Node:
        roll = rng.random()
        if level == depth or roll < 0.25:
            return rng.choice(OUTCOMES)
        if roll < 0.35:
            return ()
        return tuple(build(level + 1) for _ in range(rng.randint(1, max_branching)))

    return tuple(build(1) for _ in range(rng.randint(2, max_branching)))


def exhaustive_timed(node: Node, maximizing: bool):
    """
    Plain minimax over TimedScores, no pruning and no cache.

    Returns:
        (best TimedScore, index of the first move reaching it)
    """
    if isinstance(node, Score):
        return TimedScore(node, 0), None
    if not node:
        return TimedScore(Score.lose() if maximizing else Score.win(), 0), None

    best, index = None, None
    for i, child in enumerate(node):
        candidate = exhaustive_timed(child, not maximizing)[0].later()
        if best is None or (candidate > best if maximizing else candidate < best):
            best, index = candidate, i
    return best, index


def height(node: Node) -> int:
    if isinstance(node, Score) or not node:
        return 0
    return 1 + max(height(child) for child in node)


def count_nodes(node: Node) -> int:
    if isinstance(node, Score):
        return 1
    return 1 + sum(count_nodes(child) for child in node)
