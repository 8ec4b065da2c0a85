"""
Outcome Model

Scores returned by a board's static evaluation and propagated by the search.

A Score is one of three tiers:
    - Lose: the side searching (Ally) has lost
    - Heuristic(v): an estimate, larger is better for Ally
    - Win: the side searching has won

Lose and Win are absorbing extremes: they compare below and above every
heuristic value, however large.

A TimedScore pairs a Score with the number of plies until it is reached along
the chosen line. When two lines resolve to the same Score the number of plies
breaks the tie, but the direction depends on which side of the neutral
baseline Heuristic(0) the Score lies:

    - below baseline: more turns ranks higher (hold out as long as possible)
    - above baseline: fewer turns ranks higher (cash in the win quickly)
    - at baseline:    turns are ignored
"""

from dataclasses import dataclass
from enum import IntEnum


class Tier(IntEnum):
    """Tier of a score. Declaration order is the comparison order."""
    LOSE = 0
    HEURISTIC = 1
    WIN = 2


@dataclass(frozen=True, order=True)
class Score:
    """
    Totally ordered game outcome.

    Ordering compares the tier first, then the heuristic value. Lose and Win
    always carry a value of 0 so they compare equal to themselves.

    Attributes:
        tier: LOSE, HEURISTIC or WIN
        value: Signed heuristic magnitude (0 unless tier is HEURISTIC)
    """

    tier: Tier
    value: int = 0

    def __post_init__(self):
        if self.tier != Tier.HEURISTIC and self.value != 0:
            raise ValueError(
                f"{self.tier.name} scores carry no value, got {self.value}"
            )

    @classmethod
    def lose(cls) -> "Score":
        return cls(Tier.LOSE)

    @classmethod
    def win(cls) -> "Score":
        return cls(Tier.WIN)

    @classmethod
    def heuristic(cls, value: int) -> "Score":
        return cls(Tier.HEURISTIC, int(value))

    def is_decisive(self) -> bool:
        """True for a forced Win or Lose."""
        return self.tier != Tier.HEURISTIC

    def __neg__(self) -> "Score":
        if self.tier == Tier.WIN:
            return Score.lose()
        if self.tier == Tier.LOSE:
            return Score.win()
        return Score.heuristic(-self.value)

    def __repr__(self) -> str:
        if self.tier == Tier.HEURISTIC:
            return f"Heuristic({self.value})"
        return self.tier.name.capitalize()


LOSE = Score.lose()
WIN = Score.win()
BASELINE = Score.heuristic(0)


@dataclass(frozen=True)
class TimedScore:
    """
    Score augmented with the number of plies until it is reached.

    Equality is structural (score and turns). The ordering operators apply
    the asymmetric turn tie-break described in the module docstring, so two
    baseline scores with different turns are neither equal nor ordered apart:
    a <= b and a >= b both hold.
    """

    score: Score
    turns: int = 0

    def compare(self, other: "TimedScore") -> int:
        """
        Three-way comparison.

        Returns:
            -1 if self ranks below other, 1 if above, 0 if they tie
        """
        if self.score != other.score:
            return -1 if self.score < other.score else 1

        if self.score < BASELINE:
            # Losing: the longer line ranks higher
            return _sign(self.turns - other.turns)
        if self.score > BASELINE:
            # Winning: the shorter line ranks higher
            return _sign(other.turns - self.turns)
        return 0

    def later(self) -> "TimedScore":
        """The same outcome reached one ply further from the root."""
        return TimedScore(self.score, self.turns + 1)

    def sooner(self) -> "TimedScore":
        """
        The same outcome seen from one ply further down the line.

        Used to carry a search bound into a child node, whose turns count
        from the child. Turns may go negative; ordering is unaffected.
        """
        return TimedScore(self.score, self.turns - 1)

    def __lt__(self, other: "TimedScore") -> bool:
        return self.compare(other) < 0

    def __le__(self, other: "TimedScore") -> bool:
        return self.compare(other) <= 0

    def __gt__(self, other: "TimedScore") -> bool:
        return self.compare(other) > 0

    def __ge__(self, other: "TimedScore") -> bool:
        return self.compare(other) >= 0

    def __repr__(self) -> str:
        return f"TimedScore({self.score!r}, turns={self.turns})"


def _sign(x: int) -> int:
    return (x > 0) - (x < 0)
