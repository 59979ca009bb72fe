'''Functions to score magnitudes of wins between pairs of candidates.

A pairwise win scorer takes a pairwise preference matrix (``matrix[a][b]``
being the number of ballots preferring `a` over `b`) and returns the
strength of every strict pairwise win, keyed by the ``(winner, loser)``
pair. Pairs that are tied or lost do not appear in the output. The pairs
are listed in matrix order, which the Ranked Pairs evaluator relies on to
order wins of equal strength.
'''

from typing import Callable, Dict, Tuple
from numbers import Number

import votetally.component.core


PairStrengthsType = Dict[Tuple[str, str], Number]

PAIRWIN_SCORERS: Dict[str, Callable] = {}


pairwin_scorer_mark, get, construct = \
    votetally.component.core.register_functions(
        PAIRWIN_SCORERS, 'pairwise win scorer'
    )


def _strict_wins(matrix: Dict[str, Dict[str, int]]):
    for winner, row in matrix.items():
        for loser, count in row.items():
            against = matrix[loser].get(winner, 0)
            if count > against:
                yield winner, loser, count, against


@pairwin_scorer_mark
def margins(matrix: Dict[str, Dict[str, int]]) -> PairStrengthsType:
    '''Margins pairwise win scorer: the difference from the reverse count.

    Also called margin of victory or defeat strength.
    '''
    return {
        (winner, loser): count - against
        for winner, loser, count, against in _strict_wins(matrix)
    }


@pairwin_scorer_mark
def winning_votes(matrix: Dict[str, Dict[str, int]]) -> PairStrengthsType:
    '''Winning votes pairwise win scorer: the full count of the winner.'''
    return {
        (winner, loser): count
        for winner, loser, count, against in _strict_wins(matrix)
    }
