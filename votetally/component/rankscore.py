'''Objects to assign scores to ranks in ranked voting systems such as Borda.

A rank scorer returns a list of numerical scores to be assigned to ranks given
by voters. Candidates left unranked on a ballot get no points from it.
'''

import abc
from typing import List
from numbers import Number

from votetally.persist import simple_serialization


class RankScorer(metaclass=abc.ABCMeta):
    '''An abstract base class for rank scorers.

    Rank scorers must provide a `scores()` method that returns a list of
    scores for the ranks from the best one down, given the number of
    candidates standing.
    '''
    @abc.abstractmethod
    def scores(self, n_candidates: int) -> List[Number]:
        raise NotImplementedError


@simple_serialization
class Borda(RankScorer):
    '''Borda rank scorer.

    The candidate ranked at (zero-based) position `i` out of `n` candidates
    gets ``n - 1 - i + base`` points.

    :param base: The score for the lowest possible rank. Zero by default,
        so the top rank earns the number of candidates minus one.
    '''
    def __init__(self, base: int = 0):
        self.base = base

    def scores(self, n_candidates: int) -> List[int]:
        return [
            n_candidates - 1 - rank + self.base
            for rank in range(n_candidates)
        ]


@simple_serialization
class Dowdall(RankScorer):
    '''Dowdall (Nauru) rank scorer.

    Assigns the numbers of the harmonic series (1, 1/2, 1/3...) to
    progressively lower ranks.
    '''
    def scores(self, n_candidates: int) -> List[float]:
        return [1 / (rank + 1) for rank in range(n_candidates)]
