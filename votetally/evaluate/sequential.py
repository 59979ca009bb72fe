'''Evaluators that operate sequentially on ranked votes.

This hosts instant-runoff voting (:class:`InstantRunoff`) and its
multi-winner generalization, the single transferable vote
(:class:`SingleTransferableVote`). Both count each ballot for its most
preferred candidate still in the race and proceed in rounds, eliminating
the weakest candidate when no one can be declared elected.
'''

import logging
from typing import List, Union, Callable, Sequence
from numbers import Number

import votetally.component.quota
from votetally.candidate import Candidate
from votetally.vote import Vote
from votetally.result import IRVRound, IRVResult
from votetally.result import ElectedCandidate, STVRound, STVResult
from votetally.evaluate.core import Evaluator, prepare, ranked_totals
from votetally.persist import simple_serialization


logger = logging.getLogger(__name__)


@simple_serialization
class InstantRunoff(Evaluator):
    '''Instant-runoff voting (alternative vote).

    In each round, every ballot counts for its highest ranked candidate still
    in the race; ballots ranking none of them are exhausted and ignored.
    A candidate with more than half of the counted ballots wins. Otherwise,
    the candidate with the fewest votes is eliminated; among several such
    candidates, the one listed last in the candidate order goes. When one
    candidate remains, they win without a further round.
    '''
    def evaluate(self,
                 votes: Sequence[Vote],
                 candidates: Sequence[Candidate],
                 ) -> IRVResult:
        index = prepare(votes, candidates)
        remaining = list(index.keys())
        rounds = []
        while len(remaining) > 1:
            counts = {cand_id: 0 for cand_id in remaining}
            for vote in votes:
                first = vote.first_choice(counts)
                if first is not None:
                    counts[first] += 1
            ranked = ranked_totals(counts, index)
            logger.debug('round %d counts: %s', len(rounds) + 1, counts)
            total = sum(counts.values())
            if ranked[0].total > total / 2:
                logger.info('%s has a majority', ranked[0].candidate_id)
                rounds.append(IRVRound(ranked, None))
                return IRVResult(ranked[0].candidate_id, rounds)
            eliminated = ranked[-1].candidate_id
            logger.info('eliminating %s', eliminated)
            rounds.append(IRVRound(ranked, eliminated))
            remaining.remove(eliminated)
        return IRVResult(remaining[0], rounds)


@simple_serialization
class SingleTransferableVote(Evaluator):
    '''Single transferable vote, electing multiple candidates.

    Each ballot starts with a weight of one and counts for its highest ranked
    candidate still in the race. In each round:

    -   Candidates whose weighted total reaches the quota are elected,
        highest total first, as long as seats remain. Ballots counting for
        an elected candidate keep only the surplus fraction of their weight,
        ``(total - quota) / total``, and move on to their next preference.
    -   If no one reaches the quota and there are no more candidates left
        than seats to fill, all of them are elected.
    -   Otherwise, the candidate with the lowest total is eliminated (the
        one listed last in the candidate order among equals) and its
        ballots move on with their weight unchanged.

    :param quota_function: A callable producing the quota threshold from the
        total number of ballots and number of seats. The functions in
        :mod:`votetally.component.quota` can be referred to by their names.
    '''
    def __init__(self,
                 quota_function: Union[str, Callable[[int, int], Number]] = (
                     'droop'
                 ),
                 ):
        self.quota_function = votetally.component.quota.construct(
            quota_function
        )

    def evaluate(self,
                 votes: Sequence[Vote],
                 candidates: Sequence[Candidate],
                 n_seats: int = 1,
                 ) -> STVResult:
        '''Elect candidates by the single transferable vote.

        :param votes: Ballots cast; only their rankings are used.
        :param candidates: Candidates standing.
        :param n_seats: Number of candidates to elect. Capped at the number
            of candidates.
        '''
        index = prepare(votes, candidates)
        n_seats = min(n_seats, len(index))
        quota = self.quota_function(len(votes), n_seats)
        logger.info('quota computed at %g', quota)
        weights = [1.] * len(votes)
        remaining = list(index.keys())
        winners = []
        rounds = []
        while len(winners) < n_seats and remaining:
            round_no = len(rounds) + 1
            totals, holders = self._count(votes, weights, remaining)
            ranked = ranked_totals(totals, index)
            logger.debug('round %d totals: %s', round_no, totals)
            seats_left = n_seats - len(winners)
            reached = [
                item for item in ranked if item.total >= quota
            ][:seats_left]
            eliminated = None
            if reached:
                elected = [item.candidate_id for item in reached]
                logger.info('%s elected by quota', elected)
                for item in reached:
                    surplus_ratio = (
                        (item.total - quota) / item.total if item.total else 0.
                    )
                    for vote_i in holders[item.candidate_id]:
                        weights[vote_i] *= surplus_ratio
            elif len(remaining) <= seats_left:
                elected = [item.candidate_id for item in ranked]
                logger.info('electing all remaining: %s', elected)
            else:
                elected = []
                eliminated = ranked[-1].candidate_id
                logger.info('eliminating %s', eliminated)
                remaining.remove(eliminated)
            for cand_id in elected:
                remaining.remove(cand_id)
                winners.append(
                    ElectedCandidate(cand_id, index[cand_id].name, round_no)
                )
            rounds.append(STVRound(ranked, elected, eliminated, quota))
        return STVResult(winners, rounds, quota)

    @staticmethod
    def _count(votes: Sequence[Vote],
               weights: List[float],
               remaining: List[str],
               ) -> tuple:
        totals = {cand_id: 0. for cand_id in remaining}
        holders = {cand_id: [] for cand_id in remaining}
        for vote_i, vote in enumerate(votes):
            first = vote.first_choice(totals)
            if first is not None:
                totals[first] += weights[vote_i]
                holders[first].append(vote_i)
        return totals, holders
