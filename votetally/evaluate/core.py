'''General evaluator machinery and the simplest single-winner evaluators.

Every evaluator takes the list of ballots (:class:`votetally.vote.Vote`)
and the list of candidates, validates the ballots against the candidates
and returns a result object from :mod:`votetally.result`. The candidate
list order is significant: whenever two candidates are exactly tied, the
one listed first is preferred.
'''

import abc
import logging
from typing import Any, List, Dict, Iterable, Sequence
from numbers import Number

import votetally.util
import votetally.component.rankscore
from votetally.candidate import Candidate, index_candidates
from votetally.vote import Vote, BallotValidator
from votetally.result import CandidateTotal, TallyResult
from votetally.persist import simple_serialization


logger = logging.getLogger(__name__)


class VotingSystemError(Exception):
    '''A voting system with a valid setup ended up in an unresolvable state.'''
    pass


class Evaluator(metaclass=abc.ABCMeta):
    '''Evaluate ballots cast for candidates.

    A root abstract base class for all evaluators.
    '''
    @abc.abstractmethod
    def evaluate(self,
                 votes: Sequence[Vote],
                 candidates: Sequence[Candidate],
                 *args, **kwargs) -> Any:
        '''Evaluate the ballots and return a result object.'''
        raise NotImplementedError


def prepare(votes: Iterable[Vote],
            candidates: Iterable[Candidate],
            ) -> Dict[str, Candidate]:
    '''Validate the election input and index the candidates by id.

    :param votes: Ballots to validate.
    :param candidates: Candidates standing.
    :returns: Candidates keyed by id, in the input order.
    :raises VotingSystemError: If there are no candidates.
    :raises votetally.candidate.CandidateError: If candidate ids repeat.
    :raises votetally.vote.InvalidBallotError: If a ballot refers to an
        unknown candidate or ranks one twice.
    '''
    index = index_candidates(candidates)
    if not index:
        raise VotingSystemError('no candidates')
    BallotValidator(list(index.keys())).validate_all(votes)
    return index


def ranked_totals(totals: Dict[str, Number],
                  index: Dict[str, Candidate],
                  ) -> List[CandidateTotal]:
    '''Convert per-candidate totals to a list sorted highest first.

    Equal totals keep the order of the `totals` dictionary.
    '''
    return [
        CandidateTotal(cand_id, index[cand_id].name, total)
        for cand_id, total in votetally.util.descending_items(totals)
    ]


def plurality_counts(votes: Iterable[Vote],
                     candidate_ids: Iterable[str],
                     ) -> Dict[str, int]:
    '''Count the ballots ranking each candidate first.'''
    counts = {cand_id: 0 for cand_id in candidate_ids}
    for vote in votes:
        first = vote.first_choice()
        if first in counts:
            counts[first] += 1
    return counts


def approval_counts(votes: Iterable[Vote],
                    candidate_ids: Iterable[str],
                    ) -> Dict[str, int]:
    '''Count the ballots approving of each candidate.

    Approvals of candidates outside `candidate_ids` are ignored, so this can
    also count approvals within a subset of the candidates.
    '''
    counts = {cand_id: 0 for cand_id in candidate_ids}
    for vote in votes:
        for cand_id in vote.approved:
            if cand_id in counts:
                counts[cand_id] += 1
    return counts


class TotalsEvaluator(Evaluator):
    '''An evaluator electing the candidate with the highest total.

    Subclasses provide the per-candidate totals through `totals()`.
    '''
    @abc.abstractmethod
    def totals(self,
               votes: Sequence[Vote],
               candidate_ids: List[str],
               ) -> Dict[str, Number]:
        raise NotImplementedError

    def evaluate(self,
                 votes: Sequence[Vote],
                 candidates: Sequence[Candidate],
                 ) -> TallyResult:
        '''Select the candidate with the highest total.

        :param votes: Ballots cast.
        :param candidates: Candidates standing.
        :returns: The winner and all totals, highest first. With no ballots,
            all totals are zero and the first candidate wins.
        '''
        index = prepare(votes, candidates)
        ranked = ranked_totals(self.totals(votes, list(index.keys())), index)
        logger.debug('%s totals: %s', self.__class__.__name__, ranked)
        return TallyResult(ranked[0].candidate_id, ranked)


@simple_serialization
class Plurality(TotalsEvaluator):
    '''Plurality voting (first past the post).

    Each ballot gives one vote to its first-ranked candidate; ballots with an
    empty ranking count for nobody.
    '''
    def totals(self,
               votes: Sequence[Vote],
               candidate_ids: List[str],
               ) -> Dict[str, int]:
        return plurality_counts(votes, candidate_ids)


@simple_serialization
class Approval(TotalsEvaluator):
    '''Approval voting.

    Each ballot gives one vote to every candidate it approves of.
    '''
    def totals(self,
               votes: Sequence[Vote],
               candidate_ids: List[str],
               ) -> Dict[str, int]:
        return approval_counts(votes, candidate_ids)


@simple_serialization
class Borda(TotalsEvaluator):
    '''Borda count.

    Each ballot gives every ranked candidate the points its rank scorer
    assigns to the candidate's position; unranked candidates get nothing.
    With the default scorer, the candidate at position `i` out of `n`
    candidates standing earns ``n - 1 - i`` points.

    :param rank_scorer: Rank scorer to use.
    '''
    def __init__(self,
                 rank_scorer: votetally.component.rankscore.RankScorer = (
                     votetally.component.rankscore.Borda()
                 ),
                 ):
        self.rank_scorer = rank_scorer

    def totals(self,
               votes: Sequence[Vote],
               candidate_ids: List[str],
               ) -> Dict[str, Number]:
        points = self.rank_scorer.scores(len(candidate_ids))
        totals = {cand_id: 0 for cand_id in candidate_ids}
        for vote in votes:
            for rank, cand_id in enumerate(vote.ranking):
                totals[cand_id] += points[rank]
        return totals
