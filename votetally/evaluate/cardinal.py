"""Cardinal voting systems - systems that use score votes.

Each ballot may assign a numeric score to any candidate through its `scores`
mapping; candidates it does not score get zero. The evaluators here differ
in how they aggregate the scores:

-   :class:`ScoreVoting` and :class:`Cumulative` sum them,
-   :class:`STAR` sums them and holds a runoff between the top two,
-   :class:`MajorityJudgment` compares median grades,
-   :class:`ReweightedRange` sums them repeatedly, reducing the weight of
    ballots that already helped to elect someone.
"""

import functools
import logging
import statistics
from typing import List, Dict, Iterator, Sequence
from numbers import Number

import votetally.util
from votetally.candidate import Candidate
from votetally.vote import Vote
from votetally.result import TallyResult, CumulativeResult
from votetally.result import Finalist, STARResult
from votetally.result import MedianGrade, MajorityJudgmentResult
from votetally.result import ElectedCandidate, RRVRound, RRVResult
from votetally.evaluate.core import Evaluator, prepare, ranked_totals
from votetally.persist import simple_serialization


logger = logging.getLogger(__name__)

DEFAULT_MAX_SCORE = 10

MJ_MAX_GRADE = 5

MJ_GRADES = ('Reject', 'Poor', 'Acceptable', 'Good', 'Very Good', 'Excellent')


def score_totals(votes: Sequence[Vote],
                 candidate_ids: Sequence[str],
                 ) -> Dict[str, Number]:
    '''Sum the scores each candidate received.'''
    totals = {cand_id: 0 for cand_id in candidate_ids}
    for vote in votes:
        for cand_id in candidate_ids:
            totals[cand_id] += vote.score(cand_id)
    return totals


@simple_serialization
class ScoreVoting(Evaluator):
    """Score voting (range voting): the highest score sum wins."""
    def evaluate(self,
                 votes: Sequence[Vote],
                 candidates: Sequence[Candidate],
                 ) -> TallyResult:
        index = prepare(votes, candidates)
        ranked = ranked_totals(score_totals(votes, list(index.keys())), index)
        return TallyResult(ranked[0].candidate_id, ranked)


@simple_serialization
class Cumulative(Evaluator):
    """Cumulative voting: voters distribute points, the highest sums win.

    The evaluator does not check the number of points each voter used.
    """
    def evaluate(self,
                 votes: Sequence[Vote],
                 candidates: Sequence[Candidate],
                 n_seats: int = 1,
                 ) -> CumulativeResult:
        """Elect the n_seats candidates with the highest point totals.

        :param votes: Ballots cast; only their scores are used.
        :param candidates: Candidates standing.
        :param n_seats: Number of candidates to elect. Capped at the number
            of candidates.
        """
        index = prepare(votes, candidates)
        ranked = ranked_totals(score_totals(votes, list(index.keys())), index)
        return CumulativeResult(ranked[:n_seats], ranked)


@simple_serialization
class STAR(Evaluator):
    """Score Then Automatic Runoff (STAR) voting.

    The two candidates with the highest score sums advance to a runoff, in
    which each ballot supports the finalist it scored higher. Ballots scoring
    both finalists equally support neither. A tied runoff goes to the
    finalist with the higher score sum.
    """
    def evaluate(self,
                 votes: Sequence[Vote],
                 candidates: Sequence[Candidate],
                 ) -> STARResult:
        index = prepare(votes, candidates)
        scoring_round = ranked_totals(
            score_totals(votes, list(index.keys())), index
        )
        finalists = scoring_round[:2]
        runoff = [0] * len(finalists)
        if len(finalists) == 2:
            first_id = finalists[0].candidate_id
            second_id = finalists[1].candidate_id
            for vote in votes:
                first_score = vote.score(first_id)
                second_score = vote.score(second_id)
                if first_score > second_score:
                    runoff[0] += 1
                elif second_score > first_score:
                    runoff[1] += 1
            logger.debug('runoff %s vs %s: %s', first_id, second_id, runoff)
        winner_i = 1 if len(finalists) == 2 and runoff[1] > runoff[0] else 0
        return STARResult(
            finalists[winner_i].candidate_id,
            scoring_round,
            [
                Finalist(item.candidate_id, item.name, count)
                for item, count in zip(finalists, runoff)
            ]
        )


def _successive_medians(grades: List[int]) -> Iterator[int]:
    '''Yield the low medians of sorted grades as each one is removed.

    Removing the low median from a sorted list always leaves the removed
    grades as a contiguous window, so the next median is the grade just
    below the window when an even number of grades remains and the one just
    above it otherwise.
    '''
    if not grades:
        return
    low = high = (len(grades) - 1) // 2
    yield grades[low]
    for n_left in range(len(grades) - 1, 0, -1):
        if n_left % 2 == 0:
            low -= 1
            yield grades[low]
        else:
            high += 1
            yield grades[high]


def compare_grades(grades1: List[int], grades2: List[int]) -> int:
    '''Compare two sorted grade lists by majority judgment.

    Compares the medians, removing the shared median from both lists while
    they are equal.

    :returns: A positive number if the first list is better, negative if the
        second one is, zero if they cannot be told apart.
    '''
    for median1, median2 in zip(
        _successive_medians(grades1), _successive_medians(grades2)
    ):
        if median1 != median2:
            return median1 - median2
    return 0


@simple_serialization
class MajorityJudgment(Evaluator):
    """Majority Judgment, a median-based cardinal voting system.

    Scores are read as grades from 0 (Reject) to 5 (Excellent), rounded and
    clamped into that range; a candidate left ungraded gets 0. Candidates are
    ordered by their low median grade. Ties are broken by removing the shared
    median grade from both candidates' grades until the medians differ;
    candidates with identical grades keep the candidate order.

    :param max_grade: The highest grade.
    """
    def __init__(self, max_grade: int = MJ_MAX_GRADE):
        self.max_grade = max_grade

    def grade(self, score: Number) -> int:
        return int(votetally.util.clamp(
            votetally.util.round_half_up(score), 0, self.max_grade
        ))

    def evaluate(self,
                 votes: Sequence[Vote],
                 candidates: Sequence[Candidate],
                 ) -> MajorityJudgmentResult:
        index = prepare(votes, candidates)
        grades = {
            cand_id: sorted(self.grade(vote.score(cand_id)) for vote in votes)
            for cand_id in index
        }
        order = sorted(
            index.keys(),
            key=functools.cmp_to_key(
                lambda a, b: compare_grades(grades[b], grades[a])
            )
        )
        median_grades = []
        for cand_id in order:
            counts = [0] * (self.max_grade + 1)
            for grade in grades[cand_id]:
                counts[grade] += 1
            median_grades.append(MedianGrade(
                cand_id,
                index[cand_id].name,
                statistics.median_low(grades[cand_id]) if votes else 0,
                counts,
            ))
        return MajorityJudgmentResult(order[0], median_grades)


@simple_serialization
class ReweightedRange(Evaluator):
    """Reweighted range voting (RRV), a proportional score-based system.

    Elects candidates one per round. Each round elects the candidate with the
    highest weighted score sum; then every ballot's weight is divided by
    ``1 + s / max_score``, where `s` is the score it gave to the candidate
    just elected. All weights start at 1.

    :param max_score: The highest score a ballot may give.
    """
    def __init__(self, max_score: Number = DEFAULT_MAX_SCORE):
        self.max_score = max_score

    def evaluate(self,
                 votes: Sequence[Vote],
                 candidates: Sequence[Candidate],
                 n_seats: int = 1,
                 ) -> RRVResult:
        """Elect candidates by reweighted range voting.

        :param votes: Ballots cast; only their scores are used.
        :param candidates: Candidates standing.
        :param n_seats: Number of candidates to elect. Capped at the number
            of candidates.
        """
        index = prepare(votes, candidates)
        weights = [1.] * len(votes)
        remaining = list(index.keys())
        winners = []
        rounds = []
        for round_no in range(1, min(n_seats, len(index)) + 1):
            totals = {cand_id: 0. for cand_id in remaining}
            for vote, weight in zip(votes, weights):
                for cand_id in remaining:
                    totals[cand_id] += weight * vote.score(cand_id)
            ranked = ranked_totals(totals, index)
            winner = ranked[0]
            logger.info('round %d won by %s', round_no, winner.candidate_id)
            winners.append(
                ElectedCandidate(winner.candidate_id, winner.name, round_no)
            )
            rounds.append(RRVRound(winner.candidate_id, winner.name, ranked))
            remaining.remove(winner.candidate_id)
            weights = [
                weight / (1 + vote.score(winner.candidate_id) / self.max_score)
                for vote, weight in zip(votes, weights)
            ]
            logger.debug('weights after round %d: %s', round_no, weights)
        return RRVResult(winners, rounds)
