'''Result objects returned by the tally engines and spatial analyses.

All results are plain data holders that convert to JSON-ready dictionaries
with their `to_dict()` method and compare equal when their dictionaries do.
Candidates are referred to by id everywhere, except in the name-based
pairwise helpers (:class:`PairwiseResult`, :class:`Victory`,
:class:`CandidateScore`) that mirror how the results are presented.
'''

from numbers import Number
from typing import Any, List, Dict, Optional

from votetally.persist import simple_serialization


MatrixType = Dict[str, Dict[str, int]]


class Result:
    '''Common behavior of result objects.'''

    def __eq__(self, other: Any) -> bool:
        return type(self) is type(other) and self.to_dict() == other.to_dict()

    __hash__ = None

    def __repr__(self) -> str:
        params = self.to_dict()
        del params['class']
        inner = ','.join(f'{key}={val!r}' for key, val in params.items())
        return f'<{self.__class__.__name__}({inner})>'


@simple_serialization
class CandidateTotal(Result):
    '''A candidate's total in a tally: votes, points or weighted score.'''
    def __init__(self, candidate_id: str, name: str, total: Number):
        self.candidate_id = candidate_id
        self.name = name
        self.total = total


def total_of(totals: List[CandidateTotal], candidate_id: str) -> Number:
    for item in totals:
        if item.candidate_id == candidate_id:
            return item.total
    raise KeyError(candidate_id)


@simple_serialization
class TallyResult(Result):
    '''Single winner chosen by the highest total.

    :param winner: Id of the winning candidate.
    :param totals: Totals of all candidates, highest first.
    '''
    def __init__(self, winner: str, totals: List[CandidateTotal]):
        self.winner = winner
        self.totals = totals

    def total_of(self, candidate_id: str) -> Number:
        return total_of(self.totals, candidate_id)


@simple_serialization
class IRVRound(Result):
    '''One counting round of instant-runoff voting.

    :param counts: First-choice counts of the remaining candidates, highest
        first.
    :param eliminated: Id of the candidate eliminated in the round; None in
        the round where a candidate reached a majority.
    '''
    def __init__(self,
                 counts: List[CandidateTotal],
                 eliminated: Optional[str] = None,
                 ):
        self.counts = counts
        self.eliminated = eliminated


@simple_serialization
class IRVResult(Result):
    def __init__(self, winner: str, rounds: List[IRVRound]):
        self.winner = winner
        self.rounds = rounds


@simple_serialization
class CondorcetResult(Result):
    '''Result of a Condorcet election.

    :param winner: Id of the candidate beating all others head to head, or
        the fallback winner if there is none and a fallback was used.
        None if neither is available.
    :param matrix: Pairwise preference matrix; ``matrix[a][b]`` is the
        number of ballots preferring `a` over `b`.
    :param resolved_by: Name of the method that chose the winner when
        there was no Condorcet winner.
    '''
    def __init__(self,
                 winner: Optional[str],
                 matrix: MatrixType,
                 resolved_by: Optional[str] = None,
                 ):
        self.winner = winner
        self.matrix = matrix
        self.resolved_by = resolved_by


@simple_serialization
class SmithApprovalResult(Result):
    '''Approval winner among the Smith set.

    :param winner: Id of the winning candidate.
    :param smith_set: Ids of the Smith set members, in candidate order.
    :param counts: Approval counts of the Smith set members, highest first.
    '''
    def __init__(self,
                 winner: str,
                 smith_set: List[str],
                 counts: List[CandidateTotal],
                 ):
        self.winner = winner
        self.smith_set = smith_set
        self.counts = counts


@simple_serialization
class LockedPair(Result):
    def __init__(self, winner: str, loser: str, margin: Number):
        self.winner = winner
        self.loser = loser
        self.margin = margin


@simple_serialization
class RankedPairsResult(Result):
    def __init__(self,
                 winner: str,
                 matrix: MatrixType,
                 locked_pairs: List[LockedPair],
                 ):
        self.winner = winner
        self.matrix = matrix
        self.locked_pairs = locked_pairs


@simple_serialization
class ElectedCandidate(Result):
    '''A candidate elected in a multi-winner method.

    :param candidate_id: Id of the elected candidate.
    :param name: Name of the elected candidate.
    :param round: Number of the counting round (from 1) in which the
        candidate was elected.
    '''
    def __init__(self, candidate_id: str, name: str, round: int):
        self.candidate_id = candidate_id
        self.name = name
        self.round = round


class MultiWinnerResult(Result):
    @property
    def winner(self) -> Optional[str]:
        '''Id of the first elected candidate.'''
        if not self.winners:
            return None
        return self.winners[0].candidate_id

    @property
    def winner_ids(self) -> List[str]:
        return [elected.candidate_id for elected in self.winners]


@simple_serialization
class STVRound(Result):
    '''One counting round of the single transferable vote.

    :param counts: Weighted first-choice counts of the candidates remaining
        at the start of the round, highest first.
    :param elected: Ids of the candidates elected in the round.
    :param eliminated: Id of the candidate eliminated in the round, if any.
    :param quota: The quota of votes needed to get elected.
    '''
    def __init__(self,
                 counts: List[CandidateTotal],
                 elected: List[str],
                 eliminated: Optional[str],
                 quota: Number,
                 ):
        self.counts = counts
        self.elected = elected
        self.eliminated = eliminated
        self.quota = quota


@simple_serialization
class STVResult(MultiWinnerResult):
    def __init__(self,
                 winners: List[ElectedCandidate],
                 rounds: List[STVRound],
                 quota: Number,
                 ):
        self.winners = winners
        self.rounds = rounds
        self.quota = quota


@simple_serialization
class RRVRound(Result):
    '''One round of reweighted range voting.

    :param winner_id: Id of the candidate winning the round.
    :param winner_name: Name of the candidate winning the round.
    :param weighted_scores: Weighted score totals of the candidates
        remaining at the start of the round, highest first.
    '''
    def __init__(self,
                 winner_id: str,
                 winner_name: str,
                 weighted_scores: List[CandidateTotal],
                 ):
        self.winner_id = winner_id
        self.winner_name = winner_name
        self.weighted_scores = weighted_scores


@simple_serialization
class RRVResult(MultiWinnerResult):
    def __init__(self,
                 winners: List[ElectedCandidate],
                 rounds: List[RRVRound],
                 ):
        self.winners = winners
        self.rounds = rounds


@simple_serialization
class Finalist(Result):
    def __init__(self, candidate_id: str, name: str, runoff_votes: int):
        self.candidate_id = candidate_id
        self.name = name
        self.runoff_votes = runoff_votes


@simple_serialization
class STARResult(Result):
    '''Result of score-then-automatic-runoff voting.

    :param winner: Id of the runoff winner.
    :param scoring_round: Score totals of all candidates, highest first.
    :param finalists: The two highest scoring candidates with the number
        of ballots preferring each of them to the other.
    '''
    def __init__(self,
                 winner: str,
                 scoring_round: List[CandidateTotal],
                 finalists: List[Finalist],
                 ):
        self.winner = winner
        self.scoring_round = scoring_round
        self.finalists = finalists


@simple_serialization
class MedianGrade(Result):
    '''A candidate's grade profile in majority judgment.

    :param candidate_id: Id of the candidate.
    :param name: Name of the candidate.
    :param median_grade: The (lower) median grade, 0 to 5.
    :param grade_counts: Number of ballots giving each grade, from 0 up.
    '''
    def __init__(self,
                 candidate_id: str,
                 name: str,
                 median_grade: int,
                 grade_counts: List[int],
                 ):
        self.candidate_id = candidate_id
        self.name = name
        self.median_grade = median_grade
        self.grade_counts = grade_counts


@simple_serialization
class MajorityJudgmentResult(Result):
    def __init__(self, winner: str, median_grades: List[MedianGrade]):
        self.winner = winner
        self.median_grades = median_grades


@simple_serialization
class CumulativeResult(Result):
    '''Result of cumulative voting.

    :param winners: Totals of the elected candidates, highest first.
    :param totals: Totals of all candidates, highest first.
    '''
    def __init__(self,
                 winners: List[CandidateTotal],
                 totals: List[CandidateTotal],
                 ):
        self.winners = winners
        self.totals = totals

    @property
    def winner(self) -> Optional[str]:
        if not self.winners:
            return None
        return self.winners[0].candidate_id

    @property
    def winner_ids(self) -> List[str]:
        return [item.candidate_id for item in self.winners]


@simple_serialization
class PairwiseResult(Result):
    '''Head-to-head vote counts of two candidates, identified by name.'''
    def __init__(self,
                 candidate1: str,
                 candidate2: str,
                 votes1: int,
                 votes2: int,
                 ):
        self.candidate1 = candidate1
        self.candidate2 = candidate2
        self.votes1 = votes1
        self.votes2 = votes2


@simple_serialization
class Victory(Result):
    '''A strict head-to-head win of one candidate over another, by name.'''
    def __init__(self, winner: str, loser: str, margin: int):
        self.winner = winner
        self.loser = loser
        self.margin = margin


@simple_serialization
class CandidateScore(Result):
    '''Final standing of a Smith set member after tie-breaking.

    :param name: Name of the candidate.
    :param rank: Rank from 1; tied candidates share a rank.
    :param is_tied: Whether the candidate is tied with a neighbor in the
        final order.
    :param wins: Number of head-to-head victories.
    :param losses: Number of head-to-head defeats.
    :param metrics: Values used for ranking: ``approval``,
        ``head_to_head`` (wins minus losses) and ``average_margin``.
    :param description: Human-readable explanation of the standing.
    '''
    def __init__(self,
                 name: str,
                 rank: int,
                 is_tied: bool,
                 wins: int,
                 losses: int,
                 metrics: Dict[str, Number],
                 description: str,
                 ):
        self.name = name
        self.rank = rank
        self.is_tied = is_tied
        self.wins = wins
        self.losses = losses
        self.metrics = metrics
        self.description = description


@simple_serialization
class YeeDiagram(Result):
    '''Winners over a square grid of the ideology plane.

    :param grid: Rows of winner ids; ``grid[row][col]`` is the winner for
        the cell centred at ``((col + .5) / resolution,
        (row + .5) / resolution)``.
    :param resolution: Number of cells along each side.
    :param candidates: Ids of the candidates taking part.
    :param method: Name of the voting method used.
    '''
    def __init__(self,
                 grid: List[List[str]],
                 resolution: int,
                 candidates: List[str],
                 method: str,
                 ):
        self.grid = grid
        self.resolution = resolution
        self.candidates = candidates
        self.method = method


@simple_serialization
class PerturbationMap(Result):
    '''Winners as persuadable voters move towards a target candidate.

    :param grid: Rows of winner ids; the column index grows with the share
        of persuadable voters moved, the row index with the distance they
        move.
    :param target_candidate_id: Id of the candidate the voters move to.
    :param resolution: Number of cells along each side.
    :param method: Name of the voting method used.
    '''
    def __init__(self,
                 grid: List[List[str]],
                 target_candidate_id: str,
                 resolution: int,
                 method: str,
                 ):
        self.grid = grid
        self.target_candidate_id = target_candidate_id
        self.resolution = resolution
        self.method = method


@simple_serialization
class PerturbationCell(Result):
    def __init__(self,
                 voter_percent: float,
                 shift_magnitude: float,
                 winner: str,
                 voters_shifted: int,
                 ):
        self.voter_percent = voter_percent
        self.shift_magnitude = shift_magnitude
        self.winner = winner
        self.voters_shifted = voters_shifted
