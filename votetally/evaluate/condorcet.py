'''Condorcet evaluators and pairwise comparison tools.

These evaluators work by examining pairwise orderings between candidates:
how many ballots rank one candidate ahead of another. A candidate ranked on
a ballot is ahead of every candidate the ballot leaves unranked, while two
unranked candidates are not compared at all.

The id-based tools (:func:`build_pairwise_matrix`,
:func:`condorcet_winner`, :func:`smith_set`) serve the evaluators.
The name-based tools (:func:`pairwise_results`,
:func:`head_to_head_victories`, :func:`calculate_smith_set`) work on
a whole :class:`votetally.election.Election` and feed the tie-breaking
ranking in :mod:`votetally.evaluate.waterfall`.

The two Smith set functions treat pairwise ties differently. The
:func:`smith_set` requires every outside candidate to be strictly beaten by
some member, so ties can pull more candidates in; :func:`calculate_smith_set`
only excludes candidates beaten by someone they cannot beat back through
a chain of victories. With no pairwise ties the two are identical.
'''

import collections
import logging
from typing import List, Dict, Union, Callable, Optional, Sequence, Iterable

import votetally.component.pairwin_scorer
from votetally.candidate import Candidate
from votetally.election import Election
from votetally.vote import Vote
from votetally.result import MatrixType, CondorcetResult, SmithApprovalResult
from votetally.result import LockedPair, RankedPairsResult
from votetally.result import PairwiseResult, Victory
from votetally.evaluate.core import Evaluator, prepare, ranked_totals
from votetally.evaluate.core import approval_counts
from votetally.persist import simple_serialization


logger = logging.getLogger(__name__)


def build_pairwise_matrix(votes: Iterable[Vote],
                          candidates: Sequence[Candidate],
                          ) -> MatrixType:
    '''Count the ballots preferring each candidate to each other one.

    :param votes: Ballots cast.
    :param candidates: Candidates standing.
    :returns: A nested dictionary where ``matrix[a][b]`` is the number of
        ballots ranking `a` ahead of `b`, with rows and columns in candidate
        order. The diagonal is left out.
    '''
    ids = [cand.id for cand in candidates]
    matrix = {a: {b: 0 for b in ids if b != a} for a in ids}
    for vote in votes:
        ranked = vote.ranking
        unranked = [cand_id for cand_id in ids if cand_id not in ranked]
        for i, upper in enumerate(ranked):
            row = matrix[upper]
            for lower in ranked[i+1:]:
                row[lower] += 1
            for lower in unranked:
                row[lower] += 1
    return matrix


def _beats(matrix: MatrixType, a: str, b: str) -> bool:
    return matrix[a].get(b, 0) > matrix[b].get(a, 0)


def condorcet_winner(matrix: MatrixType,
                     candidate_ids: Optional[Sequence[str]] = None,
                     ) -> Optional[str]:
    '''Find the candidate beating all others head to head.

    :param matrix: Pairwise preference matrix from
        :func:`build_pairwise_matrix`.
    :param candidate_ids: Candidates to consider, in order. All candidates
        in the matrix by default.
    :returns: Id of the Condorcet winner, or None if there is none.
    '''
    ids = list(matrix.keys()) if candidate_ids is None else candidate_ids
    for cand in ids:
        if all(_beats(matrix, cand, other) for other in ids if other != cand):
            return cand
    return None


def smith_set(matrix: MatrixType,
              candidate_ids: Optional[Sequence[str]] = None,
              ) -> List[str]:
    '''Find the Smith set from the pairwise preference matrix.

    Builds the graph of strict pairwise defeats, splits it into strongly
    connected components (Kosaraju's algorithm) and returns the first
    component whose members jointly beat every outside candidate, or all
    candidates if there is no such component.

    :param matrix: Pairwise preference matrix from
        :func:`build_pairwise_matrix`.
    :param candidate_ids: Candidates to consider, in order. All candidates
        in the matrix by default.
    :returns: Ids of the Smith set members, in candidate order.
    '''
    ids = list(matrix.keys()) if candidate_ids is None else list(candidate_ids)
    beats = {
        a: [b for b in ids if b != a and _beats(matrix, a, b)]
        for a in ids
    }
    if not any(beats.values()):
        return ids
    finished = []
    visited = set()

    def visit(node):
        visited.add(node)
        for target in beats[node]:
            if target not in visited:
                visit(target)
        finished.append(node)

    for node in ids:
        if node not in visited:
            visit(node)
    beaten_by = {node: [] for node in ids}
    for winner, losers in beats.items():
        for loser in losers:
            beaten_by[loser].append(winner)
    assigned = set()

    def collect(node, component):
        assigned.add(node)
        component.add(node)
        for source in beaten_by[node]:
            if source not in assigned:
                collect(source, component)

    for node in reversed(finished):
        if node in assigned:
            continue
        component = set()
        collect(node, component)
        if all(
            any(outsider in beats[member] for member in component)
            for outsider in ids if outsider not in component
        ):
            return [cand for cand in ids if cand in component]
    return ids


def _prefers(ranking: Sequence[str], a: str, b: str) -> Optional[bool]:
    try:
        pos_a = ranking.index(a)
    except ValueError:
        pos_a = None
    try:
        pos_b = ranking.index(b)
    except ValueError:
        pos_b = None
    if pos_a is None and pos_b is None:
        return None
    elif pos_a is None:
        return False
    elif pos_b is None:
        return True
    else:
        return pos_a < pos_b


def pairwise_results(election: Election) -> List[PairwiseResult]:
    '''Compare every pair of candidates of the election head to head.

    :param election: The election to examine.
    :returns: One result per unordered pair of candidates, in candidate
        order, with the candidates identified by name.
    '''
    cands = election.candidates
    results = []
    for i, first in enumerate(cands):
        for second in cands[i+1:]:
            votes1 = votes2 = 0
            for vote in election.votes:
                prefers = _prefers(vote.ranking, first.id, second.id)
                if prefers is True:
                    votes1 += 1
                elif prefers is False:
                    votes2 += 1
            results.append(
                PairwiseResult(first.name, second.name, votes1, votes2)
            )
    return results


def head_to_head_victories(results: Iterable[PairwiseResult]
                           ) -> List[Victory]:
    '''Extract strict head-to-head victories, ordered by winner name.

    Tied pairs produce no victory.
    '''
    victories = []
    for res in results:
        if res.votes1 > res.votes2:
            victories.append(
                Victory(res.candidate1, res.candidate2, res.votes1 - res.votes2)
            )
        elif res.votes2 > res.votes1:
            victories.append(
                Victory(res.candidate2, res.candidate1, res.votes2 - res.votes1)
            )
    return sorted(victories, key=lambda vict: vict.winner)


def calculate_smith_set(victories: Sequence[Victory],
                        election: Election,
                        ) -> List[str]:
    '''Find the Smith set from head-to-head victories by reachability.

    A candidate belongs to the set if there are no victories at all, if it
    reaches every other candidate through a chain of victories, or if it is
    not beaten by any candidate it cannot reach.

    :param victories: Victories from :func:`head_to_head_victories`.
    :param election: The election the victories come from.
    :returns: Names of the Smith set members, sorted.
    '''
    names = [cand.name for cand in election.candidates]
    if not victories:
        return sorted(names)
    beats = collections.defaultdict(set)
    for vict in victories:
        beats[vict.winner].add(vict.loser)
    members = []
    for name in names:
        reached = _reachable(beats, name)
        unreached = [
            other for other in names if other != name and other not in reached
        ]
        if not any(name in beats[other] for other in unreached):
            members.append(name)
    return sorted(members)


def _reachable(beats: Dict[str, set], source: str) -> set:
    reached = set()
    front = [source]
    while front:
        current = front.pop()
        for loser in beats[current]:
            if loser not in reached:
                reached.add(loser)
                front.append(loser)
    return reached


@simple_serialization
class CondorcetWinner(Evaluator):
    '''Condorcet winner evaluator.

    Selects the candidate that beats all other candidates head to head.
    Without a fallback, the result names no winner when there is no such
    candidate; with one, the fallback evaluator's winner is taken.

    :param fallback: Evaluator to select the winner when there is no
        Condorcet winner, such as
        :class:`votetally.evaluate.sequential.InstantRunoff`.
    '''
    def __init__(self, fallback: Optional[Evaluator] = None):
        self.fallback = fallback

    def evaluate(self,
                 votes: Sequence[Vote],
                 candidates: Sequence[Candidate],
                 ) -> CondorcetResult:
        index = prepare(votes, candidates)
        matrix = build_pairwise_matrix(votes, list(index.values()))
        winner = condorcet_winner(matrix, list(index.keys()))
        if winner is None and self.fallback is not None:
            fallback_name = self.fallback.__class__.__name__
            logger.info('no Condorcet winner, resolving by %s', fallback_name)
            return CondorcetResult(
                self.fallback.evaluate(votes, candidates).winner,
                matrix,
                resolved_by=fallback_name,
            )
        return CondorcetResult(winner, matrix)


@simple_serialization
class SmithApproval(Evaluator):
    '''Smith set + approval evaluator.

    Narrows the field to the Smith set (see :func:`smith_set`) and elects the
    most approved candidate in it. Approvals of candidates outside the set
    are disregarded.
    '''
    def evaluate(self,
                 votes: Sequence[Vote],
                 candidates: Sequence[Candidate],
                 ) -> SmithApprovalResult:
        index = prepare(votes, candidates)
        matrix = build_pairwise_matrix(votes, list(index.values()))
        members = smith_set(matrix, list(index.keys()))
        logger.debug('Smith set: %s', members)
        counts = ranked_totals(approval_counts(votes, members), index)
        return SmithApprovalResult(counts[0].candidate_id, members, counts)


@simple_serialization
class RankedPairs(Evaluator):
    '''Tideman's ranked pairs Condorcet evaluator.

    Ranks pairwise wins by their magnitude and sequentially locks them in
    descending order, skipping any pair whose loser already reaches its
    winner through locked pairs (which would create a cycle). The winner is
    the candidate with no locked defeat. Pairwise wins of equal magnitude
    keep the candidate order.

    :param pairwin_scoring: A pairwise win scorer callable. The variants in
        the :mod:`votetally.component.pairwin_scorer` module can be referred
        to by their names.
    '''
    def __init__(self,
                 pairwin_scoring: Union[str, Callable] = 'margins',
                 ):
        self.pairwin_scoring = votetally.component.pairwin_scorer.construct(
            pairwin_scoring
        )

    def evaluate(self,
                 votes: Sequence[Vote],
                 candidates: Sequence[Candidate],
                 ) -> RankedPairsResult:
        index = prepare(votes, candidates)
        matrix = build_pairwise_matrix(votes, list(index.values()))
        strengths = self.pairwin_scoring(matrix)
        pairs = sorted(strengths, key=strengths.get, reverse=True)
        locked = self._lock_pairs(pairs)
        defeated = {loser for winner, loser in locked}
        winner = next(cand for cand in index if cand not in defeated)
        return RankedPairsResult(
            winner,
            matrix,
            [
                LockedPair(
                    pair_winner,
                    loser,
                    matrix[pair_winner][loser] - matrix[loser][pair_winner],
                )
                for pair_winner, loser in locked
            ]
        )

    @classmethod
    def _lock_pairs(cls, pairs: List[tuple]) -> List[tuple]:
        locked_pairs = []
        for pair in pairs:
            if not cls._is_path(locked_pairs, pair[1], pair[0]):
                locked_pairs.append(pair)
        return locked_pairs

    @staticmethod
    def _is_path(pairs: List[tuple], source: str, sink: str) -> bool:
        visited = set([source])
        while True:
            last_len = len(visited)
            for from_cand, to_cand in pairs:
                if from_cand in visited and to_cand not in visited:
                    visited.add(to_cand)
                    if to_cand == sink:
                        return True
            if len(visited) == last_len:
                return False
