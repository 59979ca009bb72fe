"""Compute Yee diagrams outlining single-winner voting system behavior.

Yee diagrams lay a grid over the two-dimensional ideology plane and show
who would win in each of its cells. Here the voters are a fixed population
(see :mod:`votetally.generate`); the election in a grid cell is held among
the voters living within :data:`SAMPLE_RADIUS` of the cell center. Where
fewer than :data:`MIN_SAMPLE_VOTERS` voters live, the candidate closest to
the cell center wins. Use :func:`generate_yee_diagram` to produce this.

A good voting system's Yee diagram should closely approximate a Voronoi diagram
over the candidates. (A Voronoi diagram would assign each point of space to the
closest candidate.) [#yee]_ This can be produced by calling :func:`voronoi`.

The diagram grid is a list of rows of winner ids covering 0-1 in both
dimensions; rows go along the y axis and columns along the x axis.

.. [#yee] Warren D. Smith. "Yee Pictures", Range Voting, 2007.
    https://rangevoting.org/IEVS/Pictures.html
"""

import collections
import logging
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

import votetally.system
import votetally.evaluate.condorcet
from votetally.cache import ResultCache, position_digest
from votetally.candidate import Candidate, SpatialCandidate, check_spatial
from votetally.evaluate.core import VotingSystemError
from votetally.evaluate.cardinal import MJ_MAX_GRADE
from votetally.result import YeeDiagram
from votetally.spatial import PositionType
from votetally.spatial import DEFAULT_APPROVAL_THRESHOLD, DEFAULT_MAX_SCORE
from votetally.spatial import distance, voter_preferences, position_of
from votetally.spatial import irv_order, plurality_choice
from votetally.spatial import generate_votes_from_spatial_data
from votetally.system import VotingMethod
from votetally.vote import Vote


logger = logging.getLogger(__name__)

DEFAULT_RESOLUTION = 50

SAMPLE_RADIUS = 0.12

MIN_SAMPLE_VOTERS = 3


def _capped_approval(position: PositionType,
                     candidates: Sequence[SpatialCandidate],
                     threshold: float,
                     ) -> List[str]:
    # Relative approval that leaves at least one candidate unapproved.
    prefs = voter_preferences(position, candidates)
    approved = [prefs[0].candidate_id]
    for pref in prefs[1:]:
        if len(approved) >= len(prefs) - 1:
            break
        if pref.distance <= prefs[0].distance + threshold:
            approved.append(pref.candidate_id)
    return approved


def _most_supported(counts: Dict[str, float]) -> str:
    # max() keeps the first of equal maxima, i.e. the candidate order.
    return max(counts, key=counts.get)


def plurality_winner(positions: Sequence[PositionType],
                     candidates: Sequence[SpatialCandidate],
                     threshold: float = DEFAULT_APPROVAL_THRESHOLD,
                     ) -> str:
    counts = {cand.id: 0 for cand in candidates}
    for pos in positions:
        counts[plurality_choice(pos, candidates)[0]] += 1
    return _most_supported(counts)


def approval_winner(positions: Sequence[PositionType],
                    candidates: Sequence[SpatialCandidate],
                    threshold: float = DEFAULT_APPROVAL_THRESHOLD,
                    ) -> str:
    '''Elect the most approved candidate.

    Each voter approves the closest candidate and any further ones within
    `threshold` of the closest candidate's distance, but never all of them.
    '''
    counts = {cand.id: 0 for cand in candidates}
    for pos in positions:
        for cand_id in _capped_approval(pos, candidates, threshold):
            counts[cand_id] += 1
    return _most_supported(counts)


def borda_winner(positions: Sequence[PositionType],
                 candidates: Sequence[SpatialCandidate],
                 threshold: float = DEFAULT_APPROVAL_THRESHOLD,
                 ) -> str:
    points = {cand.id: 0 for cand in candidates}
    n_cands = len(candidates)
    for pos in positions:
        for i, cand_id in enumerate(irv_order(pos, candidates)):
            points[cand_id] += n_cands - 1 - i
    return _most_supported(points)


def smith_approval_winner(positions: Sequence[PositionType],
                          candidates: Sequence[SpatialCandidate],
                          threshold: float = DEFAULT_APPROVAL_THRESHOLD,
                          ) -> str:
    '''Elect the most approved candidate of the Smith set.

    Approvals are cast as in :func:`approval_winner`, considering only the
    Smith set members.
    '''
    ballots = [Vote(ranking=irv_order(pos, candidates)) for pos in positions]
    members = votetally.evaluate.condorcet.smith_set(
        votetally.evaluate.condorcet.build_pairwise_matrix(ballots, candidates),
        [cand.id for cand in candidates],
    )
    return approval_winner(
        positions,
        [cand for cand in candidates if cand.id in members],
        threshold
    )


SPATIAL_WINNERS: Dict[VotingMethod, Callable[..., str]] = {
    VotingMethod.PLURALITY: plurality_winner,
    VotingMethod.APPROVAL: approval_winner,
    VotingMethod.BORDA: borda_winner,
    VotingMethod.SMITH_APPROVAL: smith_approval_winner,
}


def compute_winner(voters: Sequence[Any],
                   candidates: Sequence[Candidate],
                   method: VotingMethod,
                   approval_threshold: float = DEFAULT_APPROVAL_THRESHOLD,
                   ) -> str:
    '''Determine the winner of an election among voters on the plane.

    Plurality, approval, Borda and Smith set + approval are computed
    directly from the voter positions; the approval-based ones use
    a relative threshold that never approves every candidate. The other
    methods tally the ballots the voters would cast
    (:func:`votetally.spatial.generate_vote_from_position`) with the full
    evaluator; Majority Judgment ballots are graded 0 to 5.

    :param voters: Voters or their positions.
    :param candidates: Candidates with positions.
    :param method: Voting method or its identifier.
    :param approval_threshold: Approval threshold for the approval-based
        methods.
    :raises KeyError: If the method is unknown.
    :raises votetally.evaluate.VotingSystemError: If there are no candidates.
    '''
    method = VotingMethod.parse(method)
    candidates = check_spatial(candidates)
    if not candidates:
        raise VotingSystemError('no candidates')
    positions = [position_of(voter) for voter in voters]
    if method in SPATIAL_WINNERS:
        return SPATIAL_WINNERS[method](
            positions, candidates, approval_threshold
        )
    max_score = (
        MJ_MAX_GRADE if method == VotingMethod.MAJORITY_JUDGMENT
        else DEFAULT_MAX_SCORE
    )
    votes = generate_votes_from_spatial_data(
        positions, candidates, approval_threshold, max_score
    )
    return votetally.system.evaluate(method, votes, candidates).winner


def cell_center(row: int, col: int, resolution: int) -> Tuple[float, float]:
    return ((col + .5) / resolution, (row + .5) / resolution)


def closest_candidate(position: PositionType,
                      candidates: Sequence[SpatialCandidate],
                      ) -> str:
    return voter_preferences(position, candidates)[0].candidate_id


def generate_yee_diagram(voters: Sequence[Any],
                         candidates: Sequence[Candidate],
                         method: VotingMethod,
                         resolution: int = DEFAULT_RESOLUTION,
                         approval_threshold: float = DEFAULT_APPROVAL_THRESHOLD,
                         sample_radius: float = SAMPLE_RADIUS,
                         cache: Optional[ResultCache] = None,
                         ) -> YeeDiagram:
    """Produce a Yee diagram for the voting method.

    :param voters: Voter population, as voters or positions.
    :param candidates: Candidates with positions on the plane.
    :param method: Voting method or its identifier.
    :param resolution: Number of cells along each side of the grid.
        Enlarging this gives more detail but increases computing time.
    :param approval_threshold: Approval threshold for the approval-based
        methods.
    :param sample_radius: Radius around the cell center to take voters from.
    :param cache: A result cache to reuse diagrams from. Diagrams are stored
        under the candidate positions, method, threshold, resolution, sample
        radius and voter positions.
    """
    method = VotingMethod.parse(method)
    candidates = check_spatial(candidates)
    positions = [position_of(voter) for voter in voters]

    def compute():
        return _compute_diagram(
            positions, candidates, method, resolution,
            approval_threshold, sample_radius
        )

    if cache is None:
        return compute()
    key = cache.make_key(
        candidates, method, approval_threshold,
        kind='yee',
        resolution=resolution,
        sample_radius=sample_radius,
        voters=position_digest(positions),
    )
    return cache.get_or_compute(key, compute)


def _compute_diagram(positions: List[PositionType],
                     candidates: List[SpatialCandidate],
                     method: VotingMethod,
                     resolution: int,
                     approval_threshold: float,
                     sample_radius: float,
                     ) -> YeeDiagram:
    logger.info(
        'generating %s Yee diagram, %d voters, %d candidates, resolution %d',
        method.value, len(positions), len(candidates), resolution
    )
    grid = []
    for row in range(resolution):
        grid_row = []
        for col in range(resolution):
            center = cell_center(row, col, resolution)
            nearby = [
                pos for pos in positions
                if distance(pos, center) <= sample_radius
            ]
            if len(nearby) >= MIN_SAMPLE_VOTERS:
                winner = compute_winner(
                    nearby, candidates, method, approval_threshold
                )
            else:
                winner = closest_candidate(center, candidates)
            grid_row.append(winner)
        grid.append(grid_row)
    logger.info('Yee diagram winner distribution: %s', dict(
        collections.Counter(winner for row in grid for winner in row)
    ))
    return YeeDiagram(
        grid, resolution, [cand.id for cand in candidates], method.value
    )


def voronoi(candidates: Sequence[Candidate],
            resolution: int = DEFAULT_RESOLUTION,
            ) -> List[List[str]]:
    """Produce a Voronoi diagram grid for the given candidates.

    This gives the ideal Yee diagram that good voting systems should be
    close to.

    :param candidates: Candidates with positions on the plane.
    :param resolution: Number of cells along each side of the grid.
    """
    candidates = check_spatial(candidates)
    return [
        [
            closest_candidate(cell_center(row, col, resolution), candidates)
            for col in range(resolution)
        ]
        for row in range(resolution)
    ]


def voronoi_matches(grid: List[List[str]],
                    candidates: Sequence[Candidate],
                    ) -> List[List[bool]]:
    """Give a 2D boolean mask how a Yee diagram matches a Voronoi diagram.

    :param grid: A Yee diagram grid of winning candidate ids.
    :param candidates: Candidates with positions on the plane.
    """
    voronoi_grid = voronoi(candidates, resolution=len(grid))
    return [
        [winner == ideal for winner, ideal in zip(row, ideal_row)]
        for row, ideal_row in zip(grid, voronoi_grid)
    ]


def voronoi_conformity(grid: List[List[str]],
                       candidates: Sequence[Candidate],
                       ) -> float:
    """Calculate the share of Yee diagram cells matching the Voronoi diagram.

    :param grid: A Yee diagram grid of winning candidate ids.
    :param candidates: Candidates with positions on the plane.
    :raises VotingSystemError: If the grid has no cells.
    """
    matches = voronoi_matches(grid, candidates)
    n_cells = sum(len(row) for row in matches)
    if not n_cells:
        raise VotingSystemError('cannot compare an empty diagram grid')
    return sum(m for row in matches for m in row) / n_cells
