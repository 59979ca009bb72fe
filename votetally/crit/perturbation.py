"""Perturbation maps: how election outcomes react to voters moving.

A perturbation map takes a voter population and a target candidate and shows
who wins when some of the voters who do not currently prefer the target move
towards it. The persuadable voters (those whose closest candidate is not the
target) are ordered by their distance to the target, closest first, and the
first ones of them are moved.

The map is a square grid: the column index grows with the share of
persuadable voters moved (from none to `max_voter_percent` of them) and the
row index with how far they move (from not at all to all the way to the
target's position).
"""

import logging
from typing import Any, List, Optional, Sequence, Tuple, Union

import votetally.util
from votetally.cache import ResultCache, position_digest
from votetally.candidate import Candidate, SpatialCandidate
from votetally.candidate import CandidateError, check_spatial
from votetally.crit.yee import compute_winner, closest_candidate
from votetally.result import PerturbationMap, PerturbationCell
from votetally.spatial import DEFAULT_APPROVAL_THRESHOLD
from votetally.spatial import Point, PositionType, distance, position_of
from votetally.system import VotingMethod


logger = logging.getLogger(__name__)

DEFAULT_RESOLUTION = 20

DEFAULT_MAX_VOTER_PERCENT = 0.5


class PerturbationConfig:
    '''Setup of a perturbation map.

    :param voters: Voter population, as voters or positions.
    :param candidates: Candidates with positions on the plane.
    :param target_candidate: The candidate voters move towards, or its id.
    :param method: Voting method or its identifier.
    :param resolution: Number of cells along each side of the map.
    :param max_voter_percent: The largest share of persuadable voters to
        move, between 0 and 1.
    :param approval_threshold: Approval threshold for the approval-based
        methods.
    :raises votetally.candidate.CandidateError: If the target is not one of
        the candidates or some candidate has no position.
    :raises KeyError: If the method is unknown.
    '''
    def __init__(self,
                 voters: Sequence[Any],
                 candidates: Sequence[Candidate],
                 target_candidate: Union[str, SpatialCandidate],
                 method: Union[str, VotingMethod],
                 resolution: int = DEFAULT_RESOLUTION,
                 max_voter_percent: float = DEFAULT_MAX_VOTER_PERCENT,
                 approval_threshold: float = DEFAULT_APPROVAL_THRESHOLD,
                 ):
        self.positions = [Point(*position_of(voter)) for voter in voters]
        self.candidates = check_spatial(candidates)
        target_id = getattr(target_candidate, 'id', target_candidate)
        for cand in self.candidates:
            if cand.id == target_id:
                self.target = cand
                break
        else:
            raise CandidateError(target_candidate, 'one of the candidates')
        self.method = VotingMethod.parse(method)
        self.resolution = resolution
        self.max_voter_percent = max_voter_percent
        self.approval_threshold = approval_threshold

    def cell_setup(self, row: int, col: int) -> Tuple[float, float]:
        '''Return the share of persuadable voters moved and the shift size.'''
        if self.resolution > 1:
            fraction_col = col / (self.resolution - 1)
            fraction_row = row / (self.resolution - 1)
        else:
            fraction_col = fraction_row = 0.
        return fraction_col * self.max_voter_percent, fraction_row

    def cache_key(self, cache: ResultCache) -> str:
        return cache.make_key(
            self.candidates, self.method, self.approval_threshold,
            kind='perturbation',
            target=self.target.id,
            resolution=self.resolution,
            max_voter_percent=self.max_voter_percent,
            voters=position_digest(self.positions),
        )


def persuadable_voters(positions: Sequence[PositionType],
                       candidates: Sequence[SpatialCandidate],
                       target: SpatialCandidate,
                       ) -> List[int]:
    '''Find the voters not closest to the target, nearest to it first.

    :returns: Indices of the voters in the positions list.
    '''
    return sorted(
        (
            i for i, pos in enumerate(positions)
            if closest_candidate(pos, candidates) != target.id
        ),
        key=lambda i: distance(positions[i], target.position)
    )


def shift_toward(position: PositionType,
                 target: PositionType,
                 magnitude: float,
                 ) -> Point:
    '''Move a point toward the target; magnitude 1 moves it all the way.'''
    return Point(
        position[0] + (target[0] - position[0]) * magnitude,
        position[1] + (target[1] - position[1]) * magnitude,
    )


def _perturbed_winner(config: PerturbationConfig,
                      persuadable: List[int],
                      voter_percent: float,
                      shift_magnitude: float,
                      ) -> Tuple[str, int]:
    n_shifted = votetally.util.round_half_up(voter_percent * len(persuadable))
    positions = list(config.positions)
    for i in persuadable[:n_shifted]:
        positions[i] = shift_toward(
            positions[i], config.target.position, shift_magnitude
        )
    winner = compute_winner(
        positions, config.candidates, config.method, config.approval_threshold
    )
    return winner, n_shifted


def generate_perturbation_map(config: PerturbationConfig,
                              cache: Optional[ResultCache] = None,
                              ) -> PerturbationMap:
    '''Compute the winners over the perturbation map grid.

    :param config: Setup of the map.
    :param cache: A result cache to reuse maps from.
    '''
    if cache is not None:
        return cache.get_or_compute(
            config.cache_key(cache), lambda: generate_perturbation_map(config)
        )
    persuadable = persuadable_voters(
        config.positions, config.candidates, config.target
    )
    logger.info(
        'generating %s perturbation map toward %s, %d persuadable voters',
        config.method.value, config.target.id, len(persuadable)
    )
    grid = []
    for row in range(config.resolution):
        grid_row = []
        for col in range(config.resolution):
            voter_percent, shift_magnitude = config.cell_setup(row, col)
            grid_row.append(_perturbed_winner(
                config, persuadable, voter_percent, shift_magnitude
            )[0])
        grid.append(grid_row)
    return PerturbationMap(
        grid, config.target.id, config.resolution, config.method.value
    )


def perturbation_cell_info(config: PerturbationConfig,
                           row: int,
                           col: int,
                           ) -> PerturbationCell:
    '''Describe a single cell of the perturbation map.'''
    voter_percent, shift_magnitude = config.cell_setup(row, col)
    winner, n_shifted = _perturbed_winner(
        config,
        persuadable_voters(config.positions, config.candidates, config.target),
        voter_percent,
        shift_magnitude,
    )
    return PerturbationCell(voter_percent, shift_magnitude, winner, n_shifted)
