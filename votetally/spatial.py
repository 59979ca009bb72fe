'''Spatial model of voting on a two-dimensional ideology plane.

Voters and candidates are points in the unit square; a voter prefers
candidates closer to them. This module turns voter positions into ballots
(:func:`generate_vote_from_position`) and provides the per-voter choice
functions used by the spatial analyses in :mod:`votetally.crit`.

Two approval rules are used here:

-   :func:`generate_vote_from_position` approves every candidate whose
    distance is within the threshold of the voter's *closest candidate's
    distance* (a relative rule),
-   :func:`approval_within_distance` approves every candidate within the
    threshold distance of the voter (an absolute rule).

Both always approve at least the closest candidate.
'''

import collections
import math
from typing import Any, List, Dict, Callable, Optional, Sequence, Tuple

from votetally.candidate import Candidate, SpatialCandidate, check_spatial
from votetally.election import Election
from votetally.system import VotingMethod
from votetally.util import round_half_up
from votetally.vote import Vote


DEFAULT_APPROVAL_THRESHOLD = 0.3

DEFAULT_MAX_SCORE = 5

MAX_DISTANCE = math.sqrt(2)

Point = collections.namedtuple('Point', ['x', 'y'])

Preference = collections.namedtuple('Preference', ['candidate_id', 'distance'])

PositionType = Tuple[float, float]


def distance(point1: PositionType, point2: PositionType) -> float:
    '''Euclidean distance of two points.'''
    return math.hypot(point2[0] - point1[0], point2[1] - point1[1])


def distance_weight(dist: float, radius: float) -> float:
    '''Weight of a voter at the given distance, falling off quadratically.

    Gives 1 at zero distance and 0 at the radius and beyond.
    '''
    if dist >= radius:
        return 0.
    ratio = dist / radius
    return 1 - ratio * ratio


def voter_preferences(position: PositionType,
                      candidates: Sequence[SpatialCandidate],
                      ) -> List[Preference]:
    '''Order the candidates from the closest to the voter.

    Equidistant candidates keep the candidate order.
    '''
    return sorted(
        (
            Preference(cand.id, distance(position, cand.position))
            for cand in candidates
        ),
        key=lambda pref: pref.distance
    )


def position_of(voter: Any) -> PositionType:
    '''Return the position of a voter, or the voter itself if it is a point.'''
    return getattr(voter, 'position', voter)


def voter_name(position: PositionType) -> str:
    return f'Voter at ({position[0]:.2f}, {position[1]:.2f})'


def generate_vote_from_position(position: PositionType,
                                candidates: Sequence[SpatialCandidate],
                                approval_threshold: float = (
                                    DEFAULT_APPROVAL_THRESHOLD
                                ),
                                max_score: int = DEFAULT_MAX_SCORE,
                                timestamp: str = '',
                                ) -> Vote:
    '''Produce the ballot a voter at the given position would cast.

    The ballot ranks all candidates by distance, approves those within
    `approval_threshold` of the closest candidate's distance and scores each
    candidate ``max_score * (1 - distance / sqrt(2))``, rounded half up, so
    a candidate at the voter's position gets the full score and one at the
    opposite corner of the plane gets zero.

    :param position: Voter position.
    :param candidates: Candidates with positions.
    :param approval_threshold: How much further than the closest candidate
        an approved candidate may be.
    :param max_score: The highest score to give.
    :param timestamp: Time of casting to record on the ballot.
    '''
    prefs = voter_preferences(position, candidates)
    closest = prefs[0].distance if prefs else 0.
    return Vote(
        voter_name=voter_name(position),
        ranking=[pref.candidate_id for pref in prefs],
        approved=[
            pref.candidate_id for pref in prefs
            if pref.distance <= closest + approval_threshold
        ],
        scores={
            pref.candidate_id: round_half_up(
                max_score * (1 - pref.distance / MAX_DISTANCE)
            )
            for pref in prefs
        },
        timestamp=timestamp,
    )


def generate_votes_from_spatial_data(positions: Sequence[PositionType],
                                     candidates: Sequence[Candidate],
                                     approval_threshold: float = (
                                         DEFAULT_APPROVAL_THRESHOLD
                                     ),
                                     max_score: int = DEFAULT_MAX_SCORE,
                                     ) -> List[Vote]:
    '''Produce the ballots of voters, given as voter objects or positions.

    :raises votetally.candidate.CandidateError: If some candidate has no
        position.
    '''
    spatial_cands = check_spatial(candidates)
    return [
        generate_vote_from_position(
            position_of(voter), spatial_cands, approval_threshold, max_score
        )
        for voter in positions
    ]


def create_election_from_spatial_votes(title: str,
                                       candidates: Sequence[Candidate],
                                       positions: Sequence[PositionType],
                                       approval_threshold: float = (
                                           DEFAULT_APPROVAL_THRESHOLD
                                       ),
                                       created_at: Optional[str] = None,
                                       ) -> Election:
    '''Create an election with ballots cast by voters at the positions.'''
    return Election(
        title,
        candidates,
        generate_votes_from_spatial_data(
            positions, candidates, approval_threshold
        ),
        created_at=created_at,
    )


def plurality_choice(position: PositionType,
                     candidates: Sequence[SpatialCandidate],
                     threshold: float = DEFAULT_APPROVAL_THRESHOLD,
                     ) -> List[str]:
    return [voter_preferences(position, candidates)[0].candidate_id]


def approval_within_distance(position: PositionType,
                             candidates: Sequence[SpatialCandidate],
                             threshold: float = DEFAULT_APPROVAL_THRESHOLD,
                             ) -> List[str]:
    '''Approve the candidates within the threshold distance of the voter.

    If no candidate is that close, approve the closest one.
    '''
    prefs = voter_preferences(position, candidates)
    approved = [pref.candidate_id for pref in prefs if pref.distance <= threshold]
    return approved if approved else [prefs[0].candidate_id]


def borda_order(position: PositionType,
                candidates: Sequence[SpatialCandidate],
                threshold: float = DEFAULT_APPROVAL_THRESHOLD,
                ) -> List[str]:
    '''Order the candidates by the Borda points the voter gives them.'''
    prefs = voter_preferences(position, candidates)
    points = {
        pref.candidate_id: len(candidates) - 1 - i
        for i, pref in enumerate(prefs)
    }
    return sorted(points, key=points.get, reverse=True)


def irv_order(position: PositionType,
              candidates: Sequence[SpatialCandidate],
              threshold: float = DEFAULT_APPROVAL_THRESHOLD,
              ) -> List[str]:
    return [
        pref.candidate_id for pref in voter_preferences(position, candidates)
    ]


def _voter_smith_set(position: PositionType,
                     candidates: Sequence[SpatialCandidate],
                     ) -> List[str]:
    order = irv_order(position, candidates)
    defeats = {cand_id: set(order[i+1:]) for i, cand_id in enumerate(order)}
    members = [cand.id for cand in candidates]
    changed = True
    while changed:
        changed = False
        for cand in members:
            if any(
                cand in defeats[other] and other not in defeats[cand]
                for other in members if other != cand
            ):
                members.remove(cand)
                changed = True
                break
    return members


def smith_approval_choice(position: PositionType,
                          candidates: Sequence[SpatialCandidate],
                          threshold: float = DEFAULT_APPROVAL_THRESHOLD,
                          ) -> List[str]:
    '''Approve within the threshold distance among the voter's Smith set.'''
    members = set(_voter_smith_set(position, candidates))
    return approval_within_distance(
        position,
        [cand for cand in candidates if cand.id in members],
        threshold
    )


SPATIAL_CALCULATORS: Dict[VotingMethod, Callable[..., List[str]]] = {
    VotingMethod.PLURALITY: plurality_choice,
    VotingMethod.APPROVAL: approval_within_distance,
    VotingMethod.BORDA: borda_order,
    VotingMethod.IRV: irv_order,
    VotingMethod.SMITH_APPROVAL: smith_approval_choice,
}


def spatial_choice(method: VotingMethod,
                   position: PositionType,
                   candidates: Sequence[SpatialCandidate],
                   threshold: float = DEFAULT_APPROVAL_THRESHOLD,
                   ) -> List[str]:
    '''Return the candidates a voter supports under the method.

    :raises KeyError: If the method has no per-voter calculator.
    '''
    method = VotingMethod.parse(method)
    try:
        calculator = SPATIAL_CALCULATORS[method]
    except KeyError:
        raise KeyError(f'no spatial calculator for {method.value}')
    return calculator(position, candidates, threshold)
