'''Candidate specifications.

Contains the plain election candidate (:class:`Candidate`), its spatial
variant placed on the two-dimensional ideology plane
(:class:`SpatialCandidate`) and the error raised when a candidate list
cannot be used (:class:`CandidateError`).

Candidates are identified by their `id` attribute. Ballots refer to
candidates by id only, and the order of the candidate list passed to the
evaluators matters: exact ties in any tally are resolved in favor of the
candidate listed first.
'''

from __future__ import annotations

from typing import Any, List, Dict, Iterable, Optional, Tuple

from votetally.persist import simple_serialization


class CandidateError(Exception):
    '''A candidate is invalid in the given context.

    E.g. two candidates sharing an id, or a plain candidate given where
    a position on the ideology plane is required.

    :param candidate: Candidate that was found to be invalid.
    :param expected: Definition of a candidate that was expected.
    '''
    def __init__(self, candidate: Any, expected: Any = None):
        self.candidate = candidate
        self.expected = expected
        message = f'invalid candidate: {candidate}'
        if expected:
            message += f', must be {expected}'
        super().__init__(message)


@simple_serialization
class Candidate:
    '''A candidate standing in an election.

    Two candidates are equal if their ids are equal.

    :param id: Identifier of the candidate, unique within the election.
    :param name: Display name of the candidate.
    '''
    def __init__(self, id: str, name: str):
        self.id = id
        self.name = name

    def __eq__(self, other: Any) -> bool:
        return isinstance(other, Candidate) and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return f'<{self.__class__.__name__}({self.id},{self.name})>'


@simple_serialization
class SpatialCandidate(Candidate):
    '''A candidate positioned on the two-dimensional ideology plane.

    :param id: Identifier of the candidate, unique within the election.
    :param name: Display name of the candidate.
    :param x: Horizontal coordinate, between 0 and 1.
    :param y: Vertical coordinate, between 0 and 1.
    :param color: Display color of the candidate, such as ``'#e41a1c'``.
    '''
    def __init__(self,
                 id: str,
                 name: str,
                 x: float,
                 y: float,
                 color: Optional[str] = None,
                 ):
        super().__init__(id, name)
        self.x = x
        self.y = y
        self.color = color

    @property
    def position(self) -> Tuple[float, float]:
        return (self.x, self.y)


def index_candidates(candidates: Iterable[Candidate]) -> Dict[str, Candidate]:
    '''Map candidate ids to candidates, preserving the list order.

    :raises CandidateError: If two candidates share an id.
    '''
    index = {}
    for cand in candidates:
        if cand.id in index:
            raise CandidateError(cand, 'a candidate with a unique id')
        index[cand.id] = cand
    return index


def candidate_ids(candidates: Iterable[Candidate]) -> List[str]:
    return [cand.id for cand in candidates]


def check_spatial(candidates: Iterable[Candidate]) -> List[SpatialCandidate]:
    '''Ensure all candidates have a position on the ideology plane.

    :raises CandidateError: If a candidate is not a
        :class:`SpatialCandidate`.
    '''
    checked = []
    for cand in candidates:
        if not isinstance(cand, SpatialCandidate):
            raise CandidateError(cand, 'a SpatialCandidate')
        checked.append(cand)
    return checked
