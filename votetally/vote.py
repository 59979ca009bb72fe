'''Ballot type and ballot validators.

A single :class:`Vote` object carries everything a voter can express, and
each tally engine reads the part it needs:

-   **Ranked** engines (Plurality, IRV, Borda, Condorcet, Ranked Pairs, STV)
    read the `ranking`, a tuple of candidate ids from most to least
    preferred. Candidates may be omitted; an omitted candidate counts as
    less preferred than any ranked one, and two omitted candidates are not
    compared at all.
-   **Approval** engines read the `approved` set of candidate ids.
-   **Cardinal** engines (Score, STAR, Majority Judgment, Cumulative, RRV)
    read the `scores` mapping of candidate ids to numbers. A candidate
    missing from the mapping scores zero.

Ballots are validated against the candidate list before every tally by
:class:`BallotValidator`, which raises a subclass of :class:`VoteError`
for references to unknown candidates, repeated rankings or scores that
are not finite numbers.
'''

import abc
import math
import types
from numbers import Number, Real
from typing import Any, Tuple, FrozenSet, Dict, Iterable, Optional, Mapping
from typing import Collection, Sequence

from votetally.persist import simple_serialization


class VoteError(Exception, metaclass=abc.ABCMeta):
    '''A vote is invalid given the election rules.'''
    pass


class InvalidBallotError(VoteError):
    '''A ballot refers to candidates in an invalid way.

    E.g. a candidate id that is not standing in the election, or the same
    candidate ranked twice.

    :param vote: The ballot found to be invalid.
    :param candidate_id: The offending candidate id.
    :param reason: What is wrong with the reference.
    '''
    def __init__(self,
                 vote: Any,
                 candidate_id: Optional[str] = None,
                 reason: str = 'unknown candidate',
                 ):
        self.vote = vote
        self.candidate_id = candidate_id
        self.reason = reason
        message = f'invalid ballot {vote!r}: {reason}'
        if candidate_id is not None:
            message += f' {candidate_id!r}'
        super().__init__(message)


class VoteValueError(VoteError):
    '''An explicitly given vote value is invalid.

    :param value: Value of the vote that is invalid.
    :param candidate_id: Id of the candidate that the value was given for.
    '''
    def __init__(self, value: Any, candidate_id: Optional[str] = None):
        self.value = value
        self.candidate_id = candidate_id
        message = f'invalid vote value: {value!r}'
        if candidate_id is not None:
            message += f' for candidate {candidate_id!r}'
        super().__init__(message)


RankingType = Tuple[str, ...]
ApprovalType = FrozenSet[str]
ScoresType = Mapping[str, Number]


@simple_serialization
class Vote:
    '''A ballot cast by a single voter.

    The ballot is read-only once created; the constructor copies all its
    inputs.

    :param voter_name: Free-form label of the voter.
    :param ranking: Candidate ids ordered from most to least preferred.
    :param approved: Ids of the candidates the voter approves of.
    :param scores: Mapping of candidate ids to numeric scores, or None if
        the voter gave no scores.
    :param timestamp: Free-form time of casting, such as an ISO 8601 string.
    '''
    def __init__(self,
                 voter_name: str = '',
                 ranking: Iterable[str] = (),
                 approved: Iterable[str] = frozenset(),
                 scores: Optional[Dict[str, Number]] = None,
                 timestamp: str = '',
                 ):
        self.voter_name = voter_name
        self.ranking = tuple(ranking)
        self.approved = frozenset(approved)
        self.scores = (
            None if scores is None else types.MappingProxyType(dict(scores))
        )
        self.timestamp = timestamp

    def first_choice(self, remaining: Optional[Collection[str]] = None
                     ) -> Optional[str]:
        '''Return the most preferred ranked candidate still in the race.

        :param remaining: Ids of the candidates still in the race. If None,
            all candidates are.
        '''
        for cand_id in self.ranking:
            if remaining is None or cand_id in remaining:
                return cand_id
        return None

    def score(self, candidate_id: str) -> Number:
        '''Return the score given to the candidate, zero if not scored.'''
        if self.scores is None:
            return 0
        return self.scores.get(candidate_id, 0)

    def __repr__(self) -> str:
        return f'<Vote({self.voter_name!r},{list(self.ranking)})>'


@simple_serialization
class BallotValidator:
    '''Validate ballots against the candidates standing in the election.

    :param candidate_ids: Ids of the candidates standing.
    :param check_scores: Whether to check that all scores are numeric.
    '''
    def __init__(self,
                 candidate_ids: Sequence[str],
                 check_scores: bool = True,
                 ):
        self.candidate_ids = list(candidate_ids)
        self.check_scores = check_scores
        self._known = frozenset(self.candidate_ids)

    def validate(self, vote: Vote) -> None:
        '''Check that the ballot only refers to standing candidates.

        :raises InvalidBallotError: If the ballot refers to an unknown
            candidate or ranks a candidate twice.
        :raises VoteValueError: If a score is not a finite number.
        '''
        seen = set()
        for cand_id in vote.ranking:
            if cand_id not in self._known:
                raise InvalidBallotError(vote, cand_id)
            if cand_id in seen:
                raise InvalidBallotError(vote, cand_id, 'duplicate ranking of')
            seen.add(cand_id)
        for cand_id in vote.approved:
            if cand_id not in self._known:
                raise InvalidBallotError(vote, cand_id)
        if vote.scores is not None:
            for cand_id, value in vote.scores.items():
                if cand_id not in self._known:
                    raise InvalidBallotError(vote, cand_id)
                if self.check_scores and (
                    isinstance(value, bool) or not isinstance(value, Real)
                    or not math.isfinite(value)
                ):
                    raise VoteValueError(value, cand_id)

    def validate_all(self, votes: Iterable[Vote]) -> None:
        for vote in votes:
            self.validate(vote)
