'''The election document: a titled list of candidates and cast ballots.

The tally engines themselves take ballots and candidates directly; the
election object is the shape in which an election is stored or exchanged,
and is the input of the name-based pairwise helpers in
:mod:`votetally.evaluate.condorcet` and of
:func:`votetally.evaluate.waterfall.select_winner`.
'''

import datetime
from typing import List, Optional, Sequence

from votetally.persist import simple_serialization
from votetally.candidate import Candidate, index_candidates
from votetally.vote import Vote, BallotValidator


@simple_serialization
class Election:
    '''An election with its candidates and the ballots cast in it.

    :param title: Name of the election.
    :param candidates: Candidates standing, in ballot order.
    :param votes: Ballots cast.
    :param created_at: Creation time as an ISO 8601 string. Current UTC time
        if not given.
    '''
    def __init__(self,
                 title: str,
                 candidates: Sequence[Candidate],
                 votes: Sequence[Vote] = (),
                 created_at: Optional[str] = None,
                 ):
        self.title = title
        self.candidates = list(candidates)
        self.votes = list(votes)
        if created_at is None:
            created_at = datetime.datetime.now(
                datetime.timezone.utc
            ).isoformat()
        self.created_at = created_at
        self._by_id = index_candidates(self.candidates)

    @property
    def candidate_ids(self) -> List[str]:
        return list(self._by_id.keys())

    def candidate(self, candidate_id: str) -> Candidate:
        '''Return the candidate with the given id.

        :raises KeyError: If no such candidate stands.
        '''
        return self._by_id[candidate_id]

    def candidate_by_name(self, name: str) -> Optional[Candidate]:
        '''Return the first candidate with the given name, or None.'''
        for cand in self.candidates:
            if cand.name == name:
                return cand
        return None

    def validate(self) -> None:
        '''Check all ballots against the candidates standing.

        :raises votetally.vote.InvalidBallotError: If a ballot refers to
            an unknown candidate or ranks one twice.
        '''
        BallotValidator(self.candidate_ids).validate_all(self.votes)

    def __repr__(self) -> str:
        return (
            f'<Election({self.title!r},{len(self.candidates)} candidates,'
            f'{len(self.votes)} votes)>'
        )
