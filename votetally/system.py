"""Named voting systems and dispatch by voting method.

Each method supported by votetally is a member of the :class:`VotingMethod`
enumeration, whose values are the method identifiers used in stored
elections and visualization settings (``'plurality'``, ``'smithApproval'``,
``'rankedPairs'``...). The `SYSTEMS` register maps every member to
a :class:`VotingSystem` wrapping the evaluator that implements it, so
adding a method means adding an enumeration member and a register entry.
"""

import enum
from typing import Any, Dict, Sequence, Union

import votetally.evaluate
import votetally.evaluate.cardinal
import votetally.evaluate.condorcet
import votetally.evaluate.sequential
from votetally.candidate import Candidate
from votetally.vote import Vote
from votetally.persist import simple_serialization


class VotingMethod(str, enum.Enum):
    PLURALITY = 'plurality'
    APPROVAL = 'approval'
    IRV = 'irv'
    BORDA = 'borda'
    CONDORCET = 'condorcet'
    SMITH_APPROVAL = 'smithApproval'
    RANKED_PAIRS = 'rankedPairs'
    STV = 'stv'
    RRV = 'rrv'
    STAR = 'star'
    SCORE = 'score'
    MAJORITY_JUDGMENT = 'majorityJudgment'
    CUMULATIVE = 'cumulative'

    @classmethod
    def parse(cls, method: Union[str, 'VotingMethod']) -> 'VotingMethod':
        '''Return the method member for its identifier.

        :raises KeyError: If there is no such method.
        '''
        try:
            return cls(method)
        except ValueError:
            raise KeyError(f'unknown voting method: {method}')


MULTI_WINNER_METHODS = frozenset([
    VotingMethod.STV, VotingMethod.RRV, VotingMethod.CUMULATIVE
])


@simple_serialization
class VotingSystem:
    """A named voting system. Wraps an election evaluator.

    :param name: Human-readable name of the system.
    :param evaluator: Evaluator implementing the system.
    """
    def __init__(self, name: str, evaluator: votetally.evaluate.Evaluator):
        self.name = name
        self.evaluator = evaluator

    def evaluate(self, *args, **kwargs):
        """Return the evaluator's results of the system for the votes given."""
        return self.evaluator.evaluate(*args, **kwargs)


SYSTEMS: Dict[VotingMethod, VotingSystem] = {
    VotingMethod.PLURALITY: VotingSystem(
        'Plurality', votetally.evaluate.Plurality()
    ),
    VotingMethod.APPROVAL: VotingSystem(
        'Approval', votetally.evaluate.Approval()
    ),
    VotingMethod.IRV: VotingSystem(
        'Instant Runoff', votetally.evaluate.sequential.InstantRunoff()
    ),
    VotingMethod.BORDA: VotingSystem(
        'Borda Count', votetally.evaluate.Borda()
    ),
    VotingMethod.CONDORCET: VotingSystem(
        'Condorcet', votetally.evaluate.condorcet.CondorcetWinner(
            fallback=votetally.evaluate.sequential.InstantRunoff()
        )
    ),
    VotingMethod.SMITH_APPROVAL: VotingSystem(
        'Smith Set + Approval', votetally.evaluate.condorcet.SmithApproval()
    ),
    VotingMethod.RANKED_PAIRS: VotingSystem(
        'Ranked Pairs', votetally.evaluate.condorcet.RankedPairs()
    ),
    VotingMethod.STV: VotingSystem(
        'Single Transferable Vote',
        votetally.evaluate.sequential.SingleTransferableVote()
    ),
    VotingMethod.RRV: VotingSystem(
        'Reweighted Range Voting',
        votetally.evaluate.cardinal.ReweightedRange()
    ),
    VotingMethod.STAR: VotingSystem(
        'STAR Voting', votetally.evaluate.cardinal.STAR()
    ),
    VotingMethod.SCORE: VotingSystem(
        'Score Voting', votetally.evaluate.cardinal.ScoreVoting()
    ),
    VotingMethod.MAJORITY_JUDGMENT: VotingSystem(
        'Majority Judgment', votetally.evaluate.cardinal.MajorityJudgment()
    ),
    VotingMethod.CUMULATIVE: VotingSystem(
        'Cumulative Voting', votetally.evaluate.cardinal.Cumulative()
    ),
}


def get(method: Union[str, VotingMethod]) -> VotingSystem:
    '''Return the voting system for the method or its identifier.

    :raises KeyError: If there is no such method.
    '''
    return SYSTEMS[VotingMethod.parse(method)]


def evaluate(method: Union[str, VotingMethod],
             votes: Sequence[Vote],
             candidates: Sequence[Candidate],
             **params: Any) -> Any:
    '''Tally the ballots by the given method.

    :param method: The voting method or its identifier.
    :param votes: Ballots cast.
    :param candidates: Candidates standing.
    :param params: Method parameters; the multi-winner methods (STV, RRV,
        cumulative voting) accept `n_seats`.
    :raises KeyError: If there is no such method.
    '''
    return get(method).evaluate(votes, candidates, **params)
