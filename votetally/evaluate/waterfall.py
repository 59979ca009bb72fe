'''Ranking of Smith set members by a cascade of tie-breakers.

When the Smith set of an election has more than one member, its members are
ordered by comparing, in turn:

1.  the number of ballots approving of them,
2.  their direct head-to-head result, if one of the two beat the other,
3.  their net head-to-head record (victories minus defeats),
4.  their average head-to-head margin, counting victories as positive and
    defeats as negative margins.

Candidates are identified by name throughout, matching
:func:`votetally.evaluate.condorcet.head_to_head_victories` and
:func:`votetally.evaluate.condorcet.calculate_smith_set`.
'''

import functools
from typing import List, Dict, Optional, Sequence

from votetally.election import Election
from votetally.result import Victory, CandidateScore


def ordinal_suffix(n: int) -> str:
    '''Return the English ordinal suffix for the number (st, nd, rd, th).'''
    if n % 10 == 1 and n % 100 != 11:
        return 'st'
    elif n % 10 == 2 and n % 100 != 12:
        return 'nd'
    elif n % 10 == 3 and n % 100 != 13:
        return 'rd'
    else:
        return 'th'


def _direct_victory(victories: Sequence[Victory],
                    name1: str,
                    name2: str,
                    ) -> Optional[Victory]:
    for vict in victories:
        if {vict.winner, vict.loser} == {name1, name2}:
            return vict
    return None


class _Standing:
    def __init__(self, name: str, victories: Sequence[Victory], election):
        self.name = name
        self.wins = 0
        self.losses = 0
        signed_margins = []
        for vict in victories:
            if vict.winner == name:
                self.wins += 1
                signed_margins.append(vict.margin)
            elif vict.loser == name:
                self.losses += 1
                signed_margins.append(-vict.margin)
        self.net = self.wins - self.losses
        self.margin = (
            sum(signed_margins) / len(signed_margins) if signed_margins else 0
        )
        cand = election.candidate_by_name(name)
        cand_id = cand.id if cand is not None else None
        self.approval = sum(
            1 for vote in election.votes if cand_id in vote.approved
        )

    @property
    def metrics(self) -> Dict[str, float]:
        return {
            'approval': self.approval,
            'head_to_head': self.net,
            'average_margin': self.margin,
        }


def select_winner(smith_set: Sequence[str],
                  victories: Sequence[Victory],
                  election: Election,
                  ) -> List[CandidateScore]:
    '''Rank the Smith set members by the tie-breaking cascade.

    Tied candidates share the rank of the first of them. A candidate is
    marked as tied when it matches its immediate neighbor in the order on
    approvals and net head-to-head record with no direct victory between
    them; the check only looks at adjacent candidates.

    :param smith_set: Names of the Smith set members.
    :param victories: All head-to-head victories of the election.
    :param election: The election, to count approvals from.
    :returns: Standings of the Smith set members, best first.
    '''
    standings = [_Standing(name, victories, election) for name in smith_set]

    def compare(a, b):
        if a.approval != b.approval:
            return b.approval - a.approval
        direct = _direct_victory(victories, a.name, b.name)
        if direct is not None:
            return -1 if direct.winner == a.name else 1
        if a.net != b.net:
            return b.net - a.net
        return b.margin - a.margin

    def indistinct(a, b):
        return (
            a.approval == b.approval
            and _direct_victory(victories, a.name, b.name) is None
            and a.net == b.net
        )

    def deciding_factor(current, previous):
        if current.approval != previous.approval:
            return 'Ranked by approval votes'
        if _direct_victory(victories, current.name, previous.name):
            return 'Ranked by direct head-to-head matchup'
        if current.net != previous.net:
            return 'Ranked by head-to-head record'
        if current.margin != previous.margin:
            return 'Ranked by average victory margin'
        return None

    ordered = sorted(standings, key=functools.cmp_to_key(compare))
    scores = []
    rank = 1
    for i, standing in enumerate(ordered):
        previous = ordered[i-1] if i > 0 else None
        following = ordered[i+1] if i + 1 < len(ordered) else None
        if previous is not None and (
            not indistinct(standing, previous)
            or standing.margin != previous.margin
        ):
            rank = i + 1
        is_tied = (
            (following is not None and indistinct(standing, following))
            or (previous is not None and indistinct(standing, previous))
        )
        lines = [
            ('Tied for ' if is_tied else '')
            + f'{rank}{ordinal_suffix(rank)} place',
            f'Approval Votes: {standing.approval}',
            'Head-to-Head Record: '
            + ('+' if standing.net > 0 else '')
            + f'{standing.net} ({standing.wins} wins, '
            f'{standing.losses} losses)',
            f'Average Victory Margin: {standing.margin:.2f}',
        ]
        factor = (
            deciding_factor(standing, previous)
            if previous is not None else None
        )
        if factor:
            lines.append('\n' + factor)
        if is_tied:
            lines.append('\nNo head-to-head victory between tied candidates')
        scores.append(CandidateScore(
            name=standing.name,
            rank=rank,
            is_tied=is_tied,
            wins=standing.wins,
            losses=standing.losses,
            metrics=standing.metrics,
            description='\n'.join(lines),
        ))
    return scores
