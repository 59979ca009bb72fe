'''Ballot sets shared by the test modules.'''

import sys
import os

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
from votetally.candidate import Candidate
from votetally.vote import Vote


CANDIDATES = [
    Candidate('1', 'Alice'),
    Candidate('2', 'Bob'),
    Candidate('3', 'Charlie'),
]

VOTES = [
    Vote('V1', ranking=['1', '2', '3'], approved=['1', '2']),
    Vote('V2', ranking=['1', '3', '2'], approved=['1']),
    Vote('V3', ranking=['2', '3', '1'], approved=['2', '3']),
    Vote('V4', ranking=['3', '2', '1'], approved=['3']),
    Vote('V5', ranking=['1', '2', '3'], approved=['1']),
]

LETTER_CANDIDATES = [Candidate(c, c.upper()) for c in 'abcd']


def ranked_votes(*rankings):
    return [
        Vote(f'V{i+1}', ranking=list(ranking))
        for i, ranking in enumerate(rankings)
    ]


def score_votes(*scorings):
    return [
        Vote(f'V{i+1}', scores={
            str(j + 1): score for j, score in enumerate(scoring)
        })
        for i, scoring in enumerate(scorings)
    ]
