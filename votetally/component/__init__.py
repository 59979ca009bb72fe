'''Interchangeable building blocks of the tally engines.

Quota functions, rank scorers and pairwise win scorers are looked up by name
from their module registers, so evaluators can take them as plain string
parameters and stay serializable.
'''
