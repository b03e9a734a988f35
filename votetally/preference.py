'''Pairwise preferences and their path algebra.

A :class:`Preference` is a directed path through candidates whose every edge
carries a weight - initially, the number of voters preferring the edge's
origin to its destination. The strength of a path is its weakest edge. Two
paths can be joined end to start by :func:`compose_sequential`, which is the
operation the strongest path search in :mod:`votetally.paths` is built on.

The preference matrix is an n-by-n grid of single-edge preferences, cell
``[i][j]`` counting the ballots that rank candidate ``i`` above candidate
``j``. It is built from raw ballot rankings by :func:`build_preferences`.
'''

import dataclasses
import logging
from typing import List, Sequence, Tuple

from votetally.persist import simple_serialization
from votetally.ranking import Ranking, prefers

logger = logging.getLogger(__name__)

PreferenceMatrix = List[List['Preference']]


class PreferenceError(ValueError):
    '''An operation on preference paths violated its precondition.'''
    pass


@simple_serialization
@dataclasses.dataclass(frozen=True)
class Preference:
    '''A weighted path between two candidates.

    :param path: Names of the candidates along the path, at least two.
    :param strengths: Edge weights, one less than the number of path nodes.
    '''
    path: Tuple[str, ...]
    strengths: Tuple[int, ...]

    serialize_params = ['path', 'strengths', 'strength']

    def __post_init__(self):
        object.__setattr__(self, 'path', tuple(self.path))
        object.__setattr__(self, 'strengths', tuple(self.strengths))
        if len(self.path) < 2:
            raise PreferenceError(
                f'preference path needs at least two nodes, got {self.path}'
            )
        if len(self.strengths) != len(self.path) - 1:
            raise PreferenceError(
                f'path {self.path} needs {len(self.path) - 1} strengths,'
                f' got {len(self.strengths)}'
            )

    @classmethod
    def single(cls, origin: str, strength: int, destination: str
               ) -> 'Preference':
        '''Create a direct preference of origin over destination.'''
        return cls((origin, destination), (strength, ))

    @property
    def origin(self) -> str:
        return self.path[0]

    @property
    def destination(self) -> str:
        return self.path[-1]

    @property
    def strength(self) -> int:
        '''Bottleneck strength: the weakest edge along the path.'''
        return min(self.strengths)

    def __str__(self):
        parts = [self.path[0]]
        for strength, node in zip(self.strengths, self.path[1:]):
            parts.append(f'-({strength})-{node}')
        return ''.join(parts)


def compose_sequential(left: Preference, right: Preference) -> Preference:
    '''Join two paths where the first ends at the start of the second.

    The resulting strength is the minimum of the two composed strengths.

    :raises PreferenceError: If left does not end where right begins.
    '''
    if left.destination != right.origin:
        raise PreferenceError(
            f'cannot append {right} to {left}: {left.destination!r}'
            f' is not {right.origin!r}'
        )
    return Preference(
        left.path + right.path[1:],
        left.strengths + right.strengths,
    )


def merge_parallel(a: Preference, b: Preference) -> Preference:
    '''Sum the edge weights of two preferences running along the same path.

    :raises PreferenceError: If the paths differ.
    '''
    if a.path != b.path:
        raise PreferenceError(
            f'cannot merge preferences along different paths: {a} and {b}'
        )
    return Preference(
        a.path,
        tuple(wt_a + wt_b for wt_a, wt_b in zip(a.strengths, b.strengths)),
    )


def increment_strength(preference: Preference) -> Preference:
    '''Add one vote to a direct (single-edge) preference.

    :raises PreferenceError: If the preference is a composite path.
    '''
    if len(preference.path) != 2 or len(preference.strengths) != 1:
        raise PreferenceError(
            f'only direct preferences can be incremented, got {preference}'
        )
    return Preference.single(
        preference.origin, preference.strength + 1, preference.destination
    )


def create_empty_preferences(candidates: Sequence[str]) -> PreferenceMatrix:
    '''Create a preference matrix with zero strength everywhere.'''
    return [
        [Preference.single(cand_a, 0, cand_b) for cand_b in candidates]
        for cand_a in candidates
    ]


def create_preference_matrix(candidates: Sequence[str],
                             strength_matrix: Sequence[Sequence[int]],
                             ) -> PreferenceMatrix:
    '''Create a preference matrix from precomputed pairwise counts.

    :param candidates: Candidate names, in matrix order.
    :param strength_matrix: Counts, ``strength_matrix[i][j]`` being the
        number of voters preferring candidate ``i`` to candidate ``j``.
    '''
    return [
        [
            Preference.single(cand_a, strength_matrix[i][j], cand_b)
            for j, cand_b in enumerate(candidates)
        ]
        for i, cand_a in enumerate(candidates)
    ]


def accumulate_rankings(candidates: Sequence[str],
                        preferences: PreferenceMatrix,
                        rankings: Sequence[Ranking],
                        ) -> PreferenceMatrix:
    '''Add the pairwise preferences of a single ballot to the matrix.

    A new matrix is returned; the input matrix is left intact. The diagonal
    is never incremented.

    :param candidates: Candidate names, in matrix order.
    :param preferences: The matrix accumulated so far.
    :param rankings: Raw rankings of the ballot to add.
    '''
    return [
        [
            increment_strength(current)
            if i != j and prefers(rankings, candidates[i], candidates[j])
            else current
            for j, current in enumerate(row)
        ]
        for i, row in enumerate(preferences)
    ]


def build_preferences(candidates: Sequence[str],
                      ballot_rankings: Sequence[Sequence[Ranking]],
                      ) -> PreferenceMatrix:
    '''Count pairwise preferences over all ballots.

    :param candidates: Candidate names, in matrix order.
    :param ballot_rankings: Raw rankings of every ballot; these need not be
        normalized or complete.
    '''
    preferences = create_empty_preferences(candidates)
    for rankings in ballot_rankings:
        preferences = accumulate_rankings(candidates, preferences, rankings)
    logger.debug('pairwise counts from %d ballots: %s',
                 len(ballot_rankings), strength_matrix(preferences))
    return preferences


def strength_matrix(preferences: PreferenceMatrix) -> List[List[int]]:
    '''Return the scalar strengths of a preference matrix.'''
    return [[pref.strength for pref in row] for row in preferences]
