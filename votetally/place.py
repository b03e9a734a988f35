'''Finishing order resolution from strongest paths.

Candidate ``c`` defeats candidate ``t`` if the strongest path from ``c`` to
``t`` is strictly stronger than the one back. The finishing order is built by
repeatedly taking all remaining candidates not defeated by any other
remaining candidate as the next tier. Tiers with more than one member are
ties; tied candidates share a rank and the next tier's rank skips by the
tie's size (competition ranking, "1224").
'''

import dataclasses
import logging
from typing import List, Sequence, Collection

from votetally.persist import simple_serialization
from votetally.preference import PreferenceMatrix

logger = logging.getLogger(__name__)


class UnresolvablePlacesError(Exception):
    '''No remaining candidate is undefeated, so no tier can be formed.

    This can only happen when the matrix is not a strongest path matrix.
    '''
    pass


@simple_serialization
@dataclasses.dataclass(frozen=True)
class Place:
    '''A candidate's position in the finishing order.

    :param rank: 1-based rank; tied candidates share the same rank.
    :param candidate_name: Name of the placed candidate.
    '''
    rank: int
    candidate_name: str

    def __str__(self):
        return f'{self.rank} {self.candidate_name}'


def is_undefeated(target: int,
                  already_placed: Collection[int],
                  strongest: PreferenceMatrix,
                  ) -> bool:
    '''Return True if no competitor strictly defeats the target.

    :param target: Index of the candidate to check.
    :param already_placed: Indices placed in earlier tiers; these are not
        competitors anymore.
    :param strongest: Strongest path matrix.
    '''
    return not any(
        strongest[comp][target].strength > strongest[target][comp].strength
        for comp in range(len(strongest))
        if comp != target and comp not in already_placed
    )


def group_by_place(strongest: PreferenceMatrix) -> List[List[int]]:
    '''Peel the undefeated tiers of candidate indices, best first.

    :param strongest: Strongest path matrix.
    :raises UnresolvablePlacesError: If some tier would come out empty.
    '''
    remaining = list(range(len(strongest)))
    tiers = []
    placed = set()
    while remaining:
        undefeated = [
            index for index in remaining
            if is_undefeated(index, placed, strongest)
        ]
        if not undefeated:
            raise UnresolvablePlacesError(
                f'every remaining candidate is defeated: {remaining}'
            )
        logger.debug('tier %d: %s', len(tiers) + 1, undefeated)
        tiers.append(undefeated)
        placed.update(undefeated)
        remaining = [index for index in remaining if index not in placed]
    return tiers


def adjust_for_ties(tiers: Sequence[Sequence[str]]) -> List[Place]:
    '''Assign competition ranks to tiers of candidate names.

    Every member of a tier gets one plus the number of candidates in all
    earlier tiers; members are listed alphabetically within a tier.
    '''
    places = []
    n_before = 0
    for tier in tiers:
        places.extend(Place(n_before + 1, name) for name in sorted(tier))
        n_before += len(tier)
    return places


def places(strongest: PreferenceMatrix,
           candidate_names: Sequence[str],
           ) -> List[Place]:
    '''Determine the finishing order of the candidates.

    :param strongest: Strongest path matrix, in the order of
        ``candidate_names``.
    :param candidate_names: Candidate names.
    '''
    return adjust_for_ties([
        [candidate_names[index] for index in tier]
        for tier in group_by_place(strongest)
    ])
