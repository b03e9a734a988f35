'''Strongest (widest) path search over a preference matrix.

The Schulze method compares candidates not by their direct pairwise counts
but by the strongest chains of pairwise preferences between them, the
strength of a chain being its weakest link. The search is a Floyd-Warshall
relaxation where paths are joined by :func:`compose_sequential` and the
stronger of two alternatives is kept.
'''

import logging

from votetally.preference import PreferenceMatrix, compose_sequential

logger = logging.getLogger(__name__)


def strongest_paths(preferences: PreferenceMatrix) -> PreferenceMatrix:
    '''Compute the strongest path between every ordered pair of candidates.

    Every intermediate candidate ``k`` is tried exactly once, in index
    order. A path through ``k`` replaces the current one only if it is
    strictly stronger, so among equally strong paths the one found first is
    kept. Cells on the diagonal and in row or column ``k`` are not touched
    while ``k`` is the intermediate.

    :param preferences: Pairwise preference matrix (see
        :func:`votetally.preference.build_preferences`). It is not modified.
    :returns: A matrix whose cell ``[i][j]`` holds a strongest path from
        candidate ``i`` to candidate ``j``.
    '''
    paths = [list(row) for row in preferences]
    n_cands = len(paths)
    for k in range(n_cands):
        n_replaced = 0
        for i in range(n_cands):
            if i == k:
                continue
            for j in range(n_cands):
                if j == i or j == k:
                    continue
                through_k = compose_sequential(paths[i][k], paths[k][j])
                if through_k.strength > paths[i][j].strength:
                    paths[i][j] = through_k
                    n_replaced += 1
        logger.debug('paths through %s: %d improved',
                     paths[k][k].origin, n_replaced)
    return paths
