"""Input/output of elections and tallies.

This subpackage is structured into modules by file format. Its root namespace
contains general-purpose functions to transform rank definitions from other
forms into the rankings used by Votetally.
"""

from typing import Dict, List, Optional

from votetally.ranking import Ranking


def rankings_from_mapping(rankings: Dict[str, Optional[int]]) -> List[Ranking]:
    '''Transform a mapping of candidate names to ranks into rankings.

    :param rankings: A dictionary mapping candidate names to their numeric
        ranks, lower being better; None marks an unranked candidate.
    :returns: Rankings in the order of the dictionary.
    '''
    return [Ranking(name, rank) for name, rank in rankings.items()]


def rankings_from_order(order: List[str]) -> List[Ranking]:
    '''Rank candidates by their position in a list, best first.'''
    return [Ranking(name, i) for i, name in enumerate(order, start=1)]
