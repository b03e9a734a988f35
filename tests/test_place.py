import sys
import os

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
import votetally.paths
import votetally.place
import votetally.preference
from votetally.place import Place

sys.path.append(os.path.join(os.path.dirname(__file__)))
from test_preference import SCHULZE_CANDIDATES, SCHULZE_STRONGEST


def matrix(cands, strengths):
    return votetally.preference.create_preference_matrix(cands, strengths)


def test_place_str():
    assert str(Place(3, 'Go')) == '3 Go'


@pytest.mark.parametrize('tiers, expected', [
    ([], []),
    ([['A']], [Place(1, 'A')]),
    ([['B', 'A'], ['C'], ['F', 'D', 'E']], [
        Place(1, 'A'), Place(1, 'B'), Place(3, 'C'),
        Place(4, 'D'), Place(4, 'E'), Place(4, 'F'),
    ]),
    ([['A'], ['B', 'C', 'D'], ['E']], [
        Place(1, 'A'), Place(2, 'B'), Place(2, 'C'), Place(2, 'D'),
        Place(5, 'E'),
    ]),
])
def test_adjust_for_ties(tiers, expected):
    assert votetally.place.adjust_for_ties(tiers) == expected


def test_is_undefeated():
    strongest = matrix(SCHULZE_CANDIDATES, SCHULZE_STRONGEST)
    assert votetally.place.is_undefeated(4, [], strongest)
    assert not votetally.place.is_undefeated(0, [], strongest)
    assert votetally.place.is_undefeated(0, [4], strongest)
    assert not votetally.place.is_undefeated(3, [4, 0], strongest)


def test_group_by_place_schulze():
    strongest = matrix(SCHULZE_CANDIDATES, SCHULZE_STRONGEST)
    assert votetally.place.group_by_place(strongest) == [
        [4], [0], [2], [1], [3]
    ]


def test_places_schulze():
    strongest = matrix(SCHULZE_CANDIDATES, SCHULZE_STRONGEST)
    assert votetally.place.places(strongest, SCHULZE_CANDIDATES) == [
        Place(1, 'E'), Place(2, 'A'), Place(3, 'C'), Place(4, 'B'),
        Place(5, 'D'),
    ]


def test_places_ties():
    cands = ['D', 'C', 'B', 'A']
    strongest = votetally.paths.strongest_paths(matrix(cands, [
        [0, 0, 0, 0],
        [2, 0, 0, 0],
        [2, 2, 0, 1],
        [2, 2, 1, 0],
    ]))
    assert votetally.place.places(strongest, cands) == [
        Place(1, 'A'), Place(1, 'B'), Place(3, 'C'), Place(4, 'D'),
    ]


def test_places_all_tied():
    cands = ['Z', 'Y', 'X']
    strongest = votetally.preference.create_empty_preferences(cands)
    assert votetally.place.places(strongest, cands) == [
        Place(1, 'X'), Place(1, 'Y'), Place(1, 'Z'),
    ]


def test_places_empty():
    assert votetally.place.places([], []) == []


def test_unresolvable():
    # a bare cycle is not a strongest path matrix
    cycle = matrix(list('ABC'), [
        [0, 2, 0],
        [0, 0, 2],
        [2, 0, 0],
    ])
    with pytest.raises(votetally.place.UnresolvablePlacesError):
        votetally.place.group_by_place(cycle)
