'''Tabular views of a tally for display.'''

import dataclasses
from typing import List, Optional, Sequence

from votetally.persist import simple_serialization
from votetally.preference import PreferenceMatrix
from votetally.tally import Tally


@simple_serialization
@dataclasses.dataclass(frozen=True)
class TableData:
    '''A named table of strings.

    :param name: Table caption.
    :param column_names: Header row.
    :param rows: Data rows, each as long as the header; None is an empty cell.
    '''
    name: str
    column_names: List[str]
    rows: List[List[Optional[str]]]


def places_table(tally: Tally) -> TableData:
    return TableData(
        'places',
        ['place', 'candidate'],
        [[str(place.rank), place.candidate_name] for place in tally.places],
    )


def strength_table(name: str,
                   candidate_names: Sequence[str],
                   matrix: PreferenceMatrix,
                   ) -> TableData:
    '''Tabulate the strengths of a preference or strongest path matrix.

    Row ``i``, column ``j`` holds the strength of candidate ``i`` over
    candidate ``j``; the diagonal is left empty.
    '''
    return TableData(
        name,
        [''] + list(candidate_names),
        [
            [cand] + [
                None if i == j else str(pref.strength)
                for j, pref in enumerate(row)
            ]
            for i, (cand, row) in enumerate(zip(candidate_names, matrix))
        ],
    )


def ballots_table(tally: Tally) -> TableData:
    '''Tabulate the disclosed ballots, one row per ballot.

    Ballots are identified by voter name, or by confirmation code for
    secret ballot elections.
    '''
    key_column = 'confirmation' if tally.secret_ballot else 'voter'
    rows = []
    for ballot in tally.ballots:
        key = (
            ballot.confirmation_code if tally.secret_ballot
            else ballot.voter_name
        )
        rows.append([key] + [
            None if ranking.rank is None else str(ranking.rank)
            for ranking in ballot.rankings
        ])
    return TableData(
        'ballots', [key_column] + list(tally.candidate_names), rows
    )


def format_table(table: TableData) -> List[str]:
    '''Render the table as left-justified text lines, caption first.'''
    cells = [table.column_names] + [
        ['' if cell is None else cell for cell in row] for row in table.rows
    ]
    widths = [
        max(len(row[col_i]) for row in cells)
        for col_i in range(len(table.column_names))
    ]
    lines = [table.name]
    for row in cells:
        lines.append('  '.join(
            cell.ljust(width) for cell, width in zip(row, widths)
        ).rstrip())
    return lines
