"""A commandline tool to count the ballots of an election file.

Reads an election in the JSON format described in
:mod:`votetally.io.election`, counts it by the Schulze method and shows the
finishing order with the pairwise and strongest path matrices, or dumps the
full tally as JSON.
"""

import argparse
import io
import logging
import sys
import warnings
from typing import List, Optional

import votetally.io.election
import votetally.table
import votetally.tally
from votetally.io.core import ElectionData
from votetally.tally import Tally

argparser = argparse.ArgumentParser(
    prog='votetally',
    description=__doc__,
    formatter_class=argparse.ArgumentDefaultsHelpFormatter,
)
argparser.add_argument(
    '-i', '--input-file',
    type=argparse.FileType('r', encoding='utf8'),
    help='file to load the election from',
)
argparser.add_argument(
    '-I', '--use-stdin',
    action='store_true',
    help='load the election from standard input',
)
argparser.add_argument(
    '-f', '--output-format',
    choices=['table', 'json'],
    default='table',
    help='how to show the tally',
)
argparser.add_argument(
    '-s', '--secret-ballot',
    choices=['yes', 'no'],
    help=(
        'hide (yes) or disclose (no) voter identities on the ballots,'
        ' overriding the setting in the election file'
    ),
)
argparser.add_argument(
    '-m', '--max-candidates',
    type=int,
    help=(
        'refuse to count elections with more candidates than this'
        ' (counting takes time cubic in the number of candidates)'
    ),
)
argparser.add_argument(
    '-v', '--verbose',
    action='store_true',
    help='show all counting log messages',
)
argparser.add_argument(
    '-q', '--quiet',
    action='store_true',
    help='do not show any counting log messages',
)


def main(input_file: io.TextIOBase,
         use_stdin: bool = False,
         output_format: str = 'table',
         secret_ballot: Optional[str] = None,
         max_candidates: Optional[int] = None,
         verbose: bool = False,
         quiet: bool = False,
         ) -> None:
    logging.basicConfig(
        level=(
            logging.DEBUG if verbose
            else (logging.WARNING if quiet else logging.INFO)
        ),
        format='%(levelname)-10s %(message)s'
    )
    if use_stdin:
        input_file = sys.stdin
    election = votetally.io.election.load(input_file)
    if secret_ballot is not None:
        election.secret_ballot = (secret_ballot == 'yes')
    n_cands = len(election.candidate_names)
    if max_candidates is not None and n_cands > max_candidates:
        raise ValueError(f'{n_cands} candidates exceed the maximum'
                         f' of {max_candidates}')
    if not election.ballots:
        warnings.warn(f'no ballots cast in {election.election_name}')
    tally = count_election(election)
    if output_format == 'json':
        votetally.io.election.dump(sys.stdout, tally)
    else:
        show_tally(tally)


def count_election(election: ElectionData) -> Tally:
    return votetally.tally.count_ballots(
        election.election_name,
        election.secret_ballot,
        election.candidate_names,
        election.ballots,
    )


def tally_lines(tally: Tally) -> List[str]:
    """Render the tally as text tables."""
    lines = [
        f'Election {tally.election_name}:'
        f' {len(tally.who_voted)} voters, {len(tally.candidate_names)}'
        ' candidates',
    ]
    if not tally.candidate_names:
        lines.append('Nobody placed')
        return lines
    tables = [
        votetally.table.places_table(tally),
        votetally.table.strength_table(
            'preferences', tally.candidate_names, tally.preferences
        ),
        votetally.table.strength_table(
            'strongest paths', tally.candidate_names,
            tally.strongest_path_matrix
        ),
        votetally.table.ballots_table(tally),
    ]
    for table in tables:
        lines.append('')
        lines.extend(votetally.table.format_table(table))
    return lines


def show_tally(tally: Tally) -> None:
    for line in tally_lines(tally):
        print(line)


if __name__ == '__main__':
    args = argparser.parse_args()
    if not args.input_file and not args.use_stdin:
        argparser.print_usage()
    else:
        main(**vars(args))
