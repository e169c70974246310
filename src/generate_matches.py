"""
Command line front end: read participants from YAML and print the generated matches.

Usage:
    python src/generate_matches.py data/participants.yaml
    python src/generate_matches.py data/participants.yaml --type swiss --rounds 5
    python src/generate_matches.py data/participants.yaml --output yaml

The input file is either a plain list of participants or a mapping:

    participants: [Alice, Bob, Carol, Dave]
    tournament_settings:
      type: double_elimination
      rounds: 3        # swiss only
      groups: 2        # group_stage only
"""
import argparse
import logging
import os
import sys

import yaml

from brackets.display import get_match_codes
from brackets.formats import FORMATS, DOUBLE_ELIMINATION, GROUP_STAGE, generate_matches
from brackets.models import GRAND_FINAL, LOSERS, WINNERS

LOG_LEVEL = os.environ.get('BRACKET_LOG_LEVEL', 'WARNING')

logger = logging.getLogger(__name__)


def _check_participants(file_path, participants):
    if not isinstance(participants, list):
        raise ValueError(f"{file_path}: 'participants' must be a list")
    for participant in participants:
        if participant is None or isinstance(participant, (dict, list, bool)):
            raise ValueError(f"{file_path}: participants must be strings or numbers, got {participant!r}")
    return participants


def _check_settings(file_path, settings):
    if not isinstance(settings, dict):
        raise ValueError(f"{file_path}: 'tournament_settings' must be a mapping")
    for key in ('rounds', 'groups'):
        value = settings.get(key)
        if value is not None and (isinstance(value, bool) or not isinstance(value, int)):
            raise ValueError(f"{file_path}: tournament_settings.{key} must be an integer, got {value!r}")
    return settings


def load_tournament(file_path):
    """
    Load participants and tournament settings from a YAML file.

    Returns (participants, settings). Raises ValueError if the participants
    are not a list of scalars or the settings are malformed.
    """
    with open(file_path, mode='r', encoding='utf-8') as file:
        data = yaml.safe_load(file)

    if data is None:
        return [], {}
    if isinstance(data, list):
        return _check_participants(file_path, data), {}
    if not isinstance(data, dict):
        raise ValueError(f"{file_path}: expected a list of participants or a mapping")

    participants = _check_participants(file_path, data.get('participants') or [])
    settings = data.get('tournament_settings')
    if settings is None:
        settings = {}
    return participants, _check_settings(file_path, settings)


def _section_title(match):
    if match.bracket == WINNERS:
        return f"Winners Round {match.round}"
    elif match.bracket == LOSERS:
        return f"Losers Round {match.round}"
    elif match.bracket == GRAND_FINAL:
        return "Grand Final"
    return f"{match.bracket} Round {match.round}"


def format_matches_text(matches):
    """Render matches as text, one header per bracket round."""
    codes = get_match_codes(matches)
    lines = []
    current_section = None
    for match, code in zip(matches, codes):
        section = _section_title(match)
        if section != current_section:
            if current_section is not None:
                lines.append("")
            lines.append(f"# {section}")
            current_section = section

        player1 = match.player1 if match.player1 is not None else '-'
        player2 = match.player2 if match.player2 is not None else '-'
        line = f"{code}: {player1} vs {player2}"
        if match.next_match_index is not None:
            line += f" -> {codes[match.next_match_index]}"
        if match.loser_next_match_index is not None:
            line += f", loser -> {codes[match.loser_next_match_index]}"
        lines.append(line)
    return "\n".join(lines)


def format_matches_yaml(result):
    if isinstance(result, dict):
        data = {
            'groups': result['groups'],
            'matches': [m.to_dict() for m in result['matches']],
        }
    else:
        data = {'matches': [m.to_dict() for m in result]}
    return yaml.safe_dump(data, default_flow_style=False, sort_keys=False)


def build_parser():
    parser = argparse.ArgumentParser(
        description='Generate the full match list for a tournament'
    )
    parser.add_argument(
        'participants_file',
        help='YAML file with the participants in seed order'
    )
    parser.add_argument(
        '--type',
        choices=FORMATS,
        help=f'Tournament format (default: tournament_settings.type or {DOUBLE_ELIMINATION})'
    )
    parser.add_argument(
        '--rounds',
        type=int,
        help='Number of Swiss rounds'
    )
    parser.add_argument(
        '--groups',
        type=int,
        help='Number of groups for the group stage'
    )
    parser.add_argument(
        '--output',
        choices=('text', 'yaml'),
        default='text',
        help='Output format (default: text)'
    )
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=LOG_LEVEL, format='%(levelname)s %(name)s: %(message)s')

    try:
        participants, settings = load_tournament(args.participants_file)
    except (OSError, yaml.YAMLError, ValueError) as e:
        print(f"Error: Failed to load {args.participants_file}: {e}", file=sys.stderr)
        return 1

    format_type = args.type or settings.get('type', DOUBLE_ELIMINATION)
    rounds = args.rounds if args.rounds is not None else settings.get('rounds')
    groups = args.groups if args.groups is not None else settings.get('groups')

    try:
        result = generate_matches(format_type, participants, rounds=rounds, groups=groups)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    matches = result['matches'] if format_type == GROUP_STAGE else result
    if not matches:
        logger.warning(f"No matches generated for {len(participants)} participants ({format_type})")

    if args.output == 'yaml':
        print(format_matches_yaml(result), end='')
    else:
        if format_type == GROUP_STAGE:
            for index, group in enumerate(result['groups']):
                print(f"# Group {index + 1}: {', '.join(str(p) for p in group)}")
            if result['groups']:
                print()
        print(format_matches_text(matches))
    return 0


if __name__ == '__main__':
    sys.exit(main())
