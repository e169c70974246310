"""
Flask JSON API for bracket generation.

Every endpoint is stateless: the request carries the participants, the
response carries the complete match list.
"""
import os

from flask import Flask, jsonify, request

from brackets.display import get_match_codes, get_slot_labels
from brackets.double_elimination import generate_bracket_execution_order, get_double_elimination_bracket_display
from brackets.elimination import get_elimination_bracket_display
from brackets.formats import FORMATS, DOUBLE_ELIMINATION, GROUP_STAGE, SINGLE_ELIMINATION, generate_matches

app = Flask(__name__)

MAX_PARTICIPANTS = int(os.environ.get('BRACKET_MAX_PARTICIPANTS', '1024'))
MAX_ROUNDS = int(os.environ.get('BRACKET_MAX_ROUNDS', '64'))
app.config['MAX_PARTICIPANTS'] = MAX_PARTICIPANTS
app.config['MAX_ROUNDS'] = MAX_ROUNDS


def _error(message, status=400):
    app.logger.warning(f'Rejected bracket request: {message}')
    return jsonify({'error': message}), status


def _optional_int(data, key, maximum):
    """Read an optional integer field. Raises ValueError if present but not an integer up to maximum."""
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"'{key}' must be an integer")
    if value > maximum:
        raise ValueError(f"'{key}' must be at most {maximum}")
    return value


def _read_request():
    """Validate the JSON body shared by the bracket endpoints. Returns (data, error_response)."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return None, _error('Request body must be a JSON object')

    participants = data.get('participants')
    if not isinstance(participants, list):
        return None, _error("'participants' must be a list")
    if len(participants) > app.config['MAX_PARTICIPANTS']:
        return None, _error(f"Too many participants (max {app.config['MAX_PARTICIPANTS']})")
    if any(p is None or isinstance(p, (dict, list, bool)) for p in participants):
        return None, _error('Participants must be strings or numbers')
    return data, None


def _serialize(matches):
    return {
        'matches': [m.to_dict() for m in matches],
        'codes': get_match_codes(matches),
        'labels': [list(pair) for pair in get_slot_labels(matches)],
    }


@app.route('/api/formats', methods=['GET'])
def api_formats():
    """List the supported tournament formats."""
    return jsonify({'formats': list(FORMATS)})


@app.route('/api/brackets', methods=['POST'])
def api_generate_bracket():
    """Generate the complete match list for a format."""
    data, error = _read_request()
    if error:
        return error

    format_type = data.get('format', DOUBLE_ELIMINATION)
    try:
        rounds = _optional_int(data, 'rounds', app.config['MAX_ROUNDS'])
        # more groups than participants only adds empty groups
        groups = _optional_int(data, 'groups', app.config['MAX_PARTICIPANTS'])
        result = generate_matches(format_type, data['participants'], rounds=rounds, groups=groups)
    except ValueError as e:
        return _error(str(e))

    if format_type == GROUP_STAGE:
        response = _serialize(result['matches'])
        response['groups'] = result['groups']
    else:
        response = _serialize(result)
        if format_type == DOUBLE_ELIMINATION:
            response['execution_order'] = generate_bracket_execution_order(result)
    response['format'] = format_type

    app.logger.info(f'Generated {format_type} bracket: {len(data["participants"])} participants, '
                    f'{len(response["matches"])} matches')
    return jsonify(response)


@app.route('/api/brackets/summary', methods=['POST'])
def api_bracket_summary():
    """Bracket size, rounds and bye counts for single or double elimination."""
    data, error = _read_request()
    if error:
        return error

    format_type = data.get('format', DOUBLE_ELIMINATION)
    participants = data['participants']
    if format_type == SINGLE_ELIMINATION:
        display = get_elimination_bracket_display(participants)
        summary = {
            'bracket_size': display['bracket_size'],
            'total_rounds': display['total_rounds'],
            'total_teams': display['total_teams'],
            'byes': display['byes'],
            'matches_per_round': display['matches_per_round'],
            'total_matches': display['total_matches'],
        }
    elif format_type == DOUBLE_ELIMINATION:
        display = get_double_elimination_bracket_display(participants)
        summary = {
            'bracket_size': display['bracket_size'],
            'total_winners_rounds': display['total_winners_rounds'],
            'total_losers_rounds': display['total_losers_rounds'],
            'total_teams': display['total_teams'],
            'byes': display['byes'],
            'winners_rounds': {name: len(ms) for name, ms in display['winners_bracket'].items()},
            'losers_rounds': {name: len(ms) for name, ms in display['losers_bracket'].items()},
            'total_matches': display['total_matches'],
        }
    else:
        return _error(f"Summary is only available for {SINGLE_ELIMINATION} and {DOUBLE_ELIMINATION}")

    summary['format'] = format_type
    return jsonify(summary)


if __name__ == '__main__':
    app.run(debug=True, port=5000)
