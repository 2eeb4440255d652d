"""
Flask JSON API exposing tournament schedule generation.

Nothing is stored: the league backend posts the tournament and its approved
teams, gets the generated matches back and persists them itself.
"""
import os
import random
import yaml
from flask import Flask, request, jsonify
from engine.errors import ScheduleError
from engine.formats import FORMATS, generate_matches, check_can_generate
from engine.models import Team, TournamentConfig
from engine.settings import load_settings
from engine.stats import calculate_tournament_stats

app = Flask(__name__)
app.config['SCHEDULE_SETTINGS_FILE'] = os.environ.get('SCHEDULE_SETTINGS_FILE')


def parse_generation_request(tournament_id: str) -> tuple:
    """Read (config, teams, seed) from the JSON body. Raises ValueError on bad input."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValueError('Request body must be a JSON object')

    tournament_data = data.get('tournament') or {}
    if not isinstance(tournament_data, dict):
        raise ValueError('tournament must be a JSON object')
    config = TournamentConfig.from_dict(dict(tournament_data, id=tournament_id))

    teams_data = data.get('teams') or []
    if not isinstance(teams_data, list):
        raise ValueError('teams must be a list')

    teams = []
    for team_data in teams_data:
        team = Team.from_dict(team_data)
        if not team.active:
            app.logger.debug(f'Skipping inactive team {team.id}')
            continue
        teams.append(team)

    seed = data.get('seed')
    if seed is not None and not isinstance(seed, int):
        raise ValueError('seed must be an integer')
    return config, teams, seed


@app.route('/api/formats', methods=['GET'])
def api_formats():
    """List the tournament formats the generator supports."""
    return jsonify({
        'formats': [
            {'type': tag.value, 'description': strategy.description}
            for tag, strategy in FORMATS.items()
        ]
    })


@app.route('/api/tournaments/<tournament_id>/can-generate', methods=['POST'])
def api_can_generate(tournament_id):
    """Check whether matches can be generated for the posted tournament."""
    try:
        config, teams, _ = parse_generation_request(tournament_id)
    except ValueError as e:
        return jsonify({'error': str(e)}), 400

    can_generate, reason = check_can_generate(config, teams)
    return jsonify({'can_generate': can_generate, 'reason': reason, 'team_count': len(teams)})


@app.route('/api/tournaments/<tournament_id>/schedule', methods=['POST'])
def api_generate_schedule(tournament_id):
    """Generate the full schedule (matches, groups and stats) for a tournament."""
    settings_file = app.config.get('SCHEDULE_SETTINGS_FILE')
    try:
        settings = load_settings(settings_file)
    except (OSError, yaml.YAMLError, ValueError) as e:
        app.logger.error(f'Failed to load schedule settings from {settings_file}: {e}')
        return jsonify({'error': 'Schedule settings could not be loaded'}), 500

    try:
        config, teams, seed = parse_generation_request(tournament_id)
        result = generate_matches(config, teams, rng=random.Random(seed), settings=settings)
    except ScheduleError as e:
        app.logger.warning(f'Schedule generation failed for {tournament_id}: {e}')
        return jsonify({'error': str(e)}), 400
    except ValueError as e:
        return jsonify({'error': str(e)}), 400

    response = result.to_dict()
    response['groups'] = response.get('groups', [])
    response['stats'] = calculate_tournament_stats(result.matches, teams, settings)
    return jsonify(response)


if __name__ == '__main__':
    app.run(debug=True)
