"""
Generate a tournament schedule from a YAML file and print it.

Usage:
    python src/generate_matches.py data/tournament.yaml
    python src/generate_matches.py data/tournament.yaml --seed 7 --settings data/settings.yaml

The tournament file holds a `tournament` mapping (id, format, start_date,
location, qualifiers_per_group) and a `teams` list or mapping of pools. Teams
are mappings with id, name and active, or plain names.
"""
import argparse
import logging
import os
import random
import sys

import yaml

from engine.errors import ScheduleError
from engine.formats import generate_matches
from engine.models import Team, TournamentConfig
from engine.settings import load_settings
from engine.stats import calculate_tournament_stats

logger = logging.getLogger(__name__)


def flatten_pools(pools_data):
    """Team entries of a pool mapping, in pool order.

    A pool holds either a list of teams or a mapping with a `teams` list.
    """
    entries = []
    for pool_name, pool_data in pools_data.items():
        if isinstance(pool_data, dict):
            pool_data = pool_data.get('teams')
        if pool_data is None:
            continue
        if not isinstance(pool_data, list):
            raise ValueError(f"Pool {pool_name} must list its teams")
        entries.extend(pool_data)
    return entries


def load_teams(teams_data):
    """Build Team objects from the `teams` entry, leaving out inactive teams."""
    if isinstance(teams_data, dict):
        teams_data = flatten_pools(teams_data)
    elif teams_data is not None and not isinstance(teams_data, list):
        raise ValueError(f"teams must be a list or a mapping of pools, got {teams_data!r}")

    teams = []
    for entry in teams_data or []:
        if isinstance(entry, dict):
            team = Team.from_dict(entry)
        else:
            team = Team(id=str(entry), name=str(entry))
        if not team.active:
            logger.warning(f"Team {team.name} is not active. Skipping it.")
            continue
        teams.append(team)
    return teams


def load_tournament(file_path):
    """Returns (TournamentConfig, teams) read from a tournament YAML file."""
    with open(file_path, mode='r', encoding='utf-8') as file:
        data = yaml.safe_load(file) or {}
    if not isinstance(data, dict) or 'tournament' not in data:
        raise ValueError(f"{file_path} has no 'tournament' section")
    config = TournamentConfig.from_dict(data['tournament'])
    return config, load_teams(data.get('teams'))


def format_schedule(result, teams):
    """Lines of the printed schedule, one block per round."""
    names = {team.id: team.name for team in teams}
    lines = []
    current_round = None
    for match in result.matches:
        if match.round_label != current_round:
            if current_round is not None:
                lines.append('')
            lines.append(f"# {match.round_label}")
            current_round = match.round_label
        home = names.get(match.home_team_id, match.home_team_id)
        away = names.get(match.away_team_id, match.away_team_id)
        lines.append(f"{match.match_number:>3}. {match.match_date.date().isoformat()}  {home} vs {away}")
    return lines


def main(argv=None):
    parser = argparse.ArgumentParser(description='Generate the match schedule of a tournament.')
    script_dir = os.path.dirname(__file__)
    base_dir = os.path.dirname(script_dir)
    parser.add_argument('tournament_file', nargs='?', default=os.path.join(base_dir, 'data', 'tournament.yaml'),
                        help='Tournament YAML file (default: data/tournament.yaml)')
    parser.add_argument('--seed', type=int, default=None, help='Seed for shuffling teams into groups')
    parser.add_argument('--settings', default=None, help='Schedule settings YAML file')
    parser.add_argument('--verbose', action='store_true', help='Log generation details')
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format='%(levelname)s %(name)s: %(message)s')

    try:
        settings = load_settings(args.settings)
        config, teams = load_tournament(args.tournament_file)
        result = generate_matches(config, teams, rng=random.Random(args.seed), settings=settings)
    except (OSError, ValueError, yaml.YAMLError, ScheduleError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    for line in format_schedule(result, teams):
        print(line)

    stats = calculate_tournament_stats(result.matches, teams, settings)
    print()
    print(f"{stats['total_matches']} matches, {stats['total_teams']} teams, "
          f"about {stats['estimated_duration_days']} days "
          f"({stats['group_stage_matches']} group stage, {stats['elimination_matches']} elimination)")
    return 0


if __name__ == '__main__':
    sys.exit(main())
