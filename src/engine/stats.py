import math

from .models import Stage
from .settings import DEFAULT_SETTINGS


def calculate_tournament_stats(matches, teams, settings=DEFAULT_SETTINGS):
    """Summary figures for a generated schedule."""
    group_stage_matches = sum(1 for m in matches if m.stage == Stage.GROUP)
    return {
        'total_matches': len(matches),
        'total_teams': len(teams),
        'estimated_duration_days': math.ceil(len(matches) / settings.matches_per_day),
        'group_stage_matches': group_stage_matches,
        'elimination_matches': len(matches) - group_stage_matches,
    }
