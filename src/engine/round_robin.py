"""
Round robin ("everyone plays everyone once") match generation.
"""
from itertools import combinations
from typing import List, Optional, Tuple

from .models import GeneratedMatch, Group, ScheduleCursor, Stage, Team, TournamentConfig
from .settings import DEFAULT_SETTINGS, ScheduleSettings

LEAGUE_ROUND_LABEL = 'Liga'


def get_group_round_label(group: Group) -> str:
    return f"Grupo {group.label}"


def generate_round_robin_matches(
    teams: List[Team],
    config: TournamentConfig,
    cursor: ScheduleCursor,
    group: Optional[Group] = None,
    parallel_groups: int = 1,
    settings: ScheduleSettings = DEFAULT_SETTINGS,
) -> Tuple[List[GeneratedMatch], ScheduleCursor]:
    """
    Generate one match for every pair of teams, home/away by list order.

    Without a group, every match moves the date forward by the match
    interval. For a group, the date only moves after a match whose number is
    a multiple of parallel_groups, so the groups share match days.

    Returns the matches and the cursor positioned after the last one.
    """
    matches = []
    for home, away in combinations(teams, 2):
        matches.append(GeneratedMatch(
            tournament_id=config.id,
            home_team_id=home.id,
            away_team_id=away.id,
            match_date=cursor.match_date,
            location=config.location,
            round_label=get_group_round_label(group) if group else LEAGUE_ROUND_LABEL,
            match_number=cursor.match_number,
            stage=Stage.GROUP,
            group_id=group.id if group else None,
        ))

        if group is None or cursor.match_number % parallel_groups == 0:
            cursor = cursor.shift(settings.match_interval_days)
        cursor = cursor.next_number()

    return matches, cursor


def generate_group_stage_matches(
    groups: List[Group],
    config: TournamentConfig,
    cursor: ScheduleCursor,
    settings: ScheduleSettings = DEFAULT_SETTINGS,
) -> Tuple[List[GeneratedMatch], ScheduleCursor]:
    """Round robin inside each group, one shared numbering and date cursor."""
    matches = []
    for group in groups:
        group_matches, cursor = generate_round_robin_matches(
            list(group.teams), config, cursor,
            group=group, parallel_groups=len(groups), settings=settings,
        )
        matches.extend(group_matches)
    return matches, cursor
