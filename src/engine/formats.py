"""
Tournament formats and schedule generation entry point.

Each format is a strategy registered under its TournamentFormat tag:
- RoundRobinFormat: everyone plays everyone, split into groups above 8 teams
- SingleEliminationFormat: knockout bracket pre-scheduled down to the final
- GroupPlusKnockoutFormat: group stage followed by a knockout of qualifiers
"""
import logging
from datetime import timedelta
from typing import List, Optional, Tuple

from .elimination import pre_schedule_full_bracket
from .errors import InsufficientTeamsError, UnsupportedFormatError
from .groups import SINGLE_GROUP_MAX_TEAMS, distribute_teams_into_groups
from .models import GenerationResult, Group, ScheduleCursor, Team, TournamentConfig, TournamentFormat
from .round_robin import generate_group_stage_matches, generate_round_robin_matches
from .settings import DEFAULT_SETTINGS, ScheduleSettings

logger = logging.getLogger(__name__)

MIN_TEAMS = 2


class ScheduleFormat:
    format_tag = None
    description = ''

    def generate(self, config: TournamentConfig, teams: List[Team], rng=None,
                 settings: ScheduleSettings = DEFAULT_SETTINGS) -> GenerationResult:
        raise NotImplementedError


class RoundRobinFormat(ScheduleFormat):
    format_tag = TournamentFormat.ROUND_ROBIN
    description = 'Everyone plays everyone once; more than 8 teams play in groups'

    def generate(self, config, teams, rng=None, settings=DEFAULT_SETTINGS):
        cursor = ScheduleCursor.start(config.start_date)
        if len(teams) > SINGLE_GROUP_MAX_TEAMS:
            groups = distribute_teams_into_groups(teams, rng=rng)
            matches, _ = generate_group_stage_matches(groups, config, cursor, settings=settings)
            return GenerationResult(matches=tuple(matches), groups=tuple(groups))

        matches, _ = generate_round_robin_matches(list(teams), config, cursor, settings=settings)
        return GenerationResult(matches=tuple(matches))


class SingleEliminationFormat(ScheduleFormat):
    format_tag = TournamentFormat.ELIMINATION
    description = 'Single elimination bracket, byes for uneven team counts'

    def generate(self, config, teams, rng=None, settings=DEFAULT_SETTINGS):
        cursor = ScheduleCursor.start(config.start_date)
        matches, _ = pre_schedule_full_bracket(list(teams), config, cursor, settings=settings)
        return GenerationResult(matches=tuple(matches))


class GroupPlusKnockoutFormat(ScheduleFormat):
    format_tag = TournamentFormat.MIXED
    description = 'Group stage, then a knockout bracket between group qualifiers'

    def generate(self, config, teams, rng=None, settings=DEFAULT_SETTINGS):
        groups = distribute_teams_into_groups(teams, rng=rng)
        cursor = ScheduleCursor.start(config.start_date)
        group_matches, cursor = generate_group_stage_matches(groups, config, cursor, settings=settings)

        knockout_start = config.start_date + timedelta(days=len(group_matches) * settings.match_interval_days)
        qualifiers_per_group = config.qualifiers_per_group or settings.default_qualifiers_per_group
        qualifiers = select_qualifiers(groups, qualifiers_per_group)
        logger.debug(f"{len(qualifiers)} qualifiers from {len(groups)} group(s), knockout from {knockout_start.date()}")

        knockout_cursor = ScheduleCursor(match_number=cursor.match_number, match_date=knockout_start)
        knockout_matches, _ = pre_schedule_full_bracket(qualifiers, config, knockout_cursor, settings=settings)

        return GenerationResult(
            matches=tuple(group_matches) + tuple(knockout_matches),
            groups=tuple(groups),
        )


def select_qualifiers(groups: List[Group], qualifiers_per_group: int) -> List[Team]:
    """
    Take the first teams of each group, group by group.

    Standings do not exist when the schedule is generated, so the group order
    stands in for them.
    """
    qualifiers = []
    for group in groups:
        qualifiers.extend(group.teams[:qualifiers_per_group])
    return qualifiers


FORMATS = {
    strategy.format_tag: strategy
    for strategy in (RoundRobinFormat(), SingleEliminationFormat(), GroupPlusKnockoutFormat())
}


def get_format(tag) -> ScheduleFormat:
    """Return the strategy for a format tag or raise UnsupportedFormatError."""
    try:
        return FORMATS[TournamentFormat.parse(tag)]
    except (KeyError, ValueError):
        raise UnsupportedFormatError(tag)


def generate_matches(config: TournamentConfig, teams: List[Team], rng=None,
                     settings: Optional[ScheduleSettings] = None) -> GenerationResult:
    """
    Generate every match of a tournament.

    Args:
        config: Tournament format, start date and location
        teams: Eligible teams, in the order they should be paired
        rng: random.Random used to shuffle teams into groups
        settings: Day intervals; defaults when omitted

    Raises:
        UnsupportedFormatError: config.format is not a known format
        InsufficientTeamsError: fewer than two teams
    """
    strategy = get_format(config.format)
    if len(teams) < MIN_TEAMS:
        raise InsufficientTeamsError(len(teams), MIN_TEAMS)

    result = strategy.generate(config, list(teams), rng=rng, settings=settings or DEFAULT_SETTINGS)
    logger.info(
        f"Generated {len(result.matches)} matches for tournament {config.id} "
        f"({strategy.format_tag.value}, {len(teams)} teams, {len(result.groups)} groups)"
    )
    return result


def check_can_generate(config: TournamentConfig, teams: List[Team]) -> Tuple[bool, Optional[str]]:
    """Returns (can_generate, reason) without generating anything."""
    try:
        get_format(config.format)
    except UnsupportedFormatError as e:
        return False, str(e)
    if len(teams) < MIN_TEAMS:
        return False, str(InsufficientTeamsError(len(teams), MIN_TEAMS))
    return True, None
