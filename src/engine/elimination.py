"""
Single elimination bracket generation.

Two ways of progressing a bracket are offered:
- pre_schedule_full_bracket(): schedules every round up front, assuming the
  first-listed team of each pairing wins. Useful for planning dates and
  venues before any result exists.
- advance_round_from_results(): builds the next round from the real winners
  of a played round.
"""
import logging
import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from .errors import IncompleteRoundError, InvalidResultError
from .models import GeneratedMatch, ScheduleCursor, Stage, Team, TournamentConfig
from .settings import DEFAULT_SETTINGS, ScheduleSettings

logger = logging.getLogger(__name__)


def calculate_bracket_size(num_teams: int) -> int:
    """Calculate the bracket size (next power of 2)."""
    if num_teams <= 0:
        return 0
    return 2 ** math.ceil(math.log2(num_teams))


def calculate_byes(num_teams: int) -> int:
    """Calculate number of byes needed."""
    bracket_size = calculate_bracket_size(num_teams)
    return bracket_size - num_teams


def calculate_total_rounds(num_teams: int) -> int:
    bracket_size = calculate_bracket_size(num_teams)
    if bracket_size < 2:
        return 0
    return int(math.log2(bracket_size))


def get_round_name(round_number: int, total_rounds: int) -> str:
    """Get the name of a round from how many rounds remain, final included."""
    remaining_rounds = total_rounds - round_number + 1
    if remaining_rounds == 1:
        return "Final"
    elif remaining_rounds == 2:
        return "Semifinal"
    elif remaining_rounds == 3:
        return "Cuartos de Final"
    elif remaining_rounds == 4:
        return "Octavos de Final"
    else:
        return f"Ronda {round_number}"


def get_round_stage(round_number: int, total_rounds: int) -> Stage:
    remaining_rounds = total_rounds - round_number + 1
    if remaining_rounds == 1:
        return Stage.FINAL
    elif remaining_rounds == 2:
        return Stage.SEMI
    elif remaining_rounds == 3:
        return Stage.QUARTER
    else:
        return Stage.GROUP


@dataclass(frozen=True)
class BracketRound:
    round_number: int
    total_rounds: int
    teams: Tuple[Team, ...]
    matches: Tuple[GeneratedMatch, ...]
    bye_team: Optional[Team] = None

    @property
    def champion(self) -> Optional[Team]:
        """The last team standing, once no match is left to play."""
        if len(self.teams) == 1:
            return self.teams[0]
        return None


def build_bracket_round(
    teams: List[Team],
    round_number: int,
    total_rounds: int,
    config: TournamentConfig,
    cursor: ScheduleCursor,
) -> Tuple[BracketRound, ScheduleCursor]:
    """
    Pair consecutive teams (0 vs 1, 2 vs 3, ...) for one round.

    An odd team out at the end gets a bye. All matches of the round share the
    cursor date; the returned cursor only has its match number advanced.
    """
    round_name = get_round_name(round_number, total_rounds)
    stage = get_round_stage(round_number, total_rounds)

    matches = []
    bye_team = None
    for i in range(0, len(teams), 2):
        if i + 1 < len(teams):
            matches.append(GeneratedMatch(
                tournament_id=config.id,
                home_team_id=teams[i].id,
                away_team_id=teams[i + 1].id,
                match_date=cursor.match_date,
                location=config.location,
                round_label=round_name,
                match_number=cursor.match_number,
                stage=stage,
            ))
            cursor = cursor.next_number()
        elif len(teams) > 1:
            bye_team = teams[i]

    bracket_round = BracketRound(
        round_number=round_number,
        total_rounds=total_rounds,
        teams=tuple(teams),
        matches=tuple(matches),
        bye_team=bye_team,
    )
    return bracket_round, cursor


def pre_schedule_full_bracket(
    teams: List[Team],
    config: TournamentConfig,
    cursor: ScheduleCursor,
    settings: ScheduleSettings = DEFAULT_SETTINGS,
) -> Tuple[List[GeneratedMatch], ScheduleCursor]:
    """
    Schedule every round down to the final before any result is known.

    Winners are placeholders: the home team of each match is carried into
    the next round, bye teams carry forward unchanged. Rounds are a round
    interval apart.

    Returns all matches in round order and the cursor after the final.
    """
    total_rounds = calculate_total_rounds(len(teams))
    if len(teams) >= 2:
        logger.debug(
            f"Bracket of {calculate_bracket_size(len(teams))} for {len(teams)} teams "
            f"({calculate_byes(len(teams))} byes, {total_rounds} rounds)"
        )

    matches = []
    current_teams = list(teams)
    round_number = 1
    while len(current_teams) > 1:
        bracket_round, cursor = build_bracket_round(current_teams, round_number, total_rounds, config, cursor)
        matches.extend(bracket_round.matches)

        teams_by_id = {team.id: team for team in current_teams}
        next_round_teams = [teams_by_id[match.home_team_id] for match in bracket_round.matches]
        if bracket_round.bye_team is not None:
            next_round_teams.append(bracket_round.bye_team)

        current_teams = next_round_teams
        round_number += 1
        cursor = cursor.shift(settings.round_interval_days)

    return matches, cursor


def advance_round_from_results(
    played_round: BracketRound,
    results: Dict[int, str],
    config: TournamentConfig,
    cursor: ScheduleCursor,
) -> Tuple[BracketRound, ScheduleCursor]:
    """
    Build the next round from the winners of a played round.

    Args:
        played_round: Round whose matches have been played
        results: Winning team id keyed by match number
        config: Tournament the matches belong to
        cursor: Number and date for the new round's matches

    Returns:
        The next round (winners in match order, then the bye team) and the
        advanced cursor. When a single team is left the round has no matches
        and its champion is set.

    Raises:
        IncompleteRoundError: a match of the played round has no result
        InvalidResultError: a winner did not take part in its match
    """
    missing = [match.match_number for match in played_round.matches if match.match_number not in results]
    if missing:
        raise IncompleteRoundError(missing)

    teams_by_id = {team.id: team for team in played_round.teams}
    next_round_teams = []
    for match in played_round.matches:
        winner_id = results[match.match_number]
        if winner_id not in (match.home_team_id, match.away_team_id):
            raise InvalidResultError(match.match_number, winner_id)
        next_round_teams.append(teams_by_id[winner_id])
    if played_round.bye_team is not None:
        next_round_teams.append(played_round.bye_team)

    return build_bracket_round(
        next_round_teams,
        played_round.round_number + 1,
        played_round.total_rounds,
        config,
        cursor,
    )
