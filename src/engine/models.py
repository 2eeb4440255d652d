from dataclasses import dataclass, field, replace
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Optional, Tuple


class TournamentFormat(Enum):
    ROUND_ROBIN = 'round_robin'
    ELIMINATION = 'elimination'
    MIXED = 'mixed'

    @classmethod
    def parse(cls, tag):
        """Resolve a format tag; 'points' is the tag the league app stores for round-robin."""
        if isinstance(tag, cls):
            return tag
        normalized = str(tag).strip().lower()
        if normalized == 'points':
            return cls.ROUND_ROBIN
        return cls(normalized)


class MatchStatus(Enum):
    SCHEDULED = 'scheduled'


class Stage(Enum):
    GROUP = 'group'
    QUARTER = 'quarter'
    SEMI = 'semi'
    FINAL = 'final'


def to_datetime(value) -> datetime:
    """Accept a datetime, a date or an ISO string (YAML gives dates for '2026-07-01')."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, str):
        value = value.strip()
        # JavaScript toISOString() ends in 'Z', which fromisoformat only reads from 3.11
        if value.endswith(('Z', 'z')):
            value = value[:-1] + '+00:00'
        return datetime.fromisoformat(value)
    raise ValueError(f"Invalid date: {value!r}")


def to_bool(value) -> bool:
    """Read a flag from YAML or JSON, where it may arrive as a string."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in ('true', 'yes', 'on', '1'):
            return True
        if normalized in ('false', 'no', 'off', '0', ''):
            return False
    raise ValueError(f"Invalid boolean: {value!r}")


@dataclass(frozen=True)
class Team:
    id: str
    name: str
    active: bool = True

    @classmethod
    def from_dict(cls, data):
        if not isinstance(data, dict):
            raise ValueError(f"Invalid team entry: {data!r}")
        if not data.get('id'):
            raise ValueError(f"Team without id: {data!r}")
        return cls(
            id=str(data['id']),
            name=str(data.get('name') or data['id']),
            active=to_bool(data.get('active', True)),
        )


@dataclass(frozen=True)
class TournamentConfig:
    id: str
    format: TournamentFormat
    start_date: datetime
    location: Optional[str] = None
    qualifiers_per_group: Optional[int] = None
    name: Optional[str] = None

    @classmethod
    def from_dict(cls, data):
        """Build a config from a plain mapping (YAML file or JSON payload).

        The format is kept as the raw tag when it is not one of the known
        formats, so that dispatch can report it as unsupported.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Tournament must be a mapping, got {data!r}")
        if not data.get('id'):
            raise ValueError('Tournament id is required')
        if not data.get('start_date'):
            raise ValueError('Tournament start_date is required')

        tag = data.get('format', data.get('type'))
        try:
            tournament_format = TournamentFormat.parse(tag)
        except ValueError:
            tournament_format = tag

        qualifiers = data.get('qualifiers_per_group', data.get('teams_to_qualify'))
        if qualifiers is not None:
            try:
                qualifiers = int(qualifiers)
            except (TypeError, ValueError):
                raise ValueError(f"qualifiers_per_group must be an integer, got {qualifiers!r}")
            if qualifiers < 1:
                raise ValueError('qualifiers_per_group must be at least 1')

        return cls(
            id=str(data['id']),
            format=tournament_format,
            start_date=to_datetime(data['start_date']),
            location=data.get('location') or None,
            qualifiers_per_group=qualifiers,
            name=data.get('name'),
        )


@dataclass(frozen=True)
class Group:
    id: str
    label: str
    teams: Tuple[Team, ...]

    def to_dict(self):
        return {
            'id': self.id,
            'label': self.label,
            'teams': [team.id for team in self.teams],
        }


@dataclass(frozen=True)
class GeneratedMatch:
    tournament_id: str
    home_team_id: str
    away_team_id: str
    match_date: datetime
    round_label: str
    match_number: int
    stage: Stage
    location: Optional[str] = None
    group_id: Optional[str] = None
    status: MatchStatus = MatchStatus.SCHEDULED

    def to_dict(self):
        """Plain record for bulk insertion by the persistence adapter."""
        record = {
            'tournament_id': self.tournament_id,
            'home_team_id': self.home_team_id,
            'away_team_id': self.away_team_id,
            'match_date': self.match_date.isoformat(),
            'status': self.status.value,
            'round': self.round_label,
            'match_number': self.match_number,
            'stage': self.stage.value,
        }
        if self.location:
            record['location'] = self.location
        if self.group_id:
            record['group_id'] = self.group_id
        return record


@dataclass(frozen=True)
class ScheduleCursor:
    """Next match number and date, passed into and returned from every generator."""
    match_number: int
    match_date: datetime

    @classmethod
    def start(cls, start_date):
        return cls(match_number=1, match_date=to_datetime(start_date))

    def next_number(self):
        return replace(self, match_number=self.match_number + 1)

    def shift(self, days):
        return replace(self, match_date=self.match_date + timedelta(days=days))


@dataclass(frozen=True)
class GenerationResult:
    matches: Tuple[GeneratedMatch, ...]
    groups: Tuple[Group, ...] = field(default_factory=tuple)

    def to_dict(self):
        result = {'matches': [match.to_dict() for match in self.matches]}
        if self.groups:
            result['groups'] = [group.to_dict() for group in self.groups]
        return result
