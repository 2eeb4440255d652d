"""
Group distribution for tournaments too large for a single league.
"""
import logging
import math
import random
from typing import List, Optional

from .models import Group, Team

logger = logging.getLogger(__name__)

SINGLE_GROUP_MAX_TEAMS = 8


def get_group_count(team_count: int) -> int:
    """Number of groups for a team count: up to 8 teams play as one group."""
    if team_count <= SINGLE_GROUP_MAX_TEAMS:
        return 1
    elif team_count <= 16:
        return 4
    elif team_count <= 24:
        return 6
    else:
        return 8


def get_group_label(index: int) -> str:
    """A, B, C, ... for 0-based group indexes."""
    return chr(ord('A') + index)


def calculate_group_sizes(team_count: int, group_count: int) -> List[int]:
    """
    Sizes for splitting team_count teams into group_count groups.

    The first (team_count % group_count) groups get one extra team, so sizes
    differ by at most one: 10 teams in 4 groups -> [3, 3, 2, 2].
    """
    if group_count <= 0:
        return []
    base_size = team_count // group_count
    remainder = team_count % group_count
    return [base_size + 1 if i < remainder else base_size for i in range(group_count)]


def distribute_teams_into_groups(teams: List[Team], rng: Optional[random.Random] = None,
                                 shuffle: bool = True) -> List[Group]:
    """
    Shuffle teams and cut them into balanced, labeled groups.

    Args:
        teams: Eligible teams
        rng: Random source for the shuffle; a fresh unseeded one when omitted
        shuffle: False keeps the given order (caller already shuffled)

    Returns:
        Groups labeled A, B, C... in order. Empty groups are dropped.
    """
    ordered = list(teams)
    if shuffle:
        (rng or random.Random()).shuffle(ordered)

    group_count = get_group_count(len(ordered))
    sizes = calculate_group_sizes(len(ordered), group_count)

    groups = []
    start = 0
    for index, size in enumerate(sizes):
        chunk = ordered[start:start + size]
        start += size
        if not chunk:
            continue
        groups.append(Group(
            id=f"group_{index + 1}",
            label=get_group_label(index),
            teams=tuple(chunk),
        ))

    logger.debug(
        f"Distributed {len(ordered)} teams into {len(groups)} group(s) "
        f"of up to {math.ceil(len(ordered) / group_count) if ordered else 0}"
    )
    return groups
