"""
Tests for schedule statistics.
"""
import sys
import os
import random

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from engine.formats import generate_matches
from engine.models import TournamentFormat
from engine.settings import ScheduleSettings
from engine.stats import calculate_tournament_stats


class TestTournamentStats:

    def test_round_robin_stats(self, make_config, make_teams):
        teams = make_teams(4)
        result = generate_matches(make_config(), teams)
        assert calculate_tournament_stats(result.matches, teams) == {
            'total_matches': 6,
            'total_teams': 4,
            'estimated_duration_days': 3,
            'group_stage_matches': 6,
            'elimination_matches': 0,
        }

    def test_mixed_stats(self, make_config, make_teams):
        teams = make_teams(10)
        result = generate_matches(make_config(TournamentFormat.MIXED), teams, rng=random.Random(1))
        stats = calculate_tournament_stats(result.matches, teams)
        assert stats['total_matches'] == 15
        assert stats['estimated_duration_days'] == 8
        assert stats['group_stage_matches'] == 8
        assert stats['elimination_matches'] == 7

    def test_elimination_stats_odd_total(self, make_config, lettered_teams):
        teams = lettered_teams(5)
        result = generate_matches(make_config(TournamentFormat.ELIMINATION), teams)
        stats = calculate_tournament_stats(result.matches, teams)
        assert stats['total_matches'] == 4
        assert stats['estimated_duration_days'] == 2
        assert stats['elimination_matches'] == 4

    def test_empty_schedule(self):
        assert calculate_tournament_stats([], []) == {
            'total_matches': 0,
            'total_teams': 0,
            'estimated_duration_days': 0,
            'group_stage_matches': 0,
            'elimination_matches': 0,
        }

    def test_matches_per_day_setting(self, make_config, make_teams):
        teams = make_teams(4)
        result = generate_matches(make_config(), teams)
        stats = calculate_tournament_stats(result.matches, teams, ScheduleSettings(matches_per_day=4))
        assert stats['estimated_duration_days'] == 2

    def test_stats_are_pure(self, make_config, make_teams):
        teams = make_teams(9)
        result = generate_matches(make_config(), teams, rng=random.Random(6))
        matches_before = list(result.matches)
        first = calculate_tournament_stats(result.matches, teams)
        second = calculate_tournament_stats(result.matches, teams)
        assert first == second
        assert list(result.matches) == matches_before
