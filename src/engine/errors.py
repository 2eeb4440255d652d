"""
Exceptions raised by schedule generation.

Generation never returns partial results: any of these propagates to the
caller, which discards the attempt.
"""


class ScheduleError(Exception):
    """Base class for schedule generation failures."""


class UnsupportedFormatError(ScheduleError):
    def __init__(self, tag):
        self.tag = tag
        super().__init__(f"Unsupported tournament format: {tag}")


class InsufficientTeamsError(ScheduleError):
    def __init__(self, team_count, minimum=2):
        self.team_count = team_count
        self.minimum = minimum
        super().__init__(f"At least {minimum} teams are needed to generate matches ({team_count} given)")


class BracketResultError(ScheduleError):
    """Results supplied for an elimination round cannot advance the bracket."""


class IncompleteRoundError(BracketResultError):
    def __init__(self, missing_match_numbers):
        self.missing_match_numbers = list(missing_match_numbers)
        numbers = ', '.join(str(n) for n in self.missing_match_numbers)
        super().__init__(f"No result for match(es) {numbers}")


class InvalidResultError(BracketResultError):
    def __init__(self, match_number, winner_id):
        self.match_number = match_number
        self.winner_id = winner_id
        super().__init__(f"Team {winner_id} did not play match {match_number}")
