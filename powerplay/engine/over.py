"""
Over aggregation: bowler choice, six deliveries, strike rotation and
bringing in new batsmen.
"""
import logging
import random
from dataclasses import dataclass, field
from typing import Callable, Optional

from powerplay.engine.deliveries import simulate_ball
from powerplay.engine.profile import MatchConditions, PlayerSkillProfile, TeamSheet
from powerplay.engine.records import (
    BALLS_PER_OVER,
    WICKETS_PER_INNINGS,
    BallOutcome,
    BatterInnings,
    BowlerSpell,
    InningsRecord,
    OverRecord,
)
from powerplay.exceptions import NoEligibleBowlerError

logger = logging.getLogger(__name__)

DEFAULT_MAX_OVERS_PER_BOWLER = 4

# (striker, bowler, rng, conditions) -> BallOutcome
Deliver = Callable[[PlayerSkillProfile, PlayerSkillProfile, random.Random, Optional[MatchConditions]], BallOutcome]


@dataclass
class CreaseState:
    """Who is in, who is on strike, who is still to come, who has bowled"""
    batsmen: list  # the two at the crease
    yet_to_bat: list = field(default_factory=list)
    on_strike: int = 0  # index into batsmen
    wickets: int = 0
    overs_bowled: dict = field(default_factory=dict)  # profile -> overs
    last_bowler: Optional[PlayerSkillProfile] = None

    @classmethod
    def open(cls, lineup) -> "CreaseState":
        """First two in the lineup open, the rest wait in order"""
        players = list(lineup)
        return cls(batsmen=players[:2], yet_to_bat=players[2:])

    @property
    def striker(self) -> PlayerSkillProfile:
        return self.batsmen[self.on_strike]

    @property
    def non_striker(self) -> PlayerSkillProfile:
        return self.batsmen[1 - self.on_strike]

    @property
    def all_out(self) -> bool:
        return self.wickets >= WICKETS_PER_INNINGS

    def rotate_strike(self):
        self.on_strike = 1 - self.on_strike

    def dismiss_striker(self, rng: random.Random) -> Optional[PlayerSkillProfile]:
        """Record the wicket and send in a replacement on strike.

        Returns the new batsman, or None when nobody is left.
        """
        self.wickets += 1
        if self.all_out or not self.yet_to_bat:
            return None
        incoming = self.yet_to_bat.pop(rng.randrange(len(self.yet_to_bat)))
        self.batsmen[self.on_strike] = incoming
        return incoming

    def overs_by(self, bowler: PlayerSkillProfile) -> int:
        return self.overs_bowled.get(bowler, 0)


class OverAggregator:
    """
    Bowls overs for one innings at a time.

    The aggregator owns no innings state itself: the CreaseState passed to
    simulate_over() is mutated in place, and so is the InningsRecord when one
    is given.
    """

    def __init__(
        self,
        rng: random.Random,
        conditions: Optional[MatchConditions] = None,
        max_overs_per_bowler: Optional[int] = DEFAULT_MAX_OVERS_PER_BOWLER,
        deliver: Deliver = simulate_ball,
    ):
        self.rng = rng
        self.conditions = conditions
        self.max_overs_per_bowler = max_overs_per_bowler
        self.deliver = deliver

    def eligible_bowlers(self, bowling: TeamSheet, crease: CreaseState) -> list[PlayerSkillProfile]:
        """Bowling-capable players with overs left under the cap"""
        return [
            p for p in bowling.bowling_options
            if self.max_overs_per_bowler is None or crease.overs_by(p) < self.max_overs_per_bowler
        ]

    def select_bowler(self, bowling: TeamSheet, crease: CreaseState, number: int = 1) -> PlayerSkillProfile:
        """Pick the bowler for an over, avoiding back-to-back overs where possible"""
        eligible = self.eligible_bowlers(bowling, crease)
        if not eligible:
            logger.warning("%s has no eligible bowler for over %d", bowling.name, number)
            raise NoEligibleBowlerError(
                f"{bowling.name} has no eligible bowler for over {number}",
                team=bowling.name,
                over=number,
            )

        rested = [p for p in eligible if p != crease.last_bowler]
        return self.rng.choice(rested or eligible)

    def simulate_over(
        self,
        batting: TeamSheet,
        bowling: TeamSheet,
        crease: CreaseState,
        number: int = 1,
        innings: Optional[InningsRecord] = None,
    ) -> OverRecord:
        """
        Bowl one over.

        Stops early only when the batting side is all out or, with an innings
        record carrying a target, when the chase is won. Strike changes after
        every odd-run ball and once more when the over ends.
        """
        bowler = self.select_bowler(bowling, crease, number)
        starting_pair = (crease.striker.name, crease.non_striker.name)

        if innings is not None:
            for batsman in crease.batsmen:
                innings.batters.setdefault(batsman, BatterInnings(player=batsman))
            innings.bowlers.setdefault(bowler, BowlerSpell(player=bowler))

        balls = []
        runs = wickets = 0

        for _ in range(BALLS_PER_OVER):
            striker = crease.striker
            outcome = self.deliver(striker, bowler, self.rng, self.conditions)
            balls.append(outcome)
            runs += outcome.runs

            if innings is not None:
                self._score(innings, striker, bowler, outcome)

            if outcome.is_wicket:
                wickets += 1
                incoming = crease.dismiss_striker(self.rng)
                if incoming is None:
                    break
                if innings is not None:
                    innings.batters.setdefault(incoming, BatterInnings(player=incoming))
            elif outcome.runs % 2 == 1:
                crease.rotate_strike()

            if innings is not None and innings.chase_won:
                break

        crease.rotate_strike()
        crease.overs_bowled[bowler] = crease.overs_by(bowler) + 1
        crease.last_bowler = bowler

        if innings is not None and len(balls) == BALLS_PER_OVER:
            innings.overs += 1
            innings.balls = 0

        over = OverRecord(
            number=number,
            balls=tuple(balls),
            runs=runs,
            wickets=wickets,
            bowler=bowler.name,
            batsmen=starting_pair,
        )
        if innings is not None:
            innings.over_records.append(over)

        logger.debug("Over %d: %s bowling, %d/%d [%s]", number, bowler.name, runs, wickets, over)
        return over

    @staticmethod
    def _score(innings: InningsRecord, striker: PlayerSkillProfile, bowler: PlayerSkillProfile, outcome: BallOutcome):
        innings.runs += outcome.runs
        innings.balls += 1

        batter = innings.batters.setdefault(striker, BatterInnings(player=striker))
        batter.balls += 1
        batter.runs += outcome.runs
        if outcome.is_four:
            batter.fours += 1
        if outcome.is_six:
            batter.sixes += 1

        spell = innings.bowlers[bowler]
        spell.runs += outcome.runs
        spell.balls += 1
        if spell.balls == BALLS_PER_OVER:
            spell.overs += 1
            spell.balls = 0

        if outcome.is_wicket:
            innings.wickets += 1
            spell.wickets += 1
            batter.is_out = True
            batter.dismissal = outcome.wicket_type or "out"
            batter.bowler = bowler.name
