from typing import Optional

from powerplay.engine.profile import XI_SIZE, PlayerRole
from powerplay.engine.records import OVERS_PER_INNINGS


class LineupValidator:
    @staticmethod
    def validate(players: list, max_overs_per_bowler: Optional[int] = 4) -> dict:
        """
        Validate a playing XI before a match.

        Blocking rules (errors):
        1. At least 11 players
        2. At least one player who can bowl
        3. Enough bowling options to get through 20 overs under the per-bowler cap

        Advisory (warnings):
        - No wicket keeper
        - More than 11 players (only the first 11 play)
        """
        errors = []
        warnings = []

        if len(players) < XI_SIZE:
            errors.append(f"Need at least {XI_SIZE} players, got {len(players)}")

        bowler_count = sum(1 for p in players if p.role == PlayerRole.BOWLER)
        ar_count = sum(1 for p in players if p.role == PlayerRole.ALL_ROUNDER)
        bowling_options = bowler_count + ar_count

        if bowling_options == 0:
            errors.append("Need at least 1 bowler or all-rounder")
        elif max_overs_per_bowler is not None and bowling_options * max_overs_per_bowler < OVERS_PER_INNINGS:
            needed = -(-OVERS_PER_INNINGS // max_overs_per_bowler)
            errors.append(
                f"Need {needed} bowling options to bowl {OVERS_PER_INNINGS} overs "
                f"at {max_overs_per_bowler} overs each, got {bowling_options}"
            )

        wk_count = sum(1 for p in players if p.role == PlayerRole.WICKET_KEEPER)
        if wk_count == 0:
            warnings.append("No wicket keeper selected")
        if len(players) > XI_SIZE:
            warnings.append(f"{len(players)} players named, only the first {XI_SIZE} play")

        return {
            "valid": len(errors) == 0,
            "errors": errors,
            "warnings": warnings,
            "breakdown": {
                "batsmen": sum(1 for p in players if p.role == PlayerRole.BATSMAN),
                "bowlers": bowler_count,
                "all_rounders": ar_count,
                "wicket_keepers": wk_count,
            },
        }
