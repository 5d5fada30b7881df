import random
from faker import Faker
from powerplay.engine.profile import BowlingType, PlayerRole
from powerplay.models import Player

# Initialize Faker instances - use en_US as fallback for unavailable locales
fake_in = Faker('en_IN')
fake_au = Faker('en_AU')
fake_en = Faker('en_GB')
fake_za = Faker('en_US')  # en_ZA not available, using en_US
fake_nz = Faker('en_NZ')


class PlayerGenerator:
    """Generates fictional cricket players with rated attributes"""

    # Nationality distribution (weighted towards Indian players)
    NATIONALITIES = [
        ("India", fake_in, 60),
        ("Australia", fake_au, 12),
        ("England", fake_en, 10),
        ("South Africa", fake_za, 9),
        ("New Zealand", fake_nz, 9),
    ]

    # Bowling type distribution by role
    BOWLING_TYPES = {
        PlayerRole.BOWLER: [
            (BowlingType.FAST, 40),
            (BowlingType.MEDIUM, 15),
            (BowlingType.OFF_SPIN, 20),
            (BowlingType.LEG_SPIN, 15),
            (BowlingType.LEFT_ARM_SPIN, 10),
        ],
        PlayerRole.ALL_ROUNDER: [
            (BowlingType.FAST, 30),
            (BowlingType.MEDIUM, 25),
            (BowlingType.OFF_SPIN, 25),
            (BowlingType.LEG_SPIN, 10),
            (BowlingType.LEFT_ARM_SPIN, 10),
        ],
    }

    # Balanced XI: 1 WK, 4 batsmen, 2 all-rounders, 4 bowlers
    XI_COMPOSITION = [
        (PlayerRole.WICKET_KEEPER, 1),
        (PlayerRole.BATSMAN, 4),
        (PlayerRole.ALL_ROUNDER, 2),
        (PlayerRole.BOWLER, 4),
    ]

    # Batting order: top order first, bowlers last
    BATTING_ORDER = {
        PlayerRole.BATSMAN: 0,
        PlayerRole.WICKET_KEEPER: 0,
        PlayerRole.ALL_ROUNDER: 1,
        PlayerRole.BOWLER: 2,
    }

    # Base skill by squad tier
    TIER_BASES = {
        "elite": (22, 26),
        "star": (20, 24),
        "good": (18, 22),
        "solid": (16, 20),
    }

    @staticmethod
    def _weighted_choice(choices: list[tuple], rng=random):
        """Select from weighted choices [(item, weight), ...]"""
        items = [c[0] for c in choices]
        weights = [c[1] for c in choices]
        return rng.choices(items, weights=weights, k=1)[0]

    @staticmethod
    def _generate_attribute(base: int, variance: int = 3, minimum: int = 1, rng=random) -> int:
        """Generate an attribute value with some variance"""
        value = base + rng.randint(-variance, variance)
        return max(minimum, min(100, value))  # Clamp between minimum-100

    @classmethod
    def generate_player(cls, role: PlayerRole = None, tier: str = "good", rng=random) -> Player:
        """
        Generate a single player.

        Args:
            role: Specific role, or random if None
            tier: "elite", "star", "good" or "solid"; sets the attribute base
            rng: Random source, the random module by default
        """
        nationality, faker_instance = cls._weighted_choice(
            [((n[0], n[1]), n[2]) for n in cls.NATIONALITIES], rng
        )

        if role is None:
            role = cls._weighted_choice([(r, 1) for r, _ in cls.XI_COMPOSITION], rng)

        low, high = cls.TIER_BASES.get(tier, cls.TIER_BASES["good"])
        base = rng.randint(low, high)

        def attr(b: int, variance: int = 3, minimum: int = 1) -> int:
            return cls._generate_attribute(b, variance, minimum, rng)

        if role in cls.BOWLING_TYPES:
            bowling_type = cls._weighted_choice(cls.BOWLING_TYPES[role], rng)
        elif role == PlayerRole.BATSMAN:
            # Part-timers
            bowling_type = rng.choice([BowlingType.NONE, BowlingType.MEDIUM, BowlingType.OFF_SPIN])
        else:
            bowling_type = BowlingType.NONE

        # Skills sit low on the 1-100 scale, skill points already count all five
        if role == PlayerRole.BATSMAN:
            vs_spin, vs_seam = attr(base + 15), attr(base + 15)
            bowling_skill, keeping = attr(5), attr(2, 1)
            delivery, control = attr(10, 5, 0), attr(10, 5, 0)
        elif role == PlayerRole.BOWLER:
            vs_spin, vs_seam = attr(10), attr(10)
            bowling_skill, keeping = attr(base + 15), attr(2, 1)
            delivery, control = attr(base + 25, 5, 0), attr(base + 17, 5, 0)
        elif role == PlayerRole.ALL_ROUNDER:
            vs_spin, vs_seam = attr(base + 5), attr(base + 5)
            bowling_skill, keeping = attr(base + 5), attr(2, 1)
            delivery, control = attr(base + 5, 5, 0), attr(base + 2, 5, 0)
        else:  # Wicket keeper
            vs_spin, vs_seam = attr(base + 2), attr(base + 2)
            bowling_skill, keeping = attr(5), attr(base + 15)
            delivery, control = 0, 0

        # Bowling sub-attributes (0-100, only meaningful for the delivery family)
        if bowling_type == BowlingType.NONE:
            pace = spin = control = 0
        elif bowling_type.is_spin:
            pace, spin = attr(5, 3, 0), delivery
        else:
            pace, spin = delivery, attr(5, 3, 0)

        # Names follow rng too, so a seeded squad is fully reproducible
        faker_instance.seed_instance(rng.getrandbits(32))

        return Player(
            name=faker_instance.name_male(),
            age=rng.randint(20, 35),
            country=nationality,
            role=role,
            bowling_skill=bowling_skill,
            fielding_skill=attr(base),
            wicket_keeping_skill=keeping,
            batting_vs_spin=vs_spin,
            batting_vs_seam=vs_seam,
            bowling_type=bowling_type,
            pace=pace,
            spin=spin,
            control=control,
            form=attr(60, 15, 0),
            fitness=attr(85, 10, 0),
            experience=rng.randint(20, 100),
        )

    @classmethod
    def generate_squad(cls, tier: str = "good", rng=random) -> list[Player]:
        """
        A balanced playing XI in batting order, with batting positions set.
        """
        players = []
        for role, count in cls.XI_COMPOSITION:
            players.extend(cls.generate_player(role=role, tier=tier, rng=rng) for _ in range(count))

        players.sort(key=lambda p: (cls.BATTING_ORDER[p.role], -p.batting_average_skill))
        for position, player in enumerate(players, start=1):
            player.batting_position = position
        return players
