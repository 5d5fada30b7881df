#!/usr/bin/env python3
"""
CLI for the Powerplay T20 match simulation
"""
import asyncio
import random

import click
from rich.console import Console
from rich.table import Table
from rich.panel import Panel

from powerplay.config import settings
from powerplay.database import init_db, get_session
from powerplay.logging_config import setup_logging
from powerplay.engine import MatchEngine, MatchConditions, PitchType, PlayerRole, Weather
from powerplay.engine.rating import contextual_rating, display_band, star_rating
from powerplay.exceptions import ConfigurationError, TeamNotFoundError
from powerplay.generators import TeamGenerator
from powerplay.roster import RosterRepository

console = Console()

STAR_STYLES = {
    "yellow": "yellow",
    "red": "red",
    "orange": "dark_orange",
    "blue": "blue",
    "green": "green",
    "purple": "magenta",
}


@click.group()
@click.option("--log-level", default=None, help="Override LOG_LEVEL (e.g. DEBUG)")
def cli(log_level: str):
    """Powerplay - T20 Match Simulation"""
    setup_logging(log_level or settings.LOG_LEVEL)


@cli.command()
def init():
    """Initialize the database"""
    console.print("[yellow]Initializing database...[/yellow]")
    init_db()
    console.print("[green]Database initialized successfully![/green]")


@cli.command()
@click.option("--count", default=8, help="Number of franchises to generate (max 8)")
@click.option("--seed", type=int, default=None, help="Seed for reproducible squads")
def generate_teams(count: int, seed: int):
    """Generate franchise teams with balanced playing XIs"""
    console.print(f"[yellow]Generating {count} teams...[/yellow]")

    init_db()
    rng = random.Random(seed)
    session = get_session()
    repo = RosterRepository(session)

    table = Table(title="Generated Teams")
    table.add_column("ID")
    table.add_column("Team", style="cyan")
    table.add_column("City")
    table.add_column("Home Ground")
    table.add_column("Squad", justify="right")

    for team, players in TeamGenerator.create_teams(min(count, 8), rng=rng):
        team = repo.add_team(team, players)
        table.add_row(str(team.id), team.name, team.city, team.home_ground, str(team.squad_size))

    console.print(table)
    session.close()


@cli.command()
def list_teams():
    """List all teams in the database"""
    session = get_session()
    teams = RosterRepository(session).list_teams()

    if not teams:
        console.print("[red]No teams found. Run 'generate-teams' first.[/red]")
        session.close()
        return

    table = Table(title=f"Teams ({len(teams)} total)")
    table.add_column("ID")
    table.add_column("Team", style="cyan")
    table.add_column("Short")
    table.add_column("City")
    table.add_column("Squad", justify="right")

    for team in teams:
        table.add_row(str(team.id), team.name, team.short_name, team.city, str(team.squad_size))

    console.print(table)
    session.close()


def _conditions(pitch: str, weather: str) -> MatchConditions:
    return MatchConditions(pitch_type=PitchType(pitch), weather=Weather(weather))


def _load_lineups(team_ids: tuple, demo: bool, rng: random.Random):
    """Two TeamSheets, from the database or generated on the fly"""
    if demo:
        return TeamGenerator.demo_lineups(rng=rng)

    if len(team_ids) != 2:
        raise click.UsageError("Give two team IDs, or use --demo")

    session = get_session()
    try:
        repo = RosterRepository(session)
        return repo.lineup(team_ids[0]), repo.lineup(team_ids[1])
    finally:
        session.close()


def _stars(rating: int) -> str:
    band = display_band(rating)
    style = STAR_STYLES[band.color.value]
    return f"[{style}]{'★' * band.stars}[/{style}]"


def _innings_line(innings) -> str:
    return f"{innings.runs}/{innings.wickets} ({innings.overs_display} overs) - RR: {innings.run_rate:.2f}"


@cli.command()
@click.argument("team_ids", nargs=-1, type=int)
@click.option("--quick", is_flag=True, help="Headline result only, no ball-by-ball play")
@click.option("--live", is_flag=True, help="Stream the match over by over")
@click.option("--pacing", type=float, default=None, help="Seconds between overs in live mode")
@click.option("--seed", type=int, default=None, help="Seed for a reproducible match")
@click.option("--pitch", type=click.Choice([p.value for p in PitchType]), default=PitchType.STANDARD.value)
@click.option("--weather", type=click.Choice([w.value for w in Weather]), default=Weather.SUNNY.value)
@click.option("--demo", is_flag=True, help="Use two generated teams instead of the database")
def simulate(team_ids, quick, live, pacing, seed, pitch, weather, demo):
    """Simulate a T20 match between two teams (first ID bats first)"""
    if quick and live:
        raise click.UsageError("--quick and --live cannot be combined")

    seed = seed if seed is not None else settings.MATCH_SEED
    rng = random.Random(seed)

    try:
        team1, team2 = _load_lineups(team_ids, demo, rng)
    except TeamNotFoundError as exc:
        console.print(f"[red]{exc}[/red]")
        raise SystemExit(1)

    engine = MatchEngine(
        rng=rng,
        conditions=_conditions(pitch, weather),
        pacing_seconds=settings.OVER_PACING_SECONDS if pacing is None else pacing,
        max_overs_per_bowler=settings.MAX_OVERS_PER_BOWLER,
    )

    console.print(Panel(f"[bold cyan]{team1.name}[/bold cyan] v [bold magenta]{team2.name}[/bold magenta]"))
    console.print(f"Pitch: {pitch}  Weather: {weather}\n")

    try:
        if quick:
            record = engine.simulate_quick(team1, team2)
        elif live:
            record = _run_live(engine, team1, team2)
            if record is None:
                return
        else:
            console.print("[yellow]Simulating match...[/yellow]\n")
            record = engine.simulate_match(team1, team2)
    except ConfigurationError as exc:
        console.print(f"[red]Cannot start match: {exc}[/red]")
        raise SystemExit(1)

    # Display result
    console.print(Panel("[bold]Match Result[/bold]"))
    console.print(f"[cyan]{record.team1}:[/cyan] {_innings_line(record.first_innings)}")
    console.print(f"[magenta]{record.team2}:[/magenta] {_innings_line(record.second_innings)}")
    console.print(f"\n[bold green]{record.summary}[/bold green]")

    if record.is_quick:
        return

    # Show scorecards
    console.print("\n[bold]First Innings Scorecard:[/bold]")
    _print_scorecard(record.first_innings)

    console.print("\n[bold]Second Innings Scorecard:[/bold]")
    _print_scorecard(record.second_innings)


def _run_live(engine: MatchEngine, team1, team2):
    """Run simulate_live, printing each over as it completes. None if abandoned."""

    def on_over(event):
        over = event.over
        balls = " ".join(str(b) for b in over.balls)
        console.print(
            f"Over {over.number:>2}  {over.bowler:<22} {balls:<14} "
            f"{over.runs:>2} runs  [bold]{event.innings_runs}/{event.innings_wickets}[/bold]"
        )
        for ball in over.balls:
            if ball.is_wicket:
                console.print(f"         [red]{ball.commentary}[/red]")

    def on_innings(event):
        innings = event.innings
        console.print(f"\n[bold]End of innings {event.innings_number}:[/bold] {innings.batting_team} {_innings_line(innings)}")
        if event.innings_number == 1:
            console.print(f"[yellow]{innings.bowling_team} need {innings.runs + 1} to win[/yellow]\n")

    def on_cancel(event):
        console.print(f"\n[red]Match abandoned during {event.cancelled_during.value}[/red]")

    console.print(f"[yellow]Live match, {engine.pacing_seconds:g}s between overs. Ctrl+C to abandon.[/yellow]\n")
    try:
        return asyncio.run(engine.simulate_live(
            team1, team2, on_over=on_over, on_innings=on_innings, on_cancel=on_cancel
        ))
    except KeyboardInterrupt:
        return None


def _print_scorecard(innings):
    """Print innings scorecard"""
    # Batting
    bat_table = Table(title=f"{innings.batting_team} Batting")
    bat_table.add_column("Batter", style="cyan")
    bat_table.add_column("Dismissal")
    bat_table.add_column("R", justify="right")
    bat_table.add_column("B", justify="right")
    bat_table.add_column("4s", justify="right")
    bat_table.add_column("6s", justify="right")
    bat_table.add_column("SR", justify="right")

    for bi in innings.batters.values():
        dismissal = bi.dismissal if bi.is_out else "not out"
        bat_table.add_row(
            bi.player.name,
            dismissal,
            str(bi.runs),
            str(bi.balls),
            str(bi.fours),
            str(bi.sixes),
            f"{bi.strike_rate:.1f}",
        )

    console.print(bat_table)

    # Bowling
    bowl_table = Table(title=f"{innings.bowling_team} Bowling")
    bowl_table.add_column("Bowler", style="magenta")
    bowl_table.add_column("O", justify="right")
    bowl_table.add_column("R", justify="right")
    bowl_table.add_column("W", justify="right")
    bowl_table.add_column("Econ", justify="right")

    for spell in innings.bowlers.values():
        bowl_table.add_row(
            spell.player.name,
            spell.overs_display,
            str(spell.runs),
            str(spell.wickets),
            f"{spell.economy:.1f}",
        )

    console.print(bowl_table)


@cli.command()
@click.argument("team_id", type=int, required=False)
@click.option("--pitch", type=click.Choice([p.value for p in PitchType]), default=PitchType.STANDARD.value)
@click.option("--weather", type=click.Choice([w.value for w in Weather]), default=Weather.SUNNY.value)
@click.option("--seed", type=int, default=None, help="Seed for the --demo team")
@click.option("--demo", is_flag=True, help="Rate a generated team instead of one from the database")
def rate(team_id, pitch, weather, seed, demo):
    """Show a team's contextual ratings under the given conditions"""
    rng = random.Random(seed)
    if demo:
        sheet, _ = TeamGenerator.demo_lineups(rng=rng)
    elif team_id is None:
        raise click.UsageError("Give a team ID, or use --demo")
    else:
        session = get_session()
        try:
            sheet = RosterRepository(session).lineup(team_id)
        except TeamNotFoundError as exc:
            console.print(f"[red]{exc}[/red]")
            raise SystemExit(1)
        finally:
            session.close()

    conditions = _conditions(pitch, weather)

    table = Table(title=f"{sheet.name} - {pitch} pitch, {weather}")
    table.add_column("Player", style="cyan")
    table.add_column("Role", style="magenta")
    table.add_column("Bowling")
    table.add_column("OVR", justify="right", style="green")
    table.add_column("", justify="left")
    table.add_column("BAT", justify="right")
    table.add_column("BOWL", justify="right")
    table.add_column("Field")

    for profile in sheet.players:
        overall = contextual_rating(profile, conditions=conditions)
        field_band = star_rating(profile.fielding_skill)
        table.add_row(
            profile.name,
            profile.role.value,
            profile.bowling_type.value,
            str(overall),
            _stars(overall),
            str(contextual_rating(profile, PlayerRole.BATSMAN, conditions)),
            str(contextual_rating(profile, PlayerRole.BOWLER, conditions)) if profile.can_bowl else "-",
            "★" * field_band.stars,
        )

    console.print(table)


if __name__ == "__main__":
    cli()
