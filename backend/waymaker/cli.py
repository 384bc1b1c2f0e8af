"""
Command line interface.

Usage:
    waymaker inspect trail.gpx
    waymaker plan trail.gpx --stages 3 --loop --output planned.gpx
    waymaker places "Lac Blanc"
    waymaker serve --port 8000
"""

import asyncio
import logging
import sys
from pathlib import Path

import click

from waymaker.api.deps import get_geocoding_client, get_planner, get_profile_catalog
from waymaker.config import settings
from waymaker.features.gpx import GPXExporterService, GPXExportOptions, GPXParserService
from waymaker.shared.exceptions import WaymakerError
from waymaker.shared.formatters import format_coordinates, format_distance


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Debug logging")
def cli(verbose):
    """WayMaker hiking route planner."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else getattr(logging, settings.log_level.upper()),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stderr,
    )


@cli.command()
@click.argument("gpx_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--max-points", default=None, type=int, help="Track simplification cap")
def inspect(gpx_file, max_points):
    """Show what a GPX file contains and which waypoints would be planned."""
    try:
        result = GPXParserService.parse(gpx_file.read_bytes())
    except WaymakerError as e:
        raise click.ClickException(str(e))

    click.echo(f"File: {gpx_file.name}")
    if result.metadata:
        if result.metadata.name:
            click.echo(f"Name: {result.metadata.name}")
        if result.metadata.author:
            click.echo(f"Author: {result.metadata.author}")
        if result.metadata.time:
            click.echo(f"Time: {result.metadata.time.isoformat()}")

    click.echo(
        f"Waypoints: {len(result.waypoints)}, "
        f"tracks: {len(result.tracks)}, routes: {len(result.routes)}"
    )

    for kind, items in (("Route", result.routes), ("Track", result.tracks)):
        for item in items:
            click.echo(
                f"  {kind} '{item.name}': {len(item.waypoints)} points, "
                f"{format_distance(item.total_distance * 1000)}"
            )
            if item.bounds:
                b = item.bounds
                click.echo(
                    f"    bounds {format_coordinates(b.min_lat, b.min_lng)} → "
                    f"{format_coordinates(b.max_lat, b.max_lng)}"
                )

    selected = GPXParserService.to_waypoints(result, max_points)
    click.echo()
    click.echo(f"Selected waypoints ({len(selected)}):")
    for wp in selected:
        click.echo(f"  {wp.name or wp.id}: {format_coordinates(wp.lat, wp.lng)}")


@cli.command()
@click.argument("gpx_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--stages", default=1, type=click.IntRange(1, 30), help="Number of stages")
@click.option("--loop", is_flag=True, help="Return to the first waypoint")
@click.option("--profile", "profile_id", default=None, help="Hiking profile id")
@click.option(
    "--split/--no-split",
    default=False,
    help="One GPX track per stage or a single track (default)"
)
@click.option("--pois/--no-pois", default=False, help="Add refuges and water points")
@click.option(
    "--output", "-o",
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output GPX file (stdout when omitted)"
)
def plan(gpx_file, stages, loop, profile_id, split, pois, output):
    """
    Plan a route from a GPX file and export it as GPX.

    Waypoints are taken from the file's first route, else its first
    track (simplified), else its waypoints.
    """
    catalog = get_profile_catalog()
    profile = catalog.get(profile_id) if profile_id else catalog.default
    if profile_id and profile is None:
        known = ", ".join(p.id for p in catalog.profiles)
        raise click.BadParameter(f"unknown profile (known: {known})", param_hint="--profile")

    try:
        content = asyncio.run(
            _run_plan(gpx_file, stages, loop, profile, split, pois)
        )
    except WaymakerError as e:
        raise click.ClickException(str(e))

    if output:
        output.write_text(content, encoding="utf-8")
        click.echo(f"GPX saved: {output}", err=True)
    else:
        click.echo(content)


async def _run_plan(gpx_file: Path, stages: int, loop: bool, profile, split: bool, pois: bool) -> str:
    """Async implementation of plan command."""
    result = GPXParserService.parse(gpx_file.read_bytes())
    waypoints = GPXParserService.to_waypoints(result)
    click.echo(f"Planning with {len(waypoints)} waypoints...", err=True)

    planner = get_planner()
    planned = await planner.plan(
        waypoints,
        is_loop=loop,
        stage_count=stages,
        profile=profile,
        include_pois=pois,
    )

    route = planned.route
    click.echo(
        f"{route.name}: {format_distance(route.total_distance * 1000)}, "
        f"+{route.total_ascent} m/-{route.total_descent} m, {len(route.stages)} stages",
        err=True,
    )
    for warning in planned.warnings:
        click.echo(f"Warning: {warning}", err=True)

    options = GPXExportOptions(
        split_by_stages=split,
        include_refuges=pois,
        include_water_points=pois,
    )
    return GPXExporterService.export(
        route, options, refuges=planned.refuges, water_points=planned.water_points
    )


@cli.command()
@click.argument("query")
@click.option("--limit", default=5, type=click.IntRange(1, 20), help="Max results")
def places(query, limit):
    """Search places by name (coordinates usable as waypoints)."""
    try:
        results = asyncio.run(get_geocoding_client().search(query, limit=limit))
    except WaymakerError as e:
        raise click.ClickException(str(e))

    if not results:
        click.echo("No places found")
        return
    for place in results:
        click.echo(f"{format_coordinates(place.lat, place.lng)}  {place.name}")


@cli.command()
@click.option("--host", default="127.0.0.1", help="Bind address")
@click.option("--port", default=8000, type=int, help="Port")
@click.option("--reload", is_flag=True, help="Auto-reload on code changes")
def serve(host, port, reload):
    """Run the HTTP API with uvicorn."""
    import uvicorn

    uvicorn.run("waymaker.main:app", host=host, port=port, reload=reload)


if __name__ == "__main__":
    cli()
