"""CLI for edgeflow."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from edgeflow import __version__
from edgeflow.model import Orientation, RouteParameters, parse_point, parse_rect
from edgeflow.render import Connection, render_svg, segments_to_path_data
from edgeflow.routing.constants import (
    DEFAULT_BACK_EDGE_GAP,
    DEFAULT_CORNER_RADIUS,
    DEFAULT_CURVATURE,
    DEFAULT_HIT_TOLERANCE,
    DEFAULT_OFFSET,
)
from edgeflow.routing.hit_test import hit_test
from edgeflow.routing.waypoints import optimize_waypoints, select_route
from edgeflow.styles import STYLES, get_style
from edgeflow.themes import THEMES

ORIENTATIONS = [o.value for o in Orientation]


def _point(ctx: click.Context, param: click.Parameter, value):
    if value is None:
        return None
    try:
        if isinstance(value, tuple):
            return tuple(parse_point(v) for v in value)
        return parse_point(value)
    except ValueError as e:
        raise click.BadParameter(str(e), ctx=ctx, param=param) from None


def _rect(ctx: click.Context, param: click.Parameter, value):
    if value is None:
        return None
    try:
        return parse_rect(value)
    except ValueError as e:
        raise click.BadParameter(str(e), ctx=ctx, param=param) from None


def connection_options(func):
    """Options shared by every command that routes a connection."""
    options = [
        click.option("--start", required=True, callback=_point,
                     help="Source port position as x,y"),
        click.option("--end", required=True, callback=_point,
                     help="Target port position as x,y"),
        click.option("--source", type=click.Choice(ORIENTATIONS), default="right",
                     help="Direction the source port faces (default: right)"),
        click.option("--target", type=click.Choice(ORIENTATIONS), default="left",
                     help="Direction the target port faces (default: left)"),
        click.option("--style", type=click.Choice(list(STYLES.keys())),
                     default="smoothstep", help="Connection style (default: smoothstep)"),
        click.option("--curvature", type=float, default=DEFAULT_CURVATURE,
                     help=f"Bezier curvature factor (default: {DEFAULT_CURVATURE})"),
        click.option("--corner-radius", type=float, default=DEFAULT_CORNER_RADIUS,
                     help=f"Rounded corner radius (default: {DEFAULT_CORNER_RADIUS})"),
        click.option("--offset", type=float, default=DEFAULT_OFFSET,
                     help=f"Port stub length (default: {DEFAULT_OFFSET})"),
        click.option("--back-edge-gap", type=float, default=DEFAULT_BACK_EDGE_GAP,
                     help=f"Clearance around nodes (default: {DEFAULT_BACK_EDGE_GAP})"),
        click.option("--source-bounds", default=None, callback=_rect,
                     help="Source node rectangle as left,top,right,bottom"),
        click.option("--target-bounds", default=None, callback=_rect,
                     help="Target node rectangle as left,top,right,bottom"),
        click.option("--control-point", "control_points", multiple=True,
                     callback=_point, help="Control point x,y (repeatable)"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _build_params(kwargs: dict) -> RouteParameters:
    """Pop the shared connection options out of *kwargs*."""
    return RouteParameters(
        start=kwargs.pop("start"),
        end=kwargs.pop("end"),
        source_orientation=Orientation(kwargs.pop("source")),
        target_orientation=Orientation(kwargs.pop("target")),
        curvature=kwargs.pop("curvature"),
        corner_radius=kwargs.pop("corner_radius"),
        offset=kwargs.pop("offset"),
        back_edge_gap=kwargs.pop("back_edge_gap"),
        control_points=kwargs.pop("control_points") or (),
        source_bounds=kwargs.pop("source_bounds"),
        target_bounds=kwargs.pop("target_bounds"),
    )


def _fmt_point(p) -> str:
    return f"({p.x:g}, {p.y:g})"


@click.group()
@click.version_option(version=__version__)
@click.option("-v", "--verbose", is_flag=True, help="Log routing decisions to stderr")
def cli(verbose: bool) -> None:
    """edgeflow: Route node-graph connections and emit path segments."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")


@cli.command()
@connection_options
def route(**kwargs) -> None:
    """Compute one connection and print its SVG path data and bend points."""
    style = get_style(kwargs.pop("style"))
    params = _build_params(kwargs)
    path = style.create_segments(params)

    click.echo(segments_to_path_data(path.start, path.segments))
    click.echo("Bend points: " + " ".join(_fmt_point(p) for p in style.bend_points(path)))


@cli.command()
@connection_options
@click.option("-o", "--output", type=click.Path(path_type=Path), default=None,
              help="Output SVG file path. Defaults to stdout")
@click.option("--theme", type=click.Choice(list(THEMES.keys())), default="dark",
              help="Visual theme (default: dark)")
@click.option("--title", default=None, help="Title drawn above the diagram")
@click.option("--show-hit-rects", is_flag=True, help="Overlay hit-test rectangles")
@click.option("--tolerance", type=float, default=DEFAULT_HIT_TOLERANCE,
              help=f"Hit-test tolerance (default: {DEFAULT_HIT_TOLERANCE})")
def render(**kwargs) -> None:
    """Render one connection and its nodes to SVG."""
    output = kwargs.pop("output")
    theme = THEMES[kwargs.pop("theme")]
    title = kwargs.pop("title")
    show_hit_rects = kwargs.pop("show_hit_rects")
    tolerance = kwargs.pop("tolerance")
    style = kwargs.pop("style")
    params = _build_params(kwargs)

    svg = render_svg(
        [Connection(params, style=style)],
        theme,
        title=title,
        show_hit_rects=show_hit_rects,
        tolerance=tolerance,
    )

    if output is None:
        click.echo(svg)
        return
    output.write_text(svg + "\n")
    click.echo(f"Rendered {style} connection -> {output}")


@cli.command()
@connection_options
def info(**kwargs) -> None:
    """Show which routing branch a connection takes and its waypoints."""
    style = get_style(kwargs.pop("style"))
    params = _build_params(kwargs)
    decision = select_route(params)
    optimized = optimize_waypoints(decision.waypoints)
    path = style.create_segments(params)

    click.echo(f"Style: {style.display_name} ({style.id})")
    click.echo(f"Branch: {decision.branch}")
    click.echo(f"Waypoints: {len(decision.waypoints)}")
    for p in decision.waypoints:
        click.echo(f"  {_fmt_point(p)}")
    click.echo(f"Optimized: {len(optimized)}")
    click.echo(f"Segments: {len(path.segments)}")
    click.echo(f"Hit rects: {len(style.hit_rects(path))}")


@cli.command()
@connection_options
@click.option("--point", required=True, callback=_point, help="Point to test as x,y")
@click.option("--tolerance", type=float, default=DEFAULT_HIT_TOLERANCE,
              help=f"Hit-test tolerance (default: {DEFAULT_HIT_TOLERANCE})")
def hit(**kwargs) -> None:
    """Check whether a point lies on a connection's hit area.

    Exits with status 1 on a miss.
    """
    point = kwargs.pop("point")
    tolerance = kwargs.pop("tolerance")
    style = get_style(kwargs.pop("style"))
    params = _build_params(kwargs)
    path = style.create_segments(params)

    if hit_test(style.hit_rects(path, tolerance), point):
        click.echo(f"Hit: {_fmt_point(point)}")
        return
    click.echo(f"Miss: {_fmt_point(point)}", err=True)
    raise SystemExit(1)


@cli.command()
def styles() -> None:
    """List the registered connection styles."""
    for style_id, style in STYLES.items():
        click.echo(f"{style_id}: {style.display_name}")
