"""
Chart rendering
===============

`render` is pure: given the view state and the aggregates for that state it
returns a list of draw commands. Positions are in drawing space, x to the
right and y downward from the top of the plot area, as the scales produce
them.

`Surface` is the only thing that turns commands into a Plotly figure. Every
command list starts with `Clear`, so each paint starts from an empty figure.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple, Union

import plotly.graph_objects as go

from . import settings
from .aggregator import OperatorAggregate, YearAggregate, top_n
from .scales import BandScale, LinearScale, band_scale, linear_scale
from .state import Mode, ViewState

RANK_TITLES = ["Most Fatalities", "2nd Most Fatalities", "3rd Most Fatalities"]


@dataclass(frozen=True)
class Geometry:
    width: float = settings.CHART_WIDTH
    height: float = settings.CHART_HEIGHT
    padding: float = settings.BAND_PADDING


# ---------------- Draw commands ----------------

@dataclass(frozen=True)
class Clear:
    pass


@dataclass(frozen=True)
class Bar:
    key: Union[int, str]
    x: float
    y: float
    width: float
    height: float
    value: int
    hover: str = ""


@dataclass(frozen=True)
class Axis:
    orient: str  # "bottom" | "left"
    ticks: Tuple[Tuple[str, float], ...]
    title: str
    tick_angle: int = 0


@dataclass(frozen=True)
class Label:
    text: str
    x: float
    y: float
    title: str = ""
    dx: float = 0
    dy: float = 0
    connector: bool = True
    font_size: Optional[int] = None
    bold: bool = False


DrawCommand = Union[Clear, Bar, Axis, Label]


# ---------------- Pure rendering ----------------

def tooltip_text(agg: OperatorAggregate) -> str:
    crash = agg.deadliest_crash
    day = f"{crash.date.month}/{crash.date.day}/{crash.date.year}"
    return (
        f"Operator: {agg.operator}\n"
        f"Biggest Crash: occurred on {day} - {crash.summary}\n"
        f"Number of Crashes: {agg.crash_count}"
    )


def _bars(x: BandScale, y: LinearScale, keyed_values, geometry: Geometry, hovers=None) -> List[Bar]:
    hovers = hovers or [""] * len(keyed_values)
    return [
        Bar(
            key=key,
            x=x(key),
            y=y(value),
            width=x.bandwidth,
            height=geometry.height - y(value),
            value=value,
            hover=hover,
        )
        for (key, value), hover in zip(keyed_values, hovers)
    ]


def _value_axis(y: LinearScale, title: str) -> Axis:
    return Axis("left", tuple((str(v), y(v)) for v in y.ticks()), title)


def _year_annotations(x: BandScale, geometry: Geometry) -> List[Label]:
    labels = []
    start, end = settings.ANNOTATED_START_YEAR, settings.ANNOTATED_END_YEAR
    if start in x:
        labels.append(Label(f"Start Year: {start}", x=x.center(start), y=geometry.height, dy=40))
    if end in x:
        labels.append(Label(f"End Year: {end}", x=x(end) + x.bandwidth, y=geometry.height, dx=-100, dy=40))
    return labels


def render_aggregate(aggregates: Sequence[YearAggregate], geometry: Geometry = Geometry()) -> List[DrawCommand]:
    """Crashes-per-year bar chart."""
    x = band_scale([a.year for a in aggregates], geometry.width, geometry.padding)
    y = linear_scale([a.crash_count for a in aggregates], geometry.height)

    commands: List[DrawCommand] = [Clear()]
    commands += _bars(x, y, [(a.year, a.crash_count) for a in aggregates], geometry)
    year_ticks = tuple(
        (str(a.year), x.center(a.year)) for a in aggregates if a.year % settings.YEAR_TICK_EVERY == 0
    )
    commands.append(Axis("bottom", year_ticks, "Year"))
    commands.append(_value_axis(y, "Airplane Crashes"))
    commands += _year_annotations(x, geometry)
    return commands


def render_drill_down(
    year: int,
    aggregates: Sequence[OperatorAggregate],
    geometry: Geometry = Geometry(),
) -> List[DrawCommand]:
    """Fatalities-per-operator bar chart for one year, deadliest operators first."""
    aggregates = top_n(aggregates, len(aggregates))
    x = band_scale([a.operator for a in aggregates], geometry.width, geometry.padding)
    y = linear_scale([a.total_fatalities for a in aggregates], geometry.height)

    commands: List[DrawCommand] = [Clear()]
    commands += _bars(
        x, y,
        [(a.operator, a.total_fatalities) for a in aggregates],
        geometry,
        hovers=[tooltip_text(a) for a in aggregates],
    )
    commands.append(Axis("bottom", tuple((a.operator, x.center(a.operator)) for a in aggregates),
                         "Operator", tick_angle=-45))
    commands.append(_value_axis(y, "Fatalities"))

    for i, agg in enumerate(top_n(aggregates, settings.TOP_OPERATORS)):
        commands.append(Label(
            f"Operator: {agg.operator}\nFatalities: {agg.total_fatalities}\nCrashes: {agg.crash_count}",
            title=RANK_TITLES[i],
            x=geometry.width / 2 - 100 + i * 200,
            y=-10,
            dy=20,
            connector=False,
        ))
    commands.append(Label(f"Current Year: {year}", x=geometry.width - 120, y=200, font_size=20, bold=True))
    return commands


def render(state: ViewState, aggregates, geometry: Geometry = Geometry()) -> List[DrawCommand]:
    if state.mode is Mode.DRILL_DOWN:
        return render_drill_down(state.selected_year, aggregates, geometry)
    return render_aggregate(aggregates, geometry)


# ---------------- Plotly surface ----------------

def style_figure(fig):
    fig.update_layout(
        template="simple_white",
        font=dict(family="Arial", size=12, color=settings.COLORS["text"]),
        plot_bgcolor=settings.COLORS["card"],
        paper_bgcolor=settings.COLORS["card"],
        showlegend=False,
        hovermode="closest",
    )
    fig.update_xaxes(showgrid=False, zeroline=False)
    fig.update_yaxes(
        showgrid=True, gridcolor="rgba(0,0,0,0.06)", zeroline=False)
    return fig


def _html(text: str) -> str:
    return text.replace("\n", "<br>")


class Surface:
    """Owns the figure the commands are painted on."""

    def __init__(self, geometry: Geometry = Geometry(), margin=None):
        self.geometry = geometry
        self.margin = margin or settings.MARGIN
        self.figure = go.Figure()

    def paint(self, commands: Sequence[DrawCommand]) -> go.Figure:
        bars: List[Bar] = []
        for cmd in commands:
            if isinstance(cmd, Clear):
                self._clear()
                bars = []
            elif isinstance(cmd, Bar):
                bars.append(cmd)
            elif isinstance(cmd, Axis):
                self._draw_axis(cmd)
            elif isinstance(cmd, Label):
                self._draw_label(cmd)
            else:
                raise TypeError(f"unknown draw command {cmd!r}")
        if bars:
            self._draw_bars(bars)
        return self.figure

    def _clear(self):
        g, m = self.geometry, self.margin
        fig = go.Figure()
        fig = style_figure(fig)
        fig.update_layout(
            width=g.width + m["left"] + m["right"],
            height=g.height + m["top"] + m["bottom"],
            margin=dict(t=m["top"], r=m["right"], b=m["bottom"], l=m["left"]),
            xaxis=dict(range=[0, g.width], fixedrange=True, tickvals=[], ticktext=[]),
            yaxis=dict(range=[0, g.height], fixedrange=True, tickvals=[], ticktext=[]),
        )
        self.figure = fig

    def _draw_bars(self, bars: Sequence[Bar]):
        self.figure.add_trace(go.Bar(
            x=[b.x + b.width / 2 for b in bars],
            y=[b.height for b in bars],
            width=[b.width for b in bars],
            customdata=[b.key for b in bars],
            hovertext=[_html(b.hover) for b in bars],
            hoverinfo="none",
            marker_color=settings.COLORS["bar"],
        ))

    def _draw_axis(self, axis: Axis):
        positions = [pos for _, pos in axis.ticks]
        labels = [label for label, _ in axis.ticks]
        if axis.orient == "bottom":
            self.figure.update_xaxes(
                tickvals=positions, ticktext=labels, tickangle=axis.tick_angle,
                title_text=axis.title)
        elif axis.orient == "left":
            # drawing space grows downward, plotly's y axis grows upward
            self.figure.update_yaxes(
                tickvals=[self.geometry.height - p for p in positions], ticktext=labels,
                tickangle=axis.tick_angle, title_text=axis.title)
        else:
            raise ValueError(f"unknown axis orientation {axis.orient!r}")

    def _draw_label(self, label: Label):
        text = _html(label.text)
        if label.title:
            text = f"<b>{label.title}</b><br>{text}"
        if label.bold:
            text = f"<b>{text}</b>"
        arrow = label.connector and bool(label.dx or label.dy)
        self.figure.add_annotation(
            x=label.x,
            xref="x",
            y=1 - label.y / self.geometry.height,
            yref="paper",
            text=text,
            align="left",
            showarrow=arrow,
            ax=label.dx if arrow else None,
            ay=label.dy if arrow else None,
            xshift=0 if arrow else label.dx,
            yshift=0 if arrow else -label.dy,
            font=dict(size=label.font_size) if label.font_size else None,
        )
