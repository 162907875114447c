import logging

from dash import Dash, html, dcc, Input, Output, State, ctx, no_update
from dash.exceptions import PreventUpdate

from . import settings
from .aggregator import year_bounds
from .controller import (
    Back, BarClicked, BarHovered, RangeUpdate, Reset, dispatch, present,
)
from .records import load_records
from .renderer import Geometry, Surface
from .state import Mode, ViewState

logger = logging.getLogger(__name__)

COLORS = settings.COLORS

HIDDEN = {"display": "none"}
CONTROLS_STYLE = {"display": "flex", "gap": "10px", "alignItems": "center"}
BACK_STYLE = {"display": "block", "marginBottom": "8px"}
TOOLTIP_STYLE = {
    "position": "fixed",
    "pointerEvents": "none",
    "backgroundColor": "#fff7e0",
    "border": "1px solid #f0d8a8",
    "borderRadius": "8px",
    "padding": "8px 10px",
    "fontSize": "12px",
    "maxWidth": "360px",
    "opacity": 0.9,
}

# =========================================================
# 1. EVENT -> COMMAND
# =========================================================


def point_key(event_data):
    """Key of the first bar in a Graph clickData/hoverData payload."""
    if not event_data or not isinstance(event_data, dict):
        return None
    points = event_data.get("points") or []
    if not points:
        return None
    return points[0].get("customdata")


def command_for(trigger, click_data=None, hover_data=None, start=None, end=None):
    if trigger == "update-button":
        return RangeUpdate(start, end)
    if trigger == "reset-button":
        return Reset()
    if trigger == "back-button":
        return Back()
    if trigger == "crash-graph.clickData":
        key = point_key(click_data)
        return BarClicked(key) if key is not None else None
    if trigger == "crash-graph.hoverData":
        key = point_key(hover_data)
        return BarHovered(None if key is None else str(key))
    return None


def tooltip_style(hover_data):
    style = dict(TOOLTIP_STYLE)
    points = (hover_data or {}).get("points") or [{}]
    bbox = points[0].get("bbox") or {}
    style["left"] = f"{bbox.get('x1', 0) + 5}px"
    style["top"] = f"{bbox.get('y0', 0) - 28}px"
    return style


# =========================================================
# 2. CALLBACK BODY
# =========================================================


def handle_interaction(records, trigger, click_data, hover_data, start, end, state_data):
    """Everything the page callback does, without Dash in the way.

    Returns the callback outputs in order: store data, figure, controls
    style, back button style, tooltip children, tooltip style, start input,
    end input.
    """
    state = ViewState.from_dict(state_data)
    if trigger is not None:
        command = command_for(trigger, click_data, hover_data, start, end)
        if command is None:
            raise PreventUpdate
        new_state = dispatch(records, state, command)
        if isinstance(command, BarHovered):
            if new_state == state:
                raise PreventUpdate
            frame = present(records, new_state)
            if frame.tooltip is None:
                return (new_state.to_dict(), no_update, no_update, no_update,
                        None, HIDDEN, no_update, no_update)
            return (new_state.to_dict(), no_update, no_update, no_update,
                    html_lines(frame.tooltip), tooltip_style(hover_data), no_update, no_update)
        state = new_state

    frame = present(records, state)
    figure = Surface(Geometry()).paint(frame.commands)
    drilled = state.mode is Mode.DRILL_DOWN
    cleared = "" if trigger == "reset-button" else no_update
    logger.info("View: %s (year=%s, range=%s)", state.mode.value, state.selected_year, state.year_range)
    return (
        state.to_dict(),
        figure,
        HIDDEN if drilled else CONTROLS_STYLE,
        BACK_STYLE if drilled else HIDDEN,
        None,
        HIDDEN,
        cleared,
        cleared,
    )


def html_lines(text):
    children = []
    for line in text.split("\n"):
        label, sep, rest = line.partition(": ")
        if sep:
            children.append(html.Div([html.Strong(label + ":"), " " + rest]))
        else:
            children.append(html.Div(line))
    return children


# =========================================================
# 3. DASH APP LAYOUT
# =========================================================


def build_layout(records):
    bounds = year_bounds(records)
    period = f"{bounds[0]} to {bounds[1]}" if bounds else "n/a"
    input_style = {"width": "90px", "fontSize": "13px"}

    return html.Div(
        style={
            "backgroundColor": COLORS["bg"],
            "minHeight": "100vh",
            "padding": "30px",
        },
        children=[
            html.Div(
                style={
                    "maxWidth": "1000px",
                    "margin": "0 auto",
                    "backgroundColor": COLORS["card"],
                    "borderRadius": "16px",
                    "padding": "24px 28px 32px 28px",
                    "boxShadow": "0 10px 30px rgba(0,0,0,0.12)",
                    "position": "relative",
                },
                children=[
                    # HEADER
                    html.Div(
                        style={"display": "flex", "justifyContent": "space-between",
                               "alignItems": "baseline", "gap": "12px"},
                        children=[
                            html.Div(
                                children=[
                                    html.H1(
                                        "Airplane Crashes Since 1908",
                                        style={
                                            "margin": 0,
                                            "fontFamily": "Arial",
                                            "fontSize": "28px",
                                            "color": COLORS["primary"],
                                        },
                                    ),
                                    html.P(
                                        "Click a year to see which operators lost the most lives that year.",
                                        style={
                                            "marginTop": "6px", "color": COLORS["muted"], "fontSize": "14px"},
                                    ),
                                ]
                            ),
                            html.Div(
                                style={
                                    "fontSize": "12px",
                                    "color": COLORS["muted"],
                                    "textAlign": "right",
                                },
                                children=[
                                    html.Div(f"Data period: {period}"),
                                    html.Div(f"Total records: {len(records):,} crashes"),
                                ],
                            ),
                        ],
                    ),

                    html.Hr(style={"margin": "18px 0 16px 0",
                            "borderColor": "#f0e1c5"}),

                    # CONTROLS
                    html.Div(
                        id="controls",
                        style=CONTROLS_STYLE,
                        children=[
                            html.Label("Start Year", style={
                                       "fontSize": "13px", "color": COLORS["primary"], "fontWeight": "bold"}),
                            dcc.Input(id="start-year", type="text", value="", style=input_style),
                            html.Label("End Year", style={
                                       "fontSize": "13px", "color": COLORS["primary"], "fontWeight": "bold"}),
                            dcc.Input(id="end-year", type="text", value="", style=input_style),
                            html.Button("Update", id="update-button", n_clicks=0),
                            html.Button("Reset", id="reset-button", n_clicks=0),
                        ],
                    ),
                    html.Button("Back", id="back-button", n_clicks=0, style=HIDDEN),

                    dcc.Graph(
                        id="crash-graph",
                        clear_on_unhover=True,
                        config={"displayModeBar": False},
                    ),
                    html.Div(id="tooltip", style=HIDDEN),
                    dcc.Store(id="view-state", data=ViewState().to_dict()),
                ],
            ),
        ],
    )


def create_app(records):
    """Build the Dash app around an already loaded record list."""
    app = Dash(__name__)
    app.title = "Airplane Crashes"
    app.layout = build_layout(records)

    # =========================================================
    # 4. CALLBACKS
    # =========================================================

    @app.callback(
        Output("view-state", "data"),
        Output("crash-graph", "figure"),
        Output("controls", "style"),
        Output("back-button", "style"),
        Output("tooltip", "children"),
        Output("tooltip", "style"),
        Output("start-year", "value"),
        Output("end-year", "value"),
        Input("update-button", "n_clicks"),
        Input("reset-button", "n_clicks"),
        Input("back-button", "n_clicks"),
        Input("crash-graph", "clickData"),
        Input("crash-graph", "hoverData"),
        State("start-year", "value"),
        State("end-year", "value"),
        State("view-state", "data"),
    )
    def update_view(_update, _reset, _back, click_data, hover_data, start, end, state_data):
        trigger = ctx.triggered_id
        if trigger == "crash-graph":
            trigger = ctx.triggered[0]["prop_id"]
        return handle_interaction(records, trigger, click_data, hover_data, start, end, state_data)

    return app


# =========================================================
# 5. RUN APP
# =========================================================


def main():
    logging.basicConfig(level=settings.LOG_LEVEL, format=settings.LOG_FORMAT)
    # a failed load propagates; no chart is served without data
    records = load_records(settings.RAW_PATH)
    app = create_app(records)
    app.run(debug=settings.DEBUG)


if __name__ == "__main__":
    main()
