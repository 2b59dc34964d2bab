"""Road Scenario Test-Drive Dashboard.

Interactive front end for the scenario engine built with Streamlit and
Plotly.  Provides the test-drive risk scorer, the pothole stress-run
ensemble, and the funded vs do-nothing condition curves.

Launch with::

    streamlit run dashboard/app.py
"""

from __future__ import annotations

import plotly.graph_objects as go
import streamlit as st

from road_engine.config import EngineConfig, load_config
from road_engine.core.conditions import CARGO_TYPES, WEATHER_TYPES, DriveConditions
from road_engine.core.curves import CURVE_MODES, CurveGeometry, interpolate_scenarios
from road_engine.core.drive import evaluate_test_drive
from road_engine.core.impact import simulate_impacts_monte_carlo
from road_engine.core.scenario import build_projection_series, final_funded_value
from road_engine.core.segment import RoadSegmentState

# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

_DEFAULT_SEGMENTS: list[dict] = [
    {"name": "N1 Polokwane Bypass", "iri": 2.4, "surface": "paved", "width": 10.5},
    {"name": "R34 Bethlehem - Kestell", "iri": 4.8, "surface": "paved", "width": 7.4},
    {"name": "D1234 Mokopane Farm Road", "iri": 6.2, "surface": "gravel", "width": 6.0},
]

_CARGO_VALUES: dict[str, float] = {
    "Produce (R 500k)": 500_000.0,
    "Machinery (R 1.25m)": 1_250_000.0,
    "Electronics (R 3m)": 3_000_000.0,
}

_CANVAS_WIDTH: float = 800.0
_CANVAS_HEIGHT: float = 300.0


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _cargo_options(config: EngineConfig) -> list[str]:
    """Built-in cargo types followed by any the configuration adds."""
    extra = [c for c in config.listed_cargo_types if c not in CARGO_TYPES]
    return list(CARGO_TYPES) + extra


def _build_segment(entry: dict) -> RoadSegmentState:
    """Construct a RoadSegmentState from a segment entry dict."""
    return RoadSegmentState(
        baseline_roughness=entry["iri"],
        surface=entry["surface"],
        width_meters=entry["width"],
        name=entry["name"],
    )


def _curve_figure(curves: dict[str, CurveGeometry]) -> go.Figure:
    """Draw the scenario path geometry as Plotly path shapes."""
    fig = go.Figure()
    colours = {"funded": "#10b981", "do_nothing": "#f43f5e"}
    for name, geometry in curves.items():
        if not geometry.path_commands:
            continue
        fig.add_shape(
            type="path",
            path=geometry.path_commands,
            line=dict(color=colours[name], width=3),
        )
    fig.update_layout(
        xaxis=dict(range=[0, _CANVAS_WIDTH], visible=False),
        yaxis=dict(range=[_CANVAS_HEIGHT, 0], visible=False),
        height=350,
        margin=dict(l=10, r=10, t=30, b=10),
        title="Network condition: funded (green) vs do nothing (red)",
    )
    return fig


# ---------------------------------------------------------------------------
# Streamlit app
# ---------------------------------------------------------------------------


def main() -> None:
    """Entry point for the Streamlit dashboard."""
    st.set_page_config(page_title="Road Scenario Test Drive", layout="wide")
    st.title("Road Scenario Test Drive")

    config = load_config()

    # ── Sidebar ──────────────────────────────────────────────────────────
    st.sidebar.header("Segment")
    names = [s["name"] for s in _DEFAULT_SEGMENTS]
    selected: str = st.sidebar.selectbox("Road segment", options=names, index=1)
    entry = dict(_DEFAULT_SEGMENTS[names.index(selected)])
    surfaces = list(config.surfaces)
    entry["surface"] = st.sidebar.selectbox(
        "Surface",
        options=surfaces,
        index=surfaces.index(entry["surface"]) if entry["surface"] in surfaces else 0,
    )
    elapsed: int = st.sidebar.slider("Years from today", 0, 20, 0)

    st.sidebar.header("Drive conditions")
    cargo: str = st.sidebar.selectbox("Cargo", options=_cargo_options(config))
    weight: float = st.sidebar.slider("Cargo weight (t)", 0.0, 50.0, 20.0, 1.0)
    weather: str = st.sidebar.selectbox("Weather", options=list(WEATHER_TYPES))
    speed: float = st.sidebar.slider("Speed (km/h)", 40.0, 120.0, 80.0, 10.0)

    segment = _build_segment(entry)
    conditions = DriveConditions(
        cargo_type=cargo,
        cargo_weight_tons=weight,
        weather=weather,
        speed_limit_kmh=speed,
    )

    # ── Section 1: Test drive ────────────────────────────────────────────
    st.header("1 -- Test Drive")

    report = evaluate_test_drive(segment, conditions, elapsed, config)
    col_iri, col_vci, col_health, col_loss = st.columns(4)
    col_iri.metric("IRI", f"{report.effective_roughness:.1f}", report.risk_band)
    col_vci.metric("VCI", f"{report.visual_condition_index:.0f}")
    col_health.metric("Cargo health", f"{report.result.cargo_health:.0f}%")
    col_loss.metric("Financial loss", f"R {report.result.financial_loss:,.0f}")

    st.caption(report.headline)
    if report.result.cargo_health > config.healthy_threshold:
        st.success(report.narrative)
    else:
        st.error(report.narrative)

    terms = {
        "Road": report.result.road_damage,
        "Weather": report.result.weather_damage,
        "Speed": report.result.speed_damage,
        "Weight": report.result.weight_damage,
    }
    fig_terms = go.Figure(
        go.Bar(x=list(terms), y=list(terms.values()), marker_color="#0ea5e9")
    )
    fig_terms.update_layout(
        title=f"Damage terms (fragility x{report.result.fragility_factor:.1f})",
        yaxis_title="Damage points",
        height=300,
    )
    st.plotly_chart(fig_terms, use_container_width=True)

    # ── Section 2: Stress run ────────────────────────────────────────────
    st.header("2 -- Stress Run")

    col_density, col_value, col_runs = st.columns(3)
    density: int = col_density.slider("Pothole density", 1, 20, 4)
    cargo_label: str = col_value.selectbox("Cargo value", options=list(_CARGO_VALUES), index=1)
    runs: int = col_runs.slider("Monte Carlo runs", 10, 1000, 200, 10)

    if st.button("Run Stress Test"):
        with st.spinner("Running stress-run ensemble..."):
            stats = simulate_impacts_monte_carlo(
                report.effective_roughness,
                conditions.speed_limit_kmh,
                density,
                _CARGO_VALUES[cargo_label],
                runs,
                config=config,
            )
        col_a, col_b, col_c = st.columns(3)
        col_a.metric("Expected impacts", f"{stats['expected_impacts']:.1f}")
        col_b.metric("Expected loss", f"R {stats['expected_loss']:,.0f}")
        col_c.metric("No-impact probability", f"{stats['no_impact_probability']:.0%}")

        dist = stats["impact_distribution"]
        fig_dist = go.Figure(
            go.Bar(x=list(dist), y=list(dist.values()), marker_color="#f59e0b")
        )
        fig_dist.update_layout(
            title="Impact count distribution",
            xaxis_title="Impacts per run",
            yaxis_title="Probability",
            height=300,
        )
        st.plotly_chart(fig_dist, use_container_width=True)

    # ── Section 3: Scenario curves ───────────────────────────────────────
    st.header("3 -- Funded vs Do Nothing")

    col_mode, col_years = st.columns(2)
    mode: str = col_mode.radio("Curve mode", options=list(CURVE_MODES), index=1)
    duration: int = col_years.slider("Analysis horizon (years)", 2, 30, 10)

    series = build_projection_series(
        None, report.visual_condition_index, duration, config
    )
    curves = interpolate_scenarios(series, mode, _CANVAS_WIDTH, _CANVAS_HEIGHT)
    st.plotly_chart(_curve_figure(curves), use_container_width=True)

    final = series[-1]
    col_f, col_d = st.columns(2)
    col_f.metric("Funded VCI (final year)", f"{final_funded_value(series):.0f}")
    col_d.metric("Do-nothing VCI (final year)", f"{final.do_nothing_value:.0f}")

    # ── Footer ───────────────────────────────────────────────────────────
    st.markdown("---")
    st.caption("Road Scenario Engine -- the engine is not modified by this dashboard.")


if __name__ == "__main__":
    main()
