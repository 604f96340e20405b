"""Plotly polar sun-path chart renderer.

Radial axis is zenith distance (90 - altitude, degrees): the centre is the
zenith and the rim is the horizon. Angular axis is azimuth, north at the
top, increasing clockwise.
"""

import math

import numpy as np
import plotly.graph_objects as go

from sunpath.clock import format_time
from sunpath.models import SunPathData, Trajectory

_BG = "#0d1b35"
_GRID_COLOR = "#334466"
_TODAY_COLOR = "#ffb300"
_SUN_COLOR = "#ffeb3b"


def _polar_coords(trajectory: Trajectory) -> tuple[np.ndarray, np.ndarray]:
    """Return (r, theta) arrays for points above the horizon."""
    above = [p for p in trajectory if p.altitude > 0]
    alt = np.degrees([p.altitude for p in above])
    az = np.degrees([p.azimuth for p in above])
    return 90 - alt, az


def render_plotly_chart(data: SunPathData) -> go.Figure:
    """Render SunPathData as a polar sun-path diagram.

    Seasonal paths are drawn as thin colored lines, the selected day as a
    thick line with hover times on the longitude clock, and the current sun
    as a marker when it is above the horizon.

    Args:
        data: Fully computed sun data.

    Returns:
        Plotly Figure object.
    """
    lng = data.context.coord.lng
    traces: list[go.Scatterpolar] = []

    if data.seasonal is not None:
        for seasonal in data.seasonal.values():
            r, theta = _polar_coords(seasonal.trajectory)
            traces.append(
                go.Scatterpolar(
                    r=r,
                    theta=theta,
                    mode="lines",
                    line=dict(color=seasonal.color, width=1.5),
                    opacity=0.7,
                    name=seasonal.label,
                    hoverinfo="name",
                )
            )

    r, theta = _polar_coords(data.trajectory)
    labels = [format_time(p.time, lng) for p in data.trajectory if p.altitude > 0]
    traces.append(
        go.Scatterpolar(
            r=r,
            theta=theta,
            mode="lines+markers",
            line=dict(color=_TODAY_COLOR, width=3),
            marker=dict(size=4, color=_TODAY_COLOR),
            text=labels,
            hovertemplate="%{text}<br>az %{theta:.0f}°<extra></extra>",
            name="Selected day",
        )
    )

    if data.position.above_horizon:
        traces.append(
            go.Scatterpolar(
                r=[90 - math.degrees(data.position.altitude)],
                theta=[math.degrees(data.position.azimuth)],
                mode="markers",
                marker=dict(size=16, color=_SUN_COLOR, line=dict(color="white", width=2)),
                name="Sun",
                hoverinfo="name",
            )
        )

    fig = go.Figure(data=traces)
    fig.update_layout(
        paper_bgcolor=_BG,
        font=dict(color="#d0d8e8"),
        margin=dict(l=30, r=30, t=30, b=30),
        width=700,
        height=700,
        legend=dict(orientation="h", y=-0.05),
        polar=dict(
            bgcolor=_BG,
            radialaxis=dict(
                range=[0, 90],
                tickvals=[0, 30, 60, 90],
                ticktext=["90°", "60°", "30°", "0°"],
                gridcolor=_GRID_COLOR,
            ),
            angularaxis=dict(
                rotation=90,
                direction="clockwise",
                tickvals=[0, 45, 90, 135, 180, 225, 270, 315],
                ticktext=["N", "NE", "E", "SE", "S", "SW", "W", "NW"],
                gridcolor=_GRID_COLOR,
            ),
        ),
    )
    return fig
