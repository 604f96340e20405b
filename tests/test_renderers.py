# tests/test_renderers.py

import matplotlib

matplotlib.use("Agg")

import plotly.graph_objects as go  # noqa: E402
from matplotlib.figure import Figure  # noqa: E402

from sunpath.compute import compute_sun_path  # noqa: E402
from sunpath.renderers.plotly_2d import render_plotly_chart  # noqa: E402
from sunpath.renderers.static import render_static_chart, save_static_chart  # noqa: E402


def test_plotly_chart_traces(paris_context):
    data = compute_sun_path(paris_context, steps=12)
    fig = render_plotly_chart(data)
    assert isinstance(fig, go.Figure)
    names = [trace.name for trace in fig.data]
    assert names == [
        "Summer Solstice",
        "Winter Solstice",
        "Spring Equinox",
        "Fall Equinox",
        "Selected day",
        "Sun",
    ]
    assert fig.layout.polar.angularaxis.direction == "clockwise"


def test_static_chart(paris_context, tmp_path):
    data = compute_sun_path(paris_context, steps=6, house_rotation_deg=20.0)
    fig = render_static_chart(data)
    assert isinstance(fig, Figure)
    # House plus one patch per shadow polygon
    assert len(fig.axes[0].patches) == len(data.shadows) + 1

    path = save_static_chart(data, tmp_path / "plan.png")
    assert path.exists()
    assert path.stat().st_size > 0
