"""Matplotlib static PNG renderer: house footprint, shadows and sun direction."""

import math
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.figure import Figure
from matplotlib.patches import Polygon

from sunpath.clock import format_time
from sunpath.models import SunPathData
from sunpath.shadow import rotate

_ROOT = Path(__file__).parent.parent.parent.parent


def _house_outline(data: SunPathData) -> np.ndarray:
    house = data.house
    half_w, half_d = house.width / 2, house.depth / 2
    corners = [(-half_w, -half_d), (half_w, -half_d), (half_w, half_d), (-half_w, half_d)]
    return np.array(
        [
            (house.center_x + rx, house.center_y + ry)
            for rx, ry in (rotate(x, y, data.house_rotation_deg) for x, y in corners)
        ]
    )


def render_static_chart(data: SunPathData, chart_size: int = 8) -> Figure:
    """Render the shadow plan view as a static matplotlib image.

    Args:
        data: Fully computed sun data.
        chart_size: Output image size in inches.

    Returns:
        matplotlib Figure object.
    """
    fig, ax = plt.subplots(figsize=(chart_size, chart_size))
    fig.patch.set_facecolor("white")

    for shadow in data.shadows:
        ax.add_patch(
            Polygon(np.array(shadow.points), closed=True, color="#333333", alpha=0.35, zorder=1)
        )

    outline = _house_outline(data)
    ax.add_patch(
        Polygon(outline, closed=True, facecolor="#c9a96e", edgecolor="#5d4037", zorder=2)
    )

    extent = data.house.nominal_size * 3
    if data.position.above_horizon:
        # Arrow from the sun's side toward the house
        sx = math.sin(data.position.azimuth) * extent * 0.9
        sy = math.cos(data.position.azimuth) * extent * 0.9
        ax.annotate(
            "",
            xy=(data.house.center_x, data.house.center_y),
            xytext=(data.house.center_x + sx, data.house.center_y + sy),
            arrowprops=dict(arrowstyle="->", color="#ff9800", lw=2),
            zorder=3,
        )
        ax.scatter(
            [data.house.center_x + sx], [data.house.center_y + sy],
            s=300, color="#ffeb3b", edgecolors="#ff9800", zorder=4,
        )

    orientation = data.orientation
    title = (
        f"{data.context.address_display}  "
        f"{format_time(data.context.utc_dt, data.context.coord.lng)}  "
        f"alt {math.degrees(data.position.altitude):.1f}°  "
        f"best facing {orientation.angle_deg:.0f}° ({orientation.compass_label})"
    )
    ax.set_title(title, fontsize=9)
    ax.text(0.5, 0.98, "N", transform=ax.transAxes, ha="center", va="top", fontweight="bold")

    ax.set_xlim(data.house.center_x - extent, data.house.center_x + extent)
    ax.set_ylim(data.house.center_y - extent, data.house.center_y + extent)
    ax.set_aspect("equal")
    ax.axis("off")

    return fig


def save_static_chart(data: SunPathData, output_path: Path | None = None) -> Path:
    """Save SunPathData as a PNG file.

    Args:
        data: Fully computed sun data.
        output_path: Destination path. Auto-generated under results/ if None.

    Returns:
        Path to the saved file.
    """
    if output_path is None:
        ctx = data.context
        when_str = ctx.utc_dt.strftime("%Y_%m_%d_%H_%M")
        filename = f"{ctx.address_display}__{when_str}.png".replace(" ", "_").replace(",", "")
        output_path = _ROOT / "results" / filename

    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig = render_static_chart(data)
    fig.savefig(output_path, facecolor="white")
    plt.close(fig)
    return output_path
