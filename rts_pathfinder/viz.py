# region Imports
import numpy as np
import matplotlib.pyplot as plt
from matplotlib.patches import Patch
from matplotlib.lines import Line2D
# endregion

# region Visualization Function
def show_terrain_analysis(
    grid,
    analysis=None,
    path=None,
    lip=None,
    title="Terrain analysis",
    out_path=None,
):
    """
    Render heights with unwalkable cells masked, plus optional path, ramps,
    choke candidates and ramp-lip cells. Saves to out_path if given,
    otherwise shows the window. Returns the figure.
    """
    # region Base Image
    base = grid.height_map().astype(np.float32)
    blocked = ~grid.walkable_mask()
    base = np.ma.masked_where(blocked, base)
    # endregion

    fig, ax = plt.subplots(figsize=(8, 8))
    ax.imshow(base, origin="upper", cmap="terrain", alpha=0.9)
    ax.imshow(np.ma.masked_where(~blocked, blocked.astype(np.float32)), origin="upper", cmap="gray_r", alpha=0.8)
    nonbuild = grid.walkable_mask() & ~grid.buildable_mask()
    ax.imshow(np.ma.masked_where(~nonbuild, nonbuild.astype(np.float32)), origin="upper", cmap="autumn", alpha=0.35)

    # cell (x, y) is drawn at pixel (col=x, row=y); waypoints sit at +0.5
    # region Path Overlay
    if path:
        xs = [p[0] - 0.5 for p in path]
        ys = [p[1] - 0.5 for p in path]
        ax.plot(xs, ys, color="cyan", linewidth=2.5)
        ax.scatter(xs[0], ys[0], s=100, edgecolors="black", facecolors="white", zorder=3)
        ax.scatter(xs[-1], ys[-1], s=100, edgecolors="black", facecolors="yellow", zorder=3)
    # endregion

    # region Feature Overlay
    if analysis is not None:
        if analysis.ramps:
            ax.scatter([r.x for r in analysis.ramps], [r.y for r in analysis.ramps],
                       s=120, marker="^", color="red", edgecolors="black", zorder=4)
        if analysis.choke_points:
            ax.scatter([c.x for c in analysis.choke_points], [c.y for c in analysis.choke_points],
                       s=40, marker="x", color="magenta", zorder=4)
    if lip:
        ax.scatter([c.x for c in lip], [c.y for c in lip], s=25, marker="s", color="orange", zorder=4)
    # endregion

    # region Legend / Layout
    legend_elements = [
        Line2D([0], [0], color="cyan", lw=2, label="Path"),
        Line2D([0], [0], marker="o", color="w", label="Start",
               markerfacecolor="white", markeredgecolor="black", markersize=9),
        Line2D([0], [0], marker="o", color="w", label="Goal",
               markerfacecolor="yellow", markeredgecolor="black", markersize=9),
        Line2D([0], [0], marker="^", color="w", label="Ramp",
               markerfacecolor="red", markeredgecolor="black", markersize=9),
        Line2D([0], [0], marker="x", color="magenta", lw=0, label="Choke candidate"),
        Line2D([0], [0], marker="s", color="w", label="Ramp lip",
               markerfacecolor="orange", markersize=7),
        Patch(facecolor="black", label="Unwalkable"),
        Patch(facecolor="orange", alpha=0.35, label="Walkable, not buildable"),
    ]
    ax.legend(handles=legend_elements, loc="lower right", fontsize=8, framealpha=0.85)
    ax.set_title(title)
    ax.set_axis_off()
    plt.tight_layout()
    if out_path:
        fig.savefig(out_path, dpi=120)
    else:
        plt.show()
    return fig
    # endregion
# endregion
