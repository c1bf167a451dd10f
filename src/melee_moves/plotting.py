"""Bar chart of the most used moves across aggregated games.

Requires matplotlib.

Typical usage:
    from melee_moves.aggregate import aggregate_directory
    from melee_moves.plotting import plot_top_moves

    result = aggregate_directory("parsed")
    plot_top_moves(result.stats, n=10, save_path="top_moves.png")
"""

from melee_moves.analytics import move_totals
from melee_moves.records import AggregatedStats


def plot_top_moves(
    stats: AggregatedStats,
    n: int = 10,
    character: str | None = None,
    title: str = "Most Used Moves",
    save_path: str | None = None,
    figsize: tuple[float, float] = (10, 6),
):
    """Horizontal bar chart of the ``n`` most used moves.

    Args:
        stats: Aggregated statistics from aggregate_records / aggregate_directory.
        n: Number of moves to show.
        character: If given, only count that character's players.
        title: Chart title.
        save_path: If provided, saves the figure here.
        figsize: Figure size.

    Returns:
        (fig, ax) matplotlib figure and axes.
    """
    import matplotlib.pyplot as plt

    if character is not None:
        stats = AggregatedStats(
            total_games=stats.total_games,
            players=[p for p in stats.players if p.character.lower() == character.lower()],
            aggregated_stats=stats.aggregated_stats,
        )

    totals = move_totals(stats).head(n)
    moves = list(totals["move"])[::-1]
    counts = [int(c) for c in totals["count"]][::-1]

    fig, ax = plt.subplots(figsize=figsize)
    # Largest bar on top
    ax.barh(moves, counts, color="#4C72B0")
    ax.set_xlabel("Count")
    ax.set_title(title if character is None else f"{title} ({character})")
    for i, count in enumerate(counts):
        ax.text(count, i, f" {count}", va="center", fontsize=9)

    fig.tight_layout()
    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches="tight")
    return fig, ax
