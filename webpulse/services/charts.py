import io

import matplotlib
matplotlib.use('Agg')
from matplotlib.figure import Figure
import pandas as pd
import seaborn as sns

from webpulse.services.overview import Overview


def status_dataframe(counts: dict[str, int]) -> pd.DataFrame:
    if not counts:
        return pd.DataFrame(columns=["status", "count"])
    return pd.DataFrame(
        [{"status": status, "count": count} for status, count in counts.items()]
    )


def generate_status_pie(df: pd.DataFrame, title: str) -> io.BytesIO | None:
    if df.empty:
        return None

    # Thread-safe plotting using OO API
    fig = Figure(figsize=(6, 6))
    ax = fig.subplots()
    colors = sns.color_palette("Set2", len(df))
    ax.pie(df["count"], labels=df["status"], colors=colors, autopct="%1.1f%%", startangle=90)
    ax.set_title(f"{title} (total {int(df['count'].sum())})")

    buf = io.BytesIO()
    fig.savefig(buf, format="png")
    buf.seek(0)
    return buf


def generate_completion_gauge(completed: int, total: int) -> io.BytesIO | None:
    if total == 0:
        return None

    remaining = total - completed
    fig = Figure(figsize=(6, 4))
    ax = fig.subplots()
    done_color, open_color = sns.color_palette("coolwarm", 2)
    # Half-donut: the lower half is an invisible wedge
    ax.pie(
        [completed, remaining, total],
        colors=[done_color, open_color, (1, 1, 1, 0)],
        startangle=180,
        counterclock=False,
        wedgeprops={"width": 0.35},
    )
    ax.text(0, -0.1, f"{completed} / {total}", ha="center", va="center", fontsize=28)
    ax.set_title(f"You have {remaining} task{'' if remaining == 1 else 's'} to complete")

    buf = io.BytesIO()
    fig.savefig(buf, format="png", bbox_inches="tight")
    buf.seek(0)
    return buf


def project_status_chart(overview: Overview) -> io.BytesIO | None:
    return generate_status_pie(status_dataframe(overview.project_counts), "Project Status Overview")


def task_status_chart(overview: Overview) -> io.BytesIO | None:
    return generate_status_pie(status_dataframe(overview.task_counts), "Task Status Overview")


def task_gauge_chart(overview: Overview) -> io.BytesIO | None:
    return generate_completion_gauge(overview.completed_tasks, overview.total_tasks)
