"""gitcontrib — interactive Streamlit dashboard."""

from __future__ import annotations

import math
import os

import pandas as pd
import plotly.express as px
import streamlit as st

from gitcontrib.errors import GitContribError
from gitcontrib.models import Summary
from gitcontrib.repo import git_runner, open_repo, repo_dir_name
from gitcontrib.report import collect_summary

# ---------------------------------------------------------------------------
# Page config
# ---------------------------------------------------------------------------
st.set_page_config(
    page_title="gitcontrib",
    page_icon="📊",
    layout="wide",
)

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

@st.cache_data
def load_summary(path: str, branch: str | None, excluded: tuple[str, ...]) -> Summary:
    run = git_runner(open_repo(path))
    return collect_summary(run, branch=branch, excluded=excluded, repo=repo_dir_name(run))


def summary_frame(summary: Summary) -> pd.DataFrame:
    df = pd.DataFrame(
        [
            {
                "author": r.author,
                "commits": r.commits,
                "additions": r.additions,
                "deletions": r.deletions,
                "line_ratio": r.line_ratio,
                "commit_ratio": r.commit_ratio,
                "granularity": r.granularity,
            }
            for r in summary.rows
        ],
        columns=[
            "author", "commits", "additions", "deletions",
            "line_ratio", "commit_ratio", "granularity",
        ],
    )
    return df


# ---------------------------------------------------------------------------
# Sidebar — repository
# ---------------------------------------------------------------------------
st.sidebar.title("📊 gitcontrib")
st.sidebar.markdown("Author contribution explorer")

repo_path = st.sidebar.text_input("Repository", value=os.environ.get("GITCONTRIB_REPO", "."))
branch_input = st.sidebar.text_input("Branch", value="", placeholder="checked-out branch")
excluded_input = st.sidebar.text_input("Exclude authors (comma separated)", value="")
excluded = tuple(a.strip() for a in excluded_input.split(",") if a.strip())

try:
    summary = load_summary(repo_path, branch_input.strip() or None, excluded)
except GitContribError as exc:
    st.error(f"Could not analyse `{repo_path}`:\n\n{exc}")
    st.stop()

st.sidebar.markdown(f"**Repo:** `{summary.repo}`  **Branch:** `{summary.branch}`")

df = summary_frame(summary)
if df.empty:
    st.info("No commits found on this branch.")
    st.stop()

# ---------------------------------------------------------------------------
# Page title + metric cards
# ---------------------------------------------------------------------------
st.title(f"Contributions — {summary.repo}")
st.caption(f"Branch: `{summary.branch}`  ·  {len(df):,} authors")

granularity = "n/a" if math.isnan(summary.granularity) else f"{summary.granularity:.3f}"
c1, c2, c3, c4 = st.columns(4)
c1.metric("Authors", f"{len(df):,}")
c2.metric("Commits", f"{summary.total_commits:,}")
c3.metric("Lines changed", f"{summary.total_lines:,}")
c4.metric("Repo granularity", granularity)

st.divider()

# ---------------------------------------------------------------------------
# Share of lines vs share of commits
# ---------------------------------------------------------------------------
col_share, col_gran = st.columns([3, 2])

with col_share:
    st.subheader("Line ratio vs commit ratio")
    shares = df.melt(
        id_vars="author",
        value_vars=["line_ratio", "commit_ratio"],
        var_name="metric",
        value_name="ratio",
    )
    fig_share = px.bar(
        shares,
        x="ratio",
        y="author",
        color="metric",
        barmode="group",
        orientation="h",
        labels={"author": "", "ratio": "Share of total", "metric": ""},
    )
    fig_share.update_layout(
        height=max(280, len(df) * 36),
        margin=dict(l=0, r=0, t=10, b=0),
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1),
    )
    fig_share.update_xaxes(tickformat=".0%")
    st.plotly_chart(fig_share, use_container_width=True)

with col_gran:
    st.subheader("Granularity")
    st.caption("Commits per changed line. Lower means bigger commits.")
    # inf/nan come from authors without line changes or without commits
    finite = df[df["granularity"].apply(math.isfinite)].sort_values("granularity")
    if finite.empty:
        st.info("No author has both commits and line changes.")
    else:
        fig_gran = px.bar(
            finite,
            x="granularity",
            y="author",
            orientation="h",
            labels={"author": "", "granularity": "Commits per line"},
            text="granularity",
        )
        fig_gran.update_traces(texttemplate="%{text:.3f}", textposition="outside")
        fig_gran.update_layout(
            height=max(280, len(finite) * 28),
            margin=dict(l=0, r=60, t=10, b=0),
        )
        st.plotly_chart(fig_gran, use_container_width=True)

st.divider()

# ---------------------------------------------------------------------------
# Table
# ---------------------------------------------------------------------------
st.subheader("Summary")
st.dataframe(
    df,
    use_container_width=True,
    hide_index=True,
    column_config={
        "author": "Author",
        "commits": "Commits",
        "additions": "Additions",
        "deletions": "Deletions",
        "line_ratio": st.column_config.NumberColumn("Line ratio", format="%.3f"),
        "commit_ratio": st.column_config.NumberColumn("Commit ratio", format="%.3f"),
        "granularity": st.column_config.NumberColumn("Granularity", format="%.3f"),
    },
)
st.download_button(
    "Download CSV",
    data=df.to_csv(index=False),
    file_name=f"{summary.repo}-contributions.csv",
    mime="text/csv",
)
