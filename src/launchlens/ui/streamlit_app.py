"""Streamlit dashboard for LaunchLens."""

import json
import logging

import pandas as pd
import streamlit as st

from launchlens.core.config import settings
from launchlens.core.exceptions import InputError, LaunchLensError
from launchlens.services.analysis import AnalysisService
from launchlens.services.llm import LLMServiceFactory
from launchlens.services.session import UploadSession
from launchlens.utils.data_prep import prepare_export

# Configure logging
logging.basicConfig(level=getattr(logging, settings.log_level.upper(), logging.INFO))
logger = logging.getLogger(__name__)


def _session() -> UploadSession:
    # st.session_state is per browser session, so uploads never leak between users
    if "upload_session" not in st.session_state:
        st.session_state["upload_session"] = UploadSession()
    return st.session_state["upload_session"]


def _sentiment_frame(result) -> pd.DataFrame:
    pre = result.comparison.pre_launch_sentiment
    post = result.comparison.post_launch_sentiment
    return pd.DataFrame(
        {
            "Pre-launch": [pre.positive, pre.negative, pre.neutral],
            "Post-launch": [post.positive, post.negative, post.neutral],
        },
        index=["positive", "negative", "neutral"],
    )


def _themes_frame(result) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "Theme": t.theme,
                "Pre": t.pre_count,
                "Post": t.post_count,
                "Change %": round(t.change_rate, 1),
                "Sentiment": t.sentiment,
            }
            for t in result.comparison.themes
        ]
    )


def _render_result(result):
    comparison = result.comparison
    pre, post = comparison.pre_launch_sentiment, comparison.post_launch_sentiment

    col1, col2, col3, col4 = st.columns(4)
    with col1:
        st.metric("Pre-launch Reviews", result.pre_launch_reviews.count)
    with col2:
        st.metric("Post-launch Reviews", result.post_launch_reviews.count)
    with col3:
        st.metric("Avg Rating", f"{post.average_rating:.2f}", f"{post.average_rating - pre.average_rating:+.2f}")
    with col4:
        st.metric("Sentiment Shift", f"{comparison.sentiment_shift:+.1f} pts")

    st.subheader("📊 Sentiment Distribution")
    st.bar_chart(_sentiment_frame(result))

    if comparison.themes:
        st.subheader("🧩 Themes")
        st.dataframe(_themes_frame(result), hide_index=True)

    impact = result.impact
    st.subheader("🚀 Launch Impact")
    if impact.overall_success:
        st.success(f"Launch successful, score {impact.success_score:.1f}/100")
    else:
        st.warning(f"Launch needs attention, score {impact.success_score:.1f}/100")
    st.write(impact.executive_summary)

    for title, items in (
        ("✅ Key Improvements", impact.key_improvements),
        ("⚠️ Critical Issues", impact.critical_issues),
        ("💡 Recommendations", impact.recommendations),
    ):
        with st.expander(title, expanded=bool(items)):
            for item in items:
                st.write(f"- {item}")

    st.download_button(
        "Download report (JSON)",
        data=json.dumps(prepare_export(result), indent=2, ensure_ascii=False),
        file_name="launch_analysis.json",
        mime="application/json",
    )


st.set_page_config(page_title="LaunchLens — Launch Impact", page_icon="📈", layout="wide")
st.title("📈 LaunchLens — Pre/Post Launch Review Analysis")
st.write("Upload review exports from before and after a launch to compare sentiment, themes and overall impact.")

session = _session()

with st.sidebar:
    st.header("📁 Upload")
    pre_file = st.file_uploader("Pre-launch reviews (CSV)", type=["csv"], key="pre_file")
    post_file = st.file_uploader("Post-launch reviews (CSV)", type=["csv"], key="post_file")

    if pre_file is not None and post_file is not None:
        try:
            receipt = session.upload(pre_file.getvalue(), post_file.getvalue())
            st.info(f"{receipt.message} ({receipt.pre_launch_count} pre, {receipt.post_launch_count} post)")
        except InputError as e:
            session.clear()
            st.warning(str(e))

    run_analysis = st.button("📊 Analyze", disabled=not session.ready, width='stretch')

if run_analysis:
    try:
        with st.spinner("Analyzing reviews..."):
            service = AnalysisService(LLMServiceFactory.create(), parallel_sentiment=settings.parallel_sentiment)
            st.session_state["result"] = session.analyze(service)
    except InputError as e:
        st.warning(str(e))
    except LaunchLensError as e:
        logger.error(f"Analysis failed: {e}")
        st.error(f"Analysis failed: {e}")

if st.session_state.get("result") is not None:
    _render_result(st.session_state["result"])
