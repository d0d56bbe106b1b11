"""
StudyTracker - Lecture and session progress board.

Streamlit application for marking lectures and sessions complete per course,
with per-course progress bars and overall totals.

Usage:
    streamlit run app.py
"""

import logging

import streamlit as st

from studytracker.config import DEFAULT_PROGRESS_DB, EXPORT_FILENAME
from studytracker.schemas import SquareType
from studytracker.tracker import (
    AdminConsole,
    MutationEngine,
    ProgressStorage,
    ViewSynchronizer,
)
from studytracker.tracker.admin import RESET_OK
from studytracker.utils import load_catalog
from studytracker.viewer import (
    BoardView,
    square_label,
    get_board_css,
    render_progress_bar,
    render_global_stats,
)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Configuration
# -----------------------------------------------------------------------------

st.set_page_config(
    page_title="Study Tracker",
    page_icon="📚",
    layout="wide",
    initial_sidebar_state="collapsed",
)


# -----------------------------------------------------------------------------
# Session State Initialization
# -----------------------------------------------------------------------------

def report_save_failure(error):
    """Keep the save failure for display on this run."""
    st.session_state.save_error = str(error)


def init_session_state():
    """Initialize session state variables."""
    if "catalog" not in st.session_state:
        st.session_state.catalog = load_catalog()

    if "engine" not in st.session_state:
        logger.info("Study Tracker initializing...")
        catalog = st.session_state.catalog
        storage = ProgressStorage(catalog, DEFAULT_PROGRESS_DB, notify=report_save_failure)
        board = BoardView(catalog)
        st.session_state.board = board
        st.session_state.engine = MutationEngine(storage, ViewSynchronizer(board, catalog))
        st.session_state.admin = AdminConsole(st.session_state.engine)
        logger.info(f"Tracking {len(catalog.courses)} courses")

    if "save_error" not in st.session_state:
        st.session_state.save_error = None

    if "admin_message" not in st.session_state:
        st.session_state.admin_message = None


def reload_session():
    """Drop the engine so the next run loads progress from storage again."""
    for key in ("engine", "board", "admin"):
        st.session_state.pop(key, None)


# -----------------------------------------------------------------------------
# Event Handlers
# -----------------------------------------------------------------------------

def handle_square_click(course_id: str, square_type: SquareType, index: int):
    st.session_state.engine.toggle(course_id, square_type, index)


def handle_reset_click(course_id: str):
    confirm_key = f"confirm_reset_{course_id}"
    if not st.session_state.get(confirm_key):
        return
    st.session_state.engine.reset_course(course_id)
    st.session_state[confirm_key] = False
    title = st.session_state.catalog.get_course(course_id).display_title
    st.toast(f"{title} progress reset")


# -----------------------------------------------------------------------------
# Header: Global Stats
# -----------------------------------------------------------------------------

def render_header():
    """Render title and overall counters."""
    st.title("📚 Study Tracker")
    st.markdown(get_board_css(), unsafe_allow_html=True)
    st.markdown(render_global_stats(st.session_state.board), unsafe_allow_html=True)

    if st.session_state.save_error:
        st.error(st.session_state.save_error)
        st.session_state.save_error = None


# -----------------------------------------------------------------------------
# Main Content: Course Cards
# -----------------------------------------------------------------------------

def render_course_card(course):
    """Render one course: progress bar, square rows and reset control."""
    catalog = st.session_state.catalog
    board = st.session_state.board

    with st.container(border=True):
        st.subheader(course.display_title)
        indicator = board.course_indicators[course.id]
        st.markdown(render_progress_bar(course.id, indicator), unsafe_allow_html=True)

        for square_type in SquareType:
            st.caption(square_type.value.capitalize())
            cols = st.columns(catalog.squares_per_type)
            for index, col in enumerate(cols):
                completed = board.is_completed(course.id, square_type, index)
                with col:
                    st.button(
                        square_label(square_type, index),
                        key=f"square_{course.id}_{square_type.value}_{index}",
                        type="primary" if completed else "secondary",
                        on_click=handle_square_click,
                        args=(course.id, square_type, index),
                        use_container_width=True,
                    )

        col1, col2 = st.columns([3, 1])
        with col1:
            st.checkbox(
                "Confirm reset of this course",
                key=f"confirm_reset_{course.id}",
            )
        with col2:
            st.button(
                "↺ Reset",
                key=f"reset_{course.id}",
                disabled=not st.session_state.get(f"confirm_reset_{course.id}"),
                on_click=handle_reset_click,
                args=(course.id,),
                use_container_width=True,
            )


def render_board():
    """Render all course cards grouped by catalog group."""
    for group, courses in st.session_state.catalog.grouped().items():
        if group:
            st.header(group)
        cols = st.columns(2)
        for i, course in enumerate(courses):
            with cols[i % 2]:
                render_course_card(course)


def render_feedback():
    """Show queued click feedback as toasts."""
    catalog = st.session_state.catalog
    for handle in st.session_state.board.drain_feedback():
        title = catalog.get_course(handle.course_id).display_title
        state = "done" if st.session_state.board.is_completed(
            handle.course_id, handle.square_type, handle.index
        ) else "not done"
        st.toast(f"{title}: {square_label(handle.square_type, handle.index)} {state}")


# -----------------------------------------------------------------------------
# Sidebar: Administration
# -----------------------------------------------------------------------------

def render_admin_sidebar():
    """Export, import and erase-all controls."""
    admin = st.session_state.admin

    st.sidebar.title("Administration")

    if st.session_state.admin_message:
        st.sidebar.info(st.session_state.admin_message)
        st.session_state.admin_message = None

    st.sidebar.subheader("Export")
    st.sidebar.download_button(
        "Download backup",
        data=admin.export_progress(),
        file_name=EXPORT_FILENAME,
        mime="application/json",
        use_container_width=True,
    )

    st.sidebar.divider()
    st.sidebar.subheader("Import")
    uploaded = st.sidebar.file_uploader("Backup file", type=["json"])
    pasted = st.sidebar.text_area("Or paste JSON", height=120)
    if st.sidebar.button("Import progress", use_container_width=True):
        data = uploaded.getvalue() if uploaded else pasted
        st.session_state.admin_message = admin.import_progress(data)
        st.rerun()

    st.sidebar.divider()
    st.sidebar.subheader("Danger zone")
    confirmed = st.sidebar.checkbox("I understand this cannot be undone")
    if st.sidebar.button("Erase all progress", disabled=not confirmed, use_container_width=True):
        message = admin.reset_all_progress(lambda prompt: confirmed)
        st.session_state.admin_message = message
        if message == RESET_OK:
            reload_session()
        st.rerun()


# -----------------------------------------------------------------------------
# Main App
# -----------------------------------------------------------------------------

def main():
    """Main application entry point."""
    init_session_state()
    render_admin_sidebar()
    render_header()
    render_feedback()
    render_board()


if __name__ == "__main__":
    main()
