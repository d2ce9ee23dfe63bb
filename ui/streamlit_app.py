# Run with: streamlit run ui/streamlit_app.py
import streamlit as st

from core.logging_config import setup_logging
from ui.api_client import GatewayClient
from ui.session import PdfQnaSession

setup_logging()


def get_session() -> PdfQnaSession:
    if "qna" not in st.session_state:
        st.session_state.qna = PdfQnaSession(GatewayClient().ask)
        st.session_state.uploader_key = 0
        st.session_state.loaded_file_id = None
    return st.session_state.qna


def show_notifications(session: PdfQnaSession) -> None:
    for note in session.pop_notifications():
        st.toast(f"**{note.title}**  \n{note.description}", icon="⚠️" if note.destructive else "✅")


def render_document_panel(session: PdfQnaSession) -> None:
    if session.has_document:
        with st.container(border=True):
            st.markdown("#### 📄 Uploaded PDF")
            name_col, remove_col = st.columns([5, 1])
            name_col.markdown(f"**{session.pdf_name}**")
            if remove_col.button("🗑️", help="Remove PDF", disabled=session.is_loading):
                session.remove_document()
                # a fresh key empties the uploader widget
                st.session_state.uploader_key += 1
                st.session_state.loaded_file_id = None
                st.rerun()
        return

    uploaded = st.file_uploader(
        "Drag & drop a PDF here, or click to select",
        type=["pdf"],
        help="PDF files only",
        key=f"uploader_{st.session_state.uploader_key}",
    )
    if uploaded is None:
        return

    # streamlit hands back the same file on every rerun; only load it once
    file_id = getattr(uploaded, "file_id", None) or f"{uploaded.name}:{uploaded.size}"
    if file_id == st.session_state.loaded_file_id:
        return
    st.session_state.loaded_file_id = file_id
    with st.spinner("Uploading..."):
        loaded = session.load_file(uploaded)
    if loaded:
        st.rerun()


def render_question_panel(session: PdfQnaSession) -> None:
    with st.form("ask_form"):
        question = st.text_area(
            "Question",
            value=session.question,
            placeholder="Ask a question about the PDF...",
            height=120,
            disabled=not session.can_ask,
            label_visibility="collapsed",
        )
        submitted = st.form_submit_button(
            "✨ Ask",
            use_container_width=True,
            disabled=not session.can_ask,
        )

    if submitted:
        session.set_question(question)
        with st.spinner("Thinking..."):
            session.submit()

    with st.container(border=True):
        st.markdown("#### Answer")
        st.caption("The answer from the AI will appear below.")
        if session.is_loading:
            st.info("Waiting for the answer...")
        elif session.answer:
            st.text(session.answer)
        else:
            st.markdown(":grey[No answer yet. Ask a question to begin.]")


def main() -> None:
    st.set_page_config(page_title="PDF Insight", page_icon="📄", layout="wide")
    session = get_session()

    left, right = st.columns(2, gap="large")
    with left:
        st.title("PDF Insight")
        st.caption("Upload a PDF document and ask questions about its content.")
        render_document_panel(session)
    with right:
        render_question_panel(session)

    show_notifications(session)


main()
