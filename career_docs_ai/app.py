"""
Career document generator – Streamlit frontend.
No business logic in layout; extraction, writing and refinement live in services.
"""

from typing import AsyncIterator, Iterator, List

import streamlit as st

from career_docs_ai.config import OPENAI_API_KEY, SUPPORTED_LANGUAGES
from career_docs_ai.errors import CareerDocsError
from career_docs_ai.fact_pipeline.text_extractor import document_from_upload
from career_docs_ai.schemas.candidate import CandidateDocument, Profile
from career_docs_ai.schemas.generation import (
    ChatMessage,
    GenerationRequest,
    RefinementRequest,
    StreamEvent,
    SummaryRefinementRequest,
)
from career_docs_ai.services.generation_service import (
    build_pipeline,
    stream_refined_letter,
    stream_refined_summary,
)
from career_docs_ai.utils.helpers import iterate_async_in_sync

DOCUMENT_TYPE_LABELS = {
    "cv": "CV / Resume",
    "experience": "Experience or interview transcript",
    "other": "Other",
}
LANGUAGE_LABELS = {"en": "English", "da": "Danish"}


def _text_until(events: Iterator[StreamEvent], event_type: str, state: dict) -> Iterator[str]:
    """
    Yield text of ``event_type`` events; stop at the first other event and remember it.
    The yielded text is also accumulated in ``state[event_type]``.
    """
    for event in events:
        if event.type == event_type:
            if event.text:
                state[event_type] = state.get(event_type, "") + event.text
                yield event.text
            continue
        state["last"] = event
        return


def _chain_first(first: StreamEvent, rest: Iterator[str]) -> Iterator[str]:
    if first.text:
        yield first.text
    yield from rest


def _collect_documents(uploads, doc_type: str) -> List[CandidateDocument]:
    docs: List[CandidateDocument] = []
    for upload in uploads or []:
        doc = document_from_upload(upload.getvalue(), upload.name, doc_type=doc_type)
        if doc is None:
            st.warning(f"Could not read text from {upload.name}; skipped.")
        else:
            docs.append(doc)
    return docs


def _init_session() -> None:
    defaults = {
        "error": None,
        "request": None,
        "cover_letter": "",
        "summary": "",
        "inventory": None,
        "letter_history": [],
        "summary_history": [],
    }
    for key, value in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = value


def _run_generation(request: GenerationRequest) -> None:
    """Stream letter and summary live, then keep the final text in the session."""
    pipeline = build_pipeline()
    events = iterate_async_in_sync(pipeline.stream(request))
    state: dict = {}

    st.subheader("Cover Letter")
    with st.spinner("Extracting facts from your documents…"):
        first = next(events, None)
    if first is None:
        return
    if first.type == "cover_letter":
        st.write_stream(_chain_first(first, _text_until(events, "cover_letter", state)))
        state["cover_letter"] = (first.text or "") + state.get("cover_letter", "")
    else:
        state["last"] = first

    if state.get("last") is not None and state["last"].type == "cover_letter_done":
        st.subheader("Executive Summary")
        st.write_stream(_text_until(events, "summary", state))

    last = state.get("last")
    if last is not None and last.type == "error":
        st.session_state["error"] = f"Generation stopped: {last.error}"
        return
    st.session_state["error"] = None
    st.session_state["request"] = request
    st.session_state["cover_letter"] = state.get("cover_letter", "")
    st.session_state["summary"] = state.get("summary", "")
    st.session_state["inventory"] = pipeline.inventory.to_dict() if pipeline.inventory is not None else None
    st.session_state["letter_history"] = []
    st.session_state["summary_history"] = []


def _run_refinement(
    stream: AsyncIterator[StreamEvent],
    event_type: str,
    result_key: str,
    history_key: str,
    user_request: str,
) -> None:
    """Stream one refinement turn; on success replace the stored text and extend its history."""
    state: dict = {}
    st.write_stream(_text_until(iterate_async_in_sync(stream), event_type, state))
    last = state.get("last")
    if last is not None and last.type == "error":
        st.session_state["error"] = f"Refinement stopped: {last.error}"
        return
    revised = state.get(event_type, "")
    if not revised.strip():
        st.session_state["error"] = "The model returned an empty revision."
        return
    st.session_state["error"] = None
    st.session_state[result_key] = revised
    st.session_state[history_key] = st.session_state[history_key] + [
        ChatMessage(role="user", content=user_request),
        ChatMessage(role="assistant", content=revised),
    ]


def _render_letter_refinement(request: GenerationRequest) -> None:
    with st.expander("Refine cover letter"):
        for message in st.session_state["letter_history"]:
            if message.role == "user":
                st.markdown(f"**You:** {message.content}")
        with st.form("refine_letter_form", clear_on_submit=True):
            user_request = st.text_area("What should change?", key="refine_letter_request")
            submitted = st.form_submit_button("Refine letter")
        if submitted and user_request.strip():
            refinement = RefinementRequest(
                current_letter=st.session_state["cover_letter"],
                user_request=user_request,
                conversation_history=st.session_state["letter_history"],
                profile=request.profile,
                documents=request.documents,
                job_description=request.job_description,
                language=request.language,
            )
            try:
                _run_refinement(
                    stream_refined_letter(refinement), "refinement", "cover_letter", "letter_history", user_request
                )
            except CareerDocsError as e:
                st.session_state["error"] = str(e)
            st.rerun()


def _render_summary_refinement(request: GenerationRequest) -> None:
    with st.expander("Refine executive summary"):
        for message in st.session_state["summary_history"]:
            if message.role == "user":
                st.markdown(f"**You:** {message.content}")
        with st.form("refine_summary_form", clear_on_submit=True):
            user_request = st.text_area("What should change?", key="refine_summary_request")
            submitted = st.form_submit_button("Refine summary")
        if submitted and user_request.strip():
            refinement = SummaryRefinementRequest(
                current_summary=st.session_state["summary"],
                user_request=user_request,
                conversation_history=st.session_state["summary_history"],
                profile=request.profile,
                documents=request.documents,
                job_title=request.job_title,
                job_description=request.job_description,
                language=request.language,
            )
            try:
                _run_refinement(
                    stream_refined_summary(refinement),
                    "summary_refinement",
                    "summary",
                    "summary_history",
                    user_request,
                )
            except CareerDocsError as e:
                st.session_state["error"] = str(e)
            st.rerun()


def _render_results() -> None:
    request = st.session_state["request"]
    if request is None:
        return
    st.subheader("Cover Letter")
    st.markdown(st.session_state["cover_letter"])
    _render_letter_refinement(request)

    if st.session_state["summary"]:
        st.subheader("Executive Summary")
        st.markdown(st.session_state["summary"])
        _render_summary_refinement(request)

    if st.session_state["inventory"] is not None:
        with st.expander("Fact inventory used"):
            st.json(st.session_state["inventory"])


def render_layout() -> None:
    """Streamlit page layout; streaming output is written as it arrives."""
    st.set_page_config(page_title="Cover Letter Generator", layout="wide")
    st.title("Cover Letter Generator")
    st.markdown("*Claims are limited to facts found in your own documents.*")
    st.divider()
    _init_session()

    st.subheader("Candidate")
    name = st.text_input("Name", key="candidate_name")
    summary = st.text_area("Professional summary", key="candidate_summary", height=120)
    doc_type = st.selectbox(
        "Document type for uploads",
        options=list(DOCUMENT_TYPE_LABELS.keys()),
        format_func=lambda k: DOCUMENT_TYPE_LABELS[k],
        key="doc_type",
    )
    uploads = st.file_uploader(
        "Documents (PDF, DOCX, TXT)",
        type=["pdf", "docx", "txt", "md"],
        accept_multiple_files=True,
        key="uploads",
    )

    st.subheader("Job")
    col1, col2 = st.columns(2)
    with col1:
        job_title = st.text_input("Job Title", placeholder="e.g. Platform Engineer", key="job_title")
    with col2:
        company_name = st.text_input("Company", key="company_name")
    job_description = st.text_area("Job description", key="job_description", height=220)
    language = st.radio(
        "Language",
        options=list(SUPPORTED_LANGUAGES),
        format_func=lambda k: LANGUAGE_LABELS.get(k, k),
        horizontal=True,
        key="language",
    )
    custom_instructions = st.text_area("Custom instructions (optional)", key="custom_instructions")
    generate_clicked = st.button("Generate", type="primary", key="generate_btn")

    if generate_clicked:
        if not OPENAI_API_KEY:
            st.session_state["error"] = "OPENAI_API_KEY is not set. Add it to your .env file."
        else:
            try:
                request = GenerationRequest(
                    profile=Profile(name=name, summary=summary),
                    documents=_collect_documents(uploads, doc_type),
                    job_title=job_title.strip(),
                    company_name=company_name.strip(),
                    job_description=job_description,
                    language=language,
                    custom_instructions=custom_instructions or None,
                )
                _run_generation(request)
            except CareerDocsError as e:
                st.session_state["error"] = str(e)
            else:
                if st.session_state["error"] is None:
                    st.rerun()

    if st.session_state["error"]:
        st.error(st.session_state["error"])
    _render_results()


if __name__ == "__main__":
    render_layout()
