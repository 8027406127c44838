"""UI service layer: cached extractor, per-browser-session state, upload conversion."""

import streamlit as st

from src.viaticos.config import get_settings
from src.viaticos.logging_config import setup_logging
from src.clients.expenses.extraction import ReceiptExtractor
from src.clients.expenses.schemas import ReceiptUpload
from src.clients.expenses.session import ExpenseSession

SESSION_KEY = "expense_session"


@st.cache_resource
def init_logging() -> None:
    """Configure project logging once per server process."""
    setup_logging(level=get_settings().LOG_LEVEL)


@st.cache_resource
def _cached_extractor() -> ReceiptExtractor:
    """Cached receipt extractor (LLM client is built lazily, only once a key is configured)."""
    return ReceiptExtractor(settings=get_settings())


def get_extractor() -> ReceiptExtractor:
    return _cached_extractor()


def get_session() -> ExpenseSession:
    """Return this browser session's ExpenseSession, creating it on first use."""
    if SESSION_KEY not in st.session_state:
        settings = get_settings()
        st.session_state[SESSION_KEY] = (
            ExpenseSession.with_seed_data() if settings.LOAD_SEED_DATA else ExpenseSession()
        )
    return st.session_state[SESSION_KEY]


def to_receipt_upload(uploaded_file) -> ReceiptUpload:
    """Convert a Streamlit UploadedFile to a ReceiptUpload (name, MIME type, bytes)."""
    return ReceiptUpload(
        name=uploaded_file.name or "upload",
        mime_type=uploaded_file.type or "",
        content=uploaded_file.getvalue(),
    )
