"""
AI Domain Finder: Streamlit UI entry point.
"""

import logging

import streamlit as st
from streamlit_mic_recorder import speech_to_text

# Load .env first so updated API keys are used
from src.utils.config import (
    audit_log_path,
    build_counter_store,
    daily_rate_limit,
    gemini_api_key,
    gemini_model,
    load_config,
    minute_rate_limit,
)
load_config()

from src.domains.suggestions.models import DEFAULT_TLDS
from src.domains.suggestions.rate_limiter import RateLimiter
from src.evaluations.tld_distribution_eval import evaluate_tld_distribution
from src.infrastructure.audit.audit_log import AuditLog
from src.services.domain_lookup import (
    CREATIVITY_OPTIONS,
    DEFAULT_CREATIVITY,
    DEFAULT_SUGGESTION_COUNT,
    MODULE_METADATA,
    SUGGESTION_COUNT_OPTIONS,
    build_client,
    check_availability,
    get_domain_suggestions,
)
from src.ui.suggestion_display import render_suggestions, render_tld_distribution
from src.utils.logger import get_logger, setup_logger

setup_logger("domain_finder", level=logging.INFO, secrets=[gemini_api_key()])
log = get_logger()

st.set_page_config(page_title=MODULE_METADATA["display_name"], layout="wide")
st.title(MODULE_METADATA["display_name"])

TLD_CHOICES = ["com", "net", "org", "io", "hu", "de", "eu", "co", "app", "dev", "ai"]


# Counters and the audit log are shared by every browser session of this process
@st.cache_resource
def get_counter_store():
    return build_counter_store()


@st.cache_resource
def get_audit_log():
    return AuditLog(audit_log_path())


counter_store = get_counter_store()
audit_log = get_audit_log()

for key in ("last_debug_error", "voice_transcript", "last_results", "last_tlds", "availability"):
    if key not in st.session_state:
        st.session_state[key] = None

with st.sidebar:
    st.header("Settings")
    key = gemini_api_key()
    key_hint = f"…{key[-4:]}" if len(key) >= 4 else "not set"
    st.caption(f"Model: **{gemini_model()}** · Key: `{key_hint}`")
    daily, minute = daily_rate_limit(), minute_rate_limit()
    st.caption(
        f"Limits: {daily if daily > 0 else '∞'}/day · {minute if minute > 0 else '∞'}/minute"
    )
    usage = RateLimiter(counter_store, daily, minute).usage()
    st.caption(f"Used: {usage['daily']} today · {usage['minute']} this minute")

    st.subheader("🎤 Voice Input")
    st.caption("Speak a keyword instead of typing it")
    transcript = speech_to_text(
        language="en",
        start_prompt="🎤 Start speaking",
        stop_prompt="⏹️ Stop",
        just_once=True,
        use_container_width=True,
        key="voice_input",
    )
    if transcript:
        st.session_state.voice_transcript = transcript.strip()
    if st.session_state.voice_transcript:
        st.success(f"**Understood:** {st.session_state.voice_transcript}")

    with st.expander("Debug"):
        if st.session_state.last_debug_error:
            st.error("Last suggestion request failed:")
            st.code(st.session_state.last_debug_error, language="text")
        else:
            st.caption("No error recorded.")
        if audit_log.records:
            st.caption(f"Audit entries this process: {len(audit_log.records)}")
            st.json(audit_log.records[-1], expanded=False)

search_term = st.text_input(
    "Keyword or business idea",
    value=st.session_state.voice_transcript or "",
    help="Accented keywords (e.g. kávézó) allow accented domain suggestions.",
)
tlds = st.multiselect(
    "TLDs (first ones are preferred)",
    TLD_CHOICES,
    default=list(DEFAULT_TLDS),
)
col1, col2 = st.columns(2)
with col1:
    suggestion_count = st.selectbox(
        "Suggestion count",
        SUGGESTION_COUNT_OPTIONS,
        index=SUGGESTION_COUNT_OPTIONS.index(DEFAULT_SUGGESTION_COUNT),
    )
with col2:
    creativity_values = list(CREATIVITY_OPTIONS)
    temperature = st.selectbox(
        "Creativity",
        creativity_values,
        index=creativity_values.index(DEFAULT_CREATIVITY),
        format_func=lambda v: CREATIVITY_OPTIONS[v],
    )

col_suggest, col_check = st.columns([1, 1])
with col_suggest:
    suggest_clicked = st.button("💡 Suggest domains", use_container_width=True)
with col_check:
    check_clicked = st.button("🔎 Check availability (debug)", use_container_width=True)

if suggest_clicked:
    if not search_term.strip():
        st.error("Please enter a keyword.")
    else:
        client = build_client(temperature=temperature, store=counter_store, audit=audit_log)
        with st.spinner("Asking Gemini…"):
            results = get_domain_suggestions(
                search_term,
                tlds,
                suggestion_count,
                temperature,
                client=client,
                audit=audit_log,
            )
        st.session_state.last_results = results
        st.session_state.last_tlds = list(tlds) or list(DEFAULT_TLDS)
        st.session_state.last_debug_error = client.last_error or None
        log.info("UI search %r -> %d suggestions", search_term, len(results))

if check_clicked:
    st.session_state.availability = check_availability(search_term, tlds, audit=audit_log)

if st.session_state.last_results is not None:
    render_suggestions(st.session_state.last_results)
    if st.session_state.last_results:
        with st.expander("TLD mix vs. prompt advice"):
            render_tld_distribution(
                evaluate_tld_distribution(st.session_state.last_results, st.session_state.last_tlds)
            )

if st.session_state.availability is not None:
    st.markdown("---")
    st.caption("Availability check is a debug placeholder: every domain is reported as registered.")
    render_suggestions(st.session_state.availability)
