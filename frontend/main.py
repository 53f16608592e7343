import plotly.graph_objects as go
import streamlit as st

from api_client import analyze_texts, check_health, export_results, extract_file_texts
from history import (
    SENTIMENT_COLORS,
    ResultHistory,
    confidence_series,
    distribution,
    summarize,
    to_dataframe,
)

# Set page configuration
st.set_page_config(
    page_title="Sentix",
    page_icon="🧠",
    layout="wide",
)

if "history" not in st.session_state:
    st.session_state["history"] = ResultHistory()
if "show_docs" not in st.session_state:
    st.session_state["show_docs"] = False

history = st.session_state["history"]

# App title and description
st.title("Sentix")
st.markdown("Submit text or upload files, then explore sentiment, confidence and keywords.")

# === Sidebar: backend status ===
with st.sidebar:
    st.markdown("## Backend")
    health = check_health()
    if health["connected"]:
        data = health["data"]
        if data.get("classifier_status") == "ok":
            st.success("AI Engine Active")
        else:
            st.warning("Classifier not configured")
        st.caption(f"Model: {data.get('model', 'n/a')} | chunk size: {data.get('chunk_size', 'n/a')}")
    elif health.get("status_code"):
        st.error(f"API Status: {health['status_code']}")
    else:
        st.error(f"API Disconnected: {health.get('error', '')[:100]}")

    if st.button("Documentation"):
        st.session_state["show_docs"] = not st.session_state["show_docs"]
    if st.button("Clear History"):
        history.clear()
        st.rerun()

if st.session_state["show_docs"]:
    with st.container(border=True):
        st.markdown("### Model Documentation")
        col1, col2 = st.columns(2)
        with col1:
            st.markdown("""
            #### Confidence Thresholds
            - **0.8 - 1.0:** Highly reliable prediction. Strong indicators present.
            - **0.6 - 0.79:** Moderate reliability. Tone might be subtle or nuanced.
            - **Below 0.6:** Low reliability. Sentiment is ambiguous or mixed.
            """)
        with col2:
            st.markdown("""
            #### Limitations & Biases
            - Sarcasm and regional slang may be misclassified.
            - May struggle with extremely long context or double negatives.
            - The model is pre-trained; real-time events may lack context.
            """)


def run_analysis(texts, source):
    with st.spinner(f"Analyzing {len(texts)} text(s)..."):
        results = analyze_texts(texts, source=source)
    if results is None:
        return False
    history.add_batch(results)
    st.session_state["flash"] = f"Analyzed {len(results)} text(s)."
    return True


console, dashboard = st.columns([1, 2])

# === Analysis console ===
with console:
    st.markdown("### Analysis Console")
    if "flash" in st.session_state:
        st.success(st.session_state.pop("flash"))
    direct_tab, batch_tab = st.tabs(["Direct Entry", "Batch Upload"])

    with direct_tab:
        # A widget value can only be reset before the widget is drawn
        if st.session_state.pop("clear_text_input", False):
            st.session_state["text_input"] = ""
        text_input = st.text_area(
            "Enter text to analyze:",
            height=150,
            placeholder="Type or paste your text here...",
            key="text_input"
        )
        if st.button("Analyze Sentiment", key="analyze_text"):
            if not text_input.strip():
                st.warning("Please enter some text to analyze.")
            elif run_analysis([text_input], source="direct"):
                st.session_state["clear_text_input"] = True
                st.rerun()

    with batch_tab:
        uploaded = st.file_uploader("Upload a .txt, .json or .csv file", type=["txt", "json", "csv"])
        st.caption("Up to 50 texts are read from a file.")
        if st.button("Analyze File", disabled=uploaded is None):
            texts = extract_file_texts(uploaded.name, uploaded.getvalue(), uploaded.type)
            if texts and run_analysis(texts, source=uploaded.name):
                st.rerun()

    results = history.to_list()
    summary = summarize(results)

    st.markdown("#### Quick Stats")
    st.metric("Total Analyzed", summary["total"])
    st.metric("Avg Confidence", f"{round(summary['avg_confidence'] * 100)}%")

# === Insights dashboard ===
with dashboard:
    st.markdown("### Insights Dashboard")

    if not results:
        st.info("No results to display yet. Analyze some text to see interactive insights.")
    else:
        chart_col1, chart_col2 = st.columns(2)

        with chart_col1:
            dist = distribution(results)
            fig = go.Figure(data=[
                go.Pie(
                    labels=dist["sentiment"],
                    values=dist["count"],
                    hole=0.5,
                    marker_colors=[SENTIMENT_COLORS[s] for s in dist["sentiment"]],
                )
            ])
            fig.update_layout(title="Sentiment Distribution", height=300, margin=dict(t=40, b=0, l=0, r=0))
            st.plotly_chart(fig, use_container_width=True)

        with chart_col2:
            conf = confidence_series(results)
            fig = go.Figure(data=[
                go.Bar(
                    x=conf["document"],
                    y=conf["confidence"],
                    marker_color="#2563eb",
                    text=[f"{c}%" for c in conf["confidence"]],
                    textposition="auto",
                )
            ])
            fig.update_layout(
                title="Confidence Levels (%)",
                yaxis=dict(range=[0, 100]),
                height=300,
                margin=dict(t=40, b=0, l=0, r=0),
            )
            st.plotly_chart(fig, use_container_width=True)

        st.markdown("#### Detailed Results")
        table = to_dataframe(results)
        table["keywords"] = table["keywords"].apply(", ".join)
        st.dataframe(
            table.drop(columns=["id"]),
            use_container_width=True,
            column_config={
                "confidence": st.column_config.ProgressColumn("confidence", min_value=0.0, max_value=1.0),
            },
        )

        st.markdown("#### Export")
        export_cols = st.columns(3)
        for col, (fmt, label) in zip(export_cols, [("csv", "CSV Spreadsheet"), ("json", "JSON Data"), ("pdf", "PDF Report")]):
            with col:
                if st.button(f"Prepare {label}", key=f"prepare_{fmt}"):
                    exported = export_results(results, fmt)
                    if exported:
                        filename, content = exported
                        st.download_button(f"Download {label}", data=content, file_name=filename, key=f"download_{fmt}")

# Footer
st.markdown("---")
st.markdown("Sentix | Built with Streamlit and FastAPI")
