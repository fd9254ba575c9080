import logging
import os
import tempfile

import numpy as np
import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
import streamlit as st

from components.bench import WORKLOAD_KINDS, BenchConfig, run_benchmark
from tries.errors import KeywordTrieError

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")

# Configure page
st.set_page_config(
    page_title="Keyword Trie Bench",
    page_icon="🧬",
    layout="wide",
    initial_sidebar_state="expanded"
)

# Main title
st.title("🧬 Keyword Trie Bench")
st.markdown("---")

# Sidebar
with st.sidebar:
    st.header("Navigation")
    page = st.selectbox(
        "Choose a section:",
        ["Home", "Benchmark", "Match Analysis"]
    )

    st.markdown("---")
    st.subheader("Workload")
    kind = st.selectbox("Workload kind", WORKLOAD_KINDS)
    seed = st.number_input("Seed", min_value=0, value=42, step=1)
    case_sensitive = st.checkbox("Case sensitive", value=True)
    repeats = st.slider("Timed scans", min_value=1, max_value=20, value=3)
    verify = st.checkbox("Verify against naive search", value=False)

    patterns_raw = st.text_area(
        "Explicit keywords (one per line, optional)",
        help="Replaces the generated keywords when not empty"
    )
    patterns = [p for p in patterns_raw.splitlines() if p] or None

    if kind == "text":
        num_sentences = st.slider("Sentences", 10, 5000, 200, step=10)
        num_keywords = st.slider("Keywords", 1, 200, 20)
        upper_share = st.slider("Capitalized keyword share", 0.0, 1.0, 0.1)
    else:
        genome_length = st.number_input("Genome length", min_value=100, value=100_000, step=10_000)
        num_motifs = st.slider("Motifs", 1, 500, 50)
        motif_len = st.slider("Motif length", 1, 40, (4, 12))
        uploaded_file = None
        if kind == "fasta":
            uploaded_file = st.file_uploader("FASTA file", type=["fasta", "fa", "fna", "txt"])

    st.markdown("---")
    if st.button("▶ Run benchmark"):
        st.session_state.pop('report', None)
        fasta_path = None
        try:
            if kind == "fasta":
                if uploaded_file is None:
                    raise ValueError("Upload a FASTA file first")
                with tempfile.NamedTemporaryFile("wb", suffix=".fasta", delete=False) as tmp:
                    tmp.write(uploaded_file.getvalue())
                    fasta_path = tmp.name
            if kind == "text":
                config = BenchConfig(kind=kind, num_sentences=num_sentences,
                                     num_keywords=num_keywords, upper_share=upper_share,
                                     patterns=patterns, case_sensitive=case_sensitive,
                                     repeats=repeats, seed=int(seed), verify=verify)
            else:
                config = BenchConfig(kind=kind, genome_length=int(genome_length),
                                     num_motifs=num_motifs, min_motif_len=motif_len[0],
                                     max_motif_len=motif_len[1], fasta_path=fasta_path,
                                     patterns=patterns, case_sensitive=case_sensitive,
                                     repeats=repeats, seed=int(seed), verify=verify)
            with st.spinner("Building trie and scanning..."):
                st.session_state['report'] = run_benchmark(config)
            st.success("✅ Benchmark finished")
        except (ValueError, FileNotFoundError, KeywordTrieError) as e:
            st.error(f"❌ Benchmark failed: {e}")
        finally:
            if fasta_path is not None:
                os.unlink(fasta_path)

report = st.session_state.get('report')

# Main content area
if page == "Home":
    st.header("Multi-keyword search with an Aho-Corasick trie")

    st.markdown("""
    The keyword trie indexes a set of keywords once and then finds every
    occurrence of every keyword in a text with a single pass.

    **Workloads:**
    - 🧬 **dna**: random genome, motifs sampled from it
    - 📄 **fasta**: your own FASTA file, motifs sampled from it
    - 📝 **text**: generated English text, keywords drawn from it
    """)

    col1, col2, col3, col4 = st.columns(4)

    if report is None:
        with col1:
            st.metric("Keywords", "0", "No benchmark run")
        with col2:
            st.metric("Trie nodes", "0", "No benchmark run")
        with col3:
            st.metric("Build time", "-", "No benchmark run")
        with col4:
            st.metric("Matches", "0", "No benchmark run")
    else:
        summary = report.summary()
        with col1:
            st.metric("Keywords", summary["keywords"])
        with col2:
            st.metric("Trie nodes", summary["nodes"])
        with col3:
            st.metric("Build time", f"{summary['build_ms']:.2f} ms")
        with col4:
            st.metric("Matches", summary["matches"])

elif page == "Benchmark":
    st.header("⏱ Benchmark")

    if report is not None:
        summary = report.summary()
        stats = report.scan_stats()

        col1, col2 = st.columns(2)

        with col1:
            st.write("**Run summary:**")
            st.dataframe(pd.DataFrame(summary.items(), columns=["Metric", "Value"]).astype(str))

        with col2:
            st.write("**Scan timings:**")
            st.write(f"- Mean: {stats['mean'] * 1e3:.3f} ms")
            st.write(f"- Std: {stats['std'] * 1e3:.3f} ms")
            st.write(f"- Min / Max: {stats['min'] * 1e3:.3f} / {stats['max'] * 1e3:.3f} ms")
            throughput = report.text_length / stats['mean'] / 1e6 if stats['mean'] else 0.0
            st.write(f"- Throughput: {throughput:.2f} M symbols/s")
            if report.verified is not None:
                if report.verified:
                    st.success("✅ Matches agree with the naive search")
                else:
                    st.error("❌ Matches differ from the naive search")

        runs = np.arange(1, len(report.scan_seconds) + 1)
        fig = go.Figure()
        fig.add_trace(go.Scatter(x=runs, y=np.asarray(report.scan_seconds) * 1e3,
                                 mode='markers+lines', name='Scan time'))
        fig.update_layout(title="Scan time per run", xaxis_title="Run", yaxis_title="ms")
        st.plotly_chart(fig, use_container_width=True)

    else:
        st.info("👈 Configure a workload in the sidebar and run the benchmark")

elif page == "Match Analysis":
    st.header("🔍 Match Analysis")

    if report is not None:
        matches = report.matches

        tab1, tab2, tab3 = st.tabs(["Per Keyword", "Positions", "Raw Matches"])

        with tab1:
            per_keyword = report.matches_per_keyword()
            fig = px.bar(per_keyword, x="keyword", y="matches", title="Matches per keyword")
            st.plotly_chart(fig, use_container_width=True)

            missing = per_keyword[per_keyword["matches"] == 0]
            if len(missing) > 0:
                st.warning(f"⚠️ {len(missing)} keywords never matched")
                st.dataframe(missing)

        with tab2:
            if matches.empty:
                st.info("No matches to plot")
            else:
                fig_pos = px.histogram(matches, x="end", nbins=50,
                                       title="Match end positions")
                st.plotly_chart(fig_pos, use_container_width=True)

        with tab3:
            with st.expander("Filter Matches"):
                selected = st.multiselect("Keywords", report.keywords)
            shown = matches[matches["keyword"].isin(selected)] if selected else matches
            st.write(f"**Matches ({len(shown)} rows):**")
            st.dataframe(shown, use_container_width=True)

    else:
        st.info("👈 Configure a workload in the sidebar and run the benchmark")

# Footer
st.markdown("---")
st.markdown(
    """
    <div style='text-align: center; color: #B0B0B0; padding: 1rem;'>
        Built with Streamlit 🚀 | Keyword Trie Bench
    </div>
    """,
    unsafe_allow_html=True
)
