"""
Benchmark runner shared by the command line (`trie_bench.py`) and the dashboard (`app.py`).

A run loads a workload (random genome, FASTA file, or generated English
text), builds a `KeywordTrie` from its keywords with one batch insertion,
scans the text `repeats` times and reports timings, trie statistics and the
matches of the last scan as a DataFrame. With `verify=True` the matches are
checked against a naive substring search.
"""
import logging
import time
from dataclasses import dataclass
from typing import List, Optional

import numpy as np
import pandas as pd

from components.workload import WorkLoad
from tries.keyword_node import fold_symbol
from tries.keyword_trie import KeywordTrie

logger = logging.getLogger(__name__)

WORKLOAD_KINDS = ("dna", "fasta", "text")
MATCH_COLUMNS = ["keyword", "id", "start", "end"]


@dataclass
class BenchConfig:
    """
    Configuration for run_benchmark
        kind: str, one of WORKLOAD_KINDS
        genome_length: int, bases generated for kind="dna"
        num_motifs / min_motif_len / max_motif_len: motif keywords for dna/fasta
        num_sentences / num_keywords / upper_share: text workload, see TextConfig
        fasta_path: str, FASTA file for kind="fasta"
        patterns: list, explicit keywords (replaces generated ones)
        case_sensitive: bool, build the trie case sensitive
        repeats: int, number of timed scans
        seed: int, seed for the workload generators
        verify: bool, compare matches against a naive search
    """
    kind: str = "dna"
    genome_length: int = 100_000
    num_motifs: int = 50
    min_motif_len: int = 4
    max_motif_len: int = 12
    num_sentences: int = 200
    num_keywords: int = 20
    upper_share: float = 0.1
    fasta_path: Optional[str] = None
    patterns: Optional[List[str]] = None
    case_sensitive: bool = True
    repeats: int = 3
    seed: Optional[int] = None
    verify: bool = False

    def __post_init__(self):
        if self.kind not in WORKLOAD_KINDS:
            raise ValueError(f"kind must be one of {WORKLOAD_KINDS}, got {self.kind!r}")
        if self.kind == "fasta" and not self.fasta_path:
            raise ValueError("kind='fasta' requires fasta_path")
        if self.repeats < 1:
            raise ValueError("repeats must be positive")
        if self.genome_length < 1:
            raise ValueError("genome_length must be positive")


@dataclass
class BenchReport:
    keywords: List[str]
    text_length: int
    build_seconds: float
    scan_seconds: List[float]
    matches: pd.DataFrame
    node_count: int
    avg_branch_factor: float
    verified: Optional[bool] = None

    def scan_stats(self):
        times = np.asarray(self.scan_seconds)
        return {
            "mean": float(times.mean()),
            "std": float(times.std()),
            "min": float(times.min()),
            "max": float(times.max()),
        }

    def matches_per_keyword(self):
        """Match counts per keyword, keywords without matches included."""
        counts = self.matches.groupby("keyword").size()
        return (counts.reindex(self.keywords, fill_value=0)
                      .rename("matches")
                      .rename_axis("keyword")
                      .reset_index())

    def summary(self):
        stats = self.scan_stats()
        return {
            "keywords": len(self.keywords),
            "text_length": self.text_length,
            "nodes": self.node_count,
            "avg_branch_factor": round(self.avg_branch_factor, 3),
            "build_ms": self.build_seconds * 1e3,
            "scan_ms_mean": stats["mean"] * 1e3,
            "scan_ms_min": stats["min"] * 1e3,
            "matches": len(self.matches),
            "verified": self.verified,
        }


def _fold_all(seq):
    if isinstance(seq, str):
        return "".join(map(fold_symbol, seq))
    return bytes(map(fold_symbol, seq))


def brute_force_matches(keywords, text, case_sensitive=True):
    """Return `{(id, start, end)}` for every occurrence, found with `find`.

    `keywords` and `text` must both be `str` or both be `bytes`.
    """
    if not case_sensitive:
        text = _fold_all(text)
    found = set()
    for keyword_id, keyword in enumerate(keywords):
        if not keyword:
            continue
        needle = keyword if case_sensitive else _fold_all(keyword)
        pos = text.find(needle)
        while pos != -1:
            found.add((keyword_id, pos, pos + len(needle) - 1))
            pos = text.find(needle, pos + 1)
    return found


def load_workload(config: BenchConfig):
    """Return `(text, keywords)` for `config`."""
    workload = WorkLoad(config.seed)
    if config.kind == "text":
        text, keywords = workload.text(config.num_sentences,
                                       config.num_keywords,
                                       config.upper_share)
    else:
        if config.kind == "fasta":
            text = workload.fasta(config.fasta_path)
        else:
            text = workload.genome(config.genome_length)
        keywords = None
        if config.patterns is None:
            keywords = workload.motifs(text, config.num_motifs,
                                       config.min_motif_len,
                                       config.max_motif_len)
    if config.patterns is not None:
        keywords = list(config.patterns)
    return text, keywords


def run_benchmark(config: BenchConfig) -> BenchReport:
    text, keywords = load_workload(config)
    logger.info("Workload %s: %d symbols, %d keywords",
                config.kind, len(text), len(keywords))

    begin = time.perf_counter()
    trie = KeywordTrie(case_sensitive=config.case_sensitive)
    trie.insert_batch(keywords)
    build_seconds = time.perf_counter() - begin
    logger.info("Keyword trie construction took %.3f ms (%d nodes)",
                build_seconds * 1e3, trie.count_nodes())

    scan_seconds = []
    results = []
    for run in range(config.repeats):
        begin = time.perf_counter()
        results = trie.scan(text)
        scan_seconds.append(time.perf_counter() - begin)
        logger.debug("Scan %d took %.3f ms", run, scan_seconds[-1] * 1e3)
    logger.info("Search found %d matches", len(results))

    matches = pd.DataFrame(
        [(r.keyword, r.id, r.start, r.end) for r in results],
        columns=MATCH_COLUMNS,
    )

    verified = None
    if config.verify:
        expected = brute_force_matches(trie.keywords, text, config.case_sensitive)
        verified = {(r.id, r.start, r.end) for r in results} == expected
        if not verified:
            logger.warning("Matches differ from naive search (%d vs %d)",
                           len(results), len(expected))

    return BenchReport(
        keywords=list(trie.keywords),
        text_length=len(text),
        build_seconds=build_seconds,
        scan_seconds=scan_seconds,
        matches=matches,
        node_count=trie.count_nodes(),
        avg_branch_factor=trie.count_nodes(get_avg_branch_factor=True),
        verified=verified,
    )
