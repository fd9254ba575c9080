import os
import sys
import tempfile
import unittest

# ---------------- Import shim (works from dev_tests/) ----------------
THIS_DIR = os.path.dirname(os.path.abspath(__file__))
ROOT_DIR = os.path.abspath(os.path.join(THIS_DIR, os.pardir))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

import trie_bench
from components.bench import MATCH_COLUMNS, BenchConfig, brute_force_matches, run_benchmark
from components.work_loads.dna_generator import write_fasta


# ---------------------------------- Tests ----------------------------------
class TestBenchConfig(unittest.TestCase):
    def test_unknown_kind_raises(self):
        with self.assertRaises(ValueError):
            BenchConfig(kind="rna")

    def test_fasta_requires_path(self):
        with self.assertRaises(ValueError):
            BenchConfig(kind="fasta")

    def test_repeats_must_be_positive(self):
        with self.assertRaises(ValueError):
            BenchConfig(repeats=0)


class TestBruteForce(unittest.TestCase):
    def test_overlapping_occurrences(self):
        self.assertEqual(brute_force_matches(["aa", "b"], "aaab"),
                         {(0, 0, 1), (0, 1, 2), (1, 3, 3)})

    def test_case_folding(self):
        self.assertEqual(brute_force_matches(["Ab"], "xaBAB", case_sensitive=False),
                         {(0, 1, 2), (0, 3, 4)})
        self.assertEqual(brute_force_matches([b"GT"], b"ggtc", case_sensitive=False),
                         {(0, 1, 2)})


class TestRunBenchmark(unittest.TestCase):
    def test_dna_run(self):
        config = BenchConfig(kind="dna", genome_length=3_000, num_motifs=15,
                             repeats=2, seed=5, verify=True)
        report = run_benchmark(config)
        self.assertTrue(report.verified)
        self.assertEqual(len(report.scan_seconds), 2)
        self.assertEqual(list(report.matches.columns), MATCH_COLUMNS)
        self.assertEqual(report.text_length, 3_000)
        self.assertEqual(len(report.keywords), 15)
        per_keyword = report.matches_per_keyword()
        self.assertEqual(list(per_keyword["keyword"]), report.keywords)
        self.assertTrue((per_keyword["matches"] >= 1).all())
        self.assertEqual(per_keyword["matches"].sum(), len(report.matches))

    def test_explicit_patterns_on_fasta(self):
        with tempfile.TemporaryDirectory() as d:
            p = os.path.join(d, "g.fasta")
            write_fasta(p, "ACGTTCAACGTTCA", header="toy")
            config = BenchConfig(kind="fasta", fasta_path=p,
                                 patterns=["AACGTTCA", "TTCA", "GGGG"], verify=True)
            report = run_benchmark(config)
        self.assertTrue(report.verified)
        rows = report.matches[["keyword", "start", "end"]].values.tolist()
        self.assertEqual(rows, [["TTCA", 3, 6], ["AACGTTCA", 6, 13], ["TTCA", 10, 13]])
        counts = dict(report.matches_per_keyword().values.tolist())
        self.assertEqual(counts["GGGG"], 0)

    def test_text_run_case_insensitive(self):
        config = BenchConfig(kind="text", num_sentences=40, num_keywords=8,
                             upper_share=0.5, case_sensitive=False, seed=9, verify=True)
        report = run_benchmark(config)
        self.assertTrue(report.verified)
        self.assertTrue((report.matches_per_keyword()["matches"] >= 1).all())

    def test_text_run_case_sensitive(self):
        for seed in range(10):
            config = BenchConfig(kind="text", num_sentences=40, num_keywords=8,
                                 upper_share=0.0, case_sensitive=True, seed=seed, verify=True)
            report = run_benchmark(config)
            self.assertTrue(report.verified)
            per_keyword = report.matches_per_keyword()
            self.assertEqual(len(per_keyword), 8, f"seed={seed}")
            self.assertTrue((per_keyword["matches"] >= 1).all(), f"seed={seed}")

    def test_summary_and_stats(self):
        report = run_benchmark(BenchConfig(genome_length=500, num_motifs=3, seed=1))
        summary = report.summary()
        self.assertEqual(summary["keywords"], 3)
        self.assertEqual(summary["nodes"], report.node_count)
        self.assertIsNone(summary["verified"])
        stats = report.scan_stats()
        self.assertLessEqual(stats["min"], stats["mean"])
        self.assertLessEqual(stats["mean"], stats["max"])


class TestCommandLine(unittest.TestCase):
    def test_dna_run_succeeds(self):
        code = trie_bench.main(["--kind", "dna", "--genome-length", "800", "--motifs", "5",
                                "--seed", "1", "--verify", "--show", "3"])
        self.assertEqual(code, 0)

    def test_missing_fasta_fails(self):
        code = trie_bench.main(["--kind", "fasta", "--fasta", "/nonexistent/genome.fasta"])
        self.assertEqual(code, 1)

    def test_duplicate_pattern_fails(self):
        code = trie_bench.main(["--genome-length", "200", "--pattern", "ACG",
                                "--pattern", "acg", "--case-insensitive"])
        self.assertEqual(code, 1)

    def test_upper_share_option(self):
        code = trie_bench.main(["--kind", "text", "--sentences", "30", "--keywords", "5",
                                "--upper-share", "0.5", "--seed", "3", "--verify", "--show", "0"])
        self.assertEqual(code, 0)
        self.assertEqual(trie_bench.parse_args(["--upper-share", "0.25"]).upper_share, 0.25)

    def test_upper_share_out_of_range_fails(self):
        code = trie_bench.main(["--kind", "text", "--upper-share", "1.5"])
        self.assertEqual(code, 1)


if __name__ == "__main__":
    unittest.main(verbosity=2)
