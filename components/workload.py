#!/usr/bin/env python3
from components.work_loads.dna_generator import generate_genome, sample_motifs, read_fasta
from components.work_loads.text_generator import TextConfig, TextGenerator


class WorkLoad:
    def __init__(self, seed=None):
        self.seed = seed

    def genome(self, length, gc_content=0.5):
        return generate_genome(length, self.seed, gc_content)

    def motifs(self, genome, num_motifs, min_len=4, max_len=12, unique=True):
        return sample_motifs(genome, num_motifs, min_len, max_len, self.seed, unique)

    def fasta(self, path):
        return read_fasta(path)

    def text(self, num_sentences, num_keywords, upper_share=0.1):
        """Return `(text, keywords)`; every keyword occurs in the text as spelled."""
        config = TextConfig(num_sentences=num_sentences,
                            num_keywords=num_keywords,
                            upper_share=upper_share,
                            seed=self.seed)
        return TextGenerator(config).batch()

    def keywords(self, num_keywords, upper_share=0.1):
        config = TextConfig(num_keywords=num_keywords,
                            upper_share=upper_share,
                            seed=self.seed)
        return TextGenerator(config).keywords()
