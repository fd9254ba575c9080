import os
import random

import numpy as np

NUCLEOTIDES = np.array(list("ACGT"))
FASTA_WIDTH = 60


def generate_genome(length, seed=None, gc_content=0.5):
  """
  Return a random DNA sequence of `length` bases.
  - gc_content: expected share of G/C bases, between 0 and 1
  """
  if length < 1:
    raise ValueError("length must be positive")
  if not 0.0 <= gc_content <= 1.0:
    raise ValueError("gc_content must be between 0 and 1")
  at, gc = (1.0 - gc_content) / 2, gc_content / 2
  rng = np.random.default_rng(seed)
  return "".join(rng.choice(NUCLEOTIDES, size=length, p=[at, gc, gc, at]))


def sample_motifs(genome, num_motifs, min_len=4, max_len=12, seed=None, unique=True):
  """Cut `num_motifs` substrings out of `genome` so every motif occurs at least once.
  - unique=True: no motif is returned twice (gives up after 100 draws per motif)
  """
  if num_motifs < 1:
    raise ValueError("num_motifs must be positive")
  if min_len < 1 or max_len < min_len:
    raise ValueError("need 1 <= min_len <= max_len")
  if max_len > len(genome):
    raise ValueError(f"max_len must not exceed genome length {len(genome)}")
  rng = random.Random(seed)

  motifs = []
  seen = set()
  attempts = 0
  while len(motifs) < num_motifs:
    L = rng.randint(min_len, max_len)
    start = rng.randrange(len(genome) - L + 1)
    motif = genome[start:start + L]
    if unique:
      if motif in seen:
        attempts += 1
        if attempts > 100 * num_motifs:
          raise ValueError(f"could not draw {num_motifs} unique motifs")
        continue
      seen.add(motif)
    motifs.append(motif)
  return motifs


def read_fasta(path):
  """Read the first record of a FASTA file into one upper-case string.

  Header ('>') and comment (';') lines are skipped; all other lines are
  concatenated with whitespace stripped.
  """
  if not os.path.exists(path):
    raise FileNotFoundError(f"Cannot find {path}!")
  parts = []
  seen_header = False
  with open(path, "r", encoding="utf-8") as f:
    for line in f:
      line = line.strip()
      if line.startswith(">"):
        if seen_header and parts:
          break
        seen_header = True
        continue
      if not line or line.startswith(";"):
        continue
      parts.append(line.upper())
  if not parts:
    raise ValueError(f"No sequence data in {path}")
  return "".join(parts)


def write_fasta(path, sequence, header="generated", width=FASTA_WIDTH):
  if width < 1:
    raise ValueError("width must be positive")
  with open(path, "w", encoding="utf-8") as f:
    f.write(f">{header}\n")
    for i in range(0, len(sequence), width):
      f.write(sequence[i:i + width] + "\n")
