"""
Single-pass matcher over a linked keyword trie.

The scan keeps one cursor into the trie. For every symbol it takes the
direct child edge if there is one, otherwise walks the failure chain until
some node has a matching edge, otherwise falls back to the root. After each
step it reports the keyword on the current node (if any) followed by every
keyword reachable through the `output` chain, so all keywords ending at the
same position are reported longest first.

Scanning never mutates the trie; any number of scans may share one linked
trie.
"""
from dataclasses import dataclass
from typing import Any, Iterator, List

from tries.errors import UnlinkedTrieError
from tries.keyword_node import ROOT


@dataclass(frozen=True)
class MatchResult:
  keyword: Any   # original (un-folded) keyword
  id: int        # keyword id, i.e. insertion index
  start: int     # inclusive
  end: int       # inclusive

  @property
  def span(self):
    """Slice bounds `(start, end + 1)` of the match in the scanned text."""
    return self.start, self.end + 1


def _goto(nodes, current, symbol):
  children = nodes[current].children
  if children is not None:
    nxt = children.get(symbol)
    if nxt is not None:
      return nxt
  state = current
  while state != ROOT:
    state = nodes[state].failure
    children = nodes[state].children
    if children is not None:
      nxt = children.get(symbol)
      if nxt is not None:
        return nxt
  return ROOT


def _matches(nodes, keywords, fold, text):
  current = ROOT
  for i, symbol in enumerate(text):
    if fold is not None:
      symbol = fold(symbol)
    current = _goto(nodes, current, symbol)

    node = nodes[current]
    if node.keyword_id is not None:
      keyword = keywords[node.keyword_id]
      yield MatchResult(keyword, node.keyword_id, i - len(keyword) + 1, i)

    out = node.output
    while out != ROOT:
      out_node = nodes[out]
      keyword = keywords[out_node.keyword_id]
      yield MatchResult(keyword, out_node.keyword_id, i - len(keyword) + 1, i)
      out = out_node.output


def iter_matches(trie, text) -> Iterator[MatchResult]:
  """Return an iterator over every keyword occurrence in `text`, ordered by end position.

  Parameters
  ----------
  trie : KeywordTrie
      A linked automaton.
  text : Sequence
      `str`, `bytes` or any sequence of symbols of the same kind as the
      inserted keywords.

  Raises
  ------
  UnlinkedTrieError
      If keywords were inserted with `defer_linking=True` and `link()` has
      not been called since.
  """
  if not trie.is_linked:
    raise UnlinkedTrieError(len(trie))
  return _matches(trie.nodes, trie.keywords, trie.fold, text)


def scan(trie, text) -> List[MatchResult]:
  """Return all matches of `trie` in `text` as a list (see `iter_matches`)."""
  return list(iter_matches(trie, text))
