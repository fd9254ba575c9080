"""
Keyword Trie (Aho-Corasick automaton) over an index-addressed node arena.

This module builds the multi-keyword automaton: a character-per-edge trie
whose nodes additionally carry a *failure* link (longest proper suffix of
the node's path that is also a path from the root) and an *output* link
(nearest node along the failure chain that terminates a keyword). A linked
trie is scanned in a single pass by `tries.matcher`.

Key design choices:
- **Arena of nodes:** all `KeywordNode`s live in one list and refer to each
  other (parent, failure, output, children) by index. The root is index 0
  and its failure/output links point at itself.
- **Lazy children:** `children` is None until a node gets its first child,
  as in the plain character trie.
- **Deferred linking:** failure/output links are recomputed by a BFS over
  the whole trie. `insert(..., defer_linking=True)` skips it so that
  `insert_batch` can link once at the end.
- **Case folding:** with `case_sensitive=False` every symbol is folded by
  `fold_symbol` on insertion, lookup and scan alike. The flag can only be
  changed while the trie holds no keywords.


Classes
-------
KeywordTrie
    Builder and owner of the automaton; `scan` delegates to `tries.matcher`.


Complexity (typical)
--------------------
- insert: O(L) plus O(#nodes) when linking immediately
- insert_batch: O(total keyword length + #nodes)
- scan: O(len(text) + #matches)


Conventions & Notes
-------------------
- **Keyword ids** are insertion indices into `keywords` and never change.
- **Duplicates** (including keywords equal after folding) raise
  `DuplicateKeywordError`; the first insertion stands.
- **Empty keywords** are ignored; scanning empty text returns `[]`.
- **Symbols:** `str` keywords are scanned per character, `bytes` per byte
  value; do not mix the two within one trie.
"""
import logging
from collections import deque

from tries.errors import CaseSensitivityError, DuplicateKeywordError
from tries.keyword_node import ROOT, KeywordNode, fold_symbol
from tries import matcher

logger = logging.getLogger(__name__)


class KeywordTrie:
  __slots__ = ("_nodes", "_keywords", "_case_sensitive", "_linked")

  def __init__(self, case_sensitive=True):
    self._nodes = [KeywordNode()]
    self._keywords = []
    self._case_sensitive = bool(case_sensitive)
    self._linked = True

  def __len__(self):
    return len(self._keywords)

  def __contains__(self, word):
    return self.search(word) is not None

  def __repr__(self):
    return (f"KeywordTrie(keywords={len(self._keywords)}, "
            f"nodes={len(self._nodes)}, case_sensitive={self._case_sensitive})")

  @property
  def case_sensitive(self):
    return self._case_sensitive

  @property
  def fold(self):
    """The symbol folding function, or None when case sensitive."""
    return None if self._case_sensitive else fold_symbol

  @property
  def keywords(self):
    return tuple(self._keywords)

  @property
  def nodes(self):
    """The node arena. Treat as read-only."""
    return self._nodes

  @property
  def is_linked(self):
    return self._linked

  def set_case_sensitivity(self, case_sensitive):
    """Set case sensitivity; only allowed before the first keyword is inserted.

    Raises
    ------
    CaseSensitivityError
        If the trie already holds keywords.
    """
    if self._keywords:
      raise CaseSensitivityError(bool(case_sensitive), len(self._keywords))
    self._case_sensitive = bool(case_sensitive)

  def _add_child(self, parent_index, symbol):
    parent = self._nodes[parent_index]
    index = len(self._nodes)
    self._nodes.append(KeywordNode(parent.depth + 1, symbol, parent_index))
    if parent.children is None:
      parent.children = {symbol: index}
    else:
      parent.children[symbol] = index
    return index

  def insert(self, word, defer_linking=False):
    """Insert a single keyword.

    Parameters
    ----------
    word : str | bytes | Sequence
        Keyword to insert. Empty keywords are ignored.
    defer_linking : bool, default=False
        If True, leave failure/output links stale; call `link()` once all
        keywords are in. Scanning before that raises `UnlinkedTrieError`.

    Returns
    -------
    int | None
        The new keyword id, or None for an empty keyword.

    Raises
    ------
    DuplicateKeywordError
        If the (folded) keyword already terminates a node. The keyword table
        is left unchanged.
    """
    if not word:
      return None
    nodes = self._nodes
    fold = self.fold
    current = ROOT

    for symbol in word:
      if fold is not None:
        symbol = fold(symbol)
      children = nodes[current].children
      nxt = None if children is None else children.get(symbol)
      if nxt is None:
        nxt = self._add_child(current, symbol)
        self._linked = False
      current = nxt

    node = nodes[current]
    if node.keyword_id is not None:
      raise DuplicateKeywordError(word, node.keyword_id,
                                  self._keywords[node.keyword_id])
    node.keyword_id = len(self._keywords)
    self._keywords.append(word)
    self._linked = False

    if not defer_linking:
      self.link()
    return node.keyword_id

  @staticmethod
  def _prepare_batch(words):
    """Sets carry no order of their own; sort them so ids are reproducible."""
    if isinstance(words, (set, frozenset)):
      return sorted(words)
    return words

  def insert_batch(self, words):
    """Insert many keywords and compute links once.

    Links are computed even when a duplicate aborts the batch part way, so
    the keywords inserted before it remain fully usable.

    Returns
    -------
    list[int]
        Ids of the inserted keywords (empty keywords are skipped).
    """
    words = self._prepare_batch(words)
    ids = []
    try:
      for w in words:
        keyword_id = self.insert(w, defer_linking=True)
        if keyword_id is not None:
          ids.append(keyword_id)
    finally:
      logger.debug("Batch inserted %d keywords", len(ids))
      self.link()
    return ids

  def _longest_suffix(self, index):
    """Failure target for node `index`; its parent must already be linked."""
    nodes = self._nodes
    node = nodes[index]
    symbol = node.symbol
    candidate = nodes[node.parent].failure
    while True:
      children = nodes[candidate].children
      nxt = None if children is None else children.get(symbol)
      if nxt is not None and nxt != index:
        return nxt
      if candidate == ROOT:
        return ROOT
      candidate = nodes[candidate].failure

  def link(self):
    """Recompute failure and output links with a breadth-first pass.

    Nodes are visited in depth order, so a node's parent and every node on
    its failure chain are final when the node itself is processed. A failure
    link one level shallower than the node is already the longest possible
    suffix and is kept as is; that covers every child of the root.
    """
    nodes = self._nodes
    queue = deque([ROOT])
    recomputed = 0

    while queue:
      index = queue.popleft()
      node = nodes[index]
      if node.children:
        queue.extend(node.children.values())
      if index == ROOT:
        continue

      if nodes[node.failure].depth < node.depth - 1:
        node.failure = self._longest_suffix(index)
        recomputed += 1

      failure = nodes[node.failure]
      node.output = node.failure if failure.keyword_id is not None else failure.output

    self._linked = True
    logger.debug("Linked %d nodes (%d failure links recomputed)",
                 len(nodes), recomputed)

  def scan(self, text):
    """Return every keyword occurrence in `text` (see `tries.matcher.scan`)."""
    return matcher.scan(self, text)

  def iter_matches(self, text):
    return matcher.iter_matches(self, text)

  def search(self, word):
    """Return the keyword id of `word` if it is a keyword, else None."""
    if not word:
      return None
    nodes = self._nodes
    fold = self.fold
    current = ROOT
    for symbol in word:
      if fold is not None:
        symbol = fold(symbol)
      children = nodes[current].children
      current = None if children is None else children.get(symbol)
      if current is None:
        return None
    return nodes[current].keyword_id

  def keyword_at(self, index):
    """Return the keyword terminating at node `index`, or None."""
    keyword_id = self._nodes[index].keyword_id
    return None if keyword_id is None else self._keywords[keyword_id]

  def iter_nodes(self):
    """Yield `(index, node)` pairs breadth first, starting at the root."""
    nodes = self._nodes
    queue = deque([ROOT])
    while queue:
      index = queue.popleft()
      node = nodes[index]
      yield index, node
      if node.children:
        queue.extend(node.children.values())

  def iter_edges(self):
    """Yield `(parent_index, symbol, child_index)` breadth first.

    Intended for external renderers; children are visited in insertion
    order, which is stable for a given build.
    """
    for index, node in self.iter_nodes():
      if node.children:
        for symbol, child in node.children.items():
          yield index, symbol, child

  def count_nodes(self, get_avg_branch_factor=False):
    """Return total node count, or average branching factor over internal nodes.

    Parameters
    ----------
    get_avg_branch_factor : bool, default=False
        If False, return the total node count (root included).
        If True, return `sum(len(children)) / (# internal nodes)`.
    """
    if not get_avg_branch_factor:
      return len(self._nodes)
    internal = 0
    total_deg = 0
    for node in self._nodes:
      if node.children:
        internal += 1
        total_deg += len(node.children)
    return (total_deg / internal) if internal else 0.0


def create(case_sensitive=True):
  """Create an empty keyword trie."""
  return KeywordTrie(case_sensitive=case_sensitive)
