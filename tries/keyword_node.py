"""Node type and symbol folding shared by the keyword trie and its matcher."""

ROOT = 0


def fold_symbol(symbol):
  """Case-fold a single symbol without changing its length.

  `str` symbols are lower-cased unless lower-casing would change their
  length (e.g. 'İ'); byte values (ints) fold ASCII A-Z to a-z. Anything
  else is returned unchanged.
  """
  if isinstance(symbol, str):
    low = symbol.lower()
    return low if len(low) == len(symbol) else symbol
  if isinstance(symbol, int) and 65 <= symbol <= 90:
    return symbol + 32
  return symbol


class KeywordNode:
  """One trie node per distinct prefix.

  `parent`, `failure` and `output` are indices into the owning trie's node
  list. The root lives at index 0 and points all three at itself.
  `children` stays None until the first child is added.
  """
  __slots__ = ("depth", "symbol", "keyword_id", "children",
               "parent", "failure", "output")

  def __init__(self, depth=0, symbol=None, parent=ROOT):
    self.depth = depth
    self.symbol = symbol
    self.keyword_id = None
    self.children = None
    self.parent = parent
    self.failure = ROOT
    self.output = ROOT

  def __repr__(self):
    return (f"KeywordNode(depth={self.depth}, symbol={self.symbol!r}, "
            f"keyword_id={self.keyword_id}, failure={self.failure}, "
            f"output={self.output})")
