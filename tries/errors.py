"""Exceptions raised by the keyword trie."""


class KeywordTrieError(Exception):
  """Base class for keyword trie errors."""


class DuplicateKeywordError(KeywordTrieError, ValueError):
  """A keyword (after case folding) already terminates a node in the trie."""

  def __init__(self, keyword, existing_id, existing_keyword):
    self.keyword = keyword
    self.existing_id = existing_id
    self.existing_keyword = existing_keyword
    super().__init__(
      f"Attempted to add {keyword!r}, which duplicates keyword "
      f"{existing_id} ({existing_keyword!r})"
    )


class CaseSensitivityError(KeywordTrieError, RuntimeError):
  """Case sensitivity was changed after keywords were inserted."""

  def __init__(self, requested, keyword_count):
    self.requested = requested
    self.keyword_count = keyword_count
    super().__init__(
      f"Cannot set case_sensitive={requested} once keywords are inserted "
      f"({keyword_count} present)"
    )


class UnlinkedTrieError(KeywordTrieError, RuntimeError):
  """A scan was started while failure/output links were still pending."""

  def __init__(self, keyword_count):
    self.keyword_count = keyword_count
    super().__init__(
      f"Keyword trie ({keyword_count} keywords) has deferred insertions; "
      f"call link() before scanning"
    )
