import random
import re
from dataclasses import dataclass
from typing import List, Optional

from faker import Faker

WORD_RE = re.compile(r"[A-Za-z]+")

## === Config Class === ##

@dataclass
class TextConfig:
    """
    Configuration for TextGenerator
        num_sentences: int, sentences in the generated text
        num_keywords: int, keywords to draw
        upper_share: float, share of keywords that get capitalized
        min_keyword_len: int, shortest keyword drawn from the text
        locale: str, Faker locale
        seed: int, seed for random number generator
    """
    num_sentences: int = 200
    num_keywords: int = 20
    upper_share: float = 0.1
    min_keyword_len: int = 2
    locale: str = "en_US"
    seed: Optional[int] = None

    def __post_init__(self):
        if self.num_sentences < 1:
            raise ValueError("num_sentences must be positive")
        if self.num_keywords < 1:
            raise ValueError("num_keywords must be positive")
        if not 0.0 <= self.upper_share <= 1.0:
            raise ValueError("upper_share must be between 0 and 1")
        if self.min_keyword_len < 1:
            raise ValueError("min_keyword_len must be positive")


class TextGenerator:
    def __init__(self, config: TextConfig):
        self.config = config
        self.rng = random.Random(self.config.seed)

        self.fake = Faker(self.config.locale)
        if self.config.seed is not None:
            self.fake.seed_instance(self.config.seed)

    def _mixed_case(self, word, occurring=None):
        """Capitalize `word` with probability upper_share.

        With `occurring` (the words of a text, case preserved) the capitalized
        form is only used when it occurs there itself.
        """
        if self.rng.random() < self.config.upper_share:
            capitalized = word.capitalize()
            if occurring is None or capitalized in occurring:
                return capitalized
        return word

    def text(self) -> str:
        return " ".join(self.fake.sentences(nb=self.config.num_sentences))

    def keywords(self, text: Optional[str] = None) -> List[str]:
        """Draw keywords that are distinct even when case is ignored.

        With `text`, keywords are words taken from it exactly as they appear,
        so each one matches at least once even case sensitively; otherwise
        they are fresh Faker words.
        """
        n = self.config.num_keywords
        if text is None:
            words = self.fake.words(nb=n, unique=True)
            return [self._mixed_case(w) for w in words]

        occurring = [w for w in WORD_RE.findall(text)
                     if len(w) >= self.config.min_keyword_len]
        # one spelling per folded word: the first one seen in the text
        spellings = {}
        for w in occurring:
            spellings.setdefault(w.lower(), w)
        if len(spellings) < n:
            raise ValueError(
                f"text only has {len(spellings)} distinct words, {n} requested"
            )
        folded = self.rng.sample(sorted(spellings), n)
        occurring = set(occurring)
        return [self._mixed_case(spellings[f], occurring) for f in folded]

    def batch(self):
        """Return `(text, keywords)` with keywords drawn from the text."""
        text = self.text()
        return text, self.keywords(text)
