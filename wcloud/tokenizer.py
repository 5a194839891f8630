"""
Turn raw text into normalized word frequencies.

    tokenizer = Tokenizer(max_words=100)
    tokenizer.get_normalized_word_frequencies("the cat sat on the cat")
    # [("cat", 1.0), ("sat", 0.5)]
"""

import re
from collections import Counter, defaultdict
from typing import Iterable, List, Optional, Set, Tuple

DEFAULT_REGEX = r"\w[\w']*"

DEFAULT_EXCLUDE_WORDS = frozenset({
    "the", "a", "an", "and", "or", "but", "in", "on", "at", "to",
    "for", "of", "with", "by", "from", "is", "was", "are", "were",
    "be", "been", "being", "have", "has", "had", "do", "does", "did",
    "will", "would", "could", "should", "may", "might", "shall",
    "can", "it", "its", "this", "that", "these", "those",
    "i", "me", "my", "we", "our", "you", "your", "he", "him", "his",
    "she", "her", "they", "them", "their", "what", "which", "who",
    "whom", "where", "when", "how", "not", "no", "nor", "as", "if",
    "then", "than", "so", "just", "also", "about", "up", "out", "into",
    "over", "after", "before", "between", "through", "during", "all",
    "each", "every", "both", "few", "more", "most", "other", "some",
    "such", "only", "own", "same", "very", "s", "t", "don", "now",
    "d", "ll", "m", "o", "re", "ve", "y", "ain", "aren", "couldn",
    "didn", "doesn", "hadn", "hasn", "haven", "isn", "mightn", "mustn",
    "needn", "shan", "shouldn", "wasn", "weren", "won", "wouldn",
})


def repeat_words(words: List[Tuple[str, float]], max_words: int) -> List[Tuple[str, float]]:
    """Cycle through ``words`` until there are ``max_words`` entries.

    ``words`` must be sorted by descending frequency. Each extra round is
    scaled down by the smallest frequency, so sorting the result again keeps
    the rounds in order. Words with a non-positive frequency are dropped.
    """
    words = [(word, freq) for word, freq in words if freq > 0]
    if not words:
        return []
    downweight = words[-1][1] / words[0][1]
    padded = []
    for i in range(max_words):
        word, freq = words[i % len(words)]
        padded.append((word, freq * downweight ** (i // len(words))))
    return padded


class Tokenizer:
    """Regex tokenizer with an exclusion list.

    Args:
        regex: Pattern matching a single word.
        exclude_words: Words to drop, compared case-insensitively. None uses
            DEFAULT_EXCLUDE_WORDS, an empty set keeps everything.
        max_words: Keep at most this many distinct words.
        min_word_length: Drop words shorter than this.
        include_numbers: Keep tokens that are all digits.
        repeat: Repeat the word list until max_words entries exist.
    """

    def __init__(
        self,
        regex: Optional[str] = None,
        exclude_words: Optional[Iterable[str]] = None,
        max_words: int = 200,
        min_word_length: int = 0,
        include_numbers: bool = False,
        repeat: bool = False,
    ):
        self.regex = re.compile(regex if regex is not None else DEFAULT_REGEX)
        if exclude_words is None:
            exclude_words = DEFAULT_EXCLUDE_WORDS
        self.exclude_words: Set[str] = {w.strip().lower() for w in exclude_words if w.strip()}
        self.max_words = max_words
        self.min_word_length = min_word_length
        self.include_numbers = include_numbers
        self.repeat = repeat

    def tokenize(self, text: str) -> List[str]:
        words = self.regex.findall(text)
        # remove 's
        words = [w[:-2] if w.lower().endswith("'s") else w for w in words]
        if not self.include_numbers:
            words = [w for w in words if not w.isdigit()]
        if self.min_word_length:
            words = [w for w in words if len(w) >= self.min_word_length]
        return [w for w in words if w and w.lower() not in self.exclude_words]

    def get_word_frequencies(self, text: str) -> List[Tuple[str, int]]:
        """Counts per word, most common first, ties in order of appearance.

        Case variants are merged and shown in their most common spelling.
        """
        counts: Counter = Counter()
        spellings = defaultdict(Counter)
        for word in self.tokenize(text):
            key = word.lower()
            counts[key] += 1
            spellings[key][word] += 1
        return [(spellings[key].most_common(1)[0][0], count)
                for key, count in counts.most_common(self.max_words)]

    def get_normalized_word_frequencies(self, text: str) -> List[Tuple[str, float]]:
        counts = self.get_word_frequencies(text)
        if not counts:
            return []
        top = counts[0][1]
        words = [(word, count / top) for word, count in counts]
        if self.repeat and len(words) < self.max_words:
            words = repeat_words(words, self.max_words)
        return words
