"""Reference tokenizer collaborators."""

import tiktoken
from abc import abstractmethod
from functools import lru_cache
from typing import Any, List, Sequence

from ..canonical import canonical_json
from ..models.section import section_field
from ..ports import Tokenizer


class GreedyPrefixTokenizer(Tokenizer):
    """
    Tokenizer base implementing greedy prefix truncation.

    Each section costs count_tokens(section.body). Sections are kept while the
    running total stays within budget; the walk stops at the first section that
    does not fit, even if a later one would.
    """

    def truncate_sections(self, sections: Sequence[Any], *, budget_tokens: int) -> List[Any]:
        used = 0
        kept = []
        for section in sections:
            tokens = self.count_tokens(section_field(section, "body", ""))
            if used + tokens > budget_tokens:
                break
            kept.append(section)
            used += tokens
        return kept

    def count_tokens(self, obj: Any) -> int:
        """Count tokens for text, or for the canonical JSON of a structure."""
        text = obj if isinstance(obj, str) else canonical_json(obj)
        if not text:
            return 0
        return self.count_text(text)

    @abstractmethod
    def count_text(self, text: str) -> int:
        """Count tokens in non-empty text."""
        pass


class TiktokenTokenizer(GreedyPrefixTokenizer):
    """
    Token counting with tiktoken encodings.

    Claude models are approximated with cl100k_base and a small multiplier.
    """

    # Model to encoding mapping
    ENCODINGS = {
        "gpt-4": "cl100k_base",
        "gpt-4-turbo": "cl100k_base",
        "gpt-4o": "o200k_base",
        "gpt-3.5-turbo": "cl100k_base",
        "claude-3-opus": "cl100k_base",
        "claude-3-sonnet": "cl100k_base",
        "claude-3-haiku": "cl100k_base",
        "claude-3.5-sonnet": "cl100k_base",
    }

    CLAUDE_MULTIPLIER = 1.05

    def __init__(self, model: str = "gpt-4"):
        self.model = model

    @staticmethod
    @lru_cache(maxsize=10)
    def _get_encoding(encoding_name: str) -> tiktoken.Encoding:
        return tiktoken.get_encoding(encoding_name)

    @property
    def encoding(self) -> tiktoken.Encoding:
        return self._get_encoding(self.ENCODINGS.get(self.model, "cl100k_base"))

    def count_text(self, text: str) -> int:
        token_count = len(self.encoding.encode(text))

        if self.model.startswith("claude"):
            token_count = int(token_count * self.CLAUDE_MULTIPLIER)

        return token_count


class CharRatioTokenizer(GreedyPrefixTokenizer):
    """
    Rough token estimate from character count.

    Useful where encodings cannot be downloaded. ~4 chars per token.
    """

    def __init__(self, chars_per_token: float = 4.0):
        if chars_per_token <= 0:
            raise ValueError("chars_per_token must be positive")
        self.chars_per_token = chars_per_token

    def count_text(self, text: str) -> int:
        # Any non-empty text costs at least one token
        return max(1, int(len(text) / self.chars_per_token))
