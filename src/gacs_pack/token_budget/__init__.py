"""Token budget management for context packs.

Sorting by priority lives here; deciding what fits is delegated to a
Tokenizer collaborator.
"""

from .budgeter import TokenBudgeter
from .tokenizers import CharRatioTokenizer, GreedyPrefixTokenizer, TiktokenTokenizer

__all__ = [
    "TokenBudgeter",
    "GreedyPrefixTokenizer",
    "TiktokenTokenizer",
    "CharRatioTokenizer",
]
