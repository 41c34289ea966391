"""Priority ordering of sections under a token budget."""

import logging
from typing import Any, List, Mapping

from ..models.section import DEFAULT_WEIGHT, RawContext, Section, section_field
from ..ports import Tokenizer

logger = logging.getLogger(__name__)


class TokenBudgeter:
    """
    Pack context sections within a token budget, highest weight first.

    Sections are stable-sorted by weight descending (missing weight counts
    as 1.0, ties keep their original order) and then handed to the
    tokenizer, which keeps the greedy prefix that fits.

    Example:
        budgeter = TokenBudgeter(tokenizer)
        packed = budgeter.pack(
            {"sections": [
                {"key": "a", "body": "...", "weight": 2.0},
                {"key": "b", "body": "...", "weight": 1.0},
                {"key": "c", "body": "...", "weight": 3.0},
            ]},
            budget_tokens=25,
        )
        # With 10 tokens per section => [c, a]
    """

    def __init__(self, tokenizer: Tokenizer):
        self.tokenizer = tokenizer

    def pack(self, context: Any, budget_tokens: int) -> List[Section]:
        """
        Select and order sections that fit within budget_tokens.

        Args:
            context: RawContext or mapping with an optional "sections" list
            budget_tokens: Maximum tokens allowed

        Returns:
            Sections kept by the tokenizer, in priority order
        """
        sections = _sections_of(context)
        if not sections:
            return []

        # sorted() is stable, so equal weights keep their input order
        ordered = sorted(sections, key=lambda s: -section_field(s, "weight", DEFAULT_WEIGHT))

        kept = self.tokenizer.truncate_sections(ordered, budget_tokens=budget_tokens)
        logger.debug(
            f"Packed {len(kept)} of {len(ordered)} sections within {budget_tokens} tokens"
        )
        return list(kept)


def _sections_of(context: Any) -> list:
    if context is None:
        return []
    if isinstance(context, RawContext):
        return list(context.sections)
    if isinstance(context, Mapping):
        return list(context.get("sections") or [])
    return list(getattr(context, "sections", None) or [])
