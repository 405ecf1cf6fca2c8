"""
Token counting with OpenAI's tiktoken.

Counting is advisory: an encoder that failed to load, or text that fails to
encode, yields zero tokens instead of an exception.
"""

import logging
from typing import Any, Optional

import tiktoken

from TokenScanner.Model.FetchResult import FetchResult

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-3.5-turbo"


class TokenCounter:
    """Counts tokens for a fixed model encoding."""

    def __init__(self, model: str = DEFAULT_MODEL, encoder: Optional[Any] = None):
        """
        Args:
            model: Model whose tiktoken encoding is used (cl100k_base for gpt-3.5-turbo).
            encoder: Pre-built encoder exposing `encode(text)`; skips tiktoken loading.
        """
        self.model = model
        self.encoder = encoder
        if self.encoder is None:
            try:
                self.encoder = tiktoken.encoding_for_model(model)
            except Exception as e:
                logger.warning("Could not initialize tokenizer for '%s': %s", model, e)

    @property
    def is_available(self) -> bool:
        return self.encoder is not None

    def try_count(self, text: str) -> FetchResult[int]:
        if not self.is_available:
            return FetchResult.failure("tokenizer unavailable")
        if not text:
            return FetchResult.success(0)
        try:
            # text may contain special-token markers such as <|endoftext|>
            return FetchResult.success(len(self.encoder.encode(text, disallowed_special=())))
        except Exception as e:
            logger.debug("Error counting tokens: %s", e)
            return FetchResult.failure(str(e))

    def count(self, text: str) -> int:
        return self.try_count(text).value_or(0)
