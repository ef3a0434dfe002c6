from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from typing import Any

import requests

from ..models.config_models import SuggestionConfig
from ..models.row import RowStatus
from .dataset import Dataset
from .progress import ProgressTracker

"""Optional external suggestion service.

Asks an OpenAI-compatible chat-completions endpoint for the most likely
correction of a number the local rules could not repair. Best effort only:
any transport, HTTP or payload problem degrades to "no suggestion" and is
logged, never raised. Suggestions are merged back into the dataset by row id
after the core pipeline has finished.

Accepted reply formats are ``+2547XXXXXXXX`` and ``+2541XXXXXXXX``. The second
one is allowed here only; the validator still rejects it.
"""

logger = logging.getLogger(__name__)

__all__ = [
    "ACCEPTED_PREFIXES",
    "SUGGESTION_LENGTH",
    "build_prompt",
    "accept_reply",
    "SuggestionClient",
    "request_suggestions",
]

ACCEPTED_PREFIXES = ("+2547", "+2541")
SUGGESTION_LENGTH = 13
NO_FIX_REPLY = "INVALID"

PROMPT_TEMPLATE = """
You are an expert Kenyan phone number correction engine.
You will be given a raw phone number that may contain human errors.

Your job:
1. Analyse it.
2. Auto-correct it to the MOST LIKELY valid Kenyan mobile number format.
3. If multiple interpretations are possible, choose the simplest plausible one.
4. If it CANNOT be fixed into a valid number, return "INVALID".

Valid outputs must be ONLY one of the following formats and only have 13 characters:
- +2547XXXXXXXX
- +2541XXXXXXXX

Common mistakes you must fix:
- Double format numbers: +25470712345690 -> +254707123456
- Country code + local appended: 2540707123456 -> +254707123456
- Extra zeros: 00707123456 -> +254707123456
- Missing zero: 712345678 -> +254712345678
- Repeated country codes: 254254707123456
- Concatenated numbers: 07071234560707123456 -> pick the first valid block
- Spaces, symbols, garbage characters

Only provide suggestions for mistakes that can be confidently categorized
as human errors and that can be fixed to be valid Kenyan numbers.
Don't autofill.
Return ONLY the corrected phone number (no explanations).

Here is the raw input:
"{phone}"
"""


def build_prompt(phone: str) -> str:
    return PROMPT_TEMPLATE.format(phone=phone)


def accept_reply(reply: Any) -> str | None:
    """Return the trimmed reply if it has an accepted shape, else None."""
    if not isinstance(reply, str):
        return None
    text = reply.strip()
    if not text or text == NO_FIX_REPLY:
        return None
    if len(text) == SUGGESTION_LENGTH and text.startswith(ACCEPTED_PREFIXES):
        return text
    return None


class SuggestionClient:
    """Thin HTTP client for the suggestion endpoint."""

    def __init__(
        self,
        api_key: str,
        *,
        endpoint: str = SuggestionConfig.endpoint,
        model: str = SuggestionConfig.model,
        timeout_seconds: float = SuggestionConfig.timeout_seconds,
        session: requests.Session | None = None,
    ) -> None:
        self.api_key = api_key
        self.endpoint = endpoint
        self.model = model
        self.timeout_seconds = timeout_seconds
        self.session = session if session is not None else requests.Session()

    @classmethod
    def from_config(
        cls, config: SuggestionConfig, environ: Mapping[str, str] | None = None
    ) -> SuggestionClient | None:
        """Build a client from config, or None when no API key is available."""
        env = environ if environ is not None else os.environ
        api_key = env.get(config.api_key_env)
        if not api_key:
            logger.warning(f"suggestions disabled: {config.api_key_env} is not set")
            return None
        return cls(
            api_key,
            endpoint=config.endpoint,
            model=config.model,
            timeout_seconds=config.timeout_seconds,
        )

    def suggest(self, phone: str) -> str | None:
        """Ask the service for a correction of ``phone``.

        Returns:
            The suggested number, or None if the service declined, replied with an
            unusable shape, or failed.
        """
        payload = {
            "model": self.model,
            "messages": [{"role": "user", "content": build_prompt(phone)}],
            "temperature": 0.1,
            "max_tokens": 50,
        }
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }
        try:
            resp = self.session.post(
                self.endpoint, json=payload, headers=headers, timeout=self.timeout_seconds
            )
        except requests.RequestException as e:
            logger.warning(f"suggestion request failed: {e}")
            return None

        if not resp.ok:
            logger.warning(f"suggestion API error: {resp.status_code}")
            return None

        try:
            data = resp.json()
            content = data["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            logger.warning(f"suggestion response unreadable: {e}")
            return None

        return accept_reply(content)


def request_suggestions(dataset: Dataset, client: SuggestionClient) -> int:
    """Fetch suggestions for every row that is INVALID right now.

    Works on a snapshot of the rows; results are merged back by row id, and rows
    deleted in the meantime are skipped.

    Returns:
        Number of suggestions merged
    """
    targets = [r for r in dataset.rows if r.status is RowStatus.INVALID]
    merged = 0
    with ProgressTracker(len(targets), description="Fetching suggestions") as progress:
        for row in targets:
            suggestion = client.suggest(row.phone_number)
            progress.advance()
            if suggestion is None:
                continue
            if dataset.merge_suggestion(row.row_id, suggestion):
                merged += 1
    logger.info(f"suggestions: {merged} of {len(targets)} invalid rows")
    return merged
