"""
Model invocation with an ordered fallback chain.

The chain is an explicit list of (model, use_tools) attempts tried one
after another; the first attempt that returns text wins. Attempts are
never run concurrently since each one exists only because the previous
one failed.
"""

import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Optional

from google import genai
from google.genai import types

from ...config import GEMINI_FINAL_FALLBACK_MODEL, GEMINI_SMART_FALLBACK_MODEL

logger = logging.getLogger(__name__)

# (model, prompt, use_tools) -> generated text
Generator = Callable[[str, str, bool], Awaitable[str]]

QUOTA_MARKERS = (
    "429",
    "quota",
    "rate limit",
    "resource_exhausted",
    "resource exhausted",
    "too many requests",
)


@dataclass(frozen=True)
class Attempt:
    model: str
    use_tools: bool


@dataclass(frozen=True)
class AttemptFailure:
    attempt: Attempt
    error: Exception


@dataclass
class ChainResult:
    text: str
    attempt: Attempt
    failures: list[AttemptFailure] = field(default_factory=list)


class EmptyModelResponseError(Exception):
    """The model answered without any text"""


class ModelChainExhaustedError(Exception):
    """Every attempt in the chain failed"""

    def __init__(self, failures: list[AttemptFailure]):
        self.failures = failures
        self.last_error: Optional[Exception] = failures[-1].error if failures else None
        super().__init__(
            f"All {len(failures)} model attempt(s) failed; last error: {self.last_error}"
        )


def is_quota_error(error: Optional[BaseException]) -> bool:
    """True when a failure looks like a quota or rate-limit rejection"""
    if isinstance(error, ModelChainExhaustedError):
        error = error.last_error
    if error is None:
        return False
    if getattr(error, "code", None) == 429:
        return True
    text = f"{type(error).__name__} {error}".lower()
    return any(marker in text for marker in QUOTA_MARKERS)


def _is_pro_tier(model: str) -> bool:
    return "pro" in model.lower().split("-")


def candidate_models(
    preferred: str,
    smart_fallback: str = GEMINI_SMART_FALLBACK_MODEL,
    final_fallback: str = GEMINI_FINAL_FALLBACK_MODEL,
) -> list[str]:
    """
    Models to try, in order.

    The smart fallback is only worth trying after a premium model, and is
    skipped when the preferred model already is the final fallback.
    """
    candidates = [preferred]
    if _is_pro_tier(preferred) and preferred != final_fallback:
        candidates.append(smart_fallback)
    candidates.append(final_fallback)
    return list(dict.fromkeys(candidates))


def plan_attempts(
    preferred: str,
    use_search: bool,
    smart_fallback: str = GEMINI_SMART_FALLBACK_MODEL,
    final_fallback: str = GEMINI_FINAL_FALLBACK_MODEL,
) -> list[Attempt]:
    """Expand the candidates into attempts, search-augmented first when enabled"""
    attempts = []
    for model in candidate_models(preferred, smart_fallback, final_fallback):
        if use_search:
            attempts.append(Attempt(model=model, use_tools=True))
        attempts.append(Attempt(model=model, use_tools=False))
    return attempts


class FallbackChain:
    """Runs the planned attempts against a generator until one succeeds"""

    def __init__(
        self,
        generate: Generator,
        smart_fallback: str = GEMINI_SMART_FALLBACK_MODEL,
        final_fallback: str = GEMINI_FINAL_FALLBACK_MODEL,
    ):
        self.generate = generate
        self.smart_fallback = smart_fallback
        self.final_fallback = final_fallback

    async def run(self, prompt: str, preferred: str, use_search: bool) -> ChainResult:
        """
        Try each attempt in order and return the first success.

        Raises:
            ModelChainExhaustedError: If every attempt failed
        """
        attempts = plan_attempts(preferred, use_search, self.smart_fallback, self.final_fallback)
        failures: list[AttemptFailure] = []

        for attempt in attempts:
            label = f"{attempt.model} ({'with' if attempt.use_tools else 'without'} search)"
            try:
                text = await self.generate(attempt.model, prompt, attempt.use_tools)
            except Exception as e:  # provider SDK errors share no common base class
                logger.warning(f"⚠️ Model attempt {label} failed: {e}")
                failures.append(AttemptFailure(attempt=attempt, error=e))
                continue

            logger.info(
                f"✅ Model attempt {label} succeeded after {len(failures)} failed attempt(s)"
            )
            return ChainResult(text=text, attempt=attempt, failures=failures)

        logger.error(f"❌ All {len(attempts)} model attempts failed")
        raise ModelChainExhaustedError(failures)


class GeminiGenerator:
    """Async text generation through the google-genai SDK"""

    def __init__(self, api_key: str):
        self.client = genai.Client(api_key=api_key)

    async def __call__(self, model: str, prompt: str, use_tools: bool) -> str:
        config = None
        if use_tools:
            config = types.GenerateContentConfig(
                tools=[types.Tool(google_search=types.GoogleSearch())]
            )

        response = await self.client.aio.models.generate_content(
            model=model,
            contents=prompt,
            config=config,
        )
        text = response.text
        if not text or not text.strip():
            raise EmptyModelResponseError(f"{model} returned an empty response")
        return text
