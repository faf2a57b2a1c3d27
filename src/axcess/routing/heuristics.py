"""Prompt heuristics: token estimate, language detection, bucket selection.

The token estimate is a deterministic length proxy, not a tokenizer.
Billing uses provider-reported usage whenever it is available.
"""

import math
import re

from axcess.config.models import TokenBucket

LANGUAGE_SAMPLE_SIZE = 512
CHARS_PER_TOKEN = 3

_KNOWN_LANGUAGE_PREFIXES = ("pt", "en", "es")

_PT_DIACRITICS = re.compile(r"[ãõçáéíóúâêôà]")
_ES_DIACRITICS = re.compile(r"[ñáéíóúü¿¡]")
_EN_MARKERS = re.compile(r"\b(the|and|you|with|for|this|that)\b")
_SHARED_PT_ES_MARKER = re.compile(r"\bque\b")
_PT_MARKERS = re.compile(r"\bnão\b|\bpois\b|\bassim\b")
_ES_MARKERS = re.compile(r"\busted\b|\bpara\b|\bcuando\b")
_EN_MODALS = re.compile(r"\bwill\b|\bshould\b|\bcan\b")


def estimate_tokens(text: str) -> int:
    """Estimate prompt tokens as ``ceil(len / 3)``, at least 1.

    An empty prompt estimates to 0.
    """
    if not text:
        return 0
    return max(1, math.ceil(len(text) / CHARS_PER_TOKEN))


def normalize_language_code(language: str | None) -> str | None:
    """Normalize a caller-declared language code.

    ``pt-BR`` becomes ``pt`` (likewise ``en`` and ``es``); unknown codes are
    only trimmed and lowercased. Blank input yields None.
    """
    if not language:
        return None
    normalized = language.strip().lower()
    if not normalized:
        return None
    for prefix in _KNOWN_LANGUAGE_PREFIXES:
        if normalized.startswith(prefix):
            return prefix
    return normalized


def detect_language(text: str) -> str | None:
    """Guess pt, es or en from the first 512 characters.

    Returns None when nothing scores or the top score is tied.
    """
    sample = text[:LANGUAGE_SAMPLE_SIZE].lower()
    if not sample:
        return None

    scores = {"pt": 0, "es": 0, "en": 0}

    if _PT_DIACRITICS.search(sample):
        scores["pt"] += 2
    if _ES_DIACRITICS.search(sample):
        scores["es"] += 2
    if _EN_MARKERS.search(sample):
        scores["en"] += 2
    if _SHARED_PT_ES_MARKER.search(sample):
        scores["pt"] += 1
        scores["es"] += 1
    if _PT_MARKERS.search(sample):
        scores["pt"] += 1
    if _ES_MARKERS.search(sample):
        scores["es"] += 1
    if _EN_MODALS.search(sample):
        scores["en"] += 1

    ranked = sorted(scores.items(), key=lambda item: item[1], reverse=True)
    (best_code, best_score), (_, runner_up) = ranked[0], ranked[1]
    if best_score == 0 or best_score == runner_up:
        return None
    return best_code


def select_bucket_alias(buckets: list[TokenBucket], estimated_tokens: int) -> str | None:
    """Return the alias of the first bucket containing the estimate."""
    for bucket in buckets:
        if bucket.contains(estimated_tokens):
            return bucket.alias
    return None
