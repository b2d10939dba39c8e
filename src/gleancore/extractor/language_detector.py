"""
Language Detection with langdetect and a Pattern Fallback

Supplies a best-guess ISO 639-1 code for extracted body text when the page
declares no language of its own.
"""

from __future__ import annotations

import logging
import re
from typing import Dict, List, Optional, Tuple

from langdetect import DetectorFactory, LangDetectException, detect_langs

# langdetect is non-deterministic unless seeded
DetectorFactory.seed = 0

logger = logging.getLogger(__name__)

_URL_RE = re.compile(r"https?://\S+")
_EMAIL_RE = re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b")
_DIGITS_RE = re.compile(r"\d+")
_PUNCT_RE = re.compile(r"[^\w\s]")
_SPACE_RE = re.compile(r"\s+")


class LanguageDetector:
    """
    Two-strategy language detection.

    - Primary: langdetect probability ranking
    - Fallback: stop-word pattern scoring for common languages
    """

    LANGUAGE_PATTERNS: Dict[str, List[str]] = {
        "en": [
            r"\b(the|and|or|but|in|on|at|to|for|of|with|by)\b",
            r"\b(this|that|these|those|what|where|when|why|how)\b",
        ],
        "es": [
            r"\b(el|la|los|las|y|pero|en|de|con|por|para)\b",
            r"\b(que|como|cuando|donde|quien|cual)\b",
        ],
        "fr": [
            r"\b(le|la|les|et|ou|mais|dans|de|avec|par|pour)\b",
            r"\b(que|comme|quand|où|qui|quel)\b",
        ],
        "de": [
            r"\b(der|die|das|und|oder|aber|auf|mit|von|für)\b",
            r"\b(was|wie|wann|wo|wer|welch)\b",
        ],
        "it": [
            r"\b(il|lo|gli|ma|di|con|per)\b",
            r"\b(che|come|quando|dove|chi|quale)\b",
        ],
        "pt": [
            r"\b(os|as|ou|mas|em|com|por|para)\b",
            r"\b(que|como|quando|onde|quem|qual)\b",
        ],
        "ru": [
            r"\b(и|или|но|в|на|с|по|для|от|до)\b",
            r"\b(что|как|когда|где|кто|какой)\b",
        ],
        "zh": [r"[的和在与为]", r"(什么|如何|何时|哪里|谁|哪个)"],
        "ja": [r"[のとやがをにで]", r"(から|まで|どう|いつ|どこ)"],
        "ar": [r"(في|من|إلى|على|مع|عن|بعد|قبل)"],
    }

    def __init__(self, min_text_length: int = 10, min_confidence: float = 0.5) -> None:
        self.min_text_length = min_text_length
        self.min_confidence = min_confidence
        self._compiled = {
            code: [re.compile(pattern, re.IGNORECASE) for pattern in patterns]
            for code, patterns in self.LANGUAGE_PATTERNS.items()
        }

    def detect_language(self, text: str) -> Optional[str]:
        """
        Detect the language of ``text``.

        Returns:
            ISO 639-1 code, or None when the text is too short or no
            strategy produces an answer
        """
        if not text or len(text.strip()) < self.min_text_length:
            return None

        clean_text = self._clean_text_for_detection(text)
        if not clean_text:
            return None

        result = self._detect_with_langdetect(clean_text)
        if result:
            return result
        return self._detect_with_patterns(clean_text)

    def detect_language_with_confidence(self, text: str, top_n: int = 3) -> List[Tuple[str, float]]:
        """Ranked (code, probability) pairs from langdetect; empty when undetectable."""
        clean_text = self._clean_text_for_detection(text or "")
        if len(clean_text) < self.min_text_length:
            return []
        try:
            return [(str(item.lang), float(item.prob)) for item in detect_langs(clean_text)[:top_n]]
        except LangDetectException as e:
            logger.debug(f"langdetect ranking failed: {e}")
            return []

    @staticmethod
    def _clean_text_for_detection(text: str) -> str:
        text = _URL_RE.sub(" ", text)
        text = _EMAIL_RE.sub(" ", text)
        text = _DIGITS_RE.sub(" ", text)
        text = _PUNCT_RE.sub(" ", text)
        return _SPACE_RE.sub(" ", text).strip()

    def _detect_with_langdetect(self, text: str) -> Optional[str]:
        try:
            ranked = detect_langs(text)
        except LangDetectException as e:
            logger.debug(f"langdetect error: {e}")
            return None

        if ranked and float(ranked[0].prob) >= self.min_confidence:
            return str(ranked[0].lang)
        return None

    def _detect_with_patterns(self, text: str) -> Optional[str]:
        """Score each language by normalized stop-word hits."""
        text_lower = text.lower()
        scale = max(1.0, len(text_lower) / 1000)

        scores: Dict[str, float] = {}
        for code, patterns in self._compiled.items():
            score = sum(len(pattern.findall(text_lower)) for pattern in patterns) / scale
            if score > 0:
                scores[code] = score

        if not scores:
            return None
        best = max(scores, key=lambda code: scores[code])
        return best if scores[best] > 0.1 else None
