"""Use cases for transcript correction.

Implements the use case layer, encapsulating the correction and
normalization steps and reporting failures as Result values instead of
raising into the presentation layer.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Type

from loguru import logger

from core.error_handler import as_result, log_execution_time
from core.exceptions import CorrectionError, CorrectionException, NormalizationError, VocabularyError
from core.result import Result, Success
from corrector.config import MatchingPolicy
from corrector.text_normalizer import TextNormalizer
from corrector.vocabulary import build_vocabulary
from corrector.word_corrector import CorrectionEngine


def _wrap_error(error_type: Type[CorrectionException], action: str) -> Callable[[Exception], CorrectionException]:
    """Error translator keeping domain exceptions and wrapping anything else."""
    def translate(error: Exception) -> CorrectionException:
        if isinstance(error, CorrectionException):
            return error
        return error_type(f"Failed to {action}: {error}")
    return translate


@dataclass
class TranscriptResult:
    """Outcome of processing one transcript.

    Attributes:
        original: Text as received
        corrected: Text after vocabulary correction
        normalized: Text after spoken-number normalization (final output)
    """
    original: str
    corrected: str
    normalized: str

    @property
    def changed(self) -> bool:
        return self.normalized != self.original


class LoadVocabularyUseCase:
    """Use case for assembling the vocabulary and building its engine."""

    def __init__(
        self,
        bundled_path: Optional[str] = None,
        user_path: Optional[str] = None,
        words: tuple = (),
        max_word_length: int = 100,
        max_words: int = 10_000,
        policy: Optional[MatchingPolicy] = None,
    ):
        self.bundled_path = bundled_path
        self.user_path = user_path
        self.words = words
        self.max_word_length = max_word_length
        self.max_words = max_words
        self.policy = policy

    def execute(self) -> Result[CorrectionEngine, CorrectionException]:
        """Load, validate and index the vocabulary.

        Returns:
            Result containing a CorrectionEngine, or the vocabulary/validation error
        """
        result = as_result(build_vocabulary)(
            bundled_path=self.bundled_path,
            user_path=self.user_path,
            words=self.words,
            max_word_length=self.max_word_length,
            max_words=self.max_words,
        ).map_error(_wrap_error(VocabularyError, "load vocabulary"))

        if result.is_failure():
            logger.error(f"Failed to load vocabulary: {result.error}")
            return result

        engine = CorrectionEngine(result.unwrap(), self.policy)
        logger.info(f"[vocabulary] {len(engine)} terms, index={engine.strategy}")
        return Success(engine)


class CorrectTranscriptUseCase:
    """Use case for applying vocabulary corrections to a transcript."""

    def __init__(self, engine: CorrectionEngine, threshold: float):
        self.engine = engine
        self.threshold = threshold

    def execute(self, text: str) -> Result[str, CorrectionError]:
        result = as_result(self.engine.correct)(text, self.threshold).map_error(
            _wrap_error(CorrectionError, "correct")
        )
        if result.is_failure():
            logger.error(f"Failed to correct text '{text}': {result.error}")
        elif result.unwrap() != text:
            logger.debug(f"[corrected] '{text}' -> '{result.unwrap()}'")
        return result


class NormalizeTranscriptUseCase:
    """Use case for rewriting spoken years, measurements and times as digits."""

    def __init__(self, normalizer: TextNormalizer):
        self.normalizer = normalizer

    def execute(self, text: str) -> Result[str, NormalizationError]:
        result = as_result(self.normalizer.normalize)(text).map_error(
            _wrap_error(NormalizationError, "normalize")
        )
        if result.is_failure():
            logger.error(f"Failed to normalize text '{text}': {result.error}")
        elif result.unwrap() != text:
            logger.debug(f"[normalized] '{text}' -> '{result.unwrap()}'")
        return result


class ProcessTranscriptUseCase:
    """Use case running correction, then normalization, on one transcript."""

    def __init__(
        self,
        correct: Optional[CorrectTranscriptUseCase],
        normalize: NormalizeTranscriptUseCase,
    ):
        self.correct = correct
        self.normalize = normalize

    @log_execution_time()
    def execute(self, text: str) -> Result[TranscriptResult, CorrectionException]:
        corrected_result = self.correct.execute(text) if self.correct else Success(text)
        return corrected_result.and_then(
            lambda corrected: self.normalize.execute(corrected).map(
                lambda normalized: TranscriptResult(original=text, corrected=corrected, normalized=normalized)
            )
        )
