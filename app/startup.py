"""Application startup and wiring.

Main entry point that orchestrates configuration parsing, logging setup,
vocabulary loading and transcript processing for the command line.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional, TextIO

from loguru import logger

from app.use_cases import (
    CorrectTranscriptUseCase,
    LoadVocabularyUseCase,
    NormalizeTranscriptUseCase,
    ProcessTranscriptUseCase,
)
from config.service import ConfigurationService, ConfigurationServiceFactory
from core.error_handler import as_result
from core.exceptions import ConfigurationError, CorrectionException
from core.result import Result, Success
from corrector.text_normalizer import TextNormalizer


def configure_logging(level: str = "WARNING", sink: Optional[TextIO] = None) -> int:
    """Replace loguru's default handler with one sink at ``level``.

    Returns:
        The loguru sink id
    """
    logger.remove()
    return logger.add(
        sink or sys.stderr,
        level=level,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {name}:{function} - {message}",
    )


def build_pipeline(
    config_service: ConfigurationService,
) -> Result[ProcessTranscriptUseCase, CorrectionException]:
    """Create the processing pipeline described by the configuration.

    Returns:
        Result containing the pipeline, or the error raised while loading vocabulary
    """
    correct_use_case = None
    if config_service.correction_enabled:
        engine_result = LoadVocabularyUseCase(
            bundled_path=config_service.bundled_vocab_path,
            user_path=config_service.user_vocab_path,
            words=config_service.inline_words,
            max_word_length=config_service.max_word_length,
            max_words=config_service.max_words,
            policy=config_service.matching_policy,
        ).execute()
        if engine_result.is_failure():
            return engine_result
        correct_use_case = CorrectTranscriptUseCase(engine_result.unwrap(), config_service.threshold)

    normalizer = TextNormalizer.from_app_config(config_service.raw_config.normalization)
    logger.debug(f"Normalizers enabled: {normalizer.enabled}")
    return Success(ProcessTranscriptUseCase(correct_use_case, NormalizeTranscriptUseCase(normalizer)))


def _parse_input_args(args: List[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="transcript-correct", add_help=False)
    parser.add_argument("--input", help="Read the transcript from this file")
    parser.add_argument("text", nargs="*", help="Transcript text (stdin when omitted)")
    return parser.parse_args(args)


def read_transcript(input_path: Optional[str], words: List[str], stdin: Optional[TextIO] = None) -> str:
    """Transcript from a file, from positional words, or from stdin, in that order."""
    if input_path:
        return Path(input_path).read_text(encoding="utf-8")
    if words:
        return " ".join(words)
    return (stdin or sys.stdin).read()


def run_cli(argv: Optional[List[str]] = None, stdout: Optional[TextIO] = None) -> int:
    """Command-line entry point.

    Orchestrates the startup sequence:
    1. Parse configuration from all sources (defaults, settings file, env, CLI)
    2. Configure logging
    3. Load vocabulary and build the correction engine
    4. Process the transcript and print the result

    Returns:
        Process exit code (0 on success, 1 on failure)
    """
    argv = sys.argv[1:] if argv is None else argv

    try:
        config_service, unknown_args = ConfigurationServiceFactory.create_from_args(argv)
    except ConfigurationError as e:
        configure_logging()
        logger.error(f"Invalid configuration: {e}")
        return 1

    configure_logging(config_service.log_level)
    logger.debug(f"Configuration: {config_service.to_dict()}")

    input_args = _parse_input_args(unknown_args)
    text_result = as_result(read_transcript)(input_args.input, input_args.text)
    if text_result.is_failure():
        logger.error(f"Cannot read transcript: {text_result.error}")
        return 1

    pipeline_result = build_pipeline(config_service)
    if pipeline_result.is_failure():
        return 1

    result = pipeline_result.unwrap().execute(text_result.unwrap().strip())
    if result.is_failure():
        return 1

    (stdout or sys.stdout).write(result.unwrap().normalized + "\n")
    return 0
