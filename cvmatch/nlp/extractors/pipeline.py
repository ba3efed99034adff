"""
Extraction pipeline.

Runs the applicable adapters in priority order, records every attempt and
every failure, stops early on a good-enough result and selects the best
attempt.
"""

import time
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from dataclasses import dataclass, field
from typing import Any, Optional, Sequence

from cvmatch.core.exceptions import AdapterError, AdapterFailure, ErrorKind, ExtractionFailed
from cvmatch.utils.config import ExtractionSettings, get_settings
from cvmatch.utils.logger import get_logger

from .base import ExtractionAdapter, ExtractionResult
from .docx_extractor import WordProcessorAdapter
from .fallback_extractor import UniversalFallbackAdapter
from .ocr_extractor import OpticalCharacterAdapter
from .pdf_extractor import StructuredDocumentAdapter
from .text_extractor import PlainTextAdapter

logger = get_logger(__name__)


@dataclass
class ExtractionOutcome:
    """The pipeline's decision plus everything it tried."""

    best: ExtractionResult
    attempts: list[ExtractionResult] = field(default_factory=list)
    errors: list[AdapterError] = field(default_factory=list)
    short_circuited: bool = False
    timed_out: bool = False
    total_duration_ms: int = 0

    @property
    def text(self) -> str:
        return self.best.text

    @property
    def confidence(self) -> float:
        return self.best.confidence

    def to_dict(self) -> dict[str, Any]:
        return {
            "best": self.best.to_dict(),
            "attempts": [a.to_dict() for a in self.attempts],
            "errors": [
                {"adapterName": e.adapter_name, "errorMessage": e.error_message}
                for e in self.errors
            ],
            "shortCircuited": self.short_circuited,
            "timedOut": self.timed_out,
            "totalDurationMs": self.total_duration_ms,
        }


def select_best(attempts: Sequence[ExtractionResult]) -> Optional[ExtractionResult]:
    """Highest confidence, then longest text, then fastest."""
    if not attempts:
        return None
    return min(attempts, key=lambda r: (-r.confidence, -r.char_count, r.duration_ms))


def build_default_adapters(settings: Optional[ExtractionSettings] = None) -> list[ExtractionAdapter]:
    """The five standard adapters, in priority order."""
    settings = settings or get_settings().extraction
    adapters = [
        StructuredDocumentAdapter(settings),
        WordProcessorAdapter(),
        OpticalCharacterAdapter(settings),
        PlainTextAdapter(),
        UniversalFallbackAdapter(),
    ]
    return sorted(adapters, key=lambda a: a.priority)


class ExtractionPipeline:
    """
    Orchestrates extraction adapters for one document at a time.

    Holds no per-document state, so a single instance can serve concurrent
    requests.
    """

    def __init__(
        self,
        adapters: Optional[Sequence[ExtractionAdapter]] = None,
        settings: Optional[ExtractionSettings] = None,
    ):
        self.settings = settings or get_settings().extraction
        if adapters is None:
            adapters = build_default_adapters(self.settings)
        # sorted() is stable, so equal priorities keep their given order
        self.adapters = sorted(adapters, key=lambda a: a.priority)

    def is_good_enough(self, result: ExtractionResult) -> bool:
        """Whether a result is trustworthy enough to skip the remaining adapters."""
        if result.metadata.get("insufficient_text"):
            return False
        return (
            result.confidence > self.settings.good_enough_confidence
            and result.char_count > self.settings.good_enough_length
        )

    def applicable_adapters(
        self,
        content: bytes,
        mime_type: Optional[str] = None,
        filename: Optional[str] = None,
    ) -> list[ExtractionAdapter]:
        return [a for a in self.adapters if a.can_handle(content, mime_type, filename)]

    def run(
        self,
        content: bytes,
        mime_type: Optional[str] = None,
        filename: Optional[str] = None,
        timeout_ms: Optional[int] = None,
    ) -> ExtractionOutcome:
        """
        Extract text from a document.

        Args:
            content: Raw file bytes
            mime_type: Declared MIME type (may be wrong or missing)
            filename: Original filename, used for extension matching
            timeout_ms: Total budget; overrides the configured timeout

        Returns:
            ExtractionOutcome with the best result and every attempt

        Raises:
            ExtractionFailed: If no adapter produced any text
        """
        start = time.perf_counter()
        timeout_ms = timeout_ms if timeout_ms is not None else self.settings.timeout_ms
        deadline = start + timeout_ms / 1000 if timeout_ms else None

        logger.info(
            f"Extracting {filename or 'document'} "
            f"(mime={mime_type or 'unknown'}, {len(content)} bytes)"
        )

        adapters = self.applicable_adapters(content, mime_type, filename)
        if not adapters:
            logger.warning(f"No extraction adapter can handle {filename or 'document'}")
            raise ExtractionFailed([], kind=ErrorKind.UNSUPPORTED_FILE, filename=filename)

        attempts: list[ExtractionResult] = []
        errors: list[AdapterError] = []
        short_circuited = False
        timed_out = False

        executor = ThreadPoolExecutor(max_workers=1) if deadline else None
        try:
            for index, adapter in enumerate(adapters):
                logger.debug(f"Trying adapter {adapter.name}")

                try:
                    if deadline is None:
                        result = adapter.extract(content, mime_type, filename)
                    else:
                        remaining = deadline - time.perf_counter()
                        if remaining <= 0:
                            timed_out = True
                            logger.warning(f"Extraction budget of {timeout_ms}ms exhausted before {adapter.name}")
                            break
                        future = executor.submit(adapter.extract, content, mime_type, filename)
                        result = future.result(timeout=remaining)
                except FutureTimeoutError:
                    timed_out = True
                    message = f"Timed out after {timeout_ms}ms"
                    errors.append(AdapterError(adapter.name, message))
                    logger.warning(f"Adapter {adapter.name}: {message}; using best result so far")
                    break
                except AdapterFailure as e:
                    errors.append(AdapterError(adapter.name, e.message))
                    logger.warning(f"Adapter {adapter.name} failed: {e.message}")
                    continue
                except Exception as e:
                    errors.append(AdapterError(adapter.name, f"{type(e).__name__}: {e}"))
                    logger.warning(f"Adapter {adapter.name} raised unexpectedly: {e}")
                    continue

                attempts.append(result)
                logger.info(
                    f"Adapter {adapter.name} extracted {result.char_count} chars "
                    f"(confidence={result.confidence:.2f}, {result.duration_ms}ms)"
                )

                if self.is_good_enough(result):
                    short_circuited = index < len(adapters) - 1
                    if short_circuited:
                        logger.info(f"Good-enough result from {adapter.name}, skipping remaining adapters")
                    break

                if result.metadata.get("insufficient_text"):
                    logger.info(f"Insufficient text from {adapter.name}, escalating to next adapter")
                elif index < len(adapters) - 1:
                    logger.debug(f"Result from {adapter.name} below short-circuit threshold, continuing")
        finally:
            if executor is not None:
                # A timed-out adapter keeps its worker thread; its result is discarded
                executor.shutdown(wait=False, cancel_futures=True)

        total_duration_ms = int((time.perf_counter() - start) * 1000)
        best = select_best(attempts)
        if best is None:
            logger.error(f"All extraction adapters failed for {filename or 'document'}")
            raise ExtractionFailed(errors, filename=filename)

        logger.info(
            f"Selected {best.adapter_name} for {filename or 'document'} "
            f"({best.char_count} chars, confidence={best.confidence:.2f}, "
            f"{len(attempts)} attempt(s), {len(errors)} failure(s), {total_duration_ms}ms)"
        )
        return ExtractionOutcome(
            best=best,
            attempts=attempts,
            errors=errors,
            short_circuited=short_circuited,
            timed_out=timed_out,
            total_duration_ms=total_duration_ms,
        )


# Global pipeline instance
_pipeline: Optional[ExtractionPipeline] = None


def get_extraction_pipeline() -> ExtractionPipeline:
    """Get or create the global extraction pipeline."""
    global _pipeline
    if _pipeline is None:
        _pipeline = ExtractionPipeline()
    return _pipeline
