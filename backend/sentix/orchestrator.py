import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence

from sentix.config import CHUNK_SIZE
from sentix.models import AnalysisResult, new_result_id
from sentix.reconciler import reconcile

logger = logging.getLogger(__name__)

FAILURE_MESSAGE = "Analysis failed. Please check your API key and network."


@dataclass(frozen=True)
class BatchOutcome:
    """Either every result of a batch, in input order, or why it failed."""
    results: List[AnalysisResult] = field(default_factory=list)
    error: Optional[str] = None
    chunks: int = 0

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, results: List[AnalysisResult], chunks: int) -> "BatchOutcome":
        return cls(results=results, chunks=chunks)

    @classmethod
    def failure(cls, reason: str) -> "BatchOutcome":
        return cls(error=reason)


def chunked(items: Sequence[str], size: int) -> List[List[str]]:
    return [list(items[i:i + size]) for i in range(0, len(items), size)]


class BatchOrchestrator:
    """
    Runs a list of texts through a classifier, one chunk at a time.

    ``classifier`` is any object with ``classify(texts) -> list``. Chunks are
    sent strictly in order; a failure on any chunk discards everything
    gathered so far.
    """

    def __init__(self, classifier, chunk_size: int = CHUNK_SIZE,
                 id_factory: Callable[[], str] = new_result_id):
        if chunk_size < 1:
            raise ValueError("chunk_size must be positive")
        self.classifier = classifier
        self.chunk_size = chunk_size
        self.id_factory = id_factory

    def analyze(self, items: Sequence[str], source: Optional[str] = None) -> BatchOutcome:
        chunks = chunked(items, self.chunk_size)
        logger.info("Analyzing %d texts in %d chunks", len(items), len(chunks))

        results: List[AnalysisResult] = []
        for index, chunk in enumerate(chunks):
            try:
                response_items = self.classifier.classify(chunk)
            except Exception as e:
                logger.error(
                    "Batch aborted on chunk %d of %d",
                    index + 1, len(chunks),
                    exc_info=e,
                    extra={
                        "custom_dimensions": {
                            "batch_size": len(items),
                            "chunk_index": index,
                            "error_type": type(e).__name__,
                        }
                    },
                )
                return BatchOutcome.failure(FAILURE_MESSAGE)

            results.extend(reconcile(chunk, response_items, id_factory=self.id_factory, source=source))

        return BatchOutcome.success(results, chunks=len(chunks))
