import logging
import math
from typing import Any, Callable, Dict, List, Optional, Sequence

from sentix.config import FALLBACK_EXPLANATION
from sentix.models import AnalysisResult, Sentiment, new_result_id

logger = logging.getLogger(__name__)

KNOWN_SENTIMENTS = {s.value for s in Sentiment}


def fallback_judgment() -> Dict[str, Any]:
    return {
        "sentiment": Sentiment.NEUTRAL.value,
        "confidence": 0.0,
        "keywords": [],
        "explanation": FALLBACK_EXPLANATION,
    }


def _is_well_formed(item: Any) -> bool:
    if not isinstance(item, dict):
        return False
    confidence = item.get("confidence")
    return (
        isinstance(item.get("sentiment"), str)
        and isinstance(confidence, (int, float))
        and not isinstance(confidence, bool)
        and math.isfinite(confidence)
        and isinstance(item.get("keywords"), list)
        and isinstance(item.get("explanation"), str)
    )


def _judgment_at(response_items: Sequence[Any], index: int) -> Dict[str, Any]:
    if index < len(response_items) and _is_well_formed(response_items[index]):
        item = response_items[index]
        judgment = {
            "sentiment": item["sentiment"],
            "confidence": item["confidence"],
            "keywords": [str(k) for k in item["keywords"]],
            "explanation": item["explanation"],
        }
        # Passed through as-is, only reported
        if judgment["sentiment"] not in KNOWN_SENTIMENTS or not 0.0 <= judgment["confidence"] <= 1.0:
            logger.warning(
                "Unexpected judgment at position %d: sentiment=%r confidence=%r",
                index, judgment["sentiment"], judgment["confidence"],
            )
        return judgment

    logger.debug("No usable judgment at position %d, using fallback", index)
    return fallback_judgment()


def reconcile(
    requested: Sequence[str],
    response_items: Sequence[Any],
    id_factory: Callable[[], str] = new_result_id,
    source: Optional[str] = None,
) -> List[AnalysisResult]:
    """
    Pair each requested text with the judgment at the same position.

    The output always has ``len(requested)`` entries. Missing or malformed
    judgments are replaced by :func:`fallback_judgment`; surplus judgments
    are ignored.
    """
    if response_items is None:
        response_items = []

    if len(response_items) != len(requested):
        logger.info("Classifier returned %d judgments for %d texts", len(response_items), len(requested))

    return [
        AnalysisResult(id=id_factory(), text=text, source=source, **_judgment_at(response_items, i))
        for i, text in enumerate(requested)
    ]
