from collections import deque

import pandas as pd

HISTORY_LIMIT = 200

SENTIMENTS = ["Positive", "Negative", "Neutral"]
SENTIMENT_COLORS = {"Positive": "#10b981", "Negative": "#ef4444", "Neutral": "#64748b"}


class ResultHistory:
    """
    Most-recent-first buffer of analysis results.

    A new batch goes in front of everything already held, keeping its own
    order. Once more than ``limit`` results are held the oldest are dropped.
    """

    def __init__(self, limit=HISTORY_LIMIT):
        self._items = deque(maxlen=limit)

    def add_batch(self, results):
        # extendleft reverses its input
        self._items.extendleft(reversed(list(results)))

    def clear(self):
        self._items.clear()

    def to_list(self):
        return list(self._items)

    @property
    def limit(self):
        return self._items.maxlen

    def __len__(self):
        return len(self._items)

    def __iter__(self):
        return iter(self._items)


def to_dataframe(results):
    columns = ["id", "text", "sentiment", "confidence", "keywords", "explanation"]
    return pd.DataFrame(list(results), columns=columns)


def summarize(results):
    """Counts per sentiment and average confidence."""
    df = to_dataframe(results)
    counts = df["sentiment"].value_counts()
    return {
        "total": len(df),
        "positive": int(counts.get("Positive", 0)),
        "negative": int(counts.get("Negative", 0)),
        "neutral": int(counts.get("Neutral", 0)),
        "avg_confidence": float(df["confidence"].mean()) if len(df) else 0.0,
    }


def distribution(results):
    """Sentiment counts for the pie chart, zero counts left out."""
    df = to_dataframe(results)
    counts = df["sentiment"].value_counts()
    rows = [{"sentiment": s, "count": int(counts.get(s, 0))} for s in SENTIMENTS]
    return pd.DataFrame([r for r in rows if r["count"] > 0], columns=["sentiment", "count"])


def confidence_series(results, limit=10):
    """Confidence as a whole percentage for the first ``limit`` results."""
    head = list(results)[:limit]
    return pd.DataFrame({
        "document": [f"Doc {i + 1}" for i in range(len(head))],
        "confidence": [round((r["confidence"] or 0) * 100) for r in head],
    })
