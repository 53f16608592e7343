import itertools

import pytest

from sentix.errors import ClassifierError


def judgment(sentiment="Positive", confidence=0.9, keywords=None, explanation="Upbeat tone."):
    return {
        "sentiment": sentiment,
        "confidence": confidence,
        "keywords": ["great"] if keywords is None else keywords,
        "explanation": explanation,
    }


class StubClassifier:
    """
    Records every call and answers from ``respond(texts, call_index)``.

    The default answer is one well-formed judgment per text, whose
    explanation echoes the text so pairing can be checked.
    """

    def __init__(self, respond=None, fail_on=None):
        self.calls = []
        self.respond = respond or (lambda texts, i: [judgment(explanation=f"about {t}") for t in texts])
        self.fail_on = fail_on

    def classify(self, texts):
        index = len(self.calls)
        self.calls.append(list(texts))
        if self.fail_on is not None and index == self.fail_on:
            raise ClassifierError("Simulated remote failure")
        return self.respond(texts, index)


@pytest.fixture
def stub_classifier():
    return StubClassifier()


@pytest.fixture
def sequential_ids():
    counter = itertools.count(1)
    return lambda: f"id-{next(counter)}"


@pytest.fixture
def make_judgment():
    return judgment


@pytest.fixture
def make_classifier():
    return StubClassifier
