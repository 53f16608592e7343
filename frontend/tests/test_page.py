from pathlib import Path

import pytest
from streamlit.testing.v1 import AppTest

import api_client

MAIN_PATH = str(Path(__file__).resolve().parents[1] / "main.py")


@pytest.fixture
def sent(monkeypatch):
    """Replace backend calls made by the page and record analyzed texts"""
    calls = []

    def fake_analyze(texts, source=None):
        calls.append((list(texts), source))
        return [{
            "id": str(i), "text": t, "sentiment": "Positive", "confidence": 0.9,
            "keywords": ["good"], "explanation": "Praise.", "source": source,
        } for i, t in enumerate(texts)]

    monkeypatch.setattr(api_client, "check_health", lambda: {"data": {"classifier_status": "ok"}, "connected": True})
    monkeypatch.setattr(api_client, "analyze_texts", fake_analyze)
    return calls


class TestDirectEntry:
    """Test the direct entry tab of the page"""

    def test_text_area_is_cleared_after_analysis(self, sent):
        at = AppTest.from_file(MAIN_PATH, default_timeout=30).run()
        at.text_area(key="text_input").input("Loved every minute").run()
        at.button(key="analyze_text").click().run()

        assert sent == [(["Loved every minute"], "direct")]
        assert at.text_area(key="text_input").value == ""
        assert any("Analyzed 1 text(s)." in s.value for s in at.success)

    def test_blank_text_is_not_sent(self, sent):
        at = AppTest.from_file(MAIN_PATH, default_timeout=30).run()
        at.text_area(key="text_input").input("   ").run()
        at.button(key="analyze_text").click().run()

        assert sent == []
        assert any("Please enter some text" in w.value for w in at.warning)
