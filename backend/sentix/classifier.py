import json
import logging
from typing import Any, List, Optional

from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from sentix.config import GEMINI_API_KEY, GEMINI_MODEL
from sentix.errors import ClassifierError, ClassifierNotConfigured

logger = logging.getLogger(__name__)

PROMPT_TEMPLATE = """Perform sentiment analysis on the following texts. For each text, identify:
1. Sentiment (Positive, Negative, or Neutral)
2. Confidence Score (0.0 to 1.0)
3. Key sentiment-driving keywords or phrases
4. A brief explanation of why this sentiment was chosen.

Texts:
{numbered_texts}"""

RESPONSE_SCHEMA = types.Schema(
    type=types.Type.ARRAY,
    items=types.Schema(
        type=types.Type.OBJECT,
        properties={
            "sentiment": types.Schema(type=types.Type.STRING, description="Positive, Negative, or Neutral"),
            "confidence": types.Schema(type=types.Type.NUMBER),
            "keywords": types.Schema(type=types.Type.ARRAY, items=types.Schema(type=types.Type.STRING)),
            "explanation": types.Schema(type=types.Type.STRING),
        },
        required=["sentiment", "confidence", "keywords", "explanation"],
    ),
)


def build_prompt(texts: List[str]) -> str:
    numbered_texts = "\n".join(f"[{i + 1}] {text}" for i, text in enumerate(texts))
    return PROMPT_TEMPLATE.format(numbered_texts=numbered_texts)


def parse_response_text(raw: Optional[str]) -> List[Any]:
    """
    Decode the model output into the list of per-text judgments.

    An empty body counts as an empty list. Anything that is not a JSON
    array is a failure of the whole call.
    """
    try:
        parsed = json.loads(raw or "[]")
    except json.JSONDecodeError as e:
        raise ClassifierError(f"Classifier returned invalid JSON: {e}") from e

    if not isinstance(parsed, list):
        raise ClassifierError(f"Classifier returned {type(parsed).__name__}, expected a JSON array")
    return parsed


class GeminiClassifier:
    """Sends one group of texts per call to a Gemini model."""

    def __init__(self, api_key: Optional[str] = GEMINI_API_KEY, model: str = GEMINI_MODEL, client=None):
        if client is None:
            if not api_key:
                raise ClassifierNotConfigured("API key is missing: set GEMINI_API_KEY")
            client = genai.Client(api_key=api_key)
        self.client = client
        self.model = model

    def classify(self, texts: List[str]) -> List[Any]:
        logger.debug("Sending %d texts to %s", len(texts), self.model)
        try:
            response = self.client.models.generate_content(
                model=self.model,
                contents=build_prompt(texts),
                config=types.GenerateContentConfig(
                    response_mime_type="application/json",
                    response_schema=RESPONSE_SCHEMA,
                ),
            )
        except genai_errors.APIError as e:
            raise ClassifierError(f"Classifier request failed ({e.code}): {e.message}") from e

        return parse_response_text(response.text)
