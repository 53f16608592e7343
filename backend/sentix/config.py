import os

from dotenv import load_dotenv

load_dotenv()

# Remote classifier
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-3-flash-preview")

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
APPINSIGHTS_KEY = os.getenv("APPINSIGHTS_KEY")

# Number of texts sent to the classifier in one request
CHUNK_SIZE = 10

# Uploaded files contribute at most this many texts
MAX_FILE_TEXTS = 50

# PDF report text column
SNIPPET_LENGTH = 60

FALLBACK_EXPLANATION = "Error processing this segment."
