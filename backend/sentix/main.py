import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, File, HTTPException, UploadFile
from fastapi.responses import Response
from opencensus.ext.azure.log_exporter import AzureLogHandler

from sentix import __version__
from sentix.classifier import GeminiClassifier
from sentix.config import APPINSIGHTS_KEY, CHUNK_SIZE, GEMINI_MODEL, LOG_LEVEL
from sentix.errors import ClassifierNotConfigured, IngestionError, UnsupportedFormatError
from sentix.exports import MEDIA_TYPES, SERIALIZERS, export_filename
from sentix.ingestion import detect_format, extract_texts
from sentix.models import (
    AnalyzeRequest,
    AnalyzeResponse,
    ExportFormat,
    ExportRequest,
    ExtractResponse,
)
from sentix.orchestrator import BatchOrchestrator

# Set up the package logger once; module loggers propagate to it
logger = logging.getLogger("sentix")
if APPINSIGHTS_KEY:
    logger.addHandler(AzureLogHandler(connection_string=f'InstrumentationKey={APPINSIGHTS_KEY}'))
if not logging.getLogger().hasHandlers():
    logging.basicConfig(format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger.setLevel(LOG_LEVEL)

UNSUPPORTED_FILE_MESSAGE = "Unsupported file format. Please use .txt, .json, or .csv"
NO_TEXT_MESSAGE = "No valid text found in file."

classifier = None


def load_classifier():
    """Build the remote classifier from the environment, or leave it unset."""
    global classifier
    try:
        classifier = GeminiClassifier()
        logger.info("Classifier ready", extra={"custom_dimensions": {"model": GEMINI_MODEL}})
    except ClassifierNotConfigured as e:
        classifier = None
        logger.warning("Classifier unavailable: %s", e)
    return classifier


@asynccontextmanager
async def lifespan(app: FastAPI):
    if classifier is None:
        load_classifier()
    yield


app = FastAPI(
    title="Sentix API",
    description="Batch sentiment analysis of texts through a hosted language model",
    version=__version__,
    lifespan=lifespan
)


@app.get("/")
def read_root():
    """Root endpoint"""
    return {"message": "Welcome to the Sentix API"}


@app.get("/health")
def health():
    return {
        "api_status": "ok",
        "classifier_status": "ok" if classifier is not None else "not_configured",
        "model": GEMINI_MODEL,
        "chunk_size": CHUNK_SIZE,
    }


@app.post("/analyze", response_model=AnalyzeResponse)
def analyze(request: AnalyzeRequest):
    """
    Classify every text of the request.

    Texts are sent in chunks of ``CHUNK_SIZE``. Either all results come
    back, in request order, or the request fails with 502. Individual blank
    texts are sent along with the others.
    """
    if not any(text.strip() for text in request.texts):
        raise HTTPException(status_code=422, detail="Please enter some text to analyze.")

    if classifier is None:
        raise HTTPException(status_code=503, detail="Classifier not configured: set GEMINI_API_KEY")

    outcome = BatchOrchestrator(classifier).analyze(request.texts, source=request.source)
    if not outcome.ok:
        raise HTTPException(status_code=502, detail=outcome.error)

    return AnalyzeResponse(results=outcome.results, total=len(outcome.results), chunks=outcome.chunks)


@app.post("/extract", response_model=ExtractResponse)
def extract(file: UploadFile = File(...)):
    """Split an uploaded .txt, .json or .csv file into texts."""
    fmt = detect_format(file.filename, file.content_type)
    if fmt is None:
        raise HTTPException(status_code=415, detail=UNSUPPORTED_FILE_MESSAGE)

    try:
        texts = extract_texts(file.file.read(), fmt)
    except UnsupportedFormatError:
        raise HTTPException(status_code=415, detail=UNSUPPORTED_FILE_MESSAGE)
    except IngestionError as e:
        raise HTTPException(status_code=422, detail=str(e))

    if not texts:
        raise HTTPException(status_code=422, detail=NO_TEXT_MESSAGE)

    logger.info("Extracted %d texts from %s", len(texts), file.filename)
    return ExtractResponse(texts=texts, count=len(texts), format=fmt)


@app.post("/export/{fmt}")
def export(fmt: ExportFormat, request: ExportRequest):
    """Serialize results to a downloadable JSON, CSV or PDF file."""
    if not request.results:
        raise HTTPException(status_code=422, detail="There are no results to export.")

    try:
        content = SERIALIZERS[fmt](request.results)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Export error: {str(e)}")

    filename = export_filename(fmt)
    return Response(
        content=content,
        media_type=MEDIA_TYPES[fmt],
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("sentix.main:app", host="0.0.0.0", port=8000, reload=True)
