import os

import requests
import streamlit as st

# API URL - change this if your API is hosted elsewhere
API_URL = os.environ.get("API_URL", "http://localhost:8000").rstrip("/")
ANALYZE_URL = f"{API_URL}/analyze"
EXTRACT_URL = f"{API_URL}/extract"
HEALTH_URL = f"{API_URL}/health"

# Analysis of many chunks can take a while
ANALYZE_TIMEOUT = 300


def _error_detail(response):
    try:
        detail = response.json().get("detail", response.text)
    except Exception:
        return response.text
    # FastAPI validation errors come as a list of {"loc", "msg", ...}
    if isinstance(detail, list):
        return "; ".join(str(err.get("msg", err)) if isinstance(err, dict) else str(err) for err in detail)
    return detail


def analyze_texts(texts, source=None):
    """Send texts to the backend and return the list of results, or None."""
    try:
        response = requests.post(
            ANALYZE_URL,
            json={"texts": texts, "source": source},
            headers={"Content-Type": "application/json"},
            timeout=ANALYZE_TIMEOUT,
        )
    except requests.exceptions.RequestException as e:
        st.error(f"Error connecting to API: {str(e)}")
        return None

    if response.status_code == 200:
        return response.json()["results"]
    st.error(f"API Error ({response.status_code}): {_error_detail(response)}")
    return None


def extract_file_texts(filename, content, content_type=None):
    """Upload a file to the backend and return the texts found in it, or None."""
    try:
        response = requests.post(
            EXTRACT_URL,
            files={"file": (filename, content, content_type or "application/octet-stream")},
            timeout=30,
        )
    except requests.exceptions.RequestException as e:
        st.error(f"Error connecting to API: {str(e)}")
        return None

    if response.status_code == 200:
        return response.json()["texts"]
    st.error(f"Upload Error ({response.status_code}): {_error_detail(response)}")
    return None


def export_results(results, fmt):
    """Return (filename, bytes) for the exported results, or None."""
    try:
        response = requests.post(f"{API_URL}/export/{fmt}", json={"results": results}, timeout=60)
    except requests.exceptions.RequestException as e:
        st.error(f"Error connecting to API: {str(e)}")
        return None

    if response.status_code != 200:
        st.error(f"Export Error ({response.status_code}): {_error_detail(response)}")
        return None

    disposition = response.headers.get("Content-Disposition", "")
    filename = disposition.split("filename=")[-1].strip('"') if "filename=" in disposition else f"sentix_results.{fmt}"
    return filename, response.content


def check_health():
    try:
        response = requests.get(HEALTH_URL, timeout=5)
        if response.status_code == 200:
            return {"data": response.json(), "connected": True}
        return {"data": None, "connected": False, "status_code": response.status_code}
    except requests.exceptions.RequestException as e:
        return {"data": None, "connected": False, "error": str(e)}
