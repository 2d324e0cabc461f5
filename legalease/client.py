"""
HTTP client for the LegalEase API.

Used by scripts and the browser extension backend. The session cookie set by
signin/signup is kept on the underlying requests.Session.

    client = LegalEaseClient("http://localhost:8000")
    client.signin("ana@example.com", "secret")
    upload = client.upload("lease.pdf")
    analysis = client.wait_for_analysis(upload.document_id)
"""
import os
import time
import logging
from typing import Callable, Optional

import requests

from .core.exceptions import (
    LegalEaseException, AnalysisError, AuthenticationError, DocumentNotFoundError
)
from .models import (
    User, AnalysisStatus, DocumentAnalysis, DocumentUploadResponse, DocumentDetailResponse
)

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = os.environ.get("LEGALEASE_API_URL", "http://localhost:8000")


class LegalEaseClient:
    def __init__(self, base_url: str = DEFAULT_BASE_URL, timeout: int = 30,
                 session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = session or requests.Session()

    def _request(self, method: str, path: str, **kwargs) -> requests.Response:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.exceptions.RequestException as e:
            raise LegalEaseException(f"Request to {url} failed: {e}") from e

        if response.status_code >= 400:
            detail = _error_detail(response)
            if response.status_code == 401:
                raise AuthenticationError(detail)
            if response.status_code == 404:
                raise DocumentNotFoundError(detail)
            raise LegalEaseException(f"HTTP {response.status_code}: {detail}")
        return response

    # --- Auth ---

    def signup(self, email: str, password: str, name: str) -> User:
        response = self._request("POST", "/api/auth/signup",
                                 json={"email": email, "password": password, "name": name})
        return User.model_validate(response.json()["user"])

    def signin(self, email: str, password: str) -> User:
        response = self._request("POST", "/api/auth/signin", json={"email": email, "password": password})
        return User.model_validate(response.json()["user"])

    # --- Documents ---

    def upload(self, path: str, filename: Optional[str] = None) -> DocumentUploadResponse:
        name = filename or os.path.basename(path)
        with open(path, 'rb') as f:
            response = self._request("POST", "/api/documents/upload",
                                     files={"file": (name, f)}, data={"filename": name})
        return DocumentUploadResponse.model_validate(response.json())

    def get_document(self, document_id: str) -> DocumentDetailResponse:
        response = self._request("GET", f"/api/documents/{document_id}")
        return DocumentDetailResponse.model_validate(response.json())

    def export(self, document_id: str, fmt: str = "json") -> bytes:
        response = self._request("POST", "/api/export", json={"documentId": document_id, "format": fmt})
        return response.content

    def wait_for_analysis(
        self,
        document_id: str,
        interval: float = 1.0,
        max_attempts: int = 30,
        on_progress: Optional[Callable[[int], None]] = None
    ) -> DocumentAnalysis:
        """Poll the document until its analysis completes or fails"""
        attempts = 0
        while True:
            attempts += 1
            detail = self.get_document(document_id)
            status = detail.document.analysis_status

            if status == AnalysisStatus.COMPLETED and detail.analysis is not None:
                if on_progress:
                    on_progress(100)
                return detail.analysis
            if status == AnalysisStatus.ERROR:
                logger.warning(f"Analysis of {document_id} failed: {detail.document.error_message}")
                raise AnalysisError("Analysis failed")

            if on_progress:
                on_progress(min(30 + attempts * 2, 90))
            if attempts >= max_attempts:
                raise AnalysisError("Analysis timeout")
            time.sleep(interval)


def _error_detail(response: requests.Response) -> str:
    try:
        return str(response.json().get("detail", response.text))
    except ValueError:
        return response.text
