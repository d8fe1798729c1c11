import pytest
from fastapi.testclient import TestClient

from resumatch.config import Settings
from resumatch.main import app


@pytest.fixture
def client():
    return TestClient(app)


class TestHealth:
    """Service status endpoints"""

    def test_health(self, client):
        """Test the health endpoint reports formats and OCR"""
        response = client.get("/api/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["supportedFormats"] == ["pdf", "docx", "doc", "txt"]
        assert "ocrEnabled" in data

    def test_root(self, client):
        """Test the root endpoint"""
        data = client.get("/").json()
        assert data["name"] == "ResuMatch"
        assert data["api"] == "/api"


class TestAnalyzeEndpoint:
    """Resume upload analysis"""

    def test_txt_upload(self, client, sample_resume, sample_job):
        """Test a text resume is analyzed with camelCase fields"""
        response = client.post(
            "/api/analyze",
            files={"resume": ("resume.txt", sample_resume.encode(), "text/plain")},
            data={"jobDescription": sample_job},
        )
        assert response.status_code == 200

        data = response.json()
        assert data["success"] is True
        assert data["fileName"] == "resume.txt"
        for key in ("jdMatchScore", "atsScore", "atsReadabilityScore"):
            assert 0 <= data[key] <= 100
        assert "python" in data["matchedKeywords"]
        assert data["result"]["structured_data"]["contact_info"]["email"] == "jane.smith@example.com"

    def test_short_job_description(self, client, sample_resume):
        """Test a short job description is a 400"""
        response = client.post(
            "/api/analyze",
            files={"resume": ("resume.txt", sample_resume.encode(), "text/plain")},
            data={"jobDescription": "Python dev"},
        )
        assert response.status_code == 400
        data = response.json()
        assert data["success"] is False
        assert data["error"]["error_code"] == "INSUFFICIENT_JOB_DESCRIPTION"

    def test_unsupported_format(self, client, sample_job):
        """Test an image upload is a 415"""
        response = client.post(
            "/api/analyze",
            files={"resume": ("photo.png", b"\x89PNG\r\n", "image/png")},
            data={"jobDescription": sample_job},
        )
        assert response.status_code == 415
        assert response.json()["error"]["error_code"] == "UNSUPPORTED_FORMAT"

    def test_empty_document(self, client, sample_job):
        """Test a blank text file is a 422"""
        response = client.post(
            "/api/analyze",
            files={"resume": ("blank.txt", b"   \n", "text/plain")},
            data={"jobDescription": sample_job},
        )
        assert response.status_code == 422
        assert response.json()["error"]["error_code"] == "EMPTY_DOCUMENT"

    def test_file_too_large(self, client, monkeypatch, sample_resume, sample_job):
        """Test uploads above the size limit are a 413"""
        monkeypatch.setattr("resumatch.api.routes.get_settings", lambda: Settings(max_file_size_mb=0))
        response = client.post(
            "/api/analyze",
            files={"resume": ("resume.txt", sample_resume.encode(), "text/plain")},
            data={"jobDescription": sample_job},
        )
        assert response.status_code == 413
        assert response.json()["error"]["error_code"] == "FILE_TOO_LARGE"

    def test_missing_job_description(self, client, sample_resume):
        """Test the job description field is required"""
        response = client.post(
            "/api/analyze",
            files={"resume": ("resume.txt", sample_resume.encode(), "text/plain")},
        )
        assert response.status_code == 422
