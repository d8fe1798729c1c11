"""Services for the ResuMatch API."""
from resumatch.services.analyzer import AnalysisResult, analyze, analyze_text

__all__ = ["AnalysisResult", "analyze", "analyze_text"]
