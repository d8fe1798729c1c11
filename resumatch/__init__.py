"""ResuMatch - resume vs job description matching."""

__version__ = "1.0.0"
