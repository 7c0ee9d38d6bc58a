"""
VITAE - Resume workspace toolkit

Parses raw resume text into structured documents, scores resumes against
job descriptions, drafts cover letters, and renders resumes to PDF.
"""

__version__ = "0.1.0"
