"""
Intake Context

Responsibilities:
- Extracts text from uploaded resume files (PDF, DOCX, plain text)
- Normalizes raw text into a LineStream
- Parses resumes heuristically (field and section extractors)
- Parses resumes with an LLM, falling back to the heuristic parser

Owns: Resume text parsing logic
Never: Renders documents or scores job matches
"""
