"""
Targeting Context

Responsibilities:
- Scores resumes against job descriptions (offline keyword overlap)
- Runs LLM job-match analysis with offline fallback

Owns: Job-match scoring policy
Never: Modifies resumes or renders documents
"""
