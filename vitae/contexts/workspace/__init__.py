"""
Workspace Context

Responsibilities:
- Stores users, resumes, cover letters and job analyses behind a Repository seam
- Validates requests and reports missing fields and unknown ids
- Orchestrates intake, drafting, targeting and rendering for stored resumes

Owns: Records and their lifecycle
Never: Parses, scores or renders resumes itself
"""
