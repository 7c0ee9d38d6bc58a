"""
Drafting Context

Responsibilities:
- Writes cover letters (LLM or offline template)
- Suggests resume improvements (LLM or offline rules)

Owns: Generated prose about a resume
Never: Stores records or compiles documents
"""
