"""
Templating Context

Responsibilities:
- Defines the ResumeDocument data model and its dict/YAML forms
- Maintains the template catalog (professional, modern, executive)
- Generates LaTeX source from resumes
- Formats markdown previews

Owns: Resume structure and template definitions
Never: Compiles PDFs or parses raw resume text
"""
