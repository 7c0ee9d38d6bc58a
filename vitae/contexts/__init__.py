"""
Bounded contexts for VITAE.

- intake: raw resume text -> structured ResumeDocument
- templating: resume data model, template catalog, LaTeX generation
- rendering: LaTeX -> PDF compilation
- targeting: job description matching
- drafting: cover letters and resume suggestions
- workspace: repositories and user-facing operations
"""
