"""
Rendering Context

Responsibilities:
- Compiles generated LaTeX to PDF with pdflatex
- Parses compiler logs into errors and warnings
- Manages output and artifact files

Owns: PDF production
Never: Decides resume content or template styling
"""
