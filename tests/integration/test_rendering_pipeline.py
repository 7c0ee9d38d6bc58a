"""
Integration tests for rendering - real LaTeX compilation.
"""

import pytest

from vitae.contexts.rendering.compiler import compile_latex, compiler_available, render_resume_pdf
from vitae.contexts.templating.registries import TemplateCatalog
from vitae.contexts.templating.resume_data_structure import ResumeDocument

skip_if_no_compiler = pytest.mark.skipif(
    not compiler_available(),
    reason="LaTeX compiler not installed - install TeX Live, MiKTeX, or MacTeX",
)


@pytest.mark.integration
@pytest.mark.latex
@skip_if_no_compiler
@pytest.mark.parametrize("template_id", TemplateCatalog().ids())
def test_render_every_template(template_id, sample_resume, tmp_path):
    result = render_resume_pdf(sample_resume, output_dir=tmp_path, template_id=template_id)

    assert result.success, f"Compilation failed with errors: {result.errors}"
    assert result.pdf_path.exists()
    assert result.page_count >= 1
    assert result.tex_path.exists()
    assert not (tmp_path / "Jane_Doe.aux").exists()


@pytest.mark.integration
@pytest.mark.latex
@skip_if_no_compiler
def test_render_escapes_special_characters(tmp_path):
    resume = ResumeDocument(title="R&D", summary="Cut costs by 40% & shipped C# tools for $5M_accounts")
    resume.personal_info.first_name = "Jo"
    resume.skills = ["C++", "R&D", "~tilde", "^caret", "{braces}", "back\\slash"]

    result = render_resume_pdf(resume, output_dir=tmp_path)
    assert result.success, f"Compilation failed with errors: {result.errors}"


@pytest.mark.integration
@pytest.mark.latex
@skip_if_no_compiler
def test_render_empty_resume(tmp_path):
    result = render_resume_pdf(ResumeDocument(), output_dir=tmp_path)
    assert result.success, f"Compilation failed with errors: {result.errors}"
    assert result.pdf_path.name == "Untitled_Resume.pdf"


@pytest.mark.integration
@pytest.mark.latex
@skip_if_no_compiler
def test_compile_with_intentional_error(tmp_path):
    broken_tex = tmp_path / "broken.tex"
    broken_tex.write_text(
        "\\documentclass{article}\n\\begin{document}\n\\undefinedcommand\n\\end{document}\n",
        encoding="utf-8",
    )

    result = compile_latex(broken_tex, num_passes=1)

    assert result.success is False
    assert result.errors
    assert result.pdf_path is None
    assert not (tmp_path / "broken.aux").exists()


@pytest.mark.integration
def test_compile_missing_tex_file(tmp_path):
    result = compile_latex(tmp_path / "missing.tex")
    assert result.success is False
    assert "TeX file not found" in result.errors[0]
