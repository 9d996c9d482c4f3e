"""Unit tests for loading resumes from disk."""

import pytest

from models.errors import ErrorCode, ToolError
from utils.resume_loader import DEFAULT_MIME_TYPE, guess_mime_type, load_resume_file
from utils.validation import MIME_DOC, MIME_DOCX, MIME_PDF


class TestGuessMimeType:
    @pytest.mark.parametrize(
        "name,expected",
        [
            ("cv.pdf", MIME_PDF),
            ("CV.PDF", MIME_PDF),
            ("cv.docx", MIME_DOCX),
            ("cv.doc", MIME_DOC),
            ("noext", DEFAULT_MIME_TYPE),
        ],
    )
    def test_known_extensions(self, name, expected):
        assert guess_mime_type(name) == expected

    def test_falls_back_to_platform_table(self):
        assert guess_mime_type("photo.png") == "image/png"


class TestLoadResumeFile:
    """Tests for load_resume_file."""

    def test_reads_name_size_type_and_content(self, tmp_path):
        path = tmp_path / "resume.pdf"
        path.write_bytes(b"%PDF-1.7 hello")

        ref = load_resume_file(path)

        assert ref.name == "resume.pdf"
        assert ref.size_bytes == 14
        assert ref.mime_type == MIME_PDF
        assert ref.content == b"%PDF-1.7 hello"

    def test_type_comes_from_extension(self, tmp_path):
        path = tmp_path / "resume.docx"
        path.write_bytes(b"x")

        assert load_resume_file(str(path)).mime_type == MIME_DOCX
        assert load_resume_file(tmp_path / "resume.docx").name == "resume.docx"

    def test_file_inside_root_is_loaded(self, tmp_path):
        (tmp_path / "resumes").mkdir()
        path = tmp_path / "resumes" / "cv.pdf"
        path.write_bytes(b"%PDF")

        ref = load_resume_file(path, root=tmp_path)
        assert ref.content == b"%PDF"

    def test_file_outside_root_is_rejected(self, tmp_path):
        root = tmp_path / "root"
        root.mkdir()
        outside = tmp_path / "secret.pdf"
        outside.write_bytes(b"%PDF")

        with pytest.raises(ToolError) as exc_info:
            load_resume_file(outside, root=root)

        assert exc_info.value.code == ErrorCode.VALIDATION_ERROR
        assert "root" in exc_info.value.message

    def test_parent_traversal_is_rejected(self, tmp_path):
        root = tmp_path / "root"
        root.mkdir()
        (tmp_path / "secret.pdf").write_bytes(b"%PDF")

        with pytest.raises(ToolError) as exc_info:
            load_resume_file(root / ".." / "secret.pdf", root=root)
        assert exc_info.value.code == ErrorCode.VALIDATION_ERROR

    def test_oversized_file_is_described_without_content(self, tmp_path):
        path = tmp_path / "big.pdf"
        path.write_bytes(b"0" * 2048)

        ref = load_resume_file(path, max_bytes=1024)

        assert ref.size_bytes == 2048
        assert ref.content is None

    def test_missing_file_raises_file_not_found(self, tmp_path):
        with pytest.raises(ToolError) as exc_info:
            load_resume_file(tmp_path / "missing.pdf")

        assert exc_info.value.code == ErrorCode.FILE_NOT_FOUND
        assert "missing.pdf" in exc_info.value.message
        assert str(tmp_path) not in exc_info.value.message

    def test_directory_is_rejected(self, tmp_path):
        with pytest.raises(ToolError) as exc_info:
            load_resume_file(tmp_path)
        assert exc_info.value.code == ErrorCode.VALIDATION_ERROR
