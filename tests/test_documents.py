import sys
import unittest
from io import BytesIO
from pathlib import Path

from docx import Document

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_tailor.services.documents import DocumentError, extract_document_text  # noqa: E402


class DocumentExtractionTests(unittest.TestCase):
    def test_txt_upload(self):
        document = extract_document_text("resume.TXT", "Jane Doe\nSkills: Python".encode("utf-8"))
        self.assertEqual(document.source_type, "txt")
        self.assertEqual(document.text, "Jane Doe\nSkills: Python")
        self.assertEqual(document.warnings, [])

    def test_docx_upload(self):
        buffer = BytesIO()
        source = Document()
        source.add_paragraph("Jane Doe")
        source.add_paragraph("")
        source.add_paragraph("- Built APIs for payments")
        source.save(buffer)

        document = extract_document_text("resume.docx", buffer.getvalue())
        self.assertEqual(document.source_type, "docx")
        self.assertEqual(document.text, "Jane Doe\n- Built APIs for payments")

    def test_rejects_unsupported_and_invalid_uploads(self):
        with self.assertRaises(DocumentError):
            extract_document_text("resume.exe", b"MZ")
        with self.assertRaises(DocumentError):
            extract_document_text("resume.txt", b"")
        with self.assertRaises(DocumentError):
            extract_document_text("resume.pdf", b"not a pdf")
        with self.assertRaises(DocumentError):
            extract_document_text("resume.docx", b"plain text")
        with self.assertRaises(DocumentError):
            extract_document_text("resume.txt", b"x" * 11, max_bytes=10)


if __name__ == "__main__":
    unittest.main()
