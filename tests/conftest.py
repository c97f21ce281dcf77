"""
Shared fixtures: a throwaway library root with its own config, paper
directories, a tiny real PDF, and an extraction engine double.
"""

import json
import shutil
import sys
import tempfile
from pathlib import Path
from typing import Dict, Generator, List

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

# One page, Helvetica, the words "Hello World".
HELLO_WORLD_PDF = b"""%PDF-1.4
1 0 obj
<< /Type /Catalog /Pages 2 0 R >>
endobj
2 0 obj
<< /Type /Pages /Kids [3 0 R] /Count 1 >>
endobj
3 0 obj
<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792]
   /Contents 4 0 R /Resources << /Font << /F1 5 0 R >> >> >>
endobj
4 0 obj
<< /Length 44 >>
stream
BT /F1 12 Tf 100 700 Td (Hello World) Tj ET
endstream
endobj
5 0 obj
<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>
endobj
xref
0 6
0000000000 65535 f
0000000009 00000 n
0000000058 00000 n
0000000115 00000 n
0000000266 00000 n
0000000359 00000 n
trailer
<< /Size 6 /Root 1 0 R >>
startxref
434
%%EOF"""


def _library_settings(root: Path) -> dict:
    """config.json contents pointing every path below root."""
    return {
        "paths": {
            "library_directory": str(root / "library"),
            "database_path": str(root / "output" / "test.db"),
            "logs_directory": str(root / "output" / "logs"),
        },
        "library": {"pdf_filename": "paper.pdf", "notes_directory": "summary", "notes_extension": ".typ"},
        "extraction": {
            "primary_backend": "pypdf",
            "fallback_backend": "pdfplumber",
            "max_file_size_mb": 100,
            "strict": False,
        },
        "search": {
            "excerpt_length": 120,
            "excerpt_suffix": "...",
            "newline_marker": "↵",
            "max_ticks": 1000,
            "tick_batch_size": 8,
            "worker_threads": 2,
            "default_limit": 20,
        },
        "logging": {"level": "DEBUG", "format": "%(levelname)s - %(message)s", "max_file_size_mb": 1, "backup_count": 1},
    }


class FakeExtractor:
    """
    Extraction engine double keyed by the PDF bytes.

    Bytes mapped to a list return those pages; bytes mapped to an
    exception raise it. Every call is recorded.
    """

    def __init__(self, documents: Dict[bytes, object] = None):
        self.documents = documents or {}
        self.calls: List[str] = []

    def extract_pages(self, data: bytes, source: str = None) -> List[str]:
        self.calls.append(source)
        result = self.documents[data]
        if isinstance(result, Exception):
            raise result
        return list(result)


def _reset(module, attribute: str, value) -> Generator[None, None, None]:
    setattr(module, attribute, value)
    yield
    setattr(module, attribute, value)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Scratch directory removed after the test."""
    root = Path(tempfile.mkdtemp(prefix="papr_test_"))
    yield root
    shutil.rmtree(root, ignore_errors=True)


@pytest.fixture
def temp_config(temp_dir: Path) -> Path:
    """Write config/config.json under temp_dir and return its path."""
    for sub in ("config", "library", "output/logs"):
        (temp_dir / sub).mkdir(parents=True, exist_ok=True)

    settings_file = temp_dir / "config" / "config.json"
    settings_file.write_text(json.dumps(_library_settings(temp_dir)), encoding="utf-8")
    return settings_file


@pytest.fixture
def sample_pdf_content() -> bytes:
    return HELLO_WORLD_PDF


@pytest.fixture
def sample_pdf(temp_dir: Path, sample_pdf_content: bytes) -> Path:
    """The Hello World PDF written to disk."""
    target = temp_dir / "sample.pdf"
    target.write_bytes(sample_pdf_content)
    return target


@pytest.fixture
def make_paper(temp_dir: Path):
    """
    Factory creating a paper directory inside the temporary library.

    Usage:
        base = make_paper("attention_is_all_you_need", pdf=b"...",
                          notes={"main.typ": "= Notes"})
    """
    library_dir = temp_dir / "library"
    library_dir.mkdir(exist_ok=True)

    def _make(name: str, pdf: bytes = None, notes: Dict[str, str] = None) -> Path:
        base = library_dir / name
        base.mkdir(parents=True, exist_ok=True)
        if pdf is not None:
            (base / "paper.pdf").write_bytes(pdf)
        if notes:
            summary = base / "summary"
            summary.mkdir(exist_ok=True)
            for filename, text in notes.items():
                (summary / filename).write_text(text, encoding="utf-8")
        return base

    return _make


@pytest.fixture
def temp_database(temp_dir: Path) -> Path:
    """Database file location; nothing is created."""
    return temp_dir / "test.db"


@pytest.fixture
def fake_extractor() -> FakeExtractor:
    """Empty extraction engine double; fill .documents in the test."""
    return FakeExtractor()


@pytest.fixture
def reset_config_singleton():
    from papr.core import config_loader
    yield from _reset(config_loader, "_config_instance", None)


@pytest.fixture
def reset_logger_singleton():
    from papr.core import logger
    yield from _reset(logger, "_logger_initialized", False)


@pytest.fixture
def reset_db_singleton():
    from papr.database import connection
    yield from _reset(connection, "_db_manager", None)


@pytest.fixture
def configured_db(temp_config, reset_config_singleton, reset_db_singleton):
    """Shared config loaded from temp_config, with a fresh database manager."""
    from papr.core.config_loader import get_config
    get_config(temp_config)
    yield
