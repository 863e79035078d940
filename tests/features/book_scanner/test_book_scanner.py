import asyncio
import hashlib
import pytest
from dataclasses import FrozenInstanceError

from marklib.features.book_scanner.domain.exceptions import IngestionError, ScanInProgressError
from marklib.features.book_scanner.domain.interfaces import IIngestionWorkflow
from marklib.features.book_scanner.domain.models import Duplicate, Imported, ScanError, ScanSummary, ScanTally
from marklib.features.book_scanner.service.scanner import BookScanner
from marklib.features.directory_access.data.host import HostEnvironment
from marklib.features.directory_access.data.upload_handle import UploadedDirectoryHandle
from marklib.features.directory_access.domain.exceptions import DirectoryAccessError
from marklib.features.directory_access.domain.models import PathReference
from marklib.features.directory_access.service.api import DirectoryAccess
from marklib.features.library.data.sql_models import BookModel, ReadingProgressModel
from marklib.features.library.domain.exceptions import DuplicateBookError
from marklib.features.library.service.api import LibraryService

# --- FIXTURES ---

@pytest.fixture
def scanner():
    """
    Scanner wired to a native host and the real (test) SQLite store.
    """
    return BookScanner(
        directory_access=DirectoryAccess(HostEnvironment.native(picker=lambda: None)),
        library=LibraryService()
    )

@pytest.fixture
def library_folder(tmp_path):
    root = tmp_path / "library_drop"
    root.mkdir()
    (root / "dune.md").write_text("# Dune\n\nArrakis.\n")
    (root / "emma.markdown").write_text("# Emma\n\nHighbury.\n")
    (root / "readme.txt").write_text("not a book")
    return root

# --- SCAN ---

def test_scan_imports_every_markdown_file(scanner, library_folder, db_session):
    summary = asyncio.run(scanner.scan(PathReference(library_folder)))

    assert summary == ScanSummary(total=2, added=2, skipped=0, errors=())
    titles = sorted(b.title for b in db_session.query(BookModel).all())
    assert titles == ["Dune", "Emma"]
    assert db_session.query(ReadingProgressModel).count() == 2

def test_rescan_is_idempotent(scanner, library_folder, db_session):
    first = asyncio.run(scanner.scan(library_folder))
    second = asyncio.run(scanner.scan(library_folder))

    assert first.added == 2
    assert second.added == 0
    assert second.skipped == second.total == 2
    assert second.errors == ()
    assert db_session.query(BookModel).count() == 2

def test_renamed_copy_is_skipped(scanner, library_folder, db_session):
    asyncio.run(scanner.scan(library_folder))
    (library_folder / "dune.md").rename(library_folder / "dune-renamed.md")

    summary = asyncio.run(scanner.scan(str(library_folder)))

    assert summary.added == 0
    assert summary.skipped == 2
    assert db_session.query(BookModel).count() == 2

def test_one_bad_file_does_not_stop_the_batch(scanner, make_candidate):
    """
    Five files, the third is malformed. The fourth and fifth are still
    imported and only the third is reported.
    """
    files = [make_candidate(name=f"book{i}.md", body=f"# Book {i}\n") for i in range(1, 6)]
    files[2] = make_candidate(name="book3.md", body=b"\xff\xfe\xfa broken")

    summary = asyncio.run(scanner.add_books_from_files(files))

    assert summary.total == 5
    assert summary.added == 4
    assert summary.skipped == 0
    assert len(summary.errors) == 1
    assert summary.errors[0].filename == "book3.md"
    assert "UTF-8" in summary.errors[0].error

def test_errors_follow_discovery_order(scanner, make_candidate):
    files = [
        make_candidate(name="z.md", content_type=""),
        make_candidate(name="ok.md", body="# Fine\n"),
        make_candidate(name="a.md", body="   "),
    ]

    summary = asyncio.run(scanner.add_books_from_files(files))

    assert [e.filename for e in summary.errors] == ["z.md", "a.md"]
    assert summary.added == 1

def test_inaccessible_directory_aborts_without_summary(scanner, tmp_path):
    gone = tmp_path / "was_here"

    with pytest.raises(DirectoryAccessError):
        asyncio.run(scanner.scan(PathReference(gone)))

def test_empty_directory_is_distinguishable_from_total_failure(scanner, tmp_path, make_candidate):
    empty = asyncio.run(scanner.scan(tmp_path))
    all_failed = asyncio.run(scanner.add_books_from_files([make_candidate(content_type="")]))

    assert empty.added == all_failed.added == 0
    assert empty.found_nothing is True
    assert all_failed.found_nothing is False
    assert all_failed.failed == 1

def test_scan_over_sandbox_backend(db_session):
    handle = UploadedDirectoryHandle.from_files("uploaded", [
        ("notes.md", b"# Notes\n\nfrom the browser", ""),
        ("d.MD", b"# Ignored", ""),
    ])

    async def prompt():
        return handle

    scanner = BookScanner(
        directory_access=DirectoryAccess(HostEnvironment.sandbox(prompt)),
        library=LibraryService()
    )

    async def pick_and_scan():
        ref = await scanner.select_directory()
        return await scanner.scan(ref)

    summary = asyncio.run(pick_and_scan())

    assert summary.total == 1
    assert summary.added == 1
    assert db_session.query(BookModel).one().content_type == "text/markdown"

def test_cancelled_selection_returns_none(scanner):
    assert asyncio.run(scanner.select_directory()) is None

# --- SINGLE FILE / LOOKUP ---

def test_add_book_from_file_raises_for_duplicates(scanner, make_candidate):
    result = asyncio.run(scanner.add_book_from_file(make_candidate(name="x.md")))
    assert isinstance(result, Imported)

    with pytest.raises(DuplicateBookError):
        asyncio.run(scanner.add_book_from_file(make_candidate(name="y.md")))

def test_add_book_from_file_raises_ingestion_error(scanner, make_candidate):
    with pytest.raises(IngestionError):
        asyncio.run(scanner.add_book_from_file(make_candidate(content_type="text/html")))

def test_book_exists_by_fingerprint(scanner, make_candidate):
    candidate = make_candidate()
    fingerprint = hashlib.sha256(candidate.data).hexdigest()

    assert asyncio.run(scanner.book_exists(fingerprint)) is False
    asyncio.run(scanner.add_book_from_file(candidate))
    assert asyncio.run(scanner.book_exists(fingerprint)) is True

def test_watched_directory_last_write_wins(scanner, tmp_path):
    assert scanner.watched_directory is None

    scanner.set_watched_directory(PathReference(tmp_path / "one"))
    scanner.set_watched_directory(PathReference(tmp_path / "two"))

    assert scanner.watched_directory == PathReference(tmp_path / "two")

# --- CONCURRENCY GUARD ---

class GatedWorkflow(IIngestionWorkflow):
    """Holds the first file until released."""

    def __init__(self):
        self.started = asyncio.Event()
        self.release = asyncio.Event()

    async def ingest(self, file):
        raise NotImplementedError

    async def attempt(self, file):
        self.started.set()
        await self.release.wait()
        return Duplicate(file_name=file.name, file_hash="0" * 64)

def test_second_batch_is_rejected_while_one_runs(tmp_path, make_candidate):
    async def run():
        workflow = GatedWorkflow()
        scanner = BookScanner(
            directory_access=DirectoryAccess(HostEnvironment.native(picker=lambda: None)),
            workflow=workflow,
            library=LibraryService()
        )

        running = asyncio.create_task(scanner.add_books_from_files([make_candidate()]))
        await workflow.started.wait()

        with pytest.raises(ScanInProgressError):
            await scanner.scan(tmp_path)

        workflow.release.set()
        first = await running
        after = await scanner.scan(tmp_path)
        return first, after

    first, after = asyncio.run(run())

    assert first.skipped == 1
    assert after.total == 0

# --- SUMMARY ---

def test_summary_is_frozen_and_serializable():
    tally = ScanTally(total=2)
    tally.record(Duplicate(file_name="a.md", file_hash="abc"))
    tally.errors.append(ScanError(filename="b.md", error="boom"))

    summary = tally.freeze()

    assert summary.to_dict() == {
        "total": 2,
        "added": 0,
        "skipped": 1,
        "errors": [{"filename": "b.md", "error": "boom"}],
    }
    with pytest.raises(FrozenInstanceError):
        summary.added = 5
