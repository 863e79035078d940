"""
marklib command line interface.

Usage:
    marklib scan [DIRECTORY]    Import every markdown file in a directory
    marklib add FILE [FILE...]  Import specific markdown files
    marklib exists FINGERPRINT  Check whether a content hash is in the library
"""

import argparse
import asyncio
import logging
import mimetypes
import sys
from pathlib import Path
from typing import List, Optional

from marklib.core.database.connection import init_db
from marklib.features.book_scanner.domain.models import ScanSummary
from marklib.features.book_scanner.service.scanner import BookScanner, scanner as default_scanner
from marklib.features.directory_access.domain.exceptions import DirectoryAccessError
from marklib.features.directory_access.domain.models import CandidateFile, repair_content_type


def render_summary(summary: ScanSummary) -> str:
    """
    One-line verdict plus one line per failed file.
    "Nothing found" is only reported when total is zero.
    """
    if summary.errors:
        lines = [f"Added {summary.added} books, {summary.skipped} skipped, {summary.failed} errors"]
        lines.extend(f"  {e.filename}: {e.error}" for e in summary.errors)
        return "\n".join(lines)
    if summary.added > 0 or summary.skipped > 0:
        return f"Added {summary.added} books, {summary.skipped} already in library"
    return "No books found in the selected directory"


def cmd_scan(args, scanner: BookScanner) -> int:
    directory = args.directory
    if directory is None:
        directory = asyncio.run(scanner.select_directory())
        if directory is None:
            # User cancelled the picker
            return 0

    try:
        summary = asyncio.run(scanner.scan(directory))
    except DirectoryAccessError as e:
        print(f"ERROR: Failed to scan directory: {e}", file=sys.stderr)
        return 1

    print(render_summary(summary))
    return 1 if summary.errors else 0


def cmd_add(args, scanner: BookScanner) -> int:
    files: List[CandidateFile] = []
    unreadable = 0
    for raw in args.files:
        path = Path(raw)
        try:
            data = path.read_bytes()
        except OSError as e:
            print(f"ERROR: Cannot read {path}: {e}", file=sys.stderr)
            unreadable += 1
            continue
        guessed, _ = mimetypes.guess_type(path.name)
        files.append(CandidateFile(name=path.name, data=data, content_type=repair_content_type(path.name, guessed or "")))

    summary = asyncio.run(scanner.add_books_from_files(files))
    print(render_summary(summary))
    return 1 if (summary.errors or unreadable) else 0


def cmd_exists(args, scanner: BookScanner) -> int:
    exists = asyncio.run(scanner.book_exists(args.fingerprint))
    print("yes" if exists else "no")
    return 0 if exists else 1


def main(argv: Optional[List[str]] = None, scanner: Optional[BookScanner] = None) -> int:
    """
    Main CLI entrypoint.

    Parses arguments and dispatches to subcommands.
    """
    parser = argparse.ArgumentParser(
        prog='marklib',
        description='Import markdown books into your personal library'
    )
    parser.add_argument('--verbose', '-v', action='store_true', help='Show progress logging')

    subparsers = parser.add_subparsers(dest='command', required=True, help='Command to execute')

    parser_scan = subparsers.add_parser('scan', help='Import all markdown files in a directory')
    parser_scan.add_argument(
        'directory',
        nargs='?',
        default=None,
        help='Directory to scan (prompted for when omitted)'
    )
    parser_scan.set_defaults(func=cmd_scan)

    parser_add = subparsers.add_parser('add', help='Import specific markdown files')
    parser_add.add_argument('files', nargs='+', help='Markdown files to import')
    parser_add.set_defaults(func=cmd_add)

    parser_exists = subparsers.add_parser('exists', help='Check whether a content fingerprint is in the library')
    parser_exists.add_argument('fingerprint', help='SHA256 hex digest of the file content')
    parser_exists.set_defaults(func=cmd_exists)

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    init_db()
    return args.func(args, scanner or default_scanner)


if __name__ == '__main__':
    sys.exit(main())
