import logging
from pathlib import PurePath
from typing import List, Optional, Tuple

from markdown_it import MarkdownIt

from marklib.core.config.settings import settings
from marklib.features.directory_access.domain.models import CandidateFile
from ..domain.exceptions import BookTooLargeError, InvalidBookFormatError, MarkdownParseError
from ..domain.interfaces import IBookParser
from ..domain.models import BookRecord, Chapter

logger = logging.getLogger(__name__)

# Headings at these levels start a new chapter.
CHAPTER_TAGS = {"h1": 1, "h2": 2}


class MarkdownItBookParser(IBookParser):
    """
    Concrete parser backed by markdown-it-py (CommonMark tokenizer).
    Chapters are cut at top-level h1/h2 headings using the token line maps,
    so chapter content stays verbatim markdown.
    """

    def __init__(self, max_size_bytes: Optional[int] = None):
        self.md = MarkdownIt("commonmark")
        self.max_size_bytes = max_size_bytes if max_size_bytes is not None else settings.MAX_BOOK_SIZE_BYTES

    def parse(self, file: CandidateFile) -> BookRecord:
        self._validate(file)

        try:
            text = file.data.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise MarkdownParseError(f"File is not valid UTF-8 text: {e.reason}") from e

        if not text.strip():
            raise MarkdownParseError("Markdown file is empty")

        lines = text.splitlines()
        headings = self._find_headings(text)

        title = next((h_title for _, level, h_title in headings if level == 1), None)
        if not title:
            title = PurePath(file.name).stem

        chapters = self._split_chapters(lines, headings, title)
        logger.debug(f"Parsed {file.name}: '{title}', {len(chapters)} chapters")

        return BookRecord(
            title=title,
            file_name=file.name,
            content=text,
            content_type=file.content_type,
            size_bytes=file.size,
            word_count=len(text.split()),
            chapters=chapters,
        )

    def _validate(self, file: CandidateFile):
        if file.content_type not in settings.MARKDOWN_CONTENT_TYPES:
            raise InvalidBookFormatError("Invalid file format. Only markdown files are supported.")

        if file.size > self.max_size_bytes:
            limit_mb = self.max_size_bytes // (1024 * 1024)
            raise BookTooLargeError(
                f"File size exceeds {limit_mb}MB limit",
                size_bytes=file.size,
                limit_bytes=self.max_size_bytes
            )

    def _find_headings(self, text: str) -> List[Tuple[int, int, str]]:
        """
        Returns (start_line, level, title) for every top-level chapter heading.
        """
        tokens = self.md.parse(text)
        headings = []
        for i, token in enumerate(tokens):
            if token.type != "heading_open" or token.level != 0 or token.tag not in CHAPTER_TAGS:
                continue
            inline = tokens[i + 1] if i + 1 < len(tokens) else None
            heading_title = inline.content.strip() if inline is not None and inline.type == "inline" else ""
            headings.append((token.map[0], CHAPTER_TAGS[token.tag], heading_title))
        return headings

    def _split_chapters(self, lines: List[str], headings: List[Tuple[int, int, str]], book_title: str) -> List[Chapter]:
        chapters = []

        # Anything before the first heading is kept as an untitled preamble.
        first_start = headings[0][0] if headings else len(lines)
        preamble = "\n".join(lines[:first_start]).strip()
        if preamble:
            chapters.append(Chapter(index=0, title=book_title, level=0, content=preamble))

        for n, (start, level, heading_title) in enumerate(headings):
            end = headings[n + 1][0] if n + 1 < len(headings) else len(lines)
            chapters.append(
                Chapter(
                    index=len(chapters),
                    title=heading_title or f"Chapter {len(chapters) + 1}",
                    level=level,
                    content="\n".join(lines[start:end]).strip(),
                )
            )

        return chapters
