class BookParseError(Exception):
    """Base class for anything that stops a file from becoming a book."""


class InvalidBookFormatError(BookParseError):
    pass


class BookTooLargeError(BookParseError):
    def __init__(self, message: str, size_bytes: int = 0, limit_bytes: int = 0):
        super().__init__(message)
        self.size_bytes = size_bytes
        self.limit_bytes = limit_bytes


class MarkdownParseError(BookParseError):
    pass
