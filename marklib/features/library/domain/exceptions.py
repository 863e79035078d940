class DuplicateBookError(Exception):
    """
    A book with the same content fingerprint is already in the library.
    """

    def __init__(self, file_hash: str, message: str = "Book already exists"):
        super().__init__(message)
        self.file_hash = file_hash
