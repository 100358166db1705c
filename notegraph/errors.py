class PageNotFoundError(KeyError):
    """Raised when a page path is not present in the registry."""

    def __init__(self, path: str):
        super().__init__(path)
        self.path = path

    def __str__(self) -> str:
        return f"Page not found: {self.path}"
