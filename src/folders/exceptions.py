"""Custom exceptions for the folders app."""


class FilingError(Exception):
    """Raised when a questionnaire cannot be placed in the folder tree."""

    def __init__(self, display_type: str) -> None:
        self.display_type = display_type
        super().__init__(f'There is no folder for the "{display_type}" category.')
