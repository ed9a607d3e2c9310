"""Error types raised by the upload pipeline."""


class PhraseUploadError(Exception):
    """Base class for every fatal error the tool reports."""


class ArgumentError(PhraseUploadError):
    """A required command-line value is absent."""

    def __init__(self, arg: str) -> None:
        self.arg = arg
        super().__init__(f"Command line argument {arg} was missing")


class ConfigError(PhraseUploadError):
    """The configuration file is malformed."""


class FileReadError(PhraseUploadError):
    """The input file could not be read."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        super().__init__(f"Could not read file {path}: {reason}")


class ParseError(PhraseUploadError):
    """The input file has a key line without a matching value line."""

    def __init__(self, file: str) -> None:
        self.file = file
        super().__init__(f"Error parsing file {file}")


class RequestFailedError(PhraseUploadError):
    """The Phrase API answered with a non-success status code."""

    def __init__(self, method: str, path: str, status: int, reason: str = "") -> None:
        self.method = method
        self.path = path
        self.status = status
        status_text = f"{status} {reason}".strip()
        super().__init__(
            f'Request to "{method} {path}" failed with status "{status_text}"'
        )


class DeserializationError(PhraseUploadError):
    """A successful response body did not have the expected shape."""

    def __init__(self, path: str, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Unexpected response body from {path}: {detail}")


class ProjectNotFoundError(PhraseUploadError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Phrase project named {name} was not found")


class LocaleNotFoundError(PhraseUploadError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Locale named {name} was not found")
