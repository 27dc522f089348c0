"""Snippet targets: `language` or `language_library` identifiers."""

from pydantic import BaseModel


class UnknownTargetError(ValueError):
    """The target string names an unsupported language or library."""

    def __init__(self, target: str):
        super().__init__(f"Invalid target: {target}")
        self.target = target


class Target(BaseModel):
    language: str
    library: str
    title: str


# language -> (default library, supported libraries)
AVAILABLE_TARGETS = {
    "shell": ("curl", ("curl",)),
    "python": ("requests", ("requests",)),
    "http": ("http1.1", ("http1.1",)),
}


def format_target(target: str) -> Target:
    """Split `target` into language and library and check both are supported."""
    language, _, library = target.partition("_")
    if language not in AVAILABLE_TARGETS:
        raise UnknownTargetError(target)

    default_library, libraries = AVAILABLE_TARGETS[language]
    if not library:
        return Target(language=language, library=default_library, title=language.capitalize())
    if library not in libraries:
        raise UnknownTargetError(target)
    return Target(language=language, library=library, title=f"{language.capitalize()} + {library.capitalize()}")
