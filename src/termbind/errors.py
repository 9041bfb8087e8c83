from __future__ import annotations


class TermbindError(Exception):
    """Base class for all termbind errors."""


class ParseError(TermbindError, ValueError):
    """A trigger text could not be parsed into an input pattern."""

    def __init__(self, message: str, *, text: str) -> None:
        super().__init__(message)
        self.text = text


class UnknownNameError(ParseError):
    pass


class InvalidHexError(ParseError):
    pass


class MultiCharTokenError(ParseError):
    pass


class EmptyPatternError(ParseError):
    pass


class DuplicateModifierError(ParseError):
    pass


class BuildError(TermbindError):
    """A binding configuration could not be turned into contexts."""


class InvalidConfigError(BuildError):
    pass


class InvalidTriggerError(BuildError):
    def __init__(self, context: str, text: str, cause: ParseError) -> None:
        super().__init__(f"invalid trigger {text!r} in context {context!r}: {cause}")
        self.context = context
        self.text = text
        self.cause = cause


class UndefinedContextError(BuildError):
    def __init__(self, name: str, *, where: str) -> None:
        super().__init__(f"undefined context {name!r} ({where})")
        self.name = name


class RegistryError(TermbindError):
    """Misuse of the active context stack."""


class UnknownContextError(RegistryError, KeyError):
    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"unknown context: {self.name!r}"


class EmptyStackError(RegistryError):
    pass
