"""Exceptions raised by the scaffolding core."""


class ScaffoldError(Exception):
    """Base class for podscaffold errors."""


class PromptAborted(ScaffoldError):
    """Input ended while a question was waiting for an answer."""


class UnknownVariantError(ScaffoldError, LookupError):
    """A variant has no entry in the declarations table."""
