"""Grammar parser exceptions."""


class GrammarError(ValueError):
    """A value does not decompose under its grammar."""
