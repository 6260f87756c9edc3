"""Naming utilities for branch names.

Pure functions (no I/O) that turn free text into git ref names and decide
whether an argument already looks like one.
"""

import re

# Maximum length of a generated branch name
MAX_BRANCH_NAME_LENGTH = 40

_NON_ALNUM_RUN = re.compile(r"[^a-z0-9]+")
_REF_SHAPED = re.compile(r"[a-z0-9/-]+")


def encode_branch_name(text: str) -> str:
    """Encode free text as a branch name.

    Lowercases, collapses every run of characters outside [a-z0-9] into a single
    hyphen, strips hyphens from both ends and truncates to
    MAX_BRANCH_NAME_LENGTH characters (stripping a hyphen exposed by the cut).

    Returns an empty string when the text has no ASCII letters or digits.

    Examples:
        >>> encode_branch_name("Fix User Login Bug!!")
        'fix-user-login-bug'
        >>> encode_branch_name("  Add: OAuth / SSO support ")
        'add-oauth-sso-support'
        >>> encode_branch_name("🚀🎉")
        ''
    """
    encoded = _NON_ALNUM_RUN.sub("-", text.lower()).strip("-")
    return encoded[:MAX_BRANCH_NAME_LENGTH].rstrip("-")


def looks_like_branch_name(arg: str) -> bool:
    """Check whether an argument is shaped like a branch name.

    Branch-shaped means: only lowercase ASCII letters, digits, hyphens and
    slashes, at most MAX_BRANCH_NAME_LENGTH characters. Anything with
    whitespace, uppercase or punctuation reads as a title instead.

    Examples:
        >>> looks_like_branch_name("feature/login")
        True
        >>> looks_like_branch_name("Fix login bug")
        False
    """
    if len(arg) > MAX_BRANCH_NAME_LENGTH:
        return False
    return _REF_SHAPED.fullmatch(arg) is not None
