"""Credential pattern catalogs.

The catalogs are plain immutable data handed to ``CredentialAnalyzer`` at
construction, so they can be:

1. Tested independently (coverage of real variable names, false positives).
2. Replaced in tests or by callers without touching module state.

Names are matched, never values: a value is only inspected to decide
whether it is a variable-substitution placeholder such as
``${input:github_token}``, which points at an external secret store.
"""

from __future__ import annotations

import re
from dataclasses import dataclass


@dataclass(frozen=True)
class CredentialPatterns:
    """Pattern set used to classify names.

    Attributes:
        broad: Secret-bearing names (keys, tokens, passwords, ...). A match
            is a ``HIGH`` risk finding.
        low_risk: Identifier names (organization, account, user ids). A
            match that misses ``broad`` is a ``LOW`` risk finding.
        substitution: Shape of a value that is a single placeholder.
        flag_prefix: Prefix that marks an argument token as a flag.
    """

    broad: tuple[re.Pattern[str], ...]
    low_risk: tuple[re.Pattern[str], ...]
    substitution: re.Pattern[str]
    flag_prefix: str = "-"


# ---------------------------------------------------------------------------
# Broad secret patterns
# ---------------------------------------------------------------------------

_BROAD_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"key", re.IGNORECASE),
    re.compile(r"token", re.IGNORECASE),
    re.compile(r"password|passwd|pwd", re.IGNORECASE),
    re.compile(r"secret", re.IGNORECASE),
    re.compile(r"credential|creds", re.IGNORECASE),
    # AUTH_TOKEN, OAUTH_CLIENT, Authorization; not AUTHOR_NAME
    re.compile(r"authoriz|auth(?!or)", re.IGNORECASE),
)

# ---------------------------------------------------------------------------
# Identifier patterns (low risk)
# ---------------------------------------------------------------------------

_LOW_RISK_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"org[_-]?id", re.IGNORECASE),
    re.compile(r"organization[_-]?id", re.IGNORECASE),
    re.compile(r"account[_-]?id", re.IGNORECASE),
    re.compile(r"user[_-]?id", re.IGNORECASE),
)

# ``${input:name}``, ``${env:NAME}``, ``${config:token}``
_SUBSTITUTION_PATTERN: re.Pattern[str] = re.compile(r"^\$\{[^{}]+\}$")


DEFAULT_CREDENTIAL_PATTERNS = CredentialPatterns(
    broad=_BROAD_PATTERNS,
    low_risk=_LOW_RISK_PATTERNS,
    substitution=_SUBSTITUTION_PATTERN,
)
