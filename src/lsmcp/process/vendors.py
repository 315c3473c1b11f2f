"""Attribution of a server process to the application that launched it.

The parent process of a stdio MCP server is normally the client that
spawned it. Its command line is tested against ``VendorRule`` needles in
order; the first hit names the vendor and product.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass


@dataclass(frozen=True)
class VendorRule:
    """A case-insensitive substring that identifies one client application.

    Attributes:
        needle: Text searched for in the parent command line.
        vendor: Company publishing the client.
        product: Client product name.
    """

    needle: str
    vendor: str
    product: str


# Order matters: more specific needles come before generic ones
# (``Claude.app`` before ``claude``, ``Cursor`` before ``Code``).
DEFAULT_VENDOR_RULES: tuple[VendorRule, ...] = (
    VendorRule("Claude.app", "Anthropic", "Claude Desktop"),
    VendorRule("AnthropicClaude", "Anthropic", "Claude Desktop"),
    VendorRule("Claude Helper", "Anthropic", "Claude Desktop"),
    VendorRule("claude-code", "Anthropic", "Claude Code"),
    VendorRule("claude", "Anthropic", "Claude Code"),
    VendorRule("Cursor", "Anysphere", "Cursor"),
    VendorRule("Windsurf", "Codeium", "Windsurf"),
    VendorRule("Visual Studio Code", "Microsoft", "VS Code"),
    VendorRule("Code Helper", "Microsoft", "VS Code"),
    VendorRule("Code.exe", "Microsoft", "VS Code"),
    VendorRule("/code", "Microsoft", "VS Code"),
    VendorRule("Zed.app", "Zed Industries", "Zed"),
    VendorRule("zed-editor", "Zed Industries", "Zed"),
    VendorRule("/zed", "Zed Industries", "Zed"),
    VendorRule("gemini-cli", "Google", "Gemini CLI"),
    VendorRule("/gemini", "Google", "Gemini CLI"),
    VendorRule("IntelliJ IDEA", "JetBrains", "IntelliJ IDEA"),
    VendorRule("idea64", "JetBrains", "IntelliJ IDEA"),
)


def estimate_vendor(
    command_line: str | None,
    rules: Sequence[VendorRule] = DEFAULT_VENDOR_RULES,
) -> VendorRule | None:
    """Return the first rule whose needle occurs in ``command_line``."""
    if not command_line:
        return None
    haystack = command_line.lower()
    for rule in rules:
        if rule.needle.lower() in haystack:
            return rule
    return None
