"""
Accessibility validation and repair for generated wireframes.

Regex-based, like the rest of the markup tooling: low-contrast placeholder
text colors, missing landmark roles, missing document language and images
without alt text.
"""

import re
from dataclasses import dataclass, field

# Low-contrast text colors and their accessible replacements
LOW_CONTRAST_TEXT = {
    "#808080": "#595959",
    "#999999": "#595959",
    "#999": "#595959",
    "#aaaaaa": "#595959",
    "#aaa": "#595959",
    "lightgray": "#595959",
    "lightgrey": "#595959",
}

_TEXT_COLOR = re.compile(
    r"(?<![-\w])(color\s*:\s*)(" + "|".join(
        re.escape(c) for c in sorted(LOW_CONTRAST_TEXT, key=len, reverse=True)
    ) + r")(?![\w-])",
    re.IGNORECASE,
)
_IMG_NO_ALT = re.compile(r"<img\b(?![^>]*\balt\s*=)([^>]*?)(/?)>", re.IGNORECASE)
_HTML_NO_LANG = re.compile(r"<html\b(?![^>]*\blang\s*=)([^>]*)>", re.IGNORECASE)
_NAV_NO_ROLE = re.compile(r"<nav\b(?![^>]*\brole\s*=)", re.IGNORECASE)
_MAIN_NO_ROLE = re.compile(r"<main\b(?![^>]*\brole\s*=)", re.IGNORECASE)


@dataclass
class AccessibilityIssue:
    type: str
    message: str
    count: int = 1


@dataclass
class AccessibilityReport:
    is_valid: bool
    issues: list[AccessibilityIssue] = field(default_factory=list)
    fixed_html: str | None = None
    applied_fixes: list[str] = field(default_factory=list)

    def summary(self) -> dict:
        return {
            "isValid": self.is_valid,
            "issues": [{"type": i.type, "message": i.message, "count": i.count} for i in self.issues],
        }


class AccessibilityValidator:
    def validate(self, html: str) -> list[AccessibilityIssue]:
        issues = []
        checks = (
            (_TEXT_COLOR, "poor-contrast", "Low-contrast text color"),
            (_IMG_NO_ALT, "missing-alt", "Image without alt attribute"),
            (_HTML_NO_LANG, "missing-lang", "Document language not declared"),
            (_NAV_NO_ROLE, "missing-landmark", "<nav> without role"),
            (_MAIN_NO_ROLE, "missing-landmark", "<main> without role"),
        )
        for pattern, kind, message in checks:
            found = len(pattern.findall(html))
            if found:
                issues.append(AccessibilityIssue(kind, message, found))
        return issues

    def fix(self, html: str) -> tuple[str, list[str]]:
        applied = []

        def apply(pattern, replacement, label):
            nonlocal html
            html, n = pattern.subn(replacement, html)
            if n:
                applied.append(f"{label} ({n})")

        apply(
            _TEXT_COLOR,
            lambda m: m.group(1) + LOW_CONTRAST_TEXT[m.group(2).lower()],
            "Raised low-contrast text colors",
        )
        apply(_IMG_NO_ALT, r'<img alt=""\1\2>', "Added empty alt to images")
        apply(_HTML_NO_LANG, r'<html lang="en"\1>', "Declared document language")
        apply(_NAV_NO_ROLE, '<nav role="navigation"', "Added navigation landmark role")
        apply(_MAIN_NO_ROLE, '<main role="main"', "Added main landmark role")
        return html, applied

    def validate_and_fix(self, html: str) -> AccessibilityReport:
        issues = self.validate(html)
        if not issues:
            return AccessibilityReport(is_valid=True)

        print(f"  [a11y] {sum(i.count for i in issues)} accessibility issues detected")
        fixed, applied = self.fix(html)
        remaining = self.validate(fixed)
        if remaining:
            print(f"  [a11y] Some issues remain: {[i.type for i in remaining]}")
        return AccessibilityReport(
            is_valid=not remaining,
            issues=issues,
            fixed_html=fixed,
            applied_fixes=applied,
        )
