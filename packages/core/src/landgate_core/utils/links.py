"""Extract ``Fixes:`` and ``Refs:`` issue links from a rendered PR description.

GitHub renders ``#123`` in a PR body as a link whose target may be an issue or
a pull request, so refs are resolved through the anchors in the rendered HTML
rather than guessed from the number.
"""

from __future__ import annotations

import re
from html.parser import HTMLParser

FIXES_RE = re.compile(r"\b(?:Close[ds]?|Fix(?:e[ds])?|Resolve[sd]?)\s*:\s*(\S+)", re.IGNORECASE)
REFS_RE = re.compile(r"\bRefs?\s*:\s*(\S+)", re.IGNORECASE)

_GITHUB = "https://github.com"
_ISSUE_RE = re.compile(r"^(?:(?P<slug>[\w.-]+/[\w.-]+))?#(?P<number>\d+)$")
# Sentence punctuation that may follow a target, as in "Fixes: #10."
_TRAILING = ".,;)"


class _ParagraphCollector(HTMLParser):
    """Collects the text of every <p> and every <a> (text, href) pair."""

    def __init__(self):
        super().__init__()
        self.paragraphs: list[str] = []
        self.anchors: list[tuple[str, str]] = []
        self._p_depth = 0
        self._p_text: list[str] = []
        self._href: str | None = None
        self._a_text: list[str] = []

    def handle_starttag(self, tag, attrs):
        if tag == "p":
            if self._p_depth == 0:
                self._p_text = []
            self._p_depth += 1
        elif tag == "a":
            self._href = dict(attrs).get("href") or ""
            self._a_text = []
        elif tag == "br" and self._p_depth:
            self._p_text.append("\n")

    def handle_endtag(self, tag):
        if tag == "p" and self._p_depth:
            self._p_depth -= 1
            if self._p_depth == 0:
                self.paragraphs.append("".join(self._p_text))
        elif tag == "a" and self._href is not None:
            self.anchors.append(("".join(self._a_text).strip(), self._href))
            self._href = None

    def handle_data(self, data):
        if self._p_depth:
            self._p_text.append(data)
        if self._href is not None:
            self._a_text.append(data)


def _dedupe(items: list[str]) -> list[str]:
    return list(dict.fromkeys(items))


class LinkParser:
    def __init__(self, repo: str, html: str):
        self.repo = repo
        collector = _ParagraphCollector()
        collector.feed(html or "")
        collector.close()
        self.paragraphs = collector.paragraphs
        self.anchors = collector.anchors
        self.fixes = self._collect(FIXES_RE, self._fix_url)
        self.refs = self._collect(REFS_RE, self._ref_url)

    def _collect(self, pattern: re.Pattern, resolve) -> list[str]:
        urls = []
        for paragraph in self.paragraphs:
            for target in pattern.findall(paragraph):
                url = resolve(target.rstrip(_TRAILING))
                if url:
                    urls.append(url)
        return urls

    def _fix_url(self, target: str) -> str | None:
        if target.startswith(("http://", "https://")):
            return target
        m = _ISSUE_RE.match(target)
        if not m:
            return None
        slug = m.group("slug") or self.repo
        return f"{_GITHUB}/{slug}/issues/{m.group('number')}"

    def _ref_url(self, target: str) -> str | None:
        for text, href in self.anchors:
            if target in (text, href):
                return href
        if target.startswith(("http://", "https://")):
            return target
        return None

    def get_fixes(self) -> list[str]:
        return _dedupe(self.fixes)

    def get_refs(self) -> list[str]:
        return _dedupe(self.refs)
