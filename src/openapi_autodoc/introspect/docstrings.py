"""Docstring parsing for handler summaries and declared errors.

Supports Google style sections (``Raises:``) and Sphinx ``:raises X:``
fields.
"""

import inspect
import re

from pydantic import BaseModel

SECTION_RE = re.compile(
    r"^(Args|Arguments|Parameters|Returns|Return|Yields|Raises|Note|Notes|Example|Examples):\s*$"
)
SPHINX_RAISES_RE = re.compile(r"^:raises?\s+([\w.]+)\s*:", re.MULTILINE)
RAISES_ITEM_RE = re.compile(r"^([A-Za-z_][\w.]*)\s*(?::|$)")


class Docstring(BaseModel):
    summary: str = ""
    description: str = ""
    raises: list[str] = []


def parse_docstring(text: str | None) -> Docstring:
    if not text:
        return Docstring()
    text = inspect.cleandoc(text)
    lines = text.splitlines()

    head: list[str] = []
    sections: dict[str, list[str]] = {}
    current = None
    for line in lines:
        match = SECTION_RE.match(line.strip())
        if match and not line.startswith((" ", "\t")):
            current = match.group(1)
            sections.setdefault(current, [])
        elif current is None:
            head.append(line)
        else:
            sections[current].append(line)

    head_text = "\n".join(l for l in head if not l.lstrip().startswith(":")).strip()
    paragraphs = re.split(r"\n\s*\n", head_text) if head_text else []
    summary = " ".join(paragraphs[0].split()) if paragraphs else ""
    description = "\n\n".join(p.strip() for p in paragraphs[1:])

    raises = _raises_from_section(sections.get("Raises", []))
    raises.extend(name for name in SPHINX_RAISES_RE.findall(text) if name not in raises)
    return Docstring(summary=summary, description=description, raises=raises)


def _raises_from_section(lines: list[str]) -> list[str]:
    names: list[str] = []
    if not lines:
        return names
    indents = [len(l) - len(l.lstrip()) for l in lines if l.strip()]
    base = min(indents) if indents else 0
    for line in lines:
        if not line.strip() or len(line) - len(line.lstrip()) > base:
            continue  # continuation of the previous entry
        match = RAISES_ITEM_RE.match(line.strip())
        if match and match.group(1) not in names:
            names.append(match.group(1))
    return names
