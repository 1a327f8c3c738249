"""Parse dependency declarations from SKILL.md frontmatter.

Only a narrow frontmatter dialect is understood::

    ---
    name: my-flavor
    dependencies:
      clawhub:
        - slug: everclaw-inference
          version: ">=0.9.0"
          aliases: [inference, everclaw]
        - slug: three-shifts
          required: false
      github:
        - repo: profbernardoj/everclaw
          path: skills/pii-guard
    ---

List items must be introduced by four spaces and a dash. Every ``key: value``
line inside an item becomes a flat field of that item, however deeply it is
indented. Malformed input yields an empty manifest rather than an error.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable, Optional

from skill_deps.constants import SKILL_FILENAME
from skill_deps.errors import ManifestNotFoundError, SkillDepsFileError
from skill_deps.manifest.models import ClawHubDependency, GitHubDependency, SkillManifest
from skill_deps.utils import strip_quotes

_FRONTMATTER_RE = re.compile(r"^---\n(.*?)\n---", re.DOTALL)
_NAME_RE = re.compile(r"^name:[ \t]*(.+)$", re.MULTILINE)
_TOP_LEVEL_KEY_RE = re.compile(r"\n[a-z][a-z_-]*:\s")
_LIST_ITEM_RE = re.compile(r"(?:^|\n)\s{4}-\s")
_FIELD_RE = re.compile(r"^\s*(\w+):\s*(.+?)\s*$")
_ALIAS_STRIP_RE = re.compile(r"[\[\]\"' ]")

_DEPENDENCIES_KEY = "dependencies:"
_CLAWHUB_KEY = "clawhub:"
_GITHUB_KEY = "github:"


def parse_manifest(text: str) -> SkillManifest:
    match = _FRONTMATTER_RE.match(text.replace("\r\n", "\n"))
    if not match:
        return SkillManifest()

    header = match.group(1)
    name = _parse_name(header)

    block = _dependencies_block(header)
    if block is None:
        return SkillManifest(name=name)

    clawhub_idx = block.find(_CLAWHUB_KEY)
    github_idx = block.find(_GITHUB_KEY)

    clawhub: list[ClawHubDependency] = []
    for item in _parse_items(_section(block, clawhub_idx, github_idx)):
        dependency = _clawhub_dependency(item)
        if dependency is not None:
            clawhub.append(dependency)

    github: list[GitHubDependency] = []
    for item in _parse_items(_section(block, github_idx, clawhub_idx)):
        dependency = _github_dependency(item)
        if dependency is not None:
            github.append(dependency)

    return SkillManifest(name=name, clawhub=tuple(clawhub), github=tuple(github))


def load_manifest(path: Path) -> SkillManifest:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise SkillDepsFileError(path, f"Unable to read manifest ({exc})") from exc
    return parse_manifest(text)


def find_manifest(search_paths: Iterable[Optional[Path]]) -> Path:
    searched: list[Path] = []
    for directory in search_paths:
        if directory is None:
            continue
        searched.append(directory)
        candidate = directory / SKILL_FILENAME
        if candidate.is_file():
            return candidate
    raise ManifestNotFoundError(searched)


def _parse_name(header: str) -> str:
    match = _NAME_RE.search(header)
    if not match:
        return ""
    return strip_quotes(match.group(1).strip())


def _dependencies_block(header: str) -> Optional[str]:
    idx = header.find(f"\n{_DEPENDENCIES_KEY}")
    if idx != -1:
        start = idx + 1
    elif header.startswith(_DEPENDENCIES_KEY):
        start = 0
    else:
        return None

    after = header[start:]
    next_key = _TOP_LEVEL_KEY_RE.search(after)
    return after[: next_key.start()] if next_key else after


def _section(block: str, own_idx: int, other_idx: int) -> str:
    if own_idx == -1:
        return ""
    newline = block.find("\n", own_idx)
    start = newline + 1 if newline != -1 else len(block)
    end = other_idx if other_idx > own_idx else len(block)
    return block[start:end]


def _parse_items(section: str) -> list[dict[str, str]]:
    items: list[dict[str, str]] = []
    for fragment in _LIST_ITEM_RE.split(section):
        if not fragment.strip():
            continue
        item: dict[str, str] = {}
        for line in fragment.split("\n"):
            field = _FIELD_RE.match(line)
            if field:
                item[field.group(1)] = strip_quotes(field.group(2))
        if item:
            items.append(item)
    return items


def _is_required(item: dict[str, str]) -> bool:
    # Only the literal "false" opts out; "False", "no" or "" stay required.
    return item.get("required") != "false"


def _parse_aliases(raw: str) -> tuple[str, ...]:
    return tuple(alias for alias in _ALIAS_STRIP_RE.sub("", raw).split(",") if alias)


def _clawhub_dependency(item: dict[str, str]) -> Optional[ClawHubDependency]:
    slug = item.get("slug", "")
    if not slug:
        return None
    return ClawHubDependency(
        slug=slug,
        aliases=_parse_aliases(item.get("aliases", "")),
        version=item.get("version") or None,
        required=_is_required(item),
        description=item.get("description", ""),
    )


def _github_dependency(item: dict[str, str]) -> Optional[GitHubDependency]:
    repo = item.get("repo", "")
    if not repo:
        return None
    return GitHubDependency(
        repo=repo,
        path=item.get("path", ""),
        required=_is_required(item),
        description=item.get("description", ""),
    )
