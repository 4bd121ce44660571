"""Group raw catalog records by language, owner and subject."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

from .models import CatalogEntry

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class Subject:
    subject: str
    entries: list[CatalogEntry] = field(default_factory=list)

    @property
    def top_entry(self) -> Optional[CatalogEntry]:
        return self.entries[0] if self.entries else None


@dataclass(slots=True)
class Owner:
    name: str
    full_name: str = ""
    subjects: dict[str, Subject] = field(default_factory=dict)

    @property
    def display_name(self) -> str:
        return self.full_name or self.name


@dataclass(slots=True)
class Language:
    language: str
    title: str = ""
    direction: str = "ltr"
    owners: dict[str, Owner] = field(default_factory=dict)


def subject_key(subject: str) -> str:
    """Grouping key for a subject: lower-cased, without a leading ``TSV``."""
    key = subject.lower()
    if key.startswith("tsv"):
        key = key[3:].lstrip(" ")
    return key


def build_library(records: Iterable[dict[str, Any]]) -> dict[str, Language]:
    """Group catalog search records into language -> owner -> subject.

    Entries keep the order of the records, so the first record seen for a
    subject supplies its titles and synthetic links.
    """
    languages: dict[str, Language] = {}
    for record in records:
        if not isinstance(record, dict):
            logger.debug("Skipping non-object catalog record: %r", record)
            continue
        entry = CatalogEntry.from_payload(record)
        if not entry.language or not entry.owner or not entry.subject:
            logger.debug("Skipping catalog record without language/owner/subject: %s", entry.full_name)
            continue

        language = languages.get(entry.language)
        if language is None:
            language = Language(
                language=entry.language,
                title=entry.language_title,
                direction=entry.language_direction,
            )
            languages[entry.language] = language

        owner_id = entry.owner.lower()
        owner = language.owners.get(owner_id)
        if owner is None:
            owner = Owner(name=entry.owner, full_name=entry.owner_full_name)
            language.owners[owner_id] = owner

        subject_id = subject_key(entry.subject)
        subject = owner.subjects.get(subject_id)
        if subject is None:
            subject = Subject(subject=entry.subject)
            owner.subjects[subject_id] = subject
        subject.entries.append(entry)
    return languages


def sorted_languages(languages: dict[str, Language]) -> list[Language]:
    return [languages[code] for code in sorted(languages)]


def sorted_owners(language: Language) -> list[Owner]:
    return [language.owners[owner_id] for owner_id in sorted(language.owners)]


def sorted_subject_ids(owner: Owner) -> list[str]:
    """Open Bible Stories subjects first, all others alphabetically."""
    return sorted(owner.subjects, key=lambda key: (not key.startswith("open"), key))


def subject_title(entry: CatalogEntry, language_code: str) -> str:
    """Localized title of a subject, with the subject name added when it helps.

    Non-English titles that do not already spell the subject get
    ``" (<subject>)"`` appended.
    """
    title = entry.title
    subject = entry.subject

    def squash(value: str) -> str:
        return value.replace(" ", "").lower()

    if squash(title.replace("Open Bible Stories ", "OBS ")) == squash(subject):
        return title
    if language_code != "en" and squash(subject) != squash(title):
        return f"{title} ({subject})"
    return title


def language_heading(language: Language, langnames: Optional[dict[str, dict[str, Any]]] = None) -> str:
    """``"<code> / <anglicized name> / <localized name>"``.

    The anglicized part comes from a langnames table (keyed by language code,
    ``ang`` field) and is left out when missing or equal to the local title.
    """
    parts = [language.language]
    info = (langnames or {}).get(language.language) or {}
    anglicized = str(info.get("ang") or "").strip()
    if anglicized and anglicized.lower() != language.title.lower():
        parts.append(anglicized)
    parts.append(language.title)
    return " / ".join(parts)


def index_langnames(rows: Iterable[dict[str, Any]]) -> dict[str, dict[str, Any]]:
    """Index a langnames.json export by its ``lc`` language code."""
    return {row["lc"]: row for row in rows if isinstance(row, dict) and row.get("lc")}
