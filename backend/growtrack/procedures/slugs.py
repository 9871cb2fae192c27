"""Slug derivation and the time-suffix collision policy for genetics."""
import logging
import re
import time
import unicodedata
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from growtrack.models import Genetic

logger = logging.getLogger("growtrack.slugs")

SLUG_CONSTRAINT = "uq_genetic_slug"

_NON_WORD = re.compile(r"[^\w\s-]")
_SEPARATORS = re.compile(r"[\s_-]+")


def slugify(value: str) -> str:
    """Lowercase ASCII, words joined by single hyphens."""
    normalized = unicodedata.normalize("NFKD", value).encode("ascii", "ignore").decode("ascii")
    cleaned = _NON_WORD.sub("", normalized.lower()).strip()
    return _SEPARATORS.sub("-", cleaned).strip("-")


def time_suffix(attempt: int = 0) -> str:
    """Last four digits of the millisecond clock, shifted by retry attempt."""
    millis = int(time.time() * 1000)
    return f"{(millis + attempt) % 10000:04d}"


def slug_taken(db: Session, slug: str, exclude_id: Optional[int] = None) -> bool:
    query = db.query(Genetic.id).filter(Genetic.slug == slug)
    if exclude_id is not None:
        query = query.filter(Genetic.id != exclude_id)
    return query.first() is not None


def unique_slug(db: Session, name: str, exclude_id: Optional[int] = None, attempt: int = 0) -> str:
    """Return the slug for ``name``, suffixed when another genetic owns it.

    ``attempt`` > 0 always suffixes; it is used after the unique constraint
    rejected an earlier candidate.
    """
    base = slugify(name) or "genetic"
    if attempt == 0 and not slug_taken(db, base, exclude_id):
        return base
    candidate = f"{base}-{time_suffix(attempt)}"
    logger.info("Slug %r taken, using %r", base, candidate)
    return candidate


def is_slug_violation(exc: IntegrityError) -> bool:
    message = str(exc.orig) if exc.orig is not None else str(exc)
    return SLUG_CONSTRAINT in message or "genetic.slug" in message
