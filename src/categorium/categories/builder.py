"""Manual category construction from user-entered search terms."""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from .matcher import filter_blank_terms
from .models import CategorySpec

LOGGER = logging.getLogger(__name__)


def build_manual_category(
    name: str,
    icon: str,
    color: str,
    search_terms: Iterable[str],
) -> Optional[CategorySpec]:
    """Build a category spec from a name, icon, colour, and search terms.

    Blank search terms are dropped; the remaining terms become text rules in
    their original order. The spec's ``count`` is left unset so the engine
    computes it against the registry.

    Args:
        name: Category name; a blank name means nothing is built.
        icon: Symbolic icon name.
        color: Hex colour.
        search_terms: Terms entered by the user, possibly blank.

    Returns:
        Optional[CategorySpec]: The spec, or None when ``name`` is blank.
    """
    if not name or not name.strip():
        LOGGER.debug("Ignoring manual category with a blank name.")
        return None

    terms = filter_blank_terms(search_terms)
    return CategorySpec(name=name, icon=icon, color=color, rules=terms)


__all__ = ["build_manual_category"]
