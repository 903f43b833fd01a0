"""
import_engine.duplicates - Existing-question lookup.

The check and the later insert are separate operations, so this is
only a reporting aid; the UNIQUE constraint on questions.question_text
is what actually prevents duplicates.
"""

from __future__ import annotations


class DuplicateChecker:

    def __init__(self, store):
        self._store = store

    def is_duplicate(self, question_text: str) -> bool:
        """True if a question with the same trimmed text is stored."""
        return self._store.find_by_text(question_text.strip()) is not None
