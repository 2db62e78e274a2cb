# =============================================
# File: oborobot/errors.py
# Purpose: Typed failures of the suggestion pipeline
# =============================================
from __future__ import annotations

APOLOGY = "ごめんなさい｡対応できないかも..."


class SuggestionError(Exception):
    """Base class for every failure raised by the suggestion pipeline."""

    code = "suggestion_error"
    status_code = 500
    user_facing = False

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message())

    @classmethod
    def default_message(cls) -> str:
        return APOLOGY if cls.user_facing else "Internal error."

    @property
    def message(self) -> str:
        return str(self)


class NoMatchError(SuggestionError):
    """No vocabulary term matched any token of the phrase."""

    code = "no_match"
    status_code = 404
    user_facing = True


class EmptyKeywordPoolError(SuggestionError):
    """The matched resources carry no eligible (non-Verb, non-input) terms."""

    code = "empty_keyword_pool"
    status_code = 404
    user_facing = True


class NoQuestionMatchError(SuggestionError):
    """The sampled keywords matched no question in the bank."""

    code = "no_question_match"
    status_code = 404
    user_facing = True


class StoreUnavailableError(SuggestionError):
    """A backing store timed out or could not be reached."""

    code = "store_unavailable"
    status_code = 503

    @classmethod
    def default_message(cls) -> str:
        return "Store unavailable."
