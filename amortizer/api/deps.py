"""FastAPI dependency injection."""

from amortizer.data.suggestions import SuggestionClient

# Shared so that only one suggestion request runs at a time
_suggestion_client = SuggestionClient()


def get_suggestion_client() -> SuggestionClient:
    return _suggestion_client
