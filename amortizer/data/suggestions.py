"""Claude API client for loan prepayment suggestions.

The schedule itself never depends on this service: every failure is turned
into a SuggestionResult carrying a message the user can read.
"""

import asyncio
import logging

import anthropic

from amortizer.config import settings
from amortizer.models.loan import LoanParameters, PaymentFrequency, as_fraction
from amortizer.models.suggestion import SuggestionResult, SuggestionStatus

logger = logging.getLogger(__name__)

MISSING_INPUT_MESSAGE = "Please fill in your salary and additional affordability to get suggestions."
ALREADY_PENDING_MESSAGE = "A suggestion request is already in progress. Please wait for it to finish."
NO_API_KEY_MESSAGE = "Suggestions are unavailable because no API key is configured."
NETWORK_ERROR_MESSAGE = (
    "Sorry, the suggestion service could not be reached. "
    "Please check your network connection and try again later."
)
STATUS_ERROR_MESSAGE = "Sorry, the suggestion service returned an error (status {status}). Please try again later."
UNEXPECTED_RESPONSE_MESSAGE = "Sorry, I could not generate suggestions. The response format was unexpected."


def _amount(value: float) -> str:
    """Render a number the way a user typed it: 3000000, 7.5."""
    number = float(value)
    if number.is_integer():
        return str(int(number))
    return str(number)


def frequency_label(payments_per_year) -> str:
    ppy = as_fraction(payments_per_year)
    for freq in PaymentFrequency:
        if freq.payments_per_year == ppy:
            return freq.label
    return f"{float(ppy):g} payments per year"


def _period_noun(payments_per_year) -> str:
    if as_fraction(payments_per_year) == 12:
        return "monthly"
    return "per-payment"


def build_prompt(
    params: LoanParameters,
    annual_salary: float,
    additional_affordability: float,
) -> str:
    """Prompt asking for a short pay-off-sooner plan for this loan."""
    lines = [
        f"- Principal: ₹{_amount(params.principal)}",
        f"- Annual Rate: {_amount(params.annual_rate_percent)}%",
        f"- Loan Term: {_amount(params.term_years)} years",
        f"- Payment Frequency: {frequency_label(params.payments_per_year)}",
        f"- User's annual salary: ₹{_amount(annual_salary)}",
        f"- User's additional {_period_noun(params.payments_per_year)} affordability: "
        f"₹{_amount(additional_affordability)}",
    ]
    if params.is_floating:
        lines.append("- Loan Type: Floating Rate")
        lines.append(
            f"- Floating Rate Change: {_amount(params.floating_rate_change_percent)}% "
            f"after {_amount(params.floating_rate_change_after_years)} years"
        )
    else:
        lines.append("- Loan Type: Fixed Rate")

    data_block = "\n".join(lines)

    return f"""Provide a simple, readable, and concise step-by-step plan for paying off a home loan sooner. Use a short, bulleted list. The plan should be based on the user's financial details and the loan terms provided. Be direct and avoid long explanations. Only include the final calculated values for the new total payment per period, the new loan term, and the reduction in the loan term.
{data_block}"""


def _extract_text(message) -> str | None:
    content = getattr(message, "content", None)
    if not content:
        return None
    text = getattr(content[0], "text", None)
    if not isinstance(text, str) or not text.strip():
        return None
    return text


class SuggestionClient:
    """Requests suggestions one at a time.

    `state` is PENDING while a request is in flight; a second call made in
    the meantime fails immediately instead of queueing.
    """

    def __init__(self, api_key: str | None = None, model: str | None = None):
        self.api_key = api_key
        self.model = model or settings.suggestion_model
        self.state = SuggestionStatus.IDLE
        self._lock = asyncio.Lock()

    @property
    def pending(self) -> bool:
        return self.state == SuggestionStatus.PENDING

    async def get_suggestions(
        self,
        params: LoanParameters,
        annual_salary: float | None,
        additional_affordability: float | None,
    ) -> SuggestionResult:
        if not annual_salary or not additional_affordability:
            return SuggestionResult.failure(MISSING_INPUT_MESSAGE)

        if self._lock.locked():
            logger.info("Suggestion request rejected: another request is pending")
            return SuggestionResult.failure(ALREADY_PENDING_MESSAGE)

        prompt = build_prompt(params, annual_salary, additional_affordability)
        async with self._lock:
            self.state = SuggestionStatus.PENDING
            result = SuggestionResult.failure(UNEXPECTED_RESPONSE_MESSAGE)
            try:
                result = await self._request(prompt)
            finally:
                self.state = result.status
        return result

    async def _request(self, prompt: str) -> SuggestionResult:
        api_key = self.api_key or settings.anthropic_api_key
        if not api_key:
            logger.debug("Anthropic API key not configured, skipping suggestions")
            return SuggestionResult.failure(NO_API_KEY_MESSAGE)

        try:
            client = anthropic.AsyncAnthropic(api_key=api_key)
            message = await client.messages.create(
                model=self.model,
                max_tokens=settings.suggestion_max_tokens,
                messages=[{"role": "user", "content": prompt}],
            )
        except anthropic.APIConnectionError as e:
            logger.warning("Suggestion service unreachable: %s", e)
            return SuggestionResult.failure(NETWORK_ERROR_MESSAGE)
        except anthropic.APIStatusError as e:
            logger.warning("Suggestion service returned status %s: %s", e.status_code, e)
            return SuggestionResult.failure(STATUS_ERROR_MESSAGE.format(status=e.status_code))
        except anthropic.APIError as e:
            logger.warning("Suggestion service response could not be read: %s", e)
            return SuggestionResult.failure(UNEXPECTED_RESPONSE_MESSAGE)
        except Exception as e:
            logger.warning("Suggestion request failed: %s", e)
            return SuggestionResult.failure(UNEXPECTED_RESPONSE_MESSAGE)

        text = _extract_text(message)
        if text is None:
            logger.warning("Suggestion response had no text content")
            return SuggestionResult.failure(UNEXPECTED_RESPONSE_MESSAGE)
        return SuggestionResult.success(text)
