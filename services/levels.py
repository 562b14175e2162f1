# services/levels.py

from typing import List

from pydantic import ValidationError

from models.levels import LevelBreak, ParsedResults, Quote
from services.finnhub import UpstreamError


# ---------------------------------------------------------
# PARSING
# ---------------------------------------------------------

def parse_results(symbol: str, quote_data, levels_data) -> ParsedResults:
    """
    Merges the raw quote and support/resistance payloads for one symbol.
    Raises UpstreamError if either payload doesn't have the expected shape.
    """

    if not isinstance(quote_data, dict) or not isinstance(levels_data, dict):
        raise UpstreamError(symbol, "Unexpected Finnhub payload")

    try:
        return ParsedResults(
            quote=Quote(**quote_data),
            support_resistance=levels_data["levels"],
        )
    except (KeyError, TypeError, ValidationError) as e:
        raise UpstreamError(symbol, f"Malformed Finnhub payload: {e}") from e


# ---------------------------------------------------------
# LEVEL BREAKS
# ---------------------------------------------------------

def _check_level(quote: Quote, level: float) -> LevelBreak:
    # Price moved up through the level
    if quote.o <= level and quote.h >= level:
        return LevelBreak(
            broke=True,
            resistance=level,
            closed_broken=quote.c >= level,
        )

    # Price moved down through the level
    if quote.o >= level and quote.l <= level:
        return LevelBreak(
            broke=True,
            support=level,
            closed_broken=quote.c <= level,
        )

    return LevelBreak(broke=False)


def determine_level_breaks(results: ParsedResults) -> List[LevelBreak]:
    """
    Returns the levels the day's quote broke, in the order the levels were given.
    """
    checked = [_check_level(results.quote, level) for level in results.support_resistance]
    return [b for b in checked if b.broke]
