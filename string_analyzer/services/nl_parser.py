"""
Heuristic natural language query parser.

Maps free text such as "all single word palindromic strings" onto a
StringFilters predicate. This is a fixed set of pattern rules, not a grammar:
each rule looks at the lowercased query on its own and reports the filter
fields it recognised. Rules target disjoint fields, and a value found by an
earlier rule is never replaced by a later one.

Examples:
- "all single word palindromic strings" -> {word_count: 1, is_palindrome: true}
- "strings longer than 10 characters"   -> {min_length: 11}
- "strings shorter than 5 characters"   -> {max_length: 4}
- "strings containing the letter z"     -> {contains_character: "z"}
"""
import logging
import re
from dataclasses import dataclass
from functools import reduce
from types import MappingProxyType
from typing import Callable, Dict, Mapping, Optional, Tuple

from string_analyzer.services.filters import StringFilters

logger = logging.getLogger(__name__)

SINGLE_WORD_PATTERN = re.compile(r"\bsingle word\b|\bone[- ]word\b")
LONGER_THAN_PATTERN = re.compile(r"longer than (\d+)")
SHORTER_THAN_PATTERN = re.compile(r"shorter than (\d+)")
CONTAINS_PATTERN = re.compile(
    r"(?:"
    r"(?:that\s+contain|containing|contains|contain)(?:\s+(?:the\s+)?(?:letter|character))?"
    r"|with\s+(?:the\s+)?(?:letter|character)"
    r")"
    r"\s+([a-z0-9])\b"
)

Rule = Callable[[str], Dict]


@dataclass(frozen=True)
class ParsedQuery:
    """Result of a successful parse: the query as given plus derived filters"""

    original: str
    filters: StringFilters

    @property
    def parsed_filters(self) -> Dict:
        return self.filters.as_dict()


def palindrome_rule(query: str) -> Dict:
    if "palind" in query:
        return {"is_palindrome": True}
    return {}


def single_word_rule(query: str) -> Dict:
    if SINGLE_WORD_PATTERN.search(query):
        return {"word_count": 1}
    return {}


def longer_than_rule(query: str) -> Dict:
    # Strictly longer than N characters
    match = LONGER_THAN_PATTERN.search(query)
    if match:
        return {"min_length": int(match.group(1)) + 1}
    return {}


def shorter_than_rule(query: str) -> Dict:
    # Strictly shorter than N characters
    match = SHORTER_THAN_PATTERN.search(query)
    if match:
        return {"max_length": int(match.group(1)) - 1}
    return {}


def contains_character_rule(query: str) -> Dict:
    # First connector phrase only
    match = CONTAINS_PATTERN.search(query)
    if match:
        return {"contains_character": match.group(1)}
    return {}


RULES: Tuple[Rule, ...] = (
    palindrome_rule,
    single_word_rule,
    longer_than_rule,
    shorter_than_rule,
    contains_character_rule,
)


def _merge(accumulated: Mapping, found: Dict) -> Mapping:
    return MappingProxyType({**found, **accumulated})


def extract_filters(normalized_query: str) -> Mapping:
    """Run every rule over an already lowercased query and fold the results"""
    return reduce(_merge, (rule(normalized_query) for rule in RULES), MappingProxyType({}))


def parse_natural_language_query(query: Optional[str]) -> Optional[ParsedQuery]:
    """
    Parse natural language query into filter parameters.

    Returns None when the query is blank or no rule fires. Whether the
    resulting length range is satisfiable is left to the caller.
    """
    if query is None or not query.strip():
        return None

    extracted = extract_filters(query.strip().lower())
    if not extracted:
        logger.info(f"No filter rule matched query: {query!r}")
        return None

    parsed = ParsedQuery(original=query, filters=StringFilters(**extracted))
    logger.info(f"Parsed query {query!r} into {parsed.parsed_filters}")
    return parsed
