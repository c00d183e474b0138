from .formats import AbsoluteUrlRule, IsoDateTimeRule, LanguageTagRule, SlugRule
from .social import ChoiceRule, OgImageRule, RecommendedValueRule
from .structured import JsonLdRule
from .text import KeywordsRule, LengthRule, UniqueTitleRule

__all__ = [
    "AbsoluteUrlRule",
    "ChoiceRule",
    "IsoDateTimeRule",
    "JsonLdRule",
    "KeywordsRule",
    "LanguageTagRule",
    "LengthRule",
    "OgImageRule",
    "RecommendedValueRule",
    "SlugRule",
    "UniqueTitleRule",
]
