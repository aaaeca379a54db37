"""
Keyword-based categorization for new volunteering opportunities.

Scores the free text of an opportunity against per-category keyword lists and
suggests a primary category, up to two secondary ones and a handful of tags.
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Set

import nltk
from nltk.corpus import stopwords
from nltk.tokenize import wordpunct_tokenize

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY_ID = "4"  # Assistência Social
NO_MATCH_CONFIDENCE = 0.1

CATEGORY_NAMES: Dict[str, str] = {
    "1": "Educação",
    "2": "Saúde",
    "3": "Meio Ambiente",
    "4": "Assistência Social",
    "5": "Cultura",
    "6": "Esporte",
    "7": "Tecnologia",
    "8": "Proteção Animal",
    "9": "Idosos",
    "10": "Crianças e Adolescentes",
}

CATEGORY_KEYWORDS: Dict[str, List[str]] = {
    "1": [
        "educação",
        "ensino",
        "escola",
        "aula",
        "professor",
        "estudante",
        "aprender",
        "conhecimento",
    ],
    "2": ["saúde", "médico", "hospital", "cuidado", "tratamento", "doença", "bem-estar"],
    "3": [
        "meio ambiente",
        "natureza",
        "sustentabilidade",
        "ecologia",
        "verde",
        "reciclagem",
    ],
    "4": [
        "assistência social",
        "vulnerabilidade",
        "pobreza",
        "ajuda",
        "apoio",
        "comunidade",
    ],
    "5": ["cultura", "arte", "música", "teatro", "dança", "patrimônio", "história"],
    "6": ["esporte", "futebol", "atividade física", "exercício", "competição"],
    "7": [
        "tecnologia",
        "computador",
        "programação",
        "software",
        "digital",
        "internet",
    ],
    "8": ["animal", "pet", "cachorro", "gato", "proteção animal", "veterinário"],
    "9": ["idoso", "terceira idade", "idosos", "envelhecimento"],
    "10": ["criança", "crianças", "infantil", "jovem", "adolescente"],
}

STOP_WORDS_LANGUAGE = "portuguese"
# Added to the nltk list: common prepositions it lacks and words every listing uses
DOMAIN_STOP_WORDS = {
    "sobre",
    "através",
    "cada",
    "voluntário",
    "voluntária",
    "voluntários",
    "voluntariado",
    "oportunidade",
    "projeto",
}
MIN_TAG_LENGTH = 4
MAX_TAGS = 5
MAX_SECONDARY = 2


def load_stop_words(language: str = STOP_WORDS_LANGUAGE) -> Set[str]:
    """nltk stop words for `language`, downloading the corpus on first use."""
    try:
        nltk.data.find("corpora/stopwords")
    except LookupError:
        logger.info("Downloading nltk stopwords corpus")
        nltk.download("stopwords", quiet=True)
    return set(stopwords.words(language))


@dataclass
class CategorySuggestion:
    """Suggested categories and tags for one opportunity."""

    primary_category_id: str
    secondary_category_ids: List[str] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)
    confidence: float = NO_MATCH_CONFIDENCE

    @property
    def primary_category_name(self) -> Optional[str]:
        return CATEGORY_NAMES.get(self.primary_category_id)

    def to_dict(self) -> Dict:
        return {
            "primary_category_id": self.primary_category_id,
            "primary_category_name": self.primary_category_name,
            "secondary_category_ids": list(self.secondary_category_ids),
            "tags": list(self.tags),
            "confidence": self.confidence,
        }


class OpportunityCategorizer:
    """
    Suggests categories for an opportunity from its title, description and
    required skills.

    Each keyword found in the lower-cased text adds one point to its
    category. Confidence is the best score divided by `confidence_scale`.
    """

    def __init__(
        self,
        keywords: Optional[Dict[str, List[str]]] = None,
        confidence_scale: float = 10.0,
        extra_stop_words: Optional[Iterable[str]] = None,
    ):
        self.keywords = keywords or CATEGORY_KEYWORDS
        self.confidence_scale = confidence_scale

        self.stop_words = load_stop_words()
        self.stop_words.update(DOMAIN_STOP_WORDS)
        self.stop_words.update(word.lower() for word in (extra_stop_words or []))

    def categorize(
        self,
        title: str,
        description: str = "",
        required_skills: Optional[Sequence[str]] = None,
    ) -> CategorySuggestion:
        """
        Categorize an opportunity.

        Args:
            title: Opportunity title
            description: Free-text description
            required_skills: Skill names required by the opportunity

        Returns:
            CategorySuggestion; when no keyword matches, the primary category
            falls back to Assistência Social with confidence 0.1
        """
        text = " ".join(
            [title or "", description or "", " ".join(required_skills or [])]
        ).lower()

        scores = self.score_categories(text)
        ranked = sorted(scores.items(), key=lambda entry: entry[1], reverse=True)

        if ranked:
            primary_id, top_score = ranked[0]
            confidence = top_score / self.confidence_scale
        else:
            primary_id, confidence = DEFAULT_CATEGORY_ID, NO_MATCH_CONFIDENCE
            logger.debug(f"No category keywords matched for {title!r}")

        return CategorySuggestion(
            primary_category_id=primary_id,
            secondary_category_ids=[
                category_id for category_id, _ in ranked[1 : 1 + MAX_SECONDARY]
            ],
            tags=self.extract_tags(text),
            confidence=confidence,
        )

    def score_categories(self, text: str) -> Dict[str, int]:
        """Keyword hit counts per category, only categories with hits."""
        scores = {}
        for category_id, words in self.keywords.items():
            score = sum(1 for word in words if word in text)
            if score > 0:
                scores[category_id] = score
        return scores

    def extract_tags(self, text: str, max_tags: int = MAX_TAGS) -> List[str]:
        """Most frequent content words, first occurrence breaking ties."""
        tokens = wordpunct_tokenize(text.lower())
        counts = Counter(
            token
            for token in tokens
            if token.isalpha()
            and len(token) >= MIN_TAG_LENGTH
            and token not in self.stop_words
        )
        return [word for word, _ in counts.most_common(max_tags)]
