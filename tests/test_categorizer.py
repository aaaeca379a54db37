import pytest

from backend.src.juntos.ml.content_analysis import OpportunityCategorizer


@pytest.fixture
def categorizer():
    return OpportunityCategorizer()


def test_tutoring_opportunity(categorizer):
    suggestion = categorizer.categorize(
        "Aulas de reforço para crianças carentes",
        "Reforço escolar em matemática para crianças de escola pública",
        ["Ensino"],
    )

    assert suggestion.primary_category_id == "1"
    assert suggestion.primary_category_name == "Educação"
    assert suggestion.secondary_category_ids == ["10"]
    assert suggestion.confidence == pytest.approx(0.3)
    assert suggestion.tags == ["reforço", "crianças", "aulas", "carentes", "escolar"]


def test_no_keywords_falls_back_to_social_assistance(categorizer):
    suggestion = categorizer.categorize("Xyz", "", [])

    assert suggestion.primary_category_id == "4"
    assert suggestion.secondary_category_ids == []
    assert suggestion.confidence == pytest.approx(0.1)
    assert suggestion.tags == []


def test_ties_keep_catalog_order(categorizer):
    suggestion = categorizer.categorize("Tecnologia e saúde", "", [])

    assert suggestion.primary_category_id == "2"
    assert suggestion.secondary_category_ids == ["7"]


def test_at_most_two_secondary_categories(categorizer):
    suggestion = categorizer.categorize(
        "Esporte, música e programação para idosos com seus animais", "", []
    )

    assert len(suggestion.secondary_category_ids) == 2
    assert suggestion.primary_category_id not in suggestion.secondary_category_ids


def test_stop_words_and_punctuation_are_not_tags(categorizer):
    tags = categorizer.extract_tags("para para para reciclagem, reciclagem. natureza")
    assert tags == ["reciclagem", "natureza"]


def test_to_dict(categorizer):
    data = categorizer.categorize("Horta comunitária", "Cuidado com a natureza", []).to_dict()

    assert set(data) == {
        "primary_category_id",
        "primary_category_name",
        "secondary_category_ids",
        "tags",
        "confidence",
    }


def test_portuguese_stop_words_and_joined_words(categorizer):
    suggestion = categorizer.categorize(
        "Aulas sobre tecnologia entre jovens",
        "Oficinas sobre programação/robótica entre eles, muito mais sobre tecnologia—digital",
    )

    assert suggestion.tags == ["tecnologia", "aulas", "jovens", "oficinas", "programação"]


def test_domain_and_extra_stop_words():
    categorizer = OpportunityCategorizer(extra_stop_words=["Mutirão"])

    tags = categorizer.extract_tags("Voluntário mutirão praia praia limpeza")

    assert tags == ["praia", "limpeza"]
