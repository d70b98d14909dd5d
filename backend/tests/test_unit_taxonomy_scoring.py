import pytest

from talentscreen.components.taxonomy.scoring import (
    ProfileScores,
    calculate_profile_scores,
    selected_adjectives,
)
from talentscreen.components.taxonomy.taxonomy import (
    ADJECTIVES,
    DIMENSION_ADJECTIVES,
    Dimension,
    Taxonomy,
    get_taxonomy,
)


# ---------------------------------------------------------------------------
# Taxonomy
# ---------------------------------------------------------------------------

def test_taxonomy_sizes():
    taxonomy = get_taxonomy()
    assert len(taxonomy.adjectives) == 86
    assert len(taxonomy.dimensions) == 36
    assert len(set(taxonomy.adjectives)) == 86


def test_every_mapped_adjective_is_offered():
    offered = set(ADJECTIVES)
    for members in DIMENSION_ADJECTIVES.values():
        assert set(members) <= offered


def test_taxonomy_is_built_once_and_immutable():
    taxonomy = get_taxonomy()
    assert get_taxonomy() is taxonomy
    with pytest.raises(TypeError):
        taxonomy.dimensions["Alegre"] = Dimension.ANALISTA
    with pytest.raises(AttributeError):
        taxonomy.adjectives = ()


def test_dimension_lookup():
    taxonomy = get_taxonomy()
    assert taxonomy.dimension_of("Decidido") is Dimension.EXECUTOR
    assert taxonomy.dimension_of("Popular") is Dimension.COMUNICADOR
    assert taxonomy.dimension_of("Leal") is Dimension.PLANEJADOR
    assert taxonomy.dimension_of("Minucioso") is Dimension.ANALISTA
    assert taxonomy.dimension_of("Vaidoso") is None
    assert taxonomy.dimension_of("decidido") is None


def test_build_rejects_adjective_in_two_dimensions():
    with pytest.raises(ValueError):
        Taxonomy.build(
            ["Calmo"],
            {Dimension.PLANEJADOR: ["Calmo"], Dimension.ANALISTA: ["Calmo"]},
        )


def test_dimension_labels():
    assert Dimension.from_label("executor") is Dimension.EXECUTOR
    assert Dimension.from_label("  Analista ") is Dimension.ANALISTA
    assert Dimension.from_label("Dominante") is None
    assert Dimension.COMUNICADOR.label == "Comunicador"
    assert Dimension.PLANEJADOR.field == "planejador"


# ---------------------------------------------------------------------------
# Score calculator
# ---------------------------------------------------------------------------

def test_reference_scenario():
    scores = calculate_profile_scores(["Decidido", "Ativo"], ["Popular"], [])
    assert scores.executor == 66.67
    assert scores.comunicador == 33.33
    assert scores.planejador == 0
    assert scores.analista == 0
    assert scores.raw_counts == {"E": 2, "C": 1, "P": 0, "A": 0}


def test_empty_and_missing_steps_give_zeros():
    for steps in (([], [], []), (None, None, None)):
        scores = calculate_profile_scores(*steps)
        assert scores.as_dict() == {"executor": 0.0, "comunicador": 0.0, "planejador": 0.0, "analista": 0.0}
        assert scores.total == 0


def test_only_unmapped_adjectives_give_zeros():
    scores = calculate_profile_scores(["Vaidoso", "Sincero"], ["Teórico"], ["Reservado"])
    assert scores.as_dict() == {"executor": 0.0, "comunicador": 0.0, "planejador": 0.0, "analista": 0.0}


def test_duplicates_within_a_step_count_once():
    scores = calculate_profile_scores(["Decidido", "Decidido"], ["Popular"], [])
    assert scores.raw_counts["E"] == 1
    assert scores.executor == 50.0
    assert scores.comunicador == 50.0


def test_same_adjective_in_two_steps_counts_twice():
    scores = calculate_profile_scores(["Calmo"], ["Calmo"], ["Minucioso"])
    assert scores.raw_counts["P"] == 2
    assert scores.planejador == 66.67
    assert scores.analista == 33.33


@pytest.mark.parametrize(
    "steps",
    [
        (["Decidido"], ["Popular"], ["Calmo"]),
        (["Decidido", "Líder", "Firme"], ["Popular", "Alegre"], ["Calmo", "Minucioso"]),
        (["Ativo"], ["Leal", "Racional", "Prático"], ["Otimista", "Simpático", "Crítico"]),
        (["Enérgico", "Corajoso"], ["Animado"], ["Modesto", "Dedicado", "Eficiente", "Cumpridor"]),
    ],
)
def test_percentages_sum_to_about_one_hundred(steps):
    scores = calculate_profile_scores(*steps)
    assert abs(sum(scores.as_dict().values()) - 100) <= 0.06


def test_scoring_is_deterministic():
    steps = (["Decidido", "Líder"], ["Popular"], ["Calmo", "Minucioso", "Racional"])
    assert calculate_profile_scores(*steps) == calculate_profile_scores(*steps)


def test_selected_adjectives_keeps_step_order():
    assert selected_adjectives(["B", "A", "B"], ["A"], None) == ["B", "A", "A"]


def test_profile_scores_percentage_accessor():
    scores = ProfileScores(executor=10.0, comunicador=20.0, planejador=30.0, analista=40.0)
    assert scores.percentage(Dimension.ANALISTA) == 40.0
