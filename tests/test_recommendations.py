from types import SimpleNamespace

from clearhead.modules.recommendations.service import RecommendationService, recommend, score
from clearhead.modules.providers.service import ProviderService


def p(pid, specialties, rating):
    return SimpleNamespace(id=pid, specialties=specialties, rating=rating)


CATALOG = [
    p("t1", ["Anxiety", "Depression"], 4.9),
    p("t2", ["Couples Therapy", "Communication"], 4.8),
    p("b1", ["Stress Management", "Mindfulness"], 4.7),
    p("b2", ["Goal Setting", "Motivation"], 4.6),
    p("t3", ["Trauma", "Grief"], 4.5),
    p("t4", ["ADHD"], 4.95),
    p("b3", ["Self-Care"], 3.0),
    p("b4", [], 4.0),
]


def ids(ranked):
    return [prov.id for prov, _ in ranked]


def test_no_preferences_returns_first_four_unscored():
    ranked = recommend(CATALOG, [])
    assert ids(ranked) == ["t1", "t2", "b1", "b2"]
    assert all(s is None for _, s in ranked)


def test_no_overlap_ranks_by_rating():
    ranked = recommend(CATALOG, ["gardening"])
    assert ids(ranked) == ["t4", "t1", "t2", "b1", "b2", "t3"]
    assert ranked[0][1] == 2 * 4.95


def test_matches_are_case_insensitive_substrings_both_ways():
    assert score(CATALOG[0], ["anxiety"]) == 10 + 2 * 4.9
    # preference contains the specialty
    assert score(CATALOG[1], ["couples therapy for newlyweds"]) == 10 + 2 * 4.8
    # specialty contains the preference
    assert score(CATALOG[2], ["stress"]) == 10 + 2 * 4.7


def test_specialty_matches_outweigh_rating():
    ranked = recommend(CATALOG, ["Motivation", "goal"])
    assert ids(ranked)[0] == "b2"
    assert ranked[0][1] == 20 + 2 * 4.6


def test_ties_keep_catalog_order():
    twins = [p("x", ["Grief"], 4.0), p("y", ["Grief"], 4.0), p("z", [], 4.0)]
    assert ids(recommend(twins, ["grief"])) == ["x", "y", "z"]


async def test_service_uses_active_catalog(session):
    await ProviderService(session).seed_defaults()
    ranked = await RecommendationService(session).for_preferences(["Couples", "  "])
    assert ranked[0][0].id == "therapist-2"
    assert len(ranked) == 4

    buddies = await RecommendationService(session).for_preferences([], type="buddy")
    assert [prov.id for prov, _ in buddies] == ["buddy-1", "buddy-2"]
