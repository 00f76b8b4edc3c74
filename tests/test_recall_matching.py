from datetime import date

from app.services.recall_matching import best_match, matches, normalize_key
from app.services.recall_types import RecallRecord


def _record(recall_id="r-1", brand="Graco", model="SnugRide 35", product_name="Graco SnugRide 35 Elite",
            recall_date=date(2020, 1, 1)) -> RecallRecord:
    return RecallRecord(
        recall_id=recall_id,
        product_name=product_name,
        brand=brand,
        model=model,
        hazard="h",
        remedy="r",
        recall_date=recall_date,
    )


def test_normalize_key_compacts_case_space_and_punctuation():
    assert normalize_key("SnugRide 35") == "snugride35"
    assert normalize_key(" snugride-35 ") == "snugride35"
    assert normalize_key("   ") is None
    assert normalize_key(None) is None


def test_exact_model_match_is_case_insensitive():
    assert matches("graco", "snugride 35", _record())
    assert matches("GRACO", "SNUGRIDE 35", _record())


def test_model_substring_of_product_name_matches():
    rec = _record(model="SR-35", product_name="Graco SnugRide 35 Elite Infant Seat")
    assert matches("Graco", "SnugRide35", rec)
    assert matches("Graco", "Elite", rec)


def test_brand_must_match():
    assert not matches("Chicco", "SnugRide 35", _record())
    assert not matches(None, "SnugRide 35", _record())


def test_unrelated_model_does_not_match():
    assert not matches("Graco", "Pack n Play", _record())


def test_missing_model_matches_only_brand_only_records():
    assert not matches("Graco", None, _record())
    assert matches("Graco", None, _record(model=None, product_name="Graco strollers"))


def test_best_match_prefers_most_recent_recall_date():
    older = _record(recall_id="old", recall_date=date(2018, 3, 1))
    newer = _record(recall_id="new", recall_date=date(2022, 9, 1))
    other = _record(recall_id="other", brand="Evenflo", recall_date=date(2024, 1, 1))

    assert best_match("Graco", "SnugRide 35", [older, other, newer]).recall_id == "new"


def test_best_match_none_when_nothing_matches():
    assert best_match("Graco", "Pack n Play", [_record()]) is None
