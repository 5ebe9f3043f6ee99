import pytest

from services.plan_service import get_discount_percentage, get_plans


def test_discount_percentage():
    assert get_discount_percentage(29, 290) == 17
    assert get_discount_percentage(79, 790) == 17
    assert get_discount_percentage(0, 0) == 0


def test_monthly_prices():
    plans = get_plans("monthly")
    assert [(p.id, p.price) for p in plans] == [("starter", 29), ("pro", 79), ("enterprise", 199)]
    assert [p.id for p in plans if p.popular] == ["pro"]


def test_yearly_prices():
    assert [p.price for p in get_plans("yearly")] == [290, 790, 1990]


def test_unknown_cycle():
    with pytest.raises(ValueError):
        get_plans("weekly")
