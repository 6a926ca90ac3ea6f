import random
from dataclasses import replace

from fundamentus_screener.models import FundamentalRecord
from fundamentus_screener.scoring import SCORED_FIELDS, leaders, rank, score, score_breakdown


def _perfect(symbol="PERF3", **overrides) -> FundamentalRecord:
    base = FundamentalRecord(
        symbol=symbol,
        price="10,00",
        pl="12,5",
        pvp="0,8",
        roe="18,2",
        div_yield="7,1",
        div_bruta="0,5",
        cresc_rec="15,0",
        marg_liq="15,0",
        roic="16,0",
        liq_corr="2,5",
        liq_2m="2.500.000,00",
    )
    return replace(base, **overrides)


def test_all_full_credit_rules_score_100():
    assert score(_perfect()) == 100
    assert len(score_breakdown(_perfect())) == 10


def test_unparseable_field_scores_zero():
    assert score(_perfect(pl="abc")) == 0
    assert score(_perfect(liq_2m="")) == 0
    assert score_breakdown(_perfect(roic="-")) == []


def test_partial_credit_rules():
    # every partial band hit, liquidity and margin/growth rules missed
    record = _perfect(
        pl="20,0",
        pvp="2,0",
        roe="12,0",
        div_yield="5,0",
        div_bruta="1,5",
        cresc_rec="25,0",
        marg_liq="5,0",
        roic="12,0",
        liq_corr="1,5",
        liq_2m="10.000,00",
    )
    assert score(record) == 35


def test_growth_and_margin_ranges_are_inclusive():
    low = _perfect(cresc_rec="10,0", marg_liq="20,0")
    high = _perfect(cresc_rec="20,01", marg_liq="9,99")
    assert score(low) == 100
    assert score(high) == 80


def test_score_does_not_mutate_record():
    record = _perfect()
    score(record)
    assert record.score is None


def test_score_is_deterministic():
    rng = random.Random(11)
    for _ in range(50):
        values = {name: f"{rng.uniform(-10, 40):.2f}".replace(".", ",") for name in SCORED_FIELDS}
        record = _perfect(**values)
        copy = FundamentalRecord.from_dict(record.to_dict())
        first = score(record)
        assert score(record) == first
        assert score(copy) == first
        assert score(replace(record, symbol="OTHR3", price="99,00")) == first


def test_rank_is_deterministic():
    records = [_perfect(f"S{i}", pvp=pvp) for i, pvp in enumerate(["0,8", "2,0", "abc", "5,0", "0,8"])]
    first = rank(records)
    assert rank(records) == first
    assert rank([FundamentalRecord.from_dict(r.to_dict()) for r in records]) == first


def test_scores_are_multiples_of_five_in_range():
    rng = random.Random(7)
    for _ in range(300):
        values = {name: f"{rng.uniform(-10, 40):.2f}".replace(".", ",") for name in SCORED_FIELDS}
        values["liq_2m"] = f"{rng.randint(0, 5_000_000):,}".replace(",", ".") + ",00"
        result = score(_perfect(**values))
        assert 0 <= result <= 100
        assert result % 5 == 0


def test_rank_sorts_descending_and_stable():
    a = _perfect("AAAA3", pvp="2,0")  # 95
    b = _perfect("BBBB3")  # 100
    c = _perfect("CCCC3", pvp="2,0")  # 95
    d = _perfect("DDDD3", pl="abc")  # 0

    ranked = rank([d, a, b, c])

    assert [r.symbol for r in ranked] == ["BBBB3", "AAAA3", "CCCC3", "DDDD3"]
    assert [r.score for r in ranked] == [100, 95, 95, 0]
    assert [r.symbol for r in rank([c, a])] == ["CCCC3", "AAAA3"]


def test_rank_returns_new_records():
    original = [_perfect("X1")]
    ranked = rank(original)
    assert original[0].score is None
    assert ranked[0].score == 100


def test_rank_hundred_before_fifty():
    fifty = _perfect("HALF3", pl="30,0", pvp="5,0", roe="1,0", div_yield="1,0", div_bruta="3,0")
    assert score(fifty) == 50
    assert [r.symbol for r in rank([fifty, _perfect("FULL3")])] == ["FULL3", "HALF3"]


def test_leaders_takes_top_five():
    ranked = rank([_perfect(f"S{i}") for i in range(8)])
    top = leaders(ranked)
    assert [r.symbol for r in top] == ["S0", "S1", "S2", "S3", "S4"]
    assert leaders(ranked, n=2) == ranked[:2]
