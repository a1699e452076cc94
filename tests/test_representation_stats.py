import pytest

from RepresentationCounter.RepresentationCounter import build_representation_table
from RepresentationStats.RepresentationStats import (
    AnalysisState,
    StatsRecord,
    accumulate,
    analyze,
    discover,
    first_hit,
    metadata,
    summary_frame,
    update_exclusive,
    update_total,
)

# (r3, r5, r7, r11) per number
HAND_COUNTS = {
    101: (0, 2, 1, 0),
    103: (3, 0, 1, 0),
    105: (0, 0, 4, 0),
    107: (0, 0, 0, 0),
    109: (2, 4, 0, 6),
}


@pytest.fixture
def hand_state():
    return analyze(sorted(HAND_COUNTS), HAND_COUNTS.__getitem__)


def test_update_exclusive_counts_and_gates_ratio():
    record = update_exclusive(StatsRecord(), 3, 0)
    assert record == StatsRecord(count=1, total=3, ratio_to_r5_sum=0.0, ratio_count=0)
    record = update_exclusive(record, 2, 4)
    assert record == StatsRecord(count=2, total=5, ratio_to_r5_sum=0.5, ratio_count=1)


def test_update_total_counts_only_positive():
    record = update_total(StatsRecord(), 0, 3)
    assert record == StatsRecord(count=0, total=0, ratio_to_r5_sum=0.0, ratio_count=1)
    record = update_total(record, 6, 3)
    assert record == StatsRecord(count=1, total=6, ratio_to_r5_sum=2.0, ratio_count=2)


def test_first_hit_order():
    assert first_hit((0, 2, 1, 0)) == 1
    assert first_hit((5, 2, 1, 0)) == 0
    assert first_hit((0, 0, 0, 0)) == -1


def test_exclusive_hand_computed(hand_state):
    assert hand_state.exclusive == {
        3: StatsRecord(count=2, total=5, ratio_to_r5_sum=0.5, ratio_count=1),
        5: StatsRecord(count=1, total=2, ratio_to_r5_sum=1.0, ratio_count=1),
        7: StatsRecord(count=1, total=4, ratio_to_r5_sum=0.0, ratio_count=0),
        11: StatsRecord(),
    }


def test_total_hand_computed(hand_state):
    assert hand_state.total == {
        3: StatsRecord(count=2, total=5, ratio_to_r5_sum=0.5, ratio_count=2),
        5: StatsRecord(count=2, total=6, ratio_to_r5_sum=2.0, ratio_count=2),
        7: StatsRecord(count=3, total=6, ratio_to_r5_sum=0.5, ratio_count=2),
        11: StatsRecord(count=1, total=6, ratio_to_r5_sum=1.5, ratio_count=2),
    }


def test_total_mode_allows_ratio_count_above_count(hand_state):
    record = hand_state.total[11]
    assert record.ratio_count > record.count


def test_total_policy_has_no_cross_constant_suppression():
    state = accumulate(AnalysisState(), (1, 1, 1, 1))
    assert all(record.count == 1 for record in state.total.values())
    assert [record.count for record in state.exclusive.values()] == [1, 0, 0, 0]


def test_exclusive_ratio_is_one_when_five_wins():
    state = accumulate(AnalysisState(), (0, 7, 3, 2))
    assert state.exclusive[5] == StatsRecord(count=1, total=7, ratio_to_r5_sum=1.0, ratio_count=1)


def test_accumulate_does_not_mutate_previous_state():
    start = AnalysisState()
    after = accumulate(start, (1, 1, 0, 0))
    assert start.exclusive[3] == StatsRecord()
    assert start.total[3] == StatsRecord()
    assert after.exclusive[3].count == 1


def test_accumulate_rejects_wrong_arity():
    with pytest.raises(ValueError):
        accumulate(AnalysisState(), (1, 2, 3))


def test_averages_default_to_zero():
    assert StatsRecord().average == 0.0
    assert StatsRecord().average_ratio == 0.0
    assert StatsRecord(count=4, total=10, ratio_to_r5_sum=3.0, ratio_count=2).average == 2.5


def test_real_primes_small_numbers(small_table):
    bulk = build_representation_table(small_table)
    state = analyze([9, 11, 13], bulk.counts_for)
    # (1,1,0,0), (1,1,1,0), (2,1,1,0): c = 3 always wins
    assert state.exclusive[3] == StatsRecord(count=3, total=4, ratio_to_r5_sum=4.0, ratio_count=3)
    assert state.exclusive[5] == StatsRecord()
    assert state.total[7] == StatsRecord(count=2, total=2, ratio_to_r5_sum=2.0, ratio_count=3)
    assert state.total[11] == StatsRecord(count=0, total=0, ratio_to_r5_sum=0.0, ratio_count=3)


def test_empty_sequence_gives_empty_state():
    state = analyze([], lambda n: (0, 0, 0, 0))
    assert state == AnalysisState()


def test_summary_frame(hand_state):
    frame = summary_frame(hand_state.total)
    assert list(frame.columns) == ["c", "count", "avg_rc", "avg_ratio"]
    assert frame["c"].tolist() == [3, 5, 7, 11]
    assert frame["count"].tolist() == [2, 2, 3, 1]
    assert frame["avg_rc"].tolist() == pytest.approx([2.5, 3.0, 2.0, 6.0])
    assert frame["avg_ratio"].tolist() == pytest.approx([0.25, 1.0, 0.25, 0.75])


def test_component_introspection():
    assert discover() == {"component": "RepresentationStats"}
    assert metadata()["policies"] == ["exclusive", "total"]
