"""
Year / operator aggregation and top-N selection.
"""
from crash_dashboard.aggregator import (
    OperatorAggregate, YearAggregate, aggregate_by_operator, aggregate_by_year,
    resolve_year_range, top_n, year_bounds,
)

from .conftest import make_record


class TestScenario:
    def test_by_year(self, scenario_records):
        assert aggregate_by_year(scenario_records) == [
            YearAggregate(1920, 2), YearAggregate(1921, 1),
        ]

    def test_by_operator(self, scenario_records):
        aggs = aggregate_by_operator(scenario_records, 1920)
        assert [(a.operator, a.total_fatalities, a.crash_count) for a in aggs] == [
            ("A", 5, 1), ("B", 10, 1),
        ]

    def test_top_one(self, scenario_records):
        top = top_n(aggregate_by_operator(scenario_records, 1920), 1)
        assert [a.operator for a in top] == ["B"]


class TestAggregateByYear:
    def test_counts_sum_to_record_count(self, sample_records):
        aggs = aggregate_by_year(sample_records)
        assert sum(a.crash_count for a in aggs) == len(sample_records)

    def test_first_appearance_order(self):
        records = [make_record(1950, "A", 1), make_record(1930, "A", 1), make_record(1950, "B", 1)]
        assert [a.year for a in aggregate_by_year(records)] == [1950, 1930]

    def test_range_is_inclusive(self, sample_records):
        aggs = aggregate_by_year(sample_records, 1912, 1915)
        assert aggs == [YearAggregate(1912, 2), YearAggregate(1913, 4), YearAggregate(1915, 1)]

    def test_open_ended_bounds(self, sample_records):
        assert [a.year for a in aggregate_by_year(sample_records, start_year=1915)] == [1915, 1920, 2009]
        assert [a.year for a in aggregate_by_year(sample_records, end_year=1912)] == [1908, 1912]

    def test_inverted_range_means_full_range(self, sample_records):
        assert aggregate_by_year(sample_records, 2000, 1910) == aggregate_by_year(sample_records)

    def test_range_outside_data_is_empty(self, sample_records):
        assert aggregate_by_year(sample_records, 3000, 3100) == []

    def test_empty_records(self):
        assert aggregate_by_year([]) == []

    def test_idempotent(self, sample_records):
        first = aggregate_by_year(sample_records, 1910, 1920)
        second = aggregate_by_year(sample_records, 1910, 1920)
        assert first == second


class TestAggregateByOperator:
    def test_partitions_the_year(self, sample_records):
        aggs = aggregate_by_operator(sample_records, 1913)
        in_year = [r for r in sample_records if r.year == 1913]
        assert sum(a.crash_count for a in aggs) == len(in_year)
        assert sum(a.total_fatalities for a in aggs) == sum(r.fatalities for r in in_year)
        assert len({a.operator for a in aggs}) == len(aggs)
        for agg in aggs:
            own = [r for r in in_year if r.operator == agg.operator]
            assert agg.crash_count == len(own)
            assert agg.total_fatalities == sum(r.fatalities for r in own)

    def test_deadliest_crash(self, sample_records):
        navy = next(a for a in aggregate_by_operator(sample_records, 1913)
                    if a.operator == "Military - German Navy")
        assert navy.deadliest_crash is sample_records[4]

    def test_deadliest_tie_takes_first(self):
        records = [make_record(1950, "A", 7, 1, 1), make_record(1950, "A", 7, 2, 2)]
        (agg,) = aggregate_by_operator(records, 1950)
        assert agg.deadliest_crash is records[0]

    def test_operator_order_is_first_appearance(self, sample_records):
        aggs = aggregate_by_operator(sample_records, 1913)
        assert [a.operator for a in aggs] == [
            "Military - German Navy", "Private", "Military - German Army",
        ]

    def test_year_without_records(self, sample_records):
        assert aggregate_by_operator(sample_records, 1999) == []
        assert aggregate_by_operator([], 1913) == []


class TestTopN:
    def _agg(self, name, total):
        return OperatorAggregate(name, total, 1, make_record(1950, name, total))

    def test_sorted_descending_and_truncated(self):
        aggs = [self._agg("a", 1), self._agg("b", 9), self._agg("c", 5), self._agg("d", 7)]
        assert [a.operator for a in top_n(aggs, 3)] == ["b", "d", "c"]

    def test_ties_keep_input_order(self):
        aggs = [self._agg("a", 5), self._agg("b", 9), self._agg("c", 5), self._agg("d", 5)]
        assert [a.operator for a in top_n(aggs, 3)] == ["b", "a", "c"]

    def test_fewer_than_n(self):
        assert len(top_n([self._agg("a", 1)], 3)) == 1

    def test_non_positive_n(self):
        assert top_n([self._agg("a", 1)], 0) == []


class TestYearRange:
    def test_bounds(self, sample_records):
        assert year_bounds(sample_records) == (1908, 2009)
        assert year_bounds([]) is None

    def test_resolve(self, sample_records):
        assert resolve_year_range(sample_records) == (1908, 2009)
        assert resolve_year_range(sample_records, 1950, None) == (1950, 2009)
        assert resolve_year_range(sample_records, 1990, 1950) == (1908, 2009)
        assert resolve_year_range([], 1950, 1960) is None
