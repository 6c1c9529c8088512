import copy

import pytest

from clusterdiff import (
    clean_cluster_table,
    find_clusters,
    is_column_ascending,
    preprocess_text,
    remove_outlying_clusters,
    remove_overlapping_clusters,
)
from conftest import make_records


def starts_b(records):
    return [r['start_text2'] for r in records]


def span(start, end, **extra):
    record = {'start_text1': start, 'end_text1': end}
    record.update(extra)
    return record


class TestIsColumnAscending:
    @pytest.mark.parametrize("values, expected", [
        ([], True),
        ([4], True),
        ([1, 1, 2], True),
        ([1, 3, 2], False),
        ([2, 1], False),
    ])
    def test_values(self, values, expected):
        assert is_column_ascending(make_records(values), 'start_text2') is expected

    def test_default_key(self):
        assert is_column_ascending(make_records([3, 1])) is False


class TestRemoveOverlappingClusters:
    """Test overlap removal in text A."""

    def test_drops_overlapping_record(self):
        records = [span(0, 5), span(3, 8)]
        assert remove_overlapping_clusters(records) == [span(0, 5)]

    def test_touching_spans_are_kept(self):
        records = [span(0, 5), span(5, 8)]
        assert remove_overlapping_clusters(records) == records

    def test_dropped_record_still_sets_previous_end(self):
        """Test that a dropped record's end is used for the next comparison."""
        records = [span(0, 5), span(3, 9), span(6, 10)]
        assert remove_overlapping_clusters(records) == [span(0, 5)]

    def test_dropped_record_can_let_overlap_through(self):
        records = [span(0, 10), span(5, 6), span(8, 12)]
        assert remove_overlapping_clusters(records) == [span(0, 10), span(8, 12)]

    def test_sorts_stably_by_start(self):
        records = [span(2, 4, id='x'), span(0, 1, id='first'), span(2, 3, id='y')]
        result = remove_overlapping_clusters(records)
        assert [r['id'] for r in result] == ['first', 'x']

    def test_input_is_not_modified(self):
        records = [span(3, 8), span(0, 5)]
        original = copy.deepcopy(records)
        remove_overlapping_clusters(records)
        assert records == original

    def test_custom_keys(self):
        records = [{'s': 0, 'e': 5}, {'s': 3, 'e': 8}]
        assert remove_overlapping_clusters(records, 's', 'e', verbose=True) == [{'s': 0, 'e': 5}]

    def test_empty(self):
        assert remove_overlapping_clusters([]) == []


class TestRemoveOutlyingClusters:
    """Test removal of clusters that break the order in text B."""

    def test_local_inversion_at_start(self):
        result = remove_outlying_clusters(make_records([5, 3, 4]))
        assert is_column_ascending(result)
        assert starts_b(result) == [3, 4]

    def test_high_outlier(self):
        assert starts_b(remove_outlying_clusters(make_records([1, 2, 10, 3, 4]))) == [1, 2, 3, 4]

    def test_low_outlier(self):
        assert starts_b(remove_outlying_clusters(make_records([1, 2, 0, 3, 4]))) == [1, 2, 3, 4]

    def test_flagged_tail_is_removed(self):
        """Test that every flagged record at the end goes, including the one before the drop."""
        assert starts_b(remove_outlying_clusters(make_records([1, 2, 3, 0]))) == [1, 2]

    def test_two_outliers(self):
        assert starts_b(remove_outlying_clusters(make_records([10, 1, 2, 11, 3, 4]))) == [1, 2, 3, 4]

    def test_consecutive_duplicates_keep_first(self):
        records = make_records([1, 3, 3, 5])
        result = remove_outlying_clusters(records)
        assert starts_b(result) == [1, 3, 5]
        assert result[1] is records[1]

    def test_ascending_is_unchanged(self):
        records = make_records([0, 4, 9])
        assert remove_outlying_clusters(records) == records

    def test_short_sequences_are_copied(self):
        records = make_records([7])
        result = remove_outlying_clusters(records)
        assert result == records
        assert result is not records
        assert remove_outlying_clusters([]) == []

    def test_input_is_not_modified(self):
        records = make_records([1, 2, 10, 3, 4])
        original = copy.deepcopy(records)
        remove_outlying_clusters(records)
        assert records == original


class TestCleanClusterTable:
    """Test the iterative cleaning driver."""

    def test_ascending_input_is_returned_unchanged(self):
        records = make_records([0, 2, 5])
        assert clean_cluster_table(records) == records

    def test_removes_outlier(self):
        records = make_records([1, 2, 10, 3, 4])
        result = clean_cluster_table(records, single_pass=False)
        assert starts_b(result) == [1, 2, 3, 4]

    def test_single_pass_applies_one_round(self):
        records = make_records([9, 1, 8, 2, 7, 3, 6, 4, 5])
        expected = remove_outlying_clusters(remove_overlapping_clusters(records))
        assert clean_cluster_table(records, single_pass=True) == expected

    def test_loop_reaches_fixed_point(self):
        """Test that a second call never changes a looped result."""
        records = make_records([9, 1, 8, 2, 7, 3, 6, 4, 5])
        result = clean_cluster_table(records, 'start_text1', 'end_text1', 'start_text2', False)
        assert len(result) <= len(records)
        assert clean_cluster_table(result, single_pass=False) == result

    def test_custom_names(self):
        records = make_records([5, 3, 4], name_a='a', name_b='b')
        result = clean_cluster_table(records, 'start_a', 'end_a', 'start_b', False)
        assert is_column_ascending(result, 'start_b')

    def test_on_found_clusters(self):
        processed_a = preprocess_text("p q r s t u", [" "])
        processed_b = preprocess_text("s t u p q r", [" "])
        records = find_clusters(processed_a, processed_b, 3, 'text1', 'text2')
        assert starts_b(records) == [3, 0]
        result = clean_cluster_table(records, single_pass=False)
        assert result == records[:1]
        assert is_column_ascending(result)
