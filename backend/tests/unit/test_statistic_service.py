from app.services.statistic_service import average_score, summarize_scores


class TestStatistics:
    """Tests for feedback score aggregation."""

    def test_average_is_exact(self):
        assert average_score([3, 4, 5]) == 4.0

    def test_average_non_integer(self):
        assert average_score([1, 2]) == 1.5

    def test_summary_positive(self):
        assert summarize_scores([3, 4, 5]) == "3 feedback entries, average 4.00/5, mostly positive"

    def test_summary_negative_single(self):
        assert summarize_scores([1]) == "1 feedback entry, average 1.00/5, mostly negative"

    def test_summary_mixed(self):
        assert summarize_scores([1, 5]) == "2 feedback entries, average 3.00/5, mixed"
