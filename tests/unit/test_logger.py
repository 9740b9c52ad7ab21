import logging

from app.logging.logger import ContextFormatter


def _record(**extra: object) -> logging.LogRecord:
    record = logging.LogRecord("docanalysis", logging.INFO, __file__, 1, "Job done", None, None)
    record.__dict__.update(extra)
    return record


class TestContextFormatter:
    def test_plain_message_is_unchanged(self) -> None:
        formatter = ContextFormatter("%(levelname)s %(message)s")
        assert formatter.format(_record()) == "INFO Job done"

    def test_appends_context_sorted_by_key(self) -> None:
        formatter = ContextFormatter("%(message)s")
        line = formatter.format(_record(job_id=3, attempt=2))
        assert line == "Job done attempt=2 job_id=3"
