import logging

from todo_api.logging_utils import CorrelationFilter, configure_logging, get_request_id, request_context


def make_record():
    return logging.LogRecord("todo_api.test", logging.INFO, __file__, 1, "message", None, None)


class TestRequestContext:
    def test_stamps_current_request_id(self):
        with request_context("req-42") as request_id:
            assert request_id == "req-42"
            record = make_record()
            assert CorrelationFilter().filter(record) is True
            assert record.request_id == "req-42"

    def test_generates_id_when_missing(self):
        with request_context(None) as request_id:
            assert request_id
            assert get_request_id() == request_id

    def test_placeholder_outside_a_request(self):
        record = make_record()
        CorrelationFilter().filter(record)
        assert record.request_id == "-"

    def test_context_is_restored_on_exit(self):
        assert get_request_id() is None
        with request_context("outer"):
            with request_context("inner"):
                assert get_request_id() == "inner"
            assert get_request_id() == "outer"
        assert get_request_id() is None


class TestConfigureLogging:
    def test_sets_service_level(self):
        configure_logging("DEBUG")
        assert logging.getLogger("todo_api").level == logging.DEBUG
        configure_logging("INFO")

    def test_unknown_level_falls_back_to_info(self):
        configure_logging("VERBOSE")
        assert logging.getLogger("todo_api").level == logging.INFO
