import logging

from tsp_anneal.logging_config import setup_logging


def _file_handlers():
    return [h for h in logging.getLogger("tsp_anneal").handlers if isinstance(h, logging.FileHandler)]


def test_setup_logging_closes_previous_file_handler(tmp_path):
    setup_logging(logging.INFO, log_file=str(tmp_path / "first.log"))
    (first,) = _file_handlers()
    setup_logging(logging.INFO, log_file=str(tmp_path / "second.log"))
    try:
        (second,) = _file_handlers()
        assert first.stream is None
        assert second is not first
        logging.getLogger("tsp_anneal.test").info("hello")
        second.flush()
        assert "hello" in (tmp_path / "second.log").read_text()
    finally:
        setup_logging(logging.INFO)
    assert _file_handlers() == []
    assert second.stream is None
