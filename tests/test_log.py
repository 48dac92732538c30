import logging
from gridbet import log as logmod

def test_setup_returns_package_logger(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "warning")
    lg = logmod.setup()
    assert lg.name == "gridbet" and isinstance(lg, logging.Logger)
