from config import MAX_BASELINE_YEARS, Settings


def test_defaults():
    s = Settings()
    assert s.stats_url == "https://stats.mortality.watch/"
    assert s.circuit_failure_threshold == 3
    assert s.queue_max_concurrent == 5
    assert s.baseline_max_years == MAX_BASELINE_YEARS
    assert s.baseline_default_year == 2017
    assert s.baseline_split_year_default_year == 2016


def test_env_override(monkeypatch):
    monkeypatch.setenv("BASELINES_QUEUE_MAX_CONCURRENT", "2")
    monkeypatch.setenv("BASELINES_CIRCUIT_RESET_TIMEOUT_SECONDS", "5")
    s = Settings()
    assert s.queue_max_concurrent == 2
    assert s.circuit_reset_timeout_seconds == 5.0
