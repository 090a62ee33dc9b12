from recursiondrill import DrillConfig


def test_defaults_without_env(monkeypatch):
    for name in ("RECURSIONDRILL_PROBLEM", "RECURSIONDRILL_INPUTS", "RECURSIONDRILL_NAIVE_LIMIT"):
        monkeypatch.delenv(name, raising=False)

    config = DrillConfig.from_env()

    assert config.problem == "fibonacci"
    assert config.inputs is None
    assert config.naive_limit is None
    assert config.compare_naive is True
    assert config.save_results is False


def test_reads_env(monkeypatch):
    monkeypatch.setenv("RECURSIONDRILL_PROBLEM", "coin_change")
    monkeypatch.setenv("RECURSIONDRILL_INPUTS", "1, 5,10")
    monkeypatch.setenv("RECURSIONDRILL_NAIVE_LIMIT", "50")
    monkeypatch.setenv("RECURSIONDRILL_COMPARE_NAIVE", "False")
    monkeypatch.setenv("RECURSIONDRILL_CONCURRENCY", "3")
    monkeypatch.setenv("RECURSIONDRILL_SAVE_RESULTS", "true")

    config = DrillConfig.from_env()

    assert config.problem == "coin_change"
    assert config.inputs == [1, 5, 10]
    assert config.naive_limit == 50
    assert config.compare_naive is False
    assert config.num_concurrent_requests == 3
    assert config.save_results is True


def test_overrides_win_over_env(monkeypatch):
    monkeypatch.setenv("RECURSIONDRILL_PROBLEM", "catalan")

    config = DrillConfig.from_env(problem="grid_catalan", inputs=[2])

    assert config.problem == "grid_catalan"
    assert config.inputs == [2]
