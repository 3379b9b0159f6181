import pytest

from aplus import InvalidConfigError, PromiseConfig, PromisingDefaults, RunLoopScheduler, get_global_run_loop
from aplus.utils import get_bool_env


@pytest.mark.parametrize("raw, expected", [("true", True), ("TRUE", True), ("false", False), ("False", False)])
def test_get_bool_env(raw, expected, monkeypatch):
    monkeypatch.setenv("APLUS_TEST_FLAG", raw)

    assert get_bool_env("APLUS_TEST_FLAG", not expected) is expected


def test_get_bool_env_default(monkeypatch):
    monkeypatch.delenv("APLUS_TEST_FLAG", raising=False)

    assert get_bool_env("APLUS_TEST_FLAG", True) is True


def test_get_bool_env_rejects_garbage(monkeypatch):
    monkeypatch.setenv("APLUS_TEST_FLAG", "yes")

    with pytest.raises(ValueError):
        get_bool_env("APLUS_TEST_FLAG", False)


def test_config_falls_back_to_defaults(monkeypatch):
    monkeypatch.setattr(PromisingDefaults, "SCHEDULER", "runloop")
    monkeypatch.setattr(PromisingDefaults, "LOG_UNHANDLED_REJECTIONS", True)

    config = PromiseConfig()

    assert config.get_scheduler_mode() == "runloop"
    assert config.get_scheduler() is get_global_run_loop()
    assert config.is_log_unhandled_rejections() is True


def test_explicit_values_win_over_defaults(monkeypatch):
    monkeypatch.setattr(PromisingDefaults, "LOG_UNHANDLED_REJECTIONS", True)
    scheduler = RunLoopScheduler()

    config = PromiseConfig(scheduler=scheduler, log_unhandled_rejections=False)

    assert config.get_scheduler() is scheduler
    assert config.get_scheduler_mode() is None
    assert config.is_log_unhandled_rejections() is False


def test_invalid_scheduler_mode():
    with pytest.raises(InvalidConfigError):
        PromiseConfig(scheduler="threads")


def test_default_config_is_swappable(run_loop):
    assert PromiseConfig.get_default().get_scheduler() is run_loop

    replacement = PromiseConfig(scheduler=RunLoopScheduler())
    PromiseConfig.set_default(replacement)
    assert PromiseConfig.get_default() is replacement

    PromiseConfig.set_default(None)
    assert PromiseConfig.get_default() is not replacement
