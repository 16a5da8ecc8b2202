import asyncio

import ccxt

import signal_daemon
from conftest import FakeSource
from engine.signal_service import SignalService
from errors import UpstreamFetchError
from signal_router import SignalRouter


def _router(seen):
    return SignalRouter(handlers=[seen.append])


def test_run_cycle_routes_setup(fake_source, cfg):
    seen = []
    setup = asyncio.run(signal_daemon.run_cycle(SignalService(fake_source, cfg), _router(seen)))
    assert setup is not None and setup.signal == "LONG"
    assert seen == [setup]


def test_run_cycle_swallows_fetch_errors(fake_source, cfg, caplog):
    fake_source.fail["ticker"] = UpstreamFetchError("ticker", fake_source.symbol, "503")
    seen = []
    setup = asyncio.run(signal_daemon.run_cycle(SignalService(fake_source, cfg), _router(seen)))
    assert setup is None
    assert seen == []
    assert "ticker" in caplog.text


def test_run_cycle_backs_off_on_rate_limit(fake_source, cfg, monkeypatch):
    monkeypatch.setattr(signal_daemon, "RATE_LIMIT_PAUSE_SEC", 0.0)
    error = UpstreamFetchError("trades", fake_source.symbol, "429")
    error.__cause__ = ccxt.RateLimitExceeded("too many requests")
    fake_source.fail["trades"] = error

    slept = []
    real_sleep = asyncio.sleep

    async def spy_sleep(delay, *args, **kwargs):
        slept.append(delay)
        await real_sleep(0)

    monkeypatch.setattr(signal_daemon.asyncio, "sleep", spy_sleep)
    setup = asyncio.run(signal_daemon.run_cycle(SignalService(fake_source, cfg), _router([])))
    assert setup is None
    assert slept == [0.0]


def test_next_cycle_runs_after_failure(cfg):
    source = FakeSource()
    source.fail["open_interest"] = UpstreamFetchError("open_interest", source.symbol, "down")
    service = SignalService(source, cfg)
    seen = []
    assert asyncio.run(signal_daemon.run_cycle(service, _router(seen))) is None
    source.fail.clear()
    assert asyncio.run(signal_daemon.run_cycle(service, _router(seen))).signal == "LONG"
    assert len(seen) == 1
