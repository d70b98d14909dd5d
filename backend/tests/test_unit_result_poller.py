import httpx

from talentscreen.client import result_poller as result_poller_module
from talentscreen.client.result_poller import (
    HasResult,
    Loading,
    PollError,
    ResultPoller,
    is_terminal,
    main,
)

RESULT_WITHOUT_NARRATIVE = {"success": True, "result": {"id": 1, "assessment_id": 42, "analise_ia": None}}
RESULT_WITH_NARRATIVE = {"success": True, "result": {"id": 1, "assessment_id": 42, "analise_ia": "{\"perfil_principal\": \"Executor\"}"}}


def _poller(responses, **kwargs):
    """Poller whose transport replays ``responses`` (httpx.Response or exception factories) in order."""
    queue = list(responses)
    seen: list[httpx.Request] = []
    sleeps: list[float] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        item = queue.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    client = httpx.Client(transport=httpx.MockTransport(handler))
    poller = ResultPoller("http://api.test/", 42, interval=5, client=client, sleep=sleeps.append, **kwargs)
    return poller, seen, sleeps


def test_stops_once_narrative_is_present():
    poller, seen, sleeps = _poller(
        [
            httpx.Response(200, json=RESULT_WITHOUT_NARRATIVE),
            httpx.Response(200, json=RESULT_WITH_NARRATIVE),
        ]
    )
    state = poller.run()
    assert isinstance(state, HasResult)
    assert state.has_narrative
    assert len(seen) == 2
    assert sleeps == [5]
    assert seen[0].url == "http://api.test/api/v1/assessment/result/42"


def test_404_is_terminal_error():
    poller, seen, sleeps = _poller([httpx.Response(404, json={"detail": "Result not found"})])
    state = poller.run()
    assert state == PollError(status_code=404, detail="Result not found")
    assert len(seen) == 1
    assert sleeps == []


def test_transient_failures_keep_polling():
    poller, seen, sleeps = _poller(
        [
            httpx.ConnectError("refused"),
            httpx.Response(503, json={"detail": "unavailable"}),
            httpx.Response(200, text="<html>gateway</html>"),
            httpx.Response(200, json=RESULT_WITH_NARRATIVE),
        ]
    )
    state = poller.run()
    assert isinstance(state, HasResult) and state.has_narrative
    assert len(seen) == 4
    assert sleeps == [5, 5, 5]


def test_rate_limited_fetch_keeps_polling():
    poller, seen, sleeps = _poller(
        [
            httpx.Response(429, json={"detail": "Too many requests. Please try again later."}),
            httpx.Response(200, json=RESULT_WITH_NARRATIVE),
        ]
    )
    state = poller.run()
    assert isinstance(state, HasResult) and state.has_narrative
    assert poller.fetches == 2
    assert sleeps == [5]


def test_state_transitions_are_reported():
    states = []
    poller, _, _ = _poller(
        [
            httpx.Response(200, json=RESULT_WITHOUT_NARRATIVE),
            httpx.Response(200, json=RESULT_WITHOUT_NARRATIVE),
            httpx.Response(200, json=RESULT_WITH_NARRATIVE),
        ],
        on_state=states.append,
    )
    assert isinstance(poller.state, Loading)
    poller.run()
    assert [s.has_narrative for s in states] == [False, True]


def test_stop_is_checked_between_fetches():
    responses = [httpx.Response(200, json=RESULT_WITHOUT_NARRATIVE) for _ in range(10)]
    poller, seen, _ = _poller(responses)
    poller._sleep = lambda seconds: poller.stop()
    state = poller.run()
    assert isinstance(state, HasResult) and not state.has_narrative
    assert len(seen) == 1


def test_stopped_poller_does_not_fetch():
    poller, seen, _ = _poller([])
    poller.stop()
    assert isinstance(poller.run(), Loading)
    assert seen == []


def test_is_terminal():
    assert not is_terminal(Loading())
    assert not is_terminal(HasResult(result={"analise_ia": None}))
    assert is_terminal(HasResult(result={"analise_ia": "{}"}))
    assert is_terminal(PollError(status_code=404))


def test_main_reports_error_exit_code(monkeypatch, capsys):
    def fake_run(self):
        return PollError(status_code=404, detail="Result not found")

    monkeypatch.setattr(ResultPoller, "run", fake_run)
    monkeypatch.setattr(result_poller_module, "setup_logging", lambda: None)
    assert main(["http://api.test", "42", "--interval", "0.1"]) == 1
    assert "404" in capsys.readouterr().err
