"""Full behavioral assessment flow: issue, answer, score, narrate, poll."""

import json

from talentscreen.client.result_poller import HasResult, PollError, ResultPoller
from talentscreen.components.narrative.errors import ProviderUnavailable
from tests.conftest import VALID_NARRATIVE, FakeProvider, seed_candidate, seed_job

USER = 7


def test_recruiter_to_candidate_to_result(client, store, narrative_providers):
    job = seed_job(store, "Vendedor Externo", [USER])
    candidate = seed_candidate(store, "Ana", usuario=[USER], vaga=[job["id"]], status="Triagem")
    narrative_providers[:] = [
        FakeProvider("openai", error=ProviderUnavailable("openai", "rate_limited")),
        FakeProvider("groq", response=json.dumps(VALID_NARRATIVE, ensure_ascii=False)),
    ]

    # Recruiter issues the assessment
    issued = client.post(f"/api/v1/candidates/{candidate['id']}/create-assessment").json()
    token = issued["link"].rsplit("/", 1)[-1]
    assert token == issued["token"]

    # Candidate opens the link and answers
    opened = client.get(f"/api/v1/assessment/{token}").json()
    assert opened["assessment_id"] == issued["assessment_id"]
    submitted = client.post(
        f"/api/v1/assessment/{opened['assessment_id']}/submit",
        json={"passo1": ["Decidido", "Ativo"], "passo2": ["Popular"], "passo3": []},
    )
    assert submitted.status_code == 200
    assert submitted.json()["scores"]["executor"] == 66.67

    # Consumer polls until the narrative is there
    poller = ResultPoller("http://testserver", issued["assessment_id"], interval=0, client=client, sleep=lambda s: None)
    state = poller.run()
    assert isinstance(state, HasResult)
    assert state.has_narrative
    assert state.result["narrative"]["perfil_secundario"] == "Comunicador"
    assert poller.fetches == 1

    # Token is spent, second submission bounces, profile reached the candidate
    assert client.get(f"/api/v1/assessment/{token}").status_code == 404
    again = client.post(
        f"/api/v1/assessment/{issued['assessment_id']}/submit",
        json={"passo1": ["Calmo"], "passo2": [], "passo3": []},
    )
    assert again.status_code == 409
    result = client.get(f"/api/v1/assessment/result/{issued['assessment_id']}").json()["result"]
    assert result["executor"] == 66.67
    assert json.loads(result["respostas_passo1"]) == ["Decidido", "Ativo"]

    data = client.get(f"/api/v1/data/all/{USER}").json()
    assert data["candidates"][0]["behavioral_profile"] == "Executor"
    profile = client.get(f"/api/v1/candidates/{candidate['id']}/behavioral-profile").json()
    assert profile["id"] == result["id"]


def test_poller_against_unknown_assessment_stops_with_error(client):
    poller = ResultPoller("http://testserver", 31337, interval=0, client=client, sleep=lambda s: None)
    state = poller.run()
    assert isinstance(state, PollError)
    assert state.status_code == 404
