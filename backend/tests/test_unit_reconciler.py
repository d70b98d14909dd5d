import random

from talentscreen.components.candidates.adapters import (
    candidate_from_chat_row,
    candidate_from_upload_row,
    job_from_row,
    parse_job_link,
)
from talentscreen.components.candidates.models import (
    CandidateRecord,
    CandidateSource,
    CandidateStatus,
    JobPosting,
    NoJobLink,
    ReferenceJobLink,
    ResolvedJobLink,
    TitleJobLink,
)
from talentscreen.components.candidates.reconciler import JobIndex, reconcile_for_user

USER = 7
OTHER_USER = 8


def _job(job_id, title, owners=(USER,)):
    return JobPosting(id=job_id, title=title, owner_ids=frozenset(owners))


def _candidate(candidate_id, link=NoJobLink(), owners=(), source=CandidateSource.UPLOAD):
    return CandidateRecord(
        id=candidate_id,
        source=source,
        name=f"Candidato {candidate_id}",
        job_link=link,
        owner_ids=frozenset(owners),
    )


def _by_id(view):
    return {item.record.id: item for item in view.candidates}


# ---------------------------------------------------------------------------
# Adapters
# ---------------------------------------------------------------------------

def test_parse_job_link_cases():
    assert parse_job_link(None) == NoJobLink()
    assert parse_job_link("") == NoJobLink()
    assert parse_job_link("   ") == NoJobLink()
    assert parse_job_link([]) == NoJobLink()
    assert parse_job_link("Analista de Dados") == TitleJobLink(title="Analista de Dados")
    assert parse_job_link([3]) == ReferenceJobLink(job_id=3)
    assert parse_job_link([{"id": 4, "value": "Vendedor"}]) == ReferenceJobLink(job_id=4, title="Vendedor")
    assert parse_job_link([{"value": "sem id"}]) == NoJobLink()


def test_job_from_row_accepts_both_link_shapes():
    job = job_from_row({"id": 1, "titulo": "Dev", "usuario": [{"id": 7, "value": "Ana"}, 9]})
    assert job.title == "Dev"
    assert job.owner_ids == frozenset({7, 9})


def test_upload_adapter_defaults_and_types():
    record = candidate_from_upload_row(
        {
            "id": 10,
            "nome": "",
            "score": "87.50",
            "status": {"id": 1, "value": "Entrevista"},
            "vaga": [{"id": 2, "value": "Dev"}],
            "usuario": [7],
            "curriculo": [{"name": "abc.pdf", "visible_name": "ana.pdf", "url": "https://files/abc.pdf"}],
        }
    )
    assert record.source is CandidateSource.UPLOAD
    assert record.name == "Novo Candidato"
    assert record.score == 87.5
    assert record.status is CandidateStatus.INTERVIEW
    assert record.job_link == ReferenceJobLink(job_id=2, title="Dev")
    assert record.resumes[0].name == "ana.pdf"


def test_chat_adapter_defaults_to_screening():
    record = candidate_from_chat_row({"id": 11, "nome": "Bia", "vaga": "Vendedor", "idade": "31"})
    assert record.source is CandidateSource.CHAT
    assert record.status is CandidateStatus.SCREENING
    assert record.job_link == TitleJobLink(title="Vendedor")
    assert record.owner_ids == frozenset()
    assert record.age == 31


def test_unknown_status_is_dropped():
    record = candidate_from_upload_row({"id": 12, "nome": "Caio", "status": "Contratado"})
    assert record.status is None


# ---------------------------------------------------------------------------
# Reconciliation
# ---------------------------------------------------------------------------

def test_only_user_jobs_are_returned():
    jobs = [_job(1, "Dev"), _job(2, "Vendedor", owners=(OTHER_USER,)), _job(3, "QA", owners=(USER, OTHER_USER))]
    view = reconcile_for_user(jobs, [], USER)
    assert sorted(job.id for job in view.jobs) == [1, 3]


def test_title_link_matches_normalized_title_and_resolves_to_current_title():
    jobs = [_job(1, "Analista de Dados")]
    candidates = [_candidate(10, TitleJobLink("  analista DE dados "))]
    view = reconcile_for_user(jobs, candidates, USER)
    assert _by_id(view)[10].job == ResolvedJobLink(job_id=1, title="Analista de Dados")


def test_reference_link_resolves_to_index_title_not_stale_title():
    jobs = [_job(5, "Desenvolvedor Backend Pleno")]
    candidates = [_candidate(10, ReferenceJobLink(job_id=5, title="Desenvolvedor Backend"))]
    view = reconcile_for_user(jobs, candidates, USER)
    assert _by_id(view)[10].job == ResolvedJobLink(job_id=5, title="Desenvolvedor Backend Pleno")


def test_foreign_reference_without_ownership_is_excluded():
    jobs = [_job(1, "Dev"), _job(2, "Vendedor", owners=(OTHER_USER,))]
    candidates = [_candidate(10, ReferenceJobLink(job_id=2, title="Vendedor"))]
    view = reconcile_for_user(jobs, candidates, USER)
    assert view.candidates == []


def test_unmatched_title_without_ownership_is_excluded():
    view = reconcile_for_user([_job(1, "Dev")], [_candidate(10, TitleJobLink("Motorista"))], USER)
    assert view.candidates == []


def test_owned_candidate_is_included_even_without_matching_job():
    jobs = [_job(2, "Vendedor", owners=(OTHER_USER,))]
    candidates = [
        _candidate(10, ReferenceJobLink(job_id=2, title="Vendedor"), owners=(USER,)),
        _candidate(11, NoJobLink(), owners=(USER,)),
    ]
    view = _by_id(reconcile_for_user(jobs, candidates, USER))
    assert set(view) == {10, 11}
    assert view[10].job is None
    assert view[11].job is None


def test_both_intake_channels_are_merged():
    jobs = [_job(1, "Dev")]
    candidates = [
        _candidate(10, ReferenceJobLink(job_id=1), source=CandidateSource.UPLOAD),
        _candidate(10, TitleJobLink("dev"), source=CandidateSource.CHAT),
    ]
    view = reconcile_for_user(jobs, candidates, USER)
    assert sorted(item.record.source.value for item in view.candidates) == ["chat", "upload"]
    assert all(item.job == ResolvedJobLink(job_id=1, title="Dev") for item in view.candidates)


def test_ownership_always_includes_candidate_randomized():
    rng = random.Random(1234)
    titles = ["Dev", "QA", "Vendedor", "Motorista", "Analista"]
    for _ in range(200):
        jobs = [
            _job(job_id, rng.choice(titles), owners=rng.choice([(USER,), (OTHER_USER,), (USER, OTHER_USER)]))
            for job_id in range(1, rng.randint(1, 6))
        ]
        links = [
            NoJobLink(),
            TitleJobLink(rng.choice(titles).upper()),
            ReferenceJobLink(job_id=rng.randint(1, 8), title=rng.choice(titles)),
        ]
        candidate = _candidate(99, rng.choice(links), owners=(USER,))
        view = reconcile_for_user(jobs, [candidate], USER)
        assert [item.record.id for item in view.candidates] == [99]
        resolved = view.candidates[0].job
        if resolved is not None:
            job = next(j for j in view.jobs if j.id == resolved.job_id)
            assert resolved.title == job.title


def test_duplicate_titles_resolve_to_last_indexed_job():
    """Known limitation: ambiguous titles pick the job indexed last."""
    jobs = [_job(1, "Vendedor"), _job(2, "vendedor ")]
    view = reconcile_for_user(jobs, [_candidate(10, TitleJobLink("Vendedor"))], USER)
    assert _by_id(view)[10].job == ResolvedJobLink(job_id=2, title="vendedor ")
    assert JobIndex(jobs).match_title("VENDEDOR").id == 2
