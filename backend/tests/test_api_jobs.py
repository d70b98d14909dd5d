from talentscreen.components.records import tables

USER = 7


def _create(client, **overrides):
    payload = {
        "title": "Analista de Dados",
        "description": "Modelagem e relatórios",
        "address": "São Paulo - SP",
        "required_skills": "SQL, Python",
        "owner_ids": [USER],
        **overrides,
    }
    return client.post("/api/v1/jobs", json=payload)


def test_create_job(client, store):
    resp = _create(client)
    assert resp.status_code == 201, resp.text
    job = resp.json()
    assert job["title"] == "Analista de Dados"
    assert job["owner_ids"] == [USER]
    assert job["required_skills"] == "SQL, Python"

    store.db.expire_all()
    row = store.get_row(tables.jobs_table(), job["id"])
    assert row["titulo"] == "Analista de Dados"
    assert row["Endereco"] == "São Paulo - SP"
    assert row["usuario"] == [USER]


def test_create_job_validation(client):
    assert _create(client, title="").status_code == 422
    assert _create(client, owner_ids=[]).status_code == 422


def test_update_job_title_is_seen_by_reconciliation(client, store):
    job = _create(client).json()
    store.insert_row(
        tables.candidates_table(),
        {"nome": "Ana", "vaga": [{"id": job["id"], "value": "Analista de Dados"}]},
    )

    resp = client.patch(f"/api/v1/jobs/{job['id']}", json={"title": "Analista de Dados Sênior"})
    assert resp.status_code == 200
    assert resp.json()["title"] == "Analista de Dados Sênior"
    assert resp.json()["description"] == "Modelagem e relatórios"

    candidates = client.get(f"/api/v1/data/all/{USER}").json()["candidates"]
    assert candidates[0]["job"] == {"id": job["id"], "title": "Analista de Dados Sênior"}


def test_update_job_requires_fields(client):
    job = _create(client).json()
    assert client.patch(f"/api/v1/jobs/{job['id']}", json={}).status_code == 400


def test_update_missing_job(client):
    assert client.patch("/api/v1/jobs/4242", json={"title": "x"}).status_code == 404


def test_delete_job(client):
    job = _create(client).json()
    assert client.delete(f"/api/v1/jobs/{job['id']}").status_code == 204
    assert client.get(f"/api/v1/data/all/{USER}").json()["jobs"] == []
    assert client.delete(f"/api/v1/jobs/{job['id']}").status_code == 404


def test_create_job_without_trailing_slash_is_not_redirected(client):
    resp = client.post("/api/v1/jobs", json={"title": "Vendedor", "description": "Vendas externas", "owner_ids": [USER]}, follow_redirects=False)
    assert resp.status_code == 201
