"""Table identifiers and field names of the external record store."""

from ...platform.config import settings


def jobs_table() -> str:
    return settings.JOBS_TABLE_ID


def candidates_table() -> str:
    return settings.CANDIDATES_TABLE_ID


def chat_candidates_table() -> str:
    return settings.CHAT_CANDIDATES_TABLE_ID


def assessments_table() -> str:
    return settings.ASSESSMENTS_TABLE_ID


def results_table() -> str:
    return settings.RESULTS_TABLE_ID


# Job postings
JOB_TITLE = "titulo"
JOB_DESCRIPTION = "descricao"
JOB_ADDRESS = "Endereco"
JOB_REQUIRED = "requisitos_obrigatorios"
JOB_DESIRED = "requisitos_desejaveis"
JOB_OWNERS = "usuario"

# Candidates (both intake tables)
CANDIDATE_NAME = "nome"
CANDIDATE_PHONE = "telefone"
CANDIDATE_JOB = "vaga"
CANDIDATE_OWNERS = "usuario"
CANDIDATE_RESUME = "curriculo"
CANDIDATE_SCORE = "score"
CANDIDATE_SUMMARY = "resumo_ia"
CANDIDATE_STATUS = "status"
CANDIDATE_PROFILE = "perfil_comportamental"
CANDIDATE_SCREENED_AT = "data_triagem"

# Assessments
ASSESSMENT_CANDIDATE = "candidato"
ASSESSMENT_TOKEN = "token"
ASSESSMENT_STATUS = "status"
ASSESSMENT_EXPIRES = "expira_em"

# Assessment results
RESULT_ASSESSMENT = "avaliacao"
RESULT_STEP_FIELDS = ("respostas_passo1", "respostas_passo2", "respostas_passo3")
RESULT_NARRATIVE = "analise_ia"
