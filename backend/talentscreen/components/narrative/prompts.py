"""Prompt sent to every narrative provider."""

from __future__ import annotations

import json

from ..taxonomy.scoring import ProfileScores

NARRATIVE_SYSTEM_PROMPT = (
    "Você é um analista comportamental. Responda SOMENTE com um objeto JSON válido, sem markdown."
)

_OUTPUT_SHAPE = """{
  "perfil_principal": "Executor | Comunicador | Planejador | Analista (maior score)",
  "perfil_secundario": "perfil com o segundo maior score",
  "resumo_comportamental": "parágrafo sobre o estilo de trabalho, combinando os dois perfis e usando os adjetivos escolhidos",
  "subcaracteristicas": ["3 a 5 palavras-chave do perfil principal"],
  "pontos_fortes_contextuais": ["ponto forte ligado ao contexto de trabalho"],
  "pontos_de_atencao": ["ponto a desenvolver, descrito de forma construtiva"],
  "indicadores_situacionais": {
    "exigencia_meio": "Baixo | Normal | Alto | Muito Alto",
    "aproveitamento": "Baixo | Normal | Alto | Muito Alto",
    "autoconfianca": "Baixo | Normal | Alto | Muito Alto"
  }
}"""


def build_narrative_prompt(scores: ProfileScores, adjectives: list[str]) -> str:
    return (
        "# INSTRUÇÃO\n"
        "Responda APENAS com o objeto JSON pedido, sem texto antes ou depois.\n\n"
        "# PERSONA\n"
        "Analista comportamental sênior, certificado na metodologia DISC, com foco em psicologia "
        "organizacional. Linguagem positiva, construtiva e voltada ao ambiente de trabalho.\n\n"
        "# OBJETIVO\n"
        "Gerar um relatório de perfil comportamental com perfil predominante, subcaracterísticas, "
        "pontos fortes, pontos de atenção e indicadores situacionais.\n\n"
        "# DADOS DE ENTRADA\n"
        f"- Executor (Dominância): {scores.executor}%\n"
        f"- Comunicador (Influência): {scores.comunicador}%\n"
        f"- Planejador (Estabilidade): {scores.planejador}%\n"
        f"- Analista (Conformidade): {scores.analista}%\n"
        f"- Adjetivos selecionados: {json.dumps(adjectives, ensure_ascii=False)}\n\n"
        "# PROCESSAMENTO\n"
        "1. Perfil principal = maior score; secundário = segundo maior.\n"
        "2. Resumo: um parágrafo combinando os dois perfis, usando os adjetivos para dar especificidade.\n"
        "3. Subcaracterísticas: de 3 a 5 palavras-chave das qualidades centrais do perfil principal.\n"
        "4. Indicadores situacionais com os níveis \"Baixo\", \"Normal\", \"Alto\" ou \"Muito Alto\":\n"
        "   - Exigência do meio: pressão percebida; Executor e/ou Analista altos indicam auto-cobrança.\n"
        "   - Aproveitamento: uso das habilidades naturais; scores equilibrados ou um perfil muito "
        "dominante indicam alto aproveitamento.\n"
        "   - Autoconfiança: segurança nas ações; Executor e/ou Comunicador altos indicam alta autoconfiança.\n\n"
        "# ESTRUTURA DE SAÍDA (JSON OBRIGATÓRIO)\n"
        f"{_OUTPUT_SHAPE}\n"
    )
