"""Structured behavioral narrative and its parsing."""

from __future__ import annotations

import enum
import json
import re
from typing import Any, List

from pydantic import BaseModel, Field, ValidationError, field_validator

from ..taxonomy.taxonomy import Dimension
from .errors import MalformedResponse

_JSON_OBJECT_RE = re.compile(r"\{[\s\S]*\}")


class SituationalLevel(str, enum.Enum):
    """Ordered four-level scale for the situational indicators."""

    BAIXO = "Baixo"
    NORMAL = "Normal"
    ALTO = "Alto"
    MUITO_ALTO = "Muito Alto"

    @property
    def rank(self) -> int:
        return list(SituationalLevel).index(self)

    @classmethod
    def coerce(cls, value: Any) -> Any:
        if isinstance(value, str):
            cleaned = " ".join(value.split()).lower()
            for level in cls:
                if level.value.lower() == cleaned:
                    return level
        return value


class SituationalIndicators(BaseModel):
    exigencia_meio: SituationalLevel
    aproveitamento: SituationalLevel
    autoconfianca: SituationalLevel

    @field_validator("exigencia_meio", "aproveitamento", "autoconfianca", mode="before")
    @classmethod
    def _normalize_level(cls, value: Any) -> Any:
        return SituationalLevel.coerce(value)


class Narrative(BaseModel):
    perfil_principal: str
    perfil_secundario: str = Field(min_length=1)
    resumo_comportamental: str = Field(min_length=1)
    subcaracteristicas: List[str] = Field(min_length=3, max_length=5)
    pontos_fortes_contextuais: List[str]
    pontos_de_atencao: List[str]
    indicadores_situacionais: SituationalIndicators

    @field_validator("perfil_principal")
    @classmethod
    def _known_dimension(cls, value: str) -> str:
        dimension = Dimension.from_label(value)
        if dimension is None:
            raise ValueError(f"perfil_principal must be one of the four dimensions, got {value!r}")
        return dimension.label

    @property
    def primary_dimension(self) -> Dimension:
        return Dimension.from_label(self.perfil_principal)


def _load_json_object(text: str) -> dict:
    try:
        payload = json.loads(text)
    except json.JSONDecodeError:
        # Models sometimes wrap the object in a markdown fence
        match = _JSON_OBJECT_RE.search(text)
        if not match:
            raise MalformedResponse("Narrative is not JSON")
        try:
            payload = json.loads(match.group())
        except json.JSONDecodeError as exc:
            raise MalformedResponse("Narrative is not JSON") from exc
    if not isinstance(payload, dict):
        raise MalformedResponse("Narrative JSON is not an object")
    return payload


def parse_narrative(text: str | None) -> Narrative:
    """Parse and validate a narrative payload; raises MalformedResponse."""
    if not text or not text.strip():
        raise MalformedResponse("Narrative is empty")
    payload = _load_json_object(text)
    try:
        return Narrative.model_validate(payload)
    except ValidationError as exc:
        raise MalformedResponse(f"Narrative does not match schema: {exc.error_count()} error(s)") from exc


def try_parse_narrative(text: str | None) -> Narrative | None:
    """Lenient variant for consumers of stored payloads."""
    if not text:
        return None
    try:
        return parse_narrative(text)
    except MalformedResponse:
        return None
