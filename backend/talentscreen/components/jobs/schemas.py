from typing import List, Optional

from pydantic import BaseModel, Field


class JobCreate(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    description: str = Field(min_length=1)
    address: Optional[str] = None
    required_skills: Optional[str] = None
    desired_skills: Optional[str] = None
    owner_ids: List[int] = Field(min_length=1)


class JobUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, min_length=1)
    address: Optional[str] = None
    required_skills: Optional[str] = None
    desired_skills: Optional[str] = None
    owner_ids: Optional[List[int]] = Field(default=None, min_length=1)
