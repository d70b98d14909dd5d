from sqlalchemy import Column, DateTime, Integer, JSON, LargeBinary, String
from sqlalchemy.sql import func

from ...platform.database import Base


class StoredRecord(Base):
    __tablename__ = "records"

    id = Column(Integer, primary_key=True, index=True)
    table_id = Column(String, nullable=False, index=True)
    data = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())


class StoredFileBlob(Base):
    __tablename__ = "stored_files"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, index=True, nullable=False)
    original_name = Column(String, nullable=False)
    content_type = Column(String)
    size_bytes = Column(Integer, nullable=False, default=0)
    content = Column(LargeBinary, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
