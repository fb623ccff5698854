import uuid

from sqlalchemy import Column, ForeignKey, Integer, JSON, String, TIMESTAMP, Uuid
from sqlalchemy.sql import func

from studio.db import Base


class WorkflowExecution(Base):
    __tablename__ = "workflow_executions"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    rule_id = Column(Integer, ForeignKey("workflow_rules.id", ondelete="SET NULL"), nullable=True)
    trigger = Column(String(50), nullable=False)
    media_id = Column(Uuid(as_uuid=True), nullable=True)

    result = Column(String(20), nullable=False)  # SUCCESS / PARTIAL / FAILED / SKIPPED
    details = Column(JSON)

    executed_at = Column(TIMESTAMP, server_default=func.now())
