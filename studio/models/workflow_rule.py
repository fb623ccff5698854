from sqlalchemy import Column, Index, Integer, JSON, String, TIMESTAMP
from sqlalchemy.sql import func

from studio.db import Base


class WorkflowRule(Base):
    __tablename__ = "workflow_rules"

    id = Column(Integer, primary_key=True, autoincrement=True)

    name = Column(String(200), nullable=False)
    description = Column(String(1000))
    trigger = Column(String(50), nullable=False)  # on_upload / on_classification / on_publish / on_status_change

    conditions = Column(JSON, nullable=False, default=dict)
    actions = Column(JSON, nullable=False, default=list)

    is_enabled = Column(Integer, nullable=False, default=1)
    priority = Column(Integer, nullable=False, default=0)

    last_fired_at = Column(TIMESTAMP)
    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        Index("workflow_enabled_idx", "is_enabled"),
        Index("workflow_trigger_idx", "trigger"),
        Index("workflow_priority_idx", "priority"),
    )
