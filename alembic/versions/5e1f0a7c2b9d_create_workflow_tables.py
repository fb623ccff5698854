from alembic import op
import sqlalchemy as sa


revision = "5e1f0a7c2b9d"
down_revision = None
branch_labels = None
depends_on = None


def _table_exists(bind, table_name: str) -> bool:
    insp = sa.inspect(bind)
    return table_name in insp.get_table_names()


def _index_names(bind, table_name: str) -> set:
    insp = sa.inspect(bind)
    return {ix["name"] for ix in insp.get_indexes(table_name)}


def upgrade() -> None:
    bind = op.get_bind()

    if not _table_exists(bind, "workflow_rules"):
        op.create_table(
            "workflow_rules",
            sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
            sa.Column("name", sa.String(length=200), nullable=False),
            sa.Column("description", sa.String(length=1000), nullable=True),
            sa.Column("trigger", sa.String(length=50), nullable=False),
            sa.Column("conditions", sa.JSON(), nullable=False),
            sa.Column("actions", sa.JSON(), nullable=False),
            sa.Column("is_enabled", sa.Integer(), nullable=False, server_default=sa.text("1")),
            sa.Column("priority", sa.Integer(), nullable=False, server_default=sa.text("0")),
            sa.Column("last_fired_at", sa.TIMESTAMP(), nullable=True),
            sa.Column("created_at", sa.TIMESTAMP(), server_default=sa.func.now(), nullable=True),
            sa.Column("updated_at", sa.TIMESTAMP(), server_default=sa.func.now(), nullable=True),
        )

    indexes = _index_names(bind, "workflow_rules")
    for name, column in (
        ("workflow_enabled_idx", "is_enabled"),
        ("workflow_trigger_idx", "trigger"),
        ("workflow_priority_idx", "priority"),
    ):
        if name not in indexes:
            op.create_index(name, "workflow_rules", [column])

    if not _table_exists(bind, "media"):
        op.create_table(
            "media",
            sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True, nullable=False),
            sa.Column("filename", sa.String(length=255), nullable=True),
            sa.Column("mime_type", sa.String(length=100), nullable=True),
            sa.Column("size", sa.Integer(), nullable=True),
            sa.Column("original_url", sa.String(length=1000), nullable=True),
            sa.Column("processing_status", sa.String(length=20), nullable=False, server_default="pending"),
            sa.Column("detected_type", sa.String(length=20), nullable=True),
            sa.Column("detection_confidence", sa.Float(), nullable=True),
            sa.Column("tags", sa.JSON(), nullable=False),
            sa.Column("flags", sa.JSON(), nullable=False),
            sa.Column("suggested_entity_type", sa.String(length=20), nullable=True),
            sa.Column("created_at", sa.TIMESTAMP(), server_default=sa.func.now(), nullable=True),
            sa.Column("updated_at", sa.TIMESTAMP(), server_default=sa.func.now(), nullable=True),
        )

    if not _table_exists(bind, "workflow_executions"):
        op.create_table(
            "workflow_executions",
            sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True, nullable=False),
            sa.Column(
                "rule_id",
                sa.Integer(),
                sa.ForeignKey("workflow_rules.id", ondelete="SET NULL"),
                nullable=True,
            ),
            sa.Column("trigger", sa.String(length=50), nullable=False),
            sa.Column("media_id", sa.Uuid(as_uuid=True), nullable=True),
            sa.Column("result", sa.String(length=20), nullable=False),
            sa.Column("details", sa.JSON(), nullable=True),
            sa.Column("executed_at", sa.TIMESTAMP(), server_default=sa.func.now(), nullable=True),
        )

    if not _table_exists(bind, "admin_notifications"):
        op.create_table(
            "admin_notifications",
            sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True, nullable=False),
            sa.Column("message", sa.String(length=2000), nullable=False),
            sa.Column("level", sa.String(length=20), nullable=False, server_default="info"),
            sa.Column("rule_id", sa.Integer(), nullable=True),
            sa.Column("media_id", sa.Uuid(as_uuid=True), nullable=True),
            sa.Column("is_read", sa.Boolean(), nullable=False, server_default=sa.false()),
            sa.Column("created_at", sa.TIMESTAMP(), server_default=sa.func.now(), nullable=True),
        )

    if not _table_exists(bind, "outbound_emails"):
        op.create_table(
            "outbound_emails",
            sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True, nullable=False),
            sa.Column("to_address", sa.String(length=320), nullable=False),
            sa.Column("subject", sa.String(length=500), nullable=False),
            sa.Column("body", sa.Text(), nullable=True),
            sa.Column("template", sa.String(length=100), nullable=True),
            sa.Column("status", sa.String(length=20), nullable=False, server_default="QUEUED"),
            sa.Column("rule_id", sa.Integer(), nullable=True),
            sa.Column("media_id", sa.Uuid(as_uuid=True), nullable=True),
            sa.Column("created_at", sa.TIMESTAMP(), server_default=sa.func.now(), nullable=True),
        )


def downgrade() -> None:
    bind = op.get_bind()

    for table_name in ("outbound_emails", "admin_notifications", "workflow_executions", "media"):
        if _table_exists(bind, table_name):
            op.drop_table(table_name)

    if _table_exists(bind, "workflow_rules"):
        indexes = _index_names(bind, "workflow_rules")
        for name in ("workflow_priority_idx", "workflow_trigger_idx", "workflow_enabled_idx"):
            if name in indexes:
                op.drop_index(name, table_name="workflow_rules")
        op.drop_table("workflow_rules")
