from alembic import op
import sqlalchemy as sa

revision = "20261019_create_task_table"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    # 앱 시작 시 create_all 과 같은 스키마. 이미 있으면 건너뜀
    bind = op.get_bind()
    if sa.inspect(bind).has_table("task"):
        return
    op.create_table(
        "task",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("text", sa.String(), nullable=False),
        sa.Column("completed", sa.Boolean(), nullable=False, server_default=sa.false()),
    )


def downgrade():
    op.drop_table("task")
