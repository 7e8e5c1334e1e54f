"""notify pipeline stage changes

Publish inserts, updates and deletes on pipeline_stages on the
`row_changes` channel, so open boards pick up stages added, renamed,
reordered or removed by other sessions.

Revision ID: e1a6b3f09c52
Revises: c4d7f2a0b836
Create Date: 2026-10-19 10:14:52.604118

"""

from typing import Sequence, Union

from alembic import op


# revision identifiers, used by Alembic.
revision: str = "e1a6b3f09c52"
down_revision: Union[str, Sequence[str], None] = "c4d7f2a0b836"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.execute("""
        CREATE TRIGGER pipeline_stages_row_change
            AFTER INSERT OR UPDATE OR DELETE ON pipeline_stages
            FOR EACH ROW
            EXECUTE FUNCTION notify_row_change();
    """)


def downgrade() -> None:
    """Downgrade schema."""
    op.execute(
        "DROP TRIGGER IF EXISTS pipeline_stages_row_change ON pipeline_stages;"
    )
