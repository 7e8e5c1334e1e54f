"""create row_changes notify trigger

Publish every insert, update and delete on job_candidates as a JSON
envelope on the `row_changes` channel, for the in-process change feed
behind the live pipeline board.

Revision ID: c4d7f2a0b836
Revises: 9e8a41c7d5f2
Create Date: 2026-09-04 09:02:11.337580

"""

from typing import Sequence, Union

from alembic import op


# revision identifiers, used by Alembic.
revision: str = "c4d7f2a0b836"
down_revision: Union[str, Sequence[str], None] = "9e8a41c7d5f2"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # NOTIFY payloads are capped at 8000 bytes; job_candidates rows are small
    op.execute("""
        CREATE OR REPLACE FUNCTION notify_row_change()
        RETURNS TRIGGER AS $$
        BEGIN
            PERFORM pg_notify(
                'row_changes',
                json_build_object(
                    'table', TG_TABLE_NAME,
                    'event_type', lower(TG_OP),
                    'old', CASE WHEN TG_OP = 'INSERT' THEN NULL
                                ELSE row_to_json(OLD) END,
                    'new', CASE WHEN TG_OP = 'DELETE' THEN NULL
                                ELSE row_to_json(NEW) END
                )::text
            );
            RETURN NULL;
        END;
        $$ LANGUAGE plpgsql;
    """)

    op.execute("""
        CREATE TRIGGER job_candidates_row_change
            AFTER INSERT OR UPDATE OR DELETE ON job_candidates
            FOR EACH ROW
            EXECUTE FUNCTION notify_row_change();
    """)


def downgrade() -> None:
    """Downgrade schema."""
    op.execute("DROP TRIGGER IF EXISTS job_candidates_row_change ON job_candidates;")
    op.execute("DROP FUNCTION IF EXISTS notify_row_change();")
