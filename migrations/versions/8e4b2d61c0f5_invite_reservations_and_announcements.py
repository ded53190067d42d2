"""invite_reservations_and_announcements

- Invites count uses held by runs that are still creating accounts
- Announcement templates (saved subject and body, keyed by name)

Revision ID: 8e4b2d61c0f5
Revises: 3c1f0a9d7e21
Create Date: 2026-10-17 16:40:02.118344

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "8e4b2d61c0f5"
down_revision: Union[str, Sequence[str], None] = "3c1f0a9d7e21"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.add_column(
        "invites",
        sa.Column("reserved", sa.Integer(), nullable=False, server_default="0"),
    )

    op.create_table(
        "announcement_templates",
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("subject", sa.Text(), nullable=False),
        sa.Column("body", sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint("name"),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("announcement_templates")
    op.drop_column("invites", "reserved")
