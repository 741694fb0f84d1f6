"""users, follows and time-capsule postcards

Revision ID: c1a2b3d4e5f6
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy import text

# revision identifiers, used by Alembic.
revision: str = "c1a2b3d4e5f6"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

postcard_status = sa.Enum("DRAFT", "LOCKED", "UNLOCKED", name="postcard_status")


def _table_exists(conn, table: str) -> bool:
    r = conn.execute(
        text(
            "SELECT 1 FROM information_schema.tables "
            "WHERE table_name = :t"
        ),
        {"t": table},
    )
    return r.scalar() is not None


def upgrade() -> None:
    conn = op.get_bind()

    if not _table_exists(conn, "users"):
        op.create_table(
            "users",
            sa.Column("id", sa.Uuid(), nullable=False),
            sa.Column("email", sa.String(), nullable=False),
            sa.Column("name", sa.String(), nullable=True),
            sa.Column("avatar_url", sa.String(), nullable=True),
            sa.Column("is_active", sa.Boolean(), nullable=True),
            sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=True),
            sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=True),
            sa.PrimaryKeyConstraint("id"),
        )
        op.create_index(op.f("ix_users_email"), "users", ["email"], unique=True)

    if not _table_exists(conn, "follows"):
        op.create_table(
            "follows",
            sa.Column("follower_id", sa.Uuid(), nullable=False),
            sa.Column("following_id", sa.Uuid(), nullable=False),
            sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=True),
            sa.PrimaryKeyConstraint("follower_id", "following_id"),
            sa.ForeignKeyConstraint(["follower_id"], ["users.id"], ondelete="CASCADE"),
            sa.ForeignKeyConstraint(["following_id"], ["users.id"], ondelete="CASCADE"),
        )
        op.create_index(op.f("ix_follows_following_id"), "follows", ["following_id"], unique=False)

    if not _table_exists(conn, "postcards"):
        op.create_table(
            "postcards",
            sa.Column("id", sa.Uuid(), nullable=False),
            sa.Column("sender_id", sa.Uuid(), nullable=False),
            sa.Column("recipient_id", sa.Uuid(), nullable=False),
            sa.Column("message", sa.Text(), nullable=True),
            sa.Column("media_url", sa.String(), nullable=True),
            sa.Column("unlock_date", sa.DateTime(timezone=True), nullable=True),
            sa.Column("unlock_latitude", sa.Float(), nullable=True),
            sa.Column("unlock_longitude", sa.Float(), nullable=True),
            sa.Column("unlock_radius", sa.Float(), nullable=False, server_default=sa.text("50")),
            sa.Column("status", postcard_status, nullable=False),
            sa.Column("unlock_notification_sent", sa.Boolean(), nullable=False, server_default=sa.false()),
            sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=True),
            sa.Column("viewed_at", sa.DateTime(timezone=True), nullable=True),
            sa.PrimaryKeyConstraint("id"),
            sa.ForeignKeyConstraint(["sender_id"], ["users.id"], ondelete="CASCADE"),
            sa.ForeignKeyConstraint(["recipient_id"], ["users.id"], ondelete="CASCADE"),
        )
        op.create_index(op.f("ix_postcards_sender_id"), "postcards", ["sender_id"], unique=False)
        op.create_index(op.f("ix_postcards_recipient_id"), "postcards", ["recipient_id"], unique=False)
        op.create_index(op.f("ix_postcards_status"), "postcards", ["status"], unique=False)
        op.create_index(op.f("ix_postcards_unlock_date"), "postcards", ["unlock_date"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_postcards_unlock_date"), table_name="postcards")
    op.drop_index(op.f("ix_postcards_status"), table_name="postcards")
    op.drop_index(op.f("ix_postcards_recipient_id"), table_name="postcards")
    op.drop_index(op.f("ix_postcards_sender_id"), table_name="postcards")
    op.drop_table("postcards")
    postcard_status.drop(op.get_bind(), checkfirst=True)
    op.drop_index(op.f("ix_follows_following_id"), table_name="follows")
    op.drop_table("follows")
    op.drop_index(op.f("ix_users_email"), table_name="users")
    op.drop_table("users")
