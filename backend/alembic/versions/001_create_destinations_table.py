"""Create destinations table

Revision ID: 001
Revises: None
Create Date: 2024-06-10 00:00:00.000000+00:00

What:  Creates the `destinations` table holding every shared destination.
How:   SQLite INTEGER PRIMARY KEY AUTOINCREMENT, so deleted ids are never
       reused. All other columns are nullable TEXT; image columns keep
       their camelCase names.

Rollback: downgrade() drops the table (all destinations are lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "destinations",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.Text(), nullable=True),
        sa.Column("location", sa.Text(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),

        # Relative paths under the storage root, e.g. uploads/1718000000123.jpg
        sa.Column("backgroundImage", sa.Text(), nullable=True),
        sa.Column("galleryImage", sa.Text(), nullable=True),

        sa.PrimaryKeyConstraint("id"),
        sqlite_autoincrement=True,
    )


def downgrade() -> None:
    op.drop_table("destinations")
