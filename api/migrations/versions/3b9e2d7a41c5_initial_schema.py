"""initial_schema

Revision ID: 3b9e2d7a41c5
Revises: 
Create Date: 2025-09-02 17:52:46.471070

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '3b9e2d7a41c5'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Ensure the pgcrypto extension is available for gen_random_uuid()
    op.execute("CREATE EXTENSION IF NOT EXISTS pgcrypto")

    # Create parts table
    op.create_table('parts',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False, server_default=sa.text('gen_random_uuid()')),
        sa.Column('sort_key', sa.Text(collation='C'), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), nullable=False, server_default=sa.text('now()')),
        sa.PrimaryKeyConstraint('id')
    )

    # Serves both the keyset seek and LIKE 'prefix%' under the C collation
    op.create_index(
        'parts_sort_key_id',
        'parts',
        ['sort_key', 'id'],
        unique=False
    )


def downgrade() -> None:
    op.drop_index('parts_sort_key_id', table_name='parts')
    op.drop_table('parts')

    # Note: We don't drop the pgcrypto extension as it might be used by other parts of the database
