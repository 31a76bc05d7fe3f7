"""create_profile_tables

Revision ID: 5c1f0a7d2b3e
Revises:
Create Date: 2026-10-18 12:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '5c1f0a7d2b3e'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create users, profiles and staff_roles tables."""
    op.create_table('users',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('discord_user_id', sa.BigInteger(), nullable=False),
        sa.Column('pokemon_go_code', sa.String(length=32), nullable=True),
        sa.Column('pokemon_pocket_code', sa.String(length=32), nullable=True),
        sa.Column('switch_code', sa.String(length=32), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('discord_user_id'),
    )

    op.create_table('profiles',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('thumbnail_url', sa.Text(), nullable=True),
        sa.Column('image_url', sa.Text(), nullable=True),
        sa.Column('trainer_class', sa.Text(), nullable=True),
        sa.Column('nature', sa.Text(), nullable=True),
        sa.Column('partner_pokemon', sa.Text(), nullable=True),
        sa.Column('starting_region', sa.Text(), nullable=True),
        sa.Column('favourite_food', sa.Text(), nullable=True),
        sa.Column('likes', sa.Text(), nullable=True),
        sa.Column('quotes', sa.Text(), nullable=True),
        sa.Column('pokemon_go_code', sa.String(length=32), nullable=True),
        sa.Column('pokemon_pocket_code', sa.String(length=32), nullable=True),
        sa.Column('switch_code', sa.String(length=32), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_profiles_user_id_is_active', 'profiles', ['user_id', 'is_active'], unique=False)
    op.create_index('ix_profiles_user_id_created_at', 'profiles', ['user_id', 'created_at'], unique=False)

    op.create_table('staff_roles',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('discord_role_id', sa.BigInteger(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('discord_role_id'),
    )


def downgrade() -> None:
    """Drop users, profiles and staff_roles tables."""
    op.drop_table('staff_roles')
    op.drop_index('ix_profiles_user_id_created_at', table_name='profiles')
    op.drop_index('ix_profiles_user_id_is_active', table_name='profiles')
    op.drop_table('profiles')
    op.drop_table('users')
