"""
Initial Schema - Users, friendships, wishlists and items

This migration creates:
1. users - Identity store (unique lowercased username / email)
2. friendships - One canonical edge per unordered pair of users
3. wishlists - One wishlist per user
4. items - Wishlist items with an embedded alternate and a reservation slot

Revision ID: 20261019_initial_schema
Revises:
Create Date: 2026-10-19
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '20261019_initial_schema'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    # ============================================
    # USERS
    # ============================================
    op.create_table(
        'users',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('username', sa.String(length=50), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('avatar_url', sa.String(length=500), nullable=True),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_users_username', 'users', ['username'], unique=True)
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    # ============================================
    # FRIENDSHIPS
    # ============================================
    op.create_table(
        'friendships',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('user_low_id', sa.String(length=36), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('user_high_id', sa.String(length=36), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('requester_id', sa.String(length=36), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='pending'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True, server_default=sa.func.now()),
        sa.UniqueConstraint('user_low_id', 'user_high_id', name='uq_friendship_pair'),
        sa.CheckConstraint('user_low_id < user_high_id', name='ck_friendship_canonical_pair'),
        sa.CheckConstraint("status IN ('pending', 'accepted', 'rejected')", name='ck_friendship_status'),
    )
    op.create_index('ix_friendships_user_low_id', 'friendships', ['user_low_id'])
    op.create_index('ix_friendships_user_high_id', 'friendships', ['user_high_id'])

    # ============================================
    # WISHLISTS
    # ============================================
    op.create_table(
        'wishlists',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('user_id', sa.String(length=36), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('title', sa.String(length=100), nullable=False, server_default='My Wishlist'),
        sa.Column('description', sa.String(length=500), nullable=False, server_default=''),
        sa.Column('is_archived', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True, server_default=sa.func.now()),
    )
    op.create_index('ix_wishlists_user_id', 'wishlists', ['user_id'], unique=True)

    # ============================================
    # ITEMS
    # ============================================
    op.create_table(
        'items',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('wishlist_id', sa.String(length=36), sa.ForeignKey('wishlists.id', ondelete='CASCADE'), nullable=False),
        sa.Column('title', sa.String(length=140), nullable=False),
        sa.Column('description', sa.String(length=600), nullable=False),
        sa.Column('category', sa.String(length=20), nullable=False),
        sa.Column('icon_key', sa.String(length=30), nullable=True),
        sa.Column('url', sa.String(length=1000), nullable=True),
        sa.Column('price', sa.Float(), nullable=True),
        sa.Column('alternate_title', sa.String(length=140), nullable=True),
        sa.Column('alternate_url', sa.String(length=1000), nullable=True),
        sa.Column('alternate_note', sa.String(length=300), nullable=True),
        sa.Column('alternate_price', sa.Float(), nullable=True),
        sa.Column('reserved_by_user_id', sa.String(length=36), sa.ForeignKey('users.id'), nullable=True),
        sa.Column('reserved_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True, server_default=sa.func.now()),
        sa.CheckConstraint("category IN ('everyday', 'dream')", name='ck_item_category'),
        sa.CheckConstraint(
            "(reserved_by_user_id IS NULL AND reserved_at IS NULL) OR "
            "(reserved_by_user_id IS NOT NULL AND reserved_at IS NOT NULL)",
            name='ck_item_reservation_slot'
        ),
        sa.CheckConstraint("price IS NULL OR price >= 0", name='ck_item_price'),
        sa.CheckConstraint("alternate_price IS NULL OR alternate_price >= 0", name='ck_item_alternate_price'),
    )
    op.create_index('ix_items_wishlist_id', 'items', ['wishlist_id'])
    op.create_index('ix_items_category', 'items', ['category'])
    op.create_index('ix_items_reserved_by_user_id', 'items', ['reserved_by_user_id'])
    op.create_index('ix_items_created_at', 'items', ['created_at'])


def downgrade():
    op.drop_table('items')
    op.drop_table('wishlists')
    op.drop_table('friendships')
    op.drop_table('users')
