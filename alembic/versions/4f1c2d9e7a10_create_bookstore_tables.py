"""Create users, books and purchases tables

Revision ID: 4f1c2d9e7a10
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4f1c2d9e7a10'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table('users',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('username', sa.String(length=255), nullable=False, comment='Login name, unique across users'),
        sa.Column('hashed_password', sa.String(length=255), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_users_username'), 'users', ['username'], unique=True)

    op.create_table('books',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('title', sa.String(length=500), nullable=False, comment='Book title'),
        sa.Column('authors', sa.JSON(), nullable=False, comment='Ordered list of author names'),
        sa.Column('publisher', sa.String(length=255), nullable=False),
        sa.Column('published', sa.Date(), nullable=False, comment='Date of publication'),
        sa.Column('genre', sa.JSON(), nullable=False, comment='List of genre names'),
        sa.Column('summary', sa.Text(), nullable=True),
        sa.Column('cover_image', sa.LargeBinary(), nullable=True, comment='Raw cover image bytes from a multipart upload'),
        sa.Column('price', sa.Numeric(precision=10, scale=2), nullable=False, comment='Book price in major currency units'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_books_title'), 'books', ['title'], unique=False)

    op.create_table('purchases',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('payment_reference', sa.String(length=255), nullable=False, comment='Reference assigned by the payment gateway'),
        sa.Column('status', sa.String(length=50), server_default='pending', nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('book_id', sa.Uuid(), nullable=False),
        sa.Column('purchase_date', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('total_price', sa.BigInteger(), nullable=False, comment='Total in minor currency units'),
        sa.ForeignKeyConstraint(['book_id'], ['books.id'], ),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_purchases_payment_reference'), 'purchases', ['payment_reference'], unique=False)
    op.create_index(op.f('ix_purchases_user_id'), 'purchases', ['user_id'], unique=False)
    op.create_index(op.f('ix_purchases_book_id'), 'purchases', ['book_id'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_purchases_book_id'), table_name='purchases')
    op.drop_index(op.f('ix_purchases_user_id'), table_name='purchases')
    op.drop_index(op.f('ix_purchases_payment_reference'), table_name='purchases')
    op.drop_table('purchases')
    op.drop_index(op.f('ix_books_title'), table_name='books')
    op.drop_table('books')
    op.drop_index(op.f('ix_users_username'), table_name='users')
    op.drop_table('users')
