"""initial catalog tables

Revision ID: 0001
Revises: 
Create Date: 2026-10-19

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '0001'
down_revision = None
branch_labels = None
depends_on = None

def upgrade():
    op.create_table('major',
        sa.Column('major_id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('major_code', sa.String(length=50), nullable=False),
        sa.Column('majorNameTH', sa.String(length=255), nullable=False),
        sa.Column('majorNameENG', sa.String(length=255), nullable=False),
        sa.Column('majorYear', sa.Integer(), nullable=False),
        sa.Column('majorUnit', sa.Integer(), nullable=False),
        sa.Column('status', sa.String(length=50), nullable=True),
    )
    op.create_index('ix_major_major_code', 'major', ['major_code'], unique=True)

    op.create_table('category',
        sa.Column('category_id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('category_name', sa.String(length=255), nullable=False),
        sa.Column('category_unit', sa.Integer(), nullable=False),
        sa.Column('major_id', sa.Integer(), sa.ForeignKey('major.major_id'), nullable=False),
    )
    op.create_index('ix_category_major_id', 'category', ['major_id'])

    op.create_table('group_major',
        sa.Column('group_id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('group_name', sa.String(length=255), nullable=False),
        sa.Column('group_unit', sa.Integer(), nullable=False),
        sa.Column('category_id', sa.Integer(), sa.ForeignKey('category.category_id'), nullable=False),
    )
    op.create_index('ix_group_major_category_id', 'group_major', ['category_id'])

    op.create_table('course',
        sa.Column('course_id', sa.String(length=50), primary_key=True),
        sa.Column('courseNameTH', sa.String(length=255), nullable=False),
        sa.Column('courseNameENG', sa.String(length=255), nullable=False),
        sa.Column('courseUnit', sa.Integer(), nullable=False),
        sa.Column('courseTheory', sa.Integer(), nullable=False),
        sa.Column('coursePractice', sa.Integer(), nullable=False),
        sa.Column('categoryResearch', sa.String(length=255), nullable=True),
        sa.Column('category_id', sa.Integer(), sa.ForeignKey('category.category_id'), nullable=True),
        sa.Column('group_id', sa.Integer(), sa.ForeignKey('group_major.group_id'), nullable=True),
        sa.Column('freesubject', sa.Boolean(), nullable=False, server_default=sa.false()),
    )
    op.create_index('ix_course_category_id', 'course', ['category_id'])
    op.create_index('ix_course_group_id', 'course', ['group_id'])

def downgrade():
    op.drop_index('ix_course_group_id', table_name='course')
    op.drop_index('ix_course_category_id', table_name='course')
    op.drop_table('course')
    op.drop_index('ix_group_major_category_id', table_name='group_major')
    op.drop_table('group_major')
    op.drop_index('ix_category_major_id', table_name='category')
    op.drop_table('category')
    op.drop_index('ix_major_major_code', table_name='major')
    op.drop_table('major')
