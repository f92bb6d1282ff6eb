"""Create counter definition and sequence counter tables.

Revision ID: a1b2c3d4e5f6
Revises:
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "a1b2c3d4e5f6"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "counter_definitions",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.Column("sequence_code", sa.String(20), nullable=False, unique=True),
        sa.Column("description", sa.String(255), nullable=True),
        sa.Column("number_of_components", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("reset_policy", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("definition_level", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("sequence_type", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("chronological_control", sa.Integer(), nullable=False, server_default="1"),
    )
    op.create_index("idx_counter_definition_code", "counter_definitions", ["sequence_code"])

    op.create_table(
        "counter_definition_components",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.Column(
            "definition_id",
            sa.Integer(),
            sa.ForeignKey("counter_definitions.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("component_type", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("component_length", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("constant_value", sa.String(20), nullable=True),
        sa.UniqueConstraint("definition_id", "position", name="uq_counter_component_position"),
    )

    op.create_table(
        "sequence_counters",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.Column("sequence_code", sa.String(20), nullable=False),
        sa.Column("scope_key", sa.String(10), nullable=False, server_default=""),
        sa.Column("period_key", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("complement", sa.String(20), nullable=False, server_default=""),
        sa.Column(
            "current_value",
            sa.BigInteger().with_variant(sa.Integer(), "sqlite"),
            nullable=False,
            server_default="0",
        ),
        sa.UniqueConstraint(
            "sequence_code",
            "scope_key",
            "period_key",
            "complement",
            name="uq_sequence_counter_key",
        ),
    )
    op.create_index("idx_sequence_counter_code", "sequence_counters", ["sequence_code"])


def downgrade():
    op.drop_index("idx_sequence_counter_code", table_name="sequence_counters")
    op.drop_table("sequence_counters")
    op.drop_table("counter_definition_components")
    op.drop_index("idx_counter_definition_code", table_name="counter_definitions")
    op.drop_table("counter_definitions")
