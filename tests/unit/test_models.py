"""
Tests for model column types shared with the migrations.
"""

from pathlib import Path

from sqlalchemy.dialects import postgresql, sqlite

from pickup.models import Event

MIGRATION = (
    Path(__file__).resolve().parents[2] / "alembic" / "versions" / "20261019_initial_schema.py"
)


class TestInvitedColumn:

    def test_jsonb_on_postgresql(self):
        column_type = Event.__table__.c.invited.type

        assert column_type.compile(dialect=postgresql.dialect()) == "JSONB"

    def test_json_on_sqlite(self):
        column_type = Event.__table__.c.invited.type

        assert column_type.compile(dialect=sqlite.dialect()) == "JSON"

    def test_migration_uses_model_type(self):
        source = MIGRATION.read_text()

        assert "sa.Column('invited', get_json_type(), nullable=False)" in source
