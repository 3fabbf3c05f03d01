"""
Unit tests for the database-backed rubric store.
"""

import pytest
from pydantic import ValidationError
from prompt_strength import models
from prompt_strength.schemas import ModelConfig
from prompt_strength.services.config_service import ConfigService

DEFAULT_ORDER = [
    "prompt-length",
    "context-inclusion",
    "persona-specification",
    "task-clarity",
    "examples-presence",
    "format-specification",
    "constraints-defined",
]

class TestSeeding:
    """Test default rubric seeding."""

    def test_defaults_loaded_in_order(self, db_session):
        assert [l.id for l in ConfigService.get_levers(db_session)] == DEFAULT_ORDER
        assert [m.id for m in ConfigService.get_models(db_session)] == ["claude", "gpt4", "gemini", "llama3", "mistral"]

    def test_seed_is_idempotent(self, db_session):
        ConfigService.update_lever(db_session, "task-clarity", {"weight": 42})
        ConfigService.seed_defaults(db_session)
        assert db_session.query(models.LeverRecord).count() == 7
        assert ConfigService.get_lever(db_session, "task-clarity").weight == 42

class TestLevers:
    """Test lever edits."""

    def test_get_unknown(self, db_session):
        assert ConfigService.get_lever(db_session, "nope") is None
        assert ConfigService.update_lever(db_session, "nope", {"weight": 5}) is None
        assert ConfigService.toggle_lever(db_session, "nope", False) is None

    def test_update_merges(self, db_session):
        before = ConfigService.get_lever(db_session, "context-inclusion")
        after = ConfigService.update_lever(db_session, "context-inclusion", {"weight": 30, "patterns": ["my team"]})
        assert after.weight == 30
        assert after.patterns == ["my team"]
        assert after.feedback == before.feedback
        assert ConfigService.get_lever(db_session, "context-inclusion") == after

    def test_invalid_update_rejected(self, db_session):
        with pytest.raises(ValidationError):
            ConfigService.update_lever(db_session, "task-clarity", {"weight": 0})
        assert ConfigService.get_lever(db_session, "task-clarity").weight == 20

    def test_toggle(self, db_session):
        assert ConfigService.toggle_lever(db_session, "persona-specification", False).enabled is False
        assert ConfigService.get_lever(db_session, "persona-specification").enabled is False

    def test_reorder(self, db_session):
        levers = ConfigService.reorder_levers(db_session, ["constraints-defined", "bogus", "task-clarity"])
        assert [l.id for l in levers] == [
            "constraints-defined", "task-clarity",
            "prompt-length", "context-inclusion", "persona-specification", "examples-presence", "format-specification",
        ]
        assert levers[0].priority == 1
        assert levers[1].priority == 2
        # unlisted levers keep their priority
        assert levers[2].priority == 1
        assert [l.id for l in ConfigService.get_levers(db_session)] == [l.id for l in levers]

    def test_replace_levers(self, db_session, lever_factory):
        kept = ConfigService.get_lever(db_session, "task-clarity")
        ConfigService.replace_levers(db_session, [lever_factory("brand-new"), kept])
        assert [l.id for l in ConfigService.get_levers(db_session)] == ["brand-new", "task-clarity"]

class TestModels:
    """Test model profile edits."""

    def test_get_model(self, db_session):
        model = ConfigService.get_model(db_session, "gemini")
        assert model.provider_id == "google"
        assert model.lever_weights["task-clarity"] == 25
        assert ConfigService.get_model(db_session, "nope") is None

    def test_update_and_toggle(self, db_session):
        updated = ConfigService.update_model(db_session, "gpt4", {"analysis_model_id": "gpt-4o"})
        assert updated.analysis_model_id == "gpt-4o"
        assert updated.name == "GPT-4"
        assert ConfigService.toggle_model(db_session, "gpt4", False).enabled is False
        assert ConfigService.update_model(db_session, "nope", {"name": "x"}) is None

    def test_lever_weights_replaced(self, db_session):
        model = ConfigService.update_model_lever_weights(db_session, "claude", {"task-clarity": 50})
        assert model.lever_weights == {"task-clarity": 50}

    def test_upsert_appends(self, db_session):
        ConfigService.upsert_model(db_session, ModelConfig(id="deepseek", name="DeepSeek", provider_id="deepseek"))
        assert [m.id for m in ConfigService.get_models(db_session)][-1] == "deepseek"

class TestImportExport:
    """Test whole-rubric export and import."""

    def test_export(self, db_session):
        bundle = ConfigService.export_config(db_session)
        assert len(bundle["levers"]) == 7
        assert len(bundle["models"]) == 5

    def test_import_levers_replaces_and_models_upsert(self, db_session, lever_factory):
        claude = ConfigService.get_model(db_session, "claude")
        ConfigService.import_config(
            db_session,
            levers=[lever_factory("only-lever")],
            model_configs=[claude.model_copy(update={"name": "Claude 4"}), ModelConfig(id="new", name="New")],
        )
        assert [l.id for l in ConfigService.get_levers(db_session)] == ["only-lever"]
        assert ConfigService.get_model(db_session, "claude").name == "Claude 4"
        assert len(ConfigService.get_models(db_session)) == 6

    def test_import_without_levers_keeps_them(self, db_session):
        ConfigService.import_config(db_session, levers=None, model_configs=[])
        assert len(ConfigService.get_levers(db_session)) == 7

class TestBuildEngine:
    """Test engine snapshots built from the store."""

    def test_reflects_edits(self, db_session):
        ConfigService.toggle_lever(db_session, "examples-presence", False)
        result = ConfigService.build_engine(db_session).evaluate("Help me", "claude")
        assert len(result.heuristic_results) == 6
        assert "examples-presence" not in [r.lever_id for r in result.heuristic_results]

    def test_snapshot_unaffected_by_later_edits(self, db_session):
        engine = ConfigService.build_engine(db_session)
        ConfigService.toggle_lever(db_session, "task-clarity", False)
        assert len(engine.evaluate("Help me").heuristic_results) == 7
