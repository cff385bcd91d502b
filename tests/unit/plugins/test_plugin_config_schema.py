"""Tests for PluginConfigSchemaReader."""
import json
import pytest
from lms.plugins.config_schema import PluginConfigSchemaReader


class TestPluginConfigSchemaReader:
    """Plugin-wide and per-instance setting schemas."""

    @pytest.fixture
    def plugins_dir(self, tmp_path):
        block_dir = tmp_path / "demo_block"
        block_dir.mkdir()
        (block_dir / "config.json").write_text(json.dumps({
            "endpoint": {"type": "string", "default": "", "description": "Service URL"},
            "timeout": {"type": "integer", "default": 10},
            "note": {"type": "string"},
        }))
        (block_dir / "instance-config.json").write_text(json.dumps({
            "graphtype": {
                "type": "string",
                "default": "student",
                "options": ["student", "course"],
            },
            "caption": {"type": "string"},
        }))
        return tmp_path

    @pytest.fixture
    def reader(self, plugins_dir):
        return PluginConfigSchemaReader([str(plugins_dir)])

    def test_get_config_schema(self, reader):
        schema = reader.get_config_schema("demo_block")

        assert schema["endpoint"]["type"] == "string"

    def test_plugin_name_matching_ignores_separators(self, reader):
        assert reader.get_config_schema("demo-block") == reader.get_config_schema("demoblock")
        assert reader.get_config_schema("demo-block") != {}

    def test_get_defaults_skips_fields_without_default(self, reader):
        assert reader.get_defaults("demo_block") == {"endpoint": "", "timeout": 10}

    def test_unknown_plugin_has_empty_schema(self, reader):
        assert reader.get_config_schema("missing") == {}
        assert reader.get_instance_schema("missing") == {}

    def test_validate_fills_defaults(self, reader):
        assert reader.validate_instance_config("demo_block", {}) == {"graphtype": "student"}

    def test_validate_accepts_listed_option(self, reader):
        config = reader.validate_instance_config(
            "demo_block", {"graphtype": "course", "caption": "Mine"}
        )

        assert config == {"graphtype": "course", "caption": "Mine"}

    def test_validate_rejects_unlisted_option(self, reader):
        with pytest.raises(ValueError, match="Invalid value 'pie'"):
            reader.validate_instance_config("demo_block", {"graphtype": "pie"})

    def test_validate_rejects_unknown_key(self, reader):
        with pytest.raises(ValueError, match="Unknown setting 'color'"):
            reader.validate_instance_config("demo_block", {"color": "red"})

    def test_corrupt_schema_reads_as_empty(self, tmp_path):
        broken = tmp_path / "broken"
        broken.mkdir()
        (broken / "config.json").write_text("{")

        reader = PluginConfigSchemaReader([str(tmp_path)])

        assert reader.get_config_schema("broken") == {}

    def test_ace_instance_schema_lists_all_graph_types(self):
        from plugins.ace import PLUGINS_ROOT

        reader = PluginConfigSchemaReader([PLUGINS_ROOT])

        options = reader.get_instance_schema("ace")["graphtype"]["options"]
        assert options == [
            "student",
            "course",
            "studentwithtabs",
            "teachercourse",
            "activity",
            "studentteachergraph",
        ]
