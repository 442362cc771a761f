"""Tests for ResourceBundleMessageSource."""

import json
from pathlib import Path

import pytest

from flyvalid.i18n.adapters.resource_bundle import ResourceBundleMessageSource
from flyvalid.i18n.ports.outbound import MessageSource


@pytest.fixture
def bundles(tmp_path: Path) -> Path:
    (tmp_path / "messages_en.yaml").write_text(
        "validation:\n  not_null: must not be null\n  min_length: must have at least ${min} characters\n"
    )
    (tmp_path / "messages_pt.yaml").write_text("validation:\n  not_null: não pode ser nulo\n")
    (tmp_path / "messages_es.json").write_text(json.dumps({"validation": {"not_null": "no puede ser nulo"}}))
    return tmp_path


class TestResourceBundleMessageSource:
    def test_conforms_to_port(self, bundles):
        assert isinstance(ResourceBundleMessageSource(bundles), MessageSource)

    def test_nested_keys_are_flattened(self, bundles):
        source = ResourceBundleMessageSource(bundles)
        assert source.get_template("validation.not_null") == "must not be null"

    def test_region_falls_back_to_language(self, bundles):
        source = ResourceBundleMessageSource(bundles)
        assert source.get_template("validation.not_null", "pt_BR") == "não pode ser nulo"

    def test_language_falls_back_to_default(self, bundles):
        source = ResourceBundleMessageSource(bundles)
        assert source.get_template("validation.min_length", "pt_BR") == "must have at least ${min} characters"

    def test_json_bundles(self, bundles):
        source = ResourceBundleMessageSource(bundles)
        assert source.get_template("validation.not_null", "es") == "no puede ser nulo"

    def test_unknown_key(self, bundles):
        source = ResourceBundleMessageSource(bundles)
        assert not source.has_template("validation.unknown", "pt")
        with pytest.raises(KeyError):
            source.get_template("validation.unknown")
